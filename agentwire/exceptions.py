"""Exception hierarchy for agentwire."""


class AgentWireError(Exception):
    """Base class for agentwire errors."""


class ConfigError(AgentWireError, ValueError):
    """Environment configuration value is invalid."""


class AgentRegistryError(AgentWireError, ValueError):
    """Raised when an agent key cannot be resolved to an adapter."""


class AgentLaunchError(AgentWireError):
    """Agent subprocess could not be spawned."""


class SinkError(AgentWireError):
    """Sink failed to deliver an event."""
