from importlib.metadata import PackageNotFoundError, version as package_version
import json
import logging
import os
import shlex
import sys
from typing import Any, NoReturn
import uuid

import redis
import typer

from agentwire.agents import get_agent_adapter, list_agent_adapter_keys, normalize_agent_key
from agentwire.config import AgentWireConfig, load_config
from agentwire.exceptions import AgentLaunchError, AgentWireError, ConfigError, SinkError
from agentwire.runner import AgentRunner, RunOptions, terminate_on_signals
from agentwire.sinks import EventSink, RedisQueueSink, StdoutSink, create_redis_client, queue_key

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_CLI_ERROR = 2
EXIT_AGENT_ERROR = 3
EXIT_REDIS_ERROR = 4

_LOG_HANDLER_NAME = "agentwire-stderr"
_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

app = typer.Typer(help="Run CLI coding agents and stream normalized events.")


def _resolve_cli_version() -> str:
    try:
        return package_version("agentwire")
    except PackageNotFoundError:
        from agentwire import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"agentwire {_resolve_cli_version()}", color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show agentwire version and exit.",
    ),
) -> None:
    """Bridge Claude Code, Gemini CLI and Codex CLI output to Redis or stdout."""


def _echo(message: str, *, err: bool = False) -> None:
    typer.echo(message, err=err, color=False)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    typer.echo(rendered, err=err, color=False)


def _fail(message: str, *, exit_code: int, json_output: bool) -> NoReturn:
    if json_output:
        _echo_json({"status": "error", "exit_code": exit_code, "message": message})
    else:
        _echo(f"Error: {message}", err=True)
        if exit_code == EXIT_CLI_ERROR:
            _echo("Run with --help for usage information.", err=True)
    raise typer.Exit(code=exit_code)


def _configure_logging(config: AgentWireConfig) -> None:
    package_logger = logging.getLogger("agentwire")
    package_logger.setLevel(config.logging_level)
    for handler in list(package_logger.handlers):
        if handler.get_name() == _LOG_HANDLER_NAME:
            package_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_LOG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)


def _read_prompt_from_stdin() -> str | None:
    if sys.stdin is None or sys.stdin.isatty():
        return None
    data = sys.stdin.read().strip()
    return data or None


def _output_target(config: AgentWireConfig, *, session_id: str, no_redis: bool) -> dict[str, Any]:
    if no_redis:
        return {"sink": "stdout", "format": "ndjson"}
    return {"sink": "redis", "queue": queue_key(config.redis_queue_prefix, session_id)}


def _open_sink(config: AgentWireConfig, *, no_redis: bool, json_output: bool) -> EventSink:
    if no_redis:
        return StdoutSink()
    client = create_redis_client(config)
    try:
        client.ping()
    except redis.RedisError as error:
        client.close()
        _fail(
            f"failed to connect to Redis at {config.redis_url}: {error}",
            exit_code=EXIT_REDIS_ERROR,
            json_output=json_output,
        )
    return RedisQueueSink(
        client,
        queue_prefix=config.redis_queue_prefix,
        queue_ttl=config.redis_queue_ttl,
    )


@app.command("run")
def run_agent(
    agent: str | None = typer.Option(
        None,
        "--agent",
        "-a",
        help="Agent to use (claude|gemini|codex). Defaults to AGENTWIRE_DEFAULT_AGENT.",
    ),
    prompt: str | None = typer.Option(
        None,
        "--prompt",
        "-p",
        help="Prompt text. Read from piped stdin when omitted.",
    ),
    session_id: str | None = typer.Option(
        None,
        "--session-id",
        "-s",
        help="Session ID used for the Redis queue key [default: uuid4].",
    ),
    cwd: str | None = typer.Option(
        None,
        "--cwd",
        "-c",
        help="Working directory for the agent [default: current directory].",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Timeout in seconds (0 disables) [default: AGENTWIRE_DEFAULT_TIMEOUT].",
    ),
    extra_args: str | None = typer.Option(
        None,
        "--extra-args",
        help="Extra arguments passed to the agent (quotes group words).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the command without executing it.",
    ),
    no_yolo: bool = typer.Option(
        False,
        "--no-yolo",
        help="Disable the agent's auto-approval mode.",
    ),
    no_redis: bool = typer.Option(
        False,
        "--no-redis",
        help="Write events to stdout as NDJSON instead of Redis.",
    ),
    include_raw: bool = typer.Option(
        False,
        "--include-raw",
        help="Attach the native agent record to every streamed event.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable status for dry runs and failures.",
    ),
) -> None:
    """Run an agent and stream its normalized events."""
    try:
        config = load_config()
    except ConfigError as error:
        _fail(str(error), exit_code=EXIT_CLI_ERROR, json_output=json_output)
    _configure_logging(config)

    normalized_agent = normalize_agent_key(agent) if agent else config.default_agent
    supported_agents = list_agent_adapter_keys()
    if normalized_agent not in supported_agents:
        _fail(
            f"Invalid agent: {agent}. Must be one of: {', '.join(supported_agents)}",
            exit_code=EXIT_CLI_ERROR,
            json_output=json_output,
        )

    resolved_prompt = prompt if prompt else _read_prompt_from_stdin()
    if not resolved_prompt:
        _fail(
            "Prompt is required. Use -p or --prompt, or pipe input via stdin",
            exit_code=EXIT_CLI_ERROR,
            json_output=json_output,
        )

    resolved_timeout = float(config.default_timeout) if timeout is None else timeout
    if resolved_timeout < 0:
        _fail(
            f"Invalid timeout: {timeout}. Must be a positive number (in seconds)",
            exit_code=EXIT_CLI_ERROR,
            json_output=json_output,
        )

    options = RunOptions(
        agent=normalized_agent,
        prompt=resolved_prompt,
        session_id=session_id or str(uuid.uuid4()),
        cwd=cwd or os.getcwd(),
        timeout=resolved_timeout,
        extra_args=extra_args,
        auto_approve=not no_yolo,
        include_raw=include_raw or config.include_raw,
    )
    adapter = get_agent_adapter(
        normalized_agent,
        executable=config.executable_for(normalized_agent),
    )

    if dry_run:
        command = adapter.build_invocation(
            options.prompt,
            options.cwd,
            options.extra_args,
            auto_approve=options.auto_approve,
        )
        target = _output_target(config, session_id=options.session_id, no_redis=no_redis)
        if json_output:
            _echo_json(
                {
                    "status": "ok",
                    "exit_code": EXIT_SUCCESS,
                    "message": "dry run",
                    "agent": normalized_agent,
                    "command": command,
                    "session_id": options.session_id,
                    "output": target,
                }
            )
            return
        _echo("Dry run mode - command that would be executed:")
        _echo(shlex.join(command))
        _echo(f"\nSession ID: {options.session_id}")
        if target["sink"] == "redis":
            _echo(f"Redis Queue: {target['queue']}")
        else:
            _echo("Output: stdout (NDJSON)")
        return

    sink = _open_sink(config, no_redis=no_redis, json_output=json_output)
    runner = AgentRunner(adapter, options, sink)
    try:
        with terminate_on_signals(runner):
            exit_code = runner.run()
    except AgentLaunchError as error:
        _fail(str(error), exit_code=EXIT_AGENT_ERROR, json_output=json_output)
    except SinkError as error:
        _fail(str(error), exit_code=EXIT_REDIS_ERROR, json_output=json_output)
    except AgentWireError as error:
        _fail(str(error), exit_code=EXIT_GENERAL_ERROR, json_output=json_output)
    finally:
        sink.close()

    if exit_code != 0:
        raise typer.Exit(code=EXIT_AGENT_ERROR)


@app.command("agents")
def list_agents(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable agent listing output.",
    ),
) -> None:
    """List supported agent keys."""
    agents = list(list_agent_adapter_keys())
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": EXIT_SUCCESS,
                "message": "supported agents",
                "agents": agents,
            }
        )
    else:
        _echo("\n".join(agents))


def main() -> None:
    app()
