"""Subprocess lifecycle for one agent run."""

from __future__ import annotations

import codecs
from contextlib import contextmanager
from dataclasses import dataclass
import logging
import signal
import subprocess
import threading
import time
from typing import IO, Any, Iterator

from agentwire.agents.base import AgentAdapter
from agentwire.core.models import CanonicalEvent
from agentwire.exceptions import AgentLaunchError
from agentwire.sinks.base import EventSink
from agentwire.stream.processor import StreamProcessor

logger = logging.getLogger(__name__)

_READ_SIZE = 64 * 1024
_STDERR_JOIN_SECONDS = 5.0


@dataclass(slots=True)
class RunOptions:
    """Per-run settings resolved by the CLI."""

    agent: str
    prompt: str
    session_id: str
    cwd: str
    timeout: float = 0.0
    extra_args: str | None = None
    auto_approve: bool = True
    include_raw: bool = False


class AgentRunner:
    """Spawn an agent, stream its stdout through a processor into a sink.

    Every run is bracketed by a ``session.start`` and a ``session.end`` event
    drawn from the same sequence counter as the streamed events. Stderr is
    only logged.
    """

    def __init__(
        self,
        adapter: AgentAdapter,
        options: RunOptions,
        sink: EventSink,
        *,
        read_size: int = _READ_SIZE,
    ) -> None:
        self.adapter = adapter
        self.options = options
        self.sink = sink
        self._read_size = read_size
        self._process: subprocess.Popen[bytes] | None = None
        self._timed_out = False
        self._lock = threading.Lock()

    @property
    def timed_out(self) -> bool:
        return self._timed_out

    def command(self) -> list[str]:
        return self.adapter.build_invocation(
            self.options.prompt,
            self.options.cwd,
            self.options.extra_args,
            auto_approve=self.options.auto_approve,
        )

    def run(self) -> int:
        command = self.command()
        processor = StreamProcessor(
            self.adapter,
            self.options.session_id,
            include_raw=self.options.include_raw,
        )
        started = time.monotonic()
        try:
            process = subprocess.Popen(
                command,
                cwd=self.options.cwd or None,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as error:
            raise AgentLaunchError(f"failed to launch {command[0]}: {error}") from error

        with self._lock:
            self._process = process
        logger.info(f"Started {self.adapter.name} (pid={process.pid}) for session {self.options.session_id}")
        self._publish(processor.normalizer.synthesize("session.start"))

        stderr_thread = threading.Thread(
            target=self._drain_stderr,
            args=(process.stderr,),
            daemon=True,
        )
        stderr_thread.start()

        timer: threading.Timer | None = None
        if self.options.timeout and self.options.timeout > 0:
            timer = threading.Timer(self.options.timeout, self._on_timeout)
            timer.daemon = True
            timer.start()

        try:
            self._pump_stdout(process.stdout, processor)
            exit_code = process.wait()
        except Exception:
            self.kill()
            process.wait()
            raise
        finally:
            if timer is not None:
                timer.cancel()
            stderr_thread.join(timeout=_STDERR_JOIN_SECONDS)

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(f"{self.adapter.name} exited with code {exit_code} after {duration_ms}ms")
        self._publish(
            processor.normalizer.synthesize(
                "session.end",
                {"exitCode": exit_code, "durationMs": duration_ms},
            )
        )
        return exit_code

    def kill(self) -> None:
        with self._lock:
            process = self._process
        if process is not None and process.poll() is None:
            process.terminate()

    def _on_timeout(self) -> None:
        self._timed_out = True
        logger.warning(f"Process timeout after {self.options.timeout}s; terminating {self.adapter.name}")
        self.kill()

    def _pump_stdout(self, stream: IO[bytes] | None, processor: StreamProcessor) -> None:
        if stream is None:
            return
        # Multi-byte characters may straddle reads.
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        with stream:
            while True:
                data = stream.read1(self._read_size)  # type: ignore[attr-defined]
                if not data:
                    break
                self._publish_all(processor.process_chunk(decoder.decode(data)))
        self._publish_all(processor.process_chunk(decoder.decode(b"", final=True)))
        self._publish_all(processor.flush())

    def _drain_stderr(self, stream: IO[bytes] | None) -> None:
        if stream is None:
            return
        with stream:
            for line in iter(stream.readline, b""):
                text = line.decode("utf-8", errors="replace").rstrip()
                if text:
                    logger.debug(f"[stderr] {text}")

    def _publish_all(self, events: list[CanonicalEvent]) -> None:
        for event in events:
            self._publish(event)

    def _publish(self, event: CanonicalEvent) -> None:
        self.sink.publish(event)


@contextmanager
def terminate_on_signals(runner: AgentRunner) -> Iterator[AgentRunner]:
    """Terminate the runner's child on SIGINT/SIGTERM for the block's duration."""
    if threading.current_thread() is not threading.main_thread():
        yield runner
        return

    def _handle_signal(signum: int, _frame: Any) -> None:
        logger.warning(f"Received {signal.Signals(signum).name}, terminating agent")
        runner.kill()

    previous = {
        signum: signal.signal(signum, _handle_signal)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        yield runner
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
