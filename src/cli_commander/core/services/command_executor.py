from __future__ import annotations

import io
import logging
import time
from collections.abc import Sequence

from cli_commander.core.common.exceptions import CommandExecutionError
from cli_commander.core.constants import OUTPUT_ENCODING
from cli_commander.core.domain.execution_result import ExecutionResult
from cli_commander.core.services.execution_context import BoundExecution

logger = logging.getLogger(__name__)


class _CaptureBuffer(io.BytesIO):
    """Byte buffer that keeps its contents when a command closes its stream."""

    def close(self) -> None:
        self.flush()


def _text_stream(buffer: io.BytesIO) -> io.TextIOWrapper:
    return io.TextIOWrapper(
        buffer, encoding=OUTPUT_ENCODING, errors="replace", write_through=True
    )


def _decode(buffer: io.BytesIO) -> str:
    return buffer.getvalue().decode(OUTPUT_ENCODING, errors="replace")


class CommandExecutor:
    """Run a bound command synchronously and capture its output."""

    def execute(self, bound: BoundExecution, args: Sequence[str]) -> ExecutionResult:
        """Execute ``bound`` with ``args``.

        The command gets an empty stdin and two independent capture buffers.

        Raises:
            CommandExecutionError: If the command raised instead of reporting
                the failure through its stderr.
        """
        name = bound.command.name
        out_buffer = _CaptureBuffer()
        err_buffer = _CaptureBuffer()
        stdin = _text_stream(io.BytesIO(b""))
        stdout = _text_stream(out_buffer)
        stderr = _text_stream(err_buffer)

        start = time.perf_counter()
        try:
            returned = bound.call(args, stdin, stdout, stderr)
            exit_code = 0 if returned is None else int(returned)
        except (Exception, SystemExit) as e:
            logger.exception("Command %s raised %s", name, type(e).__name__)
            raise CommandExecutionError(
                name,
                f"Command '{name}' failed: {e}",
                details={
                    "exception": type(e).__name__,
                    "stdout": _decode(out_buffer),
                    "stderr": _decode(err_buffer),
                },
            ) from e
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Command %s finished as %s with exit code %s in %.1fms",
            name,
            bound.caller.name,
            exit_code,
            elapsed_ms,
        )
        return ExecutionResult(
            command_name=name,
            stdout=_decode(out_buffer),
            stderr=_decode(err_buffer),
            exit_code=exit_code,
        )
