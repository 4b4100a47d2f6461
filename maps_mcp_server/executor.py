"""Runs translated commands through the host shell.

AppleScript goes through ``osascript -e``, deep links through ``open``. Both
are invoked synchronously, one process per tool call, with stdout capped at
``ExecutorConfig.max_output_bytes``.
"""

import logging
import subprocess
import tempfile
import threading
import time
from typing import List, Optional

from .config import ExecutorConfig
from .exceptions import AppleScriptError, CommandExecutionError
from .models import CommandKind, TranslationResult
from .translator import build_applescript_command, build_open_command

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


class CommandExecutor:
    """Executes AppleScript and URL-open commands for translated requests."""

    def __init__(self, config: Optional[ExecutorConfig] = None):
        self.config = config or ExecutorConfig()

    def build_command(self, result: TranslationResult) -> Optional[str]:
        """Shell command line for a translation result, or None if nothing runs."""
        if result.kind == CommandKind.APPLESCRIPT:
            return build_applescript_command(result.target, self.config.osascript_command)
        if result.kind == CommandKind.OPEN_URL:
            return build_open_command(result.target, self.config.open_command)
        return None

    def execute(self, result: TranslationResult) -> str:
        """Carry out a translation result.

        Returns:
            Captured stdout (stripped) for AppleScript, empty string otherwise

        Raises:
            AppleScriptError: If osascript fails
            CommandExecutionError: If opening the URL fails
        """
        if result.kind == CommandKind.APPLESCRIPT:
            return self.run_applescript(result.target)
        if result.kind == CommandKind.OPEN_URL:
            self.open_url(result.target)
        return ""

    def run_applescript(self, script: str) -> str:
        command = build_applescript_command(script, self.config.osascript_command)
        try:
            return self._run(command).strip()
        except CommandExecutionError as e:
            raise AppleScriptError(
                f"AppleScript error: {e.stderr or e}",
                stderr=e.stderr,
                returncode=e.returncode,
            ) from e

    def open_url(self, url: str) -> None:
        command = build_open_command(url, self.config.open_command)
        logger.info(f"Opening URL {url}")
        try:
            self._run(command)
        except CommandExecutionError as e:
            raise CommandExecutionError(
                f"Failed to open URL: {e.stderr or e}",
                stderr=e.stderr,
                returncode=e.returncode,
            ) from e

    def _run(self, command: str) -> str:
        """Run ``command`` in the shell and return its stdout.

        stdout is drained on a reader thread so ``command_timeout`` covers a
        process that never writes or never closes its output. stderr is
        spooled to a temporary file so it cannot block on a full pipe.
        """
        if self.config.dry_run:
            logger.info(f"Dry run, not executing: {command}")
            return ""

        limit = self.config.max_output_bytes
        timeout = self.config.command_timeout
        deadline = None if timeout is None else time.monotonic() + timeout

        def remaining() -> Optional[float]:
            if deadline is None:
                return None
            return max(0.0, deadline - time.monotonic())

        logger.debug(f"Executing: {command}")

        with tempfile.TemporaryFile() as stderr_file:
            try:
                process = subprocess.Popen(
                    command,
                    shell=True,
                    stdout=subprocess.PIPE,
                    stderr=stderr_file,
                )
            except OSError as e:
                raise CommandExecutionError(f"Command failed to start: {e}") from e

            chunks: List[bytes] = []
            reader = threading.Thread(
                target=_drain, args=(process.stdout, limit, chunks), daemon=True
            )
            reader.start()

            try:
                reader.join(remaining())
                if reader.is_alive():
                    raise subprocess.TimeoutExpired(command, timeout)

                stdout = b"".join(chunks)
                if len(stdout) > limit:
                    process.kill()
                    process.wait()
                    raise CommandExecutionError(
                        f"Command output exceeded {limit} bytes: {command}"
                    )
                returncode = process.wait(timeout=remaining())
            except subprocess.TimeoutExpired as e:
                process.kill()
                process.wait()
                raise CommandExecutionError(
                    f"Command timed out after {timeout}s: {command}"
                ) from e

            stderr_file.seek(0)
            stderr = stderr_file.read().decode("utf-8", errors="replace").strip()

        if returncode != 0:
            logger.warning(f"Command exited with {returncode}: {command}")
            raise CommandExecutionError(
                f"Command failed with exit code {returncode}: {command}",
                stderr=stderr or None,
                returncode=returncode,
            )

        return stdout.decode("utf-8", errors="replace")


def _drain(stream, limit: int, chunks: List[bytes]) -> None:
    """Read ``stream`` into ``chunks`` until EOF or more than ``limit`` bytes."""
    size = 0
    with stream:
        while size <= limit:
            chunk = stream.read1(READ_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
            size += len(chunk)
