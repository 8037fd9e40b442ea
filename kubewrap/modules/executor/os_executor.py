"""
Process executor backed by subprocess.

Runs a binary with the given arguments and returns its raw output together
with an error value instead of raising, so callers can decide how to react.
"""

import logging
import os
import subprocess
from typing import Dict, List, NamedTuple, Optional, Protocol, Sequence

logger = logging.getLogger("kubewrap.executor")


class ExecutionError(RuntimeError):
    """The external command failed to run or exited abnormally."""

    def __init__(
        self,
        message: str,
        binary: str = "",
        args: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.binary = binary
        self.command_args: List[str] = list(args or [])
        self.returncode = returncode
        self.stderr = stderr


class ProcessOutput(NamedTuple):
    """Raw result of a process execution."""

    stdout: bytes
    stderr: bytes
    error: Optional[Exception]


class ProcessExecutor(Protocol):
    """Protocol for process executors."""

    def execute(
        self,
        binary: str,
        args: Sequence[str],
        env: Optional[Sequence[str]] = None,
        stdin: str = "",
    ) -> ProcessOutput:
        """Execute binary with args, optional KEY=VALUE env overrides and stdin."""
        ...


def _merge_env(env: Optional[Sequence[str]]) -> Optional[Dict[str, str]]:
    """Layer KEY=VALUE overrides on top of the current environment."""
    if env is None:
        return None

    merged = dict(os.environ)
    for entry in env:
        key, sep, value = entry.partition("=")
        if not sep:
            logger.warning(f"Ignoring malformed environment entry: {entry!r}")
            continue
        merged[key] = value
    return merged


class OsExecutor:
    """Executor that spawns local processes with subprocess.run."""

    def __init__(self, timeout_seconds: Optional[int] = None):
        """
        Initialize executor.

        Args:
            timeout_seconds: Optional hard limit per process; None waits forever
        """
        self.timeout_seconds = timeout_seconds

    def execute(
        self,
        binary: str,
        args: Sequence[str],
        env: Optional[Sequence[str]] = None,
        stdin: str = "",
    ) -> ProcessOutput:
        """
        Execute a command.

        Args:
            binary: Executable name or path
            args: Command arguments (without the binary)
            env: Optional KEY=VALUE overrides; None inherits the environment
            stdin: Data written to the process stdin, empty for none

        Returns:
            ProcessOutput with stdout/stderr bytes and an error or None
        """
        cmd = [binary] + list(args)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            process = subprocess.run(
                cmd,
                capture_output=True,
                input=stdin.encode("utf-8") if stdin else None,
                env=_merge_env(env),
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning(f"Command timed out after {self.timeout_seconds}s: {' '.join(cmd)}")
            error = ExecutionError(
                f"{binary} timed out after {self.timeout_seconds}s",
                binary=binary,
                args=args,
                returncode=-1,
            )
            error.__cause__ = e
            return ProcessOutput(e.stdout or b"", e.stderr or b"", error)
        except OSError as e:
            logger.warning(f"Command could not be started: {e}")
            error = ExecutionError(
                f"{binary} could not be started: {e}",
                binary=binary,
                args=args,
                returncode=-1,
            )
            error.__cause__ = e
            return ProcessOutput(b"", b"", error)

        stdout = process.stdout or b""
        stderr = process.stderr or b""

        if process.returncode != 0:
            stderr_text = stderr.decode("utf-8", errors="replace").strip()
            logger.warning(f"{binary} exited with code {process.returncode}: {stderr_text}")
            error = ExecutionError(
                f"{binary} exited with code {process.returncode}: {stderr_text}",
                binary=binary,
                args=args,
                returncode=process.returncode,
                stderr=stderr_text,
            )
            return ProcessOutput(stdout, stderr, error)

        return ProcessOutput(stdout, stderr, None)
