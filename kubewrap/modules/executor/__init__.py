"""
Executor Module - Black Box Interface

Purpose: Run an external binary with argv/env/stdin and capture its output
Interface: ProcessExecutor.execute() -> ProcessOutput(stdout, stderr, error)
Hidden: subprocess handling, environment merging, timeouts

Can be replaced with different execution mechanisms (fakes in tests, remote runners).
"""

from .os_executor import ExecutionError, OsExecutor, ProcessExecutor, ProcessOutput

__all__ = ["ExecutionError", "OsExecutor", "ProcessExecutor", "ProcessOutput"]
