"""
Shared pytest fixtures for Kubewrap tests.

This module provides common fixtures including:
- FakeExecutor: In-memory ProcessExecutor recording calls and returning canned output
- KubectlMocker: Mock subprocess.run with pattern-matched kubectl responses
"""

import os
import re
import sys
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union
from unittest.mock import MagicMock, patch

import pytest

# Add repository root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kubewrap.modules.executor import ProcessOutput


# =============================================================================
# Fake Executor
# =============================================================================

@dataclass
class ExecutorCall:
    """Record of one execute() call."""
    binary: str
    args: List[str]
    env: Optional[List[str]]
    stdin: str


class FakeExecutor:
    """
    ProcessExecutor double.

    Returns the same canned ProcessOutput for every call unless a responder
    callable is given, and records every call for later assertions.

    Usage:
        def test_job(fake_executor):
            fake_executor.returns(stdout=b'{"status": {}}')
            Kubectl(fake_executor).job_status("foo", "default")
            assert fake_executor.last_call.args[-2:] == ["-o", "json"]
    """

    def __init__(self):
        self.calls: List[ExecutorCall] = []
        self._output = ProcessOutput(b"", b"", None)
        self._responder: Optional[Callable[[ExecutorCall], ProcessOutput]] = None

    def returns(
        self,
        stdout: Union[bytes, str] = b"",
        stderr: Union[bytes, str] = b"",
        error: Optional[Exception] = None,
    ) -> "FakeExecutor":
        """Set the output returned by every call."""
        if isinstance(stdout, str):
            stdout = stdout.encode("utf-8")
        if isinstance(stderr, str):
            stderr = stderr.encode("utf-8")
        self._output = ProcessOutput(stdout, stderr, error)
        return self

    def responds_with(self, responder: Callable[[ExecutorCall], ProcessOutput]) -> "FakeExecutor":
        """Compute the output per call instead of using a fixed one."""
        self._responder = responder
        return self

    def execute(
        self,
        binary: str,
        args: Sequence[str],
        env: Optional[Sequence[str]] = None,
        stdin: str = "",
    ) -> ProcessOutput:
        call = ExecutorCall(
            binary=binary,
            args=list(args),
            env=None if env is None else list(env),
            stdin=stdin,
        )
        self.calls.append(call)
        if self._responder is not None:
            return self._responder(call)
        return self._output

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> ExecutorCall:
        assert self.calls, "executor was never called"
        return self.calls[-1]


@pytest.fixture
def fake_executor():
    """Provide a fresh FakeExecutor."""
    return FakeExecutor()


# =============================================================================
# Kubectl subprocess Mocking Infrastructure
# =============================================================================

@dataclass
class KubectlResponse:
    """Represents a mocked kubectl command response."""
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    def to_completed_process(self) -> MagicMock:
        """Convert to a subprocess.CompletedProcess-like mock with bytes output."""
        result = MagicMock()
        result.stdout = self.stdout.encode("utf-8")
        result.stderr = self.stderr.encode("utf-8")
        result.returncode = self.returncode
        return result


@dataclass
class KubectlCall:
    """Record of a kubectl call made during testing."""
    command: List[str]
    full_command_str: str
    kwargs: dict
    matched_pattern: Optional[str] = None
    response: Optional[KubectlResponse] = None


class KubectlMocker:
    """
    Mock kubectl subprocess calls with pattern-matched responses.

    Lets OsExecutor be tested without a real kubectl binary by intercepting
    subprocess.run.

    Usage:
        def test_get_job(kubectl_mocker):
            kubectl_mocker.register("get job", KubectlResponse(stdout="{}"))
            OsExecutor().execute("kubectl", ["get", "job", "foo"])
            assert kubectl_mocker.was_called_with("get job foo")
    """

    def __init__(self):
        self._responses: List[tuple] = []
        self._call_history: List[KubectlCall] = []
        self._default_response = KubectlResponse(
            stderr="Error: mock not configured for this command",
            returncode=1
        )

    def register(
        self,
        pattern: Union[str, re.Pattern],
        response: KubectlResponse,
        priority: int = 0
    ) -> "KubectlMocker":
        """
        Register a response for commands matching the pattern.

        Args:
            pattern: String (substring match) or regex pattern
            response: KubectlResponse to return when matched
            priority: Higher priority patterns are checked first

        Returns:
            self for chaining
        """
        self._responses.append((pattern, response, priority))
        self._responses.sort(key=lambda x: x[2], reverse=True)
        return self

    def mock_run(self, cmd: List[str], **kwargs: Any) -> MagicMock:
        """Side effect for subprocess.run."""
        cmd_str = " ".join(cmd)
        kubectl_args = " ".join(cmd[1:])
        matched_pattern = None
        response = self._default_response

        for pattern, resp, _ in self._responses:
            if isinstance(pattern, str):
                if pattern in kubectl_args:
                    matched_pattern = pattern
                    response = resp
                    break
            elif pattern.search(kubectl_args):
                matched_pattern = pattern.pattern
                response = resp
                break

        self._call_history.append(KubectlCall(
            command=list(cmd),
            full_command_str=cmd_str,
            kwargs=kwargs,
            matched_pattern=matched_pattern,
            response=response
        ))

        return response.to_completed_process()

    @property
    def calls(self) -> List[KubectlCall]:
        """Get all kubectl calls made during the test."""
        return self._call_history

    @property
    def call_count(self) -> int:
        return len(self._call_history)

    def was_called_with(self, pattern: str) -> bool:
        """Check if any call contained the given pattern."""
        return any(pattern in call.full_command_str for call in self._call_history)


@pytest.fixture
def kubectl_mocker():
    """Provide a KubectlMocker with subprocess.run patched."""
    mocker = KubectlMocker()
    with patch("subprocess.run", side_effect=mocker.mock_run):
        yield mocker


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "kubectl_mock: Tests using mocked kubectl subprocess calls"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests requiring a real cluster"
    )
