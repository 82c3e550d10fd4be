"""Shared fixtures for deltaenv tests."""

import sys
import threading
from io import StringIO

import pytest

from deltaenv.common import (
    BAT_PAGER,
    BAT_THEME,
    COLORTERM,
    DELTA_EXPERIMENTAL_MAX_LINE_DISTANCE_FOR_NAIVELY_PAIRED_LINES,
    DELTA_FEATURES,
    DELTA_NAVIGATE,
    DELTA_PAGER,
    GIT_CONFIG_PARAMETERS,
    GIT_PREFIX,
    PAGER,
)
from deltaenv.cli import main


ALL_VARIABLES = [
    BAT_PAGER,
    BAT_THEME,
    COLORTERM,
    DELTA_EXPERIMENTAL_MAX_LINE_DISTANCE_FOR_NAIVELY_PAIRED_LINES,
    DELTA_FEATURES,
    DELTA_NAVIGATE,
    DELTA_PAGER,
    GIT_CONFIG_PARAMETERS,
    GIT_PREFIX,
    PAGER,
]

# os.environ is process-wide; tests that change it hold this lock
ENV_ACCESS = threading.Lock()


@pytest.fixture
def env_access(monkeypatch):
    """Serialize environment access and start from a clean environment.

    Yields the monkeypatch fixture so tests can set variables that are
    restored afterwards.
    """
    with ENV_ACCESS:
        for name in ALL_VARIABLES:
            monkeypatch.delenv(name, raising=False)
        yield monkeypatch


class CLIRunner:
    """Simple CLI runner that captures stdout/stderr."""

    def invoke(self, args: list[str]) -> "CLIResult":
        """Run CLI with given args and capture output."""
        old_stdout = sys.stdout
        old_stderr = sys.stderr
        sys.stdout = captured_out = StringIO()
        sys.stderr = captured_err = StringIO()

        try:
            exit_code = main(args)
        except SystemExit as e:
            exit_code = e.code if e.code is not None else 0
        finally:
            sys.stdout = old_stdout
            sys.stderr = old_stderr

        return CLIResult(
            exit_code=exit_code,
            stdout=captured_out.getvalue(),
            stderr=captured_err.getvalue(),
        )


class CLIResult:
    """Result from CLI invocation."""

    def __init__(self, exit_code: int, stdout: str, stderr: str):
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

    @property
    def output(self) -> str:
        return self.stdout + self.stderr


@pytest.fixture
def cli_runner():
    """Create a CLI runner."""
    return CLIRunner()
