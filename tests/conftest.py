"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from taskgate import FlowInfo, RustChannel, RustInfo, StaticEnvironment


class RecordingScriptRunner:
    """Script runner that records calls and returns a fixed exit code (for tests)."""

    def __init__(self, exit_code: int = 0):
        self.exit_code = exit_code
        self.calls = []

    def run(
        self,
        lines: Sequence[str],
        runner: str | None = None,
        args: Sequence[str] = (),
        quiet: bool = True,
    ) -> int:
        self.calls.append({"lines": tuple(lines), "runner": runner, "args": tuple(args), "quiet": quiet})
        return self.exit_code


@pytest.fixture
def environment():
    return StaticEnvironment(
        {"FOO": "bar", "CI": "true"},
        platform="linux",
        profile="development",
    )


@pytest.fixture
def flow_info():
    return FlowInfo(rust_info=RustInfo(channel=RustChannel.STABLE, version="1.10.0"))


@pytest.fixture
def script_runner():
    return RecordingScriptRunner()


@pytest.fixture
def failing_script_runner():
    return RecordingScriptRunner(exit_code=1)
