"""Behavior tests: condition scripts never run when structural checks fail."""

from __future__ import annotations

import shutil
import sys

import pytest

from taskgate import FlowInfo, StaticEnvironment, load_step_string, validate_condition

pytestmark = pytest.mark.skipif(sys.platform == "win32" or shutil.which("sh") is None, reason="requires sh")


def _step_yaml(marker, platforms: str) -> str:
    return f"""\
name: marker-step
condition:
  platforms: [{platforms}]
condition_script:
  - touch '{marker}'
  - exit 0
"""


class TestScriptSideEffects:
    def test_script_not_executed_when_platform_excluded(self, tmp_path):
        marker = tmp_path / "marker"
        step = load_step_string(_step_yaml(marker, "windows"))

        result = validate_condition(FlowInfo(), step, environment=StaticEnvironment(platform="linux"))

        assert result is False
        assert not marker.exists()

    def test_script_executed_when_criteria_pass(self, tmp_path):
        marker = tmp_path / "marker"
        step = load_step_string(_step_yaml(marker, "linux"))

        result = validate_condition(FlowInfo(), step, environment=StaticEnvironment(platform="linux"))

        assert result is True
        assert marker.exists()

    def test_failing_script_blocks_step(self, tmp_path):
        step = load_step_string("name: gated\ncondition_script:\n  - exit 4\n")
        assert validate_condition(FlowInfo(), step, environment=StaticEnvironment()) is False
