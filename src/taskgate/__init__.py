"""taskgate — condition gating for task runner steps."""

from __future__ import annotations

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("taskgate")
except Exception:  # pragma: no cover — editable installs, test envs
    __version__ = "0.0.0-dev"

from taskgate.condition import (
    CRITERIA_CHECKS,
    ConditionResult,
    evaluate_condition,
    validate_condition,
    validate_criteria,
    validate_script,
)
from taskgate.environment import (
    EnvironmentProvider,
    ProcessEnvironment,
    StaticEnvironment,
    get_platform_name,
    get_profile_name,
)
from taskgate.loader import load_step, load_step_file, load_step_string
from taskgate.script import ScriptRunner, SubprocessScriptRunner, run_script
from taskgate.toolchain import get_rust_info, parse_rustc_version
from taskgate.types import FlowInfo, RustChannel, RustInfo, RustVersionCondition, Step, TaskCondition
from taskgate.version import VersionParseError, is_newer, parse_version

__all__ = [
    "__version__",
    "CRITERIA_CHECKS",
    "ConditionResult",
    "EnvironmentProvider",
    "FlowInfo",
    "ProcessEnvironment",
    "RustChannel",
    "RustInfo",
    "RustVersionCondition",
    "ScriptRunner",
    "StaticEnvironment",
    "Step",
    "SubprocessScriptRunner",
    "TaskCondition",
    "TaskGateConfigError",
    "VersionParseError",
    "evaluate_condition",
    "get_platform_name",
    "get_profile_name",
    "get_rust_info",
    "is_newer",
    "load_step",
    "load_step_file",
    "load_step_string",
    "parse_rustc_version",
    "parse_version",
    "run_script",
    "validate_condition",
    "validate_criteria",
    "validate_script",
]


class TaskGateConfigError(Exception):
    """Raised for configuration/load-time errors (invalid YAML, schema failures, etc.)."""

    pass
