"""Step Loader — parse YAML, validate against JSON Schema, build Step objects."""

from __future__ import annotations

import importlib.resources as _resources
import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from taskgate.types import RustChannel, RustVersionCondition, Step, TaskCondition

MAX_STEP_SIZE = 1_048_576  # 1 MB

# Lazy-loaded schema singleton
_schema_cache: dict | None = None


def _get_schema() -> dict:
    """Load and cache the JSON Schema for validation."""
    global _schema_cache  # noqa: PLW0603
    if _schema_cache is None:
        schema_text = _resources.files("taskgate").joinpath("taskgate-v1.schema.json").read_text(encoding="utf-8")
        _schema_cache = json.loads(schema_text)
    return _schema_cache


def _validate_schema(data: dict) -> None:
    from taskgate import TaskGateConfigError

    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as e:
        raise TaskGateConfigError(f"Schema validation failed: {e.message}") from e


def _optional_set(values: list[str] | None) -> frozenset[str] | None:
    if values is None:
        return None
    return frozenset(values)


def _build_condition(data: dict[str, Any]) -> TaskCondition:
    channels = data.get("channels")
    rust_version = data.get("rust_version")
    env = data.get("env")

    return TaskCondition(
        platforms=_optional_set(data.get("platforms")),
        profiles=_optional_set(data.get("profiles")),
        channels=frozenset(RustChannel(c) for c in channels) if channels is not None else None,
        env=dict(env) if env is not None else None,
        env_set=_optional_set(data.get("env_set")),
        env_not_set=_optional_set(data.get("env_not_set")),
        rust_version=RustVersionCondition(**rust_version) if rust_version is not None else None,
    )


def load_step(data: dict[str, Any]) -> Step:
    """Build a Step from an already-parsed mapping.

    Raises:
        TaskGateConfigError: If the mapping fails schema validation.
    """
    from taskgate import TaskGateConfigError

    if not isinstance(data, dict):
        raise TaskGateConfigError("Step document must be a mapping")

    _validate_schema(data)

    condition = data.get("condition")
    script = data.get("condition_script")
    if isinstance(script, str):
        script = script.splitlines()

    return Step(
        name=data["name"],
        condition=_build_condition(condition) if condition is not None else None,
        condition_script=tuple(script) if script is not None else None,
        script_runner=data.get("script_runner"),
    )


def load_step_string(content: str | bytes) -> Step:
    """Load and validate a step from YAML content.

    Raises:
        TaskGateConfigError: If the content is too large, is not valid YAML,
            or fails schema validation.
    """
    from taskgate import TaskGateConfigError

    raw_bytes = content.encode("utf-8") if isinstance(content, str) else content

    if len(raw_bytes) > MAX_STEP_SIZE:
        raise TaskGateConfigError(f"Step content too large ({len(raw_bytes)} bytes, max {MAX_STEP_SIZE})")

    try:
        data = yaml.safe_load(raw_bytes)
    except yaml.YAMLError as e:
        raise TaskGateConfigError(f"YAML parse error: {e}") from e

    return load_step(data)


def load_step_file(source: str | Path) -> Step:
    """Load and validate a step from a YAML file.

    Raises:
        TaskGateConfigError: If the file is too large, is not valid YAML,
            or fails schema validation.
        FileNotFoundError: If the file does not exist.
    """
    from taskgate import TaskGateConfigError

    path = Path(source)

    file_size = path.stat().st_size
    if file_size > MAX_STEP_SIZE:
        raise TaskGateConfigError(f"Step file too large ({file_size} bytes, max {MAX_STEP_SIZE})")

    return load_step_string(path.read_bytes())
