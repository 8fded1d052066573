"""Condition Evaluator — decide whether a task step may run."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from taskgate.checks import (
    check_channel,
    check_env,
    check_env_not_set,
    check_env_set,
    check_platform,
    check_profile,
    check_rust_version,
)
from taskgate.environment import EnvironmentProvider, ProcessEnvironment
from taskgate.otel import get_tracer
from taskgate.script import ScriptRunner, SubprocessScriptRunner
from taskgate.types import FlowInfo, Step, TaskCondition

logger = logging.getLogger(__name__)

SCRIPT_CHECK = "condition_script"


@dataclass(frozen=True)
class ConditionResult:
    """Outcome of evaluating one step's condition."""

    passed: bool
    failed_check: str | None = None
    checks_evaluated: tuple[str, ...] = ()
    script_exit_code: int | None = None


# Evaluation order of the structural checks. Evaluation stops at the first failure.
_CRITERIA: list[tuple[str, Callable[[TaskCondition, EnvironmentProvider, FlowInfo], bool]]] = [
    ("platforms", lambda c, env, flow: check_platform(c, env)),
    ("profiles", lambda c, env, flow: check_profile(c, env)),
    ("channels", lambda c, env, flow: check_channel(c, flow)),
    ("env", lambda c, env, flow: check_env(c, env)),
    ("env_set", lambda c, env, flow: check_env_set(c, env)),
    ("env_not_set", lambda c, env, flow: check_env_not_set(c, env)),
    ("rust_version", lambda c, env, flow: check_rust_version(c, flow)),
]

CRITERIA_CHECKS: tuple[str, ...] = tuple(name for name, _ in _CRITERIA)


def _evaluate_criteria(
    flow_info: FlowInfo,
    step: Step,
    environment: EnvironmentProvider,
    evaluated: list[str],
) -> str | None:
    """Run the structural checks and return the name of the first failure."""
    if step.condition is None:
        return None

    logger.debug("Checking task condition structure.")
    for name, check in _CRITERIA:
        evaluated.append(name)
        try:
            passed = check(step.condition, environment, flow_info)
        except Exception:
            logger.exception("Condition check %s for step %s raised", name, step.name)
            return name
        if not passed:
            return name
    return None


def validate_criteria(
    flow_info: FlowInfo,
    step: Step,
    environment: EnvironmentProvider | None = None,
) -> bool:
    """AND of every structural check, short-circuiting left to right."""
    environment = environment or ProcessEnvironment()
    return _evaluate_criteria(flow_info, step, environment, []) is None


def _run_condition_script(step: Step, script_runner: ScriptRunner) -> int | None:
    if step.condition_script is None:
        return None

    logger.debug("Checking task condition script.")
    try:
        return script_runner.run(step.condition_script, step.script_runner, (), True)
    except Exception:
        logger.exception("Condition script for step %s raised", step.name)
        return -1


def validate_script(step: Step, script_runner: ScriptRunner | None = None) -> bool:
    """Run the condition script, if any. Passes iff it exits with status 0."""
    exit_code = _run_condition_script(step, script_runner or SubprocessScriptRunner())
    return exit_code is None or exit_code == 0


def evaluate_condition(
    flow_info: FlowInfo,
    step: Step,
    *,
    environment: EnvironmentProvider | None = None,
    script_runner: ScriptRunner | None = None,
) -> ConditionResult:
    """Evaluate a step's condition and report which check decided it.

    The condition script only runs once every structural check passed.
    """
    environment = environment or ProcessEnvironment()
    script_runner = script_runner or SubprocessScriptRunner()
    evaluated: list[str] = []

    with get_tracer().start_as_current_span("taskgate.condition") as span:
        span.set_attribute("taskgate.step", step.name)

        failed = _evaluate_criteria(flow_info, step, environment, evaluated)
        exit_code: int | None = None
        if failed is None and step.condition_script is not None:
            evaluated.append(SCRIPT_CHECK)
            exit_code = _run_condition_script(step, script_runner)
            if exit_code != 0:
                logger.debug("Failed condition script for step %s, exit code: %s", step.name, exit_code)
                failed = SCRIPT_CHECK

        span.set_attribute("taskgate.passed", failed is None)
        if failed is not None:
            span.set_attribute("taskgate.failed_check", failed)

    return ConditionResult(
        passed=failed is None,
        failed_check=failed,
        checks_evaluated=tuple(evaluated),
        script_exit_code=exit_code,
    )


def validate_condition(
    flow_info: FlowInfo,
    step: Step,
    *,
    environment: EnvironmentProvider | None = None,
    script_runner: ScriptRunner | None = None,
) -> bool:
    """Return True if the step may run in the current context."""
    return evaluate_condition(
        flow_info,
        step,
        environment=environment,
        script_runner=script_runner,
    ).passed
