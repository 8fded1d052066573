"""Scalar predicate checks — one function per condition dimension.

Each check returns True when its field is absent (no constraint) or when
the current ambient fact satisfies it. Checks never raise.
"""

from __future__ import annotations

import logging

from taskgate.environment import EnvironmentProvider
from taskgate.types import FlowInfo, RustInfo, RustVersionCondition, TaskCondition
from taskgate.version import VersionParseError, is_newer

logger = logging.getLogger(__name__)


def check_env(condition: TaskCondition, environment: EnvironmentProvider) -> bool:
    if condition.env is None:
        return True

    for key, expected in condition.env.items():
        value = environment.get(key)
        if value is None or value != expected:
            logger.debug("Failed env condition, %s=%r (expected %r)", key, value, expected)
            return False
    return True


def check_env_set(condition: TaskCondition, environment: EnvironmentProvider) -> bool:
    if condition.env_set is None:
        return True

    for key in condition.env_set:
        if environment.get(key) is None:
            logger.debug("Failed env_set condition, %s is not set", key)
            return False
    return True


def check_env_not_set(condition: TaskCondition, environment: EnvironmentProvider) -> bool:
    if condition.env_not_set is None:
        return True

    for key in condition.env_not_set:
        if environment.get(key) is not None:
            logger.debug("Failed env_not_set condition, %s is set", key)
            return False
    return True


def check_platform(condition: TaskCondition, environment: EnvironmentProvider) -> bool:
    if condition.platforms is None:
        return True

    platform_name = environment.platform_name()
    if platform_name not in condition.platforms:
        logger.debug("Failed platform condition, current platform: %s", platform_name)
        return False
    return True


def check_profile(condition: TaskCondition, environment: EnvironmentProvider) -> bool:
    if condition.profiles is None:
        return True

    profile_name = environment.profile_name()
    if profile_name not in condition.profiles:
        logger.debug("Failed profile condition, current profile: %s", profile_name)
        return False
    return True


def check_channel(condition: TaskCondition, flow_info: FlowInfo) -> bool:
    """Unknown toolchain channel never satisfies a channel constraint."""
    if condition.channels is None:
        return True

    channel = flow_info.rust_info.channel
    if channel is None:
        logger.debug("Failed channel condition, toolchain channel unknown")
        return False
    if channel.value not in condition.channels:
        logger.debug("Failed channel condition, current channel: %s", channel.value)
        return False
    return True


def _newer_or_equal(version: str, bound: str, label: str) -> bool:
    if version == bound:
        return True
    try:
        return is_newer(version, bound, strict=False)
    except VersionParseError as exc:
        logger.warning("Cannot compare %s version: %s", label, exc)
        return False


def check_rust_version_condition(rust_info: RustInfo, condition: RustVersionCondition) -> bool:
    """Evaluate a version range against the current toolchain version.

    An unknown current version passes unconditionally. Malformed versions
    fail the ``min``/``max`` sub-condition they appear in.
    """
    current = rust_info.version
    if current is None:
        return True

    if condition.min is not None and not _newer_or_equal(current, condition.min, "min"):
        logger.debug("Failed rust_version condition, %s is older than min %s", current, condition.min)
        return False

    if condition.max is not None and not _newer_or_equal(condition.max, current, "max"):
        logger.debug("Failed rust_version condition, %s is newer than max %s", current, condition.max)
        return False

    if condition.equal is not None and condition.equal != current:
        logger.debug("Failed rust_version condition, %s is not %s", current, condition.equal)
        return False

    return True


def check_rust_version(condition: TaskCondition, flow_info: FlowInfo) -> bool:
    if condition.rust_version is None:
        return True
    return check_rust_version_condition(flow_info.rust_info, condition.rust_version)
