"""EnvironmentProvider protocol + ProcessEnvironment and StaticEnvironment implementations."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from typing import Protocol

PROFILE_ENV_VAR = "TASKGATE_PROFILE"
DEFAULT_PROFILE = "development"


def get_platform_name() -> str:
    """Classify the host OS as ``linux``, ``mac`` or ``windows``.

    Other hosts report the raw ``sys.platform`` value.
    """
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "mac"
    if sys.platform in ("win32", "cygwin"):
        return "windows"
    return sys.platform


def get_profile_name() -> str:
    """Active profile from ``TASKGATE_PROFILE``, ``development`` when unset."""
    return os.environ.get(PROFILE_ENV_VAR) or DEFAULT_PROFILE


class EnvironmentProvider(Protocol):
    """Ambient facts read by the condition checks.

    Implementations must not mutate process state.
    """

    def get(self, key: str) -> str | None: ...
    def platform_name(self) -> str: ...
    def profile_name(self) -> str: ...


class ProcessEnvironment:
    """Reads the real process environment and host platform."""

    def get(self, key: str) -> str | None:
        return os.environ.get(key)

    def platform_name(self) -> str:
        return get_platform_name()

    def profile_name(self) -> str:
        return get_profile_name()


class StaticEnvironment:
    """Fixed snapshot of ambient facts.

    Suitable for: tests, embedding, evaluating a step against a
    recorded context. Never reads process state.
    """

    def __init__(
        self,
        variables: Mapping[str, str] | None = None,
        *,
        platform: str = "linux",
        profile: str = DEFAULT_PROFILE,
    ):
        self._variables: dict[str, str] = dict(variables or {})
        self._platform = platform
        self._profile = profile

    def get(self, key: str) -> str | None:
        return self._variables.get(key)

    def platform_name(self) -> str:
        return self._platform

    def profile_name(self) -> str:
        return self._profile
