"""Condition data — immutable snapshots of a step's gating configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class RustChannel(StrEnum):
    """Toolchain release track reported by the toolchain probe."""

    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"


@dataclass(frozen=True)
class RustVersionCondition:
    """Version range constraint. Bounds are inclusive, ``equal`` is an exact pin."""

    min: str | None = None
    max: str | None = None
    equal: str | None = None


@dataclass(frozen=True)
class TaskCondition:
    """Structural gating configuration of a step.

    Every field is optional. ``None`` means the dimension imposes no
    constraint and always passes; an empty collection is a real
    constraint (e.g. ``platforms=frozenset()`` never passes).
    """

    platforms: frozenset[str] | None = None
    profiles: frozenset[str] | None = None
    channels: frozenset[RustChannel] | None = None
    env: Mapping[str, str] | None = None
    env_set: frozenset[str] | None = None
    env_not_set: frozenset[str] | None = None
    rust_version: RustVersionCondition | None = None

    def __post_init__(self) -> None:
        if self.env is not None:
            object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    def __hash__(self) -> int:
        env = frozenset(self.env.items()) if self.env is not None else None
        return hash(
            (self.platforms, self.profiles, self.channels, env, self.env_set, self.env_not_set, self.rust_version)
        )


@dataclass(frozen=True)
class RustInfo:
    """Installed toolchain facts. Either field may be unknown."""

    channel: RustChannel | None = None
    version: str | None = None


@dataclass(frozen=True)
class FlowInfo:
    """Ambient execution context for the current run."""

    rust_info: RustInfo = field(default_factory=RustInfo)

    @classmethod
    def detect(cls, rustc: str = "rustc") -> FlowInfo:
        """Build a FlowInfo by probing the installed toolchain."""
        from taskgate.toolchain import get_rust_info

        return cls(rust_info=get_rust_info(rustc))


@dataclass(frozen=True)
class Step:
    """A task step as seen by the gating engine."""

    name: str
    condition: TaskCondition | None = None
    condition_script: tuple[str, ...] | None = None
    script_runner: str | None = None
