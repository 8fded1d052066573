"""Version comparison for toolchain version gating."""

from __future__ import annotations


class VersionParseError(ValueError):
    """Raised when a version string is not a dotted numeric version."""


def parse_version(text: str) -> tuple[int, int, int]:
    """Parse ``"major[.minor[.patch]]"`` into a triple.

    Missing trailing components are treated as ``0``. Components must be
    plain ASCII digits; anything else raises :class:`VersionParseError`.
    """
    if not isinstance(text, str):
        raise VersionParseError(f"Version must be a string, got {type(text).__name__}")

    parts = text.strip().split(".")
    if len(parts) > 3:
        raise VersionParseError(f"Too many version components in '{text}'")

    values: list[int] = []
    for part in parts:
        if not part or not (part.isascii() and part.isdigit()):
            raise VersionParseError(f"Invalid version component '{part}' in '{text}'")
        values.append(int(part))

    while len(values) < 3:
        values.append(0)
    return values[0], values[1], values[2]


def is_newer(version: str, other: str, strict: bool = True) -> bool:
    """Return True if ``version`` is ordered after ``other``.

    With ``strict=False`` equal versions also count as newer.

    Raises:
        VersionParseError: If either version is malformed.
    """
    left = parse_version(version)
    right = parse_version(other)
    if strict:
        return left > right
    return left >= right
