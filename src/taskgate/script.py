"""Script execution for condition scripts."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from typing import Protocol

logger = logging.getLogger(__name__)

# Exit status reported when the script could not be launched at all
LAUNCH_FAILURE_EXIT_CODE = 1


class ScriptRunner(Protocol):
    """Runs script lines and reports the process exit status."""

    def run(
        self,
        lines: Sequence[str],
        runner: str | None = None,
        args: Sequence[str] = (),
        quiet: bool = True,
    ) -> int: ...


def _default_runner() -> list[str]:
    if sys.platform == "win32":
        return ["cmd", "/C"]
    return ["sh"]


def resolve_runner(lines: Sequence[str], runner: str | None = None) -> list[str]:
    """Pick the interpreter command for a script.

    An explicit runner wins, then a ``#!`` first line, then the platform shell.
    """
    if runner:
        return shlex.split(runner)
    if lines and lines[0].startswith("#!"):
        shebang = shlex.split(lines[0][2:].strip())
        if shebang:
            return shebang
    return _default_runner()


class SubprocessScriptRunner:
    """Writes the script to a temporary file and runs it in a child process.

    Blocks until the process exits. No timeout is applied.
    """

    def run(
        self,
        lines: Sequence[str],
        runner: str | None = None,
        args: Sequence[str] = (),
        quiet: bool = True,
    ) -> int:
        command = resolve_runner(lines, runner)
        suffix = ".bat" if command[0].lower() in ("cmd", "cmd.exe") else ".sh"

        fd, path = tempfile.mkstemp(prefix="taskgate-", suffix=suffix)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write("\n".join(lines))
                handle.write("\n")

            output = subprocess.DEVNULL if quiet else None
            try:
                proc = subprocess.run(
                    [*command, path, *args],
                    stdout=output,
                    stderr=output,
                    check=False,
                )
            except OSError as exc:
                logger.warning("Unable to launch script runner %s: %s", command[0], exc)
                return LAUNCH_FAILURE_EXIT_CODE
            return proc.returncode
        finally:
            try:
                os.unlink(path)
            except OSError:
                logger.debug("Unable to remove temporary script %s", path)


_default_script_runner = SubprocessScriptRunner()


def run_script(
    lines: Sequence[str],
    runner: str | None = None,
    args: Sequence[str] = (),
    quiet: bool = True,
) -> int:
    """Run script lines with the default :class:`SubprocessScriptRunner`."""
    return _default_script_runner.run(lines, runner, args, quiet)
