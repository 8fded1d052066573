"""Toolchain probe — read channel and version from ``rustc --version``."""

from __future__ import annotations

import logging
import re
import subprocess

from taskgate.types import RustChannel, RustInfo

logger = logging.getLogger(__name__)

# rustc 1.72.0 (5680fa18f 2023-08-23)
# rustc 1.74.0-beta.3 (...)
# rustc 1.75.0-nightly (...)
_RUSTC_VERSION_RE = re.compile(r"^rustc\s+(\d+\.\d+\.\d+)(?:-([0-9A-Za-z.]+))?")


def parse_rustc_version(output: str) -> RustInfo:
    """Parse ``rustc --version`` output. Unrecognised output yields an empty RustInfo."""
    match = _RUSTC_VERSION_RE.match(output.strip())
    if match is None:
        return RustInfo()

    version, pre_release = match.groups()
    channel = RustChannel.STABLE
    if pre_release:
        tag = pre_release.split(".")[0]
        if tag == "nightly" or tag == "dev":
            channel = RustChannel.NIGHTLY
        elif tag == "beta":
            channel = RustChannel.BETA
    return RustInfo(channel=channel, version=version)


def get_rust_info(rustc: str = "rustc") -> RustInfo:
    """Probe the installed toolchain. A missing or failing ``rustc`` yields an empty RustInfo."""
    try:
        proc = subprocess.run(
            [rustc, "--version"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("Unable to run %s: %s", rustc, exc)
        return RustInfo()

    if proc.returncode != 0:
        logger.debug("%s --version exited with %d", rustc, proc.returncode)
        return RustInfo()

    return parse_rustc_version(proc.stdout)
