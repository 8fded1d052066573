"""Tests for the rustc toolchain probe."""

from __future__ import annotations

import subprocess
import unittest.mock as mock

import pytest

from taskgate import FlowInfo
from taskgate.toolchain import get_rust_info, parse_rustc_version
from taskgate.types import RustChannel, RustInfo


class TestParseRustcVersion:
    @pytest.mark.parametrize(
        "output, expected",
        [
            ("rustc 1.72.0 (5680fa18f 2023-08-23)", RustInfo(RustChannel.STABLE, "1.72.0")),
            ("rustc 1.74.0-beta.3 (d6d3c4c5f 2023-10-28)", RustInfo(RustChannel.BETA, "1.74.0")),
            ("rustc 1.75.0-nightly (0f44eb32f 2023-11-09)\n", RustInfo(RustChannel.NIGHTLY, "1.75.0")),
            ("rustc 1.76.0-dev", RustInfo(RustChannel.NIGHTLY, "1.76.0")),
        ],
    )
    def test_known_formats(self, output, expected):
        assert parse_rustc_version(output) == expected

    @pytest.mark.parametrize("output", ["", "cargo 1.72.0", "rustc unknown", "error: no toolchain"])
    def test_unrecognised_output(self, output):
        assert parse_rustc_version(output) == RustInfo()


class TestGetRustInfo:
    def test_successful_probe(self):
        completed = subprocess.CompletedProcess(
            ["rustc", "--version"],
            0,
            stdout="rustc 1.72.0 (5680fa18f 2023-08-23)\n",
        )
        with mock.patch("taskgate.toolchain.subprocess.run", return_value=completed) as run:
            info = get_rust_info()
        run.assert_called_once()
        assert run.call_args.args[0] == ["rustc", "--version"]
        assert info == RustInfo(RustChannel.STABLE, "1.72.0")

    def test_missing_binary(self):
        assert get_rust_info("taskgate-no-such-rustc-xyz") == RustInfo()

    def test_non_zero_exit(self):
        completed = subprocess.CompletedProcess(["rustc", "--version"], 1, stdout="")
        with mock.patch("taskgate.toolchain.subprocess.run", return_value=completed):
            assert get_rust_info() == RustInfo()

    def test_flow_info_detect(self):
        with mock.patch("taskgate.toolchain.get_rust_info", return_value=RustInfo(RustChannel.BETA, "1.74.0")):
            flow = FlowInfo.detect()
        assert flow.rust_info.channel is RustChannel.BETA
