"""Unit tests for the eui-codec command line."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from eui_codec import main as cli
from eui_codec.logging_abstraction import get_logger
from eui_codec.main import EXIT_BLOCKED, EXIT_CONFIG_ERROR, EXIT_INVALID_INPUT, EXIT_OK, build_parser, main

EUI_1234_2099_1 = "001a798863000001"


class TestToEui:
    """Tests for the to-eui command."""

    def test_prints_eui(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a valid Device ID prints its EUI."""
        assert main(["to-eui", "1234.00000001.2099"]) == EXIT_OK

        assert capsys.readouterr().out == f"{EUI_1234_2099_1}\n"

    def test_strips_whitespace(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test surrounding whitespace is ignored."""
        assert main(["to-eui", "  5001.00000001.2099 "]) == EXIT_OK

        assert capsys.readouterr().out.strip() == "001a79a863000001"

    def test_invalid_device_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a malformed Device ID exits 1 with an error on stderr."""
        assert main(["to-eui", "bad"]) == EXIT_INVALID_INPUT

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "invalid Device ID 'bad'" in captured.err

    def test_fixed_protocol_resolution(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test --protocol-resolution fixed uses the general protocol for ultrasonic models."""
        assert main(["--protocol-resolution", "fixed", "to-eui", "5001.00000001.2099"]) == EXIT_OK

        assert capsys.readouterr().out.strip() == EUI_1234_2099_1


class TestToDeviceId:
    """Tests for the to-device-id command."""

    def test_prints_device_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a matching EUI prints the Device ID without warnings."""
        assert main(["to-device-id", "1234", EUI_1234_2099_1]) == EXIT_OK

        captured = capsys.readouterr()
        assert captured.out == "1234.00000001.2099\n"
        assert "warning" not in captured.err

    def test_prefix_mismatch_warns(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a prefix mismatch is printed as a warning and the result still shown."""
        assert main(["to-device-id", "5001", EUI_1234_2099_1]) == EXIT_OK

        captured = capsys.readouterr()
        assert captured.out == "5001.00000001.2099\n"
        assert "warning: EUI doesn't start with expected prefix 001a79a8 for device 5001" in captured.err

    def test_strict_blocks_on_mismatch(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test --strict turns the warning into exit code 3 with no result."""
        assert main(["to-device-id", "5001", EUI_1234_2099_1, "--strict"]) == EXIT_BLOCKED

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "expected prefix 001a79a8" in captured.err

    def test_strict_passes_clean_decode(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test --strict has no effect without diagnostics."""
        assert main(["to-device-id", "1234", EUI_1234_2099_1, "--strict"]) == EXIT_OK

        assert capsys.readouterr().out == "1234.00000001.2099\n"

    def test_missing_model_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a blank model code exits 1."""
        assert main(["to-device-id", "  ", EUI_1234_2099_1]) == EXIT_INVALID_INPUT

        assert "model code is required" in capsys.readouterr().err

    def test_invalid_eui(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a malformed EUI exits 1."""
        assert main(["to-device-id", "1234", "validEuiHex0000"]) == EXIT_INVALID_INPUT

        assert "invalid EUI 'validEuiHex0000'" in capsys.readouterr().err


class TestInspect:
    """Tests for the inspect command."""

    def test_prints_fields(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test all four fields are printed with decimal values."""
        assert main(["inspect", "001A79A8630F423F"]) == EXIT_OK

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "organization_id: 001a79",
            "protocol_id: a8 (ultrasonic)",
            "year: 99 (0x63)",
            "serial_number: 999999 (0x0f423f)",
        ]

    def test_flags_unknown_values(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a foreign organization and unknown protocol are flagged."""
        assert main(["inspect", "abcdef1200000001"]) == EXIT_OK

        out = capsys.readouterr().out
        assert "organization_id: abcdef (unexpected)" in out
        assert "protocol_id: 12 (unknown)" in out

    def test_invalid(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a malformed EUI exits 1."""
        assert main(["inspect", "xyz"]) == EXIT_INVALID_INPUT

        assert "invalid EUI" in capsys.readouterr().err


class TestConfigurationAndFlags:
    """Tests for global options."""

    def test_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test --config loads constants from YAML."""
        config_file = tmp_path / "codec.yaml"
        config_file.write_text("organization_id: abcdef\n")

        assert main(["--config", str(config_file), "to-eui", "1234.00000001.2099"]) == EXIT_OK

        assert capsys.readouterr().out.strip() == "abcdef8863000001"

    def test_bad_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test an invalid configuration exits 2."""
        config_file = tmp_path / "codec.yaml"
        config_file.write_text("general_protocol_id: zzz\n")

        assert main(["--config", str(config_file), "to-eui", "1234.00000001.2099"]) == EXIT_CONFIG_ERROR

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Invalid codec configuration" in captured.err

    def test_empty_model_codes_in_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a model code key without a value exits 2 instead of crashing."""
        config_file = tmp_path / "codec.yaml"
        config_file.write_text("ultrasonic_model_codes:\n")

        assert main(["--config", str(config_file), "to-eui", "1234.00000001.2099"]) == EXIT_CONFIG_ERROR

        assert "ultrasonic_model_codes" in capsys.readouterr().err

    def test_zero_padded_model_codes_in_config_file(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test unquoted zero-padded model codes select the ultrasonic protocol."""
        config_file = tmp_path / "codec.yaml"
        config_file.write_text("ultrasonic_model_codes:\n  - 0010\n")

        assert main(["--config", str(config_file), "to-eui", "0010.00000001.2099"]) == EXIT_OK

        assert capsys.readouterr().out.strip() == "001a79a863000001"

    def test_environment_configuration(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Test EUI_CODEC_* variables reach the codec."""
        monkeypatch.setenv("EUI_CODEC_ULTRASONIC_MODEL_CODES", "1234")

        assert main(["to-eui", "1234.00000001.2099"]) == EXIT_OK

        assert capsys.readouterr().out.strip() == "001a79a863000001"

    def test_debug_flag_raises_log_level(self) -> None:
        """Test -D switches package loggers to DEBUG."""
        try:
            assert main(["-D", "to-eui", "1234.00000001.2099"]) == EXIT_OK
            assert logging.getLogger("eui_codec.codec").level == logging.DEBUG
        finally:
            for name in cli._PACKAGE_LOGGERS:
                get_logger(name).set_level(logging.INFO)

    def test_command_required(self) -> None:
        """Test argparse rejects a missing command."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])

        assert exc_info.value.code == 2
