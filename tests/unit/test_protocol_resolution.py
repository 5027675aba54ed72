"""Unit tests for protocol ID resolution."""

from __future__ import annotations

import pytest

from eui_codec.config import CodecConfig, ProtocolResolution
from eui_codec.protocol_resolution import (
    FixedProtocolResolver,
    ModelTableProtocolResolver,
    build_resolver,
    get_protocol_id_for_device,
    normalize_model_code,
)

GENERAL_PROTOCOL_ID = "88"
ULTRASONIC_PROTOCOL_ID = "a8"
CUSTOM_PROTOCOL_ID = "3c"


class TestNormalizeModelCode:
    """Tests for normalize_model_code."""

    @pytest.mark.parametrize(
        ("model_code", "expected"),
        [
            ("5", "0005"),
            ("42", "0042"),
            ("1234", "1234"),
            ("12345", "12345"),  # never truncated
            (5001, "5001"),
            (7, "0007"),
            ("", "0000"),
        ],
    )
    def test_pads_to_four_characters(self, model_code: object, expected: str) -> None:
        """Test left zero padding to 4 characters."""
        assert normalize_model_code(model_code) == expected


class TestGetProtocolIdForDevice:
    """Tests for get_protocol_id_for_device with default constants."""

    @pytest.mark.parametrize("model_code", ["5001", "5002", "5003", 5001])
    def test_ultrasonic_models(self, model_code: object) -> None:
        """Test the three ultrasonic model codes map to the ultrasonic protocol."""
        assert get_protocol_id_for_device(model_code) == ULTRASONIC_PROTOCOL_ID

    @pytest.mark.parametrize("model_code", ["0001", "1234", "5000", "5004", "05001", "501"])
    def test_other_models_get_general_protocol(self, model_code: str) -> None:
        """Test every other model code falls back to the general protocol."""
        assert get_protocol_id_for_device(model_code) == GENERAL_PROTOCOL_ID

    def test_short_code_is_padded_before_lookup(self) -> None:
        """Test "5" becomes "0005" and resolves to the general protocol."""
        assert get_protocol_id_for_device("5") == GENERAL_PROTOCOL_ID

    def test_custom_ultrasonic_table(self) -> None:
        """Test lookup against a configured table, padded like the input."""
        config = CodecConfig(ultrasonic_model_codes=frozenset({"42"}))

        assert get_protocol_id_for_device("42", config) == ULTRASONIC_PROTOCOL_ID
        assert get_protocol_id_for_device("0042", config) == ULTRASONIC_PROTOCOL_ID
        assert get_protocol_id_for_device("5001", config) == GENERAL_PROTOCOL_ID

    def test_fixed_resolution_ignores_model(self) -> None:
        """Test the fixed strategy returns the general protocol for ultrasonic models too."""
        config = CodecConfig(protocol_resolution=ProtocolResolution.FIXED)

        assert get_protocol_id_for_device("5001", config) == GENERAL_PROTOCOL_ID

    def test_fixed_resolution_with_explicit_protocol(self) -> None:
        """Test fixed_protocol_id overrides the general protocol in fixed mode."""
        config = CodecConfig(protocol_resolution=ProtocolResolution.FIXED, fixed_protocol_id=CUSTOM_PROTOCOL_ID)

        assert get_protocol_id_for_device("1234", config) == CUSTOM_PROTOCOL_ID


class TestBuildResolver:
    """Tests for resolver construction from configuration."""

    def test_by_model_builds_table_resolver(self) -> None:
        """Test default configuration builds the model table resolver."""
        resolver = build_resolver(CodecConfig())

        assert isinstance(resolver, ModelTableProtocolResolver)
        assert resolver.ultrasonic_model_codes == frozenset({"5001", "5002", "5003"})

    def test_fixed_builds_fixed_resolver(self) -> None:
        """Test fixed configuration builds the fixed resolver."""
        resolver = build_resolver(CodecConfig(protocol_resolution=ProtocolResolution.FIXED))

        assert isinstance(resolver, FixedProtocolResolver)
        assert resolver.protocol_id == GENERAL_PROTOCOL_ID

    def test_fixed_resolver_never_inspects_model(self) -> None:
        """Test the fixed resolver answers for input that is not a model code at all."""
        resolver = FixedProtocolResolver(CUSTOM_PROTOCOL_ID)

        assert resolver.resolve(None) == CUSTOM_PROTOCOL_ID
        assert resolver.resolve("5001") == CUSTOM_PROTOCOL_ID

    def test_repr_shows_protocols(self) -> None:
        """Test resolver repr carries its protocol IDs."""
        assert "a8" in repr(build_resolver(CodecConfig()))
        assert "protocol=88" in repr(FixedProtocolResolver(GENERAL_PROTOCOL_ID))
