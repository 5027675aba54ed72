"""Exception types for identifier codec errors.

The strict parsers raise these; the public conversion functions catch them
and hand back None so callers only ever see a "no result" sentinel.
"""

from __future__ import annotations

from eui_codec.const import PREVIEW_LENGTH


def _preview(value: object) -> str:
    text = value if isinstance(value, str) else repr(value)
    return text[:PREVIEW_LENGTH]


class IdentifierCodecError(Exception):
    """Base exception for all identifier codec errors.

    Attributes:
        reason: Machine-readable failure reason (e.g., "wrong_length")

    """

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason: str = reason
        super().__init__(message or reason)


class MalformedDeviceIdError(IdentifierCodecError):
    """Device ID does not have the DDDD.DDDDDDDD.DDDD shape.

    Attributes:
        reason: "not_a_string", "wrong_length" or "pattern_mismatch"
        value_preview: Offending input, truncated

    """

    def __init__(self, reason: str, value: object = "") -> None:
        self.value_preview: str = _preview(value)
        super().__init__(reason, f"Malformed Device ID: {reason}")


class MalformedEuiError(IdentifierCodecError):
    """EUI is not a 16 character hexadecimal string.

    Attributes:
        reason: "not_a_string", "wrong_length" or "not_hex"
        value_preview: Offending input, truncated

    """

    def __init__(self, reason: str, value: object = "") -> None:
        self.value_preview: str = _preview(value)
        super().__init__(reason, f"Malformed EUI: {reason}")


class MissingModelCodeError(IdentifierCodecError):
    """Model code is required for decoding but was empty."""

    def __init__(self, value: object = "") -> None:
        self.value_preview: str = _preview(value)
        super().__init__("missing_model_code", "Model code is required")


class ConfigurationError(IdentifierCodecError):
    """Codec configuration is invalid.

    Attributes:
        reason: Short description of what failed
        source: Where the configuration came from ("defaults", a file path, "environment")

    """

    def __init__(self, reason: str, source: str = "defaults") -> None:
        self.source: str = source
        super().__init__(reason, f"Invalid codec configuration ({source}): {reason}")
