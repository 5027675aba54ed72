import os

from eui_codec import __version__

__all__ = [
    "DEFAULT_GENERAL_PROTOCOL_ID",
    "DEFAULT_ORGANIZATION_ID",
    "DEFAULT_PROTOCOL_RESOLUTION",
    "DEFAULT_ULTRASONIC_MODEL_CODES",
    "DEFAULT_ULTRASONIC_PROTOCOL_ID",
    "DEVICE_ID_CENTURY",
    "DEVICE_ID_SERIAL_PREFIX",
    "DEVICE_ID_SIZE",
    "ENV_PREFIX",
    "EUI_CODEC_DEBUG",
    "EUI_CODEC_LOG_FORMAT",
    "EUI_CODEC_LOG_HUMAN_OUTPUT",
    "EUI_CODEC_LOG_JSON_FILE",
    "EUI_CODEC_VERSION",
    "EUI_ORGANIZATION_ID_LENGTH",
    "EUI_PROTOCOL_ID_LENGTH",
    "EUI_SERIAL_HEX_LENGTH",
    "EUI_SIZE",
    "EUI_YEAR_HEX_LENGTH",
    "MAX_SERIAL_NUMBER",
    "MAX_YEAR",
    "MODEL_CODE_LENGTH",
    "PREVIEW_LENGTH",
    "SERIAL_DIGITS",
    "YEAR_DIGITS",
    "YES_ANSWER",
]

YES_ANSWER = ("true", "1", "yes", "y", "t", "on", "o")
EUI_CODEC_VERSION: str = __version__
ENV_PREFIX: str = "EUI_CODEC_"

# Expected argument lengths
DEVICE_ID_SIZE = 18
EUI_SIZE = 16

# Device ID layout: MMMM.00NNNNNN.20YY
MODEL_CODE_LENGTH = 4
DEVICE_ID_SERIAL_PREFIX = "00"
DEVICE_ID_CENTURY = "20"
SERIAL_DIGITS = 6
YEAR_DIGITS = 2
MAX_SERIAL_NUMBER = 10**SERIAL_DIGITS - 1
MAX_YEAR = 10**YEAR_DIGITS - 1

# EUI layout: organization (6) + protocol (2) + year (2) + serial (6)
EUI_ORGANIZATION_ID_LENGTH = 6
EUI_PROTOCOL_ID_LENGTH = 2
EUI_YEAR_HEX_LENGTH = 2
EUI_SERIAL_HEX_LENGTH = 6

# Defaults, overridable through CodecConfig
DEFAULT_ORGANIZATION_ID = "001a79"
DEFAULT_GENERAL_PROTOCOL_ID = "88"
DEFAULT_ULTRASONIC_PROTOCOL_ID = "a8"
DEFAULT_ULTRASONIC_MODEL_CODES: frozenset[str] = frozenset({"5001", "5002", "5003"})
DEFAULT_PROTOCOL_RESOLUTION = "by-model"

# Offending input kept in exceptions and log context is cut to this many characters
PREVIEW_LENGTH = 32

EUI_CODEC_DEBUG: bool = os.environ.get("EUI_CODEC_DEBUG", "0").casefold() in YES_ANSWER
EUI_CODEC_LOG_FORMAT: str = os.environ.get("EUI_CODEC_LOG_FORMAT", "human")  # "json", "human", or "both"
_json_file = os.environ.get("EUI_CODEC_LOG_JSON_FILE")
EUI_CODEC_LOG_JSON_FILE: str | None = _json_file if _json_file else None
EUI_CODEC_LOG_HUMAN_OUTPUT: str = os.environ.get("EUI_CODEC_LOG_HUMAN_OUTPUT", "stderr")  # "stdout", "stderr", or file path
