"""Codec configuration.

Configuration is layered: built-in defaults, then an optional YAML file, then
EUI_CODEC_* environment variables. The result is an immutable pydantic model.
"""

from __future__ import annotations

import os
import re
import string
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from eui_codec.const import (
    DEFAULT_GENERAL_PROTOCOL_ID,
    DEFAULT_ORGANIZATION_ID,
    DEFAULT_PROTOCOL_RESOLUTION,
    DEFAULT_ULTRASONIC_MODEL_CODES,
    DEFAULT_ULTRASONIC_PROTOCOL_ID,
    ENV_PREFIX,
    EUI_ORGANIZATION_ID_LENGTH,
    EUI_PROTOCOL_ID_LENGTH,
    MODEL_CODE_LENGTH,
)
from eui_codec.exceptions import ConfigurationError
from eui_codec.logging_abstraction import get_logger

__all__ = [
    "CodecConfig",
    "ProtocolResolution",
    "config_from_env",
    "load_config",
]

logger = get_logger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)

# CodecConfig field -> environment variable suffix
_ENV_FIELDS = {
    "organization_id": "ORGANIZATION_ID",
    "general_protocol_id": "GENERAL_PROTOCOL_ID",
    "ultrasonic_protocol_id": "ULTRASONIC_PROTOCOL_ID",
    "ultrasonic_model_codes": "ULTRASONIC_MODEL_CODES",
    "protocol_resolution": "PROTOCOL_RESOLUTION",
    "fixed_protocol_id": "FIXED_PROTOCOL_ID",
}


class ProtocolResolution(StrEnum):
    """How the protocol ID of a device is chosen."""

    BY_MODEL = "by-model"  # ultrasonic table lookup on the model code
    FIXED = "fixed"  # one protocol ID for every device


def _hex_field(value: str, length: int, name: str) -> str:
    if len(value) != length or not set(value) <= _HEX_DIGITS:
        msg = f"{name} must be {length} hexadecimal characters, got {value!r}"
        raise ValueError(msg)
    return value.lower()


class CodecConfig(BaseModel):
    """Constants the codec works with.

    Attributes:
        organization_id: 6 hex character prefix of every EUI
        general_protocol_id: Default protocol ID
        ultrasonic_protocol_id: Protocol ID of ultrasonic devices
        ultrasonic_model_codes: Model codes that map to the ultrasonic protocol
        protocol_resolution: Table lookup by model code, or one fixed protocol
        fixed_protocol_id: Protocol used by the fixed strategy (general protocol if unset)

    """

    # YAML reads unquoted protocol IDs such as 88 as integers
    # (zero-padded ones stay strings through _ConfigLoader)
    model_config = ConfigDict(frozen=True, extra="forbid", coerce_numbers_to_str=True)

    organization_id: str = DEFAULT_ORGANIZATION_ID
    general_protocol_id: str = DEFAULT_GENERAL_PROTOCOL_ID
    ultrasonic_protocol_id: str = DEFAULT_ULTRASONIC_PROTOCOL_ID
    ultrasonic_model_codes: frozenset[str] = Field(default=DEFAULT_ULTRASONIC_MODEL_CODES)
    protocol_resolution: ProtocolResolution = ProtocolResolution(DEFAULT_PROTOCOL_RESOLUTION)
    fixed_protocol_id: str | None = None

    @field_validator("organization_id")
    @classmethod
    def _check_organization_id(cls, value: str) -> str:
        return _hex_field(value, EUI_ORGANIZATION_ID_LENGTH, "organization_id")

    @field_validator("general_protocol_id", "ultrasonic_protocol_id")
    @classmethod
    def _check_protocol_id(cls, value: str) -> str:
        return _hex_field(value, EUI_PROTOCOL_ID_LENGTH, "protocol_id")

    @field_validator("fixed_protocol_id")
    @classmethod
    def _check_fixed_protocol_id(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _hex_field(value, EUI_PROTOCOL_ID_LENGTH, "fixed_protocol_id")

    @field_validator("ultrasonic_model_codes", mode="before")
    @classmethod
    def _normalize_model_codes(cls, value: Any) -> frozenset[str]:
        if isinstance(value, str):
            value = [code for code in value.split(",") if code.strip()]
        if isinstance(value, int):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            msg = f"model codes must be a list or a comma separated string, got {value!r}"
            raise ValueError(msg)

        codes: set[str] = set()
        for raw in value:
            code = str(raw).strip()
            if not (code.isascii() and code.isdigit()) or len(code) > MODEL_CODE_LENGTH:
                msg = f"model codes must be up to {MODEL_CODE_LENGTH} digits, got {raw!r}"
                raise ValueError(msg)
            codes.add(code.rjust(MODEL_CODE_LENGTH, "0"))
        return frozenset(codes)

    @property
    def effective_fixed_protocol_id(self) -> str:
        """Protocol ID returned for every device when resolution is fixed."""
        return self.fixed_protocol_id or self.general_protocol_id

    def with_overrides(self, **changes: object) -> CodecConfig:
        """Return a validated copy with the given fields replaced.

        A None value means "not given" and keeps the current value, so an
        override cannot reset fixed_protocol_id to None.
        """
        data = self.model_dump()
        data.update({k: v for k, v in changes.items() if v is not None})
        try:
            return CodecConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(_summarize(e), "overrides") from e


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "config"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def config_from_env(env: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect EUI_CODEC_* configuration overrides from the environment.

    Empty values are ignored so an exported-but-blank variable keeps the default.
    """
    env = os.environ if env is None else env
    overrides: dict[str, str] = {}
    for field, suffix in _ENV_FIELDS.items():
        value = env.get(f"{ENV_PREFIX}{suffix}")
        if value:
            overrides[field] = value.strip()
    return overrides


_YAML_INT_TAG = "tag:yaml.org,2002:int"


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader that keeps zero-padded numbers such as 0501 or 08 as strings.

    Plain YAML 1.1 reads them as octal integers, which would turn model code
    0010 into 8.
    """


_ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_INT_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_ConfigLoader.add_implicit_resolver(
    _YAML_INT_TAG,
    re.compile(r"^[-+]?(?:0|[1-9][0-9_]*)$"),
    list("-+0123456789"),
)


def _read_config_file(path: Path) -> dict[str, Any]:
    logger.debug("Reading codec config file: %s", path)
    try:
        with path.open() as f:
            data = yaml.load(f, Loader=_ConfigLoader)  # noqa: S506
    except OSError as e:
        raise ConfigurationError(f"cannot read file: {e}", str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML: {e}", str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("top level must be a mapping", str(path))
    return data


def load_config(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> CodecConfig:
    """Build a CodecConfig from defaults, an optional YAML file and the environment.

    Args:
        path: YAML file with CodecConfig field names as keys
        env: Environment mapping (defaults to os.environ)

    Returns:
        Validated, immutable configuration

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid

    """
    data: dict[str, Any] = {}
    sources: list[str] = []

    if path is not None:
        data.update(_read_config_file(Path(path)))
        sources.append(str(path))

    env_overrides = config_from_env(env)
    if env_overrides:
        data.update(env_overrides)
        sources.append("environment")

    source = ", ".join(sources) or "defaults"
    try:
        config = CodecConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(_summarize(e), source) from e

    logger.debug(
        "Codec configuration loaded",
        extra={"source": source, "protocol_resolution": config.protocol_resolution.value},
    )
    return config
