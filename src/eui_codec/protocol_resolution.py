"""Protocol ID resolution strategies.

A resolver maps a model code to the 2 hex character protocol ID embedded in
the EUI. Two strategies exist: a lookup in the ultrasonic model table, and a
fixed protocol for every device. Uses structural subtyping (Protocol) so
callers may supply their own resolver without inheriting from anything.
"""

from __future__ import annotations

from typing import Protocol

from eui_codec.config import CodecConfig, ProtocolResolution
from eui_codec.const import MODEL_CODE_LENGTH

__all__ = [
    "FixedProtocolResolver",
    "ModelTableProtocolResolver",
    "ProtocolResolver",
    "build_resolver",
    "get_protocol_id_for_device",
    "normalize_model_code",
]


def normalize_model_code(model_code: object) -> str:
    """Coerce a model code to a string left-padded with zeros to 4 characters.

    Longer codes are returned unchanged.

    Example:
        >>> normalize_model_code(5)
        '0005'
        >>> normalize_model_code("12345")
        '12345'

    """
    return str(model_code).rjust(MODEL_CODE_LENGTH, "0")


class ProtocolResolver(Protocol):
    """Type protocol for protocol ID resolvers."""

    def resolve(self, model_code: object) -> str:
        """Return the protocol ID for a model code. Must be total."""
        ...


class ModelTableProtocolResolver:
    """Ultrasonic model codes get the ultrasonic protocol, everything else the general one."""

    def __init__(
        self,
        ultrasonic_model_codes: frozenset[str],
        ultrasonic_protocol_id: str,
        general_protocol_id: str,
    ) -> None:
        self.ultrasonic_model_codes = ultrasonic_model_codes
        self.ultrasonic_protocol_id = ultrasonic_protocol_id
        self.general_protocol_id = general_protocol_id

    def resolve(self, model_code: object) -> str:
        if normalize_model_code(model_code) in self.ultrasonic_model_codes:
            return self.ultrasonic_protocol_id
        return self.general_protocol_id

    def __repr__(self) -> str:
        return (
            f"ModelTableProtocolResolver(ultrasonic={sorted(self.ultrasonic_model_codes)}, "
            f"ultrasonic_protocol={self.ultrasonic_protocol_id}, "
            f"general_protocol={self.general_protocol_id})"
        )


class FixedProtocolResolver:
    """Every model code gets the same protocol ID; the model code is never inspected."""

    def __init__(self, protocol_id: str) -> None:
        self.protocol_id = protocol_id

    def resolve(self, model_code: object) -> str:  # noqa: ARG002
        return self.protocol_id

    def __repr__(self) -> str:
        return f"FixedProtocolResolver(protocol={self.protocol_id})"


def build_resolver(config: CodecConfig) -> ProtocolResolver:
    """Create the resolver selected by config.protocol_resolution."""
    if config.protocol_resolution is ProtocolResolution.FIXED:
        return FixedProtocolResolver(config.effective_fixed_protocol_id)
    return ModelTableProtocolResolver(
        ultrasonic_model_codes=config.ultrasonic_model_codes,
        ultrasonic_protocol_id=config.ultrasonic_protocol_id,
        general_protocol_id=config.general_protocol_id,
    )


_DEFAULT_RESOLVER = build_resolver(CodecConfig())


def get_protocol_id_for_device(model_code: object, config: CodecConfig | None = None) -> str:
    """Get the protocol ID for a device by model code.

    Args:
        model_code: Device model code; shorter codes are zero-padded to 4 characters
        config: Codec configuration (defaults to the built-in constants)

    Returns:
        2 hex character protocol ID

    Example:
        >>> get_protocol_id_for_device("5001")
        'a8'
        >>> get_protocol_id_for_device("5")
        '88'

    """
    resolver = _DEFAULT_RESOLVER if config is None else build_resolver(config)
    return resolver.resolve(model_code)
