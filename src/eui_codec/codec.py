"""Device ID <-> EUI encoder/decoder.

Encoding:
    1234.00000001.2099 -> 001a79 | 88 | 63 | 000001
    (organization, protocol for model 1234, hex(99), hex(1))

Decoding reverses the year and serial fields and always writes the "00"
serial prefix and "20" century, whatever the original Device ID contained.

The public conversion methods never raise for bad input; they return None and
leave the reporting to the caller. Prefix mismatches and out-of-range fields
are reported to diagnostic observers and decoding carries on.
"""

from __future__ import annotations

from collections.abc import Iterable

from eui_codec.config import CodecConfig
from eui_codec.const import MAX_SERIAL_NUMBER, MAX_YEAR
from eui_codec.diagnostics import (
    CodecDiagnostic,
    DiagnosticKind,
    DiagnosticObserver,
    LoggingDiagnosticObserver,
)
from eui_codec.exceptions import (
    IdentifierCodecError,
    MalformedDeviceIdError,
    MalformedEuiError,
    MissingModelCodeError,
)
from eui_codec.identifiers import DeviceIdParts, EuiFields
from eui_codec.logging_abstraction import get_logger
from eui_codec.metrics import record_conversion, record_diagnostic
from eui_codec.protocol_resolution import (
    ProtocolResolver,
    build_resolver,
    get_protocol_id_for_device,
    normalize_model_code,
)

__all__ = [
    "EuiCodec",
    "decode_eui_to_device_id",
    "encode_device_id_to_eui",
    "get_model_code_from_device_id",
    "get_protocol_id_for_device",
]

logger = get_logger(__name__)


class EuiCodec:
    """Identifier codec bound to one configuration.

    Instances hold only configuration, a resolver and observers; conversions
    themselves keep no state.
    """

    def __init__(
        self,
        config: CodecConfig | None = None,
        observers: Iterable[DiagnosticObserver] | None = None,
        resolver: ProtocolResolver | None = None,
    ) -> None:
        """Initialize codec.

        Args:
            config: Constants to use (defaults to the built-in ones)
            observers: Diagnostic observers; a logging observer is used when None
            resolver: Protocol resolver overriding the one chosen by config

        """
        self.config: CodecConfig = config or CodecConfig()
        self.resolver: ProtocolResolver = resolver or build_resolver(self.config)
        self.observers: list[DiagnosticObserver] = (
            list(observers) if observers is not None else [LoggingDiagnosticObserver()]
        )

    def register_observer(self, observer: DiagnosticObserver) -> None:
        self.observers.append(observer)
        logger.debug("Registered diagnostic observer: %s", observer.__class__.__name__)

    def protocol_id_for(self, model_code: object) -> str:
        """Protocol ID for a model code under this codec's resolution strategy."""
        return self.resolver.resolve(normalize_model_code(model_code)).lower()

    def expected_prefix(self, model_code: object) -> str:
        """Organization ID + protocol ID an EUI for this model should start with."""
        return f"{self.config.organization_id}{self.protocol_id_for(model_code)}"

    # ------------------------------------------------------------------
    # Device ID -> EUI
    # ------------------------------------------------------------------

    def encode_fields(self, device_id: object) -> EuiFields:
        """Encode a Device ID into EUI fields.

        Raises:
            MalformedDeviceIdError: If device_id is not a valid Device ID

        """
        parts = DeviceIdParts.parse(device_id)
        return EuiFields.from_numbers(
            organization_id=self.config.organization_id,
            protocol_id=self.protocol_id_for(parts.model_code),
            year=parts.year_number,
            serial_number=parts.serial_number,
        )

    def encode(self, device_id: object) -> str | None:
        """Convert a Device ID to a lowercase 16 character EUI.

        Returns:
            The EUI, or None if device_id is not a valid Device ID

        """
        try:
            fields = self.encode_fields(device_id)
        except MalformedDeviceIdError as e:
            logger.debug(
                "Device ID rejected",
                extra={"reason": e.reason, "value": e.value_preview},
            )
            record_conversion("encode", e.reason)
            return None

        eui = str(fields)
        logger.debug("Encoded Device ID", extra={"device_id": device_id, "eui": eui})
        record_conversion("encode", "success")
        return eui

    # ------------------------------------------------------------------
    # EUI -> Device ID
    # ------------------------------------------------------------------

    def decode_parts(self, model_code: object, eui: object) -> DeviceIdParts:
        """Decode an EUI into Device ID parts for the given model code.

        A prefix mismatch or an out-of-range field is reported to observers
        but does not stop decoding.

        Raises:
            MissingModelCodeError: If model_code is empty
            MalformedEuiError: If eui is not a valid EUI

        """
        if not model_code:
            raise MissingModelCodeError(model_code)
        fields = EuiFields.parse(eui)

        model = normalize_model_code(model_code)
        expected_prefix = self.expected_prefix(model)
        if fields.prefix != expected_prefix:
            self._report(
                CodecDiagnostic(
                    kind=DiagnosticKind.PREFIX_MISMATCH,
                    message=f"EUI doesn't start with expected prefix {expected_prefix} for device {model}",
                    context={
                        "model_code": model,
                        "expected_prefix": expected_prefix,
                        "actual_prefix": fields.prefix,
                        "eui": str(fields),
                    },
                ),
            )

        year = fields.year
        serial_number = fields.serial_number
        if year > MAX_YEAR or serial_number > MAX_SERIAL_NUMBER:
            self._report(
                CodecDiagnostic(
                    kind=DiagnosticKind.FIELD_OVERFLOW,
                    message=f"EUI {fields} holds year {year} / serial {serial_number} beyond Device ID range",
                    context={
                        "model_code": model,
                        "year": year,
                        "serial_number": serial_number,
                    },
                ),
            )

        return DeviceIdParts.from_numbers(model, serial_number, year)

    def decode(self, model_code: object, eui: object) -> str | None:
        """Convert an EUI back to a Device ID.

        Args:
            model_code: Device model code (not recoverable from the EUI)
            eui: 16 hex character EUI, any case

        Returns:
            The Device ID, or None if model_code is empty or eui is invalid

        """
        try:
            parts = self.decode_parts(model_code, eui)
        except (MissingModelCodeError, MalformedEuiError) as e:
            logger.debug(
                "EUI decode rejected",
                extra={"reason": e.reason, "value": e.value_preview},
            )
            record_conversion("decode", e.reason)
            return None

        device_id = str(parts)
        logger.debug("Decoded EUI", extra={"eui": eui, "device_id": device_id})
        record_conversion("decode", "success")
        return device_id

    def inspect_eui(self, eui: object) -> EuiFields | None:
        """Split an EUI into its fields, or None if it is not a valid EUI."""
        try:
            return EuiFields.parse(eui)
        except IdentifierCodecError:
            return None

    def _report(self, diagnostic: CodecDiagnostic) -> None:
        """Notify all observers of a diagnostic.

        Observer failures don't break decoding - errors are logged but ignored.
        """
        record_diagnostic(diagnostic.kind.value)
        for observer in self.observers:
            try:
                observer.on_diagnostic(diagnostic)
            except Exception as e:
                logger.exception("Observer error (%s): %s", observer.__class__.__name__, e)

    def __repr__(self) -> str:
        return f"EuiCodec(organization={self.config.organization_id}, resolver={self.resolver!r})"


_default_codec = EuiCodec()


def _codec_for(config: CodecConfig | None) -> EuiCodec:
    return _default_codec if config is None else EuiCodec(config)


def get_model_code_from_device_id(device_id: object) -> str | None:
    """Extract the model code from a Device ID, or None if the format is invalid."""
    try:
        return DeviceIdParts.parse(device_id).model_code
    except MalformedDeviceIdError:
        return None


def encode_device_id_to_eui(device_id: object, config: CodecConfig | None = None) -> str | None:
    """Convert a Device ID to an EUI using the default (or given) configuration.

    Example:
        >>> encode_device_id_to_eui("1234.00000001.2099")
        '001a798863000001'
        >>> encode_device_id_to_eui("bad") is None
        True

    """
    return _codec_for(config).encode(device_id)


def decode_eui_to_device_id(model_code: object, eui: object, config: CodecConfig | None = None) -> str | None:
    """Convert an EUI to a Device ID using the default (or given) configuration.

    Example:
        >>> decode_eui_to_device_id("1234", "001a798863000001")
        '1234.00000001.2099'
        >>> decode_eui_to_device_id("", "001a798863000001") is None
        True

    """
    return _codec_for(config).decode(model_code, eui)
