"""Identifier structures for Device IDs and EUI-64 addresses.

Device ID layout (18 characters, decimal):
- Characters 0-3: model code
- Character 4: "." separator
- Characters 5-6: serial prefix (conventionally "00", not checked)
- Characters 7-12: serial number
- Character 13: "." separator
- Characters 14-15: century (conventionally "20", not checked)
- Characters 16-17: two-digit year

EUI layout (16 characters, hexadecimal):
- Characters 0-5: organization ID
- Characters 6-7: protocol ID
- Characters 8-9: year
- Characters 10-15: serial number
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from eui_codec.const import (
    DEVICE_ID_CENTURY,
    DEVICE_ID_SERIAL_PREFIX,
    DEVICE_ID_SIZE,
    EUI_ORGANIZATION_ID_LENGTH,
    EUI_PROTOCOL_ID_LENGTH,
    EUI_SERIAL_HEX_LENGTH,
    EUI_SIZE,
    EUI_YEAR_HEX_LENGTH,
    SERIAL_DIGITS,
    YEAR_DIGITS,
)
from eui_codec.exceptions import MalformedDeviceIdError, MalformedEuiError

DEVICE_ID_PATTERN = re.compile(r"(\d{4})\.(\d{2})(\d{6})\.(\d{2})(\d{2})", re.ASCII)
EUI_PATTERN = re.compile(r"[0-9a-f]{16}", re.IGNORECASE)

# EUI field offsets
_PROTOCOL_START = EUI_ORGANIZATION_ID_LENGTH
_YEAR_START = _PROTOCOL_START + EUI_PROTOCOL_ID_LENGTH
_SERIAL_START = _YEAR_START + EUI_YEAR_HEX_LENGTH


@dataclass(frozen=True)
class DeviceIdParts:
    """A Device ID split into its segments.

    Attributes:
        model_code: 4-digit model code
        serial_prefix: First two digits of the serial block
        serial: Last six digits of the serial block
        century: First two digits of the year block
        year: Last two digits of the year block

    """

    model_code: str
    serial_prefix: str
    serial: str
    century: str
    year: str

    @classmethod
    def parse(cls, device_id: object) -> DeviceIdParts:
        """Split a Device ID into its segments.

        Raises:
            MalformedDeviceIdError: If the input is not a DDDD.DDDDDDDD.DDDD string

        """
        if not isinstance(device_id, str):
            raise MalformedDeviceIdError("not_a_string", device_id)
        if len(device_id) != DEVICE_ID_SIZE:
            raise MalformedDeviceIdError("wrong_length", device_id)

        match = DEVICE_ID_PATTERN.fullmatch(device_id)
        if match is None:
            raise MalformedDeviceIdError("pattern_mismatch", device_id)

        model_code, serial_prefix, serial, century, year = match.groups()
        return cls(model_code, serial_prefix, serial, century, year)

    @classmethod
    def from_numbers(cls, model_code: str, serial_number: int, year: int) -> DeviceIdParts:
        """Build the canonical Device ID parts ("00" serial prefix, "20" century)."""
        return cls(
            model_code=model_code,
            serial_prefix=DEVICE_ID_SERIAL_PREFIX,
            serial=str(serial_number).rjust(SERIAL_DIGITS, "0"),
            century=DEVICE_ID_CENTURY,
            year=str(year).rjust(YEAR_DIGITS, "0"),
        )

    @property
    def serial_number(self) -> int:
        return int(self.serial, 10)

    @property
    def year_number(self) -> int:
        return int(self.year, 10)

    def __str__(self) -> str:
        return f"{self.model_code}.{self.serial_prefix}{self.serial}.{self.century}{self.year}"


@dataclass(frozen=True)
class EuiFields:
    """An EUI split into its four fixed-width hex fields (lowercase).

    Attributes:
        organization_id: 6 hex characters
        protocol_id: 2 hex characters
        year_hex: 2 hex characters, 0-99 in well-formed EUIs
        serial_hex: 6 hex characters, 0-999999 in well-formed EUIs

    """

    organization_id: str
    protocol_id: str
    year_hex: str
    serial_hex: str

    @classmethod
    def parse(cls, eui: object) -> EuiFields:
        """Split an EUI into its fields.

        Raises:
            MalformedEuiError: If the input is not a 16 character hex string

        """
        if not isinstance(eui, str):
            raise MalformedEuiError("not_a_string", eui)
        if len(eui) != EUI_SIZE:
            raise MalformedEuiError("wrong_length", eui)
        if EUI_PATTERN.fullmatch(eui) is None:
            raise MalformedEuiError("not_hex", eui)

        eui = eui.lower()
        return cls(
            organization_id=eui[:_PROTOCOL_START],
            protocol_id=eui[_PROTOCOL_START:_YEAR_START],
            year_hex=eui[_YEAR_START:_SERIAL_START],
            serial_hex=eui[_SERIAL_START:],
        )

    @classmethod
    def from_numbers(cls, organization_id: str, protocol_id: str, year: int, serial_number: int) -> EuiFields:
        """Render numeric year and serial as zero-padded lowercase hex fields."""
        return cls(
            organization_id=organization_id.lower(),
            protocol_id=protocol_id.lower(),
            year_hex=f"{year:0{EUI_YEAR_HEX_LENGTH}x}",
            serial_hex=f"{serial_number:0{EUI_SERIAL_HEX_LENGTH}x}",
        )

    @property
    def prefix(self) -> str:
        """Organization ID followed by protocol ID."""
        return f"{self.organization_id}{self.protocol_id}"

    @property
    def year(self) -> int:
        return int(self.year_hex, 16)

    @property
    def serial_number(self) -> int:
        return int(self.serial_hex, 16)

    def __str__(self) -> str:
        return f"{self.prefix}{self.year_hex}{self.serial_hex}"
