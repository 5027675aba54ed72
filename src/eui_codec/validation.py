"""Syntax predicates for Device IDs and EUIs.

Both accept any object and answer False for anything that is not a string of
the right shape; they never raise.
"""

from __future__ import annotations

from eui_codec.const import DEVICE_ID_SIZE, EUI_SIZE
from eui_codec.identifiers import DEVICE_ID_PATTERN, EUI_PATTERN

__all__ = ["is_valid_device_id", "is_valid_eui"]


def is_valid_device_id(device_id: object) -> bool:
    """Return True if device_id is a DDDD.DDDDDDDD.DDDD string.

    Example:
        >>> is_valid_device_id("1234.00567890.2021")
        True
        >>> is_valid_device_id("1234.567890.2021")
        False

    """
    if not isinstance(device_id, str) or len(device_id) != DEVICE_ID_SIZE:
        return False
    return DEVICE_ID_PATTERN.fullmatch(device_id) is not None


def is_valid_eui(eui: object) -> bool:
    """Return True if eui is a 16 character hex string (any case).

    Example:
        >>> is_valid_eui("001A798863000001")
        True
        >>> is_valid_eui(0x001A798863000001)
        False

    """
    if not isinstance(eui, str) or len(eui) != EUI_SIZE:
        return False
    return EUI_PATTERN.fullmatch(eui) is not None
