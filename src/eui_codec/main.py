"""Command line front end for the identifier codec.

Examples:
    eui-codec to-eui 1234.00000001.2099
    eui-codec to-device-id 1234 001a798863000001
    eui-codec --protocol-resolution fixed to-eui 5001.00000001.2099
    eui-codec inspect 001a79a863000001

"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from eui_codec.codec import EuiCodec
from eui_codec.config import CodecConfig, ProtocolResolution, load_config
from eui_codec.const import EUI_CODEC_DEBUG, EUI_CODEC_VERSION
from eui_codec.diagnostics import CollectingDiagnosticObserver
from eui_codec.exceptions import ConfigurationError
from eui_codec.logging_abstraction import get_logger
from eui_codec.validation import is_valid_device_id, is_valid_eui

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_CONFIG_ERROR = 2
EXIT_BLOCKED = 3

_PACKAGE_LOGGERS = (
    "eui_codec.codec",
    "eui_codec.config",
    "eui_codec.diagnostics",
    __name__,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eui-codec",
        description="Convert between Device IDs (MMMM.NNNNNNNN.YYYY) and EUI-64 addresses",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {EUI_CODEC_VERSION}")
    parser.add_argument(
        "-D",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to a YAML codec configuration file")
    parser.add_argument(
        "--protocol-resolution",
        choices=[mode.value for mode in ProtocolResolution],
        default=None,
        help="Pick the protocol ID by model code or use one fixed protocol",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    to_eui = commands.add_parser("to-eui", help="Convert a Device ID to an EUI")
    to_eui.add_argument("device_id", help="Device ID, e.g. 1234.00000001.2099")

    to_device_id = commands.add_parser("to-device-id", help="Convert an EUI to a Device ID")
    to_device_id.add_argument("model_code", help="Device model code, e.g. 1234")
    to_device_id.add_argument("eui", help="16 hex character EUI")
    to_device_id.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of warning when the EUI prefix or fields don't match",
    )

    inspect = commands.add_parser("inspect", help="Show the fields of an EUI")
    inspect.add_argument("eui", help="16 hex character EUI")

    return parser


def _enable_debug() -> None:
    for name in _PACKAGE_LOGGERS:
        get_logger(name).set_level(logging.DEBUG)
    logger.debug("Debug logging enabled")


def _load_config(args: argparse.Namespace) -> CodecConfig:
    config = load_config(args.config)
    if args.protocol_resolution:
        config = config.with_overrides(protocol_resolution=args.protocol_resolution)
    return config


def _to_eui(codec: EuiCodec, args: argparse.Namespace) -> int:
    device_id = args.device_id.strip()
    if not is_valid_device_id(device_id):
        print(f"error: invalid Device ID {device_id!r}, expected DDDD.DDDDDDDD.DDDD", file=sys.stderr)
        return EXIT_INVALID_INPUT

    eui = codec.encode(device_id)
    if eui is None:
        return EXIT_INVALID_INPUT
    print(eui)
    return EXIT_OK


def _to_device_id(codec: EuiCodec, collector: CollectingDiagnosticObserver, args: argparse.Namespace) -> int:
    model_code = args.model_code.strip()
    eui = args.eui.strip()

    if not model_code:
        print("error: model code is required", file=sys.stderr)
        return EXIT_INVALID_INPUT
    if not is_valid_eui(eui):
        print(f"error: invalid EUI {eui!r}, expected 16 hexadecimal characters", file=sys.stderr)
        return EXIT_INVALID_INPUT

    device_id = codec.decode(model_code, eui)
    if device_id is None:
        return EXIT_INVALID_INPUT

    for diagnostic in collector.diagnostics:
        print(f"warning: {diagnostic.message}", file=sys.stderr)
    if args.strict and len(collector):
        logger.error(
            "Decode blocked by strict mode",
            extra={"diagnostics": [d.kind.value for d in collector.diagnostics]},
        )
        return EXIT_BLOCKED

    print(device_id)
    return EXIT_OK


def _inspect(codec: EuiCodec, args: argparse.Namespace) -> int:
    fields = codec.inspect_eui(args.eui.strip())
    if fields is None:
        print(f"error: invalid EUI {args.eui.strip()!r}, expected 16 hexadecimal characters", file=sys.stderr)
        return EXIT_INVALID_INPUT

    config = codec.config
    protocol_names = {
        config.general_protocol_id: "general",
        config.ultrasonic_protocol_id: "ultrasonic",
    }
    organization_note = "" if fields.organization_id == config.organization_id else " (unexpected)"

    print(f"organization_id: {fields.organization_id}{organization_note}")
    print(f"protocol_id: {fields.protocol_id} ({protocol_names.get(fields.protocol_id, 'unknown')})")
    print(f"year: {fields.year} (0x{fields.year_hex})")
    print(f"serial_number: {fields.serial_number} (0x{fields.serial_hex})")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the eui-codec command."""
    args = build_parser().parse_args(argv)

    if args.debug or EUI_CODEC_DEBUG:
        _enable_debug()

    try:
        config = _load_config(args)
    except ConfigurationError as e:
        logger.error("Configuration rejected", extra={"source": e.source, "reason": e.reason})
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    collector = CollectingDiagnosticObserver()
    codec = EuiCodec(config, observers=[collector])
    logger.debug("Codec ready", extra={"codec": repr(codec), "command": args.command})

    if args.command == "to-eui":
        return _to_eui(codec, args)
    if args.command == "to-device-id":
        return _to_device_id(codec, collector, args)
    return _inspect(codec, args)


if __name__ == "__main__":
    sys.exit(main())
