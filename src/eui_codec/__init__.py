"""Device ID / EUI-64 identifier codec.

Public API:
- Validation predicates (is_valid_device_id, is_valid_eui)
- Protocol resolution (get_protocol_id_for_device)
- Conversions (encode_device_id_to_eui, decode_eui_to_device_id)
- Configurable codec (EuiCodec, CodecConfig)
"""

__version__ = "0.1.0"

from eui_codec.codec import (
    EuiCodec,
    decode_eui_to_device_id,
    encode_device_id_to_eui,
    get_model_code_from_device_id,
    get_protocol_id_for_device,
)
from eui_codec.config import CodecConfig, ProtocolResolution, load_config
from eui_codec.validation import is_valid_device_id, is_valid_eui

__all__ = [
    "CodecConfig",
    "EuiCodec",
    "ProtocolResolution",
    "__version__",
    "decode_eui_to_device_id",
    "encode_device_id_to_eui",
    "get_model_code_from_device_id",
    "get_protocol_id_for_device",
    "is_valid_device_id",
    "is_valid_eui",
    "load_config",
]
