"""
Shared fixtures for codec unit tests.
"""

import pytest

from eui_codec.codec import EuiCodec
from eui_codec.config import CodecConfig, ProtocolResolution
from eui_codec.diagnostics import CollectingDiagnosticObserver

CODEC_ENV_VARS = (
    "EUI_CODEC_ORGANIZATION_ID",
    "EUI_CODEC_GENERAL_PROTOCOL_ID",
    "EUI_CODEC_ULTRASONIC_PROTOCOL_ID",
    "EUI_CODEC_ULTRASONIC_MODEL_CODES",
    "EUI_CODEC_PROTOCOL_RESOLUTION",
    "EUI_CODEC_FIXED_PROTOCOL_ID",
)


@pytest.fixture(autouse=True)
def clean_codec_env(monkeypatch):
    """Keep EUI_CODEC_* variables from the developer's shell out of config loading."""
    for name in CODEC_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def collector():
    """Diagnostic observer that records everything it is sent."""
    return CollectingDiagnosticObserver()


@pytest.fixture
def codec(collector):
    """
    Codec with default constants and model-table protocol resolution.

    Diagnostics go to the collector fixture only.
    """
    return EuiCodec(CodecConfig(), observers=[collector])


@pytest.fixture
def fixed_codec(collector):
    """Codec that uses the general protocol ID for every device."""
    config = CodecConfig(protocol_resolution=ProtocolResolution.FIXED)
    return EuiCodec(config, observers=[collector])
