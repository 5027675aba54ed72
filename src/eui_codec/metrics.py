"""Prometheus counters for codec activity.

Counters live in the default registry; exposing them is left to the embedding
application.
"""

from typing import Final

from prometheus_client import Counter  # type: ignore[import-untyped]

__all__ = [
    "eui_codec_conversions_total",
    "eui_codec_diagnostics_total",
    "record_conversion",
    "record_diagnostic",
]

eui_codec_conversions_total: Final = Counter(  # type: ignore[assignment]
    "eui_codec_conversions_total",
    "Total identifier conversions",
    ["direction", "outcome"],
)

eui_codec_diagnostics_total: Final = Counter(  # type: ignore[assignment]
    "eui_codec_diagnostics_total",
    "Total non-fatal diagnostics reported while decoding",
    ["kind"],
)


def record_conversion(direction: str, outcome: str) -> None:
    """Record a conversion attempt.

    Args:
        direction: "encode" or "decode"
        outcome: "success" or the failure reason (e.g. "pattern_mismatch")
    """
    eui_codec_conversions_total.labels(direction=direction, outcome=outcome).inc()


def record_diagnostic(kind: str) -> None:
    """Record a reported diagnostic."""
    eui_codec_diagnostics_total.labels(kind=kind).inc()
