"""Non-fatal diagnostics reported while decoding.

Decoding never stops on an integrity problem. Instead the codec hands a
CodecDiagnostic to each registered observer and carries on; the caller decides
whether to block, log or display it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from eui_codec.logging_abstraction import get_logger

__all__ = [
    "CodecDiagnostic",
    "CollectingDiagnosticObserver",
    "DiagnosticKind",
    "DiagnosticObserver",
    "LoggingDiagnosticObserver",
]

logger = get_logger(__name__)


class DiagnosticKind(StrEnum):
    PREFIX_MISMATCH = "prefix_mismatch"  # organization + protocol prefix differs from the expected one
    FIELD_OVERFLOW = "field_overflow"  # decoded year > 99 or serial > 999999


@dataclass(frozen=True)
class CodecDiagnostic:
    """A warning raised by the codec.

    Attributes:
        kind: What went wrong
        message: Human-readable description
        context: Structured details (model code, expected prefix, ...)

    """

    kind: DiagnosticKind
    message: str
    context: dict[str, object] = field(default_factory=dict)


class DiagnosticObserver(Protocol):
    """Type protocol for diagnostic observers. No inheritance required."""

    def on_diagnostic(self, diagnostic: CodecDiagnostic) -> None:
        """Called once per diagnostic.

        Args:
            diagnostic: The reported warning
        """
        ...


class LoggingDiagnosticObserver:
    """Logs every diagnostic as a warning."""

    def on_diagnostic(self, diagnostic: CodecDiagnostic) -> None:
        logger.warning(
            "%s",
            diagnostic.message,
            extra={"kind": diagnostic.kind.value, **diagnostic.context},
        )


class CollectingDiagnosticObserver:
    """Keeps diagnostics in memory for the caller to inspect."""

    def __init__(self) -> None:
        self.diagnostics: list[CodecDiagnostic] = []

    def on_diagnostic(self, diagnostic: CodecDiagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def of_kind(self, kind: DiagnosticKind) -> list[CodecDiagnostic]:
        return [d for d in self.diagnostics if d.kind is kind]

    def clear(self) -> None:
        self.diagnostics.clear()

    def __len__(self) -> int:
        return len(self.diagnostics)
