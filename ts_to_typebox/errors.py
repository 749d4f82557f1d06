"""
Exception types raised by the ts2typebox pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pipeline.analyzer.context import Diagnostic


class Ts2TypeboxError(Exception):
    """Base class for all ts2typebox errors."""

    pass


class SourceParseError(Ts2TypeboxError):
    """Raised when the TypeScript input cannot be parsed.

    Malformed input fails the whole generation call; no partial output
    is produced.
    """

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.line = line


class GenerationError(Ts2TypeboxError):
    """Raised in strict mode when generation recorded node-local diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]):
        self.diagnostics = list(diagnostics)
        lines = [f"  line {d.line}: [{d.kind}] {d.message}" for d in self.diagnostics]
        super().__init__("Generation produced diagnostics:\n" + "\n".join(lines))


class FormatterError(Ts2TypeboxError):
    """Raised when the external formatter rejects the generated code."""

    pass


class CodeWriteError(Ts2TypeboxError):
    """Raised when generated code fails validation before being written."""

    pass
