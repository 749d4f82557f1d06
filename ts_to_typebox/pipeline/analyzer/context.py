"""
Traversal context for one generation call.

Everything that the visitor accumulates while walking a file lives
here: the declaration registry used by indexed-access resolution, the
import flags and the node-local diagnostics. A new context is created
for every call, so concurrent generations never share state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...logging import get_logger
from .ir_nodes import Expr

logger = get_logger("analyzer")


class DiagnosticKind:
    """Kinds of node-local, non-fatal problems."""

    UNSUPPORTED_SYNTAX = "unsupported-syntax"
    INDEXED_ACCESS = "indexed-access"
    OPTIONS_IGNORED = "options-ignored"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while generating one node."""

    kind: str = ""
    message: str = ""
    node_type: str = ""
    line: int = 0


class DeclarationRegistry:
    """Expressions of already generated top-level, non-generic declarations."""

    def __init__(self):
        self._expressions: dict[str, Expr] = {}

    def register(self, name: str, expr: Expr) -> None:
        self._expressions[name] = expr

    def get(self, name: str) -> Expr | None:
        return self._expressions.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._expressions

    def __len__(self) -> int:
        return len(self._expressions)


@dataclass
class GenerationContext:
    """State scoped to a single generation call."""

    registry: DeclarationRegistry = field(default_factory=DeclarationRegistry)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    # Import flags
    uses_typebox: bool = False
    uses_generics: bool = False

    def report(self, kind: str, message: str, node_type: str = "", line: int = 0) -> None:
        """Record a diagnostic and log it."""
        self.diagnostics.append(Diagnostic(kind=kind, message=message, node_type=node_type, line=line))
        logger.warning("line %d: %s", line, message)
