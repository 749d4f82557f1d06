"""
Analyzer module.

Contains the syntax tree visitor, self-reference detection, documentation
tag extraction, indexed-access resolution and IR building.
"""

from __future__ import annotations

from .context import DeclarationRegistry, Diagnostic, DiagnosticKind, GenerationContext
from .ir_nodes import (
    Call,
    EnumDeclaration,
    Expr,
    NamespaceDeclaration,
    RawDeclaration,
    SourceModule,
    TypeDeclaration,
)
from .visitor import TypeBoxVisitor

__all__ = [
    "Call",
    "Expr",
    "TypeDeclaration",
    "EnumDeclaration",
    "NamespaceDeclaration",
    "RawDeclaration",
    "SourceModule",
    "Diagnostic",
    "DiagnosticKind",
    "DeclarationRegistry",
    "GenerationContext",
    "TypeBoxVisitor",
]
