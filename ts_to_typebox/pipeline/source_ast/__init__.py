"""
Source AST module.

Parses TypeScript declarations into a navigable syntax tree.
"""

from __future__ import annotations

from .parser import SourceFile, TypeScriptParser, node_line, node_text

__all__ = [
    "SourceFile",
    "TypeScriptParser",
    "node_line",
    "node_text",
]
