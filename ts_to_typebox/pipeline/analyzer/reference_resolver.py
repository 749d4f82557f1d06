"""
Reference resolver for indexed access types.

Resolves `Base["key"]` and `Base["a"]["b"]` against the expressions of
declarations that were generated earlier in the same file.
"""

from __future__ import annotations

from tree_sitter import Node

from ...utils import unquote
from ..source_ast.parser import named_children, node_line, node_text
from .context import DiagnosticKind, GenerationContext
from .ir_nodes import Expr, ObjectLiteral, Raw, children

# Sentinel emitted when the indexed type cannot be resolved at all
INDEXED_ACCESS_ERROR = "IndexedAccessTypeError"

# Sentinel emitted when the resolved type has no such property
ATTRIBUTE_NOT_FOUND = "IndexedAccessTypeAttributeNotFound"

# Node types that name a declaration directly
_REFERENCE_TYPES = {"type_identifier", "nested_type_identifier", "generic_type"}


def collect_fields(expr: Expr) -> dict[str, Expr]:
    """Build the property name -> expression map of a generated expression.

    Every object literal reachable through call arguments, array items and
    recursive bodies contributes its properties; later ones overwrite
    earlier ones. Property values are not searched. Keys are unquoted.
    """
    fields: dict[str, Expr] = {}

    def walk(node: Expr) -> None:
        if isinstance(node, ObjectLiteral):
            for f in node.fields:
                if f.value is not None:
                    fields[unquote(f.name)] = f.value
            return
        for child in children(node):
            walk(child)

    walk(expr)
    return fields


class IndexedAccessResolver:
    """Resolves lookup_type nodes of depth 1 and 2."""

    def __init__(self, context: GenerationContext):
        """
        Initialize the resolver.

        Args:
            context: The generation context holding the declaration registry
        """
        self.context = context

    def resolve(self, node: Node) -> Expr:
        """
        Resolve an indexed access node to the expression of the indexed property.

        Failures are node-local: a diagnostic is recorded and a sentinel
        expression is returned.

        Args:
            node: A lookup_type node

        Returns:
            The resolved expression, or a Raw sentinel
        """
        base, _key = self._split(node)
        if base.type in _REFERENCE_TYPES:
            return self._resolve_depth1(node)
        if base.type == "lookup_type":
            inner_base, _ = self._split(base)
            if inner_base.type in _REFERENCE_TYPES:
                return self._resolve_depth2(node)
        return self._fail(node, "Only indexed access types of depth 1 and 2 are supported.")

    def _split(self, node: Node) -> tuple[Node, Node]:
        base, key = named_children(node)[:2]
        return base, key

    def _resolve_depth1(self, node: Node) -> Expr:
        """Resolve `Base["key"]`."""
        base, key = self._split(node)
        name = node_text(base)
        expr = self.context.registry.get(name)
        if expr is None:
            return self._fail(
                node,
                f"Error in IndexedAccessType. Expected the type '{name}' that was indexed to already have been generated.",
            )
        return self._lookup(node, expr, unquote(node_text(key)))

    def _resolve_depth2(self, node: Node) -> Expr:
        """Resolve `Base["a"]["b"]` by resolving `Base["a"]` first."""
        inner, key = self._split(node)
        expr = self._resolve_depth1(inner)
        if isinstance(expr, Raw) and expr.text in (INDEXED_ACCESS_ERROR, ATTRIBUTE_NOT_FOUND):
            return expr
        return self._lookup(node, expr, unquote(node_text(key)))

    def _lookup(self, node: Node, expr: Expr, attribute: str) -> Expr:
        fields = collect_fields(expr)
        if attribute not in fields:
            self.context.report(
                DiagnosticKind.INDEXED_ACCESS,
                f"Property '{attribute}' not found in '{node_text(node)}'.",
                node_type=node.type,
                line=node_line(node),
            )
            return Raw(ATTRIBUTE_NOT_FOUND)
        return fields[attribute]

    def _fail(self, node: Node, message: str) -> Expr:
        self.context.report(
            DiagnosticKind.INDEXED_ACCESS,
            message,
            node_type=node.type,
            line=node_line(node),
        )
        return Raw(INDEXED_ACCESS_ERROR)
