"""
Self-reference detection.

A type alias or interface whose body mentions its own name needs to be
wrapped in `Type.Recursive(Name => ...)`.
"""

from __future__ import annotations

from tree_sitter import Node

from ..source_ast.parser import named_children, node_text


def _is_type_reference(node: Node) -> bool:
    """Check whether a type_identifier is used as a plain type reference."""
    if node.type != "type_identifier":
        return False
    parent = node.parent
    if parent is None:
        return True
    # `List<T>` and `NS.T` are references whose text is not the bare name
    if parent.type in ("generic_type", "nested_type_identifier"):
        return False
    # Type parameter names are declarations, not references
    if parent.type == "type_parameter" and parent.child_by_field_name("name") == node:
        return False
    return True


def _references(node: Node, name: str) -> bool:
    if _is_type_reference(node) and node_text(node) == name:
        return True
    return any(_references(child, name) for child in node.children)


def is_recursive_type(declaration: Node) -> bool:
    """Decide whether a declaration's body references the declaration itself.

    For a type alias the aliased type is searched, for an interface its
    members. Matching is purely textual: a nested declaration that shadows
    the name is still reported as a self-reference.
    """
    name_node = declaration.child_by_field_name("name")
    if name_node is None:
        return False
    name = node_text(name_node)

    if declaration.type == "type_alias_declaration":
        value = declaration.child_by_field_name("value")
        return value is not None and _references(value, name)

    body = declaration.child_by_field_name("body")
    if body is None:
        return False
    return any(_references(member, name) for member in named_children(body))
