"""
TypeScript source parser.

Phase 1 of the pipeline: parse TypeScript declarations into a tree-sitter
syntax tree. The rest of the pipeline navigates the tree through the
helpers defined here (node text slicing, named-child filtering).
"""

from __future__ import annotations

from dataclasses import dataclass

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser, Tree

from ...errors import SourceParseError

TYPESCRIPT_LANGUAGE = Language(ts_typescript.language_typescript())

# Extras that may appear between any two tokens
COMMENT_NODE_TYPES = {"comment", "html_comment"}


@dataclass
class SourceFile:
    """A parsed TypeScript source file."""

    text: str
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node


class TypeScriptParser:
    """Parses TypeScript source code using tree-sitter."""

    def __init__(self):
        self._parser = Parser(TYPESCRIPT_LANGUAGE)

    def parse(self, code: str) -> SourceFile:
        """Parse TypeScript source code into a tree-sitter tree.

        Args:
            code: TypeScript source code string

        Returns:
            SourceFile wrapping the tree

        Raises:
            SourceParseError: If the code cannot be parsed
        """
        tree = self._parser.parse(bytes(code, "utf8"))

        if tree.root_node.has_error:
            errors = find_errors(tree.root_node)
            if errors:
                first_error = errors[0]
                line = first_error.start_point[0] + 1
                snippet = node_text(first_error)[:50]
                raise SourceParseError(
                    f"Failed to parse TypeScript code at line {line}: syntax error near '{snippet}'",
                    line=line,
                )
            raise SourceParseError("Failed to parse TypeScript code")

        return SourceFile(text=code, tree=tree)

    def is_valid(self, code: str) -> bool:
        """Check whether the code parses without syntax errors."""
        return not self._parser.parse(bytes(code, "utf8")).root_node.has_error


def find_errors(node: Node) -> list[Node]:
    """Find ERROR and MISSING nodes in document order."""
    errors: list[Node] = []
    if node.type == "ERROR" or node.is_missing:
        errors.append(node)
        return errors
    for child in node.children:
        if child.has_error or child.is_missing:
            errors.extend(find_errors(child))
    return errors


def node_text(node: Node) -> str:
    """Return the original source text of a node."""
    return node.text.decode("utf8")


def node_line(node: Node) -> int:
    """Return the 1-based line a node starts on."""
    return node.start_point[0] + 1


def named_children(node: Node) -> list[Node]:
    """Return the named children of a node, skipping comments."""
    return [child for child in node.named_children if child.type not in COMMENT_NODE_TYPES]


def has_token(node: Node, token: str) -> bool:
    """Check whether a node has an anonymous child token (e.g. 'readonly', '?')."""
    return any(not child.is_named and child.type == token for child in node.children)


def preceding_comment(node: Node) -> Node | None:
    """Return the comment immediately preceding a node, if any."""
    sibling = node.prev_sibling
    if sibling is not None and sibling.type in COMMENT_NODE_TYPES:
        return sibling
    return None
