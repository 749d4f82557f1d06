import re
import unittest
from unittest import TestCase

from ts_to_typebox import generate
from ts_to_typebox.pipeline.analyzer.recursion import is_recursive_type
from ts_to_typebox.pipeline.source_ast import TypeScriptParser


def strip_whitespace(code: str) -> str:
    return re.sub(r"\s+", "", code)


def first_declaration(source):
    return TypeScriptParser().parse(source).root.named_children[0]


class TestRecursionDetection(TestCase):
    """Test self-reference detection on declarations"""

    def test_type_alias_self_reference(self):
        self.assertTrue(is_recursive_type(first_declaration("type T = { next?: T }")))

    def test_interface_self_reference(self):
        self.assertTrue(is_recursive_type(first_declaration("interface Node { children: Node[] }")))

    def test_no_self_reference(self):
        self.assertFalse(is_recursive_type(first_declaration("type T = { next?: U }")))

    def test_name_prefix_is_not_a_reference(self):
        self.assertFalse(is_recursive_type(first_declaration("type T = { next?: TT }")))

    def test_deep_reference(self):
        self.assertTrue(is_recursive_type(first_declaration("type T = { a: { b: Array<T | null> } }")))

    def test_qualified_name_is_not_a_self_reference(self):
        self.assertFalse(is_recursive_type(first_declaration("interface A { b: NS.A }")))


class TestRecursiveOutput(TestCase):
    """Test the fixed-point wrapper in generated code"""

    def test_type_alias(self):
        out = generate("type T = { next?: T }")
        self.assertIn(
            strip_whitespace("const T = Type.Recursive(T => Type.Object({ next: Type.Optional(T) }))"),
            strip_whitespace(out),
        )

    def test_interface(self):
        out = generate("interface Node { value: number; children: Node[] }")
        self.assertIn(
            strip_whitespace("const Node = Type.Recursive(Node => Type.Object({ value: Type.Number(), children: Type.Array(Node) }))"),
            strip_whitespace(out),
        )

    def test_static_line_is_unchanged(self):
        out = generate("type T = { next?: T }")
        self.assertIn("type T = Static<typeof T>", out)

    def test_non_recursive_is_not_wrapped(self):
        out = generate("type T = { next?: U }")
        self.assertNotIn("Recursive", out)

    def test_namespace_member_with_same_name(self):
        out = generate("namespace NS { export type A = string }\ninterface A { b: NS.A }")
        self.assertNotIn("Type.Recursive", out)
        self.assertIn(strip_whitespace("const A = Type.Object({ b: NS.A })"), strip_whitespace(out))


if __name__ == "__main__":
    unittest.main()
