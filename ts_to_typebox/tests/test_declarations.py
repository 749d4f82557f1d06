import re
import unittest
from unittest import TestCase

from ts_to_typebox import generate, generate_result


def strip_whitespace(code: str) -> str:
    return re.sub(r"\s+", "", code)


class TestEnums(TestCase):
    """Test enum declarations"""

    def test_enum_and_reference(self):
        out = generate(
            """
            enum A {
              A,
              B,
            }
            type T = A;
            """
        )
        self.assertEqual(
            strip_whitespace(out),
            strip_whitespace(
                """
                import { Type, Static } from '@sinclair/typebox'
                enum AEnum { A, B }
                const A = Type.Enum(AEnum)
                type T = Static<typeof T>
                const T = A
                """
            ),
        )

    def test_enum_block_layout(self):
        out = generate("enum A { X }")
        self.assertIn("enum AEnum { X }\n\nconst A = Type.Enum(AEnum)", out)

    def test_enum_initializers(self):
        out = generate('export enum E { A = 1, B = "b" }')
        self.assertIn('export enum EEnum { A = 1, B = "b" }', out)
        self.assertIn("export const E = Type.Enum(EEnum)", out)

    def test_enum_alone_imports_type(self):
        out = generate("enum A { X }")
        self.assertTrue(out.startswith("import { Type, Static } from '@sinclair/typebox'"))


class TestExports(TestCase):
    """Test export qualifiers and the import header"""

    def test_exported_type(self):
        out = generate("export type T = string")
        self.assertIn("export type T = Static<typeof T>\nexport const T = Type.String()", out)

    def test_blank_line_between_blocks(self):
        out = generate("type A = string\ntype B = number")
        self.assertIn("const A = Type.String()\n\ntype B = Static<typeof B>", out)

    def test_no_import_without_declarations(self):
        out = generate("function f() {}")
        self.assertNotIn("import", out)

    def test_function_declaration_passes_through(self):
        result = generate_result("type T = string\nexport function f(a: number) { return a }")
        self.assertIn("export function f(a: number) { return a }", result.code)
        self.assertEqual(result.diagnostics, [])

    def test_import_statement_is_reported(self):
        result = generate_result("import { A } from './a'\ntype T = A")
        self.assertIn("import { A } from './a'", result.code)
        self.assertEqual([d.kind for d in result.diagnostics], ["unsupported-syntax"])

    def test_custom_module(self):
        from ts_to_typebox.pipeline import CodeGeneratorConfig, generate_result as core

        config = CodeGeneratorConfig(typebox_module="typebox")
        out = core("type T = string", config).code
        self.assertIn("import { Type, Static } from 'typebox'", out)


class TestGenerics(TestCase):
    """Test declarations with type parameters"""

    def test_generic_type_alias(self):
        out = generate("type Box<T> = { value: T }")
        self.assertIn("import { Type, Static, TSchema } from '@sinclair/typebox'", out)
        self.assertIn("type Box<T extends TSchema> = Static<ReturnType<typeof Box<T>>>", out)
        self.assertIn(
            strip_whitespace("const Box = <T extends TSchema>(T: T) => Type.Object({ value: T })"),
            strip_whitespace(out),
        )

    def test_several_parameters(self):
        out = generate("type Pair<A, B> = [A, B]")
        self.assertIn("type Pair<A extends TSchema, B extends TSchema> = Static<ReturnType<typeof Pair<A, B>>>", out)
        self.assertIn("const Pair = <A extends TSchema, B extends TSchema>(A: A, B: B) => Type.Tuple([A, B])", out)

    def test_generic_interface(self):
        out = generate("export interface Box<T> { value: T }")
        self.assertIn("export type Box<T extends TSchema> = Static<ReturnType<typeof Box<T>>>", out)
        self.assertIn(
            strip_whitespace("export const Box = <T extends TSchema>(T: T) => Type.Object({ value: T })"),
            strip_whitespace(out),
        )

    def test_instantiation(self):
        out = generate("type Box<T> = { value: T }\ntype N = Box<number>")
        self.assertIn("const N = Box(Type.Number())", out)

    def test_non_generic_file_has_no_tschema(self):
        out = generate("type T = string")
        self.assertNotIn("TSchema", out)


class TestHeritage(TestCase):
    """Test interfaces extending other types"""

    def test_single_base(self):
        out = generate("interface B { b: number }\ninterface A extends B { a: string }")
        self.assertIn(
            strip_whitespace("const A = Type.Intersect([B, Type.Object({ a: Type.String() })])"),
            strip_whitespace(out),
        )

    def test_several_bases_in_one_clause(self):
        out = generate("interface A extends B, C<X> { a: string }")
        self.assertIn(
            strip_whitespace("const A = Type.Intersect([Type.Intersect([B, C(X)]), Type.Object({ a: Type.String() })])"),
            strip_whitespace(out),
        )

    def test_no_heritage(self):
        out = generate("interface A { a: string }")
        self.assertNotIn("Intersect", out)

    def test_empty_interface(self):
        out = generate("interface A {}")
        self.assertIn("const A = Type.Object({})", out)


class TestNamespaces(TestCase):
    """Test namespace and module declarations"""

    def test_exported_namespace(self):
        out = generate("export namespace NS {\n  export type A = string\n}")
        self.assertIn(
            "export namespace NS {\n  export type A = Static<typeof A>\n  export const A = Type.String()\n}",
            out,
        )

    def test_plain_namespace(self):
        out = generate("namespace NS { type A = number; type B = A }")
        self.assertEqual(
            strip_whitespace(out),
            strip_whitespace(
                """
                import { Type, Static } from '@sinclair/typebox'
                namespace NS {
                  type A = Static<typeof A>
                  const A = Type.Number()
                  type B = Static<typeof B>
                  const B = A
                }
                """
            ),
        )

    def test_nested_namespace(self):
        out = generate("namespace Outer { namespace Inner { type A = string } }")
        self.assertIn("namespace Outer {", out)
        self.assertIn("  namespace Inner {", out)
        self.assertIn("    const A = Type.String()", out)

    def test_qualified_reference(self):
        out = generate("namespace NS { export type A = string }\ntype T = NS.A")
        self.assertIn("const T = NS.A", out)


if __name__ == "__main__":
    unittest.main()
