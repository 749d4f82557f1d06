import re

from ts_to_typebox import generate, generate_result


def strip_whitespace(code: str) -> str:
    return re.sub(r"\s+", "", code)


def assert_generates(source: str, expected: str):
    out = generate(source)
    assert strip_whitespace(expected) in strip_whitespace(out), out


class TestUnionsAndIntersections:
    """Test member ordering of unions, intersections and tuples"""

    def test_union_of_references(self):
        assert_generates(
            """
            type A = number;
            type B = string;
            type T = A | B;
            """,
            "const T = Type.Union([A, B])",
        )

    def test_union_keeps_duplicates(self):
        assert_generates('type T = "a" | "a"', 'const T = Type.Union([Type.Literal("a"), Type.Literal("a")])')

    def test_union_is_flat_and_ordered(self):
        assert_generates(
            'type T = "c" | "a" | "b"',
            'const T = Type.Union([Type.Literal("c"), Type.Literal("a"), Type.Literal("b")])',
        )

    def test_parenthesized_union_stays_nested(self):
        assert_generates("type T = A | (B | C)", "const T = Type.Union([A, Type.Union([B, C])])")

    def test_intersection(self):
        assert_generates(
            """
            type T = {
              x: number;
            } & {
              y: string;
            };
            """,
            """
            const T = Type.Intersect([
              Type.Object({ x: Type.Number() }),
              Type.Object({ y: Type.String() })
            ])
            """,
        )

    def test_intersection_of_three(self):
        assert_generates("type T = A & B & C", "const T = Type.Intersect([A, B, C])")

    def test_tuple(self):
        assert_generates("type T = [number, null]", "const T = Type.Tuple([Type.Number(), Type.Null()])")

    def test_tuple_order(self):
        assert_generates(
            "type T = [string, number, boolean]",
            "const T = Type.Tuple([Type.String(), Type.Number(), Type.Boolean()])",
        )

    def test_array_of_union(self):
        assert_generates("type T = (A | B)[]", "const T = Type.Array(Type.Union([A, B]))")


class TestObjects:
    """Test object literal types"""

    def test_object(self):
        assert_generates(
            """
            type T = {
              a: number;
              b: string;
            };
            """,
            "const T = Type.Object({ a: Type.Number(), b: Type.String() })",
        )

    def test_object_is_indented(self):
        out = generate("type T = { a: { b: string } }")
        assert "const T = Type.Object({\n  a: Type.Object({\n    b: Type.String()\n  })\n})" in out

    def test_empty_object(self):
        assert_generates("type T = {}", "const T = Type.Object({})")

    def test_quoted_property_name(self):
        assert_generates('type T = { "a-b": string }', 'const T = Type.Object({ "a-b": Type.String() })')

    def test_missing_annotation_is_any(self):
        assert_generates("interface T { a }", "const T = Type.Object({ a: Type.Any() })")


class TestOperators:
    """Test keyof, utility types, functions and conditionals"""

    def test_keyof(self):
        assert_generates(
            "type T = keyof { x: number; y: string }",
            "const T = Type.KeyOf(Type.Object({ x: Type.Number(), y: Type.String() }))",
        )

    def test_record(self):
        assert_generates("type T = Record<string, number>", "const T = Type.Record(Type.String(), Type.Number())")

    def test_partial(self):
        assert_generates(
            "type T = Partial<{ a: 1; b: 2 }>",
            "const T = Type.Partial(Type.Object({ a: Type.Literal(1), b: Type.Literal(2) }))",
        )

    def test_pick(self):
        assert_generates(
            'type T = Pick<{ a: 1; b: 2 }, "a">',
            'const T = Type.Pick(Type.Object({ a: Type.Literal(1), b: Type.Literal(2) }), Type.Literal("a"))',
        )

    def test_omit(self):
        assert_generates(
            'type T = Omit<{ a: 1; b: 2 }, "a">',
            'const T = Type.Omit(Type.Object({ a: Type.Literal(1), b: Type.Literal(2) }), Type.Literal("a"))',
        )

    def test_required(self):
        assert_generates(
            "type T = Required<{ a?: 1; b?: 2 }>",
            "const T = Type.Required(Type.Object({ a: Type.Optional(Type.Literal(1)), b: Type.Optional(Type.Literal(2)) }))",
        )

    def test_promise(self):
        assert_generates("type T = Promise<string>", "const T = Type.Promise(Type.String())")

    def test_function_type(self):
        assert_generates(
            "type F = (a: string, b: number) => void",
            "const F = Type.Function([Type.String(), Type.Number()], Type.Void())",
        )

    def test_constructor_type(self):
        assert_generates(
            "type C = new (a: string) => Foo",
            "const C = Type.Constructor([Type.String()], Foo)",
        )

    def test_conditional_type(self):
        assert_generates(
            "type C = A extends string ? number : boolean",
            "const C = Type.Extends(A, Type.String(), Type.Number(), Type.Boolean())",
        )

    def test_readonly_array(self):
        assert_generates("type T = readonly number[]", "const T = Type.Readonly(Type.Array(Type.Number()))")

    def test_user_generic_instantiation(self):
        assert_generates("type T = Box<string>", "const T = Box(Type.String())")

    def test_qualified_reference(self):
        assert_generates("type T = Api.Id", "const T = Api.Id")


class TestUnsupportedSyntax:
    """Test verbatim passthrough of unsupported syntax"""

    def test_type_query_passes_through(self):
        result = generate_result("type T = typeof x")
        assert "const T = typeof x" in result.code
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].kind == "unsupported-syntax"
        assert result.diagnostics[0].line == 1

    def test_rest_of_file_continues(self):
        result = generate_result("type T = typeof x\ntype U = string")
        assert "const U = Type.String()" in result.code
