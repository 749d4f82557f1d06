import re

import pytest

from ts_to_typebox import generate, generate_result
from ts_to_typebox.pipeline.analyzer.ir_nodes import RawOption
from ts_to_typebox.pipeline.analyzer.jsdoc import discarded_tags, extract_schema_options, parse_tag_value


def strip_whitespace(code: str) -> str:
    return re.sub(r"\s+", "", code)


class TestTagValues:
    """Test parsing of a single tag value"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("100", 100),
            ("-1.5", -1.5),
            ("1e3", 1000.0),
            ("true", True),
            ("false", False),
            ("null", None),
            ('"it\'s a number"', "it's a number"),
            ("'single quoted'", "single quoted"),
            ('"with \\"escapes\\""', 'with "escapes"'),
            ("", True),
        ],
    )
    def test_literals(self, text, expected):
        assert parse_tag_value(text) == expected

    def test_number_is_not_a_string(self):
        value = parse_tag_value("100")
        assert isinstance(value, int)

    def test_trailing_text_after_literal_is_discarded(self):
        assert parse_tag_value('"it\'s a number" - strings must be quoted') == "it's a number"

    def test_non_literal_is_raw(self):
        assert parse_tag_value("Foo.bar") == RawOption("Foo.bar")
        assert parse_tag_value("100px") == RawOption("100px")
        assert parse_tag_value("unquoted words") == RawOption("unquoted words")


class TestExtractSchemaOptions:
    """Test extraction of all tags from a comment"""

    def test_no_comment(self):
        assert extract_schema_options(None) == {}

    def test_line_comment_is_ignored(self):
        assert extract_schema_options("// @minimum 1") == {}

    def test_block_comment_is_ignored(self):
        assert extract_schema_options("/* @minimum 1 */") == {}

    def test_source_order(self):
        options = extract_schema_options(
            """/**
             * Some prose that is not a tag.
             * @maximum 200
             * @minimum 100
             */"""
        )
        assert list(options.items()) == [("maximum", 200), ("minimum", 100)]

    def test_single_line(self):
        assert extract_schema_options("/** @minimum 0 */") == {"minimum": 0}

    def test_repeated_tag_last_wins(self):
        options = extract_schema_options("/**\n * @a 1\n * @b 2\n * @a 3\n */")
        assert list(options.items()) == [("a", 3), ("b", 2)]

    def test_tag_without_value(self):
        assert extract_schema_options("/** @deprecated */") == {"deprecated": True}

    def test_second_tag_on_line_is_discarded(self):
        assert extract_schema_options("/** @minimum 1 @maximum 2 */") == {"minimum": 1}
        assert discarded_tags("/** @minimum 1 @maximum 2 */") == ["maximum"]

    def test_discarded_tags_ignores_strings(self):
        assert discarded_tags('/** @description "see @other" */') == []
        assert discarded_tags("/**\n * @minimum 1\n * @maximum 2\n */") == []


class TestOptionsInOutput:
    """Test where options land in the generated code"""

    def test_numeric_option(self):
        out = generate(
            """
            type T = {
              /** @minimum 100 */
              a: number;
            };
            """
        )
        assert "a: Type.Number({ minimum: 100 })" in out

    def test_declaration_options(self):
        out = generate(
            """
            /**
             * @minimum 100
             * @description "it's a number" - strings must be quoted
             * @foobar "should support unknown props"
             */
            type T = number;
            """
        )
        assert 'const T = Type.Number({ minimum: 100, description: "it\'s a number", foobar: "should support unknown props" })' in out

    def test_exported_declaration_options(self):
        out = generate('/** @description "x" */\nexport type T = string')
        assert 'export const T = Type.String({ description: "x" })' in out

    def test_quotes_are_normalized(self):
        out = generate(
            """
            type T = {
              /**
               * @test "should be supported"
               * @anotherTest 'should be supported'
               */
              a: number;
            };
            """
        )
        assert 'Type.Number({ test: "should be supported", anotherTest: "should be supported" })' in out

    def test_options_inside_optional(self):
        out = generate("type T = {\n  /** @multipleOf 2 */\n  a?: number\n}")
        assert "a: Type.Optional(Type.Number({ multipleOf: 2 }))" in out

    def test_options_on_array(self):
        out = generate("type T = {\n  /**\n   * @minItems 2\n   * @maxItems 4\n   */\n  a: number[]\n}")
        assert "a: Type.Array(Type.Number(), { minItems: 2, maxItems: 4 })" in out

    def test_options_inside_readonly(self):
        out = generate("type T = {\n  /**\n   * @minItems 2\n   * @maxItems 4\n   */\n  a: readonly number[]\n}")
        assert "a: Type.Readonly(Type.Array(Type.Number(), { minItems: 2, maxItems: 4 }))" in out

    def test_options_on_union(self):
        out = generate("type T = {\n  /** @minItems 2 */\n  a: number | string\n}")
        assert "a: Type.Union([Type.Number(), Type.String()], { minItems: 2 })" in out

    def test_raw_value_is_unquoted(self):
        out = generate("/** @default Foo.bar */\ntype T = string")
        assert "Type.String({ default: Foo.bar })" in out

    def test_dollar_tag_name(self):
        out = generate("/** @$id \"T\" */\ntype T = string")
        assert 'Type.String({ $id: "T" })' in out

    def test_no_comment_no_options(self):
        out = generate("type T = number")
        assert "Type.Number()" in out

    def test_options_on_reference_are_reported(self):
        result = generate_result("/** @minimum 1 */\ntype T = A")
        assert "const T = A" in result.code
        assert [d.kind for d in result.diagnostics] == ["options-ignored"]

    def test_tags_sharing_a_line_are_reported(self):
        result = generate_result("/** @minimum 1 @maximum 2 */\ntype T = number")
        assert "Type.Number({ minimum: 1 })" in result.code
        assert [d.kind for d in result.diagnostics] == ["options-ignored"]
        assert "@maximum" in result.diagnostics[0].message

    def test_options_on_recursive_type(self):
        out = generate("/** @description \"node\" */\ntype T = { next?: T }")
        assert strip_whitespace('Type.Recursive(T => Type.Object({ next: Type.Optional(T) }, { description: "node" }))') in strip_whitespace(out)
