"""
Documentation tag extraction.

Turns the JSDoc comment in front of a declaration or property into
TypeBox schema options:

    /**
     * @minimum 100
     * @description "it's a number" - strings must be quoted
     */

becomes {"minimum": 100, "description": "it's a number"}.
"""

from __future__ import annotations

import json
import re
from typing import Any

from .ir_nodes import RawOption, SchemaOptions

_TAG_PATTERN = re.compile(r"^@(?P<name>[A-Za-z_$][\w$]*)(?:\s+(?P<value>.*))?$")

_LITERAL_PATTERN = re.compile(
    r"""
    (?P<double>"(?:[^"\\]|\\.)*")
    |(?P<single>'(?:[^'\\]|\\.)*')
    |(?P<number>-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?)
    |(?P<keyword>true|false|null)
    """,
    re.VERBOSE,
)

_KEYWORDS = {"true": True, "false": False, "null": None}

# A further tag written on the same line as another one
_INLINE_TAG = re.compile(r"(?:^|\s)@(?P<name>[A-Za-z_$][\w$]*)")


def is_doc_comment(text: str) -> bool:
    """Check whether a comment is a JSDoc block (`/** ... */`)."""
    return text.startswith("/**") and not text.startswith("/**/")


def _comment_lines(text: str) -> list[str]:
    """Strip the comment delimiters and leading `*` from each line."""
    body = text[3:]
    if body.endswith("*/"):
        body = body[:-2]
    lines = []
    for line in body.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:].strip()
        lines.append(line)
    return lines


def parse_tag_value(text: str) -> Any:
    """Parse the value part of a tag.

    A leading JSON literal (number, boolean, null, single- or double-quoted
    string) is parsed and anything after it is discarded. Any other text is
    kept verbatim as a RawOption.
    """
    text = text.strip()
    if not text:
        return True

    match = _LITERAL_PATTERN.match(text)
    if match is None or (match.end() < len(text) and not text[match.end()].isspace()):
        return RawOption(text)

    if match.group("double") is not None:
        try:
            return json.loads(match.group("double"))
        except json.JSONDecodeError:
            return RawOption(text)
    if match.group("single") is not None:
        return match.group("single")[1:-1].replace("\\'", "'")
    if match.group("number") is not None:
        number = match.group("number")
        if any(c in number for c in ".eE"):
            return float(number)
        return int(number)
    return _KEYWORDS[match.group("keyword")]


def extract_schema_options(comment: str | None) -> SchemaOptions:
    """Extract the ordered tag name -> value mapping from a JSDoc comment.

    Args:
        comment: The full comment text, or None when there is no comment

    Returns:
        The schema options; empty when there is no JSDoc comment or no tags
    """
    options: SchemaOptions = {}
    if comment is None or not is_doc_comment(comment):
        return options

    for line in _comment_lines(comment):
        match = _TAG_PATTERN.match(line)
        if match is None:
            continue
        options[match.group("name")] = parse_tag_value(match.group("value") or "")
    return options


def discarded_tags(comment: str | None) -> list[str]:
    """Return the names of tags swallowed by the value of a preceding tag.

    Only one tag is read per line, so in `@minimum 1 @maximum 2` the
    `maximum` tag never becomes an option.
    """
    names: list[str] = []
    if comment is None or not is_doc_comment(comment):
        return names

    for line in _comment_lines(comment):
        match = _TAG_PATTERN.match(line)
        if match is None or not match.group("value"):
            continue
        value = match.group("value").strip()
        literal = _LITERAL_PATTERN.match(value)
        rest = value[literal.end() :] if literal is not None else value
        names.extend(m.group("name") for m in _INLINE_TAG.finditer(rest))
    return names
