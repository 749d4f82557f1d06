"""
Lexical post-processing of generated code.

Runs on the text produced by the backend:

- skip_type_creation: drop the `type X = Static<...>` lines so only the
  schema values are emitted.
- Name templates: rename the static type and the value constant of every
  declaration, e.g. `type PersonType = Static<typeof PersonSchema>`.
"""

from __future__ import annotations

import re

from ..logging import get_logger
from .config import CodeGeneratorConfig

logger = get_logger("postprocess")

_STATIC_LINE = re.compile(r"^[ \t]*(?:export\s+)?type\s+[\w$]+(?:<[^=\n]*>)?\s*=\s*Static<.*(?:\n|$)", re.MULTILINE)

_IMPORT_LINE = re.compile(r"^import \{(?P<names>[^}]*)\} from (?P<module>.+)$", re.MULTILINE)

_STATIC_DECLARATION = re.compile(r"^(?P<prefix>[ \t]*(?:export\s+)?type\s+)(?P<name>[\w$]+)(?P<rest>[^\n]*=\s*Static<.*)$")

_VALUE_DECLARATION = re.compile(r"^[ \t]*(?:export\s+)?const\s+(?P<name>[\w$]+)\s*=", re.MULTILINE)

_STRING_LITERAL = re.compile(r"""("(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*'|`(?:[^`\\]|\\.)*`)""")

# `type Box<T extends TSchema> = ...` and `const Box = <T extends TSchema>(T: T) => ...`
_GENERIC_HEAD = re.compile(r"^[ \t]*(?:export\s+)?(?:type\s+[\w$]+|const\s+[\w$]+\s*=\s*)<(?P<params>[^>]*)>")


def _type_parameters(line: str) -> frozenset[str]:
    """Return the type parameter names declared by a generic declaration line."""
    match = _GENERIC_HEAD.match(line)
    if match is None:
        return frozenset()
    return frozenset(p.split()[0] for p in match.group("params").split(",") if p.strip())


def _value_pattern(names) -> re.Pattern:
    # Identifiers, not members (`.X`) and not property keys (`X:`)
    alternation = "|".join(re.escape(n) for n in sorted(names, key=len, reverse=True)) or r"(?!)"
    return re.compile(rf"(?<![\w$.])(?:{alternation})(?![\w$])(?!\s*:)")


def strip_static_types(code: str) -> str:
    """
    Remove the static type lines and the imports only they needed.

    `TSchema` stays imported while generic value constraints still use it.
    """
    code = _STATIC_LINE.sub("", code)

    match = _IMPORT_LINE.search(code)
    if match is None:
        return code

    rest = code[: match.start()] + code[match.end() :]
    names = [n.strip() for n in match.group("names").split(",") if n.strip()]
    names = [n for n in names if n != "Static"]
    if "TSchema" in names and not re.search(r"\bTSchema\b", rest):
        names.remove("TSchema")

    import_line = f"import {{ {', '.join(names)} }} from {match.group('module')}"
    return code[: match.start()] + import_line + code[match.end() :]


def _substitute(text: str, pattern: re.Pattern, names: dict[str, str]) -> str:
    """Rename identifiers outside of string literals."""
    parts = _STRING_LITERAL.split(text)
    # Odd indices are the string literals captured by split
    for i in range(0, len(parts), 2):
        parts[i] = pattern.sub(lambda m: names[m.group(0)], parts[i])
    return "".join(parts)


def rename_declarations(code: str, type_name_template: str = "{name}", value_name_template: str = "{name}") -> str:
    """
    Apply name templates to every declared type and value.

    Args:
        code: Generated code
        type_name_template: Template for static type names, with a `{name}` field
        value_name_template: Template for value names, with a `{name}` field

    Returns:
        The code with declarations and their references renamed
    """
    if type_name_template == "{name}" and value_name_template == "{name}":
        return code

    value_names = {m.group("name"): value_name_template.format(name=m.group("name")) for m in _VALUE_DECLARATION.finditer(code)}
    type_names = {}
    for line in code.splitlines():
        match = _STATIC_DECLARATION.match(line)
        if match is not None:
            type_names[match.group("name")] = type_name_template.format(name=match.group("name"))

    value_names = {k: v for k, v in value_names.items() if k != v}
    if not value_names and not type_names:
        return code

    import_match = _IMPORT_LINE.search(code)
    if import_match is not None:
        imported = {n.strip() for n in import_match.group("names").split(",")}
        for name in sorted(imported & set(value_names.values())):
            logger.warning("Renamed value %s collides with an imported name", name)

    # Type parameters shadow declared values until the declaration block ends
    patterns: dict[frozenset[str], re.Pattern] = {}
    scope: frozenset[str] = frozenset()

    lines = []
    for line in code.splitlines(keepends=True):
        stripped = line.rstrip("\n")
        match = _STATIC_DECLARATION.match(stripped)
        if not stripped.strip():
            scope = frozenset()
        elif match is not None or _VALUE_DECLARATION.match(stripped):
            scope = _type_parameters(stripped)
        if scope not in patterns:
            patterns[scope] = _value_pattern(n for n in value_names if n not in scope)
        value_pattern = patterns[scope]

        if match is not None:
            renamed = type_names.get(match.group("name"), match.group("name"))
            rest = _substitute(line[match.end("name") :], value_pattern, value_names)
            lines.append(match.group("prefix") + renamed + rest)
        else:
            lines.append(_substitute(line, value_pattern, value_names))
    logger.debug("Renamed %d types and %d values", len(type_names), len(value_names))
    return "".join(lines)


def postprocess(code: str, config: CodeGeneratorConfig) -> str:
    """Apply the configured post-processing steps in order."""
    if config.skip_type_creation:
        code = strip_static_types(code)
    return rename_declarations(code, config.type_name_template, config.value_name_template)
