"""
Utility functions for the TypeScript to TypeBox generator.
"""

import re

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*$")


def unquote(text: str) -> str:
    """Strip one pair of matching surrounding quotes.

    Examples:
        '"a"' -> 'a'
        "'a'" -> 'a'
        'a' -> 'a'
    """
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`":
        return text[1:-1]
    return text


def is_identifier(text: str) -> bool:
    """Check whether text is a plain JavaScript identifier."""
    return bool(_IDENTIFIER_PATTERN.match(text))
