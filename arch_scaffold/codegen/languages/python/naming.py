"""
Python-specific naming utilities and sanitization.

Handles Python reserved words and naming conventions.
"""

from ...core.naming import IdentifierRole, NameSanitizer, NamingCase

# Python reserved keywords, plus `self` which every generated method takes
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "self",
    "try",
    "while",
    "with",
    "yield",
}

PYTHON_CASING = {
    IdentifierRole.TYPE_NAME: NamingCase.PASCAL_CASE,
    IdentifierRole.FILE_STEM: NamingCase.SNAKE_CASE,
    IdentifierRole.MEMBER_NAME: NamingCase.SNAKE_CASE,
    IdentifierRole.MODULE_PATH: NamingCase.SNAKE_CASE,
}


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Python."""
    return NameSanitizer(PYTHON_RESERVED_WORDS)
