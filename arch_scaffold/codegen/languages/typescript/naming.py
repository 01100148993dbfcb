"""
TypeScript-specific naming utilities and sanitization.

Handles TypeScript reserved words and naming conventions.
"""

from ...core.naming import IdentifierRole, NameSanitizer, NamingCase

# TypeScript reserved words (strict mode)
TYPESCRIPT_RESERVED_WORDS = {
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "static",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "yield",
}

TYPESCRIPT_CASING = {
    IdentifierRole.TYPE_NAME: NamingCase.PASCAL_CASE,
    IdentifierRole.FILE_STEM: NamingCase.PASCAL_CASE,
    IdentifierRole.MEMBER_NAME: NamingCase.CAMEL_CASE,
    IdentifierRole.MODULE_PATH: NamingCase.PASCAL_CASE,
}


def create_typescript_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for TypeScript."""
    return NameSanitizer(TYPESCRIPT_RESERVED_WORDS)
