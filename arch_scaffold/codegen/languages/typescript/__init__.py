"""
TypeScript output profile.

Generates a layered TypeScript project of classes, interface ports and
in-memory persistence adapters.
"""

from .config import TYPESCRIPT_PRIMITIVE_TYPES, typescript_repository_methods
from .naming import TYPESCRIPT_RESERVED_WORDS, create_typescript_sanitizer
from .profile import TypeScriptProfile

__all__ = [
    "TypeScriptProfile",
    "TYPESCRIPT_PRIMITIVE_TYPES",
    "TYPESCRIPT_RESERVED_WORDS",
    "create_typescript_sanitizer",
    "typescript_repository_methods",
]
