"""
Naming utilities for safe code generation.

Handles name sanitization, case conversions and keyword conflicts.
Every generated identifier and file name goes through an
IdentifierNormalizer so that the artifact defining a type and every
artifact importing it agree on its file name.
"""

import re
from enum import Enum
from typing import Dict, Mapping, Optional, Set


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name


class IdentifierRole(Enum):
    """Where an identifier ends up in generated code."""

    TYPE_NAME = "type_name"  # exported class/interface name
    FILE_STEM = "file_stem"  # source file base name, no extension
    MEMBER_NAME = "member_name"  # field, parameter, method name
    MODULE_PATH = "module_path"  # path segment used in import statements


class NameSanitizer:
    """Handles name sanitization and case conversion. Holds no per-run state."""

    def __init__(self, reserved_words: Optional[Set[str]] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
        """
        self.reserved_words = frozenset(reserved_words or ())

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.SNAKE_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for reserved words

        Returns:
            Sanitized name safe for use
        """
        cleaned = self._clean_basic(name)
        converted = self.convert_case(cleaned, target_case)

        if converted and converted[0].isdigit():
            converted = f"_{converted}"
        if not converted:
            converted = "field"

        if converted in self.reserved_words:
            converted = f"{converted}{suffix_on_conflict}"
        return converted

    def convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return self._to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            return self._to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return self._to_pascal_case(name)
        elif target_case == NamingCase.KEBAB_CASE:
            return self._to_kebab_case(name)
        else:
            return name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        # Anything that is not alphanumeric becomes a word separator
        cleaned = re.sub(r"[^a-zA-Z0-9_]", "_", name.strip())
        return cleaned.strip("_")

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = name.replace("-", "_")

        # Split acronyms from following words (HTTPServer -> HTTP_Server)
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
        # Insert underscore before uppercase letters
        name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)

        name = name.lower()
        name = re.sub(r"_+", "_", name)

        return name.strip("_")

    def _to_camel_case(self, name: str) -> str:
        """Convert to camelCase."""
        parts = [part for part in self._to_snake_case(name).split("_") if part]

        if not parts:
            return ""

        return parts[0] + "".join(part.capitalize() for part in parts[1:])

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        snake = self._to_snake_case(name)
        return "".join(part.capitalize() for part in snake.split("_") if part)

    def _to_kebab_case(self, name: str) -> str:
        """Convert to kebab-case."""
        return self._to_snake_case(name).replace("_", "-")


class IdentifierNormalizer:
    """
    Canonicalizes raw schema names per identifier role.

    MODULE_PATH always follows the FILE_STEM rule: an import path has to
    name the file that the defining artifact was written to.
    """

    def __init__(
        self, sanitizer: NameSanitizer, casing: Mapping[IdentifierRole, NamingCase]
    ):
        missing = [
            role
            for role in (
                IdentifierRole.TYPE_NAME,
                IdentifierRole.FILE_STEM,
                IdentifierRole.MEMBER_NAME,
            )
            if role not in casing
        ]
        if missing:
            names = ", ".join(role.value for role in missing)
            raise ValueError(f"No casing rule for identifier role(s): {names}")

        module_case = casing.get(IdentifierRole.MODULE_PATH)
        if module_case is not None and module_case != casing[IdentifierRole.FILE_STEM]:
            raise ValueError("MODULE_PATH casing must match FILE_STEM casing")

        self.sanitizer = sanitizer
        self._casing: Dict[IdentifierRole, NamingCase] = dict(casing)
        self._casing[IdentifierRole.MODULE_PATH] = casing[IdentifierRole.FILE_STEM]

    def normalize(self, raw_name: str, role: IdentifierRole) -> str:
        """Normalize a raw name for the given role."""
        return self.sanitizer.sanitize_name(raw_name, self._casing[role])

    def type_name(self, raw_name: str) -> str:
        return self.normalize(raw_name, IdentifierRole.TYPE_NAME)

    def file_stem(self, raw_name: str) -> str:
        return self.normalize(raw_name, IdentifierRole.FILE_STEM)

    def member_name(self, raw_name: str) -> str:
        return self.normalize(raw_name, IdentifierRole.MEMBER_NAME)

    def module_path(self, raw_name: str) -> str:
        return self.normalize(raw_name, IdentifierRole.MODULE_PATH)
