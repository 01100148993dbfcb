"""
TypeScript output profile.

Generates one PascalCase module per type, imported with relative
slash paths and no file extension.
"""

from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Set

from ...core.naming import IdentifierRole, NamingCase
from ...core.profile import LanguageProfile, relative_parts
from .config import (
    TYPESCRIPT_PRIMITIVE_TYPES,
    TYPESCRIPT_TYPE_MAP,
    TYPESCRIPT_UNKNOWN_TYPE,
    typescript_repository_methods,
)
from .naming import TYPESCRIPT_CASING, TYPESCRIPT_RESERVED_WORDS


class TypeScriptProfile(LanguageProfile):
    """Profile for TypeScript projects."""

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    @property
    def primitive_types(self) -> FrozenSet[str]:
        return TYPESCRIPT_PRIMITIVE_TYPES

    @property
    def unknown_type(self) -> str:
        return TYPESCRIPT_UNKNOWN_TYPE

    @property
    def casing(self) -> Mapping[IdentifierRole, NamingCase]:
        return TYPESCRIPT_CASING

    @property
    def reserved_words(self) -> Set[str]:
        return TYPESCRIPT_RESERVED_WORDS

    @property
    def comment_prefix(self) -> str:
        return "//"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def import_path(self, from_dir: str, to_dir: str, module: str) -> str:
        """Relative module specifier, e.g. `../domain/Order`."""
        ups, down = relative_parts(from_dir, to_dir)
        prefix = "../" * ups if ups else "./"
        return prefix + "/".join(down + [module])

    def repository_methods(self, entity_type: str, entity_var: str) -> List[Dict[str, Any]]:
        return typescript_repository_methods(entity_type, entity_var)

    def render_primitive(self, name: str) -> str:
        return TYPESCRIPT_TYPE_MAP.get(name, name)
