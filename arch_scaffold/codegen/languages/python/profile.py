"""
Python output profile.

Generates snake_case modules of dataclasses and ABC ports, imported
with package-relative dotted paths.
"""

from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set

from ...core.naming import IdentifierRole, NamingCase
from ...core.profile import LanguageProfile, relative_parts
from .config import (
    PYTHON_IMPORT_MAP,
    PYTHON_PRIMITIVE_TYPES,
    PYTHON_TYPE_MAP,
    PYTHON_UNKNOWN_TYPE,
    python_repository_methods,
)
from .naming import PYTHON_CASING, PYTHON_RESERVED_WORDS


class PythonProfile(LanguageProfile):
    """Profile for Python projects."""

    @property
    def language_name(self) -> str:
        return "python"

    @property
    def file_extension(self) -> str:
        return ".py"

    @property
    def primitive_types(self) -> FrozenSet[str]:
        return PYTHON_PRIMITIVE_TYPES

    @property
    def unknown_type(self) -> str:
        return PYTHON_UNKNOWN_TYPE

    @property
    def casing(self) -> Mapping[IdentifierRole, NamingCase]:
        return PYTHON_CASING

    @property
    def reserved_words(self) -> Set[str]:
        return PYTHON_RESERVED_WORDS

    @property
    def package_marker(self) -> Optional[str]:
        return "__init__.py"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def import_path(self, from_dir: str, to_dir: str, module: str) -> str:
        """
        Package-relative dotted import.

        One leading dot for the importer's own package, one more for
        each level climbed: `domain` seen from `usecase` is `..domain`.
        """
        ups, down = relative_parts(from_dir, to_dir)
        return "." * (1 + ups) + ".".join(down + [module])

    def repository_methods(self, entity_type: str, entity_var: str) -> List[Dict[str, Any]]:
        return python_repository_methods(entity_type, entity_var)

    def render_primitive(self, name: str) -> str:
        return PYTHON_TYPE_MAP.get(name, name)

    def primitive_imports(self, type_names: Iterable[str]) -> List[str]:
        return sorted(
            {PYTHON_IMPORT_MAP[name] for name in type_names if name in PYTHON_IMPORT_MAP}
        )