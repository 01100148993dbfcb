"""
Base interface for output-language profiles.

A profile fixes everything that differs between target languages:
primitive type names, casing rules per identifier role, file extension,
import path syntax, repository port shape and the template directory.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from .naming import IdentifierNormalizer, IdentifierRole, NameSanitizer, NamingCase


class PersistenceTechnology(Enum):
    """Database families that get an infrastructure scaffold and adapters."""

    SQL = "sql"
    NOSQL = "nosql"

    @property
    def client_name(self) -> str:
        """Raw name of the infrastructure client type."""
        return "SqlDatabase" if self == PersistenceTechnology.SQL else "NoSqlDatabase"


class LanguageProfile(ABC):
    """Abstract base class for all output-language profiles."""

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the profile id (e.g., 'python', 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.py', '.ts')."""
        pass

    @property
    @abstractmethod
    def primitive_types(self) -> FrozenSet[str]:
        """Type tokens that are built into the target language."""
        pass

    @property
    @abstractmethod
    def unknown_type(self) -> str:
        """Type written for unresolved tokens."""
        pass

    @property
    @abstractmethod
    def casing(self) -> Mapping[IdentifierRole, NamingCase]:
        """Casing rule for each identifier role."""
        pass

    @property
    def reserved_words(self) -> Set[str]:
        """Words that cannot be used as identifiers as-is."""
        return set()

    @property
    def comment_prefix(self) -> str:
        """Line comment marker, used for placeholder artifacts."""
        return "#"

    @property
    def package_marker(self) -> Optional[str]:
        """File name created in every generated directory, if the language needs one."""
        return None

    @property
    def persistence_technologies(self) -> List[PersistenceTechnology]:
        """Technologies that get a database scaffold, in emission order."""
        return [PersistenceTechnology.SQL, PersistenceTechnology.NOSQL]

    @abstractmethod
    def get_template_directory(self) -> Path:
        """Return the directory containing this profile's templates."""
        pass

    @abstractmethod
    def import_path(self, from_dir: str, to_dir: str, module: str) -> str:
        """
        Build the import source for `module` in `to_dir`, seen from `from_dir`.

        Directories are '/'-separated and relative to the project root.
        """
        pass

    @abstractmethod
    def repository_methods(self, entity_type: str, entity_var: str) -> List[Dict[str, Any]]:
        """
        CRUD methods of the repository port for one entity.

        Each method is a dict with `name`, `operation` (find, save,
        delete, list or exists), `params` (list of {name, type}) and
        `output`.
        """
        pass

    def render_primitive(self, name: str) -> str:
        """Spelling of a primitive type token in generated code."""
        return name

    def primitive_imports(self, type_names: Iterable[str]) -> List[str]:
        """Import statements needed by primitive types used in an artifact."""
        return []

    def create_normalizer(self) -> IdentifierNormalizer:
        """Create the identifier normalizer for this profile."""
        return IdentifierNormalizer(NameSanitizer(self.reserved_words), self.casing)

    def get_info(self) -> Dict[str, Any]:
        """Describe this profile for listings."""
        return {
            "name": self.language_name,
            "class": type(self).__name__,
            "file_extension": self.file_extension,
            "primitive_types": sorted(self.primitive_types),
            "unknown_type": self.unknown_type,
            "casing": {role.value: case.value for role, case in self.casing.items()},
            "module": type(self).__module__,
        }


def relative_parts(from_dir: str, to_dir: str) -> Tuple[int, List[str]]:
    """
    Walk from one project directory to another.

    Returns:
        Number of levels to climb from `from_dir`, and the directory
        names to descend into afterwards
    """
    from_parts = [part for part in from_dir.split("/") if part]
    to_parts = [part for part in to_dir.split("/") if part]

    common = 0
    for a, b in zip(from_parts, to_parts):
        if a != b:
            break
        common += 1
    return len(from_parts) - common, to_parts[common:]
