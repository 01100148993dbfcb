"""
Artifact intermediate representation.

ArtifactKind is the closed set of things the generator can emit.
ArtifactLayout is the single place that turns a kind plus a raw schema
name into a type name, a directory and a file stem; both the defining
artifact and every importer go through it.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from .naming import IdentifierNormalizer
from .profile import LanguageProfile


class ArtifactKind(Enum):
    """Every kind of generated file."""

    ENTITY = "entity"
    VALUE_OBJECT = "value_object"
    DOMAIN_SERVICE = "domain_service"
    REPOSITORY = "repository"
    USE_CASE = "use_case"
    ACTION = "action"
    PRESENTER = "presenter"
    SQL_ADAPTER = "sql_repository"
    NOSQL_ADAPTER = "nosql_repository"
    DOMAIN_IMPL = "domain_impl"
    INFRASTRUCTURE_IMPL = "database"
    README = "readme"


# Output directory of each kind, relative to the project root
ARTIFACT_DIRECTORIES: Mapping[ArtifactKind, str] = MappingProxyType(
    {
        ArtifactKind.ENTITY: "domain",
        ArtifactKind.VALUE_OBJECT: "domain",
        ArtifactKind.DOMAIN_SERVICE: "domain",
        ArtifactKind.REPOSITORY: "domain",
        ArtifactKind.USE_CASE: "usecase",
        ArtifactKind.ACTION: "adapter/api",
        ArtifactKind.PRESENTER: "adapter/presenter",
        ArtifactKind.SQL_ADAPTER: "adapter/repository",
        ArtifactKind.NOSQL_ADAPTER: "adapter/repository",
        ArtifactKind.DOMAIN_IMPL: "infrastructure/domain",
        ArtifactKind.INFRASTRUCTURE_IMPL: "infrastructure/database",
        ArtifactKind.README: "",
    }
)

# Suffix appended to the normalized type name of the owning schema element
ARTIFACT_SUFFIXES: Mapping[ArtifactKind, str] = MappingProxyType(
    {
        ArtifactKind.ENTITY: "",
        ArtifactKind.VALUE_OBJECT: "",
        ArtifactKind.DOMAIN_SERVICE: "",
        ArtifactKind.REPOSITORY: "Repository",
        ArtifactKind.USE_CASE: "UseCase",
        ArtifactKind.ACTION: "Action",
        ArtifactKind.PRESENTER: "Presenter",
        ArtifactKind.SQL_ADAPTER: "SqlRepository",
        ArtifactKind.NOSQL_ADAPTER: "NoSqlRepository",
        ArtifactKind.DOMAIN_IMPL: "Impl",
        ArtifactKind.INFRASTRUCTURE_IMPL: "",
        ArtifactKind.README: "",
    }
)

README_FILE_NAME = "README.md"


@dataclass(frozen=True)
class ImportRef:
    """One imported name and the module it comes from."""

    name: str
    from_path: str


@dataclass(frozen=True)
class ArtifactLocation:
    """Where an artifact's file lives and what type it defines."""

    type_name: str
    directory: str
    file_stem: str
    extension: str

    @property
    def file_name(self) -> str:
        return f"{self.file_stem}{self.extension}"

    @property
    def path(self) -> str:
        if not self.directory:
            return self.file_name
        return f"{self.directory}/{self.file_name}"


@dataclass(frozen=True)
class ResolvedArtifact:
    """
    A fully resolved artifact, ready for rendering.

    Built once per schema element per run, rendered immediately and
    then dropped.
    """

    kind: ArtifactKind
    name: str
    file_name: str
    path: str
    imports: Tuple[ImportRef, ...] = ()
    body: Mapping[str, Any] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()

    def template_context(self) -> Dict[str, Any]:
        """Variables handed to the template."""
        context = dict(self.body)
        context["name"] = self.name
        context["imports"] = list(self.imports)
        context["import_groups"] = group_imports(self.imports)
        return context


class ArtifactLayout:
    """Maps (kind, raw schema name) to names and paths for one profile."""

    def __init__(self, profile: LanguageProfile, normalizer: IdentifierNormalizer):
        self.profile = profile
        self.normalizer = normalizer

    def type_name(self, kind: ArtifactKind, raw_name: str) -> str:
        """Type defined by the artifact of `kind` owned by `raw_name`."""
        return self.normalizer.type_name(raw_name) + ARTIFACT_SUFFIXES[kind]

    def locate(self, kind: ArtifactKind, raw_name: str) -> ArtifactLocation:
        """Location of the artifact of `kind` owned by `raw_name`."""
        if kind == ArtifactKind.README:
            stem, extension = README_FILE_NAME.rsplit(".", 1)
            return ArtifactLocation("", "", stem, f".{extension}")

        type_name = self.type_name(kind, raw_name)
        return ArtifactLocation(
            type_name=type_name,
            directory=ARTIFACT_DIRECTORIES[kind],
            file_stem=self.normalizer.file_stem(type_name),
            extension=self.profile.file_extension,
        )

    def import_of(
        self, kind: ArtifactKind, raw_name: str, from_dir: str, name: str = ""
    ) -> ImportRef:
        """
        Import of a name defined by another artifact.

        Args:
            kind: Kind of the defining artifact
            raw_name: Schema name owning the defining artifact
            from_dir: Directory of the importing artifact
            name: Imported name, defaults to the artifact's main type
        """
        target = self.locate(kind, raw_name)
        module = self.normalizer.module_path(target.type_name)
        return ImportRef(
            name=name or target.type_name,
            from_path=self.profile.import_path(from_dir, target.directory, module),
        )


def group_imports(imports: Iterable[ImportRef]) -> List[Dict[str, Any]]:
    """Group imports by source module, keeping first-seen order."""
    groups: Dict[str, List[str]] = {}
    for ref in imports:
        names = groups.setdefault(ref.from_path, [])
        if ref.name not in names:
            names.append(ref.name)
    return [{"from_path": path, "names": names} for path, names in groups.items()]
