"""
Import graph construction and repository inference.

collect_dependencies walks the type-bearing positions of an artifact
and returns the ordered, de-duplicated, self-free list of imports it
needs. RepositoryInference finds the repository ports a use case needs
from the entities its fields reference.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ...logging_config import get_logger
from .artifacts import ArtifactKind, ArtifactLayout, ImportRef
from .schema import Domain, DomainType, FieldResolutionMode, UseCase
from .types import ResolvedType, TypeResolver

logger = get_logger(__name__)

# Artifact kind defining each kind of domain
DOMAIN_ARTIFACT_KINDS = {
    DomainType.ENTITY: ArtifactKind.ENTITY,
    DomainType.VALUE_OBJECT: ArtifactKind.VALUE_OBJECT,
    DomainType.DOMAIN_SERVICE: ArtifactKind.DOMAIN_SERVICE,
}


@dataclass(frozen=True)
class RepositoryRef:
    """A repository port a use case depends on."""

    entity: Domain

    @property
    def entity_name(self) -> str:
        return self.entity.name


class DependencyGraphBuilder:
    """Computes the import set of one artifact."""

    def __init__(self, resolver: TypeResolver, layout: ArtifactLayout):
        self.resolver = resolver
        self.layout = layout

    def domain_import(self, domain: Domain, from_dir: str) -> ImportRef:
        """Import of a domain's defining artifact."""
        return self.layout.import_of(
            DOMAIN_ARTIFACT_KINDS[domain.domain_type], domain.name, from_dir
        )

    def repository_import(self, entity: Domain, from_dir: str) -> ImportRef:
        """Import of an entity's repository port."""
        return self.layout.import_of(ArtifactKind.REPOSITORY, entity.name, from_dir)

    def collect_dependencies(
        self,
        kind: ArtifactKind,
        raw_name: str,
        resolved_types: Iterable[ResolvedType],
        extra: Sequence[ImportRef] = (),
        leading: Sequence[ImportRef] = (),
    ) -> List[ImportRef]:
        """
        Build the import list of an artifact.

        Args:
            kind: Kind of the importing artifact
            raw_name: Schema name owning the importing artifact
            resolved_types: Types at every type-bearing position, in walk order
            extra: Imports appended after the domain imports (repositories,
                ports); de-duplicated the same way
            leading: Imports placed before the domain imports

        Returns:
            Imports in first-seen order, without primitives, unresolved
            types, duplicates, or anything from the artifact's own module
        """
        from_dir = self.layout.locate(kind, raw_name).directory
        own_module = self.layout.import_of(kind, raw_name, from_dir).from_path

        seen_domains = set()
        imports: List[ImportRef] = list(leading)

        for resolved in resolved_types:
            if not resolved.is_domain or resolved.domain is None:
                continue
            domain = resolved.domain
            if domain.name in seen_domains:
                continue
            seen_domains.add(domain.name)
            imports.append(self.domain_import(domain, from_dir))

        imports.extend(extra)
        return _unique(ref for ref in imports if ref.from_path != own_module)

    def collect_use_case_dependencies(
        self,
        usecase: UseCase,
        mode: FieldResolutionMode,
        repositories: Sequence[RepositoryRef],
    ) -> List[ImportRef]:
        """Entity/domain imports of a use case's fields, then its repository ports."""
        from_dir = self.layout.locate(ArtifactKind.USE_CASE, usecase.name).directory
        resolved = [self.resolver.resolve_field(f, mode) for f in usecase.all_fields]
        repository_imports = [
            self.repository_import(ref.entity, from_dir) for ref in repositories
        ]
        return self.collect_dependencies(
            ArtifactKind.USE_CASE, usecase.name, resolved, extra=repository_imports
        )

    def collect_impl_dependencies(
        self, domain: Domain, resolved_types: Iterable[ResolvedType]
    ) -> List[ImportRef]:
        """The implemented domain first, then the domains its signatures use."""
        from_dir = self.layout.locate(ArtifactKind.DOMAIN_IMPL, domain.name).directory
        return self.collect_dependencies(
            ArtifactKind.DOMAIN_IMPL,
            domain.name,
            resolved_types,
            leading=[self.domain_import(domain, from_dir)],
        )


class RepositoryInference:
    """Derives repository dependencies of use cases."""

    def __init__(self, resolver: TypeResolver):
        self.resolver = resolver

    def infer_repository_deps(
        self, usecase: UseCase, mode: FieldResolutionMode
    ) -> List[RepositoryRef]:
        """
        Repository ports needed by a use case.

        Inputs are scanned before outputs, each in declaration order; an
        entity referenced by several fields yields one dependency. A use
        case without entity references needs no repository.
        """
        refs: List[RepositoryRef] = []
        seen = set()

        for usecase_field in usecase.all_fields:
            resolved = self.resolver.resolve_field(usecase_field, mode)
            entity = _entity_of(resolved)
            if entity is None or entity.name in seen:
                continue
            seen.add(entity.name)
            refs.append(RepositoryRef(entity))

        logger.debug(
            "Use case '%s' depends on %d repository port(s)", usecase.name, len(refs)
        )
        return refs


def _entity_of(resolved: ResolvedType) -> Optional[Domain]:
    if resolved.is_domain and resolved.is_entity:
        return resolved.domain
    return None


def _unique(imports: Iterable[ImportRef]) -> List[ImportRef]:
    seen = set()
    unique = []
    for ref in imports:
        if ref in seen:
            continue
        seen.add(ref)
        unique.append(ref)
    return unique
