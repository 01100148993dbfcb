"""
Artifact builders.

Turn schema elements into ResolvedArtifacts: every type is resolved,
every identifier normalized and every import computed here, so the
templates only lay the data out.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ...logging_config import get_logger
from .artifacts import (
    ArtifactKind,
    ArtifactLayout,
    ImportRef,
    ResolvedArtifact,
    group_imports,
)
from .dependencies import (
    DOMAIN_ARTIFACT_KINDS,
    DependencyGraphBuilder,
    RepositoryInference,
    RepositoryRef,
)
from .naming import IdentifierNormalizer, NamingCase
from .profile import LanguageProfile, PersistenceTechnology
from .schema import Domain, FieldResolutionMode, Method, ProjectSchema, UseCase
from .types import ResolvedType, TypeResolver

logger = get_logger(__name__)

ADAPTER_TECHNOLOGIES = {
    ArtifactKind.SQL_ADAPTER: PersistenceTechnology.SQL,
    ArtifactKind.NOSQL_ADAPTER: PersistenceTechnology.NOSQL,
}


class _TypeScope:
    """Resolves the types of one artifact and remembers what it saw."""

    def __init__(self, builder: "ArtifactBuilder"):
        self._builder = builder
        self.resolved: List[ResolvedType] = []
        self.type_names: List[str] = []
        self.warnings: List[str] = []

    def type_of(self, token: Optional[str], where: str) -> str:
        return self.add(self._builder.resolver.resolve(token), where)

    def add(self, resolved: ResolvedType, where: str) -> str:
        rendered = self._builder.render_type(resolved)
        self.resolved.append(resolved)
        self.type_names.append(rendered)
        if resolved.is_unresolved and resolved.token:
            self.warnings.append(
                f"{where}: unresolved type '{resolved.token}' emitted as '{rendered}'"
            )
        return rendered

    def std_imports(self) -> List[str]:
        return self._builder.profile.primitive_imports(self.type_names)


class ArtifactBuilder:
    """Builds the ResolvedArtifact of every kind for one generation run."""

    def __init__(
        self,
        schema: ProjectSchema,
        profile: LanguageProfile,
        resolver: TypeResolver,
        normalizer: IdentifierNormalizer,
        add_comments: bool = True,
    ):
        self.schema = schema
        self.profile = profile
        self.resolver = resolver
        self.normalizer = normalizer
        self.add_comments = add_comments
        self.layout = ArtifactLayout(profile, normalizer)
        self.dependencies = DependencyGraphBuilder(resolver, self.layout)
        self.repositories = RepositoryInference(resolver)

    def render_type(self, resolved: ResolvedType) -> str:
        """Type expression written into generated code."""
        if resolved.is_domain and resolved.domain is not None:
            return self.normalizer.type_name(resolved.domain.name)
        if resolved.is_primitive:
            return self.profile.render_primitive(resolved.name)
        return resolved.name

    # Domain layer

    def build_domain(self, domain: Domain) -> ResolvedArtifact:
        """Entity, value object or domain service definition."""
        kind = DOMAIN_ARTIFACT_KINDS[domain.domain_type]
        location = self.layout.locate(kind, domain.name)
        scope = _TypeScope(self)

        attributes = [
            {
                "name": self.normalizer.member_name(attribute.name),
                "raw_name": attribute.name,
                "type": scope.type_of(
                    attribute.type, f"{domain.name}.{attribute.name}"
                ),
            }
            for attribute in domain.attributes
        ]
        methods = [
            self._method(method, f"{domain.name}.{method.name}", scope)
            for method in domain.methods
        ]

        imports = self.dependencies.collect_dependencies(kind, domain.name, scope.resolved)
        body = self._body(
            domain_type=domain.domain_type.value,
            attributes=attributes,
            methods=methods,
            std_imports=scope.std_imports(),
        )
        return self._artifact(kind, location.type_name, location, imports, body, scope)

    def build_repository(self, entity: Domain) -> ResolvedArtifact:
        """Persistence port of an entity. Its only dependency is the entity."""
        location = self.layout.locate(ArtifactKind.REPOSITORY, entity.name)
        entity_type = self.normalizer.type_name(entity.name)

        imports = [self.dependencies.domain_import(entity, location.directory)]
        body = self._body(
            entity_type=entity_type,
            entity_var=self.normalizer.member_name(entity.name),
            methods=self._repository_methods(entity),
        )
        return self._artifact(
            ArtifactKind.REPOSITORY, location.type_name, location, imports, body
        )

    # Use case layer

    def infer_repositories(
        self, usecase: UseCase, mode: FieldResolutionMode
    ) -> List[RepositoryRef]:
        return self.repositories.infer_repository_deps(usecase, mode)

    def build_use_case(
        self, usecase: UseCase, mode: FieldResolutionMode
    ) -> ResolvedArtifact:
        """Input and output data, ports and the interactor of a use case."""
        location = self.layout.locate(ArtifactKind.USE_CASE, usecase.name)
        base = self.normalizer.type_name(usecase.name)
        scope = _TypeScope(self)

        input_fields = self._fields(usecase, usecase.input_fields, mode, scope)
        output_fields = self._fields(usecase, usecase.output_fields, mode, scope)

        refs = self.infer_repositories(usecase, mode)
        repositories = [
            {
                "type": self.layout.type_name(ArtifactKind.REPOSITORY, ref.entity_name),
                "member": self.normalizer.member_name(
                    self.layout.type_name(ArtifactKind.REPOSITORY, ref.entity_name)
                ),
            }
            for ref in refs
        ]

        imports = self.dependencies.collect_use_case_dependencies(usecase, mode, refs)
        names = self.use_case_names(usecase)
        body = self._body(
            base_name=base,
            input_name=names["input"],
            output_name=names["output"],
            output_port_name=names["output_port"],
            interactor_name=names["interactor"],
            factory_name=self.normalizer.member_name(f"Create{base}UseCase"),
            input_fields=input_fields,
            output_fields=output_fields,
            repositories=repositories,
            std_imports=scope.std_imports(),
        )
        return self._artifact(
            ArtifactKind.USE_CASE, location.type_name, location, imports, body, scope
        )

    def use_case_names(self, usecase: UseCase) -> Dict[str, str]:
        """Every type name a use case module defines, by role."""
        base = self.normalizer.type_name(usecase.name)
        return {
            "input_port": self.layout.type_name(ArtifactKind.USE_CASE, usecase.name),
            "input": f"{base}Input",
            "output": f"{base}Output",
            "output_port": f"{base}OutputPort",
            "interactor": f"{base}Interactor",
        }

    # Adapter layer

    def build_action(
        self, usecase: UseCase, mode: FieldResolutionMode
    ) -> ResolvedArtifact:
        """Request handler that feeds a use case."""
        location = self.layout.locate(ArtifactKind.ACTION, usecase.name)
        names = self.use_case_names(usecase)

        imports = [
            self._use_case_import(usecase, location.directory),
            self._use_case_import(usecase, location.directory, names["input"]),
        ]
        body = self._body(
            use_case_type=names["input_port"],
            input_name=names["input"],
            endpoint="/"
            + self.normalizer.sanitizer.convert_case(usecase.name, NamingCase.KEBAB_CASE),
            input_fields=self._field_names(usecase.input_fields),
        )
        return self._artifact(
            ArtifactKind.ACTION, location.type_name, location, imports, body
        )

    def build_presenter(
        self, usecase: UseCase, mode: FieldResolutionMode
    ) -> ResolvedArtifact:
        """Implementation of a use case's output port."""
        location = self.layout.locate(ArtifactKind.PRESENTER, usecase.name)
        names = self.use_case_names(usecase)

        imports = [
            self._use_case_import(usecase, location.directory, names["output"]),
            self._use_case_import(usecase, location.directory, names["output_port"]),
        ]
        body = self._body(
            output_name=names["output"],
            output_port_name=names["output_port"],
            output_fields=self._field_names(usecase.output_fields),
        )
        return self._artifact(
            ArtifactKind.PRESENTER, location.type_name, location, imports, body
        )

    def build_adapter(self, kind: ArtifactKind, entity: Domain) -> ResolvedArtifact:
        """SQL or NoSQL implementation of an entity's repository port."""
        technology = ADAPTER_TECHNOLOGIES[kind]
        location = self.layout.locate(kind, entity.name)
        client_type = self.layout.type_name(
            ArtifactKind.INFRASTRUCTURE_IMPL, technology.client_name
        )

        imports = [
            self.dependencies.domain_import(entity, location.directory),
            self.dependencies.repository_import(entity, location.directory),
            self.layout.import_of(
                ArtifactKind.INFRASTRUCTURE_IMPL,
                technology.client_name,
                location.directory,
            ),
        ]
        body = self._body(
            technology=technology.value,
            entity_type=self.normalizer.type_name(entity.name),
            entity_var=self.normalizer.member_name(entity.name),
            repository_type=self.layout.type_name(ArtifactKind.REPOSITORY, entity.name),
            client_type=client_type,
            client_member=self.normalizer.member_name(client_type),
            table_name=self.normalizer.sanitizer.convert_case(
                entity.name, NamingCase.SNAKE_CASE
            ),
            columns=[
                self.normalizer.member_name(attribute.name)
                for attribute in entity.attributes
            ],
            methods=self._repository_methods(entity),
        )
        return self._artifact(kind, location.type_name, location, imports, body)

    # Infrastructure layer

    def build_domain_impl(self, domain: Domain) -> ResolvedArtifact:
        """
        Infrastructure implementation of a domain.

        Subclasses the domain type and overrides each of its methods.
        Unresolved tokens were already reported by the domain artifact,
        so this one carries no warnings.
        """
        location = self.layout.locate(ArtifactKind.DOMAIN_IMPL, domain.name)
        scope = _TypeScope(self)
        methods = [
            self._method(method, f"{domain.name}.{method.name}", scope)
            for method in domain.methods
        ]

        imports = self.dependencies.collect_impl_dependencies(domain, scope.resolved)
        body = self._body(
            base_type=self.normalizer.type_name(domain.name),
            base_import=imports[0],
            type_import_groups=group_imports(imports[1:]),
            methods=methods,
            std_imports=scope.std_imports(),
        )
        return self._artifact(
            ArtifactKind.DOMAIN_IMPL, location.type_name, location, imports, body
        )

    def build_infrastructure(self, technology: PersistenceTechnology) -> ResolvedArtifact:
        """Database client scaffold for one persistence technology."""
        location = self.layout.locate(
            ArtifactKind.INFRASTRUCTURE_IMPL, technology.client_name
        )
        body = self._body(technology=technology.value)
        return self._artifact(
            ArtifactKind.INFRASTRUCTURE_IMPL, location.type_name, location, [], body
        )

    def build_readme(self, paths: Sequence[str]) -> ResolvedArtifact:
        """Project overview listing every generated file."""
        location = self.layout.locate(ArtifactKind.README, "")
        body = self._body(
            project_name=self.schema.project_name,
            language=self.profile.language_name,
            domains=[
                {"name": domain.name, "domain_type": domain.domain_type.value}
                for domain in self.schema.domains
            ],
            usecases=[usecase.name for usecase in self.schema.usecases],
            files=list(paths),
        )
        return self._artifact(
            ArtifactKind.README, self.schema.project_name, location, [], body
        )

    # Helpers

    def parameters(self, method: Method) -> List[Tuple[str, str]]:
        """
        (name, type token) of each method input.

        `name: Type` keeps its normalized name. A bare `Type` at position
        i gets the first of arg<i>, arg<i+1>, ... not already used in the
        same parameter list.
        """
        tokens = [token.rpartition(":") for token in method.input_tokens()]
        taken = {
            self.normalizer.member_name(name) for name, _, _ in tokens if name.strip()
        }

        params = []
        for index, (name, _, declared) in enumerate(tokens):
            if name.strip():
                params.append((self.normalizer.member_name(name), declared))
                continue
            number = index
            while f"arg{number}" in taken:
                number += 1
            taken.add(f"arg{number}")
            params.append((f"arg{number}", declared))
        return params

    def _method(self, method: Method, where: str, scope: _TypeScope) -> Dict[str, Any]:
        params = [
            {"name": name, "type": scope.type_of(declared, f"{where}({name})")}
            for name, declared in self.parameters(method)
        ]

        return {
            "name": self.normalizer.member_name(method.name),
            "params": params,
            "output": scope.type_of(method.output, f"{where} -> output"),
        }

    def _fields(
        self,
        usecase: UseCase,
        fields,
        mode: FieldResolutionMode,
        scope: _TypeScope,
    ) -> List[Dict[str, Any]]:
        result = []
        for usecase_field in fields:
            resolved = self.resolver.resolve_field(usecase_field, mode)
            result.append(
                {
                    "name": self.normalizer.member_name(usecase_field.name),
                    "raw_name": usecase_field.name,
                    "type": scope.add(resolved, f"{usecase.name}.{usecase_field.name}"),
                }
            )
        return result

    def _field_names(self, fields) -> List[Dict[str, str]]:
        return [
            {
                "name": self.normalizer.member_name(usecase_field.name),
                "raw_name": usecase_field.name,
            }
            for usecase_field in fields
        ]

    def _repository_methods(self, entity: Domain) -> List[Dict[str, Any]]:
        return self.profile.repository_methods(
            self.normalizer.type_name(entity.name),
            self.normalizer.member_name(entity.name),
        )

    def _use_case_import(
        self, usecase: UseCase, from_dir: str, name: str = ""
    ) -> ImportRef:
        return self.layout.import_of(ArtifactKind.USE_CASE, usecase.name, from_dir, name)

    def _body(self, **values: Any) -> Dict[str, Any]:
        values["add_comments"] = self.add_comments
        values["comment_prefix"] = self.profile.comment_prefix
        return values

    def _artifact(
        self,
        kind: ArtifactKind,
        name: str,
        location,
        imports: Sequence[ImportRef],
        body: Dict[str, Any],
        scope: Optional[_TypeScope] = None,
    ) -> ResolvedArtifact:
        warnings: Tuple[str, ...] = tuple(scope.warnings) if scope else ()
        logger.debug(
            "Built %s artifact '%s' with %d import(s)", kind.value, name, len(imports)
        )
        return ResolvedArtifact(
            kind=kind,
            name=name,
            file_name=location.file_name,
            path=location.path,
            imports=tuple(imports),
            body=body,
            warnings=warnings,
        )
