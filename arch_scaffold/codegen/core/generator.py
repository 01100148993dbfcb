"""
Generation Orchestrator.

ProjectGenerator walks a schema through a fixed sequence of states,
builds and renders every artifact in deterministic order and packs the
resulting file tree into an archive. Each call to generate() runs in
its own _GenerationRun, so one generator can serve concurrent runs.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ...logging_config import get_logger
from .archive import build_archive
from .artifacts import ArtifactKind, ResolvedArtifact
from .builders import ADAPTER_TECHNOLOGIES, ArtifactBuilder
from .config import GeneratorConfig, load_config
from .dependencies import DOMAIN_ARTIFACT_KINDS
from .errors import GeneratorError, MalformedSchema, RenderingFailure
from .materializer import ArtifactMaterializer
from .profile import LanguageProfile
from .schema import DEFAULT_PROJECT_NAME, ProjectSchema, parse_schema, schema_language
from .templates import TemplateRegistry
from .types import TypeResolver

logger = get_logger(__name__)

Archiver = Callable[[Iterable[Tuple[str, str]]], bytes]


class GenerationState(Enum):
    """States of one generation run."""

    IDLE = "idle"
    VALIDATING_SCHEMA = "validating_schema"
    GENERATING_DOMAIN_LAYER = "generating_domain_layer"
    GENERATING_USECASE_LAYER = "generating_usecase_layer"
    GENERATING_ADAPTER_LAYER = "generating_adapter_layer"
    GENERATING_INFRASTRUCTURE_LAYER = "generating_infrastructure_layer"
    PACKAGING = "packaging"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class GeneratedFile:
    """One file of the generated tree."""

    path: str
    content: str
    kind: Optional[ArtifactKind] = None
    placeholder: bool = False


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Optional[List[GeneratedFile]] = None,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        archive: bytes = b"",
    ):
        """
        Initialize generation result.

        Args:
            files: Generated files in emission order
            warnings: Unresolved references and rendering failures
            metadata: Additional metadata about generation
            archive: Zip archive of `files`
        """
        self.files = files or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.archive = archive
        self.success = True
        self.error_code: Optional[str] = None
        self.error_message: Optional[str] = None
        self.details: List[str] = []
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls,
        message: str,
        code: str = GeneratorError.code,
        details: Optional[List[str]] = None,
        exception: Optional[Exception] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(metadata=metadata)
        result.success = False
        result.error_code = code
        result.error_message = message
        result.details = list(details or [])
        result.exception = exception
        return result

    @classmethod
    def from_exception(
        cls, exception: GeneratorError, metadata: Optional[Dict[str, Any]] = None
    ) -> "GenerationResult":
        """Failed result for a generator exception."""
        details = getattr(exception, "problems", None)
        if details is None and hasattr(exception, "supported"):
            details = [f"supported: {name}" for name in exception.supported]
        return cls.error(
            str(exception),
            code=exception.code,
            details=details,
            exception=exception,
            metadata=metadata,
        )

    @property
    def paths(self) -> List[str]:
        return [generated.path for generated in self.files]

    def get_file(self, path: str) -> Optional[GeneratedFile]:
        """Get a generated file by archive path."""
        for generated in self.files:
            if generated.path == path:
                return generated
        return None

    def to_error_response(self) -> Dict[str, Any]:
        """Structured error body for a failed result."""
        return {
            "error": self.error_code,
            "message": self.error_message,
            "details": list(self.details),
        }


class ProjectGenerator:
    """Generates a layered project for one output-language profile."""

    def __init__(
        self,
        profile: LanguageProfile,
        templates: Optional[TemplateRegistry] = None,
        config: Optional[GeneratorConfig] = None,
        archiver: Archiver = build_archive,
    ):
        """
        Initialize generator.

        Args:
            profile: Output-language profile
            templates: Template registry, compiled from the profile's
                template directory when omitted
            config: Generation settings, profile defaults when omitted
            archiver: Packs (path, text) pairs into bytes
        """
        self.profile = profile
        self.templates = templates or TemplateRegistry.from_directory(
            profile.get_template_directory(), profile.file_extension
        )
        self.config = config or load_config(profile.language_name)
        self.archiver = archiver
        self.materializer = ArtifactMaterializer(self.templates)

    @property
    def language_name(self) -> str:
        return self.profile.language_name

    def generate(self, source: Union[ProjectSchema, Mapping[str, Any]]) -> GenerationResult:
        """
        Generate a project from a schema document or a parsed schema.

        Malformed input gives a failed result; rendering failures give
        placeholder files and warnings on a successful result.
        """
        return _GenerationRun(self).execute(source)


class _GenerationRun:
    """State owned by a single generate() call."""

    def __init__(self, generator: ProjectGenerator):
        self.generator = generator
        self.profile = generator.profile
        self.config = generator.config
        self.state = GenerationState.IDLE
        self.history: List[GenerationState] = [self.state]
        self.files: List[GeneratedFile] = []
        self.warnings: List[str] = []

    def execute(self, source) -> GenerationResult:
        self._transition(GenerationState.VALIDATING_SCHEMA)
        try:
            schema = source if isinstance(source, ProjectSchema) else parse_schema(source)
            builder = self._create_builder(schema)
            self._check_paths(schema, builder)
        except MalformedSchema as e:
            self._transition(GenerationState.FAILED)
            logger.error("Schema rejected: %s", e)
            return GenerationResult.from_exception(e, metadata=self._metadata())

        self._transition(GenerationState.GENERATING_DOMAIN_LAYER)
        for domain in schema.domains:
            self._emit(builder.build_domain(domain))
            if domain.is_entity:
                self._emit(builder.build_repository(domain))

        self._transition(GenerationState.GENERATING_USECASE_LAYER)
        modes = {}
        for usecase in schema.usecases:
            modes[usecase.name] = schema.resolution_mode_for(
                usecase, self.config.field_resolution
            )
            self._emit(builder.build_use_case(usecase, modes[usecase.name]))

        self._transition(GenerationState.GENERATING_ADAPTER_LAYER)
        for usecase in schema.usecases:
            self._emit(builder.build_action(usecase, modes[usecase.name]))
            self._emit(builder.build_presenter(usecase, modes[usecase.name]))
        for entity in schema.entities:
            for kind in self._adapter_kinds():
                self._emit(builder.build_adapter(kind, entity))

        self._transition(GenerationState.GENERATING_INFRASTRUCTURE_LAYER)
        for domain in schema.domains:
            self._emit(builder.build_domain_impl(domain))
        for technology in self.profile.persistence_technologies:
            self._emit(builder.build_infrastructure(technology))
        if self.config.include_readme:
            self._emit(builder.build_readme(self._planned_paths()))

        self._transition(GenerationState.PACKAGING)
        self.files.extend(self._package_markers())
        if self.config.nest_under_project:
            root = project_directory(schema.project_name)
            self.files = [
                GeneratedFile(f"{root}/{f.path}", f.content, f.kind, f.placeholder)
                for f in self.files
            ]
        archive = self.generator.archiver([(f.path, f.content) for f in self.files])

        self._transition(GenerationState.DONE)
        metadata = self._metadata(schema)
        logger.info(
            "Generated %d file(s) for '%s' (%s) with %d warning(s)",
            len(self.files),
            schema.project_name,
            self.profile.language_name,
            len(self.warnings),
        )
        return GenerationResult(self.files, self.warnings, metadata, archive)

    def _create_builder(self, schema: ProjectSchema) -> ArtifactBuilder:
        resolver = TypeResolver(
            self.profile.primitive_types,
            schema.domains,
            self.profile.unknown_type,
            self.config.fallback_policy,
        )
        return ArtifactBuilder(
            schema,
            self.profile,
            resolver,
            self.profile.create_normalizer(),
            add_comments=self.config.add_comments,
        )

    def _transition(self, state: GenerationState):
        logger.debug("Generation state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _emit(self, artifact: ResolvedArtifact):
        for warning in artifact.warnings:
            logger.warning("%s", warning)
        self.warnings.extend(artifact.warnings)

        placeholder = False
        try:
            text = self.generator.materializer.materialize(artifact)
        except RenderingFailure as e:
            logger.warning("%s", e)
            self.warnings.append(str(e))
            text = self._placeholder(artifact, e)
            placeholder = True

        logger.debug("Emitted %s", artifact.path)
        self.files.append(GeneratedFile(artifact.path, text, artifact.kind, placeholder))

    def _placeholder(self, artifact: ResolvedArtifact, failure: RenderingFailure) -> str:
        prefix = self.profile.comment_prefix
        return (
            f"{prefix} PLACEHOLDER: could not render {artifact.kind.value} "
            f"'{artifact.name}'\n{prefix} {failure.reason}\n"
        )

    def _adapter_kinds(self) -> List[ArtifactKind]:
        technologies = self.profile.persistence_technologies
        return [
            kind for kind, technology in ADAPTER_TECHNOLOGIES.items()
            if technology in technologies
        ]

    def _check_paths(self, schema: ProjectSchema, builder: ArtifactBuilder):
        """
        Reject schemas whose generated code could not be written or loaded.

        Elements mapping to the same output file, members normalizing to
        the same identifier and imported names shadowing a name the
        importing module defines are all reported together.
        """
        layout = builder.layout
        owners: Dict[str, str] = {}
        problems: List[str] = []

        def claim(kind: ArtifactKind, raw_name: str, owner: str):
            path = layout.locate(kind, raw_name).path
            if path in owners and owners[path] != owner:
                problems.append(
                    f"{path}: generated for both {owners[path]} and {owner}"
                )
            owners.setdefault(path, owner)

        for index, domain in enumerate(schema.domains):
            owner = f"domains[{index}] '{domain.name}'"
            claim(DOMAIN_ARTIFACT_KINDS[domain.domain_type], domain.name, owner)
            claim(ArtifactKind.DOMAIN_IMPL, domain.name, owner)
            if domain.is_entity:
                claim(ArtifactKind.REPOSITORY, domain.name, owner)
                for kind in self._adapter_kinds():
                    claim(kind, domain.name, owner)

            path = f"domains[{index}]"
            members = [a.name for a in domain.attributes] + [m.name for m in domain.methods]
            problems.extend(_clashing_members(builder, members, f"{path}.members"))
            for number, method in enumerate(domain.methods):
                problems.extend(
                    _clashing_members(
                        builder, method.input_names(), f"{path}.methods[{number}].inputs"
                    )
                )
            problems.extend(_shadowed_imports(builder.build_domain_impl(domain), path))

        for index, usecase in enumerate(schema.usecases):
            owner = f"usecases[{index}] '{usecase.name}'"
            for kind in (ArtifactKind.USE_CASE, ArtifactKind.ACTION, ArtifactKind.PRESENTER):
                claim(kind, usecase.name, owner)

            path = f"usecases[{index}]"
            for key, fields in (
                ("inputFields", usecase.input_fields),
                ("outputFields", usecase.output_fields),
            ):
                problems.extend(
                    _clashing_members(builder, [f.name for f in fields], f"{path}.{key}")
                )

            mode = schema.resolution_mode_for(usecase, self.config.field_resolution)
            problems.extend(
                _shadowed_imports(
                    builder.build_use_case(usecase, mode),
                    path,
                    builder.use_case_names(usecase).values(),
                )
            )

        if problems:
            raise MalformedSchema(problems)

    def _planned_paths(self) -> List[str]:
        return [generated.path for generated in self.files]

    def _package_markers(self) -> List[GeneratedFile]:
        """Empty package marker in every directory holding generated code."""
        marker = self.profile.package_marker
        if not marker or not self.config.emit_package_markers:
            return []

        directories: List[str] = []
        for generated in self.files:
            if not generated.path.endswith(self.profile.file_extension):
                continue
            parts = generated.path.split("/")[:-1]
            for depth in range(len(parts) + 1):
                directory = "/".join(parts[:depth])
                if directory not in directories:
                    directories.append(directory)

        return [
            GeneratedFile(f"{directory}/{marker}" if directory else marker, "")
            for directory in directories
        ]

    def _metadata(self, schema: Optional[ProjectSchema] = None) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {
            "language": self.profile.language_name,
            "file_extension": self.profile.file_extension,
            "fallback_policy": self.config.fallback_policy.value,
            "states": [state.value for state in self.history],
        }
        if schema is not None:
            metadata.update(
                {
                    "project_name": schema.project_name,
                    "domain_count": len(schema.domains),
                    "entity_count": len(schema.entities),
                    "usecase_count": len(schema.usecases),
                    "file_count": len(self.files),
                    "placeholder_count": sum(1 for f in self.files if f.placeholder),
                }
            )
        return metadata


def _clashing_members(builder: ArtifactBuilder, names: Iterable[str], path: str) -> List[str]:
    """Problems for names that normalize to the same member identifier."""
    problems = []
    seen: Dict[str, str] = {}
    for name in names:
        member = builder.normalizer.member_name(name)
        if member not in seen:
            seen[member] = name
        elif seen[member] == name:
            problems.append(f"{path}: duplicate name '{name}'")
        else:
            problems.append(
                f"{path}: '{seen[member]}' and '{name}' both become '{member}'"
            )
    return problems


def _shadowed_imports(
    artifact: ResolvedArtifact, path: str, defined: Iterable[str] = ()
) -> List[str]:
    """Problems for imported names the importing module also defines."""
    names = {artifact.name, *defined}
    return [
        f"{path}: imports '{ref.name}', which {artifact.path} also defines"
        for ref in artifact.imports
        if ref.name in names
    ]


def project_directory(project_name: str) -> str:
    """Archive directory for a project name."""
    cleaned = re.sub(r"[^\w.-]+", "_", project_name.strip()).strip("._")
    return cleaned or DEFAULT_PROJECT_NAME


def generate_project(
    payload: Any,
    registry=None,
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
    templates: Optional[TemplateRegistry] = None,
) -> GenerationResult:
    """
    Generate a project from a schema document with error handling.

    The profile is looked up before anything else, so an unsupported
    language produces no work at all.

    Args:
        payload: Decoded schema document
        registry: Profile registry, the global one when omitted
        config: GeneratorConfig or dict of overrides for the profile defaults
        templates: Template registry overriding the profile's own

    Returns:
        GenerationResult with files, archive, warnings and metadata, or
        a failed result carrying a structured error
    """
    from ..registry import get_registry

    language = schema_language(payload)
    if language is None:
        # Without a language there is no profile; report every problem instead
        try:
            parse_schema(payload)
        except MalformedSchema as e:
            logger.error("Schema rejected: %s", e)
            return GenerationResult.from_exception(e)

    try:
        profile = (registry or get_registry()).get_profile(language)
        if not isinstance(config, GeneratorConfig):
            config = load_config(profile.language_name, custom_config=config)
        generator = ProjectGenerator(profile, templates, config)
    except GeneratorError as e:
        logger.error("%s", e)
        return GenerationResult.from_exception(e)

    return generator.generate(payload)
