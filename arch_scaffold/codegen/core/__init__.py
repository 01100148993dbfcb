"""
Core project generation components.

Provides the schema model, type resolution, naming, dependency
analysis, rendering and orchestration shared by all language profiles.
"""

from .archive import build_archive, write_archive
from .artifacts import ArtifactKind, ArtifactLayout, ImportRef, ResolvedArtifact
from .builders import ArtifactBuilder
from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .dependencies import DependencyGraphBuilder, RepositoryInference, RepositoryRef
from .errors import (
    GeneratorError,
    MalformedSchema,
    RenderingFailure,
    UnknownArtifactKind,
    UnsupportedProfile,
)
from .generator import (
    GeneratedFile,
    GenerationResult,
    GenerationState,
    ProjectGenerator,
    generate_project,
)
from .materializer import ArtifactMaterializer
from .naming import IdentifierNormalizer, IdentifierRole, NameSanitizer, NamingCase
from .profile import LanguageProfile, PersistenceTechnology
from .schema import (
    Attribute,
    Domain,
    DomainType,
    FieldResolutionMode,
    Method,
    ProjectSchema,
    UseCase,
    UseCaseField,
    parse_schema,
)
from .templates import TemplateEngine, TemplateError, TemplateRegistry
from .types import FallbackPolicy, ResolvedType, TypeKind, TypeResolver, resolve

__all__ = [
    # Orchestration
    "ProjectGenerator",
    "GenerationResult",
    "GenerationState",
    "GeneratedFile",
    "generate_project",
    # Errors
    "GeneratorError",
    "UnsupportedProfile",
    "MalformedSchema",
    "RenderingFailure",
    "UnknownArtifactKind",
    # Schema model
    "Attribute",
    "Domain",
    "DomainType",
    "FieldResolutionMode",
    "Method",
    "ProjectSchema",
    "UseCase",
    "UseCaseField",
    "parse_schema",
    # Resolution and naming
    "FallbackPolicy",
    "ResolvedType",
    "TypeKind",
    "TypeResolver",
    "resolve",
    "IdentifierNormalizer",
    "IdentifierRole",
    "NameSanitizer",
    "NamingCase",
    # Artifacts
    "ArtifactKind",
    "ArtifactLayout",
    "ArtifactBuilder",
    "ImportRef",
    "ResolvedArtifact",
    "DependencyGraphBuilder",
    "RepositoryInference",
    "RepositoryRef",
    "ArtifactMaterializer",
    # Profiles
    "LanguageProfile",
    "PersistenceTechnology",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates and packaging
    "TemplateEngine",
    "TemplateError",
    "TemplateRegistry",
    "build_archive",
    "write_archive",
]
