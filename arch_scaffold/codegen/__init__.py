"""
Layered project generation.

Compiles a schema of domains and use cases into a multi-layer source
tree for one of the registered output languages.
"""

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.errors import GeneratorError, MalformedSchema, UnsupportedProfile
from .core.generator import (
    GeneratedFile,
    GenerationResult,
    ProjectGenerator,
    generate_project,
)
from .core.types import FallbackPolicy
from .core.schema import FieldResolutionMode, parse_schema
from .registry import (
    ProfileRegistry,
    RegistryError,
    get_language_info,
    get_profile,
    get_registry,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)

__all__ = [
    "ProfileRegistry",
    "RegistryError",
    "ProjectGenerator",
    "GenerationResult",
    "GeneratedFile",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "GeneratorError",
    "MalformedSchema",
    "UnsupportedProfile",
    "FallbackPolicy",
    "FieldResolutionMode",
    "parse_schema",
    "generate_project",
    "get_profile",
    "get_registry",
    "get_language_info",
    "is_language_supported",
    "list_all_language_info",
    "list_supported_languages",
]
