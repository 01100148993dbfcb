"""
arch-scaffold: generate layered project skeletons from a domain schema.
"""

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    ProjectGenerator,
    generate_project,
    list_supported_languages,
)

__version__ = "0.1.0"

__all__ = [
    "GenerationResult",
    "GeneratorConfig",
    "ProjectGenerator",
    "generate_project",
    "list_supported_languages",
    "__version__",
]
