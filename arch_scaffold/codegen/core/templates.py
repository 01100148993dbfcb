"""
Template engine wrapper for code generation.

TemplateEngine wraps a strict Jinja2 environment. TemplateRegistry is
the immutable mapping from every ArtifactKind to its template; it is
built once and handed to the generator, never kept as module state.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
)
from jinja2 import TemplateError as JinjaTemplateError

from ...logging_config import get_logger
from .artifacts import ArtifactKind
from .errors import GeneratorError, UnknownArtifactKind

logger = get_logger(__name__)

TEMPLATE_SUFFIX = ".j2"


class TemplateError(GeneratorError):
    """Exception raised for template-related errors."""

    code = "template_error"


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        templates: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
            templates: In-memory templates by name, used when no directory is given
        """
        self.template_dir = template_dir
        if template_dir is not None:
            if not template_dir.is_dir():
                raise TemplateError(f"Template directory not found: {template_dir}")
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader(dict(templates or {}))

        self._env = Environment(
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, template_name: str) -> Template:
        """
        Load and compile a template.

        Raises:
            TemplateError: If the template is missing or does not compile
        """
        try:
            return self._env.get_template(template_name)
        except TemplateNotFound:
            raise TemplateError(f"Template not found: {template_name}")
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to load template {template_name}: {e}")

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return template_name in self._env.list_templates()


class TemplateRegistry:
    """
    Compiled template for every artifact kind of one profile.

    Construction fails if any kind lacks a template, so a registry that
    exists can render every artifact.
    """

    def __init__(self, templates: Mapping[ArtifactKind, Template]):
        missing = [kind.value for kind in ArtifactKind if kind not in templates]
        if missing:
            raise TemplateError(f"Missing template(s) for: {', '.join(missing)}")
        self._templates = MappingProxyType(dict(templates))

    @classmethod
    def from_engine(cls, engine: TemplateEngine, extension: str) -> "TemplateRegistry":
        """
        Compile one template per kind from an engine.

        The template of kind K is named `<K.value><extension>.j2`;
        README uses `readme.md.j2` whatever the profile.
        """
        templates = {}
        missing = []
        for kind in ArtifactKind:
            name = template_name_for(kind, extension)
            if not engine.template_exists(name):
                missing.append(name)
                continue
            templates[kind] = engine.get_template(name)

        if missing:
            raise TemplateError(f"Missing template file(s): {', '.join(missing)}")

        logger.debug("Compiled %d templates", len(templates))
        return cls(templates)

    @classmethod
    def from_directory(cls, template_dir: Path, extension: str) -> "TemplateRegistry":
        return cls.from_engine(TemplateEngine(template_dir), extension)

    @classmethod
    def from_strings(
        cls, sources: Mapping[ArtifactKind, str], extension: str = ""
    ) -> "TemplateRegistry":
        """Build a registry from in-memory template sources."""
        engine = TemplateEngine(
            templates={
                template_name_for(kind, extension): source
                for kind, source in sources.items()
            }
        )
        return cls.from_engine(engine, extension)

    def get(self, kind: ArtifactKind) -> Template:
        """
        Template for an artifact kind.

        Raises:
            UnknownArtifactKind: If `kind` is not an ArtifactKind
        """
        try:
            return self._templates[kind]
        except KeyError:
            raise UnknownArtifactKind(f"No template for artifact kind: {kind!r}")

    def with_template(self, kind: ArtifactKind, template: Template) -> "TemplateRegistry":
        """Copy of this registry with one template replaced."""
        templates = dict(self._templates)
        templates[kind] = template
        return TemplateRegistry(templates)


def template_name_for(kind: ArtifactKind, extension: str) -> str:
    """File name of the template for `kind`."""
    if kind == ArtifactKind.README:
        return f"readme.md{TEMPLATE_SUFFIX}"
    return f"{kind.value}{extension}{TEMPLATE_SUFFIX}"
