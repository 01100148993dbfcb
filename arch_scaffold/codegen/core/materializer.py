"""
Artifact Materializer.

Maps a ResolvedArtifact to text through the template registry. It
never resolves types or computes imports; everything the template
needs is already in the artifact.
"""

from typing import Any, Mapping

from jinja2 import TemplateError as JinjaTemplateError

from ...logging_config import get_logger
from .artifacts import ArtifactKind, ResolvedArtifact
from .errors import RenderingFailure, UnknownArtifactKind
from .templates import TemplateRegistry

logger = get_logger(__name__)


class ArtifactMaterializer:
    """Renders resolved artifacts with one immutable template registry."""

    def __init__(self, templates: TemplateRegistry):
        self.templates = templates

    def render(self, kind: ArtifactKind, data: Mapping[str, Any]) -> str:
        """
        Render structured data with the template of `kind`.

        Raises:
            UnknownArtifactKind: If `kind` is not an ArtifactKind
            RenderingFailure: If the template engine cannot produce text
        """
        if not isinstance(kind, ArtifactKind):
            raise UnknownArtifactKind(f"Not an artifact kind: {kind!r}")

        template = self.templates.get(kind)
        name = str(data.get("name", ""))
        try:
            text = template.render(**data)
        except (JinjaTemplateError, TypeError, ValueError, AttributeError) as e:
            raise RenderingFailure(kind.value, name, str(e)) from e

        return format_code(text)

    def materialize(self, artifact: ResolvedArtifact) -> str:
        """Render one resolved artifact."""
        return self.render(artifact.kind, artifact.template_context())


def format_code(code: str) -> str:
    """
    Basic cleanup of rendered code.

    Strips trailing whitespace, collapses runs of blank lines to two and
    ends the text with exactly one newline.
    """
    formatted_lines = []
    blank_count = 0

    for line in code.split("\n"):
        stripped = line.rstrip()
        if not stripped:
            blank_count += 1
            if blank_count <= 2:
                formatted_lines.append("")
        else:
            blank_count = 0
            formatted_lines.append(stripped)

    return "\n".join(formatted_lines).strip("\n") + "\n"
