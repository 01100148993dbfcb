"""
Error taxonomy shared across the generation pipeline.

Unresolvable type references are not errors: they degrade to the
profile's unknown type and are reported as warnings on the result.
"""

from typing import Iterable, List


class GeneratorError(Exception):
    """Base exception for project generation errors."""

    code = "generation_error"


class UnsupportedProfile(GeneratorError):
    """Requested output-language profile is not registered."""

    code = "unsupported_profile"

    def __init__(self, language: str, supported: Iterable[str]):
        self.language = language
        self.supported: List[str] = sorted(supported)
        available = ", ".join(self.supported) or "none"
        super().__init__(
            f"Unsupported output language '{language}'. Available: {available}"
        )


class MalformedSchema(GeneratorError):
    """Structurally invalid schema document."""

    code = "malformed_schema"

    def __init__(self, problems: Iterable[str]):
        self.problems: List[str] = list(problems)
        shown = "; ".join(self.problems[:3])
        more = len(self.problems) - 3
        if more > 0:
            shown += f" (and {more} more)"
        super().__init__(f"Malformed schema: {shown}")


class RenderingFailure(GeneratorError):
    """The template engine could not produce text for one artifact."""

    code = "rendering_failure"

    def __init__(self, kind: str, name: str, reason: str):
        self.kind = kind
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to render {kind} '{name}': {reason}")


class UnknownArtifactKind(GeneratorError):
    """An artifact kind has no renderer. Always a programming error."""

    code = "unknown_artifact_kind"
