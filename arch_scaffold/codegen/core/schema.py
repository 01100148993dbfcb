"""
Schema model for project generation.

Converts the boundary JSON document (projectName, language, domains,
usecases) into frozen dataclasses the rest of the pipeline reads.
Nothing downstream mutates these objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ...logging_config import get_logger
from .errors import MalformedSchema

logger = get_logger(__name__)

DEFAULT_PROJECT_NAME = "project"


class DomainType(Enum):
    """Kinds of domain concept."""

    ENTITY = "entity"
    VALUE_OBJECT = "valueObject"
    DOMAIN_SERVICE = "domainService"


class FieldResolutionMode(Enum):
    """How a use-case field's type token is derived."""

    NAME_AS_TYPE = "nameAsType"  # field name, first letter upper-cased
    DECLARED_TYPE = "declaredType"  # explicit `type` property


@dataclass(frozen=True)
class Attribute:
    """A typed data member of a domain."""

    name: str
    type: str = ""


@dataclass(frozen=True)
class Method:
    """A domain operation with positional inputs."""

    name: str
    inputs: str = ""
    output: str = ""

    def input_tokens(self) -> List[str]:
        """Split the comma-separated inputs, dropping empty entries."""
        return [token.strip() for token in self.inputs.split(",") if token.strip()]

    def input_names(self) -> List[str]:
        """Names given as `name: Type`, in order. Bare type inputs have none."""
        return [
            name.strip()
            for name, _, _ in (token.rpartition(":") for token in self.input_tokens())
            if name.strip()
        ]


@dataclass(frozen=True)
class Domain:
    """An entity, value object or domain service."""

    name: str
    domain_type: DomainType
    attributes: Tuple[Attribute, ...] = ()
    methods: Tuple[Method, ...] = ()

    @property
    def is_entity(self) -> bool:
        return self.domain_type == DomainType.ENTITY

    def get_attribute(self, name: str) -> Optional[Attribute]:
        """Get attribute by name."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


@dataclass(frozen=True)
class UseCaseField:
    """An input or output field of a use case."""

    name: str
    type: Optional[str] = None


@dataclass(frozen=True)
class UseCase:
    """An application operation over domains."""

    name: str
    input_fields: Tuple[UseCaseField, ...] = ()
    output_fields: Tuple[UseCaseField, ...] = ()
    field_resolution: Optional[FieldResolutionMode] = None

    @property
    def all_fields(self) -> Tuple[UseCaseField, ...]:
        """Inputs first, then outputs, each in declaration order."""
        return self.input_fields + self.output_fields


@dataclass(frozen=True)
class ProjectSchema:
    """The complete, validated generation request."""

    project_name: str
    language: str
    domains: Tuple[Domain, ...] = ()
    usecases: Tuple[UseCase, ...] = ()
    field_resolution: Optional[FieldResolutionMode] = None

    @property
    def entities(self) -> Tuple[Domain, ...]:
        return tuple(domain for domain in self.domains if domain.is_entity)

    def resolution_mode_for(
        self, usecase: UseCase, default: FieldResolutionMode
    ) -> FieldResolutionMode:
        """Use case setting, then schema setting, then the given default."""
        return usecase.field_resolution or self.field_resolution or default


@dataclass
class _Problems:
    """Collects validation problems so they can be reported together."""

    items: List[str] = field(default_factory=list)

    def add(self, path: str, message: str) -> None:
        self.items.append(f"{path}: {message}")


def parse_schema(data: Any) -> ProjectSchema:
    """
    Validate a schema document and build the schema model.

    Args:
        data: Decoded JSON document

    Returns:
        ProjectSchema

    Raises:
        MalformedSchema: If the document has the wrong shape. Every
            problem found is listed, not just the first one.
    """
    problems = _Problems()

    if not isinstance(data, dict):
        raise MalformedSchema([f"$: expected an object, got {type(data).__name__}"])

    project_name = data.get("projectName")
    if project_name is None:
        project_name = DEFAULT_PROJECT_NAME
    elif not isinstance(project_name, str):
        problems.add("projectName", "must be a string")
        project_name = DEFAULT_PROJECT_NAME
    elif not project_name.strip():
        project_name = DEFAULT_PROJECT_NAME

    language = schema_language(data)
    if language is None:
        problems.add("language", "must be a non-empty string")
        language = ""

    schema_mode = _parse_mode(data.get("fieldResolution"), "fieldResolution", problems)

    domains = tuple(
        domain
        for index, item in enumerate(_require_list(data, "domains", "$", problems))
        for domain in [_parse_domain(item, f"domains[{index}]", problems)]
        if domain is not None
    )
    usecases = tuple(
        usecase
        for index, item in enumerate(_require_list(data, "usecases", "$", problems))
        for usecase in [_parse_usecase(item, f"usecases[{index}]", problems)]
        if usecase is not None
    )

    _check_unique([d.name for d in domains], "domains", problems)
    _check_unique([u.name for u in usecases], "usecases", problems)

    if problems.items:
        logger.debug("Schema validation failed with %d problem(s)", len(problems.items))
        raise MalformedSchema(problems.items)

    logger.debug(
        "Parsed schema '%s': %d domain(s), %d use case(s)",
        project_name,
        len(domains),
        len(usecases),
    )
    return ProjectSchema(
        project_name=project_name.strip(),
        language=language.strip(),
        domains=domains,
        usecases=usecases,
        field_resolution=schema_mode,
    )


def schema_language(data: Any) -> Optional[str]:
    """Stripped `language` of a schema document, None if it is missing or blank."""
    if not isinstance(data, dict):
        return None
    language = data.get("language")
    if not isinstance(language, str) or not language.strip():
        return None
    return language.strip()


def _require_list(
    data: Dict[str, Any], key: str, path: str, problems: _Problems, required=True
) -> List[Any]:
    value = data.get(key)
    if value is None and not required:
        return []
    if not isinstance(value, list):
        where = key if path == "$" else f"{path}.{key}"
        problems.add(where, "must be an array")
        return []
    return value


def _optional_string(
    data: Dict[str, Any], key: str, path: str, problems: _Problems
) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        problems.add(f"{path}.{key}", "must be a string")
        return ""
    return value


def _required_name(data: Dict[str, Any], path: str, problems: _Problems) -> Optional[str]:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        problems.add(f"{path}.name", "must be a non-empty string")
        return None
    return name.strip()


def _parse_mode(
    value: Any, path: str, problems: _Problems
) -> Optional[FieldResolutionMode]:
    if value is None:
        return None
    try:
        return FieldResolutionMode(value)
    except ValueError:
        valid = ", ".join(mode.value for mode in FieldResolutionMode)
        problems.add(path, f"must be one of: {valid}")
        return None


def _parse_domain(item: Any, path: str, problems: _Problems) -> Optional[Domain]:
    if not isinstance(item, dict):
        problems.add(path, "must be an object")
        return None

    name = _required_name(item, path, problems)

    domain_type = None
    try:
        domain_type = DomainType(item.get("domainType"))
    except ValueError:
        valid = ", ".join(t.value for t in DomainType)
        problems.add(f"{path}.domainType", f"must be one of: {valid}")

    attributes = []
    for index, raw in enumerate(
        _require_list(item, "attributes", path, problems, required=False)
    ):
        attr_path = f"{path}.attributes[{index}]"
        if not isinstance(raw, dict):
            problems.add(attr_path, "must be an object")
            continue
        attributes.append(
            Attribute(
                name=_optional_string(raw, "name", attr_path, problems).strip(),
                type=_optional_string(raw, "type", attr_path, problems).strip(),
            )
        )

    methods = []
    for index, raw in enumerate(
        _require_list(item, "methods", path, problems, required=False)
    ):
        method_path = f"{path}.methods[{index}]"
        if not isinstance(raw, dict):
            problems.add(method_path, "must be an object")
            continue
        methods.append(
            Method(
                name=_optional_string(raw, "name", method_path, problems).strip(),
                inputs=_optional_string(raw, "inputs", method_path, problems),
                output=_optional_string(raw, "output", method_path, problems).strip(),
            )
        )

    if name is None or domain_type is None:
        return None
    return Domain(
        name=name,
        domain_type=domain_type,
        attributes=tuple(attributes),
        methods=tuple(methods),
    )


def _parse_fields(
    item: Dict[str, Any], key: str, path: str, problems: _Problems
) -> Tuple[UseCaseField, ...]:
    fields = []
    for index, raw in enumerate(_require_list(item, key, path, problems, required=False)):
        field_path = f"{path}.{key}[{index}]"
        if not isinstance(raw, dict):
            problems.add(field_path, "must be an object")
            continue
        declared = raw.get("type")
        if declared is not None and not isinstance(declared, str):
            problems.add(f"{field_path}.type", "must be a string")
            declared = None
        fields.append(
            UseCaseField(
                name=_optional_string(raw, "name", field_path, problems).strip(),
                type=declared.strip() if declared is not None else None,
            )
        )
    return tuple(fields)


def _parse_usecase(item: Any, path: str, problems: _Problems) -> Optional[UseCase]:
    if not isinstance(item, dict):
        problems.add(path, "must be an object")
        return None

    name = _required_name(item, path, problems)
    input_fields = _parse_fields(item, "inputFields", path, problems)
    output_fields = _parse_fields(item, "outputFields", path, problems)
    mode = _parse_mode(item.get("fieldResolution"), f"{path}.fieldResolution", problems)

    if name is None:
        return None
    return UseCase(
        name=name,
        input_fields=input_fields,
        output_fields=output_fields,
        field_resolution=mode,
    )


def _check_unique(names: List[str], path: str, problems: _Problems) -> None:
    seen = set()
    for name in names:
        if name in seen:
            problems.add(path, f"duplicate name '{name}'")
        seen.add(name)
