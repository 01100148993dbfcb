"""
Type resolution for schema type tokens.

A token resolves to exactly one of: a primitive of the active profile,
a reference to a domain of the schema, or an unresolved placeholder.
Resolution is a pure function of the token, the domains and the
profile's primitive set, so it is safe to share between threads.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Iterable, Optional

from .schema import Domain, FieldResolutionMode, UseCaseField


class TypeKind(Enum):
    """Resolution outcome."""

    PRIMITIVE = "primitive"
    DOMAIN = "domain"
    UNRESOLVED = "unresolved"


class FallbackPolicy(Enum):
    """What an unresolvable token becomes."""

    ANY = "any"  # the profile's unknown type
    PASSTHROUGH = "passthrough"  # the raw token, verbatim


@dataclass(frozen=True)
class ResolvedType:
    """
    Result of resolving one type token.

    `name` is what gets written into generated code for primitives and
    unresolved tokens; for domain references the caller derives the
    type name from `domain.name` through the identifier normalizer.
    """

    kind: TypeKind
    name: str
    token: str
    domain: Optional[Domain] = None

    @property
    def is_primitive(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE

    @property
    def is_domain(self) -> bool:
        return self.kind == TypeKind.DOMAIN

    @property
    def is_unresolved(self) -> bool:
        return self.kind == TypeKind.UNRESOLVED

    @property
    def is_entity(self) -> bool:
        return self.domain is not None and self.domain.is_entity


class TypeResolver:
    """Resolves type tokens against a profile's primitives and the schema domains."""

    def __init__(
        self,
        primitive_types: Iterable[str],
        domains: Iterable[Domain],
        unknown_type: str,
        fallback: FallbackPolicy = FallbackPolicy.ANY,
    ):
        """
        Initialize resolver.

        Args:
            primitive_types: Primitive type names of the output profile
            domains: All domains of the schema
            unknown_type: Type written for unresolved tokens under FallbackPolicy.ANY
            fallback: Policy applied to every unresolvable token
        """
        self.primitive_types: FrozenSet[str] = frozenset(primitive_types)
        self._domains = MappingProxyType({domain.name: domain for domain in domains})
        self.unknown_type = unknown_type
        self.fallback = fallback

    def resolve(self, token: Optional[str]) -> ResolvedType:
        """
        Resolve a type token.

        Order: empty, primitive, domain name, `Domain.attribute`
        projection (one hop: the attribute's declared type is classified
        but never itself projected), then the fallback policy.
        """
        token = (token or "").strip()
        if not token:
            return ResolvedType(TypeKind.UNRESOLVED, self.unknown_type, token)

        direct = self._classify(token)
        if direct is not None:
            return direct

        projected = self._project(token)
        if projected is not None:
            return projected

        return self._fallback(token, token)

    def resolve_field(
        self, field: UseCaseField, mode: FieldResolutionMode
    ) -> ResolvedType:
        """Resolve a use-case field under the given resolution mode."""
        return self.resolve(self.field_token(field, mode))

    def field_token(self, field: UseCaseField, mode: FieldResolutionMode) -> str:
        """Type token for a use-case field."""
        if mode == FieldResolutionMode.DECLARED_TYPE:
            return (field.type or "").strip()

        name = field.name.strip()
        if not name or name in self.primitive_types:
            return name
        return name[0].upper() + name[1:]

    def _classify(self, token: str) -> Optional[ResolvedType]:
        if token in self.primitive_types:
            return ResolvedType(TypeKind.PRIMITIVE, token, token)

        domain = self._domains.get(token)
        if domain is not None:
            return ResolvedType(TypeKind.DOMAIN, domain.name, token, domain)

        return None

    def _project(self, token: str) -> Optional[ResolvedType]:
        parts = token.split(".")
        if len(parts) != 2:
            return None

        domain = self._domains.get(parts[0].strip())
        if domain is None:
            return None

        attribute = domain.get_attribute(parts[1].strip())
        if attribute is None:
            return None

        declared = attribute.type.strip()
        if not declared:
            return ResolvedType(TypeKind.UNRESOLVED, self.unknown_type, token)

        resolved = self._classify(declared)
        if resolved is not None:
            return ResolvedType(resolved.kind, resolved.name, token, resolved.domain)
        return self._fallback(token, declared)

    def _fallback(self, token: str, raw: str) -> ResolvedType:
        if self.fallback == FallbackPolicy.PASSTHROUGH:
            return ResolvedType(TypeKind.UNRESOLVED, raw, token)
        return ResolvedType(TypeKind.UNRESOLVED, self.unknown_type, token)


def resolve(
    token: Optional[str],
    domains: Iterable[Domain],
    primitive_types: Iterable[str],
    unknown_type: str = "any",
    fallback: FallbackPolicy = FallbackPolicy.ANY,
) -> ResolvedType:
    """Resolve a single token without keeping a resolver around."""
    return TypeResolver(primitive_types, domains, unknown_type, fallback).resolve(token)
