"""Tests for import graph construction and repository inference.

Covers:
- First-seen ordering, de-duplication and own-module exclusion
- Implementation imports (implemented domain first)
- Primitive and unresolved types never imported
- Relative import paths per profile
- Repository inference (entities only, inputs before outputs)
"""

from __future__ import annotations

import pytest

from arch_scaffold.codegen.core.artifacts import ArtifactKind, ArtifactLayout, ImportRef
from arch_scaffold.codegen.core.dependencies import (
    DependencyGraphBuilder,
    RepositoryInference,
)
from arch_scaffold.codegen.core.schema import (
    FieldResolutionMode,
    UseCase,
    UseCaseField,
    parse_schema,
)
from arch_scaffold.codegen.core.types import TypeResolver


pytestmark = pytest.mark.unit

NAME_AS_TYPE = FieldResolutionMode.NAME_AS_TYPE


@pytest.fixture
def graph(python_resolver, python_layout) -> DependencyGraphBuilder:
    return DependencyGraphBuilder(python_resolver, python_layout)


@pytest.fixture
def inference(python_resolver) -> RepositoryInference:
    return RepositoryInference(python_resolver)


def _resolve_all(resolver, tokens):
    return [resolver.resolve(token) for token in tokens]


# ---------------------------------------------------------------------------
# collect_dependencies
# ---------------------------------------------------------------------------


class TestCollectDependencies:
    def test_domain_imports_in_first_seen_order(self, graph, python_resolver):
        imports = graph.collect_dependencies(
            ArtifactKind.ENTITY,
            "Order",
            _resolve_all(python_resolver, ["str", "Money", "Customer"]),
        )
        assert imports == [
            ImportRef("Money", ".money"),
            ImportRef("Customer", ".customer"),
        ]

    def test_self_reference_is_dropped(self, graph, python_resolver):
        imports = graph.collect_dependencies(
            ArtifactKind.ENTITY, "Order", _resolve_all(python_resolver, ["Order", "Money"])
        )
        assert [ref.name for ref in imports] == ["Money"]

    def test_duplicates_collapse(self, graph, python_resolver):
        imports = graph.collect_dependencies(
            ArtifactKind.DOMAIN_SERVICE,
            "Pricing",
            _resolve_all(python_resolver, ["Money", "Order", "Money", "Order.total"]),
        )
        assert [ref.name for ref in imports] == ["Money", "Order"]

    def test_primitives_and_unresolved_are_never_imported(self, graph, python_resolver):
        imports = graph.collect_dependencies(
            ArtifactKind.DOMAIN_SERVICE,
            "Pricing",
            _resolve_all(python_resolver, ["int", "Voucher", "", "Customer.email"]),
        )
        assert imports == []

    def test_extra_imports_follow_domain_imports(self, graph, python_resolver):
        extra = [ImportRef("OrderRepository", "..domain.order_repository")]
        imports = graph.collect_dependencies(
            ArtifactKind.USE_CASE,
            "PlaceOrder",
            _resolve_all(python_resolver, ["Order"]),
            extra=extra + extra,
        )
        assert imports == [ImportRef("Order", "..domain.order")] + extra

    def test_same_name_from_another_module_is_kept(self, python_profile, python_layout):
        domains = parse_schema(
            {
                "language": "python",
                "domains": [{"name": "OrderUseCase", "domainType": "valueObject"}],
                "usecases": [],
            }
        ).domains
        resolver = TypeResolver(
            python_profile.primitive_types, domains, python_profile.unknown_type
        )
        graph = DependencyGraphBuilder(resolver, python_layout)
        imports = graph.collect_dependencies(
            ArtifactKind.USE_CASE, "Order", [resolver.resolve("OrderUseCase")]
        )
        assert imports == [ImportRef("OrderUseCase", "..domain.order_use_case")]


# ---------------------------------------------------------------------------
# Implementation dependencies
# ---------------------------------------------------------------------------


class TestImplDependencies:
    def test_implemented_domain_comes_first(self, graph, python_resolver, parsed_shop):
        pricing = parsed_shop.domains[3]
        imports = graph.collect_impl_dependencies(
            pricing, _resolve_all(python_resolver, ["Order", "Money", "Pricing"])
        )
        assert imports == [
            ImportRef("Pricing", "...domain.pricing"),
            ImportRef("Order", "...domain.order"),
            ImportRef("Money", "...domain.money"),
        ]

    def test_typescript_paths(self, typescript_profile, parsed_shop):
        layout = ArtifactLayout(typescript_profile, typescript_profile.create_normalizer())
        resolver = TypeResolver(
            typescript_profile.primitive_types,
            parsed_shop.domains,
            typescript_profile.unknown_type,
        )
        graph = DependencyGraphBuilder(resolver, layout)
        imports = graph.collect_impl_dependencies(
            parsed_shop.domains[0], [resolver.resolve("Money")]
        )
        assert imports == [
            ImportRef("Order", "../../domain/Order"),
            ImportRef("Money", "../../domain/Money"),
        ]


# ---------------------------------------------------------------------------
# Use case dependencies
# ---------------------------------------------------------------------------


class TestUseCaseDependencies:
    def test_entities_then_repositories(self, graph, inference, parsed_shop):
        usecase = parsed_shop.usecases[0]
        refs = inference.infer_repository_deps(usecase, NAME_AS_TYPE)
        imports = graph.collect_use_case_dependencies(usecase, NAME_AS_TYPE, refs)
        assert [(ref.name, ref.from_path) for ref in imports] == [
            ("Customer", "..domain.customer"),
            ("Order", "..domain.order"),
            ("CustomerRepository", "..domain.customer_repository"),
            ("OrderRepository", "..domain.order_repository"),
        ]

    def test_use_case_named_like_entity_still_imports_it(
        self, graph, inference
    ):
        usecase = UseCase("Order", input_fields=(UseCaseField("Order"),))
        refs = inference.infer_repository_deps(usecase, NAME_AS_TYPE)
        imports = graph.collect_use_case_dependencies(usecase, NAME_AS_TYPE, refs)
        assert [ref.name for ref in imports] == ["Order", "OrderRepository"]

    def test_no_duplicate_pairs(self, graph, inference):
        usecase = UseCase(
            "Reorder",
            input_fields=(UseCaseField("Order"), UseCaseField("order")),
            output_fields=(UseCaseField("Order"),),
        )
        refs = inference.infer_repository_deps(usecase, NAME_AS_TYPE)
        imports = graph.collect_use_case_dependencies(usecase, NAME_AS_TYPE, refs)
        assert len(imports) == len(set(imports)) == 2


# ---------------------------------------------------------------------------
# Repository inference
# ---------------------------------------------------------------------------


class TestRepositoryInference:
    def test_inputs_before_outputs(self, inference):
        usecase = UseCase(
            "Checkout",
            input_fields=(UseCaseField("Order"),),
            output_fields=(UseCaseField("Customer"), UseCaseField("Order")),
        )
        refs = inference.infer_repository_deps(usecase, NAME_AS_TYPE)
        assert [ref.entity_name for ref in refs] == ["Order", "Customer"]

    def test_value_objects_need_no_repository(self, inference, parsed_shop):
        assert inference.infer_repository_deps(parsed_shop.usecases[1], NAME_AS_TYPE) == []

    def test_no_fields_is_valid(self, inference):
        assert inference.infer_repository_deps(UseCase("Ping"), NAME_AS_TYPE) == []

    def test_declared_type_mode(self, inference):
        usecase = UseCase(
            "Assign",
            input_fields=(UseCaseField("buyer", "Customer"), UseCaseField("Order", "str")),
        )
        refs = inference.infer_repository_deps(usecase, FieldResolutionMode.DECLARED_TYPE)
        assert [ref.entity_name for ref in refs] == ["Customer"]

    def test_projection_to_entity_counts(self, inference):
        usecase = UseCase("Notify", input_fields=(UseCaseField("Order.customer"),))
        refs = inference.infer_repository_deps(usecase, NAME_AS_TYPE)
        assert [ref.entity_name for ref in refs] == ["Customer"]


# ---------------------------------------------------------------------------
# Import paths
# ---------------------------------------------------------------------------


class TestImportPaths:
    @pytest.mark.parametrize(
        "from_dir, expected",
        [
            ("domain", ".order"),
            ("usecase", "..domain.order"),
            ("adapter/repository", "...domain.order"),
            ("", ".domain.order"),
        ],
    )
    def test_python_relative_imports(self, python_layout, from_dir, expected):
        ref = python_layout.import_of(ArtifactKind.ENTITY, "Order", from_dir)
        assert ref.from_path == expected

    @pytest.mark.parametrize(
        "from_dir, expected",
        [
            ("domain", "./Order"),
            ("usecase", "../domain/Order"),
            ("adapter/repository", "../../domain/Order"),
        ],
    )
    def test_typescript_relative_imports(self, typescript_profile, from_dir, expected):
        layout = ArtifactLayout(typescript_profile, typescript_profile.create_normalizer())
        ref = layout.import_of(ArtifactKind.ENTITY, "Order", from_dir)
        assert ref.from_path == expected

    def test_import_module_matches_defining_file_stem(self, profile, parsed_shop):
        layout = ArtifactLayout(profile, profile.create_normalizer())
        for domain in parsed_shop.domains:
            from_dir = "usecase"
            ref = layout.import_of(ArtifactKind.ENTITY, domain.name, from_dir)
            stem = layout.locate(ArtifactKind.ENTITY, domain.name).file_stem
            assert ref.from_path.endswith(stem)

    def test_infrastructure_import_from_adapter(self, python_layout):
        ref = python_layout.import_of(
            ArtifactKind.INFRASTRUCTURE_IMPL, "SqlDatabase", "adapter/repository"
        )
        assert ref == ImportRef("SqlDatabase", "...infrastructure.database.sql_database")
