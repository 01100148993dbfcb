"""Shared pytest fixtures for the arch-scaffold test suite.

Provides reusable fixtures for:
- Schema documents (the order/place-order shop and smaller variants)
- Profiles and their template registries
- Resolver / normalizer / layout helpers
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from arch_scaffold.codegen.core.artifacts import ArtifactLayout
from arch_scaffold.codegen.core.schema import parse_schema
from arch_scaffold.codegen.core.types import TypeResolver
from arch_scaffold.codegen.languages.python import PythonProfile
from arch_scaffold.codegen.languages.typescript import TypeScriptProfile


# ---------------------------------------------------------------------------
# Schema documents
# ---------------------------------------------------------------------------

ORDER_ENTITY: Dict[str, Any] = {
    "name": "Order",
    "domainType": "entity",
    "attributes": [{"name": "id", "type": "string"}],
    "methods": [],
}

PLACE_ORDER: Dict[str, Any] = {
    "name": "PlaceOrder",
    "inputFields": [{"name": "Order"}],
    "outputFields": [{"name": "Order"}],
}


@pytest.fixture
def order_schema() -> Dict[str, Any]:
    """One entity, no use cases."""
    return {
        "projectName": "shop",
        "language": "python",
        "domains": [copy.deepcopy(ORDER_ENTITY)],
        "usecases": [],
    }


@pytest.fixture
def shop_schema() -> Dict[str, Any]:
    """A schema exercising every domain type, projections and a repository."""
    return {
        "projectName": "shop",
        "language": "python",
        "domains": [
            {
                "name": "Order",
                "domainType": "entity",
                "attributes": [
                    {"name": "id", "type": "str"},
                    {"name": "total", "type": "Money"},
                    {"name": "customer", "type": "Customer"},
                    {"name": "placedAt", "type": "datetime"},
                ],
                "methods": [
                    {"name": "addLine", "inputs": "product: Product, int", "output": "None"},
                    {"name": "cancel", "inputs": "", "output": ""},
                ],
            },
            {
                "name": "Money",
                "domainType": "valueObject",
                "attributes": [
                    {"name": "amount", "type": "float"},
                    {"name": "currency", "type": "str"},
                ],
                "methods": [],
            },
            {
                "name": "Customer",
                "domainType": "entity",
                "attributes": [
                    {"name": "id", "type": "str"},
                    {"name": "email", "type": "str"},
                ],
                "methods": [],
            },
            {
                "name": "Pricing",
                "domainType": "domainService",
                "attributes": [],
                "methods": [
                    {"name": "priceOf", "inputs": "Order", "output": "Money"},
                    {"name": "discount", "inputs": "Customer.email", "output": "Voucher"},
                ],
            },
        ],
        "usecases": [
            {
                "name": "PlaceOrder",
                "inputFields": [{"name": "Customer"}, {"name": "Order"}],
                "outputFields": [{"name": "Order"}],
            },
            {
                "name": "GetPrice",
                "inputFields": [{"name": "Money"}],
                "outputFields": [{"name": "Money"}],
            },
        ],
    }


@pytest.fixture
def typescript_shop_schema(shop_schema) -> Dict[str, Any]:
    """The shop schema with TypeScript primitives."""
    schema = copy.deepcopy(shop_schema)
    schema["language"] = "typescript"
    order, money, customer, _ = schema["domains"]
    order["attributes"] = [
        {"name": "id", "type": "string"},
        {"name": "total", "type": "Money"},
        {"name": "customer", "type": "Customer"},
        {"name": "placedAt", "type": "Date"},
    ]
    order["methods"][0] = {
        "name": "addLine", "inputs": "product: Product, number", "output": "void",
    }
    money["attributes"] = [
        {"name": "amount", "type": "number"},
        {"name": "currency", "type": "string"},
    ]
    customer["attributes"] = [
        {"name": "id", "type": "string"},
        {"name": "email", "type": "string"},
    ]
    return schema


@pytest.fixture
def schema_file(tmp_path: Path, shop_schema) -> Path:
    """The shop schema written to a JSON file."""
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(shop_schema), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Profiles & helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def python_profile() -> PythonProfile:
    return PythonProfile()


@pytest.fixture
def typescript_profile() -> TypeScriptProfile:
    return TypeScriptProfile()


@pytest.fixture(params=["python", "typescript"])
def profile(request):
    """Every built-in profile."""
    if request.param == "python":
        return PythonProfile()
    return TypeScriptProfile()


@pytest.fixture
def parsed_shop(shop_schema):
    return parse_schema(shop_schema)


@pytest.fixture
def python_resolver(parsed_shop, python_profile) -> TypeResolver:
    return TypeResolver(
        python_profile.primitive_types,
        parsed_shop.domains,
        python_profile.unknown_type,
    )


@pytest.fixture
def python_layout(python_profile) -> ArtifactLayout:
    return ArtifactLayout(python_profile, python_profile.create_normalizer())
