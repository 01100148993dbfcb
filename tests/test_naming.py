"""Tests for name sanitization and per-role identifier normalization."""

from __future__ import annotations

import pytest

from arch_scaffold.codegen.core.naming import (
    IdentifierNormalizer,
    IdentifierRole,
    NameSanitizer,
    NamingCase,
)
from arch_scaffold.codegen.languages.python.naming import (
    PYTHON_CASING,
    create_python_sanitizer,
)
from arch_scaffold.codegen.languages.typescript.naming import TYPESCRIPT_CASING


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# NameSanitizer
# ---------------------------------------------------------------------------


class TestCaseConversion:
    @pytest.mark.parametrize(
        "raw, case, expected",
        [
            ("PlaceOrder", NamingCase.SNAKE_CASE, "place_order"),
            ("HTTPServer", NamingCase.SNAKE_CASE, "http_server"),
            ("place_order", NamingCase.PASCAL_CASE, "PlaceOrder"),
            ("place-order", NamingCase.CAMEL_CASE, "placeOrder"),
            ("PlaceOrder", NamingCase.KEBAB_CASE, "place-order"),
            ("OrderNoSqlRepository", NamingCase.SNAKE_CASE, "order_no_sql_repository"),
        ],
    )
    def test_convert_case(self, raw, case, expected):
        assert NameSanitizer().convert_case(raw, case) == expected

    def test_invalid_characters_become_separators(self):
        assert NameSanitizer().sanitize_name("order total$", NamingCase.CAMEL_CASE) == "orderTotal"

    def test_leading_digit_is_prefixed(self):
        assert NameSanitizer().sanitize_name("3d model") == "_3d_model"

    def test_empty_name_gets_placeholder(self):
        assert NameSanitizer().sanitize_name("!!!") == "field"

    def test_reserved_word_gets_suffix(self):
        sanitizer = create_python_sanitizer()
        assert sanitizer.sanitize_name("class") == "class_"
        assert sanitizer.sanitize_name("self") == "self_"


# ---------------------------------------------------------------------------
# IdentifierNormalizer
# ---------------------------------------------------------------------------


class TestIdentifierNormalizer:
    def test_python_roles(self):
        normalizer = IdentifierNormalizer(create_python_sanitizer(), PYTHON_CASING)
        assert normalizer.type_name("order line") == "OrderLine"
        assert normalizer.file_stem("OrderLine") == "order_line"
        assert normalizer.member_name("placedAt") == "placed_at"
        assert normalizer.module_path("OrderLine") == "order_line"

    def test_typescript_roles(self):
        normalizer = IdentifierNormalizer(NameSanitizer(), TYPESCRIPT_CASING)
        assert normalizer.type_name("order_line") == "OrderLine"
        assert normalizer.file_stem("OrderLine") == "OrderLine"
        assert normalizer.member_name("placed_at") == "placedAt"

    def test_module_path_follows_file_stem(self):
        casing = {
            IdentifierRole.TYPE_NAME: NamingCase.PASCAL_CASE,
            IdentifierRole.FILE_STEM: NamingCase.KEBAB_CASE,
            IdentifierRole.MEMBER_NAME: NamingCase.CAMEL_CASE,
        }
        normalizer = IdentifierNormalizer(NameSanitizer(), casing)
        assert normalizer.module_path("OrderLine") == "order-line"
        assert normalizer.module_path("OrderLine") == normalizer.file_stem("OrderLine")

    def test_diverging_module_path_casing_is_rejected(self):
        casing = dict(PYTHON_CASING)
        casing[IdentifierRole.MODULE_PATH] = NamingCase.PASCAL_CASE
        with pytest.raises(ValueError, match="MODULE_PATH"):
            IdentifierNormalizer(NameSanitizer(), casing)

    def test_missing_role_is_rejected(self):
        with pytest.raises(ValueError, match="member_name"):
            IdentifierNormalizer(
                NameSanitizer(),
                {
                    IdentifierRole.TYPE_NAME: NamingCase.PASCAL_CASE,
                    IdentifierRole.FILE_STEM: NamingCase.SNAKE_CASE,
                },
            )

    def test_type_name_is_stable_under_renormalization(self, profile):
        normalizer = profile.create_normalizer()
        for raw in ["order", "Order", "place order", "placeOrder", "PLACE_ORDER"]:
            once = normalizer.type_name(raw)
            assert normalizer.type_name(once) == once
