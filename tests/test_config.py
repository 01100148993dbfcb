"""Tests for generator configuration loading and validation."""

from __future__ import annotations

import json

import pytest

from arch_scaffold.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)
from arch_scaffold.codegen.core.schema import FieldResolutionMode
from arch_scaffold.codegen.core.types import FallbackPolicy


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# GeneratorConfig
# ---------------------------------------------------------------------------


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.fallback_policy == FallbackPolicy.ANY
        assert config.field_resolution == FieldResolutionMode.NAME_AS_TYPE
        assert config.nest_under_project
        assert config.add_comments

    def test_string_values_are_coerced(self):
        config = GeneratorConfig(fallback_policy="passthrough", field_resolution="declaredType")
        assert config.fallback_policy == FallbackPolicy.PASSTHROUGH
        assert config.field_resolution == FieldResolutionMode.DECLARED_TYPE

    def test_invalid_enum_value(self):
        with pytest.raises(ConfigError, match="expected one of: any, passthrough"):
            GeneratorConfig(fallback_policy="never")

    def test_invalid_boolean(self):
        with pytest.raises(ConfigError, match="nest_under_project must be a boolean"):
            GeneratorConfig(nest_under_project="yes")

    def test_unknown_keys_go_to_custom(self):
        config = ConfigManager().get_config("python", {"license": "MIT"})
        assert config.custom == {"license": "MIT"}
        assert config.fallback_policy == FallbackPolicy.ANY


# ---------------------------------------------------------------------------
# ConfigManager
# ---------------------------------------------------------------------------


class TestConfigManager:
    def test_language_defaults(self):
        manager = ConfigManager()
        assert manager.get_config("python").emit_package_markers
        assert not manager.get_config("TypeScript").emit_package_markers

    def test_file_then_overrides(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"fallback_policy": "passthrough", "add_comments": False, "team": "core"}),
            encoding="utf-8",
        )
        config = ConfigManager().get_config(
            "python", custom_config={"add_comments": True}, config_file=path
        )
        assert config.fallback_policy == FallbackPolicy.PASSTHROUGH
        assert config.add_comments
        assert config.custom == {"team": "core"}

    @pytest.mark.parametrize(
        "name, content, message",
        [
            ("config.json", "{not json", "Invalid JSON"),
            ("config.json", "[1, 2]", "must contain a JSON object"),
            ("config.yaml", "{}", "must be JSON"),
        ],
    )
    def test_bad_files(self, tmp_path, name, content, message):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError, match=message):
            ConfigManager().load_config_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigManager().load_config_file(tmp_path / "missing.json")

    def test_file_only(self, tmp_path):
        path = tmp_path / "saved.json"
        path.write_text(json.dumps({"include_readme": False}), encoding="utf-8")
        config = ConfigManager().get_config("python", config_file=path)
        assert not config.include_readme
        assert config.emit_package_markers

    def test_load_config_helper(self):
        config = load_config("typescript", {"nest_under_project": False})
        assert not config.nest_under_project
        assert not config.emit_package_markers
