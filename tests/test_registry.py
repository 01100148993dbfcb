"""Tests for the output-language profile registry."""

from __future__ import annotations

import pytest

from arch_scaffold.codegen.core.errors import UnsupportedProfile
from arch_scaffold.codegen.languages.python import PythonProfile
from arch_scaffold.codegen.languages.typescript import TypeScriptProfile
from arch_scaffold.codegen.registry import (
    ProfileRegistry,
    RegistryError,
    get_language_info,
    get_profile,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def registry() -> ProfileRegistry:
    registry = ProfileRegistry()
    registry.register("python", PythonProfile, aliases=["py"])
    return registry


class TestProfileRegistry:
    def test_lookup_by_name_and_alias(self, registry):
        assert isinstance(registry.get_profile("python"), PythonProfile)
        assert isinstance(registry.get_profile("PY"), PythonProfile)
        assert registry.resolve_name(" Python ") == "python"

    def test_unknown_language(self, registry):
        with pytest.raises(UnsupportedProfile) as exc_info:
            registry.get_profile("go")
        assert exc_info.value.supported == ["python"]

    def test_rejects_non_profiles(self, registry):
        with pytest.raises(RegistryError):
            registry.register("text", str)

    def test_duplicate_registration_is_skipped(self, registry):
        registry.register("python", TypeScriptProfile)
        assert registry.get_profile_class("python") is PythonProfile

    def test_replace(self, registry):
        registry.register("python", TypeScriptProfile, replace=True)
        assert registry.get_profile_class("py") is TypeScriptProfile

    def test_alias_conflicts(self, registry):
        with pytest.raises(RegistryError, match="primary language"):
            registry.register("typescript", TypeScriptProfile, aliases=["python"])
        with pytest.raises(RegistryError, match="already points"):
            registry.register("typescript", TypeScriptProfile, aliases=["py"])

    def test_unregister_drops_aliases(self, registry):
        registry.unregister("python")
        assert not registry.is_supported("python")
        assert not registry.is_supported("py")
        assert registry.list_languages() == []

    def test_language_info_lists_aliases(self, registry):
        assert registry.get_language_info("py")["aliases"] == ["py"]


class TestGlobalRegistry:
    def test_builtin_profiles(self):
        assert list_supported_languages() == ["python", "typescript"]
        assert is_language_supported("ts")
        assert isinstance(get_profile("typescript"), TypeScriptProfile)

    def test_language_info(self):
        info = get_language_info("py")
        assert info["name"] == "python"
        assert info["file_extension"] == ".py"
        assert info["unknown_type"] == "Any"
        assert info["aliases"] == ["py"]
        assert info["casing"]["file_stem"] == "snake"
        assert info["casing"]["module_path"] == "snake"

    def test_all_language_info(self):
        infos = list_all_language_info()
        assert set(infos) == {"python", "typescript"}
        assert infos["typescript"]["casing"]["member_name"] == "camel"
