"""
Profile registry for managing available output languages.

Provides registration, alias lookup and instantiation of language profiles.
"""

from typing import Any, Dict, List, Optional, Type

from ..logging_config import get_logger
from .core.errors import GeneratorError, UnsupportedProfile
from .core.profile import LanguageProfile

logger = get_logger(__name__)


class RegistryError(GeneratorError):
    """Exception raised for registry-related errors."""

    code = "registry_error"


class ProfileRegistry:
    """Registry for managing available output-language profiles."""

    def __init__(self):
        """Initialize empty registry."""
        self._profiles: Dict[str, Type[LanguageProfile]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        profile_class: Type[LanguageProfile],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a profile for a language.

        Args:
            language: Primary language name (e.g., 'python', 'typescript')
            profile_class: Class implementing LanguageProfile
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If profile class is invalid or an alias conflicts
        """
        if not isinstance(profile_class, type) or not issubclass(
            profile_class, LanguageProfile
        ):
            raise RegistryError("Profile class must inherit from LanguageProfile")

        language_key = language.lower()

        if language_key in self._profiles and not replace:
            return

        alias_keys = [
            alias.lower() for alias in aliases or [] if alias.lower() != language_key
        ]
        if not replace:
            for alias_key in alias_keys:
                if alias_key in self._profiles:
                    raise RegistryError(
                        f"Alias '{alias_key}' conflicts with existing primary language"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                    raise RegistryError(
                        f"Alias '{alias_key}' already points to '{self._aliases[alias_key]}'"
                    )

        self._profiles[language_key] = profile_class
        for alias_key in alias_keys:
            self._aliases[alias_key] = language_key

        logger.debug("Registered profile '%s'", language_key)

    def unregister(self, language: str):
        """
        Unregister a profile and its aliases.

        Args:
            language: Language name to unregister
        """
        language_key = language.lower()
        self._profiles.pop(language_key, None)

        aliases_to_remove = [
            alias for alias, target in self._aliases.items() if target == language_key
        ]
        for alias in aliases_to_remove:
            del self._aliases[alias]

    def resolve_name(self, language: str) -> str:
        """
        Primary name of a language or alias.

        Raises:
            UnsupportedProfile: If the language is not registered
        """
        language_key = language.strip().lower()
        if language_key in self._profiles:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]
        raise UnsupportedProfile(language, self.list_languages())

    def get_profile_class(self, language: str) -> Type[LanguageProfile]:
        """Get profile class for a language or alias."""
        return self._profiles[self.resolve_name(language)]

    def get_profile(self, language: str) -> LanguageProfile:
        """
        Create the profile for a language or alias.

        Raises:
            UnsupportedProfile: If the language is not registered
        """
        return self.get_profile_class(language)()

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._profiles.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        """Get all aliases for a primary language."""
        language_key = language.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == language_key
        )

    def is_supported(self, language: str) -> bool:
        """Check if language or alias is registered."""
        language_key = language.strip().lower()
        return language_key in self._profiles or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered language.

        Raises:
            UnsupportedProfile: If the language is not registered
        """
        language_key = self.resolve_name(language)
        info = self._profiles[language_key]().get_info()
        info["aliases"] = self.get_aliases_for_language(language_key)
        return info


# Global registry instance - created once
_global_registry: Optional[ProfileRegistry] = None


def get_registry() -> ProfileRegistry:
    """Get the global profile registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = ProfileRegistry()
        _auto_register_profiles(_global_registry)
    return _global_registry


def _auto_register_profiles(registry: ProfileRegistry):
    """
    Register the built-in profiles with their aliases.

    This is the single source of truth for profile registration.
    """
    from .languages.python import PythonProfile
    from .languages.typescript import TypeScriptProfile

    registry.register("python", PythonProfile, aliases=["py"])
    registry.register("typescript", TypeScriptProfile, aliases=["ts"])


# Public API functions using the global registry


def register_profile(
    language: str,
    profile_class: Type[LanguageProfile],
    aliases: Optional[List[str]] = None,
):
    """Register a profile in the global registry."""
    get_registry().register(language, profile_class, aliases)


def get_profile(language: str) -> LanguageProfile:
    """Get profile instance from global registry."""
    return get_registry().get_profile(language)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if language is supported by global registry."""
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a supported language."""
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported languages."""
    return {
        language: get_language_info(language) for language in list_supported_languages()
    }
