"""
Configuration management for project generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import GeneratorError
from .schema import FieldResolutionMode
from .types import FallbackPolicy


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""

    code = "config_error"


@dataclass
class GeneratorConfig:
    """Settings for one generation run."""

    # Type handling
    fallback_policy: FallbackPolicy = FallbackPolicy.ANY
    field_resolution: FieldResolutionMode = FieldResolutionMode.NAME_AS_TYPE

    # Output layout
    nest_under_project: bool = True
    emit_package_markers: bool = True
    include_readme: bool = True

    # Additional metadata
    add_comments: bool = True

    # Custom settings (profile-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.fallback_policy = _coerce_enum(
            FallbackPolicy, self.fallback_policy, "fallback_policy"
        )
        self.field_resolution = _coerce_enum(
            FieldResolutionMode, self.field_resolution, "field_resolution"
        )
        for name in (
            "nest_under_project",
            "emit_package_markers",
            "include_readme",
            "add_comments",
        ):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a boolean")
        if not isinstance(self.custom, dict):
            raise ConfigError("custom must be an object")


def _coerce_enum(enum_class, value, name: str):
    if isinstance(value, enum_class):
        return value
    try:
        return enum_class(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_class)
        raise ConfigError(f"Invalid {name}: {value!r} (expected one of: {valid})")


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported profiles."""
        self._configs["python"] = {
            "fallback_policy": "any",
            "field_resolution": "nameAsType",
            "nest_under_project": True,
            "emit_package_markers": True,
            "include_readme": True,
            "add_comments": True,
        }

        # TypeScript has no package marker files
        self._configs["typescript"] = {
            "fallback_policy": "any",
            "field_resolution": "nameAsType",
            "nest_under_project": True,
            "emit_package_markers": False,
            "include_readme": True,
            "add_comments": True,
        }

    def get_config(
        self,
        language: str = "",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a profile.

        Args:
            language: Target profile name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration: defaults, then file, then overrides
        """
        base_config = dict(self._configs.get(language.lower(), {}))

        if config_file:
            base_config.update(self.load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target profile name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the profile
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
