"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


VALID_CASES = {
    "keep",
    "pascal",
    "camel",
    "snake",
    "kebab",
    "screaming_snake",
    "screaming_kebab",
}


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_file: Optional[str] = None
    header: Optional[str] = None

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = False
    line_ending: str = "\n"

    # Naming settings
    type_case: str = "pascal"
    field_case: str = "camel"
    enum_case: str = "camel"

    # Additional output
    add_comments: bool = True
    generate_initializers: bool = False

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


_SERIALIZABLE_FIELDS = (
    "output_file",
    "header",
    "indent_size",
    "use_tabs",
    "line_ending",
    "type_case",
    "field_case",
    "enum_case",
    "add_comments",
    "generate_initializers",
)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["swift"] = {
            "header": "// This file has been generated by swift-typegen. DO NOT EDIT.",
            "type_case": "pascal",
            "field_case": "camel",
            "enum_case": "camel",
            "indent_size": 4,
            "add_comments": True,
            "generate_initializers": False,
            "custom": {
                "optional_style": "question_mark",
                "duplicate_strategy": "warn",
                "struct_naming": "auto_rename",
                "imports": ["Foundation"],
            },
        }

    def get_config(
        self,
        language: str,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        defaults = self._configs.get(language, {})
        base_config = dict(defaults)
        base_config["custom"] = dict(defaults.get("custom", {}))

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into base, combining nested custom dicts."""
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
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
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug(f"Loaded configuration from {path}")
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys are language-specific settings
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {name: getattr(config, name) for name in _SERIALIZABLE_FIELDS}

        # Callables cannot be stored in JSON
        config_dict.update(
            {key: value for key, value in config.custom.items() if not callable(value)}
        )

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        for setting in ("type_case", "field_case", "enum_case"):
            value = getattr(config, setting)
            if value not in VALID_CASES:
                warnings.append(f"Invalid {setting}: {value}")

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if language == "swift":
            choices = {
                "optional_style": {"question_mark", "optional"},
                "duplicate_strategy": {"warn", "error", "qualify", "custom"},
                "struct_naming": {"auto_rename", "keep_original"},
            }
            for key, valid in choices.items():
                value = config.custom.get(key)
                if value is not None and value not in valid:
                    warnings.append(f"Invalid {key}: {value}")

            if config.custom.get("duplicate_strategy") == "custom" and not callable(
                config.custom.get("duplicate_name_fn")
            ):
                warnings.append(
                    "duplicate_strategy 'custom' requires a callable duplicate_name_fn"
                )

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "swift",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)

