"""
Generator registry.

Maps target-language names and aliases to generator classes and builds
configured generator instances.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator
from ..logging_config import get_logger

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available code generators."""

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a language.

        Args:
            language: Primary language name (e.g., 'swift')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this language
            replace: Replace an existing registration instead of keeping it

        Raises:
            RegistryError: If the class is not a generator or an alias conflicts
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        language_key = language.lower()
        if language_key in self._generators and not replace:
            logger.debug(f"Generator for '{language_key}' already registered")
            return

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == language_key or replace:
                continue
            if alias_key in self._generators:
                raise RegistryError(f"Alias '{alias}' conflicts with existing primary language")
            if self._aliases.get(alias_key, language_key) != language_key:
                raise RegistryError(
                    f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                )

        self._generators[language_key] = generator_class
        for alias in aliases or []:
            if alias.lower() != language_key:
                self._aliases[alias.lower()] = language_key

        logger.debug(f"Registered {generator_class.__name__} for '{language_key}'")

    def unregister(self, language: str):
        """Unregister a generator and its aliases."""
        language_key = language.lower()
        self._generators.pop(language_key, None)
        self._aliases = {
            alias: target for alias, target in self._aliases.items() if target != language_key
        }

    def resolve_language(self, language: str) -> str:
        """
        Resolve an alias to its primary language name.

        Raises:
            RegistryError: If the language is unknown
        """
        language_key = language.lower()
        if language_key in self._generators:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self._generators[self.resolve_language(language)]

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Create generator instance for language.

        Args:
            language: Language name or alias
            config: GeneratorConfig, override dict, JSON config path, or None

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If the language is unknown or the config is invalid
        """
        language_key = self.resolve_language(language)
        generator_class = self._generators[language_key]

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(language_key, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(language_key, custom_config=config)
            elif config is None:
                final_config = load_config(language_key)
            else:
                raise RegistryError(f"Invalid config type: {type(config).__name__}")

            return generator_class(final_config)
        except ConfigError as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._generators)

    def get_aliases_for_language(self, language: str) -> List[str]:
        language_key = language.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == language_key)

    def is_supported(self, language: str) -> bool:
        language_key = language.lower()
        return language_key in self._generators or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered language.

        Raises:
            RegistryError: If language not found
        """
        language_key = self.resolve_language(language)
        generator = self.create_generator(language_key)

        return {
            "name": generator.language_name,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(language_key),
            "module": type(generator).__module__,
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in generators with their aliases."""
    from .languages.swift import SwiftGenerator

    registry.register("swift", SwiftGenerator, aliases=["swiftlang"])


# Public API functions using the global registry


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """Register a generator in the global registry."""
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str = "swift", config: ConfigSource = None) -> CodeGenerator:
    """Get a configured generator instance from the global registry."""
    return get_registry().create_generator(language, config)


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
    return {language: get_language_info(language) for language in list_supported_languages()}
