"""
swift-typegen code generation module.

Generates Swift type definitions from a type-model collection.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    DuplicateNamesError,
    GenerationResult,
    GeneratorError,
    InvalidIdentifierError,
    UnsupportedTypeError,
    generate_code,
)
from .core.schema import NamedDataType, TypeCollection, load_type_collection
from .core.config import GeneratorConfig, ConfigManager, load_config


def generate_from_types(
    types: TypeCollection,
    language: str = "swift",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> GenerationResult:
    """
    Generate code for a type collection.

    Args:
        types: Registered types
        language: Target language name or alias
        config: Generator configuration, override dict or config path

    Returns:
        GenerationResult with generated code
    """
    generator = get_generator(language, config)
    return generate_code(generator, types)


def quick_generate(document: Dict[str, Any], language: str = "swift", **options) -> str:
    """
    Quick code generation from a type-model JSON document.

    Args:
        document: Parsed ``{"types": [...]}`` document
        language: Target language
        **options: Config overrides

    Returns:
        Generated code string

    Raises:
        GeneratorError: If generation fails
    """
    result = generate_from_types(load_type_collection(document), language, options)
    if not result.success:
        raise result.exception
    return result.code


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "UnsupportedTypeError",
    "InvalidIdentifierError",
    "DuplicateNamesError",
    "NamedDataType",
    "TypeCollection",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "load_type_collection",
    "generate_code",
    "generate_from_types",
    "quick_generate",
    "get_generator",
    "get_registry",
    "list_supported_languages",
]
