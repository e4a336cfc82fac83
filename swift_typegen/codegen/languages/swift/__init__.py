"""
Swift code generator module.

Generates Swift structs and enums with Codable implementations that match
serde's wire formats.
"""

from typing import Optional

from ...core.config import load_config
from ...core.schema import TypeCollection
from .codable import CodableSynthesizer, EnumStrategy, classify_enum
from .config import (
    DuplicateNameStrategy,
    OptionalStyle,
    StructNamingStrategy,
    SwiftConfig,
)
from .generator import SwiftGenerator
from .naming import NamingResolver, create_swift_sanitizer, variant_struct_name
from .recursion import RecursionDetector
from .special import SpecialType, SpecialTypeRegistry
from .types import ExportContext, SwiftType, SwiftTypeMapper

__all__ = [
    "SwiftGenerator",
    "SwiftConfig",
    "SwiftType",
    "SwiftTypeMapper",
    "ExportContext",
    "OptionalStyle",
    "DuplicateNameStrategy",
    "StructNamingStrategy",
    "NamingResolver",
    "RecursionDetector",
    "SpecialType",
    "SpecialTypeRegistry",
    "CodableSynthesizer",
    "EnumStrategy",
    "classify_enum",
    "create_swift_sanitizer",
    "variant_struct_name",
    # Factory functions
    "create_generator",
    "create_strict_generator",
    "create_qualified_generator",
    "export_swift",
]


def create_generator(**kwargs) -> SwiftGenerator:
    """
    Create a Swift generator.

    Args:
        **kwargs: Config overrides (type_case, optional_style, duplicate_strategy, ...)

    Returns:
        Configured SwiftGenerator instance
    """
    return SwiftGenerator(load_config("swift", kwargs))


def create_strict_generator() -> SwiftGenerator:
    """
    Create generator that refuses ambiguous input.

    Features:
    - Duplicate type names abort the export
    - Explicit Optional<T> spelling
    """
    return create_generator(duplicate_strategy="error", optional_style="optional")


def create_qualified_generator() -> SwiftGenerator:
    """
    Create generator for collections spanning many modules.

    Features:
    - Duplicate type names are prefixed with their module path
    - Memberwise initializers
    """
    return create_generator(duplicate_strategy="qualify", generate_initializers=True)


def export_swift(types: TypeCollection, config: Optional[SwiftConfig] = None) -> str:
    """
    Export a collection to Swift source.

    Raises:
        GeneratorError: If any type cannot be exported; no partial output
    """
    return SwiftGenerator(swift_config=config).export(types)
