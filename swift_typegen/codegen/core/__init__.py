"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    UnsupportedTypeError,
    InvalidIdentifierError,
    DuplicateNamesError,
    GenerationResult,
    generate_code,
)
from .schema import (
    SchemaError,
    PrimitiveKind,
    LiteralKind,
    ReprKind,
    Primitive,
    Literal,
    ListType,
    MapType,
    Nullable,
    TupleType,
    Field,
    UnitFields,
    UnnamedFields,
    NamedFields,
    StructType,
    Variant,
    EnumRepr,
    EnumType,
    Reference,
    Generic,
    NamedDataType,
    TypeCollection,
    load_type_collection,
    convert_datatype,
)
from .naming import NameSanitizer, NamingCase, convert_case, apply_rename_rule
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "UnsupportedTypeError",
    "InvalidIdentifierError",
    "DuplicateNamesError",
    "GenerationResult",
    "generate_code",
    # Type model
    "SchemaError",
    "PrimitiveKind",
    "LiteralKind",
    "ReprKind",
    "Primitive",
    "Literal",
    "ListType",
    "MapType",
    "Nullable",
    "TupleType",
    "Field",
    "UnitFields",
    "UnnamedFields",
    "NamedFields",
    "StructType",
    "Variant",
    "EnumRepr",
    "EnumType",
    "Reference",
    "Generic",
    "NamedDataType",
    "TypeCollection",
    "load_type_collection",
    "convert_datatype",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    "convert_case",
    "apply_rename_rule",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
