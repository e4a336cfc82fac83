"""
Swift-specific configuration.

Turns the generic GeneratorConfig into the immutable per-run configuration
every Swift component receives.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from ...core.config import ConfigError, GeneratorConfig
from ...core.naming import NamingCase
from ...core.schema import NamedDataType


class OptionalStyle(Enum):
    """How nullable types are spelled."""

    QUESTION_MARK = "question_mark"  # String?
    OPTIONAL = "optional"  # Optional<String>


class DuplicateNameStrategy(Enum):
    """What to do when several types resolve to the same name."""

    WARN = "warn"  # keep the last registered definition
    ERROR = "error"  # abort the export
    QUALIFY = "qualify"  # prefix the module path
    CUSTOM = "custom"  # ask duplicate_name_fn


class StructNamingStrategy(Enum):
    """How auxiliary structs for struct-like enum variants are named."""

    AUTO_RENAME = "auto_rename"  # {Enum}{Variant}Data
    KEEP_ORIGINAL = "keep_original"  # {Variant}Data


DuplicateNameFn = Callable[[NamedDataType], str]


@dataclass(frozen=True)
class SwiftConfig:
    """Immutable configuration for one Swift export."""

    type_case: NamingCase = NamingCase.PASCAL_CASE
    field_case: NamingCase = NamingCase.CAMEL_CASE
    enum_case: NamingCase = NamingCase.CAMEL_CASE
    optional_style: OptionalStyle = OptionalStyle.QUESTION_MARK
    duplicate_strategy: DuplicateNameStrategy = DuplicateNameStrategy.WARN
    duplicate_name_fn: Optional[DuplicateNameFn] = None
    struct_naming: StructNamingStrategy = StructNamingStrategy.AUTO_RENAME
    generate_initializers: bool = False
    add_comments: bool = True
    header: Optional[str] = None
    imports: Tuple[str, ...] = ("Foundation",)

    def __post_init__(self):
        if (
            self.duplicate_strategy == DuplicateNameStrategy.CUSTOM
            and self.duplicate_name_fn is None
        ):
            raise ConfigError(
                "Duplicate strategy 'custom' requires a duplicate_name_fn"
            )
        if not isinstance(self.imports, tuple):
            object.__setattr__(self, "imports", tuple(self.imports))

    @classmethod
    def from_generator_config(cls, config: GeneratorConfig) -> "SwiftConfig":
        """
        Build the run configuration from a GeneratorConfig.

        Swift-only settings are read from ``config.custom``.

        Raises:
            ConfigError: If a setting has an invalid value
        """
        custom = config.custom
        return cls(
            type_case=_parse_enum(NamingCase, config.type_case, "type_case"),
            field_case=_parse_enum(NamingCase, config.field_case, "field_case"),
            enum_case=_parse_enum(NamingCase, config.enum_case, "enum_case"),
            optional_style=_parse_enum(
                OptionalStyle,
                custom.get("optional_style", OptionalStyle.QUESTION_MARK),
                "optional_style",
            ),
            duplicate_strategy=_parse_enum(
                DuplicateNameStrategy,
                custom.get("duplicate_strategy", DuplicateNameStrategy.WARN),
                "duplicate_strategy",
            ),
            duplicate_name_fn=custom.get("duplicate_name_fn"),
            struct_naming=_parse_enum(
                StructNamingStrategy,
                custom.get("struct_naming", StructNamingStrategy.AUTO_RENAME),
                "struct_naming",
            ),
            generate_initializers=config.generate_initializers,
            add_comments=config.add_comments,
            header=config.header,
            imports=tuple(custom.get("imports", ("Foundation",))),
        )


def _parse_enum(enum_class, value: Any, setting: str):
    """Accept an enum member or its value."""
    if isinstance(value, enum_class):
        return value
    try:
        return enum_class(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_class)
        raise ConfigError(f"Invalid {setting}: {value!r} (expected one of: {valid})")
