"""
Swift-specific naming: reserved words, identifier resolution and the
collection-wide duplicate-name pre-pass.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ...core.generator import DuplicateNamesError, InvalidIdentifierError
from ...core.naming import NameSanitizer, NamingCase, apply_rename_rule, convert_case, to_pascal_case
from ...core.schema import EnumRepr, EnumType, NamedDataType, TypeCollection, Variant
from ....logging_config import get_logger
from .config import DuplicateNameStrategy, StructNamingStrategy, SwiftConfig

logger = get_logger(__name__)


# Swift keywords that cannot be used as bare identifiers
SWIFT_RESERVED_WORDS = {
    "associatedtype",
    "class",
    "deinit",
    "enum",
    "extension",
    "fileprivate",
    "func",
    "import",
    "init",
    "inout",
    "internal",
    "let",
    "open",
    "operator",
    "private",
    "precedencegroup",
    "protocol",
    "public",
    "rethrows",
    "static",
    "struct",
    "subscript",
    "typealias",
    "var",
    "break",
    "case",
    "catch",
    "continue",
    "default",
    "defer",
    "do",
    "else",
    "fallthrough",
    "for",
    "guard",
    "if",
    "in",
    "repeat",
    "return",
    "throw",
    "switch",
    "where",
    "while",
    "as",
    "is",
    "nil",
    "self",
    "super",
    "throws",
    "true",
    "false",
    "try",
    "Any",
    "Self",
    "Type",
    "Protocol",
}

SWIFT_IDENTIFIER_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

_MODULE_SEPARATOR_RE = re.compile(r"[^0-9A-Za-z_]+")


class NameKind(Enum):
    """Kinds of identifiers, each with its own case convention."""

    TYPE = "type"
    FIELD = "field"
    ENUM_CASE = "enum_case"


def create_swift_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Swift."""
    return NameSanitizer(SWIFT_RESERVED_WORDS, SWIFT_IDENTIFIER_PATTERN)


def variant_struct_name(
    enclosing: str, variant: str, strategy: StructNamingStrategy
) -> str:
    """
    Name of the auxiliary struct holding a struct-like variant's fields.

    Both the enum case declaration and the struct definition derive the name
    from this function, so they always agree.

    Examples:
        >>> variant_struct_name("JobEvent", "started", StructNamingStrategy.AUTO_RENAME)
        'JobEventStartedData'
        >>> variant_struct_name("JobEvent", "started", StructNamingStrategy.KEEP_ORIGINAL)
        'StartedData'
    """
    base = to_pascal_case(variant)
    if strategy == StructNamingStrategy.AUTO_RENAME:
        return f"{enclosing}{base}Data"
    return f"{base}Data"


def variant_wire_name(variant: Variant, repr: EnumRepr) -> str:
    """Serialized name of a variant under the enum's rename rule."""
    return apply_rename_rule(variant.name, repr.rename_all)


@dataclass(frozen=True)
class ResolvedNames:
    """Result of the naming pre-pass for one export."""

    names: Mapping[str, str]  # sid -> type name
    emitted: Tuple[NamedDataType, ...]  # registration order
    diagnostics: Tuple[str, ...] = ()

    def name_of(self, sid: str) -> Optional[str]:
        return self.names.get(sid)


class NamingResolver:
    """Resolves Swift identifiers for one export configuration."""

    def __init__(self, config: SwiftConfig, sanitizer: Optional[NameSanitizer] = None):
        self.config = config
        self.sanitizer = sanitizer or create_swift_sanitizer()
        self._cases = {
            NameKind.TYPE: config.type_case,
            NameKind.FIELD: config.field_case,
            NameKind.ENUM_CASE: config.enum_case,
        }

    def resolve(self, name: str, kind: NameKind) -> str:
        """
        Apply the case convention for ``kind`` and validate the result.

        Raises:
            InvalidIdentifierError: If the result is not a Swift identifier
        """
        resolved = self.sanitizer.sanitize_name(name, self._cases[kind])
        return self._validate(resolved, name)

    def _validate(self, resolved: str, original: str) -> str:
        if not self.sanitizer.is_valid_identifier(resolved):
            raise InvalidIdentifierError(
                f"'{original}' resolves to '{resolved}', which is not a valid Swift identifier"
            )
        return resolved

    def resolve_field(self, name: str) -> str:
        return self.resolve(name, NameKind.FIELD)

    def resolve_case(self, name: str) -> str:
        return self.resolve(name, NameKind.ENUM_CASE)

    def resolve_type_name(self, ndt: NamedDataType) -> str:
        """Name of a type before duplicate handling."""
        return self.resolve(ndt.name, NameKind.TYPE)

    def qualify(self, ndt: NamedDataType) -> str:
        """Prefix a type name with its case-converted module path."""
        segments = [s for s in _MODULE_SEPARATOR_RE.split(ndt.module_path) if s]
        qualified = "_".join(segments + [ndt.name])
        return self.resolve(qualified, NameKind.TYPE)

    def auxiliary_name(self, enclosing: str, variant: str) -> str:
        return variant_struct_name(enclosing, variant, self.config.struct_naming)

    def resolve_collection(self, types: TypeCollection) -> ResolvedNames:
        """
        Resolve every type name and apply the duplicate-name strategy.

        Args:
            types: Collection to export

        Returns:
            ResolvedNames with the sid table and the types to declare

        Raises:
            DuplicateNamesError: Under the error strategy when names collide
            InvalidIdentifierError: If a name cannot be a Swift identifier
        """
        base_names: Dict[str, str] = {}
        groups: Dict[str, List[NamedDataType]] = {}
        for ndt in types:
            base = self.resolve_type_name(ndt)
            base_names[ndt.sid] = base
            groups.setdefault(base, []).append(ndt)

        duplicates = {name: ndts for name, ndts in groups.items() if len(ndts) > 1}
        strategy = self.config.duplicate_strategy

        if duplicates:
            logger.debug(
                f"Found {len(duplicates)} duplicate type names: {sorted(duplicates)}"
            )
            if strategy == DuplicateNameStrategy.ERROR:
                raise DuplicateNamesError(list(duplicates))

        names: Dict[str, str] = {}
        emitted: List[NamedDataType] = []

        for ndt in types:
            base = base_names[ndt.sid]
            group = groups[base]

            if len(group) == 1:
                names[ndt.sid] = base
                emitted.append(ndt)
            elif strategy == DuplicateNameStrategy.WARN:
                names[ndt.sid] = base
                if ndt is group[-1]:
                    emitted.append(ndt)
            elif strategy == DuplicateNameStrategy.QUALIFY:
                # Not re-checked against other names
                names[ndt.sid] = self.qualify(ndt)
                emitted.append(ndt)
            else:
                custom = self.config.duplicate_name_fn(ndt)
                names[ndt.sid] = self._validate(custom, ndt.name)
                emitted.append(ndt)

        diagnostics = []
        if strategy == DuplicateNameStrategy.WARN:
            for name, group in duplicates.items():
                modules = ", ".join(ndt.module_path or ndt.sid for ndt in group)
                kept = group[-1].module_path or group[-1].sid
                message = (
                    f"Duplicate type name '{name}' registered {len(group)} times "
                    f"({modules}); keeping the definition from {kept}"
                )
                logger.warning(message)
                diagnostics.append(message)

        return ResolvedNames(names, tuple(emitted), tuple(diagnostics))

    def check_auxiliary_names(
        self, declared: Iterable[Tuple[str, NamedDataType]]
    ) -> Dict[str, str]:
        """
        Compute auxiliary struct names for every struct-like variant.

        Args:
            declared: (resolved name, type) pairs that will be emitted

        Returns:
            Mapping of "<enum name>.<variant name>" to auxiliary struct name

        Raises:
            DuplicateNamesError: If an auxiliary name collides with another
                auxiliary name or with a declared type
        """
        declared = list(declared)
        taken = {name for name, _ in declared}
        auxiliary: Dict[str, str] = {}
        seen: Dict[str, str] = {}
        collisions: List[str] = []

        for enum_name, ndt in declared:
            if not isinstance(ndt.ty, EnumType):
                continue
            for variant in ndt.ty.visible_variants():
                if not variant.is_struct_like:
                    continue
                aux = self.auxiliary_name(enum_name, variant.name)
                key = f"{enum_name}.{variant.name}"
                if aux in taken or aux in seen:
                    collisions.append(aux)
                seen[aux] = key
                auxiliary[key] = aux

        if collisions:
            raise DuplicateNamesError(
                collisions,
                "Auxiliary variant type names collide: "
                + ", ".join(sorted(set(collisions))),
            )
        return auxiliary
