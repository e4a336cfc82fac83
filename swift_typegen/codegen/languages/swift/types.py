"""
Swift type system for code generation.

Maps the type model onto Swift type syntax and builds the field and case
descriptions the templates render.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Set, Tuple

from ...core.generator import InvalidIdentifierError, UnsupportedTypeError
from ...core.schema import (
    DataType,
    EnumRepr,
    EnumType,
    Generic,
    ListType,
    Literal,
    LiteralKind,
    MapType,
    NamedDataType,
    NamedFields,
    Nullable,
    Primitive,
    PrimitiveKind,
    Reference,
    StructType,
    TupleType,
    TypeCollection,
    UnitFields,
    UnnamedFields,
    Variant,
)
from ....logging_config import get_logger
from .config import OptionalStyle, SwiftConfig
from .naming import NamingResolver, ResolvedNames, variant_wire_name
from .recursion import RecursionDetector
from .special import SpecialTypeRegistry

logger = get_logger(__name__)


@dataclass(frozen=True)
class SwiftType:
    """
    Immutable representation of a Swift type expression.

    Carries the helper declarations the expression depends on so the
    generator can emit each helper once.
    """

    name: str  # e.g. "[String: Int]?"
    base_name: str = field(default="")  # without the optional wrapper
    is_optional: bool = field(default=False)
    helpers_needed: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        """Set base_name if not provided."""
        if not self.base_name:
            object.__setattr__(self, "base_name", self.name)

    def as_optional(self, style: OptionalStyle) -> "SwiftType":
        """Return the optional version of this type; never double-wraps."""
        if self.is_optional:
            return self

        if style == OptionalStyle.OPTIONAL:
            name = f"Optional<{self.name}>"
        else:
            name = f"{self.name}?"

        return SwiftType(
            name=name,
            base_name=self.base_name,
            is_optional=True,
            helpers_needed=self.helpers_needed,
        )


PRIMITIVE_TYPES = {
    PrimitiveKind.I8: "Int8",
    PrimitiveKind.I16: "Int16",
    PrimitiveKind.I32: "Int32",
    PrimitiveKind.I64: "Int64",
    PrimitiveKind.ISIZE: "Int",
    PrimitiveKind.U8: "UInt8",
    PrimitiveKind.U16: "UInt16",
    PrimitiveKind.U32: "UInt32",
    PrimitiveKind.U64: "UInt64",
    PrimitiveKind.USIZE: "UInt",
    PrimitiveKind.F32: "Float",
    PrimitiveKind.F64: "Double",
    PrimitiveKind.BOOL: "Bool",
    PrimitiveKind.CHAR: "Character",
    PrimitiveKind.STRING: "String",
}

UNSUPPORTED_PRIMITIVES = {
    PrimitiveKind.I128: "Swift does not support 128-bit integers",
    PrimitiveKind.U128: "Swift does not support 128-bit integers",
    PrimitiveKind.F16: "Swift does not support f16",
}

LITERAL_TYPES = {
    LiteralKind.I8: "Int8",
    LiteralKind.I16: "Int16",
    LiteralKind.I32: "Int32",
    LiteralKind.U8: "UInt8",
    LiteralKind.U16: "UInt16",
    LiteralKind.U32: "UInt32",
    LiteralKind.F32: "Float",
    LiteralKind.F64: "Double",
    LiteralKind.BOOL: "Bool",
    LiteralKind.STRING: "String",
    LiteralKind.CHAR: "Character",
    LiteralKind.NONE: "Never?",
}


@dataclass(frozen=True)
class ExportContext:
    """Everything one export call shares between its components."""

    types: TypeCollection
    config: SwiftConfig
    names: ResolvedNames
    resolver: NamingResolver
    variant_namer: Callable[[str, str], str]


class SwiftTypeMapper:
    """Translates type-model shapes into Swift type expressions."""

    def __init__(
        self,
        context: ExportContext,
        special_types: Optional[SpecialTypeRegistry] = None,
        detector: Optional[RecursionDetector] = None,
    ):
        self.context = context
        self.config = context.config
        self.special_types = special_types or SpecialTypeRegistry()
        self.detector = detector or RecursionDetector(context.types, self.special_types)
        self.helpers_used: Set[str] = set()
        self.recursive_types: Set[str] = set()

    def map(self, dt: DataType, owner: Optional[NamedDataType] = None) -> SwiftType:
        """
        Map a data type to a Swift type expression.

        Args:
            dt: Type to map
            owner: Named type whose declaration contains ``dt``

        Returns:
            SwiftType for the expression

        Raises:
            UnsupportedTypeError: If the type has no Swift equivalent
            InvalidIdentifierError: If a reference does not resolve
        """
        swift_type = self._map(dt, owner)
        self.helpers_used.update(swift_type.helpers_needed)
        return swift_type

    def _map(self, dt: DataType, owner: Optional[NamedDataType]) -> SwiftType:
        if isinstance(dt, Primitive):
            return self._map_primitive(dt)

        if isinstance(dt, Literal):
            return self._map_literal(dt)

        if isinstance(dt, ListType):
            item = self._map(dt.item, owner)
            return SwiftType(f"[{item.name}]", helpers_needed=item.helpers_needed)

        if isinstance(dt, MapType):
            key = self._map(dt.key, owner)
            value = self._map(dt.value, owner)
            return SwiftType(
                f"[{key.name}: {value.name}]",
                helpers_needed=key.helpers_needed | value.helpers_needed,
            )

        if isinstance(dt, Nullable):
            return self._map(dt.inner, owner).as_optional(self.config.optional_style)

        if isinstance(dt, TupleType):
            return self._map_tuple(dt, owner)

        if isinstance(dt, Reference):
            return self._map_reference(dt, owner)

        if isinstance(dt, Generic):
            return SwiftType(dt.name)

        if isinstance(dt, StructType):
            return self._map_inline_struct(dt, owner)

        if isinstance(dt, EnumType):
            return self._map_inline_enum(dt)

        raise UnsupportedTypeError(f"Unsupported data type: {type(dt).__name__}")

    def _map_primitive(self, dt: Primitive) -> SwiftType:
        if dt.kind in UNSUPPORTED_PRIMITIVES:
            raise UnsupportedTypeError(UNSUPPORTED_PRIMITIVES[dt.kind])
        return SwiftType(PRIMITIVE_TYPES[dt.kind])

    def _map_literal(self, dt: Literal) -> SwiftType:
        if dt.kind not in LITERAL_TYPES:
            raise UnsupportedTypeError(f"Unsupported literal type: {dt.kind.value}")
        name = LITERAL_TYPES[dt.kind]
        if dt.kind == LiteralKind.NONE:
            return SwiftType(name, base_name="Never", is_optional=True)
        return SwiftType(name)

    def _map_tuple(self, dt: TupleType, owner: Optional[NamedDataType]) -> SwiftType:
        if not dt.elements:
            return SwiftType("Void")
        if len(dt.elements) == 1:
            return self._map(dt.elements[0], owner)

        elements = [self._map(e, owner) for e in dt.elements]
        return SwiftType(
            "(" + ", ".join(e.name for e in elements) + ")",
            helpers_needed=frozenset().union(*(e.helpers_needed for e in elements)),
        )

    def _map_reference(self, dt: Reference, owner: Optional[NamedDataType]) -> SwiftType:
        ndt = self.context.types.get(dt.sid)
        if ndt is None:
            raise InvalidIdentifierError(f"Reference to unknown type '{dt.sid}'")

        special = self.special_types.match_named(ndt)
        if special:
            helpers = frozenset([special.key]) if special.helper else frozenset()
            return SwiftType(special.swift_name, helpers_needed=helpers)

        name = self.context.names.name_of(dt.sid)
        if name is None:
            name = self.context.resolver.resolve_type_name(ndt)

        if not dt.generics:
            return SwiftType(name)

        args = [self._map(arg, owner) for arg in dt.generics]
        return SwiftType(
            f"{name}<{', '.join(a.name for a in args)}>",
            helpers_needed=frozenset().union(*(a.helpers_needed for a in args)),
        )

    def _map_inline_struct(
        self, dt: StructType, owner: Optional[NamedDataType]
    ) -> SwiftType:
        special = self.special_types.match_inline(dt)
        if special:
            helpers = frozenset([special.key]) if special.helper else frozenset()
            return SwiftType(special.swift_name, helpers_needed=helpers)

        visible = dt.fields.visible()
        if not visible:
            return SwiftType("Void")
        if isinstance(dt.fields, UnnamedFields) and len(visible) == 1:
            return self._map(visible[0].ty, owner)

        raise UnsupportedTypeError(
            "Anonymous structs with fields cannot be used in type position"
        )

    def _map_inline_enum(self, dt: EnumType) -> SwiftType:
        special = self.special_types.match_inline(dt)
        if special:
            return SwiftType(special.swift_name)
        raise UnsupportedTypeError("Anonymous enums cannot be used in type position")

    # Declaration helpers

    def is_recursive(self, ndt: NamedDataType) -> bool:
        """Check and record whether a declaration needs indirect storage."""
        recursive = self.detector.is_recursive(ndt)
        if recursive:
            self.recursive_types.add(self.context.names.name_of(ndt.sid) or ndt.name)
        return recursive

    def slot_spec(self, dt: DataType, owner: Optional[NamedDataType]) -> Dict[str, Any]:
        """Describe one positional slot: full type, decodable base, nullability."""
        swift_type = self.map(dt, owner)
        inner = dt
        while isinstance(inner, Nullable):
            inner = inner.inner
        base = self.map(inner, owner) if inner is not dt else swift_type
        return {
            "type": swift_type.name,
            "base": base.name,
            "nullable": isinstance(dt, Nullable),
        }

    def field_specs(
        self, fields, owner: Optional[NamedDataType]
    ) -> List[Dict[str, Any]]:
        """
        Describe the visible fields of a struct or struct-like variant.

        Named fields keep their wire name; a single unnamed slot becomes
        ``value`` and several become ``field0``, ``field1``, ...
        """
        if isinstance(fields, UnitFields):
            return []

        if isinstance(fields, NamedFields):
            entries = [(name, f) for name, f in fields.visible()]
        else:
            slots = fields.visible()
            if len(slots) == 1:
                entries = [("value", slots[0])]
            else:
                entries = [(f"field{i}", f) for i, f in enumerate(slots)]

        specs = []
        for wire_name, f in entries:
            spec = self.slot_spec(f.ty, owner)
            type_name = spec["type"]
            if f.optional and not spec["nullable"]:
                type_name = (
                    self.map(f.ty, owner).as_optional(self.config.optional_style).name
                )
            spec.update(
                name=self.context.resolver.resolve_field(wire_name),
                wire_name=wire_name,
                type=type_name,
                optional=f.optional,
                docs=_doc_lines(f.docs) if self.config.add_comments else [],
            )
            specs.append(spec)
        return specs

    def case_spec(
        self, enum_name: str, variant: Variant, repr: EnumRepr, owner: NamedDataType
    ) -> Dict[str, Any]:
        """Describe one enum case for declaration and synthesis templates."""
        spec: Dict[str, Any] = {
            "name": self.context.resolver.resolve_case(variant.name),
            "wire": variant_wire_name(variant, repr),
            "docs": _doc_lines(variant.docs) if self.config.add_comments else [],
            "slots": [],
            "aux": None,
            "aux_name": None,
            "aux_fields": [],
        }

        if variant.is_unit_like:
            spec["kind"] = "unit"
        elif variant.is_tuple:
            spec["kind"] = "tuple"
            spec["slots"] = [self.slot_spec(f.ty, owner) for f in variant.fields.visible()]
        else:
            aux = self.context.variant_namer(enum_name, variant.name)
            spec["kind"] = "struct"
            spec["aux_name"] = aux
            # Auxiliary structs share the enum's generic parameters
            spec["aux"] = f"{aux}<{', '.join(owner.generics)}>" if owner.generics else aux
            spec["aux_fields"] = self.field_specs(variant.fields, owner)

        values = [f"value{i}" for i in range(len(spec["slots"]))]
        spec["bindings"] = ", ".join(values)
        spec["patterns"] = ", ".join(f"let {v}" for v in values)
        return spec


def _doc_lines(docs: str) -> List[str]:
    return [line.strip() for line in docs.strip().splitlines()] if docs else []


def generic_clause(generics: Tuple[str, ...]) -> str:
    """Generic parameter clause with a Codable constraint on each parameter."""
    if not generics:
        return ""
    return "<" + ", ".join(f"{g}: Codable" for g in generics) + ">"
