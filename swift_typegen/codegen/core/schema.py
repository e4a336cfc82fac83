"""
Core type model for code generation.

Describes the language-agnostic type graph that generators translate:
named types keyed by a stable identity (SID), each holding a closed set of
data type shapes. Also converts a JSON description of a type collection into
this model.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union
from enum import Enum

from ...logging_config import get_logger

logger = get_logger(__name__)


class SchemaError(Exception):
    """Exception raised for malformed type model documents."""

    pass


class PrimitiveKind(Enum):
    """Primitive scalar kinds of the source language."""

    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    ISIZE = "isize"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    USIZE = "usize"
    F16 = "f16"
    F32 = "f32"
    F64 = "f64"
    BOOL = "bool"
    CHAR = "char"
    STRING = "String"


class LiteralKind(Enum):
    """Kinds of literal (single-value) types."""

    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    BOOL = "bool"
    STRING = "String"
    CHAR = "char"
    NONE = "None"


class ReprKind(Enum):
    """Wire representation of a tagged union."""

    EXTERNAL = "external"  # {"Variant": payload}
    INTERNAL = "internal"  # {"tag": "Variant", ...payload}
    ADJACENT = "adjacent"  # {"tag": "Variant", "content": payload}
    UNTAGGED = "untagged"  # payload


def _freeze(instance, attribute: str):
    """Store list-like attributes of a frozen dataclass as tuples."""
    value = getattr(instance, attribute)
    if not isinstance(value, tuple):
        object.__setattr__(instance, attribute, tuple(value))


# Data type shapes


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind


@dataclass(frozen=True)
class Literal:
    kind: LiteralKind
    value: Any = None


@dataclass(frozen=True)
class ListType:
    item: "DataType"


@dataclass(frozen=True)
class MapType:
    key: "DataType"
    value: "DataType"


@dataclass(frozen=True)
class Nullable:
    inner: "DataType"


@dataclass(frozen=True)
class TupleType:
    elements: Tuple["DataType", ...] = ()

    def __post_init__(self):
        _freeze(self, "elements")


@dataclass(frozen=True)
class Field:
    """A struct field or tuple slot."""

    ty: "DataType"
    optional: bool = False  # may be absent on the wire
    skip: bool = False
    docs: str = ""


@dataclass(frozen=True)
class UnitFields:
    """No fields at all (`struct Foo;`, `Variant`)."""

    def visible(self) -> Tuple:
        return ()


@dataclass(frozen=True)
class UnnamedFields:
    """Positional slots (`struct Foo(A, B)`, `Variant(A, B)`)."""

    fields: Tuple[Field, ...] = ()

    def __post_init__(self):
        _freeze(self, "fields")

    def visible(self) -> Tuple[Field, ...]:
        """Slots that are not skip-marked, in declaration order."""
        return tuple(f for f in self.fields if not f.skip)


@dataclass(frozen=True)
class NamedFields:
    """Named fields in declaration order."""

    fields: Tuple[Tuple[str, Field], ...] = ()

    def __post_init__(self):
        _freeze(self, "fields")

    def visible(self) -> Tuple[Tuple[str, Field], ...]:
        """(name, field) pairs that are not skip-marked, in declaration order."""
        return tuple((name, f) for name, f in self.fields if not f.skip)


Fields = Union[UnitFields, UnnamedFields, NamedFields]


@dataclass(frozen=True)
class StructType:
    fields: Fields = field(default_factory=UnitFields)


@dataclass(frozen=True)
class Variant:
    """One enum variant."""

    name: str
    fields: Fields = field(default_factory=UnitFields)
    skip: bool = False
    docs: str = ""

    @property
    def is_unit_like(self) -> bool:
        """Unit, empty tuple or empty braces: no payload on the wire."""
        return not self.fields.visible()

    @property
    def is_struct_like(self) -> bool:
        return isinstance(self.fields, NamedFields) and bool(self.fields.visible())

    @property
    def is_tuple(self) -> bool:
        """Has at least one positional payload slot."""
        return isinstance(self.fields, UnnamedFields) and bool(self.fields.visible())


@dataclass(frozen=True)
class EnumRepr:
    """Tagging metadata for an enum.

    ``string`` marks enums whose unit variants serialize as raw string
    values; ``rename_all`` is the serde rename rule for variant wire names.
    """

    kind: ReprKind = ReprKind.EXTERNAL
    tag: Optional[str] = None
    content: Optional[str] = None
    string: bool = False
    rename_all: Optional[str] = None


@dataclass(frozen=True)
class EnumType:
    variants: Tuple[Variant, ...] = ()
    repr: EnumRepr = field(default_factory=EnumRepr)

    def __post_init__(self):
        _freeze(self, "variants")

    def visible_variants(self) -> Tuple[Variant, ...]:
        """Variants that are not skip-marked, in declaration order."""
        return tuple(v for v in self.variants if not v.skip)


@dataclass(frozen=True)
class Reference:
    """Reference to another named type by SID, with generic arguments."""

    sid: str
    generics: Tuple["DataType", ...] = ()

    def __post_init__(self):
        _freeze(self, "generics")


@dataclass(frozen=True)
class Generic:
    """A generic parameter of the enclosing named type."""

    name: str


DataType = Union[
    Primitive,
    Literal,
    ListType,
    MapType,
    Nullable,
    TupleType,
    StructType,
    EnumType,
    Reference,
    Generic,
]


@dataclass(frozen=True)
class NamedDataType:
    """A registered, named type definition."""

    sid: str
    name: str
    ty: DataType
    module_path: str = ""
    generics: Tuple[str, ...] = ()
    docs: str = ""
    deprecated: bool = False
    deprecation_note: Optional[str] = None

    def __post_init__(self):
        _freeze(self, "generics")


class TypeCollection:
    """Registered named types keyed by SID, in registration order."""

    def __init__(self, types: Iterable[NamedDataType] = ()):
        self._types: Dict[str, NamedDataType] = {}
        for ndt in types:
            self.register(ndt)

    def register(self, ndt: NamedDataType) -> "TypeCollection":
        """Register a type. Re-registering a SID replaces its definition."""
        self._types[ndt.sid] = ndt
        return self

    def get(self, sid: str) -> Optional[NamedDataType]:
        return self._types.get(sid)

    def __contains__(self, sid: object) -> bool:
        return sid in self._types

    def __iter__(self) -> Iterator[NamedDataType]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)


# JSON type model conversion

_PRIMITIVES = {kind.value: kind for kind in PrimitiveKind}
_LITERALS = {kind.value: kind for kind in LiteralKind}
_REPRS = {kind.value: kind for kind in ReprKind}


def load_type_collection(document: Dict[str, Any]) -> TypeCollection:
    """
    Convert a JSON type model document into a TypeCollection.

    The document has the form ``{"types": [<named type>, ...]}`` where each
    named type is::

        {"sid": "app::User", "name": "User", "module_path": "app",
         "generics": [], "docs": "", "deprecated": false,
         "type": <data type>}

    A data type is either a primitive name (``"u32"``, ``"String"``) or an
    object with a ``kind`` key: ``primitive``, ``literal``, ``list``,
    ``map``, ``nullable``, ``tuple``, ``struct``, ``enum``, ``reference``
    or ``generic``.

    Args:
        document: Parsed JSON document

    Returns:
        TypeCollection in document order

    Raises:
        SchemaError: If the document is malformed
    """
    if not isinstance(document, dict) or not isinstance(document.get("types"), list):
        raise SchemaError("Type model must be an object with a 'types' array")

    collection = TypeCollection()
    for index, node in enumerate(document["types"]):
        ndt = _convert_named_type(node, f"types[{index}]")
        if ndt.sid in collection:
            logger.warning(f"SID '{ndt.sid}' registered more than once; keeping the last")
        collection.register(ndt)

    logger.debug(f"Loaded {len(collection)} named types")
    return collection


def _require(node: Dict[str, Any], key: str, path: str) -> Any:
    if key not in node:
        raise SchemaError(f"{path}: missing required key '{key}'")
    return node[key]


def _convert_named_type(node: Any, path: str) -> NamedDataType:
    if not isinstance(node, dict):
        raise SchemaError(f"{path}: named type must be an object")

    name = _require(node, "name", path)
    deprecated = node.get("deprecated", False)
    note = None
    if isinstance(deprecated, str):
        note = deprecated
        deprecated = True

    return NamedDataType(
        sid=node.get("sid") or name,
        name=name,
        ty=convert_datatype(_require(node, "type", path), f"{path}.type"),
        module_path=node.get("module_path", ""),
        generics=tuple(node.get("generics", [])),
        docs=node.get("docs", ""),
        deprecated=bool(deprecated),
        deprecation_note=note,
    )


def convert_datatype(node: Any, path: str = "type") -> DataType:
    """Convert one JSON data type node into the type model."""
    if isinstance(node, str):
        if node not in _PRIMITIVES:
            raise SchemaError(f"{path}: unknown primitive '{node}'")
        return Primitive(_PRIMITIVES[node])

    if not isinstance(node, dict):
        raise SchemaError(f"{path}: data type must be a string or an object")

    kind = _require(node, "kind", path)

    if kind == "primitive":
        return convert_datatype(_require(node, "primitive", path), path)
    elif kind == "literal":
        literal = _require(node, "literal", path)
        if literal not in _LITERALS:
            raise SchemaError(f"{path}: unknown literal kind '{literal}'")
        return Literal(_LITERALS[literal], node.get("value"))
    elif kind == "list":
        return ListType(convert_datatype(_require(node, "item", path), f"{path}.item"))
    elif kind == "map":
        return MapType(
            convert_datatype(_require(node, "key", path), f"{path}.key"),
            convert_datatype(_require(node, "value", path), f"{path}.value"),
        )
    elif kind == "nullable":
        return Nullable(
            convert_datatype(_require(node, "inner", path), f"{path}.inner")
        )
    elif kind == "tuple":
        return TupleType(
            tuple(
                convert_datatype(element, f"{path}.elements[{i}]")
                for i, element in enumerate(node.get("elements", []))
            )
        )
    elif kind == "struct":
        return StructType(_convert_fields(node.get("fields"), f"{path}.fields"))
    elif kind == "enum":
        return EnumType(
            tuple(
                _convert_variant(variant, f"{path}.variants[{i}]")
                for i, variant in enumerate(_require(node, "variants", path))
            ),
            _convert_repr(node.get("repr"), f"{path}.repr"),
        )
    elif kind == "reference":
        return Reference(
            _require(node, "sid", path),
            tuple(
                convert_datatype(arg, f"{path}.generics[{i}]")
                for i, arg in enumerate(node.get("generics", []))
            ),
        )
    elif kind == "generic":
        return Generic(_require(node, "name", path))

    raise SchemaError(f"{path}: unknown data type kind '{kind}'")


def _convert_field(node: Any, path: str) -> Field:
    if not isinstance(node, dict):
        raise SchemaError(f"{path}: field must be an object")
    return Field(
        ty=convert_datatype(_require(node, "type", path), f"{path}.type"),
        optional=node.get("optional", False),
        skip=node.get("skip", False),
        docs=node.get("docs", ""),
    )


def _convert_fields(node: Optional[Dict[str, Any]], path: str) -> Fields:
    if node is None:
        return UnitFields()
    if not isinstance(node, dict):
        raise SchemaError(f"{path}: fields must be an object")

    kind = node.get("kind", "unit")
    if kind == "unit":
        return UnitFields()
    elif kind == "unnamed":
        return UnnamedFields(
            tuple(
                _convert_field(slot, f"{path}.fields[{i}]")
                for i, slot in enumerate(node.get("fields", []))
            )
        )
    elif kind == "named":
        named: List[Tuple[str, Field]] = []
        for i, slot in enumerate(node.get("fields", [])):
            slot_path = f"{path}.fields[{i}]"
            name = _require(slot, "name", slot_path)
            named.append((name, _convert_field(slot, slot_path)))
        return NamedFields(tuple(named))

    raise SchemaError(f"{path}: unknown fields kind '{kind}'")


def _convert_variant(node: Any, path: str) -> Variant:
    if not isinstance(node, dict):
        raise SchemaError(f"{path}: variant must be an object")
    return Variant(
        name=_require(node, "name", path),
        fields=_convert_fields(node.get("fields"), f"{path}.fields"),
        skip=node.get("skip", False),
        docs=node.get("docs", ""),
    )


def _convert_repr(node: Optional[Dict[str, Any]], path: str) -> EnumRepr:
    if node is None:
        return EnumRepr()
    if not isinstance(node, dict):
        raise SchemaError(f"{path}: repr must be an object")

    kind = node.get("kind", "external")
    if kind not in _REPRS:
        raise SchemaError(f"{path}: unknown enum representation '{kind}'")

    repr_kind = _REPRS[kind]
    if repr_kind == ReprKind.ADJACENT:
        _require(node, "tag", path)
        _require(node, "content", path)
    elif repr_kind == ReprKind.INTERNAL:
        _require(node, "tag", path)

    return EnumRepr(
        kind=repr_kind,
        tag=node.get("tag"),
        content=node.get("content"),
        string=node.get("string", False),
        rename_all=node.get("rename_all"),
    )
