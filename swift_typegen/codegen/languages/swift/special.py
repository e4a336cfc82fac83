"""
Special-type registry for Swift.

Some foreign types have idiomatic Swift equivalents. They are recognized by
name or by shape and rendered as a fixed Swift type instead of being
generated structurally.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from ...core.schema import (
    DataType,
    EnumType,
    NamedDataType,
    NamedFields,
    Primitive,
    PrimitiveKind,
    ReprKind,
    StructType,
    UnnamedFields,
)


def is_duration_struct(dt: DataType) -> bool:
    """A struct whose only fields are ``secs`` and ``nanos``."""
    if not isinstance(dt, StructType) or not isinstance(dt.fields, NamedFields):
        return False
    names = [name for name, _ in dt.fields.visible()]
    return sorted(names) == ["nanos", "secs"]


_NUMBER_VARIANTS = {
    "f64": PrimitiveKind.F64,
    "i64": PrimitiveKind.I64,
    "u64": PrimitiveKind.U64,
}


def is_number_enum(dt: DataType) -> bool:
    """
    An untagged enum with exactly the variants ``f64``, ``i64`` and ``u64``,
    each holding a single primitive of the matching kind.
    """
    if not isinstance(dt, EnumType) or dt.repr.kind != ReprKind.UNTAGGED:
        return False

    variants = dt.visible_variants()
    if sorted(v.name for v in variants) != sorted(_NUMBER_VARIANTS):
        return False

    for variant in variants:
        if not isinstance(variant.fields, UnnamedFields):
            return False
        slots = variant.fields.visible()
        if len(slots) != 1:
            return False
        slot = slots[0].ty
        if not isinstance(slot, Primitive) or slot.kind != _NUMBER_VARIANTS[variant.name]:
            return False
    return True


def _module_contains(ndt: NamedDataType, *fragments: str) -> bool:
    return any(fragment in ndt.module_path for fragment in fragments)


@dataclass(frozen=True)
class SpecialType:
    """One registry entry."""

    key: str
    swift_name: str
    matches_named: Callable[[NamedDataType], bool]
    matches_inline: Callable[[DataType], bool] = lambda dt: False
    helper: Optional[str] = None  # helper declaration template


DEFAULT_SPECIAL_TYPES = (
    SpecialType(
        key="duration",
        swift_name="RustDuration",
        matches_named=lambda ndt: ndt.name == "Duration"
        and (is_duration_struct(ndt.ty) or _module_contains(ndt, "std::time", "core::time")),
        matches_inline=is_duration_struct,
        helper="helper_rust_duration.swift.j2",
    ),
    SpecialType(
        key="timestamp",
        swift_name="Date",
        matches_named=lambda ndt: ndt.name == "SystemTime"
        or (ndt.name in ("DateTime", "NaiveDateTime") and _module_contains(ndt, "chrono")),
    ),
    SpecialType(
        key="json_value",
        swift_name="JsonValue",
        matches_named=lambda ndt: ndt.name == "JsonValue"
        or (ndt.name == "Value" and _module_contains(ndt, "serde_json")),
        helper="helper_json_value.swift.j2",
    ),
    SpecialType(
        key="number",
        swift_name="Double",
        matches_named=lambda ndt: is_number_enum(ndt.ty)
        or (ndt.name == "Number" and _module_contains(ndt, "serde_json")),
        matches_inline=is_number_enum,
    ),
)


class SpecialTypeRegistry:
    """Ordered table of special types; the first matching entry wins."""

    def __init__(self, entries: Optional[List[SpecialType]] = None):
        self._entries = list(DEFAULT_SPECIAL_TYPES if entries is None else entries)

    def register(self, entry: SpecialType):
        """Add an entry with precedence over the existing ones."""
        self._entries.insert(0, entry)

    def match_named(self, ndt: NamedDataType) -> Optional[SpecialType]:
        """Entry claiming a registered type, if any."""
        for entry in self._entries:
            if entry.matches_named(ndt):
                return entry
        return None

    def match_inline(self, dt: DataType) -> Optional[SpecialType]:
        """Entry claiming an anonymous shape, if any."""
        for entry in self._entries:
            if entry.matches_inline(dt):
                return entry
        return None

    def __iter__(self):
        return iter(self._entries)
