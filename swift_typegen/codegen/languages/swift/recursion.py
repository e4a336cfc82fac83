"""
Recursive type detection.

A Swift struct cannot contain itself and an enum that does must be declared
``indirect``. The detector answers whether a named type can reach a reference
back to itself; the generator decides what syntax that implies.
"""

from typing import Dict, Optional, Set

from ...core.schema import (
    DataType,
    EnumType,
    ListType,
    MapType,
    NamedDataType,
    Nullable,
    Reference,
    StructType,
    TupleType,
    TypeCollection,
)
from .special import SpecialTypeRegistry


class RecursionDetector:
    """Graph reachability over one type collection, memoized per SID."""

    def __init__(
        self, types: TypeCollection, special_types: Optional[SpecialTypeRegistry] = None
    ):
        self.types = types
        self.special_types = special_types or SpecialTypeRegistry()
        self._memo: Dict[str, bool] = {}

    def is_recursive(self, ndt: NamedDataType) -> bool:
        """Whether ``ndt`` refers back to itself, directly or through other types."""
        if ndt.sid not in self._memo:
            self._memo[ndt.sid] = self.references(ndt.ty, ndt.sid, set())
        return self._memo[ndt.sid]

    def references(self, dt: DataType, target_sid: str, visited: Set[str]) -> bool:
        """Whether ``dt`` reaches a Reference to ``target_sid``."""
        if isinstance(dt, Reference):
            if dt.sid == target_sid:
                return True
            if any(self.references(arg, target_sid, visited) for arg in dt.generics):
                return True
            if dt.sid in visited:
                return False
            visited.add(dt.sid)

            ndt = self.types.get(dt.sid)
            # Dangling references are reported by the type mapper
            if ndt is None or self.special_types.match_named(ndt):
                return False
            return self.references(ndt.ty, target_sid, visited)

        if isinstance(dt, Nullable):
            return self.references(dt.inner, target_sid, visited)
        if isinstance(dt, ListType):
            return self.references(dt.item, target_sid, visited)
        if isinstance(dt, MapType):
            return self.references(dt.key, target_sid, visited) or self.references(
                dt.value, target_sid, visited
            )
        if isinstance(dt, TupleType):
            return any(self.references(e, target_sid, visited) for e in dt.elements)
        if isinstance(dt, StructType):
            return self._fields_reference(dt.fields, target_sid, visited)
        if isinstance(dt, EnumType):
            return any(
                self._fields_reference(variant.fields, target_sid, visited)
                for variant in dt.visible_variants()
            )
        return False

    def _fields_reference(self, fields, target_sid: str, visited: Set[str]) -> bool:
        for item in fields.visible():
            field = item[1] if isinstance(item, tuple) else item
            if self.references(field.ty, target_sid, visited):
                return True
        return False
