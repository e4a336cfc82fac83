"""
Enum representation classification and Codable synthesis.

Swift's derived Codable conformance cannot express serde's tagged enum wire
formats or explicit nulls, so these shapes get hand-written
``init(from:)``/``encode(to:)`` pairs rendered from templates.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ...core.generator import UnsupportedTypeError
from ...core.schema import EnumRepr, EnumType, NamedFields, ReprKind, StructType, UnnamedFields
from ....logging_config import get_logger
from .special import is_number_enum

logger = get_logger(__name__)


class EnumStrategy(Enum):
    """Code pattern chosen for an enum."""

    PLAIN = "plain"  # unit cases, derived Codable
    STRING = "string"  # unit cases with String raw values
    EXTERNAL = "external"  # {"Variant": payload}
    ADJACENT = "adjacent"  # {tag: "Variant", content: payload}
    INTERNAL = "internal"  # {tag: "Variant", ...payload}
    UNTAGGED = "untagged"  # payload only
    SPECIAL = "special"  # rendered through the special-type registry

    @property
    def needs_synthesis(self) -> bool:
        return self in _SYNTHESIZED


_SYNTHESIZED = {
    EnumStrategy.EXTERNAL,
    EnumStrategy.ADJACENT,
    EnumStrategy.INTERNAL,
    EnumStrategy.UNTAGGED,
}

_ENUM_TEMPLATES = {
    EnumStrategy.EXTERNAL: "enum_external.swift.j2",
    EnumStrategy.ADJACENT: "enum_adjacent.swift.j2",
    EnumStrategy.INTERNAL: "enum_internal.swift.j2",
    EnumStrategy.UNTAGGED: "enum_untagged.swift.j2",
}


def classify_enum(dt: EnumType) -> EnumStrategy:
    """
    Pick the code pattern for an enum.

    The string flag only applies when every visible variant is unit-like;
    adjacent and internal tagging always need synthesis.
    """
    if is_number_enum(dt):
        return EnumStrategy.SPECIAL

    kind = dt.repr.kind
    if kind == ReprKind.ADJACENT:
        return EnumStrategy.ADJACENT
    if kind == ReprKind.INTERNAL:
        return EnumStrategy.INTERNAL

    if all(v.is_unit_like for v in dt.visible_variants()):
        return EnumStrategy.STRING if dt.repr.string else EnumStrategy.PLAIN

    if kind == ReprKind.UNTAGGED:
        return EnumStrategy.UNTAGGED
    return EnumStrategy.EXTERNAL


def struct_codable_mode(dt: StructType, fields: List[Dict[str, Any]]) -> Optional[str]:
    """
    Synthesis mode for a struct, or None when derived Codable is enough.

    ``keyed`` keeps explicit nulls for nullable named fields, ``single``
    encodes a newtype as its bare value and ``unkeyed`` encodes a tuple
    struct as an array.
    """
    if not fields:
        return None
    if isinstance(dt.fields, UnnamedFields):
        return "single" if len(fields) == 1 else "unkeyed"
    if isinstance(dt.fields, NamedFields) and any(f["nullable"] for f in fields):
        return "keyed"
    return None


class CodableSynthesizer:
    """Renders Codable members and extensions."""

    def __init__(self, render: Callable[[str, Dict[str, Any]], str]):
        self.render = render

    def struct_members(
        self, mode: str, fields: List[Dict[str, Any]], is_class: bool = False
    ) -> str:
        """Render ``init(from:)`` and ``encode(to:)`` for a struct."""
        return self.render(
            "struct_codable.swift.j2",
            {"mode": mode, "fields": fields, "is_class": is_class},
        ).rstrip("\n")

    def enum_members(
        self,
        name: str,
        strategy: EnumStrategy,
        cases: List[Dict[str, Any]],
        repr: EnumRepr,
    ) -> str:
        """
        Render the Codable members of a tagged enum.

        Raises:
            UnsupportedTypeError: If the representation metadata does not
                match the strategy or a payload cannot be expressed
        """
        if strategy == EnumStrategy.ADJACENT:
            if repr.kind != ReprKind.ADJACENT or not repr.tag or not repr.content:
                raise UnsupportedTypeError("Expected adjacently tagged enum")

        if strategy == EnumStrategy.INTERNAL:
            if repr.kind != ReprKind.INTERNAL or not repr.tag:
                raise UnsupportedTypeError("Expected internally tagged enum")
            for case in cases:
                slots = case["slots"]
                if len(slots) > 1 or any(s["nullable"] for s in slots):
                    raise UnsupportedTypeError(
                        f"Variant '{case['wire']}' of {name} cannot be internally tagged: "
                        f"its payload is not an object"
                    )

        if strategy not in _ENUM_TEMPLATES:
            raise UnsupportedTypeError(f"Enum strategy '{strategy.value}' is not synthesized")

        logger.debug(f"Synthesizing {strategy.value} Codable for {name}")
        return self.render(
            _ENUM_TEMPLATES[strategy],
            {
                "name": name,
                "cases": cases,
                "tag": repr.tag,
                "content": repr.content,
                "has_unit": any(c["kind"] == "unit" for c in cases),
            },
        ).rstrip("\n")

    def extension(self, name: str, members: str, conformance: bool) -> str:
        """Wrap members in an extension, optionally adding the Codable conformance."""
        return self.render(
            "codable_extension.swift.j2",
            {"name": name, "members": members, "conformance": conformance},
        )
