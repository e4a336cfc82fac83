"""Shared builders and fixtures for the swift-typegen test suite."""

from functools import partial

import pytest

from swift_typegen.codegen.core.config import load_config
from swift_typegen.codegen.core.schema import (
    EnumRepr,
    EnumType,
    Field,
    NamedDataType,
    NamedFields,
    Nullable,
    Primitive,
    PrimitiveKind,
    Reference,
    StructType,
    TypeCollection,
    UnnamedFields,
    Variant,
)
from swift_typegen.codegen.languages.swift import SwiftGenerator
from swift_typegen.codegen.languages.swift.config import SwiftConfig
from swift_typegen.codegen.languages.swift.naming import NamingResolver, variant_struct_name
from swift_typegen.codegen.languages.swift.types import ExportContext, SwiftTypeMapper

STRING = Primitive(PrimitiveKind.STRING)
U32 = Primitive(PrimitiveKind.U32)
I64 = Primitive(PrimitiveKind.I64)
F64 = Primitive(PrimitiveKind.F64)
BOOL = Primitive(PrimitiveKind.BOOL)


def named_struct(*fields) -> StructType:
    """Struct from (name, type) or (name, Field) pairs."""
    return StructType(
        NamedFields(
            tuple(
                (name, ty if isinstance(ty, Field) else Field(ty)) for name, ty in fields
            )
        )
    )


def tuple_struct(*types) -> StructType:
    return StructType(UnnamedFields(tuple(Field(ty) for ty in types)))


def unit(name: str, **kwargs) -> Variant:
    return Variant(name, **kwargs)


def tuple_variant(name: str, *types) -> Variant:
    return Variant(name, UnnamedFields(tuple(Field(ty) for ty in types)))


def struct_variant(name: str, *fields) -> Variant:
    return Variant(name, named_struct(*fields).fields)


def enum(*variants, **repr_kwargs) -> EnumType:
    return EnumType(tuple(variants), EnumRepr(**repr_kwargs))


def named(name: str, ty, module_path: str = "app", sid: str = None, **kwargs) -> NamedDataType:
    return NamedDataType(
        sid=sid or f"{module_path}::{name}",
        name=name,
        ty=ty,
        module_path=module_path,
        **kwargs,
    )


def ref(ndt: NamedDataType, *generics) -> Reference:
    return Reference(ndt.sid, tuple(generics))


def collection(*ndts) -> TypeCollection:
    return TypeCollection(ndts)


def optional(ty) -> Nullable:
    return Nullable(ty)


@pytest.fixture
def export():
    """Export a collection with config overrides; returns formatted Swift."""

    def _export(types, **overrides):
        return SwiftGenerator(load_config("swift", overrides)).export(types)

    return _export


@pytest.fixture
def make_mapper():
    """Build a type mapper over a collection with the given SwiftConfig options."""

    def _make(types, **config_kwargs):
        config = SwiftConfig(**config_kwargs)
        resolver = NamingResolver(config)
        names = resolver.resolve_collection(types)
        context = ExportContext(
            types=types,
            config=config,
            names=names,
            resolver=resolver,
            variant_namer=partial(variant_struct_name, strategy=config.struct_naming),
        )
        return SwiftTypeMapper(context)

    return _make
