import pytest

from conftest import (
    BOOL,
    STRING,
    U32,
    collection,
    enum,
    named,
    named_struct,
    optional,
    ref,
    tuple_struct,
    unit,
)
from swift_typegen.codegen.core.generator import InvalidIdentifierError, UnsupportedTypeError
from swift_typegen.codegen.core.schema import (
    Field,
    Generic,
    ListType,
    Literal,
    LiteralKind,
    MapType,
    NamedFields,
    Primitive,
    PrimitiveKind,
    Reference,
    StructType,
    TupleType,
)
from swift_typegen.codegen.languages.swift.config import OptionalStyle


@pytest.fixture
def mapper(make_mapper):
    return make_mapper(collection())


@pytest.mark.parametrize(
    "kind, expected",
    [
        (PrimitiveKind.I8, "Int8"),
        (PrimitiveKind.I64, "Int64"),
        (PrimitiveKind.ISIZE, "Int"),
        (PrimitiveKind.U16, "UInt16"),
        (PrimitiveKind.USIZE, "UInt"),
        (PrimitiveKind.F32, "Float"),
        (PrimitiveKind.F64, "Double"),
        (PrimitiveKind.BOOL, "Bool"),
        (PrimitiveKind.CHAR, "Character"),
        (PrimitiveKind.STRING, "String"),
    ],
)
def test_primitives(mapper, kind, expected):
    assert mapper.map(Primitive(kind)).name == expected


@pytest.mark.parametrize(
    "kind, message",
    [
        (PrimitiveKind.I128, "128-bit integers"),
        (PrimitiveKind.U128, "128-bit integers"),
        (PrimitiveKind.F16, "f16"),
    ],
)
def test_unsupported_primitives(mapper, kind, message):
    with pytest.raises(UnsupportedTypeError, match=message):
        mapper.map(Primitive(kind))


def test_literals(mapper):
    assert mapper.map(Literal(LiteralKind.STRING, "v1")).name == "String"
    assert mapper.map(Literal(LiteralKind.NONE)).name == "Never?"
    with pytest.raises(UnsupportedTypeError, match="Unsupported literal type"):
        mapper.map(Literal(LiteralKind.U64, 1))


def test_collections(mapper):
    assert mapper.map(ListType(STRING)).name == "[String]"
    assert mapper.map(MapType(STRING, ListType(U32))).name == "[String: [UInt32]]"


def test_nullable_styles(make_mapper):
    question = make_mapper(collection())
    assert question.map(optional(STRING)).name == "String?"
    assert question.map(optional(optional(STRING))).name == "String?"

    wrapper = make_mapper(collection(), optional_style=OptionalStyle.OPTIONAL)
    assert wrapper.map(optional(ListType(STRING))).name == "Optional<[String]>"


def test_tuples(mapper):
    assert mapper.map(TupleType(())).name == "Void"
    assert mapper.map(TupleType((STRING,))).name == "String"
    assert mapper.map(TupleType((STRING, BOOL))).name == "(String, Bool)"


def test_references_use_resolved_names(make_mapper):
    page = named("page", named_struct(("items", ListType(Generic("T")))), generics=("T",))
    user = named("user_profile", named_struct(("id", U32)))
    mapper = make_mapper(collection(page, user))

    assert mapper.map(ref(user)).name == "UserProfile"
    assert mapper.map(ref(page, ref(user))).name == "Page<UserProfile>"
    assert mapper.map(Generic("T")).name == "T"


def test_dangling_reference(mapper):
    with pytest.raises(InvalidIdentifierError, match="unknown type 'missing::Type'"):
        mapper.map(Reference("missing::Type"))


def test_inline_structs(mapper):
    assert mapper.map(StructType()).name == "Void"
    assert mapper.map(tuple_struct(STRING)).name == "String"
    with pytest.raises(UnsupportedTypeError):
        mapper.map(named_struct(("a", STRING), ("b", U32)))


def test_inline_enums_are_not_expanded(mapper):
    with pytest.raises(UnsupportedTypeError):
        mapper.map(enum(unit("A")))


def test_field_specs(make_mapper):
    owner = named(
        "User",
        StructType(
            NamedFields(
                (
                    ("user_id", Field(U32)),
                    ("nickname", Field(STRING, optional=True)),
                    ("middle_name", Field(optional(STRING))),
                    ("secret", Field(STRING, skip=True)),
                )
            )
        ),
    )
    mapper = make_mapper(collection(owner))
    specs = mapper.field_specs(owner.ty.fields, owner)

    assert [(f["name"], f["wire_name"], f["type"]) for f in specs] == [
        ("userId", "user_id", "UInt32"),
        ("nickname", "nickname", "String?"),
        ("middleName", "middle_name", "String?"),
    ]
    assert [(f["nullable"], f["optional"]) for f in specs] == [
        (False, False),
        (False, True),
        (True, False),
    ]
    assert specs[2]["base"] == "String"


def test_unnamed_field_names(make_mapper):
    mapper = make_mapper(collection())
    single = tuple_struct(STRING)
    pair = tuple_struct(STRING, U32)

    assert [f["name"] for f in mapper.field_specs(single.fields, None)] == ["value"]
    assert [f["name"] for f in mapper.field_specs(pair.fields, None)] == ["field0", "field1"]
