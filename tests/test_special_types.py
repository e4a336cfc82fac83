from conftest import (
    F64,
    I64,
    STRING,
    U32,
    collection,
    enum,
    named,
    named_struct,
    ref,
    tuple_variant,
)
from swift_typegen.codegen.core.schema import (
    MapType,
    Primitive,
    PrimitiveKind,
    ReprKind,
    StructType,
)
from swift_typegen.codegen.languages.swift.special import (
    SpecialType,
    SpecialTypeRegistry,
    is_duration_struct,
    is_number_enum,
)

U64 = Primitive(PrimitiveKind.U64)
DURATION_SHAPE = named_struct(("secs", U64), ("nanos", U32))
NUMBER_SHAPE = enum(
    tuple_variant("f64", F64),
    tuple_variant("i64", I64),
    tuple_variant("u64", U64),
    kind=ReprKind.UNTAGGED,
)


def test_shape_predicates():
    assert is_duration_struct(DURATION_SHAPE)
    assert not is_duration_struct(named_struct(("secs", U64)))
    assert not is_duration_struct(StructType())

    assert is_number_enum(NUMBER_SHAPE)
    externally_tagged = enum(*NUMBER_SHAPE.variants)
    assert not is_number_enum(externally_tagged)
    wrong_slot = enum(
        tuple_variant("f64", STRING),
        tuple_variant("i64", I64),
        tuple_variant("u64", U64),
        kind=ReprKind.UNTAGGED,
    )
    assert not is_number_enum(wrong_slot)


def test_registry_matches_named_types():
    registry = SpecialTypeRegistry()

    assert registry.match_named(named("Duration", DURATION_SHAPE)).swift_name == "RustDuration"
    assert registry.match_named(named("SystemTime", StructType(), module_path="std::time")).swift_name == "Date"
    assert registry.match_named(named("DateTime", StructType(), module_path="chrono::datetime")).swift_name == "Date"
    assert registry.match_named(named("Value", StructType(), module_path="serde_json::value")).swift_name == "JsonValue"
    assert registry.match_named(named("Number", StructType(), module_path="serde_json")).swift_name == "Double"
    assert registry.match_named(named("Anything", NUMBER_SHAPE)).swift_name == "Double"

    # Same names outside the owning crates are ordinary types
    assert registry.match_named(named("DateTime", StructType(), module_path="app")) is None
    assert registry.match_named(named("Value", StructType(), module_path="app")) is None


def test_registered_entries_take_precedence():
    registry = SpecialTypeRegistry()
    registry.register(
        SpecialType("uuid", "UUID", matches_named=lambda ndt: ndt.name == "Uuid")
    )
    assert registry.match_named(named("Uuid", STRING, module_path="uuid")).swift_name == "UUID"


def test_special_types_are_not_declared(export):
    duration = named("Duration", DURATION_SHAPE, module_path="std::time")
    timestamp = named("SystemTime", StructType(), module_path="std::time")
    value = named("Value", StructType(), module_path="serde_json")
    job = named(
        "Job",
        named_struct(
            ("timeout", ref(duration)),
            ("created_at", ref(timestamp)),
            ("payload", MapType(STRING, ref(value))),
        ),
    )

    code = export(collection(duration, timestamp, value, job))

    assert "public let timeout: RustDuration" in code
    assert "public let createdAt: Date" in code
    assert "public let payload: [String: JsonValue]" in code
    assert "public struct RustDuration: Codable, Equatable {" in code
    assert "public indirect enum JsonValue: Codable, Equatable {" in code
    assert "public struct Duration" not in code
    assert "SystemTime" not in code
    # Helpers come before declarations
    assert code.index("public struct RustDuration") < code.index("public struct Job")


def test_helpers_only_emitted_when_used(export):
    code = export(collection(named("Job", named_struct(("id", STRING)))))
    assert "RustDuration" not in code
    assert "JsonValue" not in code


def test_inline_duration_shape(export):
    job = named("Job", named_struct(("elapsed", DURATION_SHAPE)))
    code = export(collection(job))
    assert "public let elapsed: RustDuration" in code
    assert "public var timeInterval: TimeInterval" in code
