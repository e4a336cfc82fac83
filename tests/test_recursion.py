from conftest import (
    I64,
    STRING,
    collection,
    enum,
    named,
    named_struct,
    optional,
    ref,
    tuple_variant,
    unit,
)
from swift_typegen.codegen.core.schema import ListType, MapType, Reference
from swift_typegen.codegen.languages.swift.recursion import RecursionDetector


def test_self_reference_through_containers():
    node = named(
        "Node",
        named_struct(
            ("children", ListType(Reference("app::Node"))),
            ("parent", optional(Reference("app::Node"))),
        ),
    )
    leaf = named("Leaf", named_struct(("label", STRING)))
    detector = RecursionDetector(collection(node, leaf))

    assert detector.is_recursive(node)
    assert not detector.is_recursive(leaf)


def test_recursive_enum_variant_payload():
    expr = named(
        "Expr",
        enum(
            tuple_variant("Literal", I64),
            tuple_variant("Add", Reference("app::Expr"), Reference("app::Expr")),
        ),
    )
    status = named("Status", enum(unit("Ok"), unit("Failed")))
    detector = RecursionDetector(collection(expr, status))

    assert detector.is_recursive(expr)
    assert not detector.is_recursive(status)


def test_mutual_recursion_through_other_types():
    tree = named("Tree", named_struct(("forest", Reference("app::Forest"))))
    forest = named("Forest", named_struct(("trees", MapType(STRING, Reference("app::Tree")))))
    plain = named("Plain", named_struct(("forest", ref(forest))))
    detector = RecursionDetector(collection(tree, forest, plain))

    assert detector.is_recursive(tree)
    assert detector.is_recursive(forest)
    # Reaches a cycle, but never itself
    assert not detector.is_recursive(plain)


def test_dangling_reference_is_not_recursion():
    broken = named("Broken", named_struct(("other", Reference("nowhere::Missing"))))
    assert not RecursionDetector(collection(broken)).is_recursive(broken)


def test_recursive_declarations(export):
    node = named("Node", named_struct(("children", ListType(Reference("app::Node")))))
    expr = named(
        "Expr",
        enum(
            tuple_variant("Literal", I64),
            tuple_variant("Neg", Reference("app::Expr")),
        ),
    )
    leaf = named("Leaf", named_struct(("label", STRING)))

    code = export(collection(node, expr, leaf))

    assert "public final class Node: Codable {" in code
    assert "public indirect enum Expr {" in code
    assert "public struct Leaf: Codable {" in code


def test_recursive_struct_with_nullable_field_uses_required_init(export):
    node = named(
        "Node",
        named_struct(("value", STRING), ("next", optional(Reference("app::Node")))),
    )
    code = export(collection(node))

    assert "public final class Node: Codable {" in code
    assert "public required init(from decoder: Decoder) throws {" in code
    assert "    }\n\n}" not in code
    assert "extension Node" not in code
