import pytest

from swift_typegen.codegen import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)
from swift_typegen.codegen.core.config import load_config
from swift_typegen.codegen.languages.swift import SwiftGenerator
from swift_typegen.codegen.registry import get_language_info, is_language_supported


class LoudSwiftGenerator(SwiftGenerator):
    """Stand-in generator for registration tests."""


@pytest.fixture
def registry():
    registry = GeneratorRegistry()
    registry.register("swift", SwiftGenerator, aliases=["swiftlang"])
    return registry


def test_global_registry_knows_swift():
    assert list_supported_languages() == ["swift"]
    assert is_language_supported("Swift")
    assert is_language_supported("swiftlang")
    assert not is_language_supported("kotlin")
    assert get_registry() is get_registry()


def test_aliases_resolve(registry):
    assert registry.resolve_language("SWIFTLANG") == "swift"
    assert isinstance(registry.create_generator("swiftlang"), SwiftGenerator)
    assert registry.get_aliases_for_language("swift") == ["swiftlang"]


def test_unknown_language(registry):
    with pytest.raises(RegistryError, match="No generator registered for language: kotlin"):
        registry.create_generator("kotlin")


def test_register_rejects_non_generators(registry):
    with pytest.raises(RegistryError, match="must inherit from CodeGenerator"):
        registry.register("text", str)


def test_alias_conflicts(registry):
    with pytest.raises(RegistryError, match="conflicts with existing primary language"):
        registry.register("loud", LoudSwiftGenerator, aliases=["swift"])
    with pytest.raises(RegistryError, match="already points to 'swift'"):
        registry.register("loud", LoudSwiftGenerator, aliases=["swiftlang"])


def test_duplicate_registration_keeps_first_unless_replaced(registry):
    registry.register("swift", LoudSwiftGenerator)
    assert registry.get_generator_class("swift") is SwiftGenerator

    registry.register("swift", LoudSwiftGenerator, replace=True)
    assert registry.get_generator_class("swift") is LoudSwiftGenerator


def test_unregister_drops_aliases(registry):
    registry.unregister("swift")
    assert registry.list_languages() == []
    assert not registry.is_supported("swiftlang")


def test_config_sources(registry, tmp_path):
    generator = registry.create_generator("swift", {"optional_style": "optional"})
    assert generator.swift_config.optional_style.value == "optional"

    config = load_config("swift", {"generate_initializers": True})
    assert registry.create_generator("swift", config).config is config

    path = tmp_path / "swift.json"
    path.write_text('{"field_case": "snake"}', encoding="utf-8")
    assert registry.create_generator("swift", str(path)).config.field_case == "snake"

    with pytest.raises(RegistryError, match="Invalid config type"):
        registry.create_generator("swift", 42)


def test_invalid_config_becomes_registry_error():
    with pytest.raises(RegistryError, match="Failed to create swift generator"):
        get_generator("swift", {"duplicate_strategy": "ignore"})


def test_language_info():
    info = get_language_info("swiftlang")
    assert info == {
        "name": "swift",
        "class": "SwiftGenerator",
        "file_extension": ".swift",
        "aliases": ["swiftlang"],
        "module": "swift_typegen.codegen.languages.swift.generator",
    }
