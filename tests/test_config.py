import json

import pytest

from swift_typegen.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)
from swift_typegen.codegen.core.naming import NamingCase
from swift_typegen.codegen.languages.swift.config import (
    DuplicateNameStrategy,
    OptionalStyle,
    StructNamingStrategy,
    SwiftConfig,
)


def test_swift_defaults():
    config = load_config("swift")
    swift = SwiftConfig.from_generator_config(config)

    assert config.header.startswith("// This file has been generated")
    assert swift.type_case == NamingCase.PASCAL_CASE
    assert swift.field_case == NamingCase.CAMEL_CASE
    assert swift.optional_style == OptionalStyle.QUESTION_MARK
    assert swift.duplicate_strategy == DuplicateNameStrategy.WARN
    assert swift.struct_naming == StructNamingStrategy.AUTO_RENAME
    assert swift.imports == ("Foundation",)
    assert not swift.generate_initializers


def test_overrides_merge_into_custom():
    config = load_config(
        "swift",
        {"field_case": "snake", "optional_style": "optional", "custom": {"struct_naming": "keep_original"}},
    )
    assert config.field_case == "snake"
    # Defaults survive a partial custom override
    assert config.custom["duplicate_strategy"] == "warn"
    assert config.custom["optional_style"] == "optional"
    assert config.custom["struct_naming"] == "keep_original"


def test_invalid_values_raise():
    with pytest.raises(ConfigError, match="Invalid optional_style"):
        SwiftConfig.from_generator_config(load_config("swift", {"optional_style": "bang"}))
    with pytest.raises(ConfigError, match="Invalid type_case"):
        SwiftConfig.from_generator_config(load_config("swift", {"type_case": "title"}))


def test_custom_strategy_requires_function():
    with pytest.raises(ConfigError, match="duplicate_name_fn"):
        SwiftConfig(duplicate_strategy=DuplicateNameStrategy.CUSTOM)

    config = SwiftConfig.from_generator_config(
        load_config(
            "swift",
            {"duplicate_strategy": "custom", "duplicate_name_fn": lambda ndt: ndt.name},
        )
    )
    assert config.duplicate_strategy == DuplicateNameStrategy.CUSTOM


def test_config_file_round_trip(tmp_path):
    manager = ConfigManager()
    original = manager.get_config(
        "swift",
        {"generate_initializers": True, "duplicate_strategy": "qualify", "duplicate_name_fn": len},
    )
    path = tmp_path / "swift.json"
    manager.save_config(original, path)

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert "duplicate_name_fn" not in saved
    assert saved["duplicate_strategy"] == "qualify"

    loaded = manager.get_config("swift", config_file=path)
    assert loaded.generate_initializers
    assert loaded.custom["duplicate_strategy"] == "qualify"


def test_config_file_errors(tmp_path):
    manager = ConfigManager()
    with pytest.raises(ConfigError, match="not found"):
        manager.get_config("swift", config_file=tmp_path / "missing.json")

    yaml_file = tmp_path / "swift.yaml"
    yaml_file.write_text("type_case: pascal\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be JSON"):
        manager.get_config("swift", config_file=yaml_file)

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        manager.get_config("swift", config_file=broken)


def test_overrides_win_over_config_file(tmp_path):
    path = tmp_path / "swift.json"
    path.write_text(json.dumps({"field_case": "snake", "indent_size": 2}), encoding="utf-8")

    config = load_config("swift", {"field_case": "kebab"}, path)
    assert config.field_case == "kebab"
    assert config.indent_size == 2


def test_validate_config():
    manager = ConfigManager()
    assert manager.validate_config(manager.get_config("swift"), "swift") == []

    bad = GeneratorConfig(
        type_case="title",
        indent_size=0,
        custom={"optional_style": "bang", "duplicate_strategy": "custom"},
    )
    warnings = manager.validate_config(bad, "swift")
    assert "Invalid type_case: title" in warnings
    assert "Invalid indent_size: 0" in warnings
    assert "Invalid optional_style: bang" in warnings
    assert any("duplicate_name_fn" in w for w in warnings)
