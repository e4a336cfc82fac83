import io
import json

import pytest

from swift_typegen.cli import create_parser, main

DOCUMENT = {
    "types": [
        {
            "sid": "libraries::LibraryInfo",
            "name": "LibraryInfo",
            "module_path": "libraries",
            "type": {
                "kind": "struct",
                "fields": {"kind": "named", "fields": [{"name": "book_title", "type": "String"}]},
            },
        },
        {
            "sid": "core::status::LibraryInfo",
            "name": "LibraryInfo",
            "module_path": "core::status",
            "type": {
                "kind": "struct",
                "fields": {"kind": "named", "fields": [{"name": "count", "type": "u32"}]},
            },
        },
    ]
}


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "types.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    return path


def test_parser_defaults():
    args = create_parser().parse_args(["types.json"])
    assert args.file == "types.json"
    assert args.language == "swift"
    assert args.log_level == "WARNING"
    assert not args.initializers


def test_generate_to_file(model_file, tmp_path):
    output = tmp_path / "gen" / "Types.swift"
    exit_code = main([str(model_file), "-o", str(output), "--duplicates", "qualify"])

    assert exit_code == 0
    code = output.read_text(encoding="utf-8")
    assert "public struct CoreStatusLibraryInfo: Codable {" in code
    assert "public struct LibrariesLibraryInfo: Codable {" in code
    assert 'case bookTitle = "book_title"' in code


def test_generate_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(DOCUMENT)))
    exit_code = main(["--stdin", "--field-case", "snake", "--initializers"])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert "public let count: UInt32" in captured.out
    assert "public init(count: UInt32) {" in captured.out
    # Duplicate warning goes to stderr, code to stdout
    assert "Duplicate type name 'LibraryInfo'" in captured.err
    assert "Duplicate type name" not in captured.out


def test_duplicates_error_writes_nothing(model_file, tmp_path):
    output = tmp_path / "Types.swift"
    exit_code = main([str(model_file), "-o", str(output), "--duplicates", "error"])

    assert exit_code == 1
    assert not output.exists()


def test_missing_input():
    assert main([]) == 2


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 1


def test_malformed_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO('{"types": [{"name": "A"}]}'))
    assert main(["--stdin"]) == 1


def test_unknown_language(model_file):
    assert main([str(model_file), "--language", "kotlin"]) == 1


def test_bad_config_file(model_file, tmp_path):
    config = tmp_path / "swift.json"
    config.write_text('{"optional_style": "bang"}', encoding="utf-8")
    assert main([str(model_file), "--config", str(config)]) == 1


def test_list_languages(capsys):
    assert main(["--list-languages"]) == 0
    assert "swift" in capsys.readouterr().out


def test_language_info(capsys):
    assert main(["--language-info", "swiftlang"]) == 0
    assert main(["--language-info", "cobol"]) == 1


def test_output_file_from_config(model_file, tmp_path):
    output = tmp_path / "FromConfig.swift"
    config = tmp_path / "swift.json"
    config.write_text(
        json.dumps({"output_file": str(output), "duplicate_strategy": "qualify", "indent_size": 2}),
        encoding="utf-8",
    )

    assert main([str(model_file), "--config", str(config)]) == 0
    assert "\n  public let count: UInt32\n" in output.read_text(encoding="utf-8")
