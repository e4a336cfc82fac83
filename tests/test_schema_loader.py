import json

import pytest
import requests

from swift_typegen.codegen import quick_generate
from swift_typegen.codegen.core.generator import GenerationResult
from swift_typegen.codegen.core.schema import (
    EnumType,
    ListType,
    Nullable,
    Primitive,
    PrimitiveKind,
    Reference,
    ReprKind,
    SchemaError,
    StructType,
    UnnamedFields,
    load_type_collection,
)
from swift_typegen.utils import TypeModelLoaderError, load_json, load_types, write_output

DOCUMENT = {
    "types": [
        {
            "sid": "jobs::Job",
            "name": "Job",
            "module_path": "jobs",
            "docs": "A queued job.",
            "type": {
                "kind": "struct",
                "fields": {
                    "kind": "named",
                    "fields": [
                        {"name": "id", "type": "u32"},
                        {"name": "tags", "type": {"kind": "list", "item": "String"}},
                        {
                            "name": "status",
                            "type": {"kind": "reference", "sid": "jobs::Status"},
                        },
                        {
                            "name": "owner",
                            "type": {"kind": "nullable", "inner": "String"},
                            "optional": True,
                        },
                    ],
                },
            },
        },
        {
            "sid": "jobs::Status",
            "name": "Status",
            "module_path": "jobs",
            "deprecated": "Use JobState",
            "type": {
                "kind": "enum",
                "repr": {"kind": "adjacent", "tag": "type", "content": "data"},
                "variants": [
                    {"name": "Queued"},
                    {
                        "name": "Failed",
                        "fields": {"kind": "unnamed", "fields": [{"type": "String"}]},
                    },
                ],
            },
        },
    ]
}


def test_load_type_collection():
    types = load_type_collection(DOCUMENT)
    assert len(types) == 2

    job = types.get("jobs::Job")
    assert isinstance(job.ty, StructType)
    fields = dict(job.ty.fields.visible())
    assert fields["id"].ty == Primitive(PrimitiveKind.U32)
    assert fields["tags"].ty == ListType(Primitive(PrimitiveKind.STRING))
    assert fields["status"].ty == Reference("jobs::Status")
    assert fields["owner"].ty == Nullable(Primitive(PrimitiveKind.STRING))
    assert fields["owner"].optional

    status = types.get("jobs::Status")
    assert status.deprecated
    assert status.deprecation_note == "Use JobState"
    assert isinstance(status.ty, EnumType)
    assert status.ty.repr.kind == ReprKind.ADJACENT
    assert isinstance(status.ty.variants[1].fields, UnnamedFields)


@pytest.mark.parametrize(
    "document, message",
    [
        ([], "must be an object with a 'types' array"),
        ({"types": [{"name": "A"}]}, "types[0]: missing required key 'type'"),
        (
            {"types": [{"name": "A", "type": {"kind": "list"}}]},
            "types[0].type: missing required key 'item'",
        ),
        ({"types": [{"name": "A", "type": "u256"}]}, "unknown primitive 'u256'"),
        ({"types": [{"name": "A", "type": {"kind": "union"}}]}, "unknown data type kind 'union'"),
        (
            {"types": [{"name": "A", "type": {"kind": "enum", "variants": [], "repr": {"kind": "adjacent", "tag": "t"}}}]},
            "types[0].type.repr: missing required key 'content'",
        ),
    ],
)
def test_malformed_documents(document, message):
    with pytest.raises(SchemaError) as excinfo:
        load_type_collection(document)
    assert message in str(excinfo.value)


def test_sid_defaults_to_name():
    types = load_type_collection({"types": [{"name": "Solo", "type": "bool"}]})
    assert types.get("Solo").name == "Solo"


def test_quick_generate():
    code = quick_generate(DOCUMENT, generate_initializers=True)

    assert "/// A queued job." in code
    assert "public struct Job: Codable {" in code
    assert "public let owner: String?" in code
    assert "public init(id: UInt32, tags: [String], status: Status, owner: String?) {" in code
    assert '@available(*, deprecated, message: "Use JobState")' in code
    assert "private enum StatusTypeKeys: String, CodingKey {" in code


def test_load_types_from_file(tmp_path):
    path = tmp_path / "types.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")

    source, types = load_types(file_path=path)
    assert source == str(path)
    assert "jobs::Job" in types


def test_load_types_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_types(file_path=tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(TypeModelLoaderError, match="Invalid JSON"):
        load_types(file_path=broken)

    malformed = tmp_path / "malformed.json"
    malformed.write_text(json.dumps({"types": {}}), encoding="utf-8")
    with pytest.raises(TypeModelLoaderError, match="Malformed type model"):
        load_types(file_path=malformed)

    with pytest.raises(TypeModelLoaderError, match="Either file_path or url"):
        load_json()
    with pytest.raises(TypeModelLoaderError, match="Invalid URL"):
        load_json(url="not-a-url")


def test_write_output(tmp_path):
    target = tmp_path / "out" / "Types.swift"
    path = write_output(GenerationResult("struct A {}\r\n"), target)

    assert path == target
    assert target.read_bytes() == b"struct A {}\r\n"


def test_write_output_refuses_failed_results(tmp_path):
    target = tmp_path / "Types.swift"
    target.write_text("previous", encoding="utf-8")

    with pytest.raises(TypeModelLoaderError, match="Refusing to write"):
        write_output(GenerationResult.error("boom"), target)
    assert target.read_text(encoding="utf-8") == "previous"


class FakeResponse:
    def __init__(self, payload, status_code=200, content_type="application/json"):
        self.payload = payload
        self.status_code = status_code
        self.headers = {"content-type": content_type}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        if self.payload is None:
            raise ValueError("Expecting value")
        return self.payload


def test_load_types_from_url(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(DOCUMENT)

    monkeypatch.setattr(requests, "get", fake_get)
    source, types = load_types(url="https://example.com/types.json", timeout=5)

    assert calls == [("https://example.com/types.json", 5)]
    assert source == "https://example.com/types.json"
    assert len(types) == 2


@pytest.mark.parametrize(
    "response, message",
    [
        (FakeResponse(None, status_code=404), "HTTP error 404"),
        (FakeResponse(None), "Invalid JSON response"),
    ],
)
def test_load_json_from_url_errors(monkeypatch, response, message):
    monkeypatch.setattr(requests, "get", lambda url, timeout: response)
    with pytest.raises(TypeModelLoaderError, match=message):
        load_json(url="https://example.com/types.json")
