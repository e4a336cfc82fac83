"""
Jinja2 templates for Swift output.

Templates are indented with 4 spaces; CodeGenerator.format_code re-indents
them to the configured width.
"""

ATTRIBUTES = """\
{% for line in docs %}
/// {{ line }}
{% endfor %}
{% if deprecated %}
@available(*, deprecated, message: {{ deprecation_message|quote }})
{% endif %}
"""

HEADER = """\
{% if header %}
{{ header if header.lstrip().startswith("//") else header|comment }}

{% endif %}
{% for module in imports %}
import {{ module }}
{% endfor %}
"""

STRUCT = """\
{% include "attributes.swift.j2" %}
public {{ keyword }} {{ name }}{{ generics }}: Codable {
{% for f in fields %}
{% for line in f.docs %}
    /// {{ line }}
{% endfor %}
    public let {{ f.name }}: {{ f.type }}
{% endfor %}
{% if coding_keys %}

    private enum CodingKeys: String, CodingKey {
{% for f in fields %}
        case {{ f.name }}{{ (" = " ~ (f.wire_name|quote)) if f.name != f.wire_name else "" }}
{% endfor %}
    }
{% endif %}
{% if initializer and fields %}

    public init({% for f in fields %}{{ f.name }}: {{ f.type }}{{ ", " if not loop.last }}{% endfor %}) {
{% for f in fields %}
        self.{{ f.name }} = {{ f.name }}
{% endfor %}
    }
{% endif %}
{% if members %}

{{ members }}
{% endif %}
}
"""

TYPEALIAS = """\
{% include "attributes.swift.j2" %}
public typealias {{ name }}{{ generics }} = {{ target }}
"""

CODABLE_EXTENSION = """\
// MARK: - {{ name }} Codable Implementation
extension {{ name }}{{ ": Codable" if conformance else "" }} {
{{ members }}
}
"""

STRUCT_CODABLE = """\
{% set init_decl = "public required init" if is_class else "public init" %}
{% if mode == "keyed" %}
    private enum CodingKeys: String, CodingKey {
{% for f in fields %}
        case {{ f.name }} = {{ f.wire_name|quote }}
{% endfor %}
    }

    {{ init_decl }}(from decoder: Decoder) throws {
        let container = try decoder.container(keyedBy: CodingKeys.self)
{% for f in fields %}
{% if f.nullable or f.optional %}
        self.{{ f.name }} = try container.decodeIfPresent({{ f.base }}.self, forKey: .{{ f.name }})
{% else %}
        self.{{ f.name }} = try container.decode({{ f.base }}.self, forKey: .{{ f.name }})
{% endif %}
{% endfor %}
    }

    public func encode(to encoder: Encoder) throws {
        var container = encoder.container(keyedBy: CodingKeys.self)
{% for f in fields %}
{% if f.optional and not f.nullable %}
        try container.encodeIfPresent(self.{{ f.name }}, forKey: .{{ f.name }})
{% else %}
        try container.encode(self.{{ f.name }}, forKey: .{{ f.name }})
{% endif %}
{% endfor %}
    }
{% elif mode == "single" %}
{% set f = fields[0] %}
    {{ init_decl }}(from decoder: Decoder) throws {
        let container = try decoder.singleValueContainer()
{% if f.nullable %}
        self.{{ f.name }} = try container.decodeNil() ? nil : container.decode({{ f.base }}.self)
{% else %}
        self.{{ f.name }} = try container.decode({{ f.base }}.self)
{% endif %}
    }

    public func encode(to encoder: Encoder) throws {
        var container = encoder.singleValueContainer()
{% if f.nullable %}
        if let value = self.{{ f.name }} {
            try container.encode(value)
        } else {
            try container.encodeNil()
        }
{% else %}
        try container.encode(self.{{ f.name }})
{% endif %}
    }
{% else %}
    {{ init_decl }}(from decoder: Decoder) throws {
        var container = try decoder.unkeyedContainer()
{% for f in fields %}
        self.{{ f.name }} = try container.{{ "decodeIfPresent" if f.nullable else "decode" }}({{ f.base }}.self)
{% endfor %}
    }

    public func encode(to encoder: Encoder) throws {
        var container = encoder.unkeyedContainer()
{% for f in fields %}
        try container.encode(self.{{ f.name }})
{% endfor %}
    }
{% endif %}
"""

ENUM = """\
{% include "attributes.swift.j2" %}
public {{ "indirect " if indirect else "" }}enum {{ name }}{{ generics }}{{ protocols }} {
{% for c in cases %}
{% for line in c.docs %}
    /// {{ line }}
{% endfor %}
{% if raw_values %}
    case {{ c.name }} = {{ c.wire|quote }}
{% elif c.kind == "unit" %}
    case {{ c.name }}
{% elif c.kind == "tuple" %}
    case {{ c.name }}({{ c.slots|map(attribute="type")|join(", ") }})
{% else %}
    case {{ c.name }}({{ c.aux }})
{% endif %}
{% endfor %}
}
"""

# Shared by the tagged templates: decode the tuple payload under .content
# or a variant key as a positional array
TUPLE_DECODE = """\
{% macro decode_tuple(c, key, indent) %}
{{ indent }}var arrayContainer = try container.nestedUnkeyedContainer(forKey: .{{ key }})
{% for s in c.slots %}
{{ indent }}let value{{ loop.index0 }} = try arrayContainer.{{ "decodeIfPresent" if s.nullable else "decode" }}({{ s.base }}.self)
{% endfor %}
{{ indent }}self = .{{ c.name }}({{ c.bindings }})
{% endmacro %}
{% macro encode_tuple(c, key, indent) %}
{{ indent }}var arrayContainer = container.nestedUnkeyedContainer(forKey: .{{ key }})
{% for s in c.slots %}
{{ indent }}try arrayContainer.encode(value{{ loop.index0 }})
{% endfor %}
{% endmacro %}
"""

ENUM_EXTERNAL = """\
{% from "tuple_payload.swift.j2" import decode_tuple, encode_tuple %}
    private enum CodingKeys: String, CodingKey {
{% for c in cases %}
        case {{ c.name }} = {{ c.wire|quote }}
{% endfor %}
    }

    public init(from decoder: Decoder) throws {
        if let container = try? decoder.container(keyedBy: CodingKeys.self), container.allKeys.count == 1 {
            switch container.allKeys[0] {
{% for c in cases %}
            case .{{ c.name }}:
{% if c.kind == "unit" %}
                self = .{{ c.name }}
{% elif c.kind == "tuple" %}
{{ decode_tuple(c, c.name, "                ") }}
{%- else %}
                let data = try container.decode({{ c.aux }}.self, forKey: .{{ c.name }})
                self = .{{ c.name }}(data)
{% endif %}
{% endfor %}
            }
            return
        }
{% if has_unit %}

        if let stringContainer = try? decoder.singleValueContainer(),
            let variantString = try? stringContainer.decode(String.self) {
            switch variantString {
{% for c in cases if c.kind == "unit" %}
            case {{ c.wire|quote }}:
                self = .{{ c.name }}
                return
{% endfor %}
            default:
                break
            }
        }
{% endif %}

        throw DecodingError.dataCorrupted(
            DecodingError.Context(
                codingPath: decoder.codingPath,
                debugDescription: "Could not decode {{ name }}: expected an externally tagged object with exactly one key{{ " or a unit variant name" if has_unit else "" }}"
            )
        )
    }

    public func encode(to encoder: Encoder) throws {
        var container = encoder.container(keyedBy: CodingKeys.self)
        switch self {
{% for c in cases %}
{% if c.kind == "unit" %}
        case .{{ c.name }}:
            try container.encodeNil(forKey: .{{ c.name }})
{% elif c.kind == "tuple" %}
        case .{{ c.name }}({{ c.patterns }}):
{{ encode_tuple(c, c.name, "            ") }}
{%- else %}
        case .{{ c.name }}(let data):
            try container.encode(data, forKey: .{{ c.name }})
{% endif %}
{% endfor %}
        }
    }
"""

ENUM_ADJACENT = """\
{% from "tuple_payload.swift.j2" import decode_tuple, encode_tuple %}
    private enum {{ name }}TypeKeys: String, CodingKey {
        case tag = {{ tag|quote }}
        case content = {{ content|quote }}
    }

    private enum VariantType: String, Codable {
{% for c in cases %}
        case {{ c.name }} = {{ c.wire|quote }}
{% endfor %}
    }

    public init(from decoder: Decoder) throws {
        let container = try decoder.container(keyedBy: {{ name }}TypeKeys.self)
        let variantType = try container.decode(VariantType.self, forKey: .tag)
        switch variantType {
{% for c in cases %}
        case .{{ c.name }}:
{% if c.kind == "unit" %}
            self = .{{ c.name }}
{% elif c.kind == "tuple" %}
{{ decode_tuple(c, "content", "            ") }}
{%- else %}
            let data = try container.decode({{ c.aux }}.self, forKey: .content)
            self = .{{ c.name }}(data)
{% endif %}
{% endfor %}
        }
    }

    public func encode(to encoder: Encoder) throws {
        var container = encoder.container(keyedBy: {{ name }}TypeKeys.self)
        switch self {
{% for c in cases %}
{% if c.kind == "unit" %}
        case .{{ c.name }}:
            try container.encode(VariantType.{{ c.name }}, forKey: .tag)
            try container.encodeNil(forKey: .content)
{% elif c.kind == "tuple" %}
        case .{{ c.name }}({{ c.patterns }}):
            try container.encode(VariantType.{{ c.name }}, forKey: .tag)
{{ encode_tuple(c, "content", "            ") }}
{%- else %}
        case .{{ c.name }}(let data):
            try container.encode(VariantType.{{ c.name }}, forKey: .tag)
            try container.encode(data, forKey: .content)
{% endif %}
{% endfor %}
        }
    }
"""

ENUM_INTERNAL = """\
    private enum {{ name }}TagKeys: String, CodingKey {
        case tag = {{ tag|quote }}
    }

    private enum VariantType: String, Codable {
{% for c in cases %}
        case {{ c.name }} = {{ c.wire|quote }}
{% endfor %}
    }

    public init(from decoder: Decoder) throws {
        let container = try decoder.container(keyedBy: {{ name }}TagKeys.self)
        let variantType = try container.decode(VariantType.self, forKey: .tag)
        switch variantType {
{% for c in cases %}
        case .{{ c.name }}:
{% if c.kind == "unit" %}
            self = .{{ c.name }}
{% elif c.kind == "tuple" %}
            self = .{{ c.name }}(try {{ c.slots[0].base }}(from: decoder))
{% else %}
            self = .{{ c.name }}(try {{ c.aux }}(from: decoder))
{% endif %}
{% endfor %}
        }
    }

    public func encode(to encoder: Encoder) throws {
        var container = encoder.container(keyedBy: {{ name }}TagKeys.self)
        switch self {
{% for c in cases %}
{% if c.kind == "unit" %}
        case .{{ c.name }}:
            try container.encode(VariantType.{{ c.name }}, forKey: .tag)
{% elif c.kind == "tuple" %}
        case .{{ c.name }}(let value0):
            try container.encode(VariantType.{{ c.name }}, forKey: .tag)
            try value0.encode(to: encoder)
{% else %}
        case .{{ c.name }}(let data):
            try container.encode(VariantType.{{ c.name }}, forKey: .tag)
            try data.encode(to: encoder)
{% endif %}
{% endfor %}
        }
    }
"""

ENUM_UNTAGGED = """\
    public init(from decoder: Decoder) throws {
{% for c in cases %}
{% if c.kind == "unit" %}
        if let container = try? decoder.singleValueContainer(), container.decodeNil() {
            self = .{{ c.name }}
            return
        }
{% elif c.kind == "tuple" and c.slots|length == 1 %}
        if let container = try? decoder.singleValueContainer(),
            let value0 = try? container.decode({{ c.slots[0].base }}.self) {
            self = .{{ c.name }}(value0)
            return
        }
{% elif c.kind == "tuple" %}
        if var container = try? decoder.unkeyedContainer(),
{% for s in c.slots %}
            let value{{ loop.index0 }} = try? container.decode({{ s.base }}.self){{ "," if not loop.last else " {" }}
{% endfor %}
            self = .{{ c.name }}({{ c.bindings }})
            return
        }
{% else %}
        if let data = try? {{ c.aux }}(from: decoder) {
            self = .{{ c.name }}(data)
            return
        }
{% endif %}
{% endfor %}
        throw DecodingError.dataCorrupted(
            DecodingError.Context(
                codingPath: decoder.codingPath,
                debugDescription: "Data did not match any variant of untagged enum {{ name }}"
            )
        )
    }

    public func encode(to encoder: Encoder) throws {
        switch self {
{% for c in cases %}
{% if c.kind == "unit" %}
        case .{{ c.name }}:
            var container = encoder.singleValueContainer()
            try container.encodeNil()
{% elif c.kind == "tuple" and c.slots|length == 1 %}
        case .{{ c.name }}(let value0):
            var container = encoder.singleValueContainer()
            try container.encode(value0)
{% elif c.kind == "tuple" %}
        case .{{ c.name }}({{ c.patterns }}):
            var container = encoder.unkeyedContainer()
{% for s in c.slots %}
            try container.encode(value{{ loop.index0 }})
{% endfor %}
{% else %}
        case .{{ c.name }}(let data):
            try data.encode(to: encoder)
{% endif %}
{% endfor %}
        }
    }
"""

HELPER_RUST_DURATION = """\
/// Duration as serialized by Rust: whole seconds plus nanoseconds.
public struct RustDuration: Codable, Equatable {
    public let secs: UInt64
    public let nanos: UInt32

    public init(secs: UInt64, nanos: UInt32) {
        self.secs = secs
        self.nanos = nanos
    }

    public var timeInterval: TimeInterval {
        return TimeInterval(secs) + TimeInterval(nanos) / 1_000_000_000
    }
}
"""

HELPER_JSON_VALUE = """\
/// Arbitrary JSON value.
public indirect enum JsonValue: Codable, Equatable {
    case null
    case bool(Bool)
    case number(Double)
    case string(String)
    case array([JsonValue])
    case object([String: JsonValue])

    public init(from decoder: Decoder) throws {
        let container = try decoder.singleValueContainer()
        if container.decodeNil() {
            self = .null
        } else if let value = try? container.decode(Bool.self) {
            self = .bool(value)
        } else if let value = try? container.decode(Double.self) {
            self = .number(value)
        } else if let value = try? container.decode(String.self) {
            self = .string(value)
        } else if let value = try? container.decode([JsonValue].self) {
            self = .array(value)
        } else if let value = try? container.decode([String: JsonValue].self) {
            self = .object(value)
        } else {
            throw DecodingError.dataCorruptedError(
                in: container,
                debugDescription: "Invalid JSON value"
            )
        }
    }

    public func encode(to encoder: Encoder) throws {
        var container = encoder.singleValueContainer()
        switch self {
        case .null:
            try container.encodeNil()
        case .bool(let value):
            try container.encode(value)
        case .number(let value):
            try container.encode(value)
        case .string(let value):
            try container.encode(value)
        case .array(let value):
            try container.encode(value)
        case .object(let value):
            try container.encode(value)
        }
    }
}
"""

SWIFT_TEMPLATES = {
    "attributes.swift.j2": ATTRIBUTES,
    "header.swift.j2": HEADER,
    "struct.swift.j2": STRUCT,
    "typealias.swift.j2": TYPEALIAS,
    "codable_extension.swift.j2": CODABLE_EXTENSION,
    "struct_codable.swift.j2": STRUCT_CODABLE,
    "enum.swift.j2": ENUM,
    "tuple_payload.swift.j2": TUPLE_DECODE,
    "enum_external.swift.j2": ENUM_EXTERNAL,
    "enum_adjacent.swift.j2": ENUM_ADJACENT,
    "enum_internal.swift.j2": ENUM_INTERNAL,
    "enum_untagged.swift.j2": ENUM_UNTAGGED,
    "helper_rust_duration.swift.j2": HELPER_RUST_DURATION,
    "helper_json_value.swift.j2": HELPER_JSON_VALUE,
}
