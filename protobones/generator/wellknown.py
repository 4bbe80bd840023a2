"""Canonical example literals for scalar kinds and well-known types.

Well-known types are the messages and enums of the google.protobuf package
that have their own JSON mapping, plus the reflection types of type.proto
and api.proto. Their literals are used verbatim instead of walking their
declared fields.

https://protobuf.dev/reference/protobuf/google.protobuf/
"""

from collections.abc import Mapping
from types import MappingProxyType

from .types import FieldDescriptor, Kind, Label
from .values import Entry, EnumLiteral, Message, RepeatedOne, Scalar, SynthesizedValue

WKT_PACKAGE = "google.protobuf."

SCALAR_ZEROS: Mapping[Kind, Scalar] = MappingProxyType(
    {
        Kind.DOUBLE: Scalar(0.0),
        Kind.FLOAT: Scalar(0.0),
        Kind.INT32: Scalar(0),
        Kind.UINT32: Scalar(0),
        Kind.SINT32: Scalar(0),
        Kind.FIXED32: Scalar(0),
        Kind.SFIXED32: Scalar(0),
        # 64-bit integers are strings in the JSON mapping
        Kind.INT64: Scalar("0"),
        Kind.UINT64: Scalar("0"),
        Kind.SINT64: Scalar("0"),
        Kind.FIXED64: Scalar("0"),
        Kind.SFIXED64: Scalar("0"),
        Kind.BOOL: Scalar(False),
        Kind.STRING: Scalar(""),
        Kind.BYTES: Scalar(""),
    }
)

VALUE_EXAMPLE = "https://developers.google.com/protocol-buffers/docs/reference/google.protobuf#value"


def _entry(
    name: str,
    value: SynthesizedValue,
    kind: Kind = Kind.STRING,
    type_name: str | None = None,
    json_name: str | None = None,
    repeated: bool = False,
) -> Entry:
    fd = FieldDescriptor(
        name=name,
        kind=kind,
        label=Label.REPEATED if repeated else Label.SINGULAR,
        type_name=type_name,
        json_name=json_name,
    )
    if repeated:
        value = RepeatedOne(value)
    return Entry(fd.key, value, fd)


def _message(name: str, *entries: Entry) -> Message:
    return Message(WKT_PACKAGE + name, tuple(entries))


def _string(name: str, json_name: str | None = None) -> Entry:
    return _entry(name, SCALAR_ZEROS[Kind.STRING], json_name=json_name)


def _bool(name: str, json_name: str | None = None) -> Entry:
    return _entry(name, SCALAR_ZEROS[Kind.BOOL], Kind.BOOL, json_name=json_name)


def _int32(name: str, json_name: str | None = None) -> Entry:
    return _entry(name, SCALAR_ZEROS[Kind.INT32], Kind.INT32, json_name=json_name)


def _enum(name: str, enum_name: str, value: str) -> Entry:
    return _entry(name, EnumLiteral(value), Kind.ENUM, WKT_PACKAGE + enum_name)


def _of(name: str, value: Message, json_name: str | None = None, repeated: bool = False) -> Entry:
    return _entry(name, value, Kind.MESSAGE, value.type_name, json_name, repeated)


ANY = _message(
    "Any",
    Entry("@type", Scalar("type.googleapis.com/google.protobuf.Duration")),
    Entry("value", Scalar("0s")),
)

SOURCE_CONTEXT = _message("SourceContext", _string("file_name", "fileName"))

OPTION = _message("Option", _string("name"), _of("value", ANY))

MIXIN = _message("Mixin", _string("name"), _string("root"))

_SYNTAX = _enum("syntax", "Syntax", "SYNTAX_PROTO2")

METHOD = _message(
    "Method",
    _string("name"),
    _string("request_type_url", "requestTypeUrl"),
    _bool("request_streaming", "requestStreaming"),
    _string("response_type_url", "responseTypeUrl"),
    _bool("response_streaming", "responseStreaming"),
    _of("options", OPTION, repeated=True),
    _SYNTAX,
)

API = _message(
    "Api",
    _string("name"),
    _of("methods", METHOD, repeated=True),
    _of("options", OPTION, repeated=True),
    _string("version"),
    _of("source_context", SOURCE_CONTEXT, "sourceContext"),
    _of("mixins", MIXIN, repeated=True),
    _SYNTAX,
)

FIELD = _message(
    "Field",
    _enum("kind", "Field.Kind", "TYPE_UNKNOWN"),
    _enum("cardinality", "Field.Cardinality", "CARDINALITY_UNKNOWN"),
    _int32("number"),
    _string("name"),
    _string("type_url", "typeUrl"),
    _int32("oneof_index", "oneofIndex"),
    _bool("packed"),
    _of("options", OPTION, repeated=True),
    _string("json_name", "jsonName"),
    _string("default_value", "defaultValue"),
)

TYPE = _message(
    "Type",
    _string("name"),
    _of("fields", FIELD, repeated=True),
    _entry("oneofs", SCALAR_ZEROS[Kind.STRING], repeated=True),
    _of("options", OPTION, repeated=True),
    _of("source_context", SOURCE_CONTEXT, "sourceContext"),
    _SYNTAX,
    _string("edition"),
)

ENUM_VALUE = _message(
    "EnumValue",
    _string("name"),
    _int32("number"),
    _of("options", OPTION, repeated=True),
)

ENUM = _message(
    "Enum",
    _string("name"),
    _of("enumvalue", ENUM_VALUE, repeated=True),
    _of("options", OPTION, repeated=True),
    _of("source_context", SOURCE_CONTEXT, "sourceContext"),
    _SYNTAX,
    _string("edition"),
)

_WELL_KNOWN: dict[str, SynthesizedValue] = {
    "Any": ANY,
    "Api": API,
    "BoolValue": SCALAR_ZEROS[Kind.BOOL],
    "BytesValue": SCALAR_ZEROS[Kind.BYTES],
    "DoubleValue": SCALAR_ZEROS[Kind.DOUBLE],
    "Duration": Scalar("0s"),
    "Empty": _message("Empty"),
    "Enum": ENUM,
    "EnumValue": ENUM_VALUE,
    "Field": FIELD,
    "FieldMask": Scalar("field1.field2,field3"),
    "FloatValue": SCALAR_ZEROS[Kind.FLOAT],
    "Int32Value": SCALAR_ZEROS[Kind.INT32],
    "Int64Value": SCALAR_ZEROS[Kind.INT64],
    "ListValue": RepeatedOne(Scalar(VALUE_EXAMPLE)),
    "Method": METHOD,
    "Mixin": MIXIN,
    "NullValue": Scalar(None),
    "Option": OPTION,
    "SourceContext": SOURCE_CONTEXT,
    "StringValue": SCALAR_ZEROS[Kind.STRING],
    "Struct": _message("Struct", Entry("structField", Scalar(VALUE_EXAMPLE))),
    "Timestamp": Scalar("2006-01-02T15:04:05.999999999Z"),
    "Type": TYPE,
    "UInt32Value": SCALAR_ZEROS[Kind.UINT32],
    "UInt64Value": SCALAR_ZEROS[Kind.UINT64],
    "Value": Scalar(VALUE_EXAMPLE),
}

WELL_KNOWN: Mapping[str, SynthesizedValue] = MappingProxyType(
    {WKT_PACKAGE + name: value for name, value in _WELL_KNOWN.items()}
)


def lookup(full_name: str) -> SynthesizedValue | None:
    """Return the literal for a well-known type, or None if it is not one."""
    return WELL_KNOWN.get(full_name)
