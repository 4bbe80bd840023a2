"""Unit tests configuration file."""

import pytest
from google.protobuf import descriptor_pb2

from protobones.generator.types import (
    DescriptorPool,
    EnumDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    Kind,
    Label,
    MessageDescriptor,
    MethodDescriptor,
    ServiceDescriptor,
)


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def msg_field(name, type_name, **kwargs):
    return FieldDescriptor(name=name, kind=Kind.MESSAGE, type_name=type_name, **kwargs)


@pytest.fixture
def greeter_pool():
    return DescriptorPool(
        messages=[
            MessageDescriptor(
                name="greet.HelloRequest",
                fields=[FieldDescriptor(name="first_name", kind=Kind.STRING, json_name="firstName")],
            ),
            MessageDescriptor(
                name="greet.HelloResponse",
                fields=[FieldDescriptor(name="greeting", kind=Kind.STRING)],
            ),
        ],
        services=[
            ServiceDescriptor(
                name="greet.Greeter",
                package="greet",
                methods=[
                    MethodDescriptor("Hello", "greet.HelloRequest", "greet.HelloResponse"),
                    MethodDescriptor(
                        "HelloClientStream",
                        "greet.HelloRequest",
                        "greet.HelloResponse",
                        client_streaming=True,
                    ),
                    MethodDescriptor(
                        "HelloServerStream",
                        "greet.HelloRequest",
                        "greet.HelloResponse",
                        server_streaming=True,
                    ),
                    MethodDescriptor(
                        "HelloBidiStream",
                        "greet.HelloRequest",
                        "greet.HelloResponse",
                        client_streaming=True,
                        server_streaming=True,
                    ),
                ],
            )
        ],
    )


@pytest.fixture
def schema_pool():
    """A pool exercising every field shape: scalars, enums, recursion, oneofs and maps."""
    scalars = [
        FieldDescriptor(name=kind.value, kind=kind)
        for kind in Kind
        if kind not in (Kind.ENUM, Kind.MESSAGE)
    ]
    return DescriptorPool(
        messages=[
            MessageDescriptor(name="test.Scalars", fields=scalars),
            MessageDescriptor(
                name="test.Point",
                fields=[
                    FieldDescriptor(name="x", kind=Kind.INT32),
                    FieldDescriptor(name="y", kind=Kind.INT32),
                ],
            ),
            MessageDescriptor(
                name="test.Node",
                fields=[
                    FieldDescriptor(name="name", kind=Kind.STRING),
                    msg_field("children", "test.Node", label=Label.REPEATED),
                    msg_field("parent", "test.Node"),
                ],
            ),
            MessageDescriptor(
                name="test.Tree",
                fields=[msg_field("left", "test.Tree"), msg_field("right", "test.Tree")],
            ),
            MessageDescriptor(name="test.A", fields=[msg_field("b", "test.B")]),
            MessageDescriptor(name="test.B", fields=[msg_field("a", "test.A")]),
            MessageDescriptor(
                name="test.Pair",
                fields=[msg_field("first", "test.Point"), msg_field("second", "test.Point")],
            ),
            MessageDescriptor(
                name="test.Choice",
                oneofs=["pick", "other"],
                fields=[
                    FieldDescriptor(name="id", kind=Kind.STRING),
                    FieldDescriptor(name="a", kind=Kind.STRING, oneof_index=0),
                    FieldDescriptor(name="b", kind=Kind.INT32, oneof_index=0),
                    msg_field("c", "test.Point", oneof_index=0),
                    FieldDescriptor(name="after", kind=Kind.BOOL),
                    FieldDescriptor(name="d", kind=Kind.BOOL, oneof_index=1),
                    FieldDescriptor(name="e", kind=Kind.BOOL, oneof_index=1),
                ],
            ),
            MessageDescriptor(
                name="test.Inventory",
                fields=[
                    msg_field("counts", "test.Inventory.CountsEntry", label=Label.REPEATED),
                    msg_field("points", "test.Inventory.PointsEntry", label=Label.REPEATED),
                    FieldDescriptor(name="tags", kind=Kind.STRING, label=Label.REPEATED),
                ],
            ),
            MessageDescriptor(
                name="test.Inventory.CountsEntry",
                map_entry=True,
                fields=[
                    FieldDescriptor(name="key", kind=Kind.STRING),
                    FieldDescriptor(name="value", kind=Kind.INT32),
                ],
            ),
            MessageDescriptor(
                name="test.Inventory.PointsEntry",
                map_entry=True,
                fields=[
                    FieldDescriptor(name="key", kind=Kind.INT64),
                    msg_field("value", "test.Point"),
                ],
            ),
            MessageDescriptor(
                name="test.Task",
                fields=[
                    FieldDescriptor(name="status", kind=Kind.ENUM, type_name="test.Status"),
                    FieldDescriptor(
                        name="history",
                        kind=Kind.ENUM,
                        type_name="test.Status",
                        label=Label.REPEATED,
                    ),
                ],
            ),
            MessageDescriptor(
                name="test.Times",
                fields=[
                    msg_field("duration", "google.protobuf.Duration"),
                    msg_field("at", "google.protobuf.Timestamp"),
                    msg_field("count", "google.protobuf.Int64Value"),
                    FieldDescriptor(
                        name="nothing", kind=Kind.ENUM, type_name="google.protobuf.NullValue"
                    ),
                    msg_field("payload", "google.protobuf.Any"),
                ],
            ),
            MessageDescriptor(name="test.Broken", fields=[msg_field("missing", "test.Missing")]),
        ],
        enums=[
            EnumDescriptor(
                name="test.Status",
                values=[
                    EnumValueDescriptor("STATUS_ACTIVE", 1),
                    EnumValueDescriptor("STATUS_UNKNOWN", 0),
                ],
            ),
        ],
        services=[
            ServiceDescriptor(
                name="test.Test",
                package="test",
                methods=[
                    MethodDescriptor("GetPoint", "test.Point", "test.Point"),
                    MethodDescriptor("Wait", "google.protobuf.Empty", "google.protobuf.Duration"),
                    MethodDescriptor("Broken", "test.Point", "test.Broken"),
                    MethodDescriptor("Watch", "test.Point", "test.Node", server_streaming=True),
                ],
            )
        ],
    )


@pytest.fixture
def greeter_fds():
    """A compiled greet.proto with a map, a oneof and a proto3 optional field."""
    fdp = descriptor_pb2.FieldDescriptorProto
    fds = descriptor_pb2.FileDescriptorSet()
    f = fds.file.add(name="greet.proto", package="greet", syntax="proto3")

    req = f.message_type.add(name="HelloRequest")
    req.field.add(
        name="first_name",
        number=1,
        type=fdp.TYPE_STRING,
        label=fdp.LABEL_OPTIONAL,
        json_name="firstName",
    )
    req.field.add(
        name="when",
        number=2,
        type=fdp.TYPE_MESSAGE,
        label=fdp.LABEL_OPTIONAL,
        type_name=".google.protobuf.Timestamp",
        json_name="when",
    )

    resp = f.message_type.add(name="HelloResponse")
    resp.oneof_decl.add(name="_mood")
    resp.oneof_decl.add(name="reply")
    resp.field.add(
        name="mood",
        number=1,
        type=fdp.TYPE_ENUM,
        label=fdp.LABEL_OPTIONAL,
        type_name=".greet.HelloResponse.Mood",
        oneof_index=0,
        proto3_optional=True,
        json_name="mood",
    )
    resp.field.add(
        name="greeting",
        number=2,
        type=fdp.TYPE_STRING,
        label=fdp.LABEL_OPTIONAL,
        oneof_index=1,
        json_name="greeting",
    )
    resp.field.add(
        name="wave",
        number=3,
        type=fdp.TYPE_BOOL,
        label=fdp.LABEL_OPTIONAL,
        oneof_index=1,
        json_name="wave",
    )
    resp.field.add(
        name="scores",
        number=4,
        type=fdp.TYPE_MESSAGE,
        label=fdp.LABEL_REPEATED,
        type_name=".greet.HelloResponse.ScoresEntry",
        json_name="scores",
    )
    mood = resp.enum_type.add(name="Mood")
    mood.value.add(name="MOOD_HAPPY", number=1)
    mood.value.add(name="MOOD_UNSPECIFIED", number=0)
    entry = resp.nested_type.add(name="ScoresEntry")
    entry.options.map_entry = True
    entry.field.add(name="key", number=1, type=fdp.TYPE_STRING, label=fdp.LABEL_OPTIONAL)
    entry.field.add(name="value", number=2, type=fdp.TYPE_DOUBLE, label=fdp.LABEL_OPTIONAL)

    svc = f.service.add(name="Greeter")
    svc.method.add(
        name="Hello", input_type=".greet.HelloRequest", output_type=".greet.HelloResponse"
    )
    svc.method.add(
        name="HelloBidiStream",
        input_type=".greet.HelloRequest",
        output_type=".greet.HelloResponse",
        client_streaming=True,
        server_streaming=True,
    )
    return fds


@pytest.fixture
def greeter_pb(tmp_path, greeter_fds):
    path = tmp_path / "greet.pb"
    path.write_bytes(greeter_fds.SerializeToString())
    return path
