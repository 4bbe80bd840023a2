"""Build a descriptor pool from compiled protobuf schemas."""

import logging
from pathlib import Path

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

from .types import (
    DescriptorPool,
    EnumDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    Kind,
    Label,
    MessageDescriptor,
    MethodDescriptor,
    SchemaError,
    ServiceDescriptor,
)

logger = logging.getLogger(__name__)

_FDP = descriptor_pb2.FieldDescriptorProto

KINDS: dict[int, Kind] = {
    _FDP.TYPE_DOUBLE: Kind.DOUBLE,
    _FDP.TYPE_FLOAT: Kind.FLOAT,
    _FDP.TYPE_INT64: Kind.INT64,
    _FDP.TYPE_UINT64: Kind.UINT64,
    _FDP.TYPE_INT32: Kind.INT32,
    _FDP.TYPE_FIXED64: Kind.FIXED64,
    _FDP.TYPE_FIXED32: Kind.FIXED32,
    _FDP.TYPE_BOOL: Kind.BOOL,
    _FDP.TYPE_STRING: Kind.STRING,
    _FDP.TYPE_GROUP: Kind.MESSAGE,
    _FDP.TYPE_MESSAGE: Kind.MESSAGE,
    _FDP.TYPE_BYTES: Kind.BYTES,
    _FDP.TYPE_UINT32: Kind.UINT32,
    _FDP.TYPE_ENUM: Kind.ENUM,
    _FDP.TYPE_SFIXED32: Kind.SFIXED32,
    _FDP.TYPE_SFIXED64: Kind.SFIXED64,
    _FDP.TYPE_SINT32: Kind.SINT32,
    _FDP.TYPE_SINT64: Kind.SINT64,
}


class LoaderError(RuntimeError):
    """Raised when a schema file cannot be read."""


def _qualify(scope: str, name: str) -> str:
    return f"{scope}.{name}" if scope else name


def _field(fdp: descriptor_pb2.FieldDescriptorProto, oneofs: dict[int, int]) -> FieldDescriptor:
    if fdp.type not in KINDS:
        raise SchemaError(f"Unsupported type {fdp.type} for field {fdp.name}")
    kind = KINDS[fdp.type]
    oneof_index = None
    if fdp.HasField("oneof_index"):
        # Synthetic oneofs of proto3 optional fields are not real oneofs
        oneof_index = oneofs.get(fdp.oneof_index)
    return FieldDescriptor(
        name=fdp.name,
        kind=kind,
        label=Label.REPEATED if fdp.label == _FDP.LABEL_REPEATED else Label.SINGULAR,
        type_name=fdp.type_name.lstrip(".") if kind in (Kind.MESSAGE, Kind.ENUM) else None,
        oneof_index=oneof_index,
        json_name=fdp.json_name or None,
    )


def _enum(scope: str, edp: descriptor_pb2.EnumDescriptorProto) -> EnumDescriptor:
    return EnumDescriptor(
        name=_qualify(scope, edp.name),
        values=[EnumValueDescriptor(name=v.name, number=v.number) for v in edp.value],
    )


class _PoolBuilder:
    def __init__(self) -> None:
        self.messages: list[MessageDescriptor] = []
        self.enums: list[EnumDescriptor] = []
        self.services: list[ServiceDescriptor] = []

    def add_file(self, fdp: descriptor_pb2.FileDescriptorProto) -> None:
        logger.debug("loading %s", fdp.name)
        scope = fdp.package
        for edp in fdp.enum_type:
            self.enums.append(_enum(scope, edp))
        for dp in fdp.message_type:
            self.add_message(scope, dp)
        for sdp in fdp.service:
            self.services.append(
                ServiceDescriptor(
                    name=_qualify(scope, sdp.name),
                    package=scope,
                    methods=[
                        MethodDescriptor(
                            name=m.name,
                            input_type=m.input_type.lstrip("."),
                            output_type=m.output_type.lstrip("."),
                            client_streaming=m.client_streaming,
                            server_streaming=m.server_streaming,
                        )
                        for m in sdp.method
                    ],
                )
            )

    def add_message(self, scope: str, dp: descriptor_pb2.DescriptorProto) -> None:
        name = _qualify(scope, dp.name)

        # Renumber oneofs, leaving out synthetic ones
        synthetic = {f.oneof_index for f in dp.field if f.proto3_optional}
        oneofs: dict[int, int] = {}
        oneof_names: list[str] = []
        for i, odp in enumerate(dp.oneof_decl):
            if i not in synthetic:
                oneofs[i] = len(oneof_names)
                oneof_names.append(odp.name)

        self.messages.append(
            MessageDescriptor(
                name=name,
                fields=[_field(f, oneofs) for f in dp.field],
                oneofs=oneof_names,
                map_entry=dp.options.map_entry,
            )
        )
        for edp in dp.enum_type:
            self.enums.append(_enum(name, edp))
        for nested in dp.nested_type:
            self.add_message(name, nested)

    def build(self) -> DescriptorPool:
        return DescriptorPool(messages=self.messages, enums=self.enums, services=self.services)


def pool_from_descriptor_set(fds: descriptor_pb2.FileDescriptorSet) -> DescriptorPool:
    """Convert a FileDescriptorSet into a descriptor pool."""
    builder = _PoolBuilder()
    for fdp in fds.file:
        builder.add_file(fdp)
    return builder.build()


def load_descriptor_set(path: str | Path) -> DescriptorPool:
    """Load a descriptor pool from a binary FileDescriptorSet or a JSON pool."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise LoaderError(f"Cannot read {path}: {e.strerror}") from e

    if path.suffix == ".json":
        try:
            return DescriptorPool.from_json(data.decode("utf-8"))
        except (ValueError, KeyError, TypeError) as e:
            raise LoaderError(f"Invalid descriptor pool JSON in {path}: {e}") from e

    fds = descriptor_pb2.FileDescriptorSet()
    try:
        fds.ParseFromString(data)
    except DecodeError as e:
        raise LoaderError(f"Invalid FileDescriptorSet in {path}: {e}") from e
    return pool_from_descriptor_set(fds)
