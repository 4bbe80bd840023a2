"""Descriptor model for protobuf schemas consumed by the stub generator."""

from dataclasses import dataclass, field
from enum import StrEnum

from dataclasses_json import DataClassJsonMixin


class SchemaError(RuntimeError):
    """Raised when a descriptor violates the schema invariants."""


class UnresolvedTypeError(SchemaError):
    """Raised when a type reference does not resolve in the pool."""

    def __init__(self, type_name: str):
        super().__init__(f"Unresolved type reference: {type_name}")
        self.type_name = type_name


class Kind(StrEnum):
    """The kind of a field: a scalar kind or a reference kind."""

    DOUBLE = "double"
    FLOAT = "float"
    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    SINT32 = "sint32"
    SINT64 = "sint64"
    FIXED32 = "fixed32"
    FIXED64 = "fixed64"
    SFIXED32 = "sfixed32"
    SFIXED64 = "sfixed64"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"
    ENUM = "enum"
    MESSAGE = "message"


class Label(StrEnum):
    SINGULAR = "singular"
    REPEATED = "repeated"


REFERENCE_KINDS = frozenset([Kind.ENUM, Kind.MESSAGE])

# Integer kinds that protobuf JSON maps to strings
INT64_KINDS = frozenset([Kind.INT64, Kind.UINT64, Kind.SINT64, Kind.FIXED64, Kind.SFIXED64])

INT32_KINDS = frozenset([Kind.INT32, Kind.UINT32, Kind.SINT32, Kind.FIXED32, Kind.SFIXED32])


def short_name(full_name: str) -> str:
    """Return the last component of a fully-qualified name."""
    return full_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class TypeRef:
    """A reference to the type of a value: a scalar kind or a named enum/message."""

    kind: Kind
    type_name: str | None = None

    def __post_init__(self) -> None:
        if self.kind in REFERENCE_KINDS and not self.type_name:
            raise SchemaError(f"{self.kind} reference requires a type name")
        if self.kind not in REFERENCE_KINDS and self.type_name:
            raise SchemaError(f"Scalar kind {self.kind} cannot reference {self.type_name}")

    @classmethod
    def message(cls, type_name: str) -> "TypeRef":
        return cls(Kind.MESSAGE, type_name)

    @classmethod
    def enum(cls, type_name: str) -> "TypeRef":
        return cls(Kind.ENUM, type_name)

    @classmethod
    def scalar(cls, kind: Kind) -> "TypeRef":
        return cls(kind)


@dataclass(frozen=True)
class FieldDescriptor(DataClassJsonMixin):
    """Represents a field of a message.

    Map fields are repeated message fields whose message is a map entry.
    """

    name: str
    kind: Kind
    label: Label = Label.SINGULAR
    type_name: str | None = None
    oneof_index: int | None = None
    json_name: str | None = None

    def __post_init__(self) -> None:
        # Validates that exactly one of scalar/enum/message is set
        self.type_ref  # pylint: disable=pointless-statement

    @property
    def type_ref(self) -> TypeRef:
        return TypeRef(self.kind, self.type_name)

    @property
    def key(self) -> str:
        """The name the field is rendered under."""
        return self.json_name or self.name

    @property
    def is_repeated(self) -> bool:
        return self.label == Label.REPEATED


@dataclass(frozen=True)
class MessageDescriptor(DataClassJsonMixin):
    """Represents a message type definition."""

    name: str
    fields: list[FieldDescriptor] = field(default_factory=list)
    oneofs: list[str] = field(default_factory=list)
    map_entry: bool = False

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for fd in self.fields:
            if fd.name in seen:
                raise SchemaError(f"Duplicate field {fd.name} in {self.name}")
            seen.add(fd.name)
            if fd.oneof_index is not None and not 0 <= fd.oneof_index < len(self.oneofs):
                raise SchemaError(
                    f"Field {fd.name} in {self.name} references undeclared oneof {fd.oneof_index}"
                )

    def field_named(self, name: str) -> FieldDescriptor:
        for fd in self.fields:
            if fd.name == name:
                return fd
        raise SchemaError(f"{self.name} has no field {name}")


@dataclass(frozen=True)
class EnumValueDescriptor(DataClassJsonMixin):
    name: str
    number: int


@dataclass(frozen=True)
class EnumDescriptor(DataClassJsonMixin):
    """Represents an enum type definition. Values keep declaration order."""

    name: str
    values: list[EnumValueDescriptor]

    def __post_init__(self) -> None:
        if not self.values:
            raise SchemaError(f"Enum {self.name} declares no values")


@dataclass(frozen=True)
class MethodDescriptor(DataClassJsonMixin):
    """Represents an RPC method of a service."""

    name: str
    input_type: str
    output_type: str
    client_streaming: bool = False
    server_streaming: bool = False


@dataclass(frozen=True)
class ServiceDescriptor(DataClassJsonMixin):
    """Represents a service. The name includes the package, if any."""

    name: str
    methods: list[MethodDescriptor] = field(default_factory=list)
    package: str = ""

    def full_method_name(self, method: MethodDescriptor) -> str:
        return f"{self.name}.{method.name}"


@dataclass(frozen=True)
class DescriptorPool(DataClassJsonMixin):
    """All message, enum and service descriptors of a generation run."""

    messages: list[MessageDescriptor] = field(default_factory=list)
    enums: list[EnumDescriptor] = field(default_factory=list)
    services: list[ServiceDescriptor] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Lookup tables; frozen dataclass needs object.__setattr__
        object.__setattr__(self, "_messages", {m.name: m for m in self.messages})
        object.__setattr__(self, "_enums", {e.name: e for e in self.enums})

    def message(self, name: str) -> MessageDescriptor:
        try:
            return self._messages[name]  # type: ignore[attr-defined]
        except KeyError:
            raise UnresolvedTypeError(name) from None

    def enum(self, name: str) -> EnumDescriptor:
        try:
            return self._enums[name]  # type: ignore[attr-defined]
        except KeyError:
            raise UnresolvedTypeError(name) from None

    def is_map_field(self, fd: FieldDescriptor) -> bool:
        """Check if a field is a map, i.e. a repeated map-entry message."""
        if not fd.is_repeated or fd.kind != Kind.MESSAGE or fd.type_name is None:
            return False
        msg = self._messages.get(fd.type_name)  # type: ignore[attr-defined]
        return msg is not None and msg.map_entry

    def methods(self) -> list[tuple[ServiceDescriptor, MethodDescriptor]]:
        """Return every (service, method) pair in declaration order."""
        return [(svc, md) for svc in self.services for md in svc.methods]
