"""Example value synthesis for protobuf types."""

from .options import RenderOptions
from .types import (
    REFERENCE_KINDS,
    DescriptorPool,
    FieldDescriptor,
    Kind,
    MessageDescriptor,
    SchemaError,
    TypeRef,
)
from .values import Entry, EnumLiteral, MapOne, Message, Reference, RepeatedOne, Scalar, SynthesizedValue
from .wellknown import SCALAR_ZEROS, lookup

ExpansionPath = tuple[str, ...]

# Map keys are always strings in the JSON mapping
MAP_KEYS: dict[Kind, str] = {
    Kind.BOOL: "false",
    Kind.STRING: "key",
    **{k: "0" for k in (Kind.INT32, Kind.INT64, Kind.UINT32, Kind.UINT64, Kind.SINT32, Kind.SINT64)},
    **{k: "0" for k in (Kind.FIXED32, Kind.FIXED64, Kind.SFIXED32, Kind.SFIXED64)},
}


class Synthesizer:
    """Synthesize example values for the types of a descriptor pool.

    Message types are expanded depth-first. The path of message types
    being expanded is passed down each call; a message type that already
    occurs `expansion_budget` times on the path is emitted as a Reference
    instead of being expanded again. Counting per path rather than per run
    gives sibling fields of the same type their own full expansion while
    still bounding self-recursive types.
    """

    def __init__(self, pool: DescriptorPool, options: RenderOptions):
        self.pool = pool
        self.options = options

    def synthesize(self, type_ref: TypeRef, path: ExpansionPath = ()) -> SynthesizedValue:
        """Synthesize a value for a scalar kind, enum or message."""
        if type_ref.kind == Kind.MESSAGE:
            return self.message(type_ref.type_name, path)  # type: ignore[arg-type]
        if type_ref.kind == Kind.ENUM:
            return self.enum(type_ref.type_name)  # type: ignore[arg-type]
        return self.scalar(type_ref.kind)

    def scalar(self, kind: Kind) -> Scalar:
        if kind in REFERENCE_KINDS:
            raise SchemaError(f"{kind} is not a scalar kind")
        return SCALAR_ZEROS[kind]

    def enum(self, name: str) -> SynthesizedValue:
        """Return the first declared value of an enum."""
        well_known = lookup(name)
        if well_known is not None:
            return well_known
        return EnumLiteral(self.pool.enum(name).values[0].name)

    def message(self, name: str, path: ExpansionPath = ()) -> SynthesizedValue:
        well_known = lookup(name)
        if well_known is not None:
            return well_known

        if path.count(name) >= self.options.expansion_budget:
            return Reference(name)

        md = self.pool.message(name)
        return Message(name, self._entries(md, path + (name,)))

    def _entries(self, md: MessageDescriptor, path: ExpansionPath) -> tuple[Entry, ...]:
        entries: list[Entry] = []
        oneofs_set: set[int] = set()
        for fd in md.fields:
            oneof = None
            if fd.oneof_index is not None:
                # Only the first member of a oneof is set
                if fd.oneof_index in oneofs_set:
                    continue
                oneofs_set.add(fd.oneof_index)
                oneof = md.oneofs[fd.oneof_index]
            entries.append(Entry(fd.key, self.field(fd, path), fd, oneof))
        return tuple(entries)

    def field(self, fd: FieldDescriptor, path: ExpansionPath = ()) -> SynthesizedValue:
        """Synthesize the value of a field, honouring repeated and map labels."""
        if self.pool.is_map_field(fd):
            return self.map_entry(fd, path)

        value = self.synthesize(fd.type_ref, path)
        if fd.is_repeated:
            return RepeatedOne(value)
        return value

    def map_entry(self, fd: FieldDescriptor, path: ExpansionPath = ()) -> MapOne:
        entry = self.pool.message(fd.type_name)  # type: ignore[arg-type]
        key_field = entry.field_named("key")
        value_field = entry.field_named("value")
        if key_field.kind not in MAP_KEYS:
            raise SchemaError(f"Invalid map key kind {key_field.kind} in {entry.name}")
        return MapOne(
            key=Scalar(MAP_KEYS[key_field.kind]),
            value=self.synthesize(value_field.type_ref, path),
            key_field=key_field,
            value_field=value_field,
        )


def synthesize(
    pool: DescriptorPool,
    type_ref: TypeRef,
    options: RenderOptions,
    path: ExpansionPath = (),
) -> SynthesizedValue:
    """Synthesize an example value for a type of the pool."""
    return Synthesizer(pool, options).synthesize(type_ref, path)
