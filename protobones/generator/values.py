"""Synthesized example values.

A value tree is built by the synthesizer and serialized by the renderer.
Trees are immutable and hold no rendered text, so a renderer for another
output format can walk the same tree.
"""

from dataclasses import dataclass
from typing import Union

from .types import FieldDescriptor


@dataclass(frozen=True, slots=True)
class Scalar:
    """A literal: bool, number, string, or None for JSON null."""

    value: bool | int | float | str | None


@dataclass(frozen=True, slots=True)
class EnumLiteral:
    """The symbolic name of an enum value."""

    name: str


@dataclass(frozen=True, slots=True)
class Entry:
    """One key of a message object.

    `field` is the declaring field, if any. Well-known literals such as
    `Any` have entries without a declaring field.
    """

    key: str
    value: "SynthesizedValue"
    field: FieldDescriptor | None = None
    oneof: str | None = None


@dataclass(frozen=True, slots=True)
class Message:
    """A message object with entries in declaration order."""

    type_name: str
    entries: tuple[Entry, ...] = ()


@dataclass(frozen=True, slots=True)
class RepeatedOne:
    """A repeated field with a single representative element."""

    element: "SynthesizedValue"


@dataclass(frozen=True, slots=True)
class MapOne:
    """A map field with a single representative key and value."""

    key: Scalar
    value: "SynthesizedValue"
    key_field: FieldDescriptor
    value_field: FieldDescriptor


@dataclass(frozen=True, slots=True)
class Reference:
    """An abbreviated occurrence of a message already expanded above."""

    type_name: str


SynthesizedValue = Union[Scalar, EnumLiteral, Message, RepeatedOne, MapOne, Reference]
