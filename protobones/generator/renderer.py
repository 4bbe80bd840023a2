"""Stub renderer: serializes synthesized values into stub source text."""

import re

from jinja2 import Environment, PackageLoader

from .options import Language, QuoteStyle, RenderOptions
from .shapes import CallShape
from .types import FieldDescriptor, Kind, MethodDescriptor, short_name
from .values import Entry, EnumLiteral, MapOne, Message, Reference, RepeatedOne, Scalar, SynthesizedValue

env = Environment(
    loader=PackageLoader("protobones.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

templates = {language: env.get_template(f"stub{language.extension}.j2") for language in Language}

SEEN_COMMENT = "see example above"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Reserved words that cannot be bare object field names in Jsonnet
JSONNET_KEYWORDS = frozenset(
    [
        "assert",
        "else",
        "error",
        "false",
        "for",
        "function",
        "if",
        "import",
        "importbin",
        "importstr",
        "in",
        "local",
        "null",
        "self",
        "super",
        "tailstrict",
        "then",
        "true",
    ]
)


class UnrenderableValueError(RuntimeError):
    """Raised when a value tree holds something the renderer does not know."""


class Lines:
    """Builder for multi-line text fragments.

    Values are rendered bottom-up: a fragment for a nested value is built
    first, then decorated with its key, separators and comments, then
    nested into its parent.
    """

    def __init__(self, *lines: str):
        self.lines: list[str] = list(lines)

    def line(self, *parts: str) -> None:
        self.lines.append("".join(parts))

    def extend(self, other: "Lines") -> None:
        self.lines.extend(other.lines)

    def prefix(self, prefix: str) -> None:
        """Prepend a prefix to every line."""
        self.lines = [prefix + line for line in self.lines]

    def nest(self, opening: str, closing: str) -> None:
        """Indent all lines and surround them with an opening and closing line."""
        self.prefix("  ")
        self.lines = [opening, *self.lines, closing]

    def nest_compact(self, opening: str, closing: str) -> None:
        """Like nest(), but keeps single-line fragments on one line."""
        if len(self.lines) == 1:
            self.lines[0] = opening + self.lines[0] + closing
        else:
            self.nest(opening, closing)

    def prepend(self, text: str) -> None:
        """Insert text at the start of the first line."""
        if not self.lines:
            self.line()
        self.lines[0] = text + self.lines[0]

    def append(self, text: str) -> None:
        """Add text to the end of the last line."""
        if not self.lines:
            self.line()
        self.lines[-1] += text

    def __str__(self) -> str:
        return "\n".join(self.lines)


def _is_seen(value: SynthesizedValue) -> bool:
    if isinstance(value, Reference):
        return True
    if isinstance(value, RepeatedOne):
        return _is_seen(value.element)
    if isinstance(value, MapOne):
        return _is_seen(value.value)
    return False


def _type_name(fd: FieldDescriptor) -> str:
    if fd.kind in (Kind.MESSAGE, Kind.ENUM):
        return short_name(fd.type_name)  # type: ignore[arg-type]
    return fd.kind.value


class StubRenderer:
    """Render value trees and stubs with a fixed set of options."""

    def __init__(self, options: RenderOptions):
        self.options = options

    def quote(self, s: str) -> str:
        q = '"' if self.options.quote_style == QuoteStyle.DOUBLE else "'"
        escaped = s.replace("\\", "\\\\").replace(q, "\\" + q).replace("\n", "\\n")
        return q + escaped + q

    def key(self, key: str) -> str:
        if self.options.language == Language.JSONNET and key in JSONNET_KEYWORDS:
            return self.quote(key)
        if _IDENTIFIER.match(key):
            return key
        return self.quote(key)

    def scalar(self, value: Scalar) -> str:
        v = value.value
        if v is None:
            return "null"
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, str):
            return self.quote(v)
        if isinstance(v, float):
            return repr(v)
        return str(v)

    def value(self, value: SynthesizedValue, header: str = "") -> Lines:
        """Render a value. `header` is a comment for a multi-line message's opening line."""
        if isinstance(value, Scalar):
            return Lines(self.scalar(value))
        if isinstance(value, EnumLiteral):
            return Lines(self.quote(value.name))
        if isinstance(value, Reference):
            return Lines("{}")
        if isinstance(value, Message):
            if not value.entries:
                return Lines("{}")
            e = Lines()
            for entry in value.entries:
                e.extend(self.entry(entry))
            e.nest("{" + (f"  // {header}" if header else ""), "}")
            return e
        if isinstance(value, RepeatedOne):
            e = self.value(value.element)
            e.nest_compact("[", "]")
            return e
        if isinstance(value, MapOne):
            e = self.value(value.value)
            e.prepend(self.quote(value.key.value) + ": ")  # type: ignore[arg-type]
            e.append(",")
            e.nest("{", "}")
            return e
        raise UnrenderableValueError(f"Cannot render value of type {type(value).__name__}")

    def entry(self, entry: Entry) -> Lines:
        """Render a message entry as `key: value,` with a trailing type comment."""
        e = self.value(entry.value)
        e.prepend(self.key(entry.key) + ": ")
        e.append(",")
        comment = self.comment(entry)
        if comment:
            e.lines[0] += "  // " + comment
        return e

    def comment(self, entry: Entry) -> str:
        seen = _is_seen(entry.value)
        desc = ""
        if self.options.annotate and entry.field is not None:
            desc = self.describe(entry.field, entry.value)

        if not desc:
            return SEEN_COMMENT if seen else ""
        if entry.oneof is not None:
            desc += f" (one-of {entry.oneof}" + (f", {SEEN_COMMENT}" if seen else "") + ")"
        elif seen:
            desc += f" ({SEEN_COMMENT})"
        return desc

    def describe(self, fd: FieldDescriptor, value: SynthesizedValue) -> str:
        """Return the type description of a field, e.g. `repeated Option`."""
        if isinstance(value, MapOne):
            return f"map<{_type_name(value.key_field)}, {_type_name(value.value_field)}>"
        if fd.is_repeated:
            return "repeated " + _type_name(fd)
        return _type_name(fd)

    def top_level(self, value: SynthesizedValue, type_name: str) -> Lines:
        """Render a request or response value."""
        if self.options.minimal:
            return Lines("{  // " + type_name, "}")
        header = short_name(type_name) if self.options.annotate else ""
        return self.value(value, header)

    def params(self) -> str:
        if self.options.include_metadata_param:
            return "input, metadata"
        return "input"

    def render(
        self,
        method: MethodDescriptor,
        shape: CallShape,
        request_value: SynthesizedValue,
        response_value: SynthesizedValue,
        service: str = "",
    ) -> str:
        """Render the stub of a method."""
        ime = self.top_level(request_value, method.input_type)
        ime.append(",")
        if shape.streams_input:
            ime.nest(f"{shape.input_envelope}: [", "],")
        else:
            ime.prepend(f"{shape.input_envelope}: ")
        ime.nest("{", "}")
        ime.prefix("// ")

        ome = self.top_level(response_value, method.output_type)
        ome.append(",")
        if shape.streams_output:
            ome.nest(f"{shape.output_envelope}: [", "],")
        else:
            ome.prepend(f"{shape.output_envelope}: ")

        return templates[self.options.language].render(
            full_name=f"{service}.{method.name}" if service else method.name,
            shape=shape.display_name,
            name=method.name,
            params=self.params(),
            input_lines=ime.lines,
            output_lines=ome.lines,
        )


def render(
    method: MethodDescriptor,
    shape: CallShape,
    request_value: SynthesizedValue,
    response_value: SynthesizedValue,
    options: RenderOptions,
    service: str = "",
) -> str:
    """Render the stub of a method from its synthesized request and response."""
    return StubRenderer(options).render(method, shape, request_value, response_value, service)
