"""Call shapes of RPC methods."""

from dataclasses import dataclass
from enum import Enum, StrEnum

from .types import MethodDescriptor


class InputEnvelope(StrEnum):
    REQUEST = "request"
    REQUEST_STREAM = "stream"


class OutputEnvelope(StrEnum):
    RESPONSE = "response"
    RESPONSE_STREAM = "stream"


@dataclass(frozen=True)
class CallShape:
    """The parameter and return envelopes of a stub."""

    name: str
    display_name: str
    input_envelope: InputEnvelope
    output_envelope: OutputEnvelope

    @property
    def streams_input(self) -> bool:
        return self.input_envelope == InputEnvelope.REQUEST_STREAM

    @property
    def streams_output(self) -> bool:
        return self.output_envelope == OutputEnvelope.RESPONSE_STREAM


class Shape(Enum):
    """The four shapes, keyed by (client streaming, server streaming)."""

    UNARY = CallShape("Unary", "Unary", InputEnvelope.REQUEST, OutputEnvelope.RESPONSE)
    CLIENT_STREAM = CallShape(
        "ClientStream",
        "Client streaming",
        InputEnvelope.REQUEST_STREAM,
        OutputEnvelope.RESPONSE,
    )
    SERVER_STREAM = CallShape(
        "ServerStream",
        "Server streaming",
        InputEnvelope.REQUEST,
        OutputEnvelope.RESPONSE_STREAM,
    )
    BIDI_STREAM = CallShape(
        "BidiStream",
        "Bidirectional streaming",
        InputEnvelope.REQUEST_STREAM,
        OutputEnvelope.RESPONSE_STREAM,
    )


_SHAPES = {
    (False, False): Shape.UNARY,
    (True, False): Shape.CLIENT_STREAM,
    (False, True): Shape.SERVER_STREAM,
    (True, True): Shape.BIDI_STREAM,
}


def resolve_shape(method: MethodDescriptor) -> CallShape:
    """Return the call shape for a method's streaming flags."""
    return _SHAPES[(bool(method.client_streaming), bool(method.server_streaming))].value
