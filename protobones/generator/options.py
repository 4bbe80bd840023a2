"""Render options for stub generation."""

from dataclasses import dataclass
from enum import StrEnum

from dataclasses_json import DataClassJsonMixin


class InvalidOptionsError(ValueError):
    """Raised when render options are inconsistent."""


class QuoteStyle(StrEnum):
    DOUBLE = "double"
    SINGLE = "single"


class Language(StrEnum):
    """Target language of the generated stubs."""

    JS = "js"
    JSONNET = "jsonnet"

    @property
    def extension(self) -> str:
        return "." + self.value


@dataclass(frozen=True)
class RenderOptions(DataClassJsonMixin):
    """Options controlling synthesis and rendering.

    - annotate: emit type-name comments next to fields
    - expansion_budget: how many times a message type is fully expanded
      along one descent path before it is abbreviated
    - include_metadata_param: add a `metadata` parameter to the stub
    - quote_style: quote character for string literals
    - language: target language
    - minimal: emit only type names for the request and response
    """

    annotate: bool = True
    expansion_budget: int = 1
    include_metadata_param: bool = False
    quote_style: QuoteStyle = QuoteStyle.DOUBLE
    language: Language = Language.JS
    minimal: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.expansion_budget, bool) or not isinstance(self.expansion_budget, int):
            raise InvalidOptionsError(
                f"expansion_budget must be an integer, got {self.expansion_budget!r}"
            )
        if self.expansion_budget < 1:
            raise InvalidOptionsError(
                f"expansion_budget must be at least 1, got {self.expansion_budget}"
            )
        try:
            object.__setattr__(self, "quote_style", QuoteStyle(self.quote_style))
        except ValueError:
            raise InvalidOptionsError(f"Invalid quote style: {self.quote_style}") from None
        try:
            object.__setattr__(self, "language", Language(self.language))
        except ValueError:
            raise InvalidOptionsError(f"Invalid language: {self.language}") from None
