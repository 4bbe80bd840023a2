"""Tests for render options."""

import pytest

from protobones.generator.options import InvalidOptionsError, Language, QuoteStyle, RenderOptions


def describe_render_options():
    def has_defaults(expect):
        options = RenderOptions()
        expect(options.annotate) == True
        expect(options.expansion_budget) == 1
        expect(options.include_metadata_param) == False
        expect(options.quote_style) == QuoteStyle.DOUBLE
        expect(options.language) == Language.JS

    def rejects_exhausted_budget(expect):
        for budget in (0, -1):
            with pytest.raises(InvalidOptionsError) as exc:
                RenderOptions(expansion_budget=budget)
            expect(str(exc.value)).includes("at least 1")

    def rejects_non_integer_budget(expect):
        with pytest.raises(InvalidOptionsError):
            RenderOptions(expansion_budget=True)

    def coerces_string_choices(expect):
        options = RenderOptions(quote_style="single", language="jsonnet")
        expect(options.quote_style) == QuoteStyle.SINGLE
        expect(options.language.extension) == ".jsonnet"

    def rejects_unknown_quote_style(expect):
        with pytest.raises(InvalidOptionsError):
            RenderOptions(quote_style="backtick")

    def round_trips_through_json(expect):
        options = RenderOptions(annotate=False, expansion_budget=3, language=Language.JSONNET)
        expect(RenderOptions.from_json(options.to_json())) == options
