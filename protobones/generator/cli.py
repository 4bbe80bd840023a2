"""Command-line interface for protobones stub generation."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

from protobones.generator.generate import generate
from protobones.generator.loader import LoaderError, load_descriptor_set
from protobones.generator.options import InvalidOptionsError, Language, QuoteStyle, RenderOptions
from protobones.generator.shapes import resolve_shape
from protobones.generator.types import SchemaError

if TYPE_CHECKING:
    from protobones.generator.types import DescriptorPool


def _load(input_file: str) -> DescriptorPool:
    try:
        return load_descriptor_set(input_file)
    except (LoaderError, SchemaError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output")
def cli(verbose: bool) -> None:
    """Protobuf RPC stub generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--input", "-i", "input_file", required=True, help="FileDescriptorSet (.pb) or pool (.json)"
)
@click.option("--output", "-o", "method_dir", default=None, help="Output directory (default stdout)")
@click.option("--force", is_flag=True, default=False, help="Overwrite existing stub files")
@click.option(
    "--language",
    "-l",
    type=click.Choice([lang.value for lang in Language]),
    default=Language.JS.value,
    help="Target language",
)
@click.option(
    "--quote-style",
    type=click.Choice([qs.value for qs in QuoteStyle]),
    default=QuoteStyle.DOUBLE.value,
    help="Quote character for strings",
)
@click.option("--annotate/--no-annotate", default=True, help="Emit type comments on fields")
@click.option(
    "--expansion-budget",
    type=int,
    default=1,
    help="Times a message type is expanded along one path before it is abbreviated",
)
@click.option("--metadata/--no-metadata", default=False, help="Add a metadata parameter")
@click.option("--minimal", is_flag=True, default=False, help="Only emit request/response type names")
@click.argument("targets", nargs=-1)
def gen(
    input_file: str,
    method_dir: str | None,
    force: bool,
    language: str,
    quote_style: str,
    annotate: bool,
    expansion_budget: int,
    metadata: bool,
    minimal: bool,
    targets: tuple[str, ...],
) -> None:
    """Generate method stubs for TARGETS (all methods if none)."""
    try:
        options = RenderOptions(
            annotate=annotate,
            expansion_budget=expansion_budget,
            include_metadata_param=metadata,
            quote_style=QuoteStyle(quote_style),
            language=Language(language),
            minimal=minimal,
        )
    except InvalidOptionsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    pool = _load(input_file)
    if method_dir is not None:
        try:
            Path(method_dir).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            click.echo(f"Error: cannot create output directory: {e}", err=True)
            sys.exit(1)

    report = generate(pool, options, method_dir=method_dir, force=force, targets=targets)

    for failure in report.failed:
        click.echo(f"Error: {failure.method}: {failure.error}", err=True)
    if not report.ok:
        sys.exit(1)


@cli.command()
@click.option(
    "--input", "-i", "input_file", required=True, help="FileDescriptorSet (.pb) or pool (.json)"
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """List the services and methods of a schema with their call shapes."""
    pool = _load(input_file)

    if output_json:
        _output_json(pool)
    else:
        _output_plain(pool)


def _output_json(pool: DescriptorPool) -> None:
    data: dict = {"services": {}}
    for service in pool.services:
        data["services"][service.name] = {
            method.name: {
                "input": method.input_type,
                "output": method.output_type,
                "shape": resolve_shape(method).name,
            }
            for method in service.methods
        }
    print(json.dumps(data, indent=2))


def _output_plain(pool: DescriptorPool) -> None:
    """Output method info using rich text formatting."""
    console = Console()

    for service in pool.services:
        console.print(f"[bold cyan]{service.name}[/bold cyan]")
        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Method", style="white")
        table.add_column("Input", style="yellow")
        table.add_column("Output", style="yellow")
        table.add_column("Shape", style="dim")

        for method in service.methods:
            table.add_row(
                method.name,
                method.input_type,
                method.output_type,
                resolve_shape(method).display_name,
            )

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
