"""Generation run: select methods, render their stubs and write them out."""

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from .options import RenderOptions
from .renderer import StubRenderer
from .shapes import resolve_shape
from .synthesizer import Synthesizer
from .types import DescriptorPool, MethodDescriptor, SchemaError, ServiceDescriptor, TypeRef

logger = logging.getLogger(__name__)


@dataclass
class MethodFailure:
    method: str
    error: SchemaError


@dataclass
class GenerationReport:
    """Outcome of a generation run."""

    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[MethodFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def match(service: ServiceDescriptor, method: MethodDescriptor, targets: Iterable[str]) -> bool:
    """Check if a method is selected by any of the targets.

    A method is selected by its name, its service's name, the two joined,
    and each of those qualified by the package. No targets selects all.
    """
    targets = list(targets)
    if not targets:
        return True

    pkg = service.package
    svc = service.name[len(pkg) + 1 :] if pkg else service.name
    mthd = method.name
    matches = {svc, f"{svc}.{mthd}", mthd}
    if pkg:
        matches.update([pkg, f"{pkg}.{svc}", f"{pkg}.{svc}.{mthd}"])

    return any(target in matches for target in targets)


def method_stub(
    pool: DescriptorPool,
    service: ServiceDescriptor,
    method: MethodDescriptor,
    options: RenderOptions,
) -> str:
    """Synthesize and render the stub of one method.

    Raises SchemaError if the method's types do not resolve.
    """
    synthesizer = Synthesizer(pool, options)
    request = synthesizer.synthesize(TypeRef.message(method.input_type))
    response = synthesizer.synthesize(TypeRef.message(method.output_type))
    shape = resolve_shape(method)
    return StubRenderer(options).render(method, shape, request, response, service.name)


def _write_file(filename: Path, stub: str, force: bool) -> bool:
    # Exclusive creation unless forcing, so existing stubs are kept
    mode = "w" if force else "x"
    try:
        with open(filename, mode, encoding="utf-8") as f:
            f.write(stub)
    except FileExistsError:
        return False
    return True


def generate(
    pool: DescriptorPool,
    options: RenderOptions,
    method_dir: str | Path | None = None,
    force: bool = False,
    targets: Iterable[str] = (),
    out: TextIO | None = None,
) -> GenerationReport:
    """Generate stubs for every method of the pool matching targets.

    Stubs are written to `out` (stdout by default) separated by blank
    lines, or, if method_dir is given, one file per method named after the
    method's full name. Existing files are not overwritten unless force is
    true. A method whose types do not resolve is reported and skipped; the
    other methods are still generated.
    """
    targets = list(targets)
    report = GenerationReport()
    if out is None:
        out = sys.stdout

    for service, method in pool.methods():
        if not match(service, method, targets):
            continue
        full_name = service.full_method_name(method)

        logger.debug("writing stub of %r", full_name)
        try:
            stub = method_stub(pool, service, method, options)
        except SchemaError as e:
            logger.error("cannot generate %s: %s", full_name, e)
            report.failed.append(MethodFailure(full_name, e))
            continue

        if method_dir is None:
            out.write(stub)
            out.write("\n")
            report.written.append(full_name)
            continue

        filename = Path(method_dir) / (full_name + options.language.extension)
        if _write_file(filename, stub, force):
            logger.debug("created file %r", str(filename))
            report.written.append(full_name)
        else:
            logger.debug("skip existing file %r, use --force to override", str(filename))
            report.skipped.append(full_name)

    return report
