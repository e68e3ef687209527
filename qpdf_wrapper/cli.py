"""
Command-line interface for qpdf-wrapper.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.table import Table

from qpdf_wrapper import __version__
from qpdf_wrapper.backends import SubprocessRunner
from qpdf_wrapper.editor import PDFEditor
from qpdf_wrapper.exceptions import QpdfWrapperError
from qpdf_wrapper.ranges import format_pages, parse_range
from qpdf_wrapper.types import FileRange, Rotation
from qpdf_wrapper.utils import EXECUTABLE_ENV_VAR, format_inches, resolve_executable

console = Console()

SOURCE_SEPARATOR = "::"


def _fail(error):
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


def parse_source(source):
    """Split a ``path::range`` combine source into a :class:`FileRange`."""
    path, separator, pages = source.rpartition(SOURCE_SEPARATOR)
    if not separator:
        return FileRange(source)
    if not path:
        raise click.BadParameter(f"Missing file path in '{source}'")
    return FileRange(path, pages or None)


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--qpdf', 'executable',
    envvar=EXECUTABLE_ENV_VAR,
    default=None,
    help='Path to the qpdf executable',
    type=str
)
@click.option(
    '--timeout',
    default=None,
    help='Seconds to wait for each qpdf invocation',
    type=float
)
@click.option('--verbose', '-v', is_flag=True, help='Log qpdf invocations')
@click.pass_context
def cli(ctx, executable, timeout, verbose):
    """
    pdfq - Page range aware PDF maintenance on top of qpdf.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")
    if ctx.obj is None:
        runner = SubprocessRunner(resolve_executable(executable), timeout=timeout)
        ctx.obj = PDFEditor(runner)


@cli.command(name="version")
@click.pass_obj
def show_version(editor):
    """Show the major version of the installed qpdf."""
    try:
        console.print(f"qpdf version [bold green]{editor.qpdf_version()}[/bold green]")
    except QpdfWrapperError as e:
        _fail(e)


@cli.command(name="check")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.pass_obj
def check(editor, input_pdf):
    """Check that a file is a PDF qpdf can process."""
    try:
        if editor.is_pdf(input_pdf):
            console.print(f"[bold green]✓ {os.path.basename(input_pdf)} is a valid PDF[/bold green]")
            return
    except QpdfWrapperError as e:
        _fail(e)
    console.print(f"[bold red]✗ {os.path.basename(input_pdf)} is not a valid PDF[/bold red]")
    sys.exit(1)


@cli.command(name="pages")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.pass_obj
def pages(editor, input_pdf):
    """Print the number of pages in a PDF."""
    try:
        console.print(editor.page_count(input_pdf))
    except QpdfWrapperError as e:
        _fail(e)


@cli.command(name="parse-range")
@click.argument('expression')
@click.option(
    '--file', '-f', 'input_pdf',
    default=None,
    help='Resolve the range against this PDF',
    type=click.Path(exists=True)
)
@click.option(
    '--pages', '-n', 'page_count',
    default=None,
    help='Resolve the range against this page count',
    type=click.IntRange(min=0)
)
@click.pass_obj
def parse_range_command(editor, expression, input_pdf, page_count):
    """
    Resolve a page range expression into page numbers.

    Examples:

        pdfq parse-range "8-10,4-6,1,3"

        pdfq parse-range "1,3-end" --pages 4

        pdfq parse-range "2-z" -f input.pdf
    """
    try:
        if input_pdf is not None:
            resolved = editor.parse_range(expression, input_pdf)
        else:
            resolved = parse_range(expression, page_count)
        console.print(format_pages(resolved))
    except QpdfWrapperError as e:
        _fail(e)


@cli.command(name="rotate")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('direction')
@click.option(
    '--range', '-r', 'page_range',
    default='1-z',
    help='Pages to rotate (default: every page)',
    type=str
)
@click.pass_obj
def rotate(editor, input_pdf, direction, page_range):
    """
    Rotate pages in place.

    DIRECTION is right, left, down, up or a signed angle (90, -90, 180, -180).

    Examples:

        pdfq rotate input.pdf right

        pdfq rotate input.pdf -r 2-4 -- -90
    """
    try:
        rotation = Rotation.coerce(direction)
        editor.rotate(input_pdf, rotation, page_range)
        console.print(f"[bold green]✓ Rotated pages {page_range} by {rotation.value}[/bold green]")
    except QpdfWrapperError as e:
        _fail(e)


@cli.command(name="trim")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('page_range')
@click.pass_obj
def trim(editor, input_pdf, page_range):
    """Keep only PAGE_RANGE, in place."""
    try:
        editor.trim_to_range(input_pdf, page_range)
        console.print(f"[bold green]✓ Trimmed to pages {page_range}[/bold green]")
    except QpdfWrapperError as e:
        _fail(e)


@cli.command(name="combine")
@click.argument('output', type=click.Path())
@click.argument('sources', nargs=-1, required=True)
@click.pass_obj
def combine(editor, output, sources):
    """
    Combine pages from several PDFs into OUTPUT.

    Each SOURCE is a file path, optionally followed by '::' and a page range.

    Examples:

        pdfq combine out.pdf cover.pdf body.pdf::3-5 appendix.pdf::1,4
    """
    entries = [parse_source(source) for source in sources]
    try:
        editor.combine_ranges_from_files(entries, output)
    except (QpdfWrapperError, ValueError) as e:
        _fail(e)

    table = Table(title="Combined Sources")
    table.add_column("File", style="cyan")
    table.add_column("Pages", style="green")
    for entry in entries:
        table.add_row(os.path.basename(str(entry.path)), str(entry.pages or "all"))
    console.print(table)
    console.print(f"[bold green]✓ Wrote {os.path.abspath(output)}[/bold green]")


@cli.command(name="copy")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('output', type=click.Path())
@click.argument('page_range')
@click.pass_obj
def copy(editor, input_pdf, output, page_range):
    """Copy PAGE_RANGE of INPUT_PDF into a new OUTPUT document."""
    try:
        editor.copy_pages(input_pdf, output, page_range)
        console.print(f"[bold green]✓ Copied pages {page_range} to {output}[/bold green]")
    except (QpdfWrapperError, ValueError) as e:
        _fail(e)


@cli.command(name="remove")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('page_range')
@click.pass_obj
def remove(editor, input_pdf, page_range):
    """Remove PAGE_RANGE from INPUT_PDF, in place."""
    try:
        editor.remove_pages(input_pdf, page_range)
        console.print(f"[bold green]✓ Removed pages {page_range}[/bold green]")
    except (QpdfWrapperError, ValueError) as e:
        _fail(e)


@cli.command(name="stamp")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('stamp_pdf', type=click.Path(exists=True))
@click.option(
    '--range', '-r', 'page_range',
    default=None,
    help='Pages to stamp (default: every page)',
    type=str
)
@click.pass_obj
def stamp(editor, input_pdf, stamp_pdf, page_range):
    """Overlay STAMP_PDF onto INPUT_PDF, in place."""
    try:
        editor.apply_stamp(input_pdf, stamp_pdf, page_range)
        console.print(f"[bold green]✓ Stamped pages {page_range or 'all'}[/bold green]")
    except (QpdfWrapperError, ValueError) as e:
        _fail(e)


@cli.command(name="sizes")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.pass_obj
def sizes(editor, input_pdf):
    """Show the visual size of each page in inches."""
    try:
        page_sizes = editor.page_sizes(input_pdf)
    except QpdfWrapperError as e:
        _fail(e)

    table = Table(title=f"Page Sizes - {os.path.basename(input_pdf)}")
    table.add_column("Page", style="cyan", justify="right")
    table.add_column("Width (in)", style="green", justify="right")
    table.add_column("Height (in)", style="green", justify="right")
    for number, size in enumerate(page_sizes, start=1):
        if size is None:
            table.add_row(str(number), "?", "?")
        else:
            table.add_row(str(number), format_inches(size[0]), format_inches(size[1]))
    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    cli()
