"""
Command-line interface for pdfprotectx.
"""

import asyncio
import os
import sys

import click
from rich.console import Console
from rich.table import Table

from pdfprotectx import __version__
from pdfprotectx.backends.availability import ENGINE_CHOICES, BackendAvailability
from pdfprotectx.config import ProtectionSettings
from pdfprotectx.document import is_encrypted, preview_document
from pdfprotectx.exceptions import ConfigurationError, InvalidDocumentError, ValidationError
from pdfprotectx.options import normalize
from pdfprotectx.pipeline import ProtectionPipeline
from pdfprotectx.reporter import DirectoryDelivery
from pdfprotectx.types import SourceDocument, StatusLevel, StatusMessage
from pdfprotectx.utils import configure_logging, format_file_size

console = Console()

_STATUS_STYLES = {
    StatusLevel.INFO: ("cyan", "•"),
    StatusLevel.SUCCESS: ("green", "✓"),
    StatusLevel.ERROR: ("red", "✗"),
}


def _print_status(status: StatusMessage) -> None:
    style, marker = _STATUS_STYLES[status.level]
    console.print(f"[bold {style}]{marker}[/bold {style}] {status.text}")


def _load_settings(**overrides) -> ProtectionSettings:
    try:
        return ProtectionSettings.from_env().with_overrides(**overrides)
    except ConfigurationError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


def _document_table(document: SourceDocument, title: str = "PDF Information") -> Table:
    preview = preview_document(document)
    table = Table(title=title, show_header=False)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("File", preview.name)
    table.add_row("Pages", preview.page_label)
    table.add_row("Size", format_file_size(preview.size))
    return table


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    pdfprotectx - Password-protect PDF files.
    """
    pass


@cli.command(name="protect")
@click.argument('input_pdf', type=click.Path(dir_okay=False))
@click.option(
    '--open-password', '-u',
    default='',
    help='Password required to open the document',
    type=str
)
@click.option(
    '--owner-password', '-p',
    default='',
    help='Password required to change permissions (defaults to the open password)',
    type=str
)
@click.option('--allow-print', is_flag=True, help='Allow full-quality printing')
@click.option('--allow-copy', is_flag=True, help='Allow copying text and graphics')
@click.option(
    '--output-dir', '-o',
    default=None,
    help='Directory for the protected file (default: $PDFPROTECTX_OUTPUT_DIR or cwd)',
    type=click.Path(file_okay=False)
)
@click.option(
    '--engine',
    type=click.Choice(ENGINE_CHOICES),
    default=None,
    help='Native encryption engine (default: $PDFPROTECTX_NATIVE_ENGINE or auto)'
)
@click.option('--overwrite', is_flag=True, help='Replace an existing protected file')
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def protect(input_pdf, open_password, owner_password, allow_print, allow_copy, output_dir, engine, overwrite, verbose):
    """
    Protect a PDF with native encryption, or a password-protected ZIP
    when native encryption is unavailable.

    Examples:

        pdfprotectx protect report.pdf -u secret

        pdfprotectx protect report.pdf -p owner --allow-print -o protected/
    """
    settings = _load_settings(
        native_engine=engine,
        output_dir=output_dir,
        overwrite=overwrite or None,
        log_level="DEBUG" if verbose else None,
    )
    configure_logging(settings.log_level)

    pipeline = ProtectionPipeline(
        delivery=DirectoryDelivery(settings.output_dir, overwrite=settings.overwrite),
        availability=BackendAvailability.for_engine(settings.native_engine),
        status_sink=_print_status,
    )

    # Options are checked before the file is opened; the file is read once.
    try:
        request = normalize(open_password, owner_password, {"print": allow_print, "copy": allow_copy})
        document = SourceDocument.from_path(input_pdf)
    except (ValidationError, InvalidDocumentError) as e:
        pipeline.report_failure(e)
        sys.exit(1)

    console.print()
    console.print(_document_table(document))

    try:
        outcome = asyncio.run(pipeline.protect(document, request))
    except FileExistsError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        console.print("[dim]Use --overwrite to replace it.[/dim]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    console.print()
    if not outcome.ok:
        sys.exit(1)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--engine',
    type=click.Choice(ENGINE_CHOICES),
    default=None,
    help='Native encryption engine to check for'
)
def show_info(input_pdf, engine):
    """
    Display information about a PDF file and the available protection.

    Example:

        pdfprotectx info input.pdf
    """
    settings = _load_settings(native_engine=engine)
    configure_logging(settings.log_level)

    try:
        document = SourceDocument.from_path(input_pdf)
    except InvalidDocumentError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    table = _document_table(document, title=f"PDF Information: {os.path.basename(input_pdf)}")
    encrypted = is_encrypted(document.data)
    table.add_row("Encrypted", "unknown" if encrypted is None else ("Yes" if encrypted else "No"))

    backend = BackendAvailability.for_engine(settings.native_engine).backend
    if backend is not None:
        table.add_row("Protection", f"Native encryption ({backend.name})")
    else:
        table.add_row("Protection", "Password-protected ZIP (native encryption unavailable)")

    console.print()
    console.print(table)
    console.print()


if __name__ == "__main__":  # pragma: no cover
    cli()
