"""
Command-line interface for pdftablex.
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from pdftablex import __version__
from pdftablex.config import ExtractorConfig
from pdftablex.exceptions import ConfigurationError, PDFTableXError, UnsupportedPlatformError
from pdftablex.extractor import ExtractionRequest, TableExtractor
from pdftablex.locator import locate_runtime
from pdftablex.platforms import current_profile
from pdftablex.statement import parse_tabula_csv

console = Console()


def _build_config(resource_root, timeout):
    config = ExtractorConfig.from_env()
    if resource_root:
        config = config.with_updates(resource_root=Path(resource_root))
    if timeout is not None:
        config = config.with_updates(timeout=timeout if timeout > 0 else None)
    return config


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    pdftablex - Extract statement tables from PDF files with Tabula.
    """
    pass


@cli.command(name="extract")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    required=True,
    help='Destination CSV file',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--password', '-p',
    default=None,
    help='Password for protected statements',
    type=str
)
@click.option(
    '--resource-root', '-r',
    default=None,
    help='Directory holding the bundled runtimes and tabula.jar',
    type=click.Path(file_okay=False)
)
@click.option(
    '--timeout', '-t',
    default=None,
    help='Seconds before extraction is aborted (0 waits forever)',
    type=float
)
def extract(input_pdf, output, password, resource_root, timeout):
    """
    Extract every table of INPUT_PDF into a CSV file.

    Examples:

        pdftablex extract statement.pdf -o statement.csv

        pdftablex extract statement.pdf -o out.csv --password 123456
    """
    try:
        config = _build_config(resource_root, timeout)
    except ConfigurationError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    extractor = TableExtractor(config)
    with console.status("[bold cyan]Extracting tables...[/bold cyan]"):
        result = extractor.extract(ExtractionRequest(input_pdf, output, password))

    if result.ok:
        console.print(f"\n[bold green]✓ Tables written to:[/bold green] {result.output_path}\n")
        return

    console.print(f"\n[bold red]✗ Error:[/bold red] {result.message}")
    diagnostics = result.diagnostics
    if diagnostics.runtime_origin:
        console.print(f"[dim]Runtime ({diagnostics.runtime_origin}): {diagnostics.executable_path}[/dim]")
    for probed in diagnostics.probed_paths:
        console.print(f"[dim]Tried: {probed}[/dim]")
    if diagnostics.stderr.strip():
        console.print(f"[dim]{diagnostics.stderr.strip()}[/dim]")
    sys.exit(1)


@cli.command(name="doctor")
@click.option(
    '--resource-root', '-r',
    default=None,
    help='Directory holding the bundled runtimes and tabula.jar',
    type=click.Path(file_okay=False)
)
def doctor(resource_root):
    """
    Show which Java runtime and Tabula jar would be used.
    """
    try:
        config = _build_config(resource_root, None)
    except ConfigurationError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    profile = current_profile()
    table = Table(title="Extraction Runtime", show_header=False)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("Platform", profile.describe())
    table.add_row("Bundle", profile.runtime_bundle_id or "-")
    table.add_row("Resource root", str(config.resource_root))
    table.add_row("Tabula jar", str(config.artifact_path))
    table.add_row("Jar present", "Yes" if config.artifact_path.is_file() else "No")

    try:
        location = locate_runtime(profile, config.resource_root, runtime_dir=config.runtime_dir)
    except UnsupportedPlatformError as e:
        console.print(table)
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    table.add_row("Runtime", location.executable_path)
    table.add_row("Origin", location.origin.value)
    for probed in location.probed:
        table.add_row("Tried", probed)

    console.print()
    console.print(table)
    console.print()


@cli.command(name="parse")
@click.argument('input_csv', type=click.Path(exists=True, dir_okay=False))
def parse(input_csv):
    """
    Summarise the transactions in a Tabula CSV export.
    """
    try:
        content = Path(input_csv).read_text(encoding='utf-8', errors='replace')
        statement = parse_tabula_csv(content)
    except (OSError, PDFTableXError) as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    table = Table(title=f"Statement: {Path(input_csv).name}")
    table.add_column("Receipt", style="cyan", no_wrap=True)
    table.add_column("Completed")
    table.add_column("Details")
    table.add_column("Paid In", justify="right", style="green")
    table.add_column("Withdrawn", justify="right", style="red")
    table.add_column("Balance", justify="right")

    for transaction in statement.transactions:
        table.add_row(
            transaction.receipt_no,
            transaction.completion_time,
            transaction.details,
            f"{transaction.paid_in:,.2f}" if transaction.paid_in is not None else "",
            f"{transaction.withdrawn:,.2f}" if transaction.withdrawn is not None else "",
            f"{transaction.balance:,.2f}",
        )

    console.print()
    console.print(table)
    console.print(f"[bold]Transactions:[/bold] {len(statement.transactions)}")
    console.print(f"[bold]Total charges:[/bold] {statement.total_charges:,.2f}")
    console.print()


@cli.command(name="version")
def version():
    """
    Print the application version.
    """
    from pdftablex.host import get_app_version

    console.print(get_app_version())


if __name__ == '__main__':
    cli()
