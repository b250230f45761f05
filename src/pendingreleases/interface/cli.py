"""
Pending Releases CLI.

Commands:
    check            Show pending releases per product and instance (default)
    products         List the product catalog
    validate-config  Check the configuration file without connecting

Exit codes: 0 on success, quit or invalid selection; 1 on any
configuration, connection or query error.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pendingreleases import __version__
from pendingreleases.application.release_service import PendingReleaseService
from pendingreleases.domain.errors import ConfigurationError, PendingReleasesError
from pendingreleases.infrastructure.config_loader import ConfigLoader
from pendingreleases.infrastructure.logging_config import setup_logging
from pendingreleases.interface.selection import (
    INVALID_SELECTION_MESSAGE,
    SelectionKind,
    format_menu,
    parse_selection,
    product_column_width,
    selected_products,
)
from pendingreleases.interface.table_renderer import render_table

logger = logging.getLogger(__name__)

PROGRAM = "Pending Banner Releases"
DEFAULT_CONFIG = Path("config") / "pending_releases.json"

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

app = typer.Typer(
    name="pending-releases",
    help="Report Banner releases that have not been installed yet.",
    add_completion=False,
    rich_markup_mode="rich",
)

ConfigOption = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Connection configuration file.")
CatalogOption = typer.Option(None, "--catalog", help="Product catalog JSON file (default: built-in).")


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]ERROR:[/red] {escape(message)}")
    return typer.Exit(1)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to file."),
):
    """
    Compare the ESM release catalog with up to three Banner databases.
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO, log_file)

    if ctx.invoked_subcommand is None:
        ctx.invoke(check, config=DEFAULT_CONFIG, catalog=None, product=None, all_products=False)


@app.command()
def check(
    config: Path = ConfigOption,
    catalog: Optional[Path] = CatalogOption,
    product: Optional[int] = typer.Option(
        None, "--product", "-p", help="Index of a single product (see 'products')."
    ),
    all_products: bool = typer.Option(False, "--all", "-a", help="Check every product."),
):
    """
    Show pending releases per product, side by side per instance.

    Without --product or --all, a selection menu is shown.
    """
    console.print(f"\n[bold]{PROGRAM}[/bold] ver. {__version__}")

    if product is not None and all_products:
        raise _fail("Use either --product or --all, not both.")

    loader = ConfigLoader(".")
    try:
        app_config = loader.load_config(config)
        product_catalog = loader.load_catalog(catalog)
    except ConfigurationError as e:
        raise _fail(str(e))

    if all_products:
        answer = "a"
    elif product is not None:
        answer = str(product)
    else:
        typer.echo()
        for line in format_menu(product_catalog):
            typer.echo(line)
        typer.echo()
        answer = typer.prompt("Enter selection", default="", show_default=False)

    selection = parse_selection(answer, len(product_catalog))

    if selection.kind is SelectionKind.INVALID:
        typer.echo()
        typer.echo(INVALID_SELECTION_MESSAGE)
    if not selection.is_runnable:
        typer.echo("Quitting.")
        raise typer.Exit(0)

    service = PendingReleaseService(app_config)
    try:
        matrix = service.compare(selected_products(selection, product_catalog))
    except PendingReleasesError as e:
        logger.debug("Run aborted", exc_info=True)
        raise _fail(str(e))

    typer.echo()
    for line in render_table(matrix, product_column_width(selection, product_catalog)):
        typer.echo(line)


@app.command()
def products(catalog: Optional[Path] = CatalogOption):
    """
    List the product catalog and the identifiers used for each source.
    """
    try:
        product_catalog = ConfigLoader(".").load_catalog(catalog)
    except ConfigurationError as e:
        raise _fail(str(e))

    table = Table(title="Product Catalog")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Product", style="bold")
    table.add_column("ESM")
    table.add_column("GURPOST")
    table.add_column("GURWADB")
    table.add_column("GURWAPP")
    table.add_column("*VERS")

    for index, item in enumerate(product_catalog):
        table.add_row(
            str(index),
            escape(item.name),
            item.catalog_key,
            item.patch_key,
            item.deployed_db_key,
            item.deployed_app_key,
            item.version_table,
        )

    console.print(table)


@app.command("validate-config")
def validate_config(config: Path = ConfigOption):
    """
    Validate the configuration file without connecting to any database.
    """
    try:
        app_config = ConfigLoader(".").load_config(config)
    except ConfigurationError as e:
        raise _fail(str(e))

    console.print(f"[green]Configuration OK:[/green] {escape(str(config))}")
    console.print(
        f"  Release catalog: {escape(app_config.catalog.host or '')}:{app_config.catalog.port}"
        f"/{escape(app_config.catalog.name or '')}"
    )
    for number, instance in enumerate(app_config.active_instances(), start=1):
        console.print(
            f"  Instance {number}: {escape(instance.display_name)} "
            f"({escape(instance.host or '')}:{instance.port}/{escape(instance.name or '')})"
        )
    mode = "GA releases only" if app_config.ga_releases_only else "all releases except obsolete"
    console.print(f"  Catalog query: {mode}")
