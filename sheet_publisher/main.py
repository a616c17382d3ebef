# path: sheet_publisher/main.py
"""
Main entry point for the Spreadsheet Publisher.
"""

from dataclasses import replace
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from sheet_publisher.config.constants import (
    APP_NAME,
    ENTRY_RESET_PROPERTIES,
    MESSAGES,
    VERSION
)
from sheet_publisher.config.env import load_environment
from sheet_publisher.config.settings import Settings
from sheet_publisher.core.publisher import SheetPublisher, build_publisher_menu
from sheet_publisher.core.results import PublishReport
from sheet_publisher.infra.logger import setup_logger, get_logger
from sheet_publisher.infra.exceptions import (
    PublisherError,
    ValidationError,
    get_user_friendly_message,
    handle_exception
)
from sheet_publisher.properties.config_store import ConfigStore
from sheet_publisher.properties.store import JsonFilePropertyStore
from sheet_publisher.sheets.client import SheetsClient
from sheet_publisher.ui.console import ConsoleUI, PublisherUI


logger = get_logger(__name__)

console = Console()

cli = typer.Typer(
    name="sheet-publisher",
    help=f"{APP_NAME} - Publish sheets of one Google spreadsheet into another.",
    add_completion=False,
    no_args_is_help=True,
)


class Application:
    """Wires settings, the Sheets client, the property store and the UI together."""

    def __init__(
        self,
        settings: Settings,
        sheets_client: Optional[SheetsClient] = None,
        ui: Optional[PublisherUI] = None
    ):
        self.settings = settings
        self.sheets_client = sheets_client
        self.ui = ui or ConsoleUI(console)
        self.config_store = ConfigStore(
            JsonFilePropertyStore(settings.properties_path)
        )
        self.publisher: Optional[SheetPublisher] = None

    def initialize(self, connect: bool = True) -> SheetPublisher:
        """
        Initialize all components and return the publisher.

        Args:
            connect: Authenticate against the Sheets API; reset does not need it
        """
        if self.sheets_client is None:
            self.sheets_client = SheetsClient(
                credentials_path=self.settings.google_credentials_path
            )
        if connect:
            self.sheets_client.initialize()

        self.publisher = SheetPublisher(
            sheets_client=self.sheets_client,
            config_store=self.config_store,
            ui=self.ui,
            source_spreadsheet_id=self.settings.source_spreadsheet_id,
            copy_policy=self.settings.copy_policy
        )
        return self.publisher


def create_application(settings: Settings) -> Application:
    return Application(settings)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"sheet-publisher v{VERSION}")
        raise typer.Exit()


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj


def _fail(app: Application, error: PublisherError) -> None:
    logger.error(f"Command failed: {handle_exception(error)}")
    app.ui.alert(get_user_friendly_message(error))
    raise typer.Exit(code=1)


def _print_report(report: PublishReport) -> None:
    table = Table(title=f"Published to {report.target_spreadsheet_id}")
    table.add_column("Sheet")
    table.add_column("Action")
    table.add_column("Moved to front")
    for result in report.results:
        table.add_row(
            result.title,
            result.action.value,
            "yes" if result.moved_to_front else ""
        )
    console.print(table)


@cli.callback()
def main(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Source spreadsheet ID (defaults to SOURCE_SPREADSHEET_ID)."
    ),
    credentials: Optional[str] = typer.Option(
        None, "--credentials", help="Service account JSON file (defaults to GOOGLE_CREDENTIALS_PATH)."
    ),
    properties: Optional[str] = typer.Option(
        None, "--properties", help="User properties file (defaults to PUBLISHER_PROPERTIES_PATH)."
    ),
    policy: Optional[str] = typer.Option(
        None, "--policy", help="Copy policy: replace or reconcile."
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level."),
    env_file: Optional[str] = typer.Option(None, "--env-file", help="Path to a .env file."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Load settings; command-line options take precedence over the environment."""
    load_environment(env_file)

    try:
        settings = Settings.from_env()
        overrides = {}
        if source is not None:
            overrides["source_spreadsheet_id"] = source
        if credentials is not None:
            overrides["google_credentials_path"] = credentials
        if properties is not None:
            overrides["properties_path"] = properties
        if policy is not None:
            overrides["copy_policy"] = policy
        if log_level is not None:
            overrides["log_level"] = log_level
        if overrides:
            settings = replace(settings, **overrides)
    except ValidationError as e:
        console.print(f"[red]x[/red] {e.message}")
        raise typer.Exit(code=2)

    setup_logger(settings.log_level, settings.log_file, settings.log_format, force=True)
    logger.debug(f"Settings: {settings.to_dict()}")
    ctx.obj = settings


@cli.command()
def register(
    ctx: typer.Context,
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Target spreadsheet ID."),
    sheet: Optional[List[str]] = typer.Option(
        None, "--sheet", help="Source sheet to publish; repeat for several. Default: all sheets."
    ),
    append: bool = typer.Option(False, "--append", help="Put new sheets at the end of the target."),
    force_replace: bool = typer.Option(
        False, "--force-replace", help="Replace same-named target sheets instead of updating values."
    ),
) -> None:
    """Store the publish configuration and install the Publisher menu."""
    app = create_application(_settings(ctx))
    try:
        publisher = app.initialize()
        result = publisher.register(
            target_id=target,
            sheet_names=sheet,
            append=append,
            force_replace_sheet=force_replace
        )
    except PublisherError as e:
        _fail(app, e)

    mark = "[green]✓[/green]" if result.ok else "[yellow]![/yellow]"
    console.print(f"{mark} Registered (place first: {result.place_first}, "
                  f"force replace: {result.force_replace})")
    if result.rejected_sheet_names:
        console.print(f"  rejected: {', '.join(result.rejected_sheet_names)}; all sheets will be published")
    if result.sheet_names:
        console.print(f"  sheets: {', '.join(result.sheet_names)}")
    menu = app.ui.get_menu(build_publisher_menu().title)
    if menu is not None and isinstance(app.ui, ConsoleUI):
        app.ui.render_menu(menu)


@cli.command()
def publish(ctx: typer.Context) -> None:
    """Copy the configured sheets into the target spreadsheet."""
    app = create_application(_settings(ctx))
    try:
        report = app.initialize().copy_sheets()
    except PublisherError as e:
        _fail(app, e)

    _print_report(report)


@cli.command("reset-properties")
def reset_properties(ctx: typer.Context) -> None:
    """Erase the stored publish configuration."""
    app = create_application(_settings(ctx))
    try:
        app.initialize(connect=False).reset_properties()
    except PublisherError as e:
        _fail(app, e)

    console.print(f"[green]✓[/green] {MESSAGES['reset_done']}")


@cli.command()
def menu(
    ctx: typer.Context,
    label: Optional[str] = typer.Argument(None, help="Menu item to run, e.g. \"Publish\"."),
) -> None:
    """List the Publisher menu, or run one of its items."""
    app = create_application(_settings(ctx))
    publisher_menu = build_publisher_menu()

    if label is None:
        if isinstance(app.ui, ConsoleUI):
            app.ui.render_menu(publisher_menu)
        return

    item = publisher_menu.find(label)
    if item is None:
        console.print(
            f"[red]x[/red] Unknown menu item {label!r} "
            f"(expected one of: {', '.join(publisher_menu.labels())})"
        )
        raise typer.Exit(code=2)

    try:
        connect = item.entry_point != ENTRY_RESET_PROPERTIES
        result = app.initialize(connect=connect).run_entry_point(item.entry_point)
    except PublisherError as e:
        _fail(app, e)

    if isinstance(result, PublishReport):
        _print_report(result)
    else:
        console.print(f"[green]✓[/green] {item.label} done")


@cli.command()
def show(ctx: typer.Context) -> None:
    """Print the stored publish configuration."""
    app = create_application(_settings(ctx))
    try:
        config = app.config_store.load()
    except PublisherError as e:
        _fail(app, e)

    table = Table(title="Publisher properties", show_header=False)
    table.add_column("Key")
    table.add_column("Value")
    table.add_row("target", config.target_spreadsheet_id or "-")
    table.add_row("sheets", ", ".join(config.sheet_names) if config.sheet_names else "(all)")
    table.add_row("place first", str(config.place_first))
    table.add_row("force replace", str(config.force_replace))
    table.add_row("copy policy", app.settings.copy_policy.value)
    console.print(table)


if __name__ == "__main__":
    cli()
