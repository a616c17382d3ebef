# path: sheet_publisher/ui/console.py
"""
Console UI - Alerts and menus rendered in the terminal.
"""

from typing import Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sheet_publisher.config.constants import APP_NAME
from sheet_publisher.infra.logger import get_logger
from sheet_publisher.ui.menu import Menu


logger = get_logger(__name__)


class PublisherUI:
    """
    What the publisher needs from its host UI: a blocking alert and a
    place to install menus.
    """

    def __init__(self):
        self.menus: Dict[str, Menu] = {}

    def alert(self, message: str) -> None:
        raise NotImplementedError

    def install_menu(self, menu: Menu) -> None:
        """Install a menu, replacing any menu with the same title."""
        self.menus[menu.title] = menu
        logger.info(f"Installed menu '{menu.title}': {', '.join(menu.labels())}")

    def get_menu(self, title: str) -> Optional[Menu]:
        return self.menus.get(title)


class ConsoleUI(PublisherUI):
    """Terminal implementation backed by a rich Console."""

    def __init__(self, console: Optional[Console] = None):
        super().__init__()
        self.console = console or Console()

    def alert(self, message: str) -> None:
        logger.warning(message)
        self.console.print(
            Panel(message, title=APP_NAME, border_style="yellow", expand=False)
        )

    def render_menu(self, menu: Menu) -> None:
        table = Table(title=menu.title, show_header=True)
        table.add_column("Item")
        table.add_column("Runs")
        for item in menu.items:
            table.add_row(item.label, item.entry_point)
        self.console.print(table)
