# path: sheet_publisher/ui/__init__.py
"""
UI module - Host UI services: alerts and menus.
"""

from sheet_publisher.ui.menu import Menu, MenuItem
from sheet_publisher.ui.console import PublisherUI, ConsoleUI

__all__ = [
    "Menu",
    "MenuItem",
    "PublisherUI",
    "ConsoleUI"
]
