# path: sheet_publisher/sheets/__init__.py
"""
Sheets module - Google Sheets access for the publisher.
"""

from sheet_publisher.sheets.client import SheetsClient
from sheet_publisher.sheets.models import CellRange, SheetRef
from sheet_publisher.sheets.spreadsheet import Spreadsheet

__all__ = [
    "SheetsClient",
    "CellRange",
    "SheetRef",
    "Spreadsheet"
]
