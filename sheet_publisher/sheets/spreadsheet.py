# path: sheet_publisher/sheets/spreadsheet.py
"""
Spreadsheet - A spreadsheet opened by id, as seen by the publisher.
"""

from typing import List, Optional

from sheet_publisher.sheets.client import SheetsClient
from sheet_publisher.sheets.models import SheetRef
from sheet_publisher.infra.logger import get_logger


logger = get_logger(__name__)


class Spreadsheet:
    """
    A source or target spreadsheet.

    Sheet listings are read from the API on every call since copies,
    deletes and moves change them between calls.
    """

    def __init__(
        self,
        sheets_client: SheetsClient,
        spreadsheet_id: str,
        title: str = ""
    ):
        self.sheets_client = sheets_client
        self.spreadsheet_id = spreadsheet_id
        self.title = title

    @classmethod
    def open_by_id(
        cls,
        sheets_client: SheetsClient,
        spreadsheet_id: str
    ) -> "Spreadsheet":
        """Open a spreadsheet, failing with SheetNotFoundError if it is missing."""
        info = sheets_client.get_spreadsheet_info(spreadsheet_id)
        logger.debug(f"Opened spreadsheet '{info['title']}' ({spreadsheet_id})")
        return cls(sheets_client, spreadsheet_id, info["title"])

    def get_sheets(self) -> List[SheetRef]:
        return self.sheets_client.get_sheets(self.spreadsheet_id)

    def get_sheet_names(self) -> List[str]:
        return [sheet.title for sheet in self.get_sheets()]

    def get_sheet_by_name(self, title: str) -> Optional[SheetRef]:
        return self.sheets_client.get_sheet_by_name(self.spreadsheet_id, title)

    def get_sheet_by_id(self, sheet_id: int) -> Optional[SheetRef]:
        for sheet in self.get_sheets():
            if sheet.sheet_id == sheet_id:
                return sheet
        return None

    def delete_sheet(self, sheet: SheetRef) -> None:
        self.sheets_client.delete_sheet(sheet)

    def move_sheet(self, sheet: SheetRef, index: int) -> SheetRef:
        return self.sheets_client.move_sheet(sheet, index)

    def __repr__(self) -> str:
        return f"Spreadsheet({self.spreadsheet_id!r}, title={self.title!r})"
