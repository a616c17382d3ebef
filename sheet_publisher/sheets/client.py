# path: sheet_publisher/sheets/client.py
"""
Google Sheets client - Core client for interacting with Google Sheets API.
"""

from typing import Dict, Any, List, Optional

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from sheet_publisher.config.constants import SCOPES
from sheet_publisher.infra.logger import get_logger
from sheet_publisher.infra.exceptions import (
    ConfigurationError,
    SheetsError,
    SheetNotFoundError
)
from sheet_publisher.sheets.models import CellRange, SheetRef


logger = get_logger(__name__)


class SheetsClient:
    """
    Client for Google Sheets API operations.

    Every method issues blocking requests; nothing read from the API is
    cached between calls.
    """

    def __init__(
        self,
        credentials_path: Optional[str] = None,
        service=None
    ):
        self.credentials_path = credentials_path

        self._credentials: Optional[Credentials] = None
        self._sheets_service = service

    def initialize(self) -> None:
        """Initialize the Google API client."""
        if self._sheets_service is not None:
            return

        logger.info("Initializing Google Sheets client...")

        if not self.credentials_path:
            raise ConfigurationError(
                "Google credentials path is not set",
                missing_keys=["GOOGLE_CREDENTIALS_PATH"]
            )

        try:
            self._credentials = Credentials.from_service_account_file(
                self.credentials_path,
                scopes=SCOPES
            )
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load credentials: {e}")
            raise ConfigurationError(
                f"Cannot load Google credentials from {self.credentials_path}: {e}",
                missing_keys=["GOOGLE_CREDENTIALS_PATH"]
            )

        self._sheets_service = build(
            "sheets", "v4",
            credentials=self._credentials,
            cache_discovery=False
        )

        logger.info("Google Sheets client initialized successfully")

    @property
    def service(self):
        if self._sheets_service is None:
            raise SheetsError("Sheets client is not initialized")
        return self._sheets_service

    def _execute(
        self,
        request,
        operation: str,
        spreadsheet_id: Optional[str] = None,
        not_found_message: Optional[str] = None
    ) -> Dict[str, Any]:
        """Execute an API request, mapping HTTP failures to SheetsError."""
        try:
            return request.execute()
        except HttpError as e:
            if e.resp.status == 404:
                raise SheetNotFoundError(
                    not_found_message or f"Spreadsheet not found: {spreadsheet_id}",
                    spreadsheet_id=spreadsheet_id
                )
            logger.error(f"Sheets API {operation} failed: {e}")
            raise SheetsError(
                f"Failed to {operation}: {e}",
                spreadsheet_id=spreadsheet_id,
                operation=operation
            )

    def get_spreadsheet_info(
        self,
        spreadsheet_id: str
    ) -> Dict[str, Any]:
        """
        Get spreadsheet metadata.

        Returns:
            Dict with spreadsheet_id, title, url and the ordered sheets
        """
        result = self._execute(
            self.service.spreadsheets().get(
                spreadsheetId=spreadsheet_id,
                fields="spreadsheetId,properties.title,spreadsheetUrl,sheets.properties"
            ),
            "get spreadsheet info",
            spreadsheet_id
        )

        sheets = [
            SheetRef.from_properties(spreadsheet_id, s["properties"])
            for s in result.get("sheets", [])
        ]
        sheets.sort(key=lambda sheet: sheet.index)

        return {
            "spreadsheet_id": result.get("spreadsheetId", spreadsheet_id),
            "title": result.get("properties", {}).get("title", ""),
            "url": result.get("spreadsheetUrl", ""),
            "sheets": sheets
        }

    def get_sheets(self, spreadsheet_id: str) -> List[SheetRef]:
        """List the sheets of a spreadsheet in tab order."""
        return self.get_spreadsheet_info(spreadsheet_id)["sheets"]

    def get_sheet_by_name(
        self,
        spreadsheet_id: str,
        title: str
    ) -> Optional[SheetRef]:
        """Find a sheet by its exact, case-sensitive title."""
        for sheet in self.get_sheets(spreadsheet_id):
            if sheet.title == title:
                return sheet
        return None

    def copy_sheet_to(
        self,
        sheet: SheetRef,
        destination_spreadsheet_id: str
    ) -> SheetRef:
        """
        Copy a sheet into another spreadsheet.

        The API appends the copy as the last sheet and titles it
        "Copy of <title>".

        Returns:
            Handle to the new sheet in the destination spreadsheet
        """
        logger.info(
            f"Copying sheet '{sheet.title}' to {destination_spreadsheet_id}"
        )

        result = self._execute(
            self.service.spreadsheets().sheets().copyTo(
                spreadsheetId=sheet.spreadsheet_id,
                sheetId=sheet.sheet_id,
                body={"destinationSpreadsheetId": destination_spreadsheet_id}
            ),
            "copy sheet",
            sheet.spreadsheet_id,
            not_found_message=(
                f"Cannot copy sheet '{sheet.title}': spreadsheet {sheet.spreadsheet_id} "
                f"or destination {destination_spreadsheet_id} not found"
            )
        )

        return SheetRef.from_properties(destination_spreadsheet_id, result)

    def batch_update(
        self,
        spreadsheet_id: str,
        requests: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Execute a batch update on a spreadsheet.

        Args:
            spreadsheet_id: The spreadsheet ID
            requests: List of update requests

        Returns:
            Batch update result
        """
        return self._execute(
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"requests": requests}
            ),
            "batch update",
            spreadsheet_id
        )

    def delete_sheet(self, sheet: SheetRef) -> None:
        """Delete a sheet from its spreadsheet."""
        logger.info(f"Deleting sheet '{sheet.title}' from {sheet.spreadsheet_id}")

        self.batch_update(
            sheet.spreadsheet_id,
            [{"deleteSheet": {"sheetId": sheet.sheet_id}}]
        )

    def rename_sheet(self, sheet: SheetRef, title: str) -> SheetRef:
        """Rename a sheet, addressing it by id."""
        logger.debug(f"Renaming sheet '{sheet.title}' to '{title}'")

        self.batch_update(
            sheet.spreadsheet_id,
            [{
                "updateSheetProperties": {
                    "properties": {"sheetId": sheet.sheet_id, "title": title},
                    "fields": "title"
                }
            }]
        )

        return sheet.with_title(title)

    def move_sheet(self, sheet: SheetRef, index: int) -> SheetRef:
        """
        Move a sheet to a 0-based tab position.

        Args:
            sheet: The sheet to move
            index: Target position, 0 for the front
        """
        logger.debug(f"Moving sheet '{sheet.title}' to index {index}")

        self.batch_update(
            sheet.spreadsheet_id,
            [{
                "updateSheetProperties": {
                    "properties": {"sheetId": sheet.sheet_id, "index": index},
                    "fields": "index"
                }
            }]
        )

        return sheet.with_index(index)

    def read_range(
        self,
        spreadsheet_id: str,
        range_name: str
    ) -> List[List[Any]]:
        """
        Read a range of cells from a spreadsheet.

        Args:
            spreadsheet_id: The spreadsheet ID
            range_name: The A1 notation range (e.g., "'Sheet1'!A1:D10")

        Returns:
            List of rows, where each row is a list of unformatted cell values
        """
        result = self._execute(
            self.service.spreadsheets().values().get(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueRenderOption="UNFORMATTED_VALUE",
                dateTimeRenderOption="SERIAL_NUMBER"
            ),
            "read range",
            spreadsheet_id
        )

        return result.get("values", [])

    def write_range(
        self,
        spreadsheet_id: str,
        range_name: str,
        values: List[List[Any]],
        value_input_option: str = "RAW"
    ) -> Dict[str, Any]:
        """
        Write values to a range of cells.

        Args:
            spreadsheet_id: The spreadsheet ID
            range_name: The A1 notation range
            values: 2D list of values to write
            value_input_option: How to interpret the values

        Returns:
            Update result with updatedCells count
        """
        result = self._execute(
            self.service.spreadsheets().values().update(
                spreadsheetId=spreadsheet_id,
                range=range_name,
                valueInputOption=value_input_option,
                body={"values": values}
            ),
            "write range",
            spreadsheet_id
        )

        return {
            "updated_cells": result.get("updatedCells", 0),
            "updated_range": result.get("updatedRange", "")
        }

    def get_used_range(self, sheet: SheetRef) -> CellRange:
        """Read the A1-anchored rectangle holding all data on a sheet."""
        values = self.read_range(sheet.spreadsheet_id, sheet.quoted_title)
        return CellRange.from_values(sheet, values)
