# path: sheet_publisher/sheets/models.py
"""
Models - Resolved handles for sheets and cell ranges.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List


def quote_sheet_name(title: str) -> str:
    """Quote a sheet title for use in A1 notation."""
    return "'" + title.replace("'", "''") + "'"


def column_letter(column: int) -> str:
    """
    Convert a 1-based column number to its A1 letters.

    Args:
        column: Column number, 1 for A

    Returns:
        Column letters, e.g. 28 -> "AB"
    """
    if column < 1:
        raise ValueError(f"Column must be >= 1, got {column}")

    letters = ""
    while column:
        column, remainder = divmod(column - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


@dataclass(frozen=True)
class SheetRef:
    """
    A sheet resolved inside one spreadsheet.

    ``sheet_id`` is stable for the life of the sheet; ``title`` and
    ``index`` reflect the state at the time the handle was read.
    """
    spreadsheet_id: str
    sheet_id: int
    title: str
    index: int = 0

    @classmethod
    def from_properties(
        cls,
        spreadsheet_id: str,
        properties: Dict[str, Any]
    ) -> "SheetRef":
        """Build a handle from a Sheets API ``SheetProperties`` dict."""
        return cls(
            spreadsheet_id=spreadsheet_id,
            sheet_id=int(properties["sheetId"]),
            title=properties["title"],
            index=int(properties.get("index", 0))
        )

    def with_title(self, title: str) -> "SheetRef":
        return replace(self, title=title)

    def with_index(self, index: int) -> "SheetRef":
        return replace(self, index=index)

    @property
    def quoted_title(self) -> str:
        return quote_sheet_name(self.title)


@dataclass
class CellRange:
    """
    The used range of a sheet: anchored at A1, padded to a rectangle.
    """
    sheet: SheetRef
    values: List[List[Any]] = field(default_factory=list)

    @property
    def num_rows(self) -> int:
        return len(self.values)

    @property
    def num_columns(self) -> int:
        return max((len(row) for row in self.values), default=0)

    @property
    def is_empty(self) -> bool:
        return self.num_rows == 0 or self.num_columns == 0

    @property
    def a1_notation(self) -> str:
        """Address without sheet name, e.g. ``A1:C3``."""
        if self.is_empty:
            return "A1"
        return f"A1:{column_letter(self.num_columns)}{self.num_rows}"

    def range_name_for(self, sheet: SheetRef) -> str:
        """The same address on another sheet, e.g. ``'Sales'!A1:C3``."""
        return f"{sheet.quoted_title}!{self.a1_notation}"

    @classmethod
    def from_values(cls, sheet: SheetRef, values: List[List[Any]]) -> "CellRange":
        """Pad ragged API rows so every row spans the widest one."""
        width = max((len(row) for row in values), default=0)
        padded = [list(row) + [""] * (width - len(row)) for row in values]
        return cls(sheet=sheet, values=padded)
