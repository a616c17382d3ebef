"""Shared fixtures: an in-memory stand-in for the Sheets API v4 discovery client."""

from __future__ import annotations

import copy
import re
from typing import Any, Callable

import httplib2
import pytest
from googleapiclient.errors import HttpError

from sheet_publisher.config.settings import CopyPolicy
from sheet_publisher.core.publisher import SheetPublisher
from sheet_publisher.properties.config_store import ConfigStore
from sheet_publisher.properties.store import MemoryPropertyStore
from sheet_publisher.sheets.client import SheetsClient
from sheet_publisher.ui.console import PublisherUI

SOURCE_ID = "src-spreadsheet"
TARGET_ID = "dst-spreadsheet"

_CELL_RE = re.compile(r"^([A-Z]+)(\d+)$")


def _http_error(status: int, message: str) -> HttpError:
    content = ('{"error": {"code": %d, "message": "%s"}}' % (status, message)).encode()
    return HttpError(httplib2.Response({"status": status}), content)


def parse_cell(a1: str) -> tuple[int, int]:
    """``"B3"`` -> ``(2, 1)`` (0-based row, column)."""
    match = _CELL_RE.match(a1)
    assert match, f"bad cell {a1!r}"
    letters, digits = match.groups()
    column = 0
    for ch in letters:
        column = column * 26 + (ord(ch) - ord("A") + 1)
    return int(digits) - 1, column - 1


def split_range(range_name: str) -> tuple[str, str]:
    """``"'It''s'!A1:B2"`` -> ``("It's", "A1:B2")``."""
    if range_name.startswith("'"):
        title = ""
        i = 1
        while True:
            ch = range_name[i]
            if ch == "'":
                if i + 1 < len(range_name) and range_name[i + 1] == "'":
                    title += "'"
                    i += 2
                    continue
                i += 1
                break
            title += ch
            i += 1
        rest = range_name[i:]
    else:
        title, sep, cells = range_name.partition("!")
        rest = sep + cells
    return title, rest[1:] if rest.startswith("!") else ""


class FakeSheet:
    def __init__(
        self,
        sheet_id: int,
        title: str,
        rows: list[list[Any]] | None = None,
        formats: dict[str, str] | None = None,
    ) -> None:
        self.sheet_id = sheet_id
        self.title = title
        self.cells: dict[tuple[int, int], Any] = {}
        self.formats: dict[tuple[int, int], str] = {}
        for r, row in enumerate(rows or []):
            for c, value in enumerate(row):
                if value not in ("", None):
                    self.cells[(r, c)] = value
        for a1, fmt in (formats or {}).items():
            self.formats[parse_cell(a1)] = fmt

    def rows(self) -> list[list[Any]]:
        """Values as the API returns them: trailing empty rows and cells trimmed."""
        if not self.cells:
            return []
        height = max(r for r, _ in self.cells) + 1
        result = []
        for r in range(height):
            cols = [c for (rr, c) in self.cells if rr == r]
            width = max(cols) + 1 if cols else 0
            result.append([self.cells.get((r, c), "") for c in range(width)])
        return result

    def value(self, a1: str) -> Any:
        return self.cells.get(parse_cell(a1), "")

    def fmt(self, a1: str) -> str | None:
        return self.formats.get(parse_cell(a1))


class FakeSpreadsheet:
    def __init__(self, spreadsheet_id: str, title: str) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.title = title
        self.sheets: list[FakeSheet] = []

    def titles(self) -> list[str]:
        return [s.title for s in self.sheets]

    def sheet(self, title: str) -> FakeSheet:
        for s in self.sheets:
            if s.title == title:
                return s
        raise KeyError(title)

    def find(self, sheet_id: int) -> FakeSheet | None:
        for s in self.sheets:
            if s.sheet_id == sheet_id:
                return s
        return None


class _Request:
    def __init__(self, fn: Callable[[], dict]) -> None:
        self._fn = fn

    def execute(self) -> dict:
        return self._fn()


class FakeSheetsService:
    """Implements the slice of ``build("sheets", "v4")`` the client uses."""

    def __init__(self) -> None:
        self.books: dict[str, FakeSpreadsheet] = {}
        self.calls: list[tuple[str, Any]] = []
        self._next_id = 100

    def new_sheet_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def add_spreadsheet(
        self,
        spreadsheet_id: str,
        sheets: dict[str, list[list[Any]]],
        title: str = "",
    ) -> FakeSpreadsheet:
        book = FakeSpreadsheet(spreadsheet_id, title or spreadsheet_id)
        for name, rows in sheets.items():
            book.sheets.append(FakeSheet(self.new_sheet_id(), name, rows))
        self.books[spreadsheet_id] = book
        return book

    def book(self, spreadsheet_id: str) -> FakeSpreadsheet:
        if spreadsheet_id not in self.books:
            raise _http_error(404, "Requested entity was not found.")
        return self.books[spreadsheet_id]

    def operations(self) -> list[str]:
        return [op for op, _ in self.calls]

    def spreadsheets(self) -> "_SpreadsheetsResource":
        return _SpreadsheetsResource(self)


class _SpreadsheetsResource:
    def __init__(self, service: FakeSheetsService) -> None:
        self.service = service

    def get(self, spreadsheetId: str, fields: str | None = None) -> _Request:
        def run() -> dict:
            book = self.service.book(spreadsheetId)
            return {
                "spreadsheetId": book.spreadsheet_id,
                "properties": {"title": book.title},
                "spreadsheetUrl": f"https://docs.google.com/spreadsheets/d/{book.spreadsheet_id}",
                "sheets": [
                    {"properties": {"sheetId": s.sheet_id, "title": s.title, "index": i, "sheetType": "GRID"}}
                    for i, s in enumerate(book.sheets)
                ],
            }

        return _Request(run)

    def batchUpdate(self, spreadsheetId: str, body: dict) -> _Request:
        def run() -> dict:
            book = self.service.book(spreadsheetId)
            replies = []
            for request in body["requests"]:
                if "deleteSheet" in request:
                    sheet = book.find(request["deleteSheet"]["sheetId"])
                    if sheet is None:
                        raise _http_error(400, "No sheet with that id")
                    book.sheets.remove(sheet)
                    self.service.calls.append(("deleteSheet", sheet.title))
                elif "updateSheetProperties" in request:
                    update = request["updateSheetProperties"]
                    props = update["properties"]
                    sheet = book.find(props["sheetId"])
                    if sheet is None:
                        raise _http_error(400, "No sheet with that id")
                    if "title" in update["fields"]:
                        if props["title"] in book.titles() and sheet.title != props["title"]:
                            raise _http_error(400, "A sheet with that name already exists")
                        self.service.calls.append(("rename", (sheet.title, props["title"])))
                        sheet.title = props["title"]
                    if "index" in update["fields"]:
                        current = book.sheets.index(sheet)
                        index = props["index"]
                        if index > current:
                            index -= 1
                        book.sheets.remove(sheet)
                        book.sheets.insert(index, sheet)
                        self.service.calls.append(("move", (sheet.title, props["index"])))
                else:
                    raise AssertionError(f"unsupported request {request}")
                replies.append({})
            return {"spreadsheetId": spreadsheetId, "replies": replies}

        return _Request(run)

    def sheets(self) -> "_SheetsResource":
        return _SheetsResource(self.service)

    def values(self) -> "_ValuesResource":
        return _ValuesResource(self.service)


class _SheetsResource:
    def __init__(self, service: FakeSheetsService) -> None:
        self.service = service

    def copyTo(self, spreadsheetId: str, sheetId: int, body: dict) -> _Request:
        def run() -> dict:
            source = self.service.book(spreadsheetId).find(sheetId)
            if source is None:
                raise _http_error(404, "Sheet not found")
            dest = self.service.book(body["destinationSpreadsheetId"])

            title = f"Copy of {source.title}"
            suffix = 2
            while title in dest.titles():
                title = f"Copy of {source.title} {suffix}"
                suffix += 1

            copied = FakeSheet(self.service.new_sheet_id(), title)
            copied.cells = copy.deepcopy(source.cells)
            copied.formats = copy.deepcopy(source.formats)
            dest.sheets.append(copied)
            self.service.calls.append(("copyTo", source.title))
            return {
                "sheetId": copied.sheet_id,
                "title": copied.title,
                "index": len(dest.sheets) - 1,
                "sheetType": "GRID",
            }

        return _Request(run)


class _ValuesResource:
    def __init__(self, service: FakeSheetsService) -> None:
        self.service = service

    def get(self, spreadsheetId: str, range: str, **kwargs: Any) -> _Request:
        def run() -> dict:
            title, cells = split_range(range)
            assert cells == "", "client only reads whole sheets"
            try:
                sheet = self.service.book(spreadsheetId).sheet(title)
            except KeyError:
                raise _http_error(400, f"Unable to parse range: {range}")
            self.service.calls.append(("valuesGet", title))
            result = {"range": f"'{title}'!A1:Z1000", "majorDimension": "ROWS"}
            rows = sheet.rows()
            if rows:
                result["values"] = rows
            return result

        return _Request(run)

    def update(self, spreadsheetId: str, range: str, valueInputOption: str, body: dict) -> _Request:
        def run() -> dict:
            title, cells = split_range(range)
            sheet = self.service.book(spreadsheetId).sheet(title)
            start_row, start_col = parse_cell(cells.split(":")[0])
            count = 0
            for r, row in enumerate(body["values"]):
                for c, value in enumerate(row):
                    key = (start_row + r, start_col + c)
                    if value in ("", None):
                        sheet.cells.pop(key, None)
                    else:
                        sheet.cells[key] = value
                    count += 1
            self.service.calls.append(("valuesUpdate", range))
            return {"spreadsheetId": spreadsheetId, "updatedRange": range, "updatedCells": count}

        return _Request(run)


class RecordingUI(PublisherUI):
    def __init__(self) -> None:
        super().__init__()
        self.alerts: list[str] = []

    def alert(self, message: str) -> None:
        self.alerts.append(message)


@pytest.fixture
def service() -> FakeSheetsService:
    return FakeSheetsService()


@pytest.fixture
def client(service: FakeSheetsService) -> SheetsClient:
    return SheetsClient(service=service)


@pytest.fixture
def ui() -> RecordingUI:
    return RecordingUI()


@pytest.fixture
def config_store() -> ConfigStore:
    return ConfigStore(MemoryPropertyStore())


@pytest.fixture
def make_publisher(
    client: SheetsClient, config_store: ConfigStore, ui: RecordingUI
) -> Callable[..., SheetPublisher]:
    def _make(policy: CopyPolicy = CopyPolicy.REPLACE, source_id: str = SOURCE_ID) -> SheetPublisher:
        return SheetPublisher(
            sheets_client=client,
            config_store=config_store,
            ui=ui,
            source_spreadsheet_id=source_id,
            copy_policy=policy,
        )

    return _make
