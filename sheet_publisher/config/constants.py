# path: sheet_publisher/config/constants.py
"""
Constants - Publisher-wide constants and text templates.
"""

VERSION = "1.0.0"
APP_NAME = "Spreadsheet Publisher"

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets"
]

# User property keys
PROP_TARGET_SPREADSHEET = "targetSpreadsheet"
PROP_PLACE_FIRST = "placeFirst"
PROP_SRC_SHEETS = "srcSheets"
PROP_FORCE_REPLACE_SHEET = "forceReplaceSheet"

ALL_PROPERTY_KEYS = [
    PROP_TARGET_SPREADSHEET,
    PROP_PLACE_FIRST,
    PROP_SRC_SHEETS,
    PROP_FORCE_REPLACE_SHEET
]

MENU_TITLE = "Publisher"
MENU_ITEM_PUBLISH = "Publish"
MENU_ITEM_RESET = "Reset properties"

ENTRY_COPY_SHEETS = "copy_sheets"
ENTRY_RESET_PROPERTIES = "reset_properties"

DEFAULT_PROPERTIES_DIR = ".sheet_publisher"

MESSAGES = {
    "missing_target": "Missing target spreadsheet ID in register()",
    "sheet_not_found": "Sheet {name} not found in register()",
    "no_target": "No target spreadsheet registered. Run register first.",
    "no_source": "No source spreadsheet given. Set SOURCE_SPREADSHEET_ID or pass --source.",
    "stale_sheet": "Sheet {name} no longer exists in the source spreadsheet",
    "reset_done": "Publisher properties have been reset.",
}
