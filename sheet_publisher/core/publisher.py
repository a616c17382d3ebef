# path: sheet_publisher/core/publisher.py
"""
Publisher - Copies sheets from the source spreadsheet into the target.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from sheet_publisher.config.constants import (
    ENTRY_COPY_SHEETS,
    ENTRY_RESET_PROPERTIES,
    MENU_ITEM_PUBLISH,
    MENU_ITEM_RESET,
    MENU_TITLE,
    MESSAGES,
    PROP_TARGET_SPREADSHEET
)
from sheet_publisher.config.settings import CopyPolicy
from sheet_publisher.core.results import (
    PublishReport,
    RegistrationResult,
    SheetAction,
    SheetResult
)
from sheet_publisher.infra.logger import LogContext, get_logger, log_function_call
from sheet_publisher.infra.exceptions import (
    ConfigurationError,
    SheetNotFoundError,
    ValidationError
)
from sheet_publisher.properties.config_store import ConfigStore, PublishConfig
from sheet_publisher.sheets.client import SheetsClient
from sheet_publisher.sheets.models import SheetRef
from sheet_publisher.sheets.spreadsheet import Spreadsheet
from sheet_publisher.ui.console import PublisherUI
from sheet_publisher.ui.menu import Menu


logger = get_logger(__name__)


def build_publisher_menu() -> Menu:
    """The menu installed by register()."""
    return (
        Menu(MENU_TITLE)
        .add_item(MENU_ITEM_PUBLISH, ENTRY_COPY_SHEETS)
        .add_item(MENU_ITEM_RESET, ENTRY_RESET_PROPERTIES)
    )


class SheetPublisher:
    """
    Publishes sheets of a source spreadsheet into a target spreadsheet.

    Entry points:
    - register: store the configuration and install the menu
    - copy_sheets: publish with the stored configuration ("Publish")
    - reset_properties: erase the stored configuration ("Reset properties")
    """

    def __init__(
        self,
        sheets_client: SheetsClient,
        config_store: ConfigStore,
        ui: PublisherUI,
        source_spreadsheet_id: str,
        copy_policy: CopyPolicy = CopyPolicy.REPLACE
    ):
        self.sheets_client = sheets_client
        self.config_store = config_store
        self.ui = ui
        self.source_spreadsheet_id = source_spreadsheet_id
        self.copy_policy = copy_policy

    def entry_points(self) -> Dict[str, Callable]:
        """Entry points that menu items may be bound to, by name."""
        return {
            ENTRY_COPY_SHEETS: self.copy_sheets,
            ENTRY_RESET_PROPERTIES: self.reset_properties
        }

    def run_entry_point(self, name: str):
        handler = self.entry_points().get(name)
        if handler is None:
            raise ValidationError(f"Unknown entry point: {name}", field="entry_point", value=name)
        return handler()

    def open_source(self) -> Spreadsheet:
        if not self.source_spreadsheet_id:
            raise ConfigurationError(
                MESSAGES["no_source"],
                missing_keys=["SOURCE_SPREADSHEET_ID"]
            )
        return Spreadsheet.open_by_id(self.sheets_client, self.source_spreadsheet_id)

    #
    # Registration
    #

    @log_function_call(logger)
    def register(
        self,
        target_id: Optional[str] = None,
        sheet_names: Optional[Sequence[str]] = None,
        append: bool = False,
        force_replace_sheet: bool = False
    ) -> RegistrationResult:
        """
        Store the publish configuration and install the menu.

        Args:
            target_id: Target spreadsheet ID; when absent an alert is shown and
                the previously stored target is kept
            sheet_names: Source sheets to publish; stored only if every name
                exists in the source, otherwise none are stored
            append: Put new sheets at the end of the target instead of the front
            force_replace_sheet: Replace same-named target sheets entirely

        Returns:
            What was stored and which sheet names were rejected
        """
        result = RegistrationResult(
            place_first=not append,
            force_replace=force_replace_sheet
        )

        names = list(sheet_names) if sheet_names else []
        missing = self._missing_source_sheets(names) if names else []

        if not target_id:
            self.ui.alert(MESSAGES["missing_target"])
        else:
            self.config_store.set_target(target_id)
            result.target_spreadsheet_id = target_id

        for name in missing:
            self.ui.alert(MESSAGES["sheet_not_found"].format(name=name))

        if names and not missing:
            self.config_store.set_sheet_names(names)
            result.sheet_names = names
        else:
            self.config_store.clear_sheet_names()
            result.rejected_sheet_names = missing

        self.config_store.set_place_first(not append)
        self.config_store.set_force_replace(force_replace_sheet)

        self.ui.install_menu(build_publisher_menu())

        logger.info(
            f"Registered publisher: target={result.target_spreadsheet_id}, "
            f"sheets={result.sheet_names}, place_first={result.place_first}, "
            f"force_replace={result.force_replace}"
        )

        return result

    def _missing_source_sheets(self, names: List[str]) -> List[str]:
        available = set(self.open_source().get_sheet_names())
        return [name for name in names if name not in available]

    #
    # Publish
    #

    @log_function_call(logger)
    def copy_sheets(self) -> PublishReport:
        """Publish using the stored configuration."""
        return self.publish(self.config_store.load())

    def publish(self, config: PublishConfig) -> PublishReport:
        """
        Copy the configured sheets into the target spreadsheet.

        With place_first, sheets are taken in reverse and each new copy is
        moved to the front, so the final target order starts with the
        sheets in source order followed by the target's original sheets.

        There is no rollback: a failure leaves the target partly updated.
        """
        if not config.target_spreadsheet_id:
            raise ConfigurationError(
                MESSAGES["no_target"],
                missing_keys=[PROP_TARGET_SPREADSHEET]
            )

        with LogContext(
            logger,
            "publish",
            source=self.source_spreadsheet_id,
            target=config.target_spreadsheet_id
        ):
            target = Spreadsheet.open_by_id(
                self.sheets_client,
                config.target_spreadsheet_id
            )
            source = self.open_source()

            sheets = self._resolve_working_sheets(source, config.sheet_names)
            if config.place_first:
                sheets = list(reversed(sheets))

            report = PublishReport(
                source_spreadsheet_id=source.spreadsheet_id,
                target_spreadsheet_id=target.spreadsheet_id
            )

            for sheet in sheets:
                copied, action = self.copy_sheet_to_target(
                    sheet,
                    target,
                    config.force_replace
                )
                result = SheetResult(
                    title=sheet.title,
                    action=action,
                    target_sheet_id=copied.sheet_id if copied else None
                )

                if copied is not None and self._moves_to_front(config):
                    self._move_to_front(target, copied)
                    result.moved_to_front = True

                report.add(result)

            return report

    def _resolve_working_sheets(
        self,
        source: Spreadsheet,
        sheet_names: Optional[List[str]]
    ) -> List[SheetRef]:
        """
        Resolve the stored names once, before anything is copied.

        A stored name that no longer exists in the source fails the whole
        publish.
        """
        available = source.get_sheets()
        if sheet_names is None:
            return available

        by_title = {sheet.title: sheet for sheet in available}
        missing = [name for name in sheet_names if name not in by_title]
        if missing:
            raise SheetNotFoundError(
                MESSAGES["stale_sheet"].format(name=", ".join(missing)),
                spreadsheet_id=source.spreadsheet_id,
                sheet_name=missing[0]
            )

        return [by_title[name] for name in sheet_names]

    def _moves_to_front(self, config: PublishConfig) -> bool:
        if not config.place_first:
            return False
        if self.copy_policy == CopyPolicy.RECONCILE:
            return True
        return config.force_replace

    def _move_to_front(self, target: Spreadsheet, copied: SheetRef) -> None:
        # Re-read: every copy, delete and move shifts the target's tab positions
        current = target.get_sheet_by_id(copied.sheet_id)
        if current is None:
            raise SheetNotFoundError(
                f"Copied sheet {copied.title} disappeared from the target",
                spreadsheet_id=target.spreadsheet_id,
                sheet_name=copied.title
            )
        target.move_sheet(current, 0)

    def copy_sheet_to_target(
        self,
        src_sheet: SheetRef,
        target: Spreadsheet,
        force_replace: bool
    ) -> Tuple[Optional[SheetRef], SheetAction]:
        """
        Copy one source sheet into the target according to the copy policy.

        Returns:
            The sheet created in the target (None when only values were
            written) and the action taken
        """
        if self.copy_policy == CopyPolicy.RECONCILE:
            return self._copy_then_reconcile(src_sheet, target)

        existing = target.get_sheet_by_name(src_sheet.title)

        if existing is None:
            return self._copy_and_rename(src_sheet, target), SheetAction.CREATED

        if force_replace:
            target.delete_sheet(existing)
            return self._copy_and_rename(src_sheet, target), SheetAction.REPLACED

        return None, self._copy_values(src_sheet, existing)

    def _copy_then_reconcile(
        self,
        src_sheet: SheetRef,
        target: Spreadsheet
    ) -> Tuple[SheetRef, SheetAction]:
        existing = target.get_sheet_by_name(src_sheet.title)
        copied = self.sheets_client.copy_sheet_to(src_sheet, target.spreadsheet_id)

        if existing is not None:
            target.delete_sheet(existing)

        copied = self._adjust_copied_title(copied, src_sheet.title)
        action = SheetAction.REPLACED if existing is not None else SheetAction.CREATED
        return copied, action

    def _copy_and_rename(self, src_sheet: SheetRef, target: Spreadsheet) -> SheetRef:
        copied = self.sheets_client.copy_sheet_to(src_sheet, target.spreadsheet_id)
        return self._adjust_copied_title(copied, src_sheet.title)

    def _adjust_copied_title(self, copied: SheetRef, title: str) -> SheetRef:
        """Undo the "Copy of ..." title the API gives a copied sheet."""
        if copied.title == title:
            return copied
        return self.sheets_client.rename_sheet(copied, title)

    def _copy_values(self, src_sheet: SheetRef, target_sheet: SheetRef) -> SheetAction:
        used = self.sheets_client.get_used_range(src_sheet)
        if used.is_empty:
            logger.info(f"Sheet '{src_sheet.title}' is empty, nothing to write")
            return SheetAction.SKIPPED_EMPTY

        self.sheets_client.write_range(
            target_sheet.spreadsheet_id,
            used.range_name_for(target_sheet),
            used.values
        )
        logger.info(
            f"Wrote {used.a1_notation} of '{src_sheet.title}' into the existing target sheet"
        )
        return SheetAction.VALUES_UPDATED

    #
    # Reset
    #

    @log_function_call(logger)
    def reset_properties(self) -> None:
        """Erase every stored publisher property."""
        self.config_store.clear_all()
