# path: sheet_publisher/core/results.py
"""
Results - Outcomes of register and publish runs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SheetAction(Enum):
    """What happened to one sheet during a publish."""
    CREATED = "created"
    REPLACED = "replaced"
    VALUES_UPDATED = "values_updated"
    SKIPPED_EMPTY = "skipped_empty"


@dataclass
class SheetResult:
    title: str
    action: SheetAction
    target_sheet_id: Optional[int] = None
    moved_to_front: bool = False


@dataclass
class PublishReport:
    """Per-sheet actions of one publish, in the order they were applied."""
    source_spreadsheet_id: str
    target_spreadsheet_id: str
    results: List[SheetResult] = field(default_factory=list)

    def add(self, result: SheetResult) -> None:
        self.results.append(result)

    def titles(self) -> List[str]:
        return [r.title for r in self.results]

    def count(self, action: SheetAction) -> int:
        return sum(1 for r in self.results if r.action == action)


@dataclass
class RegistrationResult:
    """What register() stored, and what it rejected."""
    target_spreadsheet_id: Optional[str] = None
    sheet_names: Optional[List[str]] = None
    rejected_sheet_names: List[str] = field(default_factory=list)
    place_first: bool = True
    force_replace: bool = False

    @property
    def ok(self) -> bool:
        return self.target_spreadsheet_id is not None and not self.rejected_sheet_names
