# path: sheet_publisher/ui/menu.py
"""
Menu - Named menu items bound to named entry points.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class MenuItem:
    """A menu label and the name of the entry point it runs."""
    label: str
    entry_point: str


@dataclass
class Menu:
    """An application menu, built item by item."""
    title: str
    items: List[MenuItem] = field(default_factory=list)

    def add_item(self, label: str, entry_point: str) -> "Menu":
        self.items.append(MenuItem(label=label, entry_point=entry_point))
        return self

    def find(self, label: str) -> Optional[MenuItem]:
        """Find an item by label, ignoring case and surrounding spaces."""
        wanted = label.strip().lower()
        for item in self.items:
            if item.label.lower() == wanted:
                return item
        return None

    def labels(self) -> List[str]:
        return [item.label for item in self.items]
