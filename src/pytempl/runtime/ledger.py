"""Ledger of rendered CSS classes and scripts."""
from typing import List, Set

CLASS_PREFIX = "class_"
SCRIPT_PREFIX = "script_"


class StringSet:
    """Tracks which resources were already written during one render.

    Class names and script names live in separate namespaces so a class and
    a script sharing a name never collide.
    """

    def __init__(self) -> None:
        self._items: Set[str] = set()

    def add(self, s: str) -> None:
        self._items.add(s)

    def contains(self, s: str) -> bool:
        return s in self._items

    def add_class(self, name: str) -> None:
        self.add(CLASS_PREFIX + name)

    def contains_class(self, name: str) -> bool:
        return self.contains(CLASS_PREFIX + name)

    def add_script(self, name: str) -> None:
        self.add(SCRIPT_PREFIX + name)

    def contains_script(self, name: str) -> bool:
        return self.contains(SCRIPT_PREFIX + name)

    def all(self) -> List[str]:
        """All raw keys, sorted for deterministic output."""
        return sorted(self._items)

    def __contains__(self, s: object) -> bool:
        return s in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"StringSet({self.all()!r})"
