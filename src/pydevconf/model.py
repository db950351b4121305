from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from functools import cmp_to_key

DEFAULT_SECTION = "Global"
COMMENT_PREFIX = "#"

Comparator = Callable[[str, str], int]


def is_comment(name: str) -> bool:
    """Return ``True`` if *name* denotes a comment pseudo-section."""
    return name.startswith(COMMENT_PREFIX)


def _default_compare(a: str, b: str) -> int:
    return (a > b) - (a < b)


@dataclass
class Entry:
    key: str
    value: str


@dataclass
class Section:
    """A named, insertion-ordered group of entries.

    A section whose name starts with ``#`` is a comment pseudo-section: the
    name is the verbatim comment line and it normally owns no entries.
    """

    name: str
    _entries: dict[str, Entry] = field(default_factory=dict, repr=False)

    @property
    def is_comment(self) -> bool:
        return is_comment(self.name)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def find(self, key: str) -> Entry | None:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        # dict assignment keeps the position of an existing key
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = Entry(key, value)
        else:
            entry.value = value

    def remove(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def sort(self, compare: Comparator | None = None) -> None:
        if len(self._entries) <= 1:
            return
        cmp = compare or _default_compare
        ordered = sorted(
            self._entries.values(), key=cmp_to_key(lambda a, b: cmp(a.key, b.key))
        )
        self._entries = {e.key: e for e in ordered}

    def copy(self) -> Section:
        clone = Section(self.name)
        for entry in self:
            clone.set(entry.key, entry.value)
        return clone
