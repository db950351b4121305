from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator
from io import StringIO
from pathlib import Path
from typing import TextIO

from . import persist
from .errors import ConfigLoadError
from .model import COMMENT_PREFIX, Comparator, Section
from .parser import MAX_LINE_LENGTH, parse_lines
from .values import (
    INT_MAX,
    INT_MIN,
    UINT16_MAX,
    UINT64_MAX,
    format_bool,
    format_ranged,
    parse_bool,
    parse_ranged,
)

logger = logging.getLogger(__name__)

_NEWLINE_RX = re.compile(r"[\r\n]")


class ConfigStore:
    """Ordered sections of ``key = value`` entries backed by an INI-like file.

    Section and entry order is insertion order, which for a parsed store is
    the order found on disk.  Instances are not thread-safe; callers sharing
    a store must serialize access themselves.
    """

    def __init__(self, *, log: logging.Logger | None = None) -> None:
        self._sections: dict[str, Section] = {}
        self._log = log or logger

    # ----- constructors -----

    @classmethod
    def new_empty(cls, *, log: logging.Logger | None = None) -> ConfigStore:
        return cls(log=log)

    @classmethod
    def from_stream(
        cls,
        fp: Iterable[str],
        *,
        max_line_length: int = MAX_LINE_LENGTH,
        log: logging.Logger | None = None,
    ) -> ConfigStore:
        store = cls(log=log)
        return parse_lines(fp, store, max_line_length=max_line_length, log=log)

    @classmethod
    def from_string(cls, text: str, **kwargs) -> ConfigStore:
        return cls.from_stream(StringIO(text), **kwargs)

    @classmethod
    def load(
        cls,
        path: str | os.PathLike[str],
        *,
        max_line_length: int = MAX_LINE_LENGTH,
        log: logging.Logger | None = None,
    ) -> ConfigStore:
        """Parse the file at *path*.

        :class:`ConfigLoadError` is raised only if the file cannot be opened
        or read; malformed lines are skipped.  Bytes that are not valid UTF-8
        are kept as lone surrogates and written back unchanged by :meth:`save`.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8", errors="surrogateescape") as fh:
                return cls.from_stream(fh, max_line_length=max_line_length, log=log)
        except OSError as exc:
            (log or logger).error("unable to open file %s: %s", path, exc)
            raise ConfigLoadError(f"unable to open {path}: {exc}") from exc

    def clone(self) -> ConfigStore:
        other = type(self)(log=self._log)
        for name, section in self._sections.items():
            other._sections[name] = section.copy()
        return other

    # ----- queries -----

    def has_section(self, section: str) -> bool:
        return section in self._sections

    def has_key(self, section: str, key: str) -> bool:
        return self._find_entry(section, key) is not None

    def __contains__(self, section: object) -> bool:
        return section in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sections))

    def sections(self) -> Iterator[Section]:
        return iter(list(self._sections.values()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sections={list(self._sections)!r})"

    def _find_entry(self, section: str, key: str):
        sec = self._sections.get(section)
        if sec is None:
            return None
        return sec.find(key)

    # ----- typed getters -----

    def get_string(self, section: str, key: str, default: str | None = None) -> str | None:
        entry = self._find_entry(section, key)
        return default if entry is None else entry.value

    def _get_ranged(self, section: str, key: str, default, lo: int, hi: int):
        entry = self._find_entry(section, key)
        if entry is None:
            return default
        value = parse_ranged(entry.value, lo, hi)
        return default if value is None else value

    def get_int(self, section: str, key: str, default: int) -> int:
        """Return the entry as a signed 32-bit integer or ``default``.

        Decimal, ``0x`` hexadecimal and ``0``-prefixed octal are accepted.
        Trailing garbage or an out-of-range value yields ``default``.
        """
        return self._get_ranged(section, key, default, INT_MIN, INT_MAX)

    def get_uint16(self, section: str, key: str, default: int) -> int:
        return self._get_ranged(section, key, default, 0, UINT16_MAX)

    def get_uint64(self, section: str, key: str, default: int) -> int:
        return self._get_ranged(section, key, default, 0, UINT64_MAX)

    def get_bool(self, section: str, key: str, default: bool) -> bool:
        """Return ``True``/``False`` for the exact texts ``true``/``false``."""
        entry = self._find_entry(section, key)
        if entry is None:
            return default
        value = parse_bool(entry.value)
        return default if value is None else value

    # ----- typed setters -----

    def set_int(self, section: str, key: str, value: int) -> None:
        self.set_string(section, key, format_ranged(value, INT_MIN, INT_MAX, "int"))

    def set_uint16(self, section: str, key: str, value: int) -> None:
        self.set_string(section, key, format_ranged(value, 0, UINT16_MAX, "uint16"))

    def set_uint64(self, section: str, key: str, value: int) -> None:
        self.set_string(section, key, format_ranged(value, 0, UINT64_MAX, "uint64"))

    def set_bool(self, section: str, key: str, value: bool) -> None:
        self.set_string(section, key, format_bool(value))

    def set_string(self, section: str, key: str, value: str) -> None:
        """Store *value* under ``[section] key``.

        Anything from the first newline on is dropped from *value* so a
        value can never inject extra lines into the file.  The section is
        appended if new; an existing key keeps its position.

        :class:`ValueError` is raised for anything that would read back
        differently: a newline in *section* or *key*, a *key* containing
        ``=`` or starting with ``#`` or ``[``, and a *key* or *value* with
        leading or trailing whitespace.
        """
        if _NEWLINE_RX.search(section) or _NEWLINE_RX.search(key):
            raise ValueError("Section names and keys may not contain newlines")
        if "=" in key or key.startswith((COMMENT_PREFIX, "[")) or key != key.strip():
            raise ValueError(f"Malformed key {key!r}")
        match = _NEWLINE_RX.search(value)
        if match:
            self._log.warning("value for [%s] %s truncated at newline", section, key)
            value = value[: match.start()]
        if value != value.strip():
            raise ValueError(f"Value for [{section}] {key} has surrounding whitespace")
        sec = self._sections.get(section)
        if sec is None:
            sec = self._sections[section] = Section(section)
        sec.set(key, value)

    def add_comment(self, text: str) -> None:
        """Append a comment line unless one with the same text exists."""
        if not text.startswith(COMMENT_PREFIX) or _NEWLINE_RX.search(text):
            raise ValueError(f"Malformed comment {text!r}")
        self._sections.setdefault(text, Section(text))

    # ----- removal -----

    def remove_section(self, section: str) -> bool:
        return self._sections.pop(section, None) is not None

    def remove_key(self, section: str, key: str) -> bool:
        sec = self._sections.get(section)
        if sec is None:
            return False
        return sec.remove(key)

    # ----- ordering -----

    def sort_entries(self, compare: Comparator | None = None) -> None:
        """Sort the entries of every section by key.

        *compare* is a three-way comparator on keys; ties keep their
        relative order.
        """
        for section in self._sections.values():
            section.sort(compare)

    # ----- persistence -----

    def dumps(self) -> str:
        buf = StringIO()
        persist.write_store(self, buf)
        return buf.getvalue()

    def write(self, fh: TextIO) -> None:
        persist.write_store(self, fh)

    def save(self, path: str | os.PathLike[str], *, sync: bool = True) -> None:
        """Atomically commit this store to *path*; see :func:`persist.save`."""
        persist.save(self, path, sync=sync)
