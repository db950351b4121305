from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .model import COMMENT_PREFIX, DEFAULT_SECTION

if TYPE_CHECKING:
    from .store import ConfigStore

logger = logging.getLogger(__name__)

# Lines reaching this many characters (terminator excluded) are dropped.
MAX_LINE_LENGTH = 1023


def parse_lines(
    lines: Iterable[str],
    store: ConfigStore,
    *,
    max_line_length: int = MAX_LINE_LENGTH,
    log: logging.Logger | None = None,
) -> ConfigStore:
    """Populate *store* from the text *lines* and return it.

    Malformed content never aborts the parse.  Over-long lines, lines without
    a ``=`` separator and every entry following an unterminated ``[header``
    are dropped and reported at debug level.
    """
    log = log or logger
    section = DEFAULT_SECTION
    skip_entries = False

    for line_num, raw in enumerate(lines, start=1):
        if len(raw.rstrip("\r\n")) >= max_line_length:
            log.debug("line %d exceeds %d characters, ignored", line_num, max_line_length)
            continue

        line = raw.strip()
        if not line:
            continue
        if "\r" in line or "\n" in line:
            log.debug("embedded line break on line %d, ignored", line_num)
            continue

        if line.startswith(COMMENT_PREFIX):
            store.add_comment(line)
        elif line.startswith("["):
            if not line.endswith("]"):
                log.debug("unterminated section name on line %d", line_num)
                skip_entries = True
                continue
            section = line[1:-1]
            skip_entries = False
        else:
            if skip_entries:
                log.debug("skipping entry on line %d after invalid section line", line_num)
                continue
            key, sep, value = line.partition("=")
            if not sep:
                log.debug("no key/value separator found on line %d", line_num)
                continue
            store.set_string(section, key.strip(), value.strip())
    return store
