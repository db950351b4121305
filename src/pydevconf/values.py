from __future__ import annotations

import re

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
UINT16_MAX = 2**16 - 1
UINT64_MAX = 2**64 - 1

# Same grammar strtol() accepts with base 0: hex, octal or decimal.
_INT_RX = re.compile(
    r"\s*(?P<sign>[+-]?)(?:0[xX](?P<hex>[0-9a-fA-F]+)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*))"
)

_MAX_DECIMAL_DIGITS = len(str(UINT64_MAX))


def parse_int(text: str) -> int | None:
    """Parse *text* as an integer with automatic base detection.

    ``0x`` introduces hexadecimal and a leading ``0`` octal.  ``None`` is
    returned unless the whole of *text* is consumed, so ``"42x"`` and
    ``"42 "`` are rejected rather than partially parsed.  Decimal digit
    runs longer than the widest supported type (20 digits) are rejected
    before conversion.
    """
    match = _INT_RX.fullmatch(text)
    if match is None:
        return None
    if match["hex"] is not None:
        value = int(match["hex"], 16)
    elif match["oct"] is not None:
        value = int(match["oct"], 8)
    else:
        if len(match["dec"]) > _MAX_DECIMAL_DIGITS:
            return None
        value = int(match["dec"])
    return -value if match["sign"] == "-" else value


def parse_ranged(text: str, lo: int, hi: int) -> int | None:
    value = parse_int(text)
    if value is None or not lo <= value <= hi:
        return None
    return value


def parse_bool(text: str) -> bool | None:
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def format_ranged(value: int, lo: int, hi: int, type_name: str) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected {type_name}, got {value!r}")
    if not lo <= value <= hi:
        raise ValueError(f"{value} out of range for {type_name}")
    return str(value)


def format_bool(value: bool) -> str:
    return "true" if value else "false"
