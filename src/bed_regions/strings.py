import re

from .errors import InvalidIntegerError

_ASCII_WS = " \t\n\r\f\v"
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")

# positions are stored as int64
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


def trim_ws(text: str) -> str:
    return text.strip(_ASCII_WS)


def split(delimiter: str, text: str) -> list[str]:
    # str.split keeps empty fields, and "" -> [""]
    return text.split(delimiter)


def parse_int(text: str, field_label: str) -> int:
    """Parse a signed decimal integer in the int64 range, rejecting anything `int()` would
    otherwise tolerate (surrounding whitespace, `_` separators, non-ASCII digits)."""
    if _DECIMAL_INT.fullmatch(text) is None:
        raise InvalidIntegerError(field_label, text)
    value = int(text)
    if not (INT_MIN <= value <= INT_MAX):
        raise InvalidIntegerError(field_label, text)
    return value


def trim_record(text: str) -> str:
    """Like `trim_ws`, but leading tabs are kept since they delimit empty fields."""
    return text.lstrip(_ASCII_WS.replace("\t", "")).rstrip(_ASCII_WS)
