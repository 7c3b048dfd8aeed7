"""Error types raised while reading BED files."""

from enum import Enum
from typing import Optional


class BedErrorKind(Enum):
    MALFORMED_LINE = "malformed_line"
    INVALID_INTEGER = "invalid_integer"
    INVALID_INTERVAL = "invalid_interval"
    EMPTY_REGION_NAME = "empty_region_name"
    INVALID_ENCODING = "invalid_encoding"
    NO_CURRENT_LINE = "no_current_line"


class BedParseError(ValueError):
    """Base class for errors found in the content of a BED file.

    **Attributes:**

    - `kind`: `BedErrorKind` identifying the failure.
    - `detail`: Human readable description, without position.
    - `line_number`: 1-based line the error was found on, or `None` if not yet known.
    """

    kind: BedErrorKind

    def __init__(self, detail: str, line_number: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        self.line_number = line_number

    def at_line(self, line_number: int) -> "BedParseError":
        self.line_number = line_number
        return self

    def __str__(self) -> str:
        if self.line_number is None:
            return self.detail
        return f"Parsing BED file at line {self.line_number}: {self.detail}"


class MalformedLineError(BedParseError):
    kind = BedErrorKind.MALFORMED_LINE

    def __init__(self, n_fields: int, line_number: Optional[int] = None):
        super().__init__(
            f"Line must contain at least 3 fields: (region, start, end), found {n_fields}",
            line_number,
        )
        self.n_fields = n_fields


class InvalidIntegerError(BedParseError):
    kind = BedErrorKind.INVALID_INTEGER

    def __init__(self, field_label: str, value: str, line_number: Optional[int] = None):
        super().__init__(f"{field_label}: invalid integer {value!r}", line_number)
        self.field_label = field_label
        self.value = value


class InvalidIntervalError(BedParseError):
    kind = BedErrorKind.INVALID_INTERVAL

    def __init__(self, start: int, end: int, line_number: Optional[int] = None):
        super().__init__(f"interval bounds are invalid: start={start} is not < end={end}", line_number)
        self.start = start
        self.end = end


class EmptyRegionNameError(BedParseError):
    kind = BedErrorKind.EMPTY_REGION_NAME

    def __init__(self, line_number: Optional[int] = None):
        super().__init__("empty string as a region name", line_number)


class InvalidEncodingError(BedParseError):
    kind = BedErrorKind.INVALID_ENCODING

    def __init__(self, reason: str, line_number: Optional[int] = None):
        super().__init__(f"line is not valid UTF-8: {reason}", line_number)


class NoCurrentLineError(RuntimeError):
    """Raised when the line reader is asked for a line it does not hold."""

    kind = BedErrorKind.NO_CURRENT_LINE
