"""I/O utilities for reading BED format files into per-region point collections."""

import gzip
import logging
import os

from contextlib import contextmanager
from os import PathLike
from typing import BinaryIO, Iterator, Optional, Union

from .errors import BedParseError, EmptyRegionNameError, InvalidEncodingError, InvalidIntervalError, MalformedLineError
from .line_reader import LineByLineReader
from .memory_logger import MemoryLogger
from .regions import interval_point, RegionEntry, SortedPoints
from .strings import parse_int, split, trim_record, trim_ws

LoggerLike = Union[logging.Logger, MemoryLogger]


@contextmanager
def open_file(path: Union[str, PathLike], mode: str = "rb") -> Iterator[BinaryIO]:
    """Open `path` for the duration of a `with` block.

    Paths ending in `.gz` are decompressed transparently. The handle is closed on every
    exit path, including errors raised inside the block.

    **Raises:**

    - `OSError`: If the file cannot be opened, with `errno` set by the platform.
    """
    if os.fspath(path).endswith(".gz"):
        handle = gzip.open(path, mode)
    else:
        handle = open(path, mode)
    try:
        yield handle
    finally:
        handle.close()


def _parse_interval(line: str) -> tuple[str, int, int]:
    fields = split("\t", line)
    if not (len(fields) >= 3):
        raise MalformedLineError(len(fields))
    region_name = fields[0]
    start = parse_int(fields[1], "interval_position_start")
    end = parse_int(fields[2], "interval_position_end")
    if not (start < end):
        raise InvalidIntervalError(start, end)
    return region_name, start, end


def read_points_from_bed_file(file: BinaryIO, logger: Optional[LoggerLike] = None) -> list[RegionEntry]:
    """Group the intervals of a BED stream into regions of sorted points.

    Each contiguous run of lines sharing a region name (first column) becomes one
    `RegionEntry`, in file order. Every interval contributes the point
    `(end - start) // 2`. A name that reappears after a different one starts a new entry.

    Lines starting with `#` (after trimming) are comments; blank lines are skipped. Only
    the first three columns are read.

    **Arguments:**

    - `file`: Binary stream positioned at the start of the BED content. It is not closed.
    - `logger`: Optional logger receiving progress messages.

    **Returns:**

    - List of `RegionEntry`.

    **Raises:**

    - `BedParseError`: On invalid content. `line_number` holds the 1-based line.
    - `OSError`: If reading the stream fails.
    """
    regions: list[RegionEntry] = []
    reader = LineByLineReader(file)

    current_region_points: list[int] = []
    current_region_name: Optional[str] = None

    def seal_current_region():
        entry = RegionEntry(current_region_name, SortedPoints.from_unsorted(current_region_points))
        regions.append(entry)
        if logger is not None:
            logger.debug(f"Region {entry.name}: {len(entry.points)} points")

    try:
        while reader.read_next_line():
            try:
                text = reader.current_text()
            except UnicodeDecodeError as e:
                raise InvalidEncodingError(str(e)) from e
            line = trim_ws(text)
            if not line or line.startswith("#"):
                # Blank, comment or header
                continue

            region_name, start, end = _parse_interval(trim_record(text))
            # Check is start of a new region
            if region_name != current_region_name:
                if not region_name:
                    raise EmptyRegionNameError()
                if current_region_name is not None:
                    seal_current_region()
                current_region_name = region_name
            current_region_points.append(interval_point(start, end))
    except BedParseError as e:
        e.at_line(reader.current_line_number() + 1)
        raise

    if current_region_name is not None:
        seal_current_region()

    if logger is not None:
        logger.info(f"Read {len(regions)} regions from {reader.lines_read} lines")
    return regions


def read_points_from_bed(bed_file: Union[str, PathLike], logger: Optional[LoggerLike] = None) -> list[RegionEntry]:
    """Read a BED file from disk; see `read_points_from_bed_file`."""
    if logger is not None:
        logger.info(f"Reading BED file {os.fspath(bed_file)}")
    with open_file(bed_file, "rb") as f:
        return read_points_from_bed_file(f, logger=logger)
