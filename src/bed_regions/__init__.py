from importlib.metadata import PackageNotFoundError, version  # pragma: no cover

# annoying 'as' notation to avoid warnings/errors about unused imports...
from .bed_io import (
    open_file as open_file,
    read_points_from_bed as read_points_from_bed,
    read_points_from_bed_file as read_points_from_bed_file,
)
from .errors import (
    BedErrorKind as BedErrorKind,
    BedParseError as BedParseError,
    EmptyRegionNameError as EmptyRegionNameError,
    InvalidEncodingError as InvalidEncodingError,
    InvalidIntegerError as InvalidIntegerError,
    InvalidIntervalError as InvalidIntervalError,
    MalformedLineError as MalformedLineError,
    NoCurrentLineError as NoCurrentLineError,
)
from .line_reader import LineByLineReader as LineByLineReader
from .regions import (
    interval_point as interval_point,
    RegionEntry as RegionEntry,
    regions_to_frame as regions_to_frame,
    SortedPoints as SortedPoints,
)

try:
    # Change here if project is renamed and does not equal the package name
    dist_name = "bed-regions"
    __version__ = version(dist_name)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError
