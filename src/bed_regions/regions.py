from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np
import numpy.typing as npt
import polars as pl


def interval_point(start: int, end: int) -> int:
    """Representative point of the interval `[start, end)`: half of its width.

    This is an offset, not a midpoint, and callers rely on it being exactly
    `(end - start) // 2`. The width is positive once the interval is validated, so
    floor and truncating division agree.
    """
    return (end - start) // 2


class SortedPoints:
    """Immutable ascending sequence of points for one region.

    Backed by a read-only `int64` numpy array. Build it with `from_unsorted`, which takes
    ownership of the working list it is given.
    """

    __slots__ = ("_values",)

    def __init__(self, values: npt.ArrayLike = ()):
        arr = np.array(values, dtype=np.int64)
        if arr.ndim != 1:
            raise ValueError("SortedPoints requires a one-dimensional sequence")
        if arr.size > 1 and np.any(arr[1:] < arr[:-1]):
            raise ValueError("SortedPoints values must be in ascending order")
        arr.flags.writeable = False
        self._values = arr

    @classmethod
    def from_unsorted(cls, points: list[int]) -> "SortedPoints":
        arr = np.sort(np.asarray(points, dtype=np.int64), kind="stable")
        # the accumulator is consumed, nothing may alias the sealed values
        points.clear()
        result = cls.__new__(cls)
        arr.flags.writeable = False
        result._values = arr
        return result

    def to_numpy(self) -> npt.NDArray[np.int64]:
        return self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return (int(v) for v in self._values)

    def __getitem__(self, key: int) -> int:
        return int(self._values[key])

    def __eq__(self, other) -> bool:
        if isinstance(other, SortedPoints):
            other = other._values
        try:
            other = np.asarray(other, dtype=np.int64)
        except (TypeError, ValueError, OverflowError):
            return NotImplemented
        return other.shape == self._values.shape and bool(np.array_equal(other, self._values))

    def __hash__(self) -> int:
        return hash(self._values.tobytes())

    def __repr__(self) -> str:
        return f"SortedPoints({self._values.tolist()})"


@dataclass(frozen=True)
class RegionEntry:
    """A sealed region: its name and the sorted points of its contiguous run of intervals."""

    name: str
    points: SortedPoints

    def __iter__(self):
        # allows `name, points = entry`
        return iter((self.name, self.points))


def regions_to_frame(regions: Iterable[RegionEntry]) -> pl.DataFrame:
    """Flatten region entries into a long Polars table.

    **Arguments:**

    - `regions`: Region entries, as returned by `read_points_from_bed`.

    **Returns:**

    - `polars.DataFrame` with columns `region`, `region_index` and `point`, one row per
        point, in result order. `region_index` separates non-contiguous runs that share a name.
    """
    names: list[str] = []
    indices: list[npt.NDArray[np.uint32]] = []
    points: list[npt.NDArray[np.int64]] = []
    for idx, entry in enumerate(regions):
        values = entry.points.to_numpy()
        names.extend([entry.name] * len(values))
        indices.append(np.full(len(values), idx, dtype=np.uint32))
        points.append(values)

    return pl.DataFrame(
        {
            "region": pl.Series(names, dtype=pl.Utf8),
            "region_index": pl.Series(np.concatenate(indices) if indices else [], dtype=pl.UInt32),
            "point": pl.Series(np.concatenate(points) if points else [], dtype=pl.Int64),
        }
    )
