import numpy as np
import polars as pl
import pytest

from bed_regions.regions import interval_point, RegionEntry, regions_to_frame, SortedPoints


def test_from_unsorted_sorts_and_consumes():
    working = [10, 5, 7, 5]
    points = SortedPoints.from_unsorted(working)
    assert list(points) == [5, 5, 7, 10]
    assert working == []

    # the accumulator can be refilled without touching the sealed points
    working.append(1)
    assert list(points) == [5, 5, 7, 10]


def test_sorted_points_are_immutable():
    points = SortedPoints.from_unsorted([3, 1, 2])
    arr = points.to_numpy()
    assert not arr.flags.writeable
    with pytest.raises(ValueError):
        arr[0] = 100


def test_sorted_points_constructor_rejects_unsorted():
    with pytest.raises(ValueError):
        SortedPoints([3, 1])
    assert list(SortedPoints([1, 1, 4])) == [1, 1, 4]


def test_sorted_points_sequence_behaviour():
    points = SortedPoints.from_unsorted([4, 2])
    assert len(points) == 2
    assert points[0] == 2
    assert points[-1] == 4
    assert points == [2, 4]
    assert points == SortedPoints([2, 4])
    assert points != [2, 4, 6]
    assert repr(points) == "SortedPoints([2, 4])"
    assert all(isinstance(v, int) for v in points)


def test_interval_point():
    assert interval_point(10, 15) == 2
    assert interval_point(10, 17) == 3
    assert interval_point(10, 20) == 5


def test_region_entry_is_frozen_and_unpacks():
    entry = RegionEntry("chr1", SortedPoints([1, 2]))
    name, points = entry
    assert name == "chr1"
    assert points == [1, 2]
    with pytest.raises(AttributeError):
        entry.name = "chr2"


def test_regions_to_frame():
    regions = [
        RegionEntry("chrA", SortedPoints([1, 3])),
        RegionEntry("chrB", SortedPoints([2])),
        RegionEntry("chrA", SortedPoints([0])),
    ]
    df = regions_to_frame(regions)
    assert df.columns == ["region", "region_index", "point"]
    assert df.schema["region"] == pl.Utf8
    assert df.schema["region_index"] == pl.UInt32
    assert df.schema["point"] == pl.Int64
    assert df["region"].to_list() == ["chrA", "chrA", "chrB", "chrA"]
    assert df["region_index"].to_list() == [0, 0, 1, 2]
    np.testing.assert_array_equal(df["point"].to_numpy(), np.array([1, 3, 2, 0]))


def test_regions_to_frame_empty():
    df = regions_to_frame([])
    assert df.shape == (0, 3)
    assert df.schema["point"] == pl.Int64


def test_equal_points_hash_equal():
    a = SortedPoints.from_unsorted([3, 1])
    b = SortedPoints([1, 3])
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_region_entry_is_hashable():
    entry = RegionEntry("chr1", SortedPoints([1, 2]))
    same = RegionEntry("chr1", SortedPoints.from_unsorted([2, 1]))
    assert hash(entry) == hash(same)
    assert {entry: "x"}[same] == "x"


def test_comparison_with_out_of_range_values():
    assert SortedPoints([1]) != [2**70]
