import logging
from collections import Counter, namedtuple
from operator import attrgetter

import pytest

from pybinpack.optimize.binpacking import (
    Bin,
    FirstFitDecreasing,
    first_fit_decreasing,
    pack,
    sort_descending,
)
from pybinpack.types import (
    BinLimitExceededError,
    ConfigurationError,
    ItemValueError,
    OverflowRiskError,
    UnpackableItemError,
)


Block = namedtuple("Block", "address length")


@pytest.fixture
def blocks():
    return [
        Block(address=0x000E10BA, length=2),
        Block(address=0x000E10BE, length=2),
        Block(address=0x000E41F4, length=4),
        Block(address=0x000E51FC, length=4),
        Block(address=0x00125288, length=4),
        Block(address=0x00125294, length=4),
        Block(address=0x001252A1, length=1),
        Block(address=0x001252A4, length=4),
        Block(address=0x00125438, length=3),
        Block(address=0x0012543C, length=1),
    ]


def test_pack_to_single_bin(blocks):
    BIN_SIZE = 253
    bins = first_fit_decreasing(items=blocks, bin_size=BIN_SIZE, key=attrgetter("length"))

    assert len(bins) == 1
    bin0 = bins[0]
    assert bin0.residual_capacity == BIN_SIZE - 29
    assert bin0.entries == [
        Block(address=0x000E41F4, length=4),
        Block(address=0x000E51FC, length=4),
        Block(address=0x00125288, length=4),
        Block(address=0x00125294, length=4),
        Block(address=0x001252A4, length=4),
        Block(address=0x00125438, length=3),
        Block(address=0x000E10BA, length=2),
        Block(address=0x000E10BE, length=2),
        Block(address=0x001252A1, length=1),
        Block(address=0x0012543C, length=1),
    ]


def test_pack_empty_block_set():
    BIN_SIZE = 253
    bins = first_fit_decreasing(items=[], bin_size=BIN_SIZE)
    assert bins == []
    assert len(bins) == 0


def test_pack_to_multiple_bins1(blocks):
    BIN_SIZE = 6
    bins = first_fit_decreasing(items=blocks, bin_size=BIN_SIZE, key=attrgetter("length"))
    assert len(bins) == 6
    bin0, bin1, bin2, bin3, bin4, bin5 = bins
    assert bin0.residual_capacity == 0
    assert bin0.entries == [
        Block(address=0x000E41F4, length=4),
        Block(address=0x000E10BA, length=2),
    ]
    assert bin1.residual_capacity == 0
    assert bin1.entries == [
        Block(address=0x000E51FC, length=4),
        Block(address=0x000E10BE, length=2),
    ]
    assert bin2.residual_capacity == 0
    assert bin2.entries == [
        Block(address=0x00125288, length=4),
        Block(address=0x001252A1, length=1),
        Block(address=0x0012543C, length=1),
    ]
    assert bin3.residual_capacity == 2
    assert bin3.entries == [Block(address=0x00125294, length=4)]
    assert bin4.residual_capacity == 2
    assert bin4.entries == [Block(address=0x001252A4, length=4)]
    assert bin5.residual_capacity == 3
    assert bin5.entries == [Block(address=0x00125438, length=3)]


def test_binpacking_raises(blocks):
    BIN_SIZE = 7
    with pytest.raises(ValueError):
        first_fit_decreasing(items=[Block(address=0x1000, length=32)], bin_size=BIN_SIZE, key=attrgetter("length"))


def test_binpacking_works(blocks):
    BIN_SIZE = 7
    bins = first_fit_decreasing(items=[Block(address=0x1000, length=7)], bin_size=BIN_SIZE, key=attrgetter("length"))
    assert len(bins) == 1
    assert bins[0].residual_capacity == 0
    assert bins[0] != Bin(size=7)


def test_two_bins_interleaved():
    bins = first_fit_decreasing([6, 5, 4, 3], bin_size=10)
    assert [b.entries for b in bins] == [[6, 4], [5, 3]]
    assert [b.residual_capacity for b in bins] == [0, 2]


def test_exactly_full_bins():
    bins = first_fit_decreasing([10, 10, 10], bin_size=10)
    assert len(bins) == 3
    assert all(b.entries == [10] for b in bins)
    assert all(b.residual_capacity == 0 for b in bins)


def test_unit_items_overflow_into_second_bin():
    bins = first_fit_decreasing([1] * 6, bin_size=5)
    assert [len(b) for b in bins] == [5, 1]
    assert bins[1].residual_capacity == 4


def test_zero_sized_items():
    bins = first_fit_decreasing([0, 0, 3], bin_size=3)
    assert [b.entries for b in bins] == [[3, 0, 0]]


ITEMS = [17, 3, 42, 8, 8, 25, 1, 33, 12, 40, 5, 19, 27, 2, 9, 31, 14, 6, 22, 11]


def test_capacity_invariant():
    for b in first_fit_decreasing(ITEMS, bin_size=50):
        assert sum(b.entries) <= 50
        assert b.residual_capacity == 50 - sum(b.entries)
        assert b.residual_capacity >= 0


def test_items_are_conserved():
    bins = first_fit_decreasing(ITEMS, bin_size=50)
    packed = [entry for b in bins for entry in b.entries]
    assert Counter(packed) == Counter(ITEMS)


def test_input_order_does_not_matter():
    first = first_fit_decreasing(ITEMS, bin_size=50)
    second = first_fit_decreasing(list(reversed(ITEMS)), bin_size=50)
    assert first == second


def test_deterministic():
    assert first_fit_decreasing(ITEMS, bin_size=45) == first_fit_decreasing(ITEMS, bin_size=45)


def test_entries_are_non_increasing():
    for b in first_fit_decreasing(ITEMS, bin_size=50):
        assert b.entries == sorted(b.entries, reverse=True)


def test_first_fit_order():
    bins = first_fit_decreasing(ITEMS, bin_size=50)
    # Replay: every item must have been rejected by all earlier bins.
    residuals = []
    for item in sort_descending(ITEMS):
        target = next(i for i, r in enumerate(residuals) if r >= item) if any(r >= item for r in residuals) else None
        if target is None:
            residuals.append(50 - item)
        else:
            residuals[target] -= item
    assert residuals == [b.residual_capacity for b in bins]


def test_sort_descending_is_a_copy():
    items = [3, 1, 2]
    result = sort_descending(items)
    assert result == [3, 2, 1]
    assert items == [3, 1, 2]


def test_sort_descending_is_stable():
    items = [Block(1, 2), Block(2, 5), Block(3, 2)]
    assert sort_descending(items, key=attrgetter("length")) == [Block(2, 5), Block(1, 2), Block(3, 2)]


def test_oversized_item_is_rejected():
    with pytest.raises(UnpackableItemError) as exc:
        first_fit_decreasing([3, 11, 2], bin_size=10)
    assert exc.value.item == 11
    assert exc.value.bin_size == 10


def test_negative_item_is_rejected():
    with pytest.raises(ItemValueError):
        first_fit_decreasing([3, -1], bin_size=10)


def test_non_integer_item_is_rejected():
    with pytest.raises(ItemValueError):
        first_fit_decreasing([3, 1.5], bin_size=10)


@pytest.mark.parametrize("bin_size", [0, -3, 2.5, True])
def test_invalid_bin_size(bin_size):
    with pytest.raises(ConfigurationError):
        first_fit_decreasing([1], bin_size=bin_size)


def test_sum_overflow_is_rejected():
    big = 2**62
    with pytest.raises(OverflowRiskError):
        first_fit_decreasing([big, big], bin_size=big)


def test_bin_limit():
    with pytest.raises(BinLimitExceededError):
        first_fit_decreasing([5, 5, 5], bin_size=5, bin_limit=2)


def test_bin_limit_not_reached_for_valid_items():
    bins = FirstFitDecreasing(bin_size=5, bin_limit=3)([5, 5, 5])
    assert len(bins) == 3


def test_pack_result():
    result = pack([3, 6, 4, 5], bin_size=10)
    assert result.items == (6, 5, 4, 3)
    assert result.count == 4
    assert result.total == 18
    assert result.average == 4
    assert result.bin_count == 2
    assert result.to_dict() == {
        "bin_size": 10,
        "items": [6, 5, 4, 3],
        "count": 4,
        "total": 18,
        "average": 4,
        "bins": [
            {"size": 10, "residual_capacity": 0, "entries": [6, 4]},
            {"size": 10, "residual_capacity": 2, "entries": [5, 3]},
        ],
    }


def test_pack_empty():
    result = pack([], bin_size=10)
    assert result.bin_count == 0
    assert result.count == 0
    assert result.average is None


def test_pack_releases_bins():
    with pack([1, 2, 3], bin_size=4) as result:
        assert result.bin_count == 2
    assert result.bin_count == 0


def test_pack_negative_margin():
    with pytest.raises(ConfigurationError):
        pack([1], bin_size=4, bin_limit_margin=-1)


def test_pack_logs_summary(caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("PyBinPack"), "propagate", True)
    with caplog.at_level("INFO", logger="PyBinPack"):
        pack([6, 5, 4, 3], bin_size=10)
    assert "Packed 4 items into 2 bins of size 10." in caplog.text
