#!/usr/bin/env python
"""Bin-packing algorithms.
"""
import logging
import numbers
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pybinpack.optimize.bins import Bin, BinCollection  # noqa: F401
from pybinpack.types import ITEM_VALUE_MAX, ConfigurationError, ItemValueError, OverflowRiskError, UnpackableItemError


KeyFunction = Optional[Callable[[Any], int]]


def sort_descending(items, key: KeyFunction = None) -> List[Any]:
    """Return a new list with `items` ordered from largest to smallest.

    Equal items keep their relative input order.
    """
    return sorted(items, key=key, reverse=True)


def validate_bin_size(bin_size) -> None:
    if isinstance(bin_size, bool) or not isinstance(bin_size, numbers.Integral):
        raise ConfigurationError(f"Bin size must be an integer, got {bin_size!r}.")
    if bin_size <= 0:
        raise ConfigurationError(f"Bin size must be positive, got {bin_size}.")
    if bin_size > ITEM_VALUE_MAX:
        raise OverflowRiskError(f"Bin size {bin_size} exceeds {ITEM_VALUE_MAX}.")


def validate_items(items: Sequence[Any], bin_size: int, key: KeyFunction = None) -> None:
    """Reject items that could never be placed, before any bin is created.

    Raises
    ------
    ItemValueError
        negative or non-integer lengths.

    UnpackableItemError
        an item is larger than `bin_size`.

    OverflowRiskError
        the summed lengths don't fit into `ITEM_VALUE_MAX`.
    """
    total = 0
    for item in items:
        length = item if key is None else key(item)
        if isinstance(length, bool) or not isinstance(length, numbers.Integral):
            raise ItemValueError(f"Item {item!r} has non-integer length {length!r}.")
        if length < 0:
            raise ItemValueError(f"Item {item!r} has negative length {length}.")
        if length > bin_size:
            raise UnpackableItemError(item, length, bin_size)
        total += length
    if total > ITEM_VALUE_MAX:
        raise OverflowRiskError(f"Sum of item lengths ({total}) exceeds {ITEM_VALUE_MAX}.")


class FirstFitDecreasing:
    """bin-packing with first-fit-decreasing algorithm.

    Parameters
    ----------
    bin_size: int

    key: callable
        Maps an item to its length; items are their own length if omitted.

    bin_limit: int or None
        Soft limit on the number of bins, s. `BinCollection`.
    """

    def __init__(self, bin_size: int, key: KeyFunction = None, bin_limit: Optional[int] = None):
        validate_bin_size(bin_size)
        self.bin_size = bin_size
        self.key = key
        self.bin_limit = bin_limit
        self.logger = logging.getLogger("PyBinPack")

    def length(self, item) -> int:
        return item if self.key is None else self.key(item)

    def sort(self, items) -> List[Any]:
        return sort_descending(items, key=self.key)

    def pack_sorted(self, items: Sequence[Any]) -> BinCollection:
        """Place already sorted `items`; no validation is done here."""
        bins = BinCollection(bin_size=self.bin_size, limit=self.bin_limit)
        for item in items:
            length = self.length(item)
            if bins.scan_for_fit(item, length) is None:
                bins.new_bin().append(item, length)
        return bins

    def __call__(self, items) -> BinCollection:
        items = list(items)
        validate_items(items, self.bin_size, self.key)
        bins = self.pack_sorted(self.sort(items))
        self.logger.info(f"Packed {len(items)} items into {len(bins)} bins of size {self.bin_size}.")
        return bins


def first_fit_decreasing(items, bin_size: int, key: KeyFunction = None, bin_limit: Optional[int] = None) -> BinCollection:
    """bin-packing with first-fit-decreasing algorithm.

    Parameters
    ----------
    items: list
        items that need to be stored/allocated.

    bin_size: int

    key: callable
        length of an item, defaults to the item itself.

    bin_limit: int or None
        refuse to open more than `bin_limit` bins.

    Returns
    -------
    BinCollection
        Resulting bins, in creation order.
    """
    return FirstFitDecreasing(bin_size=bin_size, key=key, bin_limit=bin_limit)(items)


@dataclass(frozen=True)
class PackingResult:
    """Outcome of a packing run.

    Attributes
    ----------
    items: tuple
        Packed items in packing (descending) order.

    bins: BinCollection

    bin_size: int
    """

    items: Tuple[int, ...]
    bins: BinCollection
    bin_size: int

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def total(self) -> int:
        return sum(self.items)

    @property
    def average(self) -> Optional[int]:
        """Truncated integer mean, `None` without items."""
        if not self.items:
            return None
        return self.total // self.count

    @property
    def bin_count(self) -> int:
        return len(self.bins)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bin_size": self.bin_size,
            "items": list(self.items),
            "count": self.count,
            "total": self.total,
            "average": self.average,
            "bins": self.bins.to_list(),
        }

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.bins.__exit__(exc_type, exc_value, traceback)


def pack(items, bin_size: int, bin_limit_margin: int = 0) -> PackingResult:
    """Pack integer `items` into bins of `bin_size`.

    The number of bins may not exceed the number of items plus
    `bin_limit_margin`.
    """
    items = list(items)
    if bin_limit_margin < 0:
        raise ConfigurationError(f"Bin limit margin must not be negative, got {bin_limit_margin}.")
    packer = FirstFitDecreasing(bin_size=bin_size, bin_limit=len(items) + bin_limit_margin)
    validate_items(items, bin_size)
    ordered = packer.sort(items)
    bins = packer.pack_sorted(ordered)
    packer.logger.info(f"Packed {len(ordered)} items into {len(bins)} bins of size {bin_size}.")
    return PackingResult(items=tuple(ordered), bins=bins, bin_size=bin_size)
