#!/usr/bin/env python
"""Bins and ordered bin collections used by the packing algorithms.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional

from pybinpack.types import BinLimitExceededError, CapacityExceededError, ItemValueError


class Bin:
    """Fixed-size container holding entries in insertion order.

    Parameters
    ----------
    size: int
        Capacity of the bin.

    Notes
    -----
    `residual_capacity` always equals `size` minus the summed lengths of `entries`.
    """

    __slots__ = ("size", "residual_capacity", "entries")

    def __init__(self, size: int):
        self.size = size
        self.residual_capacity = size  # initial Bin is empty
        self.entries: List[Any] = []

    def try_insert(self, entry, length: Optional[int] = None) -> bool:
        """Append `entry` if there is enough room left.

        Returns
        -------
        bool
            `True` if the entry was stored, `False` otherwise; a failed
            attempt leaves the bin untouched.

        Raises
        ------
        ItemValueError
            `length` is negative.
        """
        if length is None:
            length = entry
        if length < 0:
            raise ItemValueError(f"Entry {entry!r} has negative length {length}.")
        if length > self.residual_capacity:
            return False
        self.entries.append(entry)
        self.residual_capacity -= length
        return True

    def append(self, entry, length: Optional[int] = None) -> None:
        if not self.try_insert(entry, length):
            raise CapacityExceededError(f"{entry!r} does not fit into {self!r}.")

    @property
    def used(self) -> int:
        return self.size - self.residual_capacity

    @property
    def utilization(self) -> float:
        if not self.size:
            return 0.0
        return self.used / self.size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "residual_capacity": self.residual_capacity,
            "entries": list(self.entries),
        }

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bin):
            return NotImplemented
        return (self.size, self.residual_capacity, self.entries) == (other.size, other.residual_capacity, other.entries)

    def __repr__(self) -> str:
        return f"Bin(size={self.size}, residual_capacity={self.residual_capacity}, entries={self.entries!r})"


class BinCollection:
    """Append-only list of `Bin` objects, kept in creation order.

    Creation order is also the scan order of first-fit placement, so bins
    are never reordered or removed while packing.

    Parameters
    ----------
    bin_size: int
        Size of every bin created by `new_bin`.

    limit: int or None
        Soft upper bound on the number of bins; `None` means unbounded.
    """

    def __init__(self, bin_size: int, limit: Optional[int] = None):
        self.bin_size = bin_size
        self.limit = limit
        self._bins: List[Bin] = []
        self.logger = logging.getLogger("PyBinPack")

    def scan_for_fit(self, entry, length: Optional[int] = None) -> Optional[int]:
        """Store `entry` in the first bin (creation order) that has room.

        Returns
        -------
        int or None
            Index of the accepting bin, `None` if no existing bin fits.
        """
        for idx, bin in enumerate(self._bins):
            if bin.try_insert(entry, length):
                return idx
        return None

    def append(self, bin: Bin) -> int:
        if self.limit is not None and len(self._bins) >= self.limit:
            raise BinLimitExceededError(self.limit)
        self._bins.append(bin)
        self.logger.debug(f"Opened bin #{len(self._bins) - 1} (size: {bin.size}).")
        return len(self._bins) - 1

    def new_bin(self) -> Bin:
        bin = Bin(size=self.bin_size)
        self.append(bin)
        return bin

    def clear(self) -> None:
        self._bins.clear()

    def to_list(self) -> List[Dict[str, Any]]:
        return [bin.to_dict() for bin in self._bins]

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.clear()

    def __len__(self) -> int:
        return len(self._bins)

    def __getitem__(self, idx):
        return self._bins[idx]

    def __iter__(self) -> Iterator[Bin]:
        return iter(self._bins)

    def __eq__(self, other) -> bool:
        if isinstance(other, BinCollection):
            return self._bins == other._bins
        if isinstance(other, list):
            return self._bins == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"BinCollection(bin_size={self.bin_size}, bins={self._bins!r})"
