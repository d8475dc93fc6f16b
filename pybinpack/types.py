#!/usr/bin/env python
import enum


# Values, sums and counts must stay representable as signed 64-bit integers,
# so results can be handed to tools with fixed-width integers.
ITEM_VALUE_MAX = 2**63 - 1


class BinPackingError(Exception):
    """
    Base class of all `pybinpack` exceptions.
    """


class ConfigurationError(BinPackingError, ValueError):
    """
    The run configuration is invalid; no packing work is done.
    """


class UsageError(ConfigurationError):
    """
    Insufficient or malformed command-line arguments.
    """


class ItemValueError(ConfigurationError):
    """
    An item value is negative or not an integer.
    """


class UnpackableItemError(ConfigurationError):
    """
    An item is larger than the bin capacity and could never be placed.
    """

    def __init__(self, item, length: int, bin_size: int):
        super().__init__(f"Item {item!r} is too large to fit in a bin of size {bin_size} (needs {length}).")
        self.item = item
        self.length = length
        self.bin_size = bin_size


class OverflowRiskError(ConfigurationError):
    """
    The theoretical maximum sum of the configured items exceeds `ITEM_VALUE_MAX`.
    """


class BinLimitExceededError(ConfigurationError):
    """
    The soft limit on the number of bins was hit.
    """

    def __init__(self, limit: int):
        super().__init__(f"Refusing to create more than {limit} bins.")
        self.limit = limit


class CapacityExceededError(BinPackingError):
    """
    An entry was forced into a bin without enough residual capacity.
    """


class ItemSource(enum.IntEnum):
    GENERATED = 0
    SUPPLIED = 1
