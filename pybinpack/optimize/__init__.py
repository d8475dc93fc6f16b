#!/usr/bin/env python
"""Pack integer items into fixed-size bins."""

from pybinpack.optimize.binpacking import (  # noqa: F401
    FirstFitDecreasing,
    PackingResult,
    first_fit_decreasing,
    pack,
    sort_descending,
    validate_bin_size,
    validate_items,
)
from pybinpack.optimize.bins import Bin, BinCollection  # noqa: F401
