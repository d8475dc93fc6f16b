#!/usr/bin/env python
"""Pseudo-random item generation."""

import logging
import random
from typing import Optional, Tuple

from pybinpack.types import ITEM_VALUE_MAX, ConfigurationError, OverflowRiskError


logger = logging.getLogger("PyBinPack")


def check_value_range(count: int, value_min: int, value_max: int) -> None:
    """Validate generator bounds.

    The worst case sum (`count` * `value_max`) must stay below `ITEM_VALUE_MAX`.
    """
    if count < 0:
        raise ConfigurationError(f"Item count must not be negative, got {count}.")
    if value_min < 0:
        raise ConfigurationError(f"Minimum value must not be negative, got {value_min}.")
    if value_min > value_max:
        raise ConfigurationError(f"Minimum value {value_min} is greater than maximum value {value_max}.")
    if count * value_max > ITEM_VALUE_MAX:
        raise OverflowRiskError(f"{count} items of up to {value_max} may sum up beyond {ITEM_VALUE_MAX}.")


def generate_items(count: int, value_min: int, value_max: int, seed: Optional[int] = None) -> Tuple[int, ...]:
    """Draw `count` integers uniformly from [`value_min`, `value_max`].

    Parameters
    ----------
    seed: int or None
        Seed of a private random generator; `None` seeds from the OS.
    """
    check_value_range(count, value_min, value_max)
    rng = random.Random(seed)
    items = tuple(rng.randint(value_min, value_max) for _ in range(count))
    logger.debug(f"Generated {count} items in range [{value_min}, {value_max}] (seed: {seed!r}).")
    return items
