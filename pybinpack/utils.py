#!/usr/bin/env python
from typing import List, Sequence


def slicer(iterable, sliceLength, converter=None):
    if converter is None:
        converter = type(iterable)
    length = len(iterable)
    return [converter(iterable[item : item + sliceLength]) for item in range(0, length, sliceLength)]


def parse_int(value: str, name: str) -> int:
    """Convert a command-line token to `int`, naming the argument on failure."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}.") from None


def parse_ints(values: Sequence[str], name: str) -> List[int]:
    return [parse_int(value, f"{name}[{idx}]") for idx, value in enumerate(values)]
