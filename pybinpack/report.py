#!/usr/bin/env python
"""Human-readable reports of packing results.
"""
from typing import List

from rich.console import Console

from pybinpack.optimize import Bin, PackingResult
from pybinpack.utils import slicer


def format_numbers(result: PackingResult, width: int = 4, per_line: int = 20) -> str:
    """Item values (packing order), followed by count and truncated average."""
    lines = ["", "Numbers:", ""]
    for row in slicer(list(result.items), per_line):
        lines.append("".join(f" {value:{width}d} " for value in row))
    average = "n/a" if result.average is None else f"{result.average:{width}d}"
    lines.extend(["", f"Total: {result.count:{width}d}", f"Average: {average}", ""])
    return "\n".join(lines)


def format_bin(idx: int, bin: Bin, width: int = 4) -> str:
    entries = ", ".join(f"{entry:{width}d}" for entry in bin.entries)
    return f" {{{idx:04d}}} Left: {bin.residual_capacity:{width}d} | Count: {len(bin):{width}d} | Items: {entries}"


def format_bins(result: PackingResult, width: int = 4) -> List[str]:
    return [format_bin(idx, bin, width) for idx, bin in enumerate(result.bins)]


def print_report(result: PackingResult, console: Console, show_numbers: bool = True, width: int = 4) -> None:
    if show_numbers:
        console.print(format_numbers(result, width), highlight=False, soft_wrap=True)
    for line in format_bins(result, width):
        console.print(line, highlight=False, soft_wrap=True)
    console.print(f"\nBins: {result.bin_count}", highlight=False)


def print_json(result: PackingResult, console: Console) -> None:
    console.print_json(data=result.to_dict())
