#!/usr/bin/env python
"""First-fit-decreasing bin packing for Python."""

from rich import pretty
from rich.console import Console
from rich.traceback import install as tb_install


pretty.install()

from .optimize import Bin, BinCollection, PackingResult, first_fit_decreasing, pack, sort_descending  # noqa: F401, E402


console = Console()
tb_install(show_locals=True, max_frames=3)  # Install custom exception handler.

# if you update this manually, do not forget to update setup.py.
__version__ = "0.3.1"
