#!/usr/bin/env python
"""
Parse command line parameters and run a first-fit-decreasing packing.
"""

from pybinpack.config import (  # noqa: F401
    USAGE,
    create_application,
    get_application,
    reset_application,
)
from pybinpack.optimize import PackingResult, pack


class ArgumentParser:
    """Argument parser for pybinpack applications.

    `run` returns a `PackingResult`, which releases its bins when used as
    context manager.
    """

    def __init__(self, description=None, *args, **kws):
        self._description = description

    def run(self, argv=None) -> PackingResult:
        application = get_application(argv)
        run_config = application.run_configuration()
        items = run_config.resolve_items()
        application.log.debug(f"{len(items)} items ({run_config.source.name.lower()}).")
        return pack(items, run_config.bin_capacity, bin_limit_margin=run_config.bin_limit_margin)

    @property
    def application(self):
        return get_application()
