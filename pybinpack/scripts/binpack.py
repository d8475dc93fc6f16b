#!/usr/bin/env python

"""Pack generated or supplied numbers into bins (first-fit-decreasing)."""

import sys

from pybinpack import console
from pybinpack.cmdline import USAGE, ArgumentParser
from pybinpack.report import print_json, print_report
from pybinpack.types import ConfigurationError, UsageError


def main(argv=None):
    ap = ArgumentParser(description="Pack generated or supplied numbers into bins (first-fit-decreasing).")

    try:
        with ap.run(argv) as result:
            report = ap.application.report
            if report.json:
                print_json(result, console)
            else:
                print_report(result, console, show_numbers=report.show_numbers, width=report.width)
    except UsageError as e:
        print(str(e) if str(e) else USAGE)
        sys.exit(1)
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    except MemoryError:
        print("Error: out of memory.")
        sys.exit(1)


if __name__ == "__main__":
    main()
