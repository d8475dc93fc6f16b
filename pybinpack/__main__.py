#!/usr/bin/env python
from pybinpack.scripts.binpack import main


main()
