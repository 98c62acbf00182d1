"""Run godoc2md as `python -m godoc2md`."""

import sys

from .godoc2md import main

sys.exit(main())
