"""Allow running branch-axe with `python -m branch_axe`."""

import sys

from branch_axe.cli.main import main

sys.exit(main())
