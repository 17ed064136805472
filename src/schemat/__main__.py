"""Allow ``python -m schemat``."""

import sys

from schemat.cli import main

sys.exit(main())
