"""Allow ``python -m holebreaker``."""

import sys

from .main import main

sys.exit(main())
