"""Allow running as ``python -m tsactl``."""

import sys

from .main import main

sys.exit(main())
