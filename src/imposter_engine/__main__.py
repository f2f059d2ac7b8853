"""Allow ``python -m imposter_engine``."""

import sys

from .cli import main

sys.exit(main())
