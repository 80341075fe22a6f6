"""Allow ``python -m nashfinder GAME_FILE [SUPPORT_SETS]``."""

import sys

from nashfinder.cli import main

sys.exit(main())
