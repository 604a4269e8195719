"""Default configuration values for TurboGrid."""

from __future__ import annotations

from typing import Final

# The demo grid is one billion rows by one billion columns.  Nothing
# downstream may assume these fit a pagination buffer.
DEMO_TOTAL_ROWS: Final[int] = 1_000_000_000
DEMO_TOTAL_COLS: Final[int] = 1_000_000_000

# ---------------------------------------------------------------------------
# Viewport constants
# ---------------------------------------------------------------------------

# Rows fetched per request.  Larger pages mean fewer round trips and more
# over-fetch.
DEFAULT_ROWS_PER_PAGE: Final[int] = 60

# Columns shown side by side.  Fixed for the lifetime of a viewport.
DEFAULT_VISIBLE_COLS: Final[int] = 6

# A slider drag only moves the window once it is more than this many columns
# away from the current start.
DEFAULT_DRAG_THRESHOLD: Final[int] = 5

SETTINGS_SCHEMA_ID: Final[str] = "turbogrid/settings@1"
APP_DIR_NAME: Final[str] = "TurboGrid"
