"""Default settings for the meeting date solver."""

from __future__ import annotations

from typing import Optional

# ==== Logging ================================================================

LOGGER_NAME: str = "datecsp"
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"

# ==== Dates ==================================================================

# ISO 8601 calendar dates, e.g. 2024-01-31
DATE_FORMAT: str = "%Y-%m-%d"

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# ==== Search =================================================================

# No limit unless the caller or the input file asks for one
DEFAULT_TIME_LIMIT_SECONDS: Optional[float] = None

# Upper bound accepted for --timeout on the command line
MAX_TIME_LIMIT_SECONDS: int = 3600

# ==== Generator ==============================================================

DEFAULT_NUM_MEETINGS: int = 5
DEFAULT_NUM_DAYS: int = 10
DEFAULT_NUM_UNARY: int = 3
DEFAULT_NUM_BINARY: int = 4
