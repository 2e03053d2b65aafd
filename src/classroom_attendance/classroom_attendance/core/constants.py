"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SECTION = "S33"
DEFAULT_SESSION_TYPE = "offline"

TREND_WINDOW_DAYS = 30
ENGAGEMENT_WINDOW_DAYS = 7
RISK_WINDOW_DAYS = 30
RISK_THRESHOLD_PERCENT = 75.0

TOKEN_TTL_HOURS = 24
CONFIDENCE_DECIMALS = 3
