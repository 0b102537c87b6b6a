"""
Global Settings
"""
import os

LOG_LEVEL = os.environ.get("PLAYBOOK_LOG_LEVEL", "INFO")
LOG_DIR = os.environ.get("PLAYBOOK_LOG_DIR", "logs")

SYMBOL = os.environ.get("PLAYBOOK_SYMBOL", "NSE:NIFTY")

# Opening range is built from the first N one-minute bars of the session
OPENING_RANGE_BARS = 5

# Cumulative proportional steps for the projected level ladder
LEVEL_INCREMENTS = (0.0009, 0.0018, 0.0036, 0.0072)

# Inclusive bounds for user tunable RSI settings
PERIOD_BOUNDS = (2, 100)
OVERBOUGHT_BOUNDS = (50.0, 95.0)
OVERSOLD_BOUNDS = (5.0, 50.0)

DEFAULT_RSI_PERIOD = int(os.environ.get("PLAYBOOK_RSI_PERIOD", "14"))
DEFAULT_RSI_OVERBOUGHT = float(os.environ.get("PLAYBOOK_RSI_OVERBOUGHT", "70"))
DEFAULT_RSI_OVERSOLD = float(os.environ.get("PLAYBOOK_RSI_OVERSOLD", "30"))
DEFAULT_RSI_SMOOTHING = os.environ.get("PLAYBOOK_RSI_SMOOTHING", "rma")

# Fraction of a level's price within which the close counts as testing it
LEVEL_PROXIMITY_PCT = float(os.environ.get("PLAYBOOK_LEVEL_PROXIMITY_PCT", "0.0003"))


def load_default_rsi_settings():
    """Build the default RsiSettings from the environment, clamped into range."""
    from playbook.analytics.models import RsiSettings

    return RsiSettings.clamped(
        period=DEFAULT_RSI_PERIOD,
        overbought=DEFAULT_RSI_OVERBOUGHT,
        oversold=DEFAULT_RSI_OVERSOLD,
        smoothing=DEFAULT_RSI_SMOOTHING,
    )
