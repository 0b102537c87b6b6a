"""
Analytics Core
--------------
Pure functions: bars in, oscillator / levels / insights out.
"""
from playbook.analytics.models import (
    Bias,
    Insight,
    InsightReport,
    Levels,
    MarketSummary,
    OpeningRange,
    OscillatorPoint,
    RsiSettings,
)
from playbook.analytics.indicators.smoothing import SmoothingMethod
from playbook.analytics.indicators.rsi import RSI, calculate_rsi_series, find_latest_rsi
from playbook.analytics.opening_range import derive_opening_range, project_levels
from playbook.analytics.market_summary import summarize_market
from playbook.analytics.confluence_engine import ConfluenceEngine, generate_insights

__all__ = [
    "Bias",
    "Insight",
    "InsightReport",
    "Levels",
    "MarketSummary",
    "OpeningRange",
    "OscillatorPoint",
    "RsiSettings",
    "SmoothingMethod",
    "RSI",
    "calculate_rsi_series",
    "find_latest_rsi",
    "derive_opening_range",
    "project_levels",
    "summarize_market",
    "ConfluenceEngine",
    "generate_insights",
]
