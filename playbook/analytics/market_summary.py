"""Last price and bar-over-bar change for the overview header."""
from typing import Optional, Sequence

from playbook.analytics.models import MarketSummary
from playbook.events import PriceBar


def summarize_market(bars: Sequence[PriceBar]) -> Optional[MarketSummary]:
    if not bars:
        return None

    last = bars[-1].close
    previous = bars[max(0, len(bars) - 2)].close
    change = last - previous
    # a zero base falls back to 1 so the percentage stays finite
    change_percent = change / ((last - change) or 1) * 100
    return MarketSummary(last=last, change=change, change_percent=change_percent)
