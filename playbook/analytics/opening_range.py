"""
Opening Range Geometry
----------------------
Derives the session's opening range and projects a symmetric ladder of
resistance and support levels from it.
"""
import logging
from typing import List, Sequence

from playbook.analytics.models import Levels, OpeningRange
from playbook.config.settings import LEVEL_INCREMENTS, OPENING_RANGE_BARS
from playbook.errors import InsufficientDataError
from playbook.events import PriceBar

logger = logging.getLogger(__name__)


def derive_opening_range(bars: Sequence[PriceBar], bar_count: int = OPENING_RANGE_BARS) -> OpeningRange:
    """
    High/low band of the first `bar_count` bars of the session.

    Raises:
        InsufficientDataError: fewer than `bar_count` bars are available
    """
    window = list(bars[:bar_count])
    if len(window) < bar_count:
        raise InsufficientDataError("Incomplete opening range data")

    return OpeningRange(
        high=max(bar.high for bar in window),
        low=min(bar.low for bar in window),
        start=window[0].time,
        end=window[-1].time,
    )


def _ladder(base: float, increments: Sequence[float], direction: int) -> List[float]:
    levels = []
    previous = base
    for increment in increments:
        previous = previous + direction * previous * increment
        levels.append(previous)
    return levels


def project_levels(
    opening_high: float,
    opening_low: float,
    increments: Sequence[float] = LEVEL_INCREMENTS
) -> Levels:
    """
    Each step moves the previous level by `increment` of itself, so the
    ladder compounds: resistances climb from the opening high, supports
    fall from the opening low, nearest level first.
    """
    levels = Levels(
        resistances=tuple(_ladder(opening_high, increments, 1)),
        supports=tuple(_ladder(opening_low, increments, -1)),
    )
    logger.debug(f"Projected levels from {opening_high}/{opening_low}: {levels}")
    return levels
