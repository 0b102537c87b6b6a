from datetime import datetime, timezone

import pytest

from playbook.analytics.models import OpeningRange, OscillatorPoint
from playbook.analytics.opening_range import project_levels
from playbook.events import PriceBar

# 2024-01-02 09:15 IST
SESSION_OPEN_MS = int(datetime(2024, 1, 2, 3, 45, tzinfo=timezone.utc).timestamp() * 1000)
MINUTE_MS = 60_000


def build_bars(closes, spread=0.5, start=SESSION_OPEN_MS):
    return [
        PriceBar(
            time=start + i * MINUTE_MS,
            open=close,
            high=close + spread,
            low=close - spread,
            close=close,
            volume=1000.0 + i,
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def bars_from_closes():
    return build_bars


@pytest.fixture
def opening_range():
    return OpeningRange(high=100.0, low=99.0, start=SESSION_OPEN_MS, end=SESSION_OPEN_MS + 4 * MINUTE_MS)


@pytest.fixture
def levels(opening_range):
    return project_levels(opening_range.high, opening_range.low)


@pytest.fixture
def rsi_at():
    def _series(value, time=SESSION_OPEN_MS + 20 * MINUTE_MS):
        return [OscillatorPoint(time=time - MINUTE_MS, value=50.0), OscillatorPoint(time=time, value=value)]
    return _series
