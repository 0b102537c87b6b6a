import pytest

from playbook.analytics.indicators.rsi import calculate_rsi_series
from playbook.analytics.models import RsiSettings
from playbook.analytics.opening_range import derive_opening_range, project_levels
from playbook.config.settings import LEVEL_INCREMENTS
from playbook.errors import InsufficientDataError
from playbook.events import PriceBar


def test_worked_example_levels():
    levels = project_levels(100.0, 99.0)

    assert list(levels.resistances) == pytest.approx([100.09, 100.27, 100.63, 101.36], abs=0.01)
    assert list(levels.supports) == pytest.approx([98.91, 98.73, 98.38, 97.67], abs=0.01)


def test_worked_example_six_bars(bars_from_closes):
    bars = bars_from_closes([99.5] * 5 + [99.7])

    opening_range = derive_opening_range(bars)
    levels = project_levels(opening_range.high, opening_range.low)
    series = calculate_rsi_series(bars, RsiSettings(period=14))

    assert (opening_range.high, opening_range.low) == (100.0, 99.0)
    assert series == []
    assert list(levels.resistances) == pytest.approx([100.09, 100.27, 100.63, 101.36], abs=0.01)
    assert list(levels.supports) == pytest.approx([98.91, 98.73, 98.38, 97.67], abs=0.01)


def test_levels_compound_from_previous_level():
    levels = project_levels(24000.0, 23900.0)

    previous = 24000.0
    for level, increment in zip(levels.resistances, LEVEL_INCREMENTS):
        previous = previous + previous * increment
        assert level == previous

    previous = 23900.0
    for level, increment in zip(levels.supports, LEVEL_INCREMENTS):
        previous = previous - previous * increment
        assert level == previous


@pytest.mark.parametrize("high, low", [(100.0, 99.0), (24312.5, 24188.05), (1.5, 0.25), (50000.0, 49999.99)])
def test_ladder_is_strictly_ordered(high, low):
    levels = project_levels(high, low)

    assert len(levels.resistances) == 4
    assert len(levels.supports) == 4
    assert levels.resistances[0] > high
    assert levels.supports[0] < low
    for i in range(1, 4):
        assert levels.resistances[i] > levels.resistances[i - 1]
        assert levels.supports[i] < levels.supports[i - 1]


def test_flat_opening_range_still_separates_levels():
    levels = project_levels(100.0, 100.0)

    assert not set(levels.resistances) & set(levels.supports)
    assert min(levels.resistances) > 100.0 > max(levels.supports)


def test_custom_increments():
    levels = project_levels(100.0, 100.0, increments=(0.01, 0.01))

    assert list(levels.resistances) == pytest.approx([101.0, 102.01])
    assert list(levels.supports) == pytest.approx([99.0, 98.01])


def test_projection_is_deterministic():
    assert project_levels(22150.35, 22101.8) == project_levels(22150.35, 22101.8)


def test_opening_range_uses_first_five_bars():
    bars = [
        PriceBar(time=1_000, open=99.5, high=99.8, low=99.2, close=99.6, volume=10),
        PriceBar(time=2_000, open=99.6, high=100.0, low=99.4, close=99.9, volume=10),
        PriceBar(time=3_000, open=99.9, high=99.9, low=99.0, close=99.1, volume=10),
        PriceBar(time=4_000, open=99.1, high=99.5, low=99.05, close=99.4, volume=10),
        PriceBar(time=5_000, open=99.4, high=99.7, low=99.3, close=99.5, volume=10),
        PriceBar(time=6_000, open=99.5, high=105.0, low=90.0, close=101.0, volume=10),
    ]

    opening = derive_opening_range(bars)

    assert opening.high == 100.0
    assert opening.low == 99.0
    assert opening.start == 1_000
    assert opening.end == 5_000
    assert opening.midpoint == 99.5


def test_opening_range_needs_five_bars(bars_from_closes):
    with pytest.raises(InsufficientDataError, match="Incomplete opening range data"):
        derive_opening_range(bars_from_closes([100.0, 100.1, 100.2, 100.3]))


def test_opening_range_custom_bar_count(bars_from_closes):
    bars = bars_from_closes([100.0, 101.0, 102.0])
    opening = derive_opening_range(bars, bar_count=2)

    assert opening.high == 101.5
    assert opening.low == 99.5
    assert opening.end == bars[1].time
