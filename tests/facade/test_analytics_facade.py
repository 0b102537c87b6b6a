import pytest

from playbook.analytics.indicators.smoothing import SmoothingMethod
from playbook.analytics.models import RsiSettings
from playbook.errors import InsufficientDataError, InvalidSettingsError
from playbook.facade.analytics_facade import AnalyticsFacade

CLOSES = [22000.0, 22010.0, 21995.0, 22020.0, 22005.0] + [22005.0 + ((i * 7) % 11) - 5 for i in range(30)]


@pytest.fixture
def facade():
    return AnalyticsFacade(settings=RsiSettings(period=14))


def test_load_bars_builds_view(facade, bars_from_closes):
    bars = bars_from_closes(CLOSES)

    view = facade.load_bars(bars)

    assert view is facade.view
    assert view.error is None
    assert view.opening_range.high == 22020.5
    assert view.opening_range.low == 21994.5
    assert view.opening_range.start == bars[0].time
    assert view.opening_range.end == bars[4].time
    assert len(view.levels.resistances) == 4
    assert len(view.rsi_series) == len(bars) - 14
    assert view.latest_rsi == view.rsi_series[-1].value
    assert view.market.last == bars[-1].close


def test_refresh_before_any_bars(facade):
    assert facade.refresh() is None
    assert facade.view is None


def test_update_settings_recomputes(facade, bars_from_closes):
    facade.load_bars(bars_from_closes(CLOSES))

    view = facade.update_settings(period=5, smoothing="ema")

    assert view.settings == RsiSettings(period=5, smoothing=SmoothingMethod.EMA)
    assert len(view.rsi_series) == len(CLOSES) - 5
    assert facade.settings.period == 5


def test_update_settings_clamps_out_of_range_input(facade):
    facade.update_settings(period=500, overbought=99, oversold=1)

    assert facade.settings.period == 100
    assert facade.settings.overbought == 95.0
    assert facade.settings.oversold == 5.0


def test_update_settings_rejects_unknown_keys(facade):
    with pytest.raises(InvalidSettingsError):
        facade.update_settings(lookback=9)


def test_long_period_leaves_oscillator_empty(facade, bars_from_closes):
    facade.load_bars(bars_from_closes(CLOSES))

    view = facade.update_settings(period=100)

    assert view.rsi_series == ()
    assert view.latest_rsi is None
    assert all("RSI" not in insight.title for insight in view.report.insights)


def test_listeners_are_notified_until_unsubscribed(facade, bars_from_closes):
    seen = []
    unsubscribe = facade.subscribe(seen.append)

    facade.load_bars(bars_from_closes(CLOSES))
    facade.update_settings(period=9)
    unsubscribe()
    facade.refresh()

    assert len(seen) == 2
    assert seen[-1].settings.period == 9
    unsubscribe()


def test_insufficient_bars_without_prior_view(facade, bars_from_closes):
    with pytest.raises(InsufficientDataError, match="Incomplete opening range data"):
        facade.load_bars(bars_from_closes(CLOSES[:3]))

    assert facade.view is None


def test_insufficient_bars_keep_previous_view(facade, bars_from_closes):
    first = facade.load_bars(bars_from_closes(CLOSES))

    view = facade.load_bars(bars_from_closes(CLOSES[:2]))

    assert view.error == "Incomplete opening range data"
    assert view.opening_range == first.opening_range
    assert view.rsi_series == first.rsi_series


def test_successful_load_clears_error(facade, bars_from_closes):
    facade.load_bars(bars_from_closes(CLOSES))
    facade.load_bars(bars_from_closes(CLOSES[:2]))

    view = facade.load_bars(bars_from_closes(CLOSES))

    assert view.error is None


def test_view_to_dict(facade, bars_from_closes):
    payload = facade.load_bars(bars_from_closes(CLOSES)).to_dict()

    assert set(payload) == {
        "symbol", "settings", "openingRange", "levels", "market",
        "rsiSeries", "latestRsi", "insights", "confidence", "bias", "error",
    }
    assert payload["settings"]["smoothing"] == "rma"
    assert payload["bias"] in {"bullish", "neutral", "bearish"}
    assert 0 <= payload["confidence"] <= 100
