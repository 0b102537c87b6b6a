"""
Analytics Facade
----------------
Bridge between a presentation layer and the analytics core.

The facade keeps the latest bars and RSI settings of one session. Every
command (new bars, changed settings, manual refresh) re-runs the whole
pipeline and replaces the published view; listeners are told about each
new view.
"""
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from playbook.analytics.confluence_engine import ConfluenceEngine, generate_insights
from playbook.analytics.indicators.rsi import calculate_rsi_series, find_latest_rsi
from playbook.analytics.market_summary import summarize_market
from playbook.analytics.models import (
    InsightReport,
    Levels,
    MarketSummary,
    OpeningRange,
    OscillatorPoint,
    RsiSettings,
)
from playbook.analytics.opening_range import derive_opening_range, project_levels
from playbook.config.settings import SYMBOL, load_default_rsi_settings
from playbook.errors import InsufficientDataError
from playbook.events import PriceBar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybookView:
    symbol: str
    settings: RsiSettings
    bars: Tuple[PriceBar, ...]
    opening_range: OpeningRange
    levels: Levels
    market: Optional[MarketSummary]
    rsi_series: Tuple[OscillatorPoint, ...]
    latest_rsi: Optional[float]
    report: InsightReport
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "settings": self.settings.to_dict(),
            "openingRange": {
                "high": self.opening_range.high,
                "low": self.opening_range.low,
                "start": self.opening_range.start,
                "end": self.opening_range.end,
            },
            "levels": self.levels.to_dict(),
            "market": self.market.to_dict() if self.market else None,
            "rsiSeries": [{"time": p.time, "value": p.value} for p in self.rsi_series],
            "latestRsi": self.latest_rsi,
            "insights": [insight.to_dict() for insight in self.report.insights],
            "confidence": self.report.confidence,
            "bias": self.report.bias.value,
            "error": self.error,
        }


Listener = Callable[[PlaybookView], None]


class AnalyticsFacade:
    def __init__(
        self,
        settings: Optional[RsiSettings] = None,
        engine: Optional[ConfluenceEngine] = None,
        symbol: str = SYMBOL
    ):
        self.symbol = symbol
        self.engine = engine
        self._settings = settings or load_default_rsi_settings()
        self._bars: Tuple[PriceBar, ...] = ()
        self._opening_range: Optional[OpeningRange] = None
        self._levels: Optional[Levels] = None
        self._view: Optional[PlaybookView] = None
        self._listeners: List[Listener] = []

    @property
    def settings(self) -> RsiSettings:
        return self._settings

    @property
    def view(self) -> Optional[PlaybookView]:
        return self._view

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load_bars(self, bars: Sequence[PriceBar]) -> Optional[PlaybookView]:
        """
        Replace the session's bars and recompute.

        When the bars cannot form an opening range the previous view stays
        in place, carrying the failure message for the error banner.
        """
        try:
            opening_range = derive_opening_range(bars)
        except InsufficientDataError as e:
            logger.error(f"Rejected {len(bars)} bars for {self.symbol}: {e}")
            if self._view is not None:
                self._publish(replace(self._view, error=str(e)))
            else:
                raise
            return self._view

        self._bars = tuple(bars)
        self._opening_range = opening_range
        self._levels = project_levels(opening_range.high, opening_range.low)
        return self.refresh()

    def update_settings(self, **changes: Any) -> Optional[PlaybookView]:
        """Apply user setting changes (clamped into range) and recompute."""
        self._settings = self._settings.with_changes(**changes)
        logger.info(f"RSI settings changed: {self._settings.to_dict()}")
        return self.refresh()

    def refresh(self) -> Optional[PlaybookView]:
        if self._opening_range is None or self._levels is None:
            return None

        rsi_series = calculate_rsi_series(self._bars, self._settings)
        report = generate_insights(
            self._bars, self._levels, self._opening_range, rsi_series, self._settings,
            engine=self.engine,
        )
        view = PlaybookView(
            symbol=self.symbol,
            settings=self._settings,
            bars=self._bars,
            opening_range=self._opening_range,
            levels=self._levels,
            market=summarize_market(self._bars),
            rsi_series=tuple(rsi_series),
            latest_rsi=find_latest_rsi(rsi_series),
            report=report,
        )
        self._publish(view)
        return view

    def _publish(self, view: PlaybookView) -> None:
        self._view = view
        for listener in list(self._listeners):
            listener(view)
