"""
Confluence Engine
-----------------
Fuses the oscillator, the opening range and the projected level ladder into
a ranked list of insights and a single conviction score.

Each rule that fires carries a weight in (0, 1). Weights of one direction
combine as independent evidence, strength = 1 - prod(1 - w), so every extra
agreeing rule raises that side's strength but never past 1. Conviction is
the gap between the bullish and bearish strengths scaled to 0..100, which
keeps a conflicted board below the stronger side on its own.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from playbook.analytics.indicators.rsi import find_latest_rsi
from playbook.analytics.models import (
    Bias,
    Insight,
    InsightReport,
    Levels,
    OpeningRange,
    OscillatorPoint,
    RsiSettings,
)
from playbook.config.settings import LEVEL_PROXIMITY_PCT
from playbook.events import PriceBar

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS: Dict[str, float] = {
    "rsi_extreme": 0.35,
    "range_break": 0.30,
    "level_test": 0.25,
}


@dataclass(frozen=True)
class FiredRule:
    name: str
    insight: Insight
    weight: float


class ConfluenceEngine:
    """
    Rule battery evaluated against the latest bar. Holds configuration only,
    so one instance can serve any number of calls.
    """

    def __init__(
        self,
        weights: Optional[Mapping[str, float]] = None,
        proximity_pct: float = LEVEL_PROXIMITY_PCT
    ):
        merged = dict(DEFAULT_WEIGHTS)
        merged.update(weights or {})
        unknown = set(merged) - set(DEFAULT_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown rule weights: {sorted(unknown)}")
        for name, weight in merged.items():
            if not 0.0 < weight < 1.0:
                raise ValueError(f"Weight for {name} must be inside (0, 1), got {weight}")
        if proximity_pct < 0:
            raise ValueError("proximity_pct must not be negative")

        self.weights = merged
        self.proximity_pct = proximity_pct

    def synthesize(
        self,
        bars: Sequence[PriceBar],
        levels: Levels,
        opening_range: OpeningRange,
        rsi_series: Sequence[OscillatorPoint],
        settings: RsiSettings
    ) -> InsightReport:
        if not bars:
            return InsightReport()

        close = bars[-1].close
        latest_rsi = find_latest_rsi(rsi_series)

        fired: List[FiredRule] = []
        fired.extend(self._oscillator_rules(latest_rsi, settings))
        fired.extend(self._range_rules(close, opening_range))
        fired.extend(self._level_rules(close, levels))

        report = self._aggregate(fired)
        logger.debug(
            f"Confluence at close={close} rsi={latest_rsi}: "
            f"{[rule.name for rule in fired]} -> {report.bias.value} {report.confidence:.1f}"
        )
        return report

    # Rules

    def _oscillator_rules(self, rsi_value: Optional[float], settings: RsiSettings) -> List[FiredRule]:
        if rsi_value is None:
            return []

        weight = self.weights["rsi_extreme"]
        if rsi_value >= settings.overbought:
            return [FiredRule("rsi_overbought", Insight(
                title="RSI overbought",
                detail=(
                    f"RSI {rsi_value:.2f} is at or above the {settings.overbought:g} threshold. "
                    f"Momentum is stretched, watch for mean reversion."
                ),
                severity=Bias.BEARISH,
            ), weight)]
        if rsi_value <= settings.oversold:
            return [FiredRule("rsi_oversold", Insight(
                title="RSI oversold",
                detail=(
                    f"RSI {rsi_value:.2f} is at or below the {settings.oversold:g} threshold. "
                    f"Selling looks exhausted, watch for a bounce."
                ),
                severity=Bias.BULLISH,
            ), weight)]
        return []

    def _range_rules(self, close: float, opening_range: OpeningRange) -> List[FiredRule]:
        weight = self.weights["range_break"]
        if close > opening_range.high:
            return [FiredRule("range_breakout", Insight(
                title="Opening range breakout",
                detail=f"Price {close:.2f} is holding above the opening range high of {opening_range.high:.2f}.",
                severity=Bias.BULLISH,
            ), weight)]
        if close < opening_range.low:
            return [FiredRule("range_breakdown", Insight(
                title="Opening range breakdown",
                detail=f"Price {close:.2f} is holding below the opening range low of {opening_range.low:.2f}.",
                severity=Bias.BEARISH,
            ), weight)]
        return []

    def _level_rules(self, close: float, levels: Levels) -> List[FiredRule]:
        weight = self.weights["level_test"]
        fired = []

        resistance = self._nearest_within(close, levels.resistances)
        if resistance is not None:
            index, level = resistance
            fired.append(FiredRule("resistance_test", Insight(
                title=f"Testing resistance A{index + 1}",
                detail=f"Price {close:.2f} is pressing into A{index + 1} at {level:.2f}. Expect supply here.",
                severity=Bias.BEARISH,
            ), weight))

        support = self._nearest_within(close, levels.supports)
        if support is not None:
            index, level = support
            fired.append(FiredRule("support_test", Insight(
                title=f"Testing support B{index + 1}",
                detail=f"Price {close:.2f} is leaning on B{index + 1} at {level:.2f}. Expect demand here.",
                severity=Bias.BULLISH,
            ), weight))

        return fired

    def _nearest_within(self, price: float, ladder: Iterable[float]) -> Optional[Tuple[int, float]]:
        best = None
        best_distance = None
        for index, level in enumerate(ladder):
            distance = abs(price - level)
            if distance > abs(level) * self.proximity_pct:
                continue
            if best_distance is None or distance < best_distance:
                best, best_distance = (index, level), distance
        return best

    # Aggregation

    @staticmethod
    def _strength(weights: Iterable[float]) -> float:
        remaining = 1.0
        for weight in weights:
            remaining *= 1.0 - weight
        return 1.0 - remaining

    def _aggregate(self, fired: List[FiredRule]) -> InsightReport:
        if not fired:
            return InsightReport()

        bullish = [rule for rule in fired if rule.insight.severity is Bias.BULLISH]
        bearish = [rule for rule in fired if rule.insight.severity is Bias.BEARISH]

        net = self._strength(r.weight for r in bullish) - self._strength(r.weight for r in bearish)
        confidence = 100.0 * abs(net)

        overall_bias = Bias.NEUTRAL
        if net > 0: overall_bias = Bias.BULLISH
        elif net < 0: overall_bias = Bias.BEARISH

        # heaviest evidence first; rule order breaks ties
        ranked = [rule.insight for _, rule in sorted(enumerate(fired), key=lambda pair: (-pair[1].weight, pair[0]))]
        if bullish and bearish:
            ranked.append(Insight(
                title="Mixed signals",
                detail=(
                    f"{len(bullish)} bullish and {len(bearish)} bearish conditions are active. "
                    f"Conviction is reduced until one side gives way."
                ),
                severity=Bias.NEUTRAL,
            ))

        return InsightReport(insights=tuple(ranked), confidence=confidence, bias=overall_bias)


_default_engine = ConfluenceEngine()


def generate_insights(
    bars: Sequence[PriceBar],
    levels: Levels,
    opening_range: OpeningRange,
    rsi_series: Sequence[OscillatorPoint],
    settings: RsiSettings,
    engine: Optional[ConfluenceEngine] = None
) -> InsightReport:
    """Run the rule battery with the default engine unless one is supplied."""
    return (engine or _default_engine).synthesize(bars, levels, opening_range, rsi_series, settings)
