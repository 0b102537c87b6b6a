"""
Analytical Snapshots & Models
-----------------------------
Immutable representations of oscillator state, projected levels and insights.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

from playbook.analytics.indicators.smoothing import SmoothingMethod
from playbook.config.settings import OVERBOUGHT_BOUNDS, OVERSOLD_BOUNDS, PERIOD_BOUNDS
from playbook.errors import InvalidSettingsError


class Bias(str, Enum):
    BULLISH = "bullish"
    NEUTRAL = "neutral"
    BEARISH = "bearish"


def _clamp(value: float, bounds: Tuple[float, float]) -> float:
    low, high = bounds
    return min(max(value, low), high)


def _check_range(name: str, value: float, bounds: Tuple[float, float]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise InvalidSettingsError(f"{name} must be between {low:g} and {high:g}, got {value}")


@dataclass(frozen=True)
class RsiSettings:
    period: int = 14
    overbought: float = 70.0
    oversold: float = 30.0
    smoothing: SmoothingMethod = SmoothingMethod.RMA

    def __post_init__(self):
        if isinstance(self.smoothing, str) and not isinstance(self.smoothing, SmoothingMethod):
            try:
                object.__setattr__(self, "smoothing", SmoothingMethod(self.smoothing.lower()))
            except ValueError:
                raise InvalidSettingsError(f"Unknown smoothing method: {self.smoothing!r}") from None
        if isinstance(self.period, bool) or int(self.period) != self.period:
            raise InvalidSettingsError(f"period must be an integer, got {self.period!r}")
        object.__setattr__(self, "period", int(self.period))
        _check_range("period", self.period, PERIOD_BOUNDS)
        _check_range("overbought", self.overbought, OVERBOUGHT_BOUNDS)
        _check_range("oversold", self.oversold, OVERSOLD_BOUNDS)

    @classmethod
    def clamped(
        cls,
        period: float = 14,
        overbought: float = 70.0,
        oversold: float = 30.0,
        smoothing: Union[SmoothingMethod, str] = SmoothingMethod.RMA,
    ) -> "RsiSettings":
        """Build settings from raw user input, pulling each number into its range."""
        return cls(
            period=int(_clamp(float(period), PERIOD_BOUNDS)),
            overbought=float(_clamp(float(overbought), OVERBOUGHT_BOUNDS)),
            oversold=float(_clamp(float(oversold), OVERSOLD_BOUNDS)),
            smoothing=smoothing,
        )

    def with_changes(self, **changes: Any) -> "RsiSettings":
        unknown = set(changes) - {"period", "overbought", "oversold", "smoothing"}
        if unknown:
            raise InvalidSettingsError(f"Unknown RSI settings: {sorted(unknown)}")
        merged = {
            "period": self.period,
            "overbought": self.overbought,
            "oversold": self.oversold,
            "smoothing": self.smoothing,
        }
        merged.update(changes)
        return RsiSettings.clamped(**merged)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "overbought": self.overbought,
            "oversold": self.oversold,
            "smoothing": self.smoothing.value,
        }


@dataclass(frozen=True)
class OscillatorPoint:
    time: int
    value: float


@dataclass(frozen=True)
class OpeningRange:
    high: float
    low: float
    start: int
    end: int

    @property
    def midpoint(self) -> float:
        return (self.high + self.low) / 2


@dataclass(frozen=True)
class Levels:
    resistances: Tuple[float, ...]
    supports: Tuple[float, ...]

    def to_dict(self) -> Dict[str, List[float]]:
        return {"resistances": list(self.resistances), "supports": list(self.supports)}


@dataclass(frozen=True)
class Insight:
    title: str
    detail: str
    severity: Bias

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "detail": self.detail, "severity": self.severity.value}


@dataclass(frozen=True)
class InsightReport:
    insights: Tuple[Insight, ...] = ()
    confidence: float = 0.0  # 0.0 to 100.0
    bias: Bias = Bias.NEUTRAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "insights": [insight.to_dict() for insight in self.insights],
            "confidence": self.confidence,
            "bias": self.bias.value,
        }


@dataclass(frozen=True)
class MarketSummary:
    last: float
    change: float
    change_percent: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)
