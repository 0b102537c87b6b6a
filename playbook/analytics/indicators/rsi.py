"""
Relative Strength Index (RSI)
"""
import logging
from typing import List, Optional, Sequence

import pandas as pd

from playbook.analytics.indicators.base import BaseIndicator
from playbook.analytics.indicators.smoothing import SmoothingMethod
from playbook.analytics.models import OscillatorPoint, RsiSettings
from playbook.events import PriceBar, bars_to_df

logger = logging.getLogger(__name__)


class RSI(BaseIndicator):
    def __init__(self, period: int = 14, smoothing: SmoothingMethod = SmoothingMethod.RMA):
        super().__init__(f"RSI_{period}_{smoothing.value}", min_bars=period + 1)
        self.period = period
        self.smoothing = smoothing

    def calculate(self, df: pd.DataFrame, **kwargs) -> pd.Series:
        """
        Values are labelled by bar position; the first `period` bars are
        warm-up and carry no value. A window with zero average loss reads
        exactly 100.
        """
        if not self.has_enough(df):
            return pd.Series(dtype=float)

        delta = df['close'].astype(float).diff().iloc[1:]
        gain = delta.where(delta > 0, 0.0)
        loss = (-delta).where(delta < 0, 0.0)

        avg_gain = self.smoothing.smooth(gain, self.period)
        avg_loss = self.smoothing.smooth(loss, self.period)

        rs = avg_gain / avg_loss
        rsi = 100 - (100 / (1 + rs))
        return rsi.where(avg_loss != 0, 100.0)


def calculate_rsi_series(bars: Sequence[PriceBar], settings: RsiSettings) -> List[OscillatorPoint]:
    """
    Oscillator series for the bars; point i belongs to bar i + period.

    Fewer than period + 1 bars give an empty list.
    """
    indicator = RSI(settings.period, settings.smoothing)
    df = bars_to_df(bars)
    values = indicator.calculate(df)
    if values.empty:
        logger.debug(f"{indicator.name}: {len(df)} bars, need {indicator.min_bars}")
        return []

    times = df['time'].loc[values.index]
    return [
        OscillatorPoint(time=int(time), value=float(value))
        for time, value in zip(times, values)
    ]


def find_latest_rsi(series: Sequence[OscillatorPoint]) -> Optional[float]:
    if not series:
        return None
    return series[-1].value
