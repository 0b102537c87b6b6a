"""
Smoothing Methods
-----------------
The three averaging rules the RSI can run its gains and losses through.
"""
from enum import Enum
from typing import Optional

import pandas as pd


class SmoothingMethod(str, Enum):
    RMA = "rma"
    EMA = "ema"
    SMA = "sma"

    @property
    def label(self) -> str:
        return {
            SmoothingMethod.RMA: "Wilder (RMA)",
            SmoothingMethod.EMA: "Exponential (EMA)",
            SmoothingMethod.SMA: "Simple (SMA)",
        }[self]

    def alpha(self, period: int) -> Optional[float]:
        """Decay factor of the recursive update, None for the windowed mean."""
        if self is SmoothingMethod.EMA:
            return 2.0 / (period + 1)
        if self is SmoothingMethod.RMA:
            return 1.0 / period
        return None

    def smooth(self, values: pd.Series, period: int) -> pd.Series:
        """
        Smooth a gain or loss series.

        The first output is the simple mean of the first `period` values and
        sits at the label of the `period`-th value. Each later output applies
        this method's update rule to the next value.

        Args:
            values: Non-negative per-bar gains or losses
            period: Lookback length

        Returns:
            Series of len(values) - period + 1 smoothed values (empty when
            fewer than `period` values are supplied)
        """
        if len(values) < period:
            return pd.Series(dtype=float)

        if self is SmoothingMethod.SMA:
            return values.rolling(window=period, min_periods=period).mean().iloc[period - 1:]

        seeded = values.iloc[period - 1:].astype(float).copy()
        seeded.iloc[0] = values.iloc[:period].mean()
        # adjust=False gives y[t] = (1 - alpha) * y[t-1] + alpha * x[t] from the seed
        return seeded.ewm(alpha=self.alpha(period), adjust=False).mean()
