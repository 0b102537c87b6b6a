"""
Base Indicator Class
"""
from abc import ABC, abstractmethod

import pandas as pd


class BaseIndicator(ABC):
    def __init__(self, name: str, min_bars: int = 1):
        self.name = name
        self.min_bars = min_bars

    def has_enough(self, df: pd.DataFrame) -> bool:
        """True when the frame holds enough bars to emit at least one value."""
        return len(df) >= self.min_bars

    @abstractmethod
    def calculate(self, df: pd.DataFrame, **kwargs) -> pd.Series:
        """
        Calculate the indicator value(s).

        Args:
            df: Bar DataFrame, oldest bar first
            **kwargs: Additional parameters for the calculation

        Returns:
            Series labelled by the position of the bar each value belongs to.
            Bars still inside the warm-up window get no label at all.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"
