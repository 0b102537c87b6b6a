"""
Bar Contracts
-------------
Frozen price bar record shared by every analytics component.
"""
from dataclasses import dataclass, asdict
from typing import Iterable, List

import pandas as pd

BAR_COLUMNS = ["time", "open", "high", "low", "close", "volume"]


@dataclass(frozen=True)
class PriceBar:
    time: int  # epoch milliseconds
    open: float
    high: float
    low: float
    close: float
    volume: float


def bars_to_df(bars: Iterable[PriceBar]) -> pd.DataFrame:
    """Tabulate bars in input order. An empty input keeps the OHLCV columns."""
    rows = [asdict(bar) for bar in bars]
    return pd.DataFrame(rows, columns=BAR_COLUMNS)


def df_to_bars(df: pd.DataFrame) -> List[PriceBar]:
    return [
        PriceBar(
            time=int(row.time),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
        )
        for row in df[BAR_COLUMNS].itertuples(index=False)
    ]
