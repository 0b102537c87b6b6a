"""
CSV Bar Loader
--------------
Reads one-minute bars from disk and hands the analytics core a clean,
ascending, de-duplicated sequence.
"""
import logging
from pathlib import Path
from typing import List, Union

import numpy as np
import pandas as pd

from playbook.errors import DataFormatError
from playbook.events import BAR_COLUMNS, PriceBar, df_to_bars
from playbook.utils.market_session import MarketSession

logger = logging.getLogger(__name__)

PRICE_COLUMNS = ["open", "high", "low", "close", "volume"]

# Numeric times below this are epoch seconds rather than milliseconds
_EPOCH_MS_THRESHOLD = 1e11


def _normalize_time(column: pd.Series) -> pd.Series:
    """Epoch seconds, epoch milliseconds or datetime strings to epoch ms."""
    numeric = pd.to_numeric(column, errors="coerce")
    times = numeric.where(numeric >= _EPOCH_MS_THRESHOLD, numeric * 1000).astype(float)

    # Only cells that are not numbers get the datetime parser; blanks stay NaN
    text = column[numeric.isna() & column.notna()]
    if not text.empty:
        parsed = pd.to_datetime(text.astype(str), utc=True, errors="coerce")
        epoch = pd.Timestamp("1970-01-01", tz="UTC")
        times.loc[text.index] = ((parsed - epoch) // pd.Timedelta(milliseconds=1)).astype(float)
    return times


def bars_from_frame(df: pd.DataFrame) -> List[PriceBar]:
    """
    Validate a raw OHLCV frame into bars.

    Accepts a 'time' or 'timestamp' column. Rows with missing or non-finite
    values are dropped, then bars are sorted by time and duplicate
    timestamps keep their first occurrence.

    Raises:
        DataFormatError: required columns are missing
    """
    frame = df.rename(columns=str.lower)
    if "time" not in frame.columns and "timestamp" in frame.columns:
        frame = frame.rename(columns={"timestamp": "time"})

    missing = [col for col in BAR_COLUMNS if col not in frame.columns]
    if missing:
        raise DataFormatError(f"Bar data is missing columns: {missing}")

    frame = frame[BAR_COLUMNS].copy()
    frame["time"] = _normalize_time(frame["time"])
    for col in PRICE_COLUMNS:
        frame[col] = pd.to_numeric(frame[col], errors="coerce")

    finite = np.isfinite(frame.astype(float)).all(axis=1)
    dropped = int((~finite).sum())
    if dropped:
        logger.warning(f"Dropped {dropped} bars with missing or non-finite values")
    frame = frame[finite]

    frame = frame.sort_values("time", kind="mergesort").drop_duplicates(subset="time", keep="first")
    frame["time"] = frame["time"].astype("int64")

    bars = df_to_bars(frame)
    if bars:
        off_hours = sum(1 for bar in bars if not MarketSession.for_epoch_ms(bar.time).contains_ms(bar.time))
        if off_hours:
            logger.info(f"{off_hours} of {len(bars)} bars fall outside NSE session hours")
    return bars


def load_bars_csv(path: Union[str, Path]) -> List[PriceBar]:
    path = Path(path)
    if not path.exists():
        raise DataFormatError(f"Bar file not found: {path}")

    try:
        df = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataFormatError(f"Could not parse {path}: {e}") from e

    bars = bars_from_frame(df)
    logger.info(f"Loaded {len(bars)} bars from {path}")
    return bars
