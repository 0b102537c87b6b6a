"""
Market Session Utility
----------------------
NSE session clock helpers for turning epoch-millisecond bar times into
exchange-local wall time.
"""

from datetime import datetime, time
import pytz


class MarketSession:
    """
    Single NSE trading day.

    Usage:
        from playbook.utils import MarketSession

        session = MarketSession.for_epoch_ms(bar.time)
        if session.contains_ms(bar.time):
            ...
    """

    IST = pytz.timezone("Asia/Kolkata")

    # Session times (IST)
    SESSION_START = time(9, 15)  # Market open
    SESSION_END = time(15, 30)  # Market close

    def __init__(self, session_date):
        self.session_date = session_date
        self._start = self.IST.localize(datetime.combine(session_date, self.SESSION_START))
        self._end = self.IST.localize(datetime.combine(session_date, self.SESSION_END))

    @classmethod
    def to_local(cls, epoch_ms: int) -> datetime:
        """Epoch milliseconds as an IST-aware datetime."""
        return datetime.fromtimestamp(epoch_ms / 1000, tz=pytz.utc).astimezone(cls.IST)

    @classmethod
    def format_clock(cls, epoch_ms: int, fmt: str = "%H:%M") -> str:
        return cls.to_local(epoch_ms).strftime(fmt)

    @classmethod
    def for_epoch_ms(cls, epoch_ms: int) -> "MarketSession":
        return cls(cls.to_local(epoch_ms).date())

    def contains_ms(self, epoch_ms: int) -> bool:
        """True if the timestamp falls inside regular trading hours."""
        return self._start <= self.to_local(epoch_ms) < self._end

    @property
    def start(self) -> datetime:
        return self._start

    @property
    def end(self) -> datetime:
        return self._end
