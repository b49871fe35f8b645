"""Timestamps written in the first column of the trajectory file."""
import time
from datetime import datetime, timezone
from typing import Callable, Literal, Optional

from config import TIMESTAMP_MODE

TimestampMode = Literal['wall_clock', 'monotonic']


def wall_clock_ms(now: datetime) -> int:
    """
    Encode a UTC time as (minute * 60 + second) seconds plus milliseconds.

    The hour is discarded, so values wrap back to 0 at every hour boundary.
    Existing recordings use this encoding.
    """
    return (now.minute * 60 + now.second) * 1000 + now.microsecond // 1000


class TimestampClock:
    """
    Produce integer millisecond timestamps for recorded frames.

    Modes:
        wall_clock: see wall_clock_ms(), compatible with older files
        monotonic: milliseconds since reset(), never decreases
    """

    def __init__(self,
                 mode: TimestampMode = TIMESTAMP_MODE,
                 utc_now: Optional[Callable[[], datetime]] = None,
                 monotonic: Optional[Callable[[], float]] = None):
        if mode not in ('wall_clock', 'monotonic'):
            raise ValueError(f"Unknown timestamp mode: {mode}")
        self.mode = mode
        self._utc_now = utc_now or (lambda: datetime.now(timezone.utc))
        self._monotonic = monotonic or time.monotonic
        self._origin = self._monotonic()

    def reset(self):
        """Restart the monotonic origin (called when recording starts)."""
        self._origin = self._monotonic()

    def now_ms(self) -> int:
        if self.mode == 'wall_clock':
            return wall_clock_ms(self._utc_now())
        return int((self._monotonic() - self._origin) * 1000)
