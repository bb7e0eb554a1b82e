import logging
import time
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from albapay.config.settings import HOLIDAY_CACHE_TTL_SECONDS
from albapay.models.shift import Shift

logger = logging.getLogger(__name__)


class HolidayCache:
    """Public-holiday facts by date, with expiry.

    The cache is owned by whoever creates it. ``lookup`` answers whether a date
    is an official holiday (e.g. a calendar service query) and is only called
    for dates that are missing or stale.
    """

    def __init__(self, lookup: Callable[[date], bool],
                 ttl_seconds: int = HOLIDAY_CACHE_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")
        self.lookup = lookup
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[date, Tuple[bool, float]] = {}

    def __len__(self):
        return len(self._entries)

    def get(self, day: date) -> Optional[bool]:
        """Cached fact if still fresh, else None"""
        entry = self._entries.get(day)
        if entry is None:
            return None
        value, stored_at = entry
        if self.clock() - stored_at >= self.ttl_seconds:
            del self._entries[day]
            return None
        return value

    def is_holiday(self, day: date) -> bool:
        cached = self.get(day)
        if cached is not None:
            return cached

        value = bool(self.lookup(day))
        self._entries[day] = (value, self.clock())
        logger.debug("Holiday lookup %s -> %s", day.isoformat(), value)
        return value

    def invalidate(self, day: Optional[date] = None):
        if day is None:
            self._entries.clear()
        else:
            self._entries.pop(day, None)

    def annotate(self, shifts: Iterable[Shift]) -> List[Shift]:
        """Copies of ``shifts`` with unset holiday flags filled in"""
        return [
            s if s.is_holiday is not None else s.with_holiday(self.is_holiday(s.date))
            for s in shifts
        ]
