# day pagination over a loaded forecast
# pure state machine: no i/o here, fetching belongs to the dashboard

from __future__ import annotations
import calendar
from datetime import date
from typing import List, Optional

from .models import DayBucket, ForecastSample, ForecastSet
from .service import day_buckets, select_representative


class DayNavigator:
    """Cursor over the days of a forecast.

    Without data every operation is a no-op that returns None. Once a
    non-empty ForecastSet is loaded the cursor always points at an existing
    day; moving past either end leaves it where it is.
    """

    def __init__(self) -> None:
        self.forecast: Optional[ForecastSet] = None
        self._buckets: List[DayBucket] = []
        self.cursor = 0

    @property
    def has_data(self) -> bool:
        return bool(self._buckets)

    @property
    def day_count(self) -> int:
        return len(self._buckets)

    @property
    def days(self) -> List[date]:
        return [b.day for b in self._buckets]

    @property
    def can_go_previous(self) -> bool:
        return self.has_data and self.cursor > 0

    @property
    def can_go_next(self) -> bool:
        return self.has_data and self.cursor < self.day_count - 1

    def load(self, forecast: Optional[ForecastSet]) -> Optional[ForecastSample]:
        # null or empty input means "nothing to display", never an error
        if forecast is None or forecast.is_empty:
            return None
        self.forecast = forecast
        self._buckets = day_buckets(forecast.samples)
        self.cursor = 0
        return self.current_sample()

    def clear(self) -> None:
        self.forecast = None
        self._buckets = []
        self.cursor = 0

    def next(self) -> Optional[ForecastSample]:
        if not self.can_go_next:
            return None
        self.cursor += 1
        return self.current_sample()

    def previous(self) -> Optional[ForecastSample]:
        if not self.can_go_previous:
            return None
        self.cursor -= 1
        return self.current_sample()

    def current_bucket(self) -> Optional[DayBucket]:
        if not self.has_data:
            return None
        return self._buckets[self.cursor]

    def current_day(self) -> Optional[date]:
        bucket = self.current_bucket()
        return bucket.day if bucket else None

    def current_sample(self) -> Optional[ForecastSample]:
        bucket = self.current_bucket()
        if bucket is None:
            return None
        return select_representative(bucket.samples)

    def current_label(self) -> Optional[str]:
        day = self.current_day()
        if day is None:
            return None
        if self.cursor == 0:
            return "Today"
        return calendar.day_name[day.weekday()]
