# orchestration: owns the navigator, runs fetches in the background and builds the view model
# a newer search supersedes any in-flight one, stale results are dropped instead of applied

from __future__ import annotations
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .client import MissingParameter, UpstreamNotFound, WeatherAPIClient, WeatherAPIError
from .messages import describe
from .models import ForecastSample, LocationQuery
from .navigator import DayNavigator
from .service import fetch_forecast

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "❌ City not found! Please try again."
MISSING_QUERY_MESSAGE = "Please enter a city or coordinates."
FETCH_FAILED_MESSAGE = "⚠ Unable to fetch weather. Try again."
NO_DATA_MESSAGE = "No forecast data available for this location."


@dataclass(frozen=True)
class DashboardView:
    # everything a renderer needs, nothing it has to compute
    location: Optional[str]
    label: Optional[str]
    sample: Optional[ForecastSample]
    message: Optional[str]
    can_go_previous: bool
    can_go_next: bool
    loading: bool
    status: Optional[str]

    @property
    def has_data(self) -> bool:
        return self.sample is not None


def error_message(exc: Exception) -> str:
    if isinstance(exc, UpstreamNotFound):
        return NOT_FOUND_MESSAGE
    if isinstance(exc, MissingParameter):
        return MISSING_QUERY_MESSAGE
    return FETCH_FAILED_MESSAGE


class Dashboard:
    def __init__(
        self,
        client: WeatherAPIClient,
        navigator: Optional[DayNavigator] = None,
        executor: Optional[Executor] = None,
    ):
        self.client = client
        self.navigator = navigator or DayNavigator()
        # None means one short-lived worker per search
        self._pool = executor
        self._lock = threading.Lock()
        self._generation = 0
        self._pending: Optional[Future] = None
        self._loading = False
        self._status: Optional[str] = None

    def search(self, query: LocationQuery) -> Future:
        # returns the future so callers (cli, tests) can wait for this particular search
        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._pending is not None and self._pending.cancel():
                logger.debug("Cancelled queued fetch before it started")
            self._loading = True
            self._status = None
            self._pending = self._submit(generation, query)
            return self._pending

    def _submit(self, generation: int, query: LocationQuery) -> Future:
        if self._pool is not None:
            return self._pool.submit(self._run, generation, query)
        # stale fetches keep their own threads busy, the new search never waits for a free slot
        worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="weatherdash")
        try:
            return worker.submit(self._run, generation, query)
        finally:
            worker.shutdown(wait=False)

    def load(self, query: LocationQuery) -> DashboardView:
        # blocking convenience for synchronous callers
        self.search(query).result()
        return self.view()

    def _run(self, generation: int, query: LocationQuery) -> bool:
        try:
            forecast = fetch_forecast(self.client, query)
        except (WeatherAPIError, ValueError) as exc:
            logger.warning("Forecast fetch for %s failed: %s", query, exc)
            return self._apply(generation, None, error_message(exc))
        return self._apply(generation, forecast, NO_DATA_MESSAGE if forecast.is_empty else None)

    def _apply(self, generation: int, forecast, status: Optional[str]) -> bool:
        with self._lock:
            if generation != self._generation:
                # a newer search owns the state now
                logger.debug("Dropping stale result for generation %d", generation)
                return False
            if forecast is None or forecast.is_empty:
                self.navigator.clear()
                self._status = status
            else:
                self.navigator.load(forecast)
                self._status = None
            self._loading = False
            return True

    def next(self) -> DashboardView:
        with self._lock:
            self.navigator.next()
        return self.view()

    def previous(self) -> DashboardView:
        with self._lock:
            self.navigator.previous()
        return self.view()

    def view(self) -> DashboardView:
        with self._lock:
            nav = self.navigator
            sample = nav.current_sample()
            return DashboardView(
                location=nav.forecast.location.name if nav.has_data else None,
                label=nav.current_label(),
                sample=sample,
                message=describe(sample.condition, sample.is_daytime) if sample else None,
                can_go_previous=nav.can_go_previous,
                can_go_next=nav.can_go_next,
                loading=self._loading,
                status=self._status,
            )

    def close(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=False)

    def __enter__(self) -> "Dashboard":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
