# OOP boundary for external i/o
# all http/keys live here, so the rest of the code is pure and testable
# use a thread-local session per worker thread, the dashboard fetches from a ThreadPoolExecutor

from __future__ import annotations
import logging
import threading
from typing import Any, Dict, Optional, Tuple
import requests

from .config import Settings, load_settings
from .models import LocationQuery

logger = logging.getLogger(__name__)


class WeatherAPIError(RuntimeError):
    # base error type used to propagate clear messages from this layer
    pass


class MissingParameter(WeatherAPIError):
    # caller must supply a city or a lat/lon pair
    pass


class UpstreamNotFound(WeatherAPIError):
    # provider answered 404, usually an unknown city
    pass


class UpstreamFailure(WeatherAPIError):
    # network error, 5xx or a body we could not decode
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class WeatherAPIClient:
    # this class encapsulates provider details like base URL, params and auth
    FORECAST_PATH = "forecast"
    CURRENT_PATH = "weather"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        user_agent: str = "weatherdash/0.1",
    ):
        self.settings = settings or load_settings()
        self.user_agent = user_agent

        # each worker thread lazily obtains its own session through _session()
        self._local = threading.local()

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent, "Accept": "application/json"})
        return s

    def _session(self) -> requests.Session:
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
        return sess

    def forward(self, path: str, params: Dict[str, str]) -> Tuple[int, Any]:
        # raw passthrough used by the proxy: provider status and decoded json, no interpretation
        url = f"{self.settings.base_url}/{path}"
        full_params = dict(params)
        full_params.update({"appid": self.settings.api_key, "units": self.settings.units})

        logger.debug("GET %s %s", url, params)
        try:
            resp = self._session().get(url, params=full_params, timeout=self.settings.timeout)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise UpstreamFailure(f"Request error for {path}: {exc}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamFailure(f"Invalid JSON from {path} (HTTP {resp.status_code})", resp.status_code) from exc

        return resp.status_code, data

    def _get(self, path: str, query: LocationQuery) -> Dict[str, Any]:
        if not query.is_complete:
            raise MissingParameter("city or coordinates required")

        status, data = self.forward(path, query.params())

        if status == 404:
            raise UpstreamNotFound(f"City not found: {query}")
        if status >= 400:
            # include the provider message to speed up triage
            message = data.get("message", "") if isinstance(data, dict) else ""
            raise UpstreamFailure(f"HTTP {status} for {query!s}: {message}", status)
        if not isinstance(data, dict):
            raise UpstreamFailure(f"Unexpected API shape for {query!s}", status)
        return data

    def get_forecast(self, query: LocationQuery) -> Dict[str, Any]:
        # 5 day / 3 hour forecast payload, shape is validated by service.parse_forecast_set
        return self._get(self.FORECAST_PATH, query)

    def get_current(self, query: LocationQuery) -> Dict[str, Any]:
        return self._get(self.CURRENT_PATH, query)
