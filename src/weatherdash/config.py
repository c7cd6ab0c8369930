# runtime settings, read from the environment (and a local .env file during development)

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_UNITS = "metric"
DEFAULT_TIMEOUT = 5.0
DEFAULT_CITY = "Mumbai"
DEFAULT_PORT = 3000


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    units: str = DEFAULT_UNITS
    timeout: float = DEFAULT_TIMEOUT
    default_city: str = DEFAULT_CITY
    port: int = DEFAULT_PORT

    def __repr__(self) -> str:
        # keep the key out of logs and tracebacks
        return (
            f"Settings(base_url={self.base_url!r}, units={self.units!r}, timeout={self.timeout}, "
            f"default_city={self.default_city!r}, port={self.port})"
        )


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number (got {raw!r})") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive (got {raw!r})")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> Settings:
    # in production the variables are injected by the platform, .env is a local convenience
    if env is None:
        if use_dotenv:
            load_dotenv()
        env = os.environ

    api_key = env.get("WEATHER_API_KEY") or env.get("OPENWEATHER_API_KEY")
    if not api_key:
        # fail early, a missing key otherwise surfaces as a confusing 401 from the provider
        raise ConfigError("WEATHER_API_KEY not set")

    return Settings(
        api_key=api_key,
        base_url=(env.get("WEATHER_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        units=env.get("WEATHER_UNITS") or DEFAULT_UNITS,
        timeout=_number(env, "WEATHER_TIMEOUT", DEFAULT_TIMEOUT, float),
        default_city=env.get("WEATHER_DEFAULT_CITY") or DEFAULT_CITY,
        port=_number(env, "PORT", DEFAULT_PORT, int),
    )
