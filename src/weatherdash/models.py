# models to keep data shapes explicit and reusable across the app
# everything here is an immutable value object, the navigator and dashboard own the mutable state

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple


class ConditionCode(Enum):
    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    DRIZZLE = "Drizzle"
    THUNDERSTORM = "Thunderstorm"
    SNOW = "Snow"
    MIST = "Mist"
    UNKNOWN = "Unknown"

    @classmethod
    def from_provider(cls, main: Optional[str]) -> "ConditionCode":
        # provider sends weather[0].main as free text, anything we do not know is UNKNOWN
        if not main:
            return cls.UNKNOWN
        return _PROVIDER_CONDITIONS.get(main.strip().lower(), cls.UNKNOWN)


# openweathermap 7xx "atmosphere" group, squall and tornado are deliberately left unmapped
_MIST_FAMILY = ("mist", "smoke", "haze", "dust", "fog", "sand", "ash")

_PROVIDER_CONDITIONS: Dict[str, ConditionCode] = {
    "clear": ConditionCode.CLEAR,
    "clouds": ConditionCode.CLOUDS,
    "rain": ConditionCode.RAIN,
    "drizzle": ConditionCode.DRIZZLE,
    "thunderstorm": ConditionCode.THUNDERSTORM,
    "snow": ConditionCode.SNOW,
    **{name: ConditionCode.MIST for name in _MIST_FAMILY},
}


def is_daytime_icon(icon_id: str) -> bool:
    # icon ids look like "01d" / "01n", the suffix is our only day/night source
    return not (icon_id or "").strip().lower().endswith("n")


@dataclass(frozen=True)
class ForecastSample:
    # one 3-hour data point from the forecast list
    timestamp: int
    temperature: float
    condition: ConditionCode
    is_daytime: bool
    icon_id: str
    description: str = ""

    @property
    def moment(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def day(self) -> date:
        return self.moment.date()


@dataclass(frozen=True)
class Location:
    name: str
    sunrise: int
    sunset: int
    country: str = ""


@dataclass(frozen=True)
class DayBucket:
    # samples that share one UTC calendar date, in input order
    day: date
    samples: Tuple[ForecastSample, ...]


@dataclass(frozen=True)
class ForecastSet:
    # full provider response: location plus the ordered sample list
    location: Location
    samples: Tuple[ForecastSample, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.samples


@dataclass(frozen=True)
class CurrentConditions:
    # current weather snapshot, used for travel advice
    name: str
    temperature: float
    condition: ConditionCode
    description: str
    icon_id: str


@dataclass(frozen=True)
class LocationQuery:
    # either a city name or a lat/lon pair, never both
    city: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None

    @classmethod
    def for_city(cls, city: str) -> "LocationQuery":
        return cls(city=city)

    @classmethod
    def for_coords(cls, lat: float, lon: float) -> "LocationQuery":
        return cls(lat=float(lat), lon=float(lon))

    @property
    def is_complete(self) -> bool:
        if self.city is not None and self.city.strip():
            return True
        return self.lat is not None and self.lon is not None

    def params(self) -> Dict[str, str]:
        # provider query parameters, city wins if both are somehow set
        if self.city is not None and self.city.strip():
            return {"q": self.city.strip()}
        if self.lat is not None and self.lon is not None:
            return {"lat": str(self.lat), "lon": str(self.lon)}
        return {}

    def __str__(self) -> str:
        if self.city:
            return self.city
        return f"{self.lat},{self.lon}"
