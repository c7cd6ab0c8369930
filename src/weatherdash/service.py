# forecast aggregation: pure functions only (parse, group by day, pick a representative sample)
# plus thin fetch helpers that glue the client to the parsers

from __future__ import annotations
import logging
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Sequence

from .client import WeatherAPIClient
from .models import (
    ConditionCode,
    CurrentConditions,
    DayBucket,
    ForecastSample,
    ForecastSet,
    Location,
    LocationQuery,
    is_daytime_icon,
)

logger = logging.getLogger(__name__)

# targets tried in this order, equal distances resolve to the earliest sample
TARGET_HOURS = (12, 15, 9)


def _weather_entry(item: Dict[str, Any]) -> Dict[str, Any]:
    weather = item.get("weather") or [{}]
    return weather[0] or {}


def parse_sample(item: Dict[str, Any]) -> ForecastSample:
    # openweathermap shape: {"dt": ..., "main": {"temp": ...}, "weather": [{"main": ..., "icon": ...}]}
    weather = _weather_entry(item)
    main = weather.get("main") or ""
    icon = weather.get("icon") or ""
    return ForecastSample(
        timestamp=int(item["dt"]),
        temperature=float(item["main"]["temp"]),
        condition=ConditionCode.from_provider(main),
        is_daytime=is_daytime_icon(icon),
        icon_id=icon,
        description=main,
    )


# transform raw provider payload into our typed value objects and check shape
def parse_forecast_set(data) -> ForecastSet:
    if isinstance(data, dict):
        try:
            city = data["city"]
            location = Location(
                name=str(city.get("name", "")),
                sunrise=int(city.get("sunrise", 0)),
                sunset=int(city.get("sunset", 0)),
                country=str(city.get("country", "")),
            )
            samples = tuple(parse_sample(item) for item in data["list"])
            return ForecastSet(location=location, samples=samples)
        except (KeyError, TypeError, ValueError, AttributeError):
            pass

    raise ValueError("Unsupported payload shape for parse_forecast_set()")


def parse_current(data) -> CurrentConditions:
    try:
        weather = _weather_entry(data)
        main = weather.get("main") or ""
        return CurrentConditions(
            name=str(data.get("name", "")),
            temperature=float(data["main"]["temp"]),
            condition=ConditionCode.from_provider(main),
            description=main,
            icon_id=weather.get("icon") or "",
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValueError("Unsupported payload shape for parse_current()") from exc


def group_by_day(samples: Sequence[ForecastSample]) -> Dict[date, List[ForecastSample]]:
    # dict keeps first-occurrence order of each date, buckets keep input order
    daily: Dict[date, List[ForecastSample]] = {}
    for sample in samples:
        daily.setdefault(sample.day, []).append(sample)
    return daily


def day_buckets(samples: Sequence[ForecastSample]) -> List[DayBucket]:
    return [DayBucket(day=d, samples=tuple(items)) for d, items in group_by_day(samples).items()]


def _target_epoch(day: date, hour: int) -> int:
    return int(datetime.combine(day, time(hour=hour), tzinfo=timezone.utc).timestamp())


def select_representative(bucket: Sequence[ForecastSample]) -> ForecastSample:
    # nearest-to-noon: best match for 12:00, 15:00 and 09:00 UTC, smallest distance overall,
    # ties go to the earliest timestamp whichever target produced them
    if not bucket:
        raise ValueError("select_representative() needs at least one sample")
    if len(bucket) == 1:
        return bucket[0]

    day = bucket[0].day
    best = None
    best_distance = None
    for hour in TARGET_HOURS:
        target = _target_epoch(day, hour)
        # min() keeps the first of equal keys, the timestamp breaks ties towards the earliest sample
        candidate = min(bucket, key=lambda s: (abs(s.timestamp - target), s.timestamp))
        distance = abs(candidate.timestamp - target)
        if best is None or (distance, candidate.timestamp) < (best_distance, best.timestamp):
            best, best_distance = candidate, distance

    logger.debug(
        "Representative for %s: %s (%.0fs from target)",
        day, best.moment.isoformat(), best_distance,
    )
    return best


def fetch_forecast(client: WeatherAPIClient, query: LocationQuery) -> ForecastSet:
    # single location path: fetch -> parse
    return parse_forecast_set(client.get_forecast(query))


def fetch_current(client: WeatherAPIClient, query: LocationQuery) -> CurrentConditions:
    return parse_current(client.get_current(query))
