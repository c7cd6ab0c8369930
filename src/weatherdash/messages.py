# user-facing text, table driven so call sites never branch on the condition themselves

from __future__ import annotations
from typing import Dict, Optional, Tuple

from .models import ConditionCode

FALLBACK_MESSAGE = "ℹ Weather updates available, stay prepared."

# (condition, is_daytime) -> message
MESSAGES: Dict[Tuple[ConditionCode, bool], str] = {
    (ConditionCode.CLEAR, True): "☀ It's sunny, wear sunglasses!",
    (ConditionCode.CLEAR, False): "🌙 Clear night sky, enjoy the stars!",
    (ConditionCode.CLOUDS, True): "☁ Partly cloudy, still bright outside.",
    (ConditionCode.CLOUDS, False): "☁🌙 Cloudy night, moon might be hidden.",
    (ConditionCode.RAIN, True): "🌧 It's raining, don't forget your umbrella!",
    (ConditionCode.RAIN, False): "🌧🌙 Rainy night, drive safe!",
    (ConditionCode.DRIZZLE, True): "🌦 Light drizzle, maybe carry an umbrella.",
    (ConditionCode.DRIZZLE, False): "🌦🌙 Drizzly night, roads may be slippery.",
    (ConditionCode.THUNDERSTORM, True): "⛈ Stormy weather, better stay inside.",
    (ConditionCode.THUNDERSTORM, False): "⛈ Stormy weather, better stay inside.",
    (ConditionCode.SNOW, True): "❄ Snowfall, dress warmly!",
    (ConditionCode.SNOW, False): "❄🌙 Snowy night, roads may freeze.",
    (ConditionCode.MIST, True): "🌫 Low visibility, take it slow out there.",
    (ConditionCode.MIST, False): "🌫🌙 Foggy night, use your low beams.",
}


def describe(condition: Optional[ConditionCode], is_daytime: bool) -> str:
    return MESSAGES.get((condition, bool(is_daytime)), FALLBACK_MESSAGE)


def describe_text(main: Optional[str], is_daytime: bool) -> str:
    # same lookup, straight from the provider's weather[0].main string
    return describe(ConditionCode.from_provider(main), is_daytime)


TRAVEL_SUGGESTIONS: Dict[ConditionCode, str] = {
    ConditionCode.RAIN: "🌧 Too rainy in {city}, consider another day.",
    ConditionCode.DRIZZLE: "🌧 Too rainy in {city}, consider another day.",
    ConditionCode.THUNDERSTORM: "🌧 Too rainy in {city}, consider another day.",
    ConditionCode.SNOW: "❄ Snowy in {city}, perfect for winter sports!",
    ConditionCode.CLEAR: "☀ Clear skies in {city}, perfect for travel!",
    ConditionCode.CLOUDS: "☁ Cloudy in {city}, still fine for travel.",
}

TRAVEL_FALLBACK = "ℹ Weather in {city}: {condition}. Plan accordingly."


def travel_suggestion(city: str, condition_text: Optional[str]) -> str:
    code = ConditionCode.from_provider(condition_text)
    template = TRAVEL_SUGGESTIONS.get(code, TRAVEL_FALLBACK)
    return template.format(city=city, condition=condition_text or "Unknown")
