# message tables must be total: every lookup returns text, nothing raises

from weatherdash.messages import (
    FALLBACK_MESSAGE,
    MESSAGES,
    describe,
    describe_text,
    travel_suggestion,
)
from weatherdash.models import ConditionCode


def test_every_known_condition_has_day_and_night_text():
    for code in ConditionCode:
        if code is ConditionCode.UNKNOWN:
            continue
        assert (code, True) in MESSAGES
        assert (code, False) in MESSAGES


def test_day_and_night_differ():
    assert describe(ConditionCode.CLEAR, True).startswith("☀")
    assert describe(ConditionCode.CLEAR, False).startswith("🌙")


def test_unknown_condition_falls_back():
    assert describe(ConditionCode.UNKNOWN, True) == FALLBACK_MESSAGE
    assert describe(None, False) == FALLBACK_MESSAGE
    assert describe_text("Squall", True) == FALLBACK_MESSAGE
    assert describe_text("", False) == FALLBACK_MESSAGE


def test_describe_text_maps_provider_strings():
    assert describe_text("Rain", False) == describe(ConditionCode.RAIN, False)
    assert describe_text("Fog", True) == describe(ConditionCode.MIST, True)


def test_travel_suggestions():
    assert travel_suggestion("Oslo", "Drizzle") == "🌧 Too rainy in Oslo, consider another day."
    assert "winter sports" in travel_suggestion("Oslo", "Snow")
    assert "perfect for travel" in travel_suggestion("Dubai", "Clear")
    assert travel_suggestion("Lima", "Haze") == "ℹ Weather in Lima: Haze. Plan accordingly."
