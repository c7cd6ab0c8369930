# plain-text presentation of the dashboard view, used by the cli

from __future__ import annotations
import math
from typing import List

from .dashboard import DashboardView
from .models import CurrentConditions
from .messages import travel_suggestion

ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


def format_temp(temp: float) -> str:
    # halves round up (-2.5 -> -2), round() would give banker's rounding
    rounded = math.floor(temp + 0.5)
    return f"{rounded}°C"


def icon_url(icon_id: str) -> str:
    return ICON_URL.format(icon=icon_id)


def render_view(view: DashboardView) -> List[str]:
    if view.loading:
        return ["Loading..."]
    if not view.has_data:
        return [view.status or "Nothing to display."]

    sample = view.sample
    label = "Today's Weather" if view.label == "Today" else f"{view.label}'s Weather"
    lines = [
        f"{view.location} | {label}",
        f"{format_temp(sample.temperature)} | {sample.description or sample.condition.value}",
        view.message or "",
        icon_url(sample.icon_id) if sample.icon_id else "",
    ]
    return [line for line in lines if line]


def render_travel(city: str, current: CurrentConditions) -> List[str]:
    condition = current.description or current.condition.value
    lines = [
        city,
        f"🌡 {format_temp(current.temperature)} | {condition}",
        travel_suggestion(city, condition),
        icon_url(current.icon_id) if current.icon_id else "",
    ]
    return [line for line in lines if line]
