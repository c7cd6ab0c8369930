# connects terminal input (city or coordinates) to the dashboard and prints the result

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .client import WeatherAPIClient, WeatherAPIError
from .config import ConfigError, load_settings
from .dashboard import Dashboard, error_message
from .models import LocationQuery
from .render import render_travel, render_view
from .service import fetch_current

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weatherdash", description="5-day weather dashboard")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    forecast = sub.add_parser("forecast", help="show one summary per forecast day")
    forecast.add_argument("city", nargs="?", help="city name (defaults to WEATHER_DEFAULT_CITY)")
    forecast.add_argument("--lat", type=float)
    forecast.add_argument("--lon", type=float)
    forecast.add_argument("--day", type=int, help="only show this day index (0 = today)")

    travel = sub.add_parser("travel", help="travel advice from the current weather")
    travel.add_argument("city")

    sub.add_parser("serve", help="run the forecast proxy")
    return parser


def _query(args, default_city: str) -> LocationQuery:
    if args.lat is not None and args.lon is not None:
        return LocationQuery.for_coords(args.lat, args.lon)
    return LocationQuery.for_city(args.city or default_city)


def run_forecast(args, client: WeatherAPIClient) -> int:
    with Dashboard(client) as dash:
        view = dash.load(_query(args, client.settings.default_city))
        if not view.has_data:
            print("\n".join(render_view(view)))
            return 1

        if args.day is not None:
            # saturating, like the buttons: asking for day 9 of 5 shows the last day
            for _ in range(args.day):
                view = dash.next()
            print("\n".join(render_view(view)))
            return 0

        blocks = ["\n".join(render_view(view))]
        while view.can_go_next:
            view = dash.next()
            blocks.append("\n".join(render_view(view)))
        print("\n\n".join(blocks))
    return 0


def run_travel(args, client: WeatherAPIClient) -> int:
    try:
        current = fetch_current(client, LocationQuery.for_city(args.city))
    except (WeatherAPIError, ValueError) as exc:
        logger.debug("Travel lookup failed: %s", exc)
        print(error_message(exc))
        return 1
    print("\n".join(render_travel(args.city, current)))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "forecast" and (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "serve":
        from .proxy import serve
        serve(settings)
        return 0

    client = WeatherAPIClient(settings)
    if args.command == "travel":
        return run_travel(args, client)
    return run_forecast(args, client)


if __name__ == "__main__":
    sys.exit(main())
