# thin proxy in front of the provider so browsers never see the api key
# every route forwards its query params and returns the provider json and status verbatim

from __future__ import annotations
import logging
from typing import Dict, Optional

from flask import Flask, jsonify, request

from .client import UpstreamFailure, WeatherAPIClient
from .config import Settings, load_settings

logger = logging.getLogger(__name__)


def _forward(client: WeatherAPIClient, path: str, params: Dict[str, str]):
    try:
        status, data = client.forward(path, params)
    except UpstreamFailure as exc:
        logger.error("Upstream %s failed: %s", path, exc)
        return jsonify({"error": "internal server error"}), 500
    return jsonify(data), status


def _arg(name: str) -> Optional[str]:
    value = request.args.get(name, "", type=str).strip()
    return value or None


def create_app(settings: Optional[Settings] = None, client: Optional[WeatherAPIClient] = None) -> Flask:
    # load settings eagerly, a proxy without a key should refuse to start
    if client is None:
        client = WeatherAPIClient(settings or load_settings())

    app = Flask(__name__)
    app.config["WEATHER_CLIENT"] = client

    @app.after_request
    def allow_cors(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    @app.get("/weather")
    def weather_by_city():
        city = _arg("city")
        if not city:
            return jsonify({"error": "city query param required"}), 400
        return _forward(client, WeatherAPIClient.FORECAST_PATH, {"q": city})

    @app.get("/weather/coords")
    def weather_by_coords():
        lat, lon = _arg("lat"), _arg("lon")
        if not lat or not lon:
            return jsonify({"error": "lat and lon required"}), 400
        return _forward(client, WeatherAPIClient.FORECAST_PATH, {"lat": lat, "lon": lon})

    @app.get("/weather/current")
    def current_weather():
        city, lat, lon = _arg("city"), _arg("lat"), _arg("lon")
        if city:
            params = {"q": city}
        elif lat and lon:
            params = {"lat": lat, "lon": lon}
        else:
            return jsonify({"error": "city or coordinates required"}), 400
        return _forward(client, WeatherAPIClient.CURRENT_PATH, params)

    return app


def serve(settings: Settings, host: str = "0.0.0.0") -> None:
    app = create_app(settings)
    logger.info("Weather proxy running on port %d", settings.port)
    app.run(host=host, port=settings.port)
