"""OpenWeatherMap current-conditions client with a fixed fallback reading."""

import logging
import math

import httpx

from sunrise.clients.http import UpstreamUnavailable, get_json
from sunrise.config.defaults import (
    DEFAULT_LOCATION_LABEL,
    FALLBACK_CONDITION,
    FALLBACK_TEMPERATURE_C,
)
from sunrise.config.schema import NavigatorConfig
from sunrise.models.briefing import WeatherData
from sunrise.models.common import short_label

logger = logging.getLogger(__name__)


class WeatherClient:
    def __init__(self, http: httpx.AsyncClient, config: NavigatorConfig):
        self.http = http
        self.api_key = config.keys.openweather_api_key
        self.base_url = config.endpoints.weather_base_url
        self.timeout = config.http.timeout_seconds

    async def get_weather(self, location: str) -> WeatherData:
        """Current temperature (rounded °C) and condition for a free-text location."""
        label = short_label(location, DEFAULT_LOCATION_LABEL)
        if not self.api_key:
            logger.warning("OPENWEATHER_API_KEY not configured, using fallback weather")
            return fallback_weather(label)

        try:
            data = await get_json(
                self.http,
                "weather",
                f"{self.base_url}/weather",
                params={"q": location, "appid": self.api_key, "units": "metric"},
                timeout=self.timeout,
            )
            return _parse_weather(data, label)
        except UpstreamUnavailable as e:
            logger.warning("Weather lookup failed for %s (%s), using fallback", location, e)
            return fallback_weather(label)


def fallback_weather(label: str) -> WeatherData:
    return WeatherData(
        temperature=FALLBACK_TEMPERATURE_C,
        condition=FALLBACK_CONDITION,
        location=label,
        simulated=True,
    )


def _parse_weather(data: dict, label: str) -> WeatherData:
    try:
        temp = float(data["main"]["temp"])
        condition = str(data["weather"][0]["main"])
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise UpstreamUnavailable("weather", f"unexpected payload: {e}") from e
    if not math.isfinite(temp):
        raise UpstreamUnavailable("weather", f"non-finite temperature {temp}")
    name = data.get("name")
    return WeatherData(
        temperature=round(temp),
        condition=condition,
        location=name if isinstance(name, str) and name else label,
    )
