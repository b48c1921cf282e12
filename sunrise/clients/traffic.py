"""Commute traffic: Google Distance Matrix client with a simulated fallback."""

import logging
import random

import httpx

from sunrise.clients.http import UpstreamUnavailable, get_json
from sunrise.config.defaults import DEFAULT_DESTINATION_LABEL
from sunrise.config.schema import NavigatorConfig
from sunrise.models.briefing import TrafficData
from sunrise.models.common import short_label

logger = logging.getLogger(__name__)


class DistanceMatrixClient:
    def __init__(self, http: httpx.AsyncClient, api_key: str, base_url: str, timeout: float):
        self.http = http
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    async def get_durations(self, origin: str, destination: str) -> tuple[int, int]:
        """Return (duration, duration_in_traffic) in seconds for departure now."""
        data = await get_json(
            self.http,
            "distance-matrix",
            f"{self.base_url}/distancematrix/json",
            params={
                "origins": origin,
                "destinations": destination,
                "departure_time": "now",
                "key": self.api_key,
            },
            timeout=self.timeout,
        )
        if not isinstance(data, dict):
            raise UpstreamUnavailable("distance-matrix", "unexpected payload")
        if data.get("status") != "OK":
            raise UpstreamUnavailable(
                "distance-matrix", f"status={data.get('status')} {data.get('error_message', '')}".strip()
            )
        try:
            element = data["rows"][0]["elements"][0]
            status = element.get("status")
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise UpstreamUnavailable("distance-matrix", "no route element in response") from e
        if status != "OK":
            raise UpstreamUnavailable("distance-matrix", f"element status={status}")

        try:
            duration = int(element["duration"]["value"])
            # Without traffic data the plain duration is the best estimate
            in_traffic = int(element.get("duration_in_traffic", element["duration"])["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamUnavailable("distance-matrix", f"bad duration in element: {e}") from e
        return duration, in_traffic


class TrafficAnalyzer:
    def __init__(
        self,
        http: httpx.AsyncClient,
        config: NavigatorConfig,
        rng: random.Random | None = None,
    ):
        self.settings = config.traffic
        self.rng = rng or random.Random()
        self.matrix: DistanceMatrixClient | None = None
        if config.keys.google_maps_api_key:
            self.matrix = DistanceMatrixClient(
                http,
                config.keys.google_maps_api_key,
                config.endpoints.maps_base_url,
                config.http.timeout_seconds,
            )

    async def get_traffic_info(self, origin: str, destination: str) -> TrafficData:
        """Commute time and delay in minutes; never raises for provider errors."""
        label = short_label(destination, DEFAULT_DESTINATION_LABEL)

        if self.matrix is None:
            logger.warning("GOOGLE_MAPS_API_KEY not configured, simulating traffic")
            return self._simulate(origin, destination, label)

        try:
            duration_s, in_traffic_s = await self.matrix.get_durations(origin, destination)
        except UpstreamUnavailable as e:
            logger.warning("Traffic lookup failed (%s), simulating", e)
            return self._simulate(origin, destination, label)

        commute = round(in_traffic_s / 60)
        delay = round(max(0, in_traffic_s - duration_s) / 60)
        return TrafficData(
            commute_time=commute,
            delay=delay,
            destination=label,
            suggestion=suggest(delay, self.settings.suggestion_threshold_minutes),
            note=slow_note(
                delay, self.settings.slow_note_minutes, self.settings.suggestion_threshold_minutes
            ),
        )

    def _simulate(self, origin: str, destination: str, label: str) -> TrafficData:
        s = self.settings
        logger.info("Simulating traffic check from %s to %s", origin, destination)
        base = self.rng.randint(s.simulated_base_min_minutes, s.simulated_base_max_minutes)
        delay = 0
        if self.rng.random() < s.simulated_delay_probability:
            delay = self.rng.randint(s.simulated_delay_min_minutes, s.simulated_delay_max_minutes)
        return TrafficData(
            commute_time=base + delay,
            delay=delay,
            destination=label,
            suggestion=suggest(delay, s.suggestion_threshold_minutes),
            note=slow_note(delay, s.slow_note_minutes, s.suggestion_threshold_minutes),
            simulated=True,
        )


def suggest(delay: int, threshold: int) -> str | None:
    """Suggestion text, only when the delay is strictly above the threshold."""
    if delay <= threshold:
        return None
    return (
        f"Traffic is heavier than usual ({delay} min delay). "
        "You might want to leave a bit early to stay on schedule."
    )


def slow_note(delay: int, slow_minutes: int, threshold: int) -> str | None:
    """Informational note for a noticeable delay that doesn't warrant a suggestion."""
    if delay <= 0 or not slow_minutes <= delay <= threshold:
        return None
    return f"Traffic is a bit slow this morning ({delay} min delay)."
