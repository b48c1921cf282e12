"""Briefing pipeline: traffic first, then weather/news (and the quote) concurrently."""

import asyncio
import logging
import time

import httpx

from sunrise.clients.http import UpstreamUnavailable
from sunrise.clients.news import NewsClient
from sunrise.clients.traffic import TrafficAnalyzer
from sunrise.clients.weather import WeatherClient
from sunrise.config.schema import NavigatorConfig
from sunrise.llm.quote_generator import QuoteGenerator
from sunrise.models.alarm import AlarmSettings, adjust_alarm_time
from sunrise.models.briefing import AlarmBriefing, BriefingData, TrafficData
from sunrise.models.common import utc_now_iso

logger = logging.getLogger(__name__)


class BriefingAssembler:
    def __init__(
        self,
        config: NavigatorConfig,
        traffic: TrafficAnalyzer,
        weather: WeatherClient,
        news: NewsClient,
        quotes: QuoteGenerator,
    ):
        self.config = config
        self.traffic = traffic
        self.weather = weather
        self.news = news
        self.quotes = quotes

    @classmethod
    def from_config(cls, config: NavigatorConfig, http: httpx.AsyncClient) -> "BriefingAssembler":
        return cls(
            config,
            traffic=TrafficAnalyzer(http, config),
            weather=WeatherClient(http, config),
            news=NewsClient(http, config),
            quotes=QuoteGenerator(config),
        )

    async def assemble(
        self,
        home: str,
        destination: str,
        weather_location: str,
        traffic: TrafficData | None = None,
    ) -> BriefingData:
        """Build the briefing for one alarm ring.

        Raises UpstreamUnavailable if the whole assembly exceeds the
        briefing deadline.
        """
        return await self._with_deadline(
            self._assemble(home, destination, weather_location, traffic)
        )

    async def ring(self, settings: AlarmSettings, topic: str | None = None) -> AlarmBriefing:
        """Everything shown when the alarm goes off, with the traffic-adjusted wake time."""
        return await self._with_deadline(self._ring(settings, topic))

    async def _assemble(
        self,
        home: str,
        destination: str,
        weather_location: str,
        traffic: TrafficData | None,
    ) -> BriefingData:
        if traffic is None:
            traffic = await self.traffic.get_traffic_info(home, destination)

        weather, news = await asyncio.gather(
            self.weather.get_weather(weather_location or home),
            self.news.get_headlines(),
        )
        return BriefingData(
            weather=weather,
            traffic=traffic,
            news=tuple(news),
            generated_at=utc_now_iso(),
        )

    async def _ring(self, settings: AlarmSettings, topic: str | None) -> AlarmBriefing:
        start = time.monotonic()
        traffic = await self.traffic.get_traffic_info(settings.home, settings.destination)
        adjusted = adjust_alarm_time(settings.time, traffic.delay)
        if adjusted != settings.time:
            logger.info(
                "Alarm moved from %s to %s for a %d min traffic delay",
                settings.time, adjusted, traffic.delay,
            )

        briefing, quote = await asyncio.gather(
            self._assemble(
                settings.home,
                settings.destination,
                settings.effective_weather_location,
                traffic,
            ),
            self.quotes.get_quote(topic or self.config.quote.default_topic),
        )
        logger.info(
            "Briefing assembled in %.2fs (traffic simulated=%s, weather simulated=%s, %d headlines)",
            time.monotonic() - start, traffic.simulated, briefing.weather.simulated, len(briefing.news),
        )
        return AlarmBriefing(
            briefing=briefing,
            quote=quote,
            alarm_time=settings.time,
            adjusted_alarm_time=adjusted,
        )

    async def _with_deadline(self, coro):
        deadline = self.config.http.briefing_timeout_seconds
        try:
            return await asyncio.wait_for(coro, timeout=deadline)
        except asyncio.TimeoutError as e:
            logger.error("Briefing assembly exceeded %.1fs", deadline)
            raise UpstreamUnavailable("briefing", f"timed out after {deadline:.1f}s") from e
