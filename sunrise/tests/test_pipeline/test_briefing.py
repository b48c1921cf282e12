"""Tests for briefing assembly and the alarm ring flow."""

import asyncio
import random
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import respx

from sunrise.clients.http import MissingApiKeyError, UpstreamUnavailable
from sunrise.clients.news import NewsClient
from sunrise.clients.traffic import TrafficAnalyzer
from sunrise.clients.weather import WeatherClient
from sunrise.config.defaults import GENERATION_FAILED_QUOTE, SAMPLE_HEADLINES
from sunrise.config.schema import HttpConfig, NavigatorConfig
from sunrise.llm.quote_generator import QuoteGenerator
from sunrise.models.alarm import AlarmSettings, adjust_alarm_time
from sunrise.models.briefing import MotivationalQuote, NewsHeadline, TrafficData, WeatherData
from sunrise.pipeline.briefing import BriefingAssembler

HOME = "1600 Amphitheatre Parkway, Mountain View, CA"
WORK = "1 Market St, San Francisco, CA"

TRAFFIC = TrafficData(commute_time=50, delay=15, destination="1 Market St", suggestion="Leave early")
WEATHER = WeatherData(temperature=14, condition="Fog", location="Mountain View")
NEWS = [NewsHeadline(id="https://n.example.com/1", title="One", source="Wire")]
QUOTE = MotivationalQuote(quote="Onward.", author="AI Assistant")


def _assembler(config: NavigatorConfig, events: list[str] | None = None) -> BriefingAssembler:
    """Assembler over mocks; optionally records call order into `events`."""
    log = events if events is not None else []

    async def traffic(origin, destination):
        log.append("traffic")
        return TRAFFIC

    async def weather(location):
        log.append("weather:start")
        await asyncio.sleep(0.02)
        log.append("weather:end")
        return WEATHER

    async def news():
        log.append("news:start")
        await asyncio.sleep(0.02)
        log.append("news:end")
        return NEWS

    traffic_mock = MagicMock(spec=TrafficAnalyzer)
    traffic_mock.get_traffic_info = AsyncMock(side_effect=traffic)
    weather_mock = MagicMock(spec=WeatherClient)
    weather_mock.get_weather = AsyncMock(side_effect=weather)
    news_mock = MagicMock(spec=NewsClient)
    news_mock.get_headlines = AsyncMock(side_effect=news)
    quotes_mock = MagicMock(spec=QuoteGenerator)
    quotes_mock.get_quote = AsyncMock(return_value=QUOTE)
    return BriefingAssembler(config, traffic_mock, weather_mock, news_mock, quotes_mock)


class TestAssemble:
    async def test_fetches_traffic_when_missing(self, config: NavigatorConfig):
        assembler = _assembler(config)
        briefing = await assembler.assemble(HOME, WORK, "Mountain View")

        assert briefing.traffic == TRAFFIC
        assert briefing.weather == WEATHER
        assert briefing.news == tuple(NEWS)
        assert briefing.generated_at
        assembler.traffic.get_traffic_info.assert_awaited_once_with(HOME, WORK)
        assembler.weather.get_weather.assert_awaited_once_with("Mountain View")

    async def test_reuses_supplied_traffic(self, config: NavigatorConfig):
        assembler = _assembler(config)
        given = TrafficData(commute_time=20, delay=0, destination="Work")
        briefing = await assembler.assemble(HOME, WORK, "Mountain View", traffic=given)

        assert briefing.traffic is given
        assembler.traffic.get_traffic_info.assert_not_awaited()

    async def test_weather_defaults_to_home(self, config: NavigatorConfig):
        assembler = _assembler(config)
        await assembler.assemble(HOME, WORK, "")
        assembler.weather.get_weather.assert_awaited_once_with(HOME)

    async def test_weather_and_news_run_concurrently_after_traffic(self, config: NavigatorConfig):
        events: list[str] = []
        await _assembler(config, events).assemble(HOME, WORK, "Mountain View")

        assert events[0] == "traffic"
        # Both started before either finished
        assert set(events[1:3]) == {"weather:start", "news:start"}
        assert set(events[3:]) == {"weather:end", "news:end"}

    async def test_client_hard_error_propagates(self, config: NavigatorConfig):
        assembler = _assembler(config)
        assembler.news.get_headlines = AsyncMock(
            side_effect=MissingApiKeyError("news", "NEWS_API_KEY")
        )
        with pytest.raises(MissingApiKeyError):
            await assembler.assemble(HOME, WORK, "Mountain View")

    async def test_deadline_exceeded(self, config: NavigatorConfig):
        cfg = config.model_copy(
            update={"http": HttpConfig(timeout_seconds=1.0, briefing_timeout_seconds=0.05)}
        )
        assembler = _assembler(cfg)

        async def hang(location):
            await asyncio.sleep(5)

        assembler.weather.get_weather = AsyncMock(side_effect=hang)
        with pytest.raises(UpstreamUnavailable, match="timed out"):
            await assembler.assemble(HOME, WORK, "Mountain View")


class TestRing:
    async def test_adjusts_alarm_by_delay(self, config: NavigatorConfig):
        assembler = _assembler(config)
        settings = AlarmSettings(time="07:00", home=HOME, destination=WORK)
        result = await assembler.ring(settings)

        assert result.alarm_time == "07:00"
        assert result.adjusted_alarm_time == "06:45"
        assert result.quote == QUOTE
        assert result.briefing.traffic == TRAFFIC
        # Traffic fetched once, reused by the briefing
        assembler.traffic.get_traffic_info.assert_awaited_once()

    async def test_default_topic(self, config: NavigatorConfig):
        assembler = _assembler(config)
        await assembler.ring(AlarmSettings(time="07:00", home=HOME, destination=WORK))
        assembler.quotes.get_quote.assert_awaited_once_with("morning productivity")

    async def test_explicit_topic_and_weather_location(self, config: NavigatorConfig):
        assembler = _assembler(config)
        settings = AlarmSettings(
            time="07:00", home=HOME, destination=WORK, weather_location="Tokyo"
        )
        await assembler.ring(settings, topic="courage")
        assembler.quotes.get_quote.assert_awaited_once_with("courage")
        assembler.weather.get_weather.assert_awaited_once_with("Tokyo")


class TestEndToEndFallbacks:
    @respx.mock
    async def test_every_provider_down(self, config: NavigatorConfig):
        respx.route(host__regex=r"test-.*\.example\.com").mock(
            side_effect=httpx.ConnectError("down")
        )
        async with httpx.AsyncClient() as http:
            assembler = BriefingAssembler.from_config(config, http)
            assembler.traffic.rng = random.Random(3)
            result = await assembler.ring(
                AlarmSettings(time="06:30", home=HOME, destination=WORK)
            )

        b = result.briefing
        assert b.traffic.simulated is True
        assert b.traffic.commute_time >= b.traffic.delay >= 0
        assert b.weather.condition == "Clear Skies (Simulated)"
        assert b.news == ()
        assert result.quote == GENERATION_FAILED_QUOTE
        assert result.adjusted_alarm_time == adjust_alarm_time("06:30", b.traffic.delay)

    async def test_no_keys_configured(self, no_keys_config: NavigatorConfig):
        with respx.mock(assert_all_called=False) as mock:
            async with httpx.AsyncClient() as http:
                assembler = BriefingAssembler.from_config(no_keys_config, http)
                briefing = await assembler.assemble(HOME, WORK, "Tokyo")
            assert not mock.calls

        assert briefing.weather.temperature == 18
        assert briefing.weather.location == "Tokyo"
        assert briefing.news == SAMPLE_HEADLINES
        assert briefing.traffic.destination == "1 Market St"

    @respx.mock
    async def test_live_scenario(self, config: NavigatorConfig):
        respx.get("https://test-maps.example.com/maps/api/distancematrix/json").mock(
            return_value=httpx.Response(200, json={
                "status": "OK",
                "rows": [{"elements": [{
                    "status": "OK",
                    "duration": {"value": 2880},
                    "duration_in_traffic": {"value": 3600},
                }]}],
            })
        )
        respx.get("https://test-weather.example.com/data/2.5/weather").mock(
            return_value=httpx.Response(200, json={
                "name": "Mountain View", "main": {"temp": 16.4}, "weather": [{"main": "Clear"}],
            })
        )
        respx.get("https://test-news.example.com/v2/top-headlines").mock(
            return_value=httpx.Response(200, json={"status": "ok", "articles": [
                {"url": "https://n.example.com/a", "title": "A", "source": {"name": "S"}},
            ]})
        )
        async with httpx.AsyncClient() as http:
            assembler = BriefingAssembler.from_config(config, http)
            result = await assembler.ring(
                AlarmSettings(time="07:00", home=HOME, destination=WORK)
            )

        b = result.briefing
        assert (b.traffic.commute_time, b.traffic.delay) == (60, 12)
        assert b.traffic.suggestion is not None
        assert result.adjusted_alarm_time == "06:48"
        assert b.weather.temperature == 16
        assert [h.id for h in b.news] == ["https://n.example.com/a"]
