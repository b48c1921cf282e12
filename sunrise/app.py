"""Sunrise Navigator API: FastAPI backend serving briefings to the alarm UI."""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from sunrise.clients.geocoding import GeocodingClient
from sunrise.clients.http import MissingApiKeyError, UpstreamUnavailable, new_http_client
from sunrise.clients.music import track_search
from sunrise.clients.news import NewsClient
from sunrise.clients.traffic import TrafficAnalyzer
from sunrise.clients.weather import WeatherClient
from sunrise.config.loader import config_hash, load_config
from sunrise.config.schema import NavigatorConfig
from sunrise.llm.quote_generator import QuoteGenerator
from sunrise.models.alarm import AlarmSettings
from sunrise.models.common import utc_now_iso
from sunrise.pipeline.briefing import BriefingAssembler

logger = logging.getLogger(__name__)


class BriefingRequest(BaseModel):
    model_config = {"extra": "forbid"}

    home: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    weather_location: str = ""


def create_app(config: NavigatorConfig | None = None) -> FastAPI:
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with new_http_client(config.http.timeout_seconds) as http:
            app.state.http = http
            app.state.assembler = BriefingAssembler.from_config(config, http)
            yield

    app = FastAPI(title="Sunrise Navigator", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UpstreamUnavailable)
    async def upstream_unavailable(request: Request, exc: UpstreamUnavailable):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        detail = (
            str(exc)
            if isinstance(exc, MissingApiKeyError)
            else "Could not fetch all morning briefing data. Please try again."
        )
        return JSONResponse(
            status_code=503,
            content={"detail": detail, "provider": exc.provider},
        )

    # ── Briefing endpoints ─────────────────────────────────────────

    @app.post("/api/alarm/ring")
    async def ring_alarm(settings: AlarmSettings, request: Request, topic: str | None = None):
        """Full briefing for an alarm going off, with the adjusted wake time."""
        result = await request.app.state.assembler.ring(settings, topic)
        return asdict(result)

    @app.post("/api/briefing")
    async def get_briefing(body: BriefingRequest, request: Request):
        briefing = await request.app.state.assembler.assemble(
            body.home, body.destination, body.weather_location
        )
        return asdict(briefing)

    # ── Single-provider endpoints ──────────────────────────────────

    @app.get("/api/traffic")
    async def get_traffic(origin: str, destination: str, request: Request):
        analyzer = TrafficAnalyzer(request.app.state.http, config)
        return asdict(await analyzer.get_traffic_info(origin, destination))

    @app.get("/api/weather")
    async def get_weather(location: str, request: Request):
        client = WeatherClient(request.app.state.http, config)
        return asdict(await client.get_weather(location))

    @app.get("/api/news")
    async def get_news(request: Request):
        client = NewsClient(request.app.state.http, config)
        return [asdict(h) for h in await client.get_headlines()]

    @app.get("/api/quote")
    async def get_quote(request: Request, topic: str | None = None):
        quotes: QuoteGenerator = request.app.state.assembler.quotes
        return asdict(await quotes.get_quote(topic))

    @app.get("/api/address/validate")
    async def validate_address(address: str, request: Request):
        client = GeocodingClient(request.app.state.http, config)
        return asdict(await client.validate_address(address))

    @app.get("/api/music/search")
    async def search_music(q: str, request: Request):
        searcher = track_search(request.app.state.http, config)
        return [asdict(t) for t in await searcher.search(q)]

    @app.get("/api/health")
    def get_health():
        """Which providers are live and which will fall back."""
        keys = config.keys
        return {
            "status": "ok",
            "providers": {
                "maps": bool(keys.google_maps_api_key),
                "weather": bool(keys.openweather_api_key),
                "news": bool(keys.news_api_key),
                "quote": bool(keys.gemini_api_key),
                "music": config.music.provider.value,
            },
            "config_hash": config_hash(config),
            "timestamp": utc_now_iso(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.config.server.host, port=app.state.config.server.port)
