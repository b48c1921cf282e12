"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator


class MusicProvider(StrEnum):
    DEEZER = "deezer"
    AUDIUS = "audius"
    LASTFM = "lastfm"


class ApiKeysConfig(BaseModel):
    model_config = {"extra": "forbid"}

    google_maps_api_key: str = ""
    openweather_api_key: str = ""
    news_api_key: str = ""
    gemini_api_key: str = ""
    lastfm_api_key: str = ""


class EndpointsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    maps_base_url: str = "https://maps.googleapis.com/maps/api"
    weather_base_url: str = "https://api.openweathermap.org/data/2.5"
    news_base_url: str = "https://newsapi.org/v2"
    deezer_base_url: str = "https://api.deezer.com"
    audius_base_url: str = "https://discoveryprovider.audius.co"
    lastfm_base_url: str = "https://ws.audioscrobbler.com/2.0/"


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timeout_seconds: float = Field(default=10.0, gt=0.0)
    briefing_timeout_seconds: float = Field(default=30.0, gt=0.0)


class TrafficConfig(BaseModel):
    model_config = {"extra": "forbid"}

    suggestion_threshold_minutes: int = Field(default=10, ge=0)
    slow_note_minutes: int = Field(default=5, ge=0)
    simulated_base_min_minutes: int = Field(default=20, ge=1)
    simulated_base_max_minutes: int = Field(default=40, ge=1)
    simulated_delay_probability: float = Field(default=0.6, ge=0.0, le=1.0)
    simulated_delay_min_minutes: int = Field(default=5, ge=0)
    simulated_delay_max_minutes: int = Field(default=30, ge=0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "TrafficConfig":
        if self.simulated_base_min_minutes > self.simulated_base_max_minutes:
            raise ValueError("simulated_base_min_minutes exceeds simulated_base_max_minutes")
        if self.simulated_delay_min_minutes > self.simulated_delay_max_minutes:
            raise ValueError("simulated_delay_min_minutes exceeds simulated_delay_max_minutes")
        return self


class NewsQuery(BaseModel):
    model_config = {"extra": "forbid"}

    category: str | None = None
    q: str | None = None

    @property
    def label(self) -> str:
        return self.q or self.category or "general"


class NewsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    country: str = "in"
    max_headlines: int = Field(default=5, ge=1, le=20)
    queries: list[NewsQuery] = []


class QuoteConfig(BaseModel):
    model_config = {"extra": "forbid"}

    model: str = "gemini-2.0-flash"
    default_topic: str = "morning productivity"
    max_words: int = Field(default=20, ge=1)


class MusicConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: MusicProvider = MusicProvider.DEEZER
    max_results: int = Field(default=5, ge=1, le=25)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class NavigatorConfig(BaseModel):
    model_config = {"extra": "forbid"}

    keys: ApiKeysConfig = ApiKeysConfig()
    endpoints: EndpointsConfig = EndpointsConfig()
    http: HttpConfig = HttpConfig()
    traffic: TrafficConfig = TrafficConfig()
    news: NewsConfig = NewsConfig()
    quote: QuoteConfig = QuoteConfig()
    music: MusicConfig = MusicConfig()
    server: ServerConfig = ServerConfig()
