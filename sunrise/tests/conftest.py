"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from sunrise.config.defaults import DEFAULT_NEWS_QUERIES
from sunrise.config.schema import (
    ApiKeysConfig,
    EndpointsConfig,
    HttpConfig,
    NavigatorConfig,
    NewsConfig,
)

MAPS = "https://test-maps.example.com/maps/api"
WEATHER = "https://test-weather.example.com/data/2.5"
NEWS = "https://test-news.example.com/v2"
DEEZER = "https://test-deezer.example.com"
AUDIUS = "https://test-audius.example.com"
LASTFM = "https://test-lastfm.example.com/2.0/"

_ENV_KEYS = (
    "GOOGLE_MAPS_API_KEY",
    "OPENWEATHER_API_KEY",
    "NEWS_API_KEY",
    "GEMINI_API_KEY",
    "LASTFM_API_KEY",
)


def _endpoints() -> EndpointsConfig:
    return EndpointsConfig(
        maps_base_url=MAPS,
        weather_base_url=WEATHER,
        news_base_url=NEWS,
        deezer_base_url=DEEZER,
        audius_base_url=AUDIUS,
        lastfm_base_url=LASTFM,
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real API keys in the developer's environment out of tests."""
    for name in _ENV_KEYS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("sunrise.config.loader.load_dotenv", lambda *a, **k: False)


@pytest.fixture
def config() -> NavigatorConfig:
    """Config with every key set and test endpoints."""
    return NavigatorConfig(
        keys=ApiKeysConfig(
            google_maps_api_key="maps-key",
            openweather_api_key="weather-key",
            news_api_key="news-key",
            gemini_api_key="",
            lastfm_api_key="lastfm-key",
        ),
        endpoints=_endpoints(),
        http=HttpConfig(timeout_seconds=2.0, briefing_timeout_seconds=5.0),
        news=NewsConfig(queries=DEFAULT_NEWS_QUERIES),
    )


@pytest.fixture
def no_keys_config() -> NavigatorConfig:
    """Config with no API keys: every client takes its fallback path."""
    return NavigatorConfig(
        endpoints=_endpoints(),
        news=NewsConfig(queries=DEFAULT_NEWS_QUERIES),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "traffic": {"suggestion_threshold_minutes": 5},
        "news": {"country": "us"},
        "music": {"provider": "audius"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
