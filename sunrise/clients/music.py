"""Track search for the alarm sound: Deezer previews, Audius streams, Last.fm links."""

import logging
from typing import Any, Protocol

import httpx

from sunrise.clients.http import MissingApiKeyError, UpstreamUnavailable, get_json
from sunrise.config.schema import MusicProvider, NavigatorConfig
from sunrise.models.briefing import MusicTrack

logger = logging.getLogger(__name__)

AUDIUS_APP_NAME = "SunriseNavigator"


class TrackSearch(Protocol):
    async def search(self, query: str) -> list[MusicTrack]: ...


class DeezerSearch:
    """Deezer public search; every result carries a 30-second MP3 preview."""

    def __init__(self, http: httpx.AsyncClient, base_url: str, limit: int, timeout: float):
        self.http = http
        self.base_url = base_url
        self.limit = limit
        self.timeout = timeout

    async def search(self, query: str) -> list[MusicTrack]:
        try:
            data = await get_json(
                self.http, "deezer", f"{self.base_url}/search",
                params={"q": query, "limit": self.limit}, timeout=self.timeout,
            )
        except UpstreamUnavailable as e:
            logger.error("Error calling Deezer API: %s", e)
            return []

        return [
            MusicTrack(
                name=str(t.get("title") or ""),
                artist=_name(t.get("artist")),
                url=t["preview"],
            )
            for t in _records(data, "data")
            if isinstance(t.get("preview"), str) and t["preview"]
        ]


class AudiusSearch:
    """Audius discovery search; no key needed, streams via the /stream redirect."""

    def __init__(self, http: httpx.AsyncClient, base_url: str, limit: int, timeout: float):
        self.http = http
        self.base_url = base_url
        self.limit = limit
        self.timeout = timeout

    async def search(self, query: str) -> list[MusicTrack]:
        try:
            data = await get_json(
                self.http, "audius", f"{self.base_url}/v1/tracks/search",
                params={"query": query, "app_name": AUDIUS_APP_NAME}, timeout=self.timeout,
            )
        except UpstreamUnavailable as e:
            logger.error("Error calling Audius API: %s", e)
            return []

        return [
            MusicTrack(
                name=str(t.get("title") or ""),
                artist=_name(t.get("user")),
                url=f"{self.base_url}/v1/tracks/{t['id']}/stream?app_name={AUDIUS_APP_NAME}",
            )
            for t in _records(data, "data")[: self.limit]
            if t.get("id")
        ]


class LastFmSearch:
    """Last.fm track.search; links point at track pages, not audio."""

    def __init__(
        self, http: httpx.AsyncClient, api_key: str, base_url: str, limit: int, timeout: float
    ):
        self.http = http
        self.api_key = api_key
        self.base_url = base_url
        self.limit = limit
        self.timeout = timeout

    async def search(self, query: str) -> list[MusicTrack]:
        if not self.api_key:
            raise MissingApiKeyError("lastfm", "LASTFM_API_KEY")
        try:
            data = await get_json(
                self.http, "lastfm", self.base_url,
                params={
                    "method": "track.search",
                    "track": query,
                    "api_key": self.api_key,
                    "format": "json",
                    "limit": self.limit,
                },
                timeout=self.timeout,
            )
        except UpstreamUnavailable as e:
            logger.error("Error calling Last.fm API: %s", e)
            return []

        if not isinstance(data, dict) or data.get("error"):
            message = data.get("message") if isinstance(data, dict) else "unexpected payload"
            logger.error("Last.fm API error: %s", message)
            return []
        tracks = _records(data, "results", "trackmatches", "track")
        if not tracks:
            logger.info("Last.fm returned no tracks for %r", query)
        return [
            MusicTrack(
                name=str(t.get("name") or ""),
                artist=_name(t.get("artist")),
                url=str(t.get("url") or ""),
            )
            for t in tracks
        ]


def _records(data: Any, *path: str) -> list[dict]:
    """Dict items found at `path` in a JSON payload; anything else is dropped."""
    node = data
    for key in path:
        if not isinstance(node, dict):
            return []
        node = node.get(key)
    # Last.fm collapses a single match into a bare object
    if isinstance(node, dict):
        node = [node]
    if not isinstance(node, list):
        return []
    return [item for item in node if isinstance(item, dict)]


def _name(value: Any) -> str:
    if isinstance(value, dict):
        value = value.get("name")
    return value if isinstance(value, str) else ""


def track_search(http: httpx.AsyncClient, config: NavigatorConfig) -> TrackSearch:
    """Build the searcher for the configured provider."""
    ep = config.endpoints
    limit = config.music.max_results
    timeout = config.http.timeout_seconds
    if config.music.provider == MusicProvider.AUDIUS:
        return AudiusSearch(http, ep.audius_base_url, limit, timeout)
    if config.music.provider == MusicProvider.LASTFM:
        return LastFmSearch(http, config.keys.lastfm_api_key, ep.lastfm_base_url, limit, timeout)
    return DeezerSearch(http, ep.deezer_base_url, limit, timeout)
