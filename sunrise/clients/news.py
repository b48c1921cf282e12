"""NewsAPI top-headlines client: per-query picks plus general filler, deduplicated by URL."""

import asyncio
import logging
from typing import Any

import httpx

from sunrise.clients.http import UpstreamUnavailable, get_json
from sunrise.config.defaults import SAMPLE_HEADLINES
from sunrise.config.schema import NavigatorConfig, NewsQuery
from sunrise.models.briefing import NewsHeadline

logger = logging.getLogger(__name__)


class NewsClient:
    def __init__(self, http: httpx.AsyncClient, config: NavigatorConfig):
        self.http = http
        self.api_key = config.keys.news_api_key
        self.base_url = config.endpoints.news_base_url
        self.timeout = config.http.timeout_seconds
        self.country = config.news.country
        self.max_headlines = config.news.max_headlines
        self.queries = config.news.queries

    async def get_headlines(self) -> list[NewsHeadline]:
        """Up to max_headlines headlines, pairwise distinct by URL.

        One headline per configured query (fetched concurrently), then
        general top headlines fill the remaining slots.
        """
        if not self.api_key:
            logger.warning("NEWS_API_KEY not configured, returning sample headlines")
            return list(SAMPLE_HEADLINES[: self.max_headlines])

        per_query = await asyncio.gather(
            *(self._fetch_or_empty(q, page_size=1) for q in self.queries)
        )
        headlines: list[NewsHeadline] = []
        seen: set[str] = set()
        for batch in per_query:
            _extend_unique(headlines, seen, batch[:1], self.max_headlines)

        remaining = self.max_headlines - len(headlines)
        if remaining > 0:
            # Ask for extra so duplicates of the per-query picks can be dropped
            filler = await self._fetch_or_empty(
                NewsQuery(), page_size=min(100, remaining + len(headlines))
            )
            _extend_unique(headlines, seen, filler, self.max_headlines)

        return headlines

    async def fetch(self, query: NewsQuery, page_size: int) -> list[NewsHeadline]:
        params: dict[str, str | int] = {
            "country": self.country,
            "pageSize": page_size,
            "apiKey": self.api_key,
        }
        if query.category:
            params["category"] = query.category
        if query.q:
            params["q"] = query.q

        data = await get_json(
            self.http,
            "news",
            f"{self.base_url}/top-headlines",
            params=params,
            timeout=self.timeout,
        )
        if not isinstance(data, dict):
            raise UpstreamUnavailable("news", "unexpected payload")
        if data.get("status") != "ok":
            raise UpstreamUnavailable("news", f"status={data.get('status')} {data.get('message', '')}".strip())
        articles = data.get("articles") or []
        if not isinstance(articles, list):
            raise UpstreamUnavailable("news", "articles is not a list")
        return [h for h in (_to_headline(a) for a in articles) if h is not None]

    async def _fetch_or_empty(self, query: NewsQuery, page_size: int) -> list[NewsHeadline]:
        try:
            articles = await self.fetch(query, page_size)
        except UpstreamUnavailable as e:
            logger.error("Error fetching news for %s: %s", query.label, e)
            return []
        if not articles:
            logger.info("No articles for %s", query.label)
        return articles


def _to_headline(article: Any) -> NewsHeadline | None:
    if not isinstance(article, dict):
        return None
    url = article.get("url")
    title = article.get("title")
    if not isinstance(url, str) or not isinstance(title, str):
        return None
    if not url or not title or title == "[Removed]":
        return None
    source = article.get("source")
    if isinstance(source, dict):
        source = source.get("name")
    if not isinstance(source, str) or not source:
        source = "Unknown"
    return NewsHeadline(id=url, title=title, source=source)


def _extend_unique(
    headlines: list[NewsHeadline],
    seen: set[str],
    batch: list[NewsHeadline],
    limit: int,
) -> None:
    for h in batch:
        if len(headlines) >= limit:
            return
        if h.id in seen:
            continue
        seen.add(h.id)
        headlines.append(h)
