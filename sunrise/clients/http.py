"""Shared async JSON fetch with explicit timeouts and typed upstream errors."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "sunrise-navigator/0.1.0"


class UpstreamUnavailable(Exception):
    """Raised when a provider cannot be reached or returns an unusable answer."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code


class MissingApiKeyError(UpstreamUnavailable):
    """Raised before any network call when a required API key is not configured."""

    def __init__(self, provider: str, env_var: str):
        super().__init__(provider, f"{env_var} is not configured")
        self.env_var = env_var


def new_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": DEFAULT_USER_AGENT},
        follow_redirects=True,
    )


async def get_json(
    http: httpx.AsyncClient,
    provider: str,
    url: str,
    params: dict[str, Any] | None = None,
    timeout: float | None = None,
) -> Any:
    """GET a JSON document. Any failure surfaces as UpstreamUnavailable."""
    try:
        if timeout is None:
            resp = await http.get(url, params=params)
        else:
            resp = await http.get(url, params=params, timeout=timeout)
    except httpx.TimeoutException as e:
        logger.error("%s request timed out: %s", provider, e)
        raise UpstreamUnavailable(provider, f"timed out: {e}") from e
    except httpx.RequestError as e:
        logger.error("%s request failed: %s", provider, e)
        raise UpstreamUnavailable(provider, f"request failed: {e}") from e

    if resp.status_code >= 400:
        logger.error("%s returned HTTP %d", provider, resp.status_code)
        raise UpstreamUnavailable(provider, f"HTTP {resp.status_code}", resp.status_code)

    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamUnavailable(provider, f"invalid JSON: {e}", resp.status_code) from e
