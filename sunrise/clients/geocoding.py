"""Google Maps Geocoding client for address validation."""

import logging

import httpx

from sunrise.clients.http import MissingApiKeyError, UpstreamUnavailable, get_json
from sunrise.config.schema import NavigatorConfig
from sunrise.models.briefing import AddressValidation

logger = logging.getLogger(__name__)


class GeocodingClient:
    def __init__(self, http: httpx.AsyncClient, config: NavigatorConfig):
        self.http = http
        self.api_key = config.keys.google_maps_api_key
        self.base_url = config.endpoints.maps_base_url
        self.timeout = config.http.timeout_seconds

    async def validate_address(self, address: str) -> AddressValidation:
        """Check that an address resolves to a real place.

        Raises MissingApiKeyError when no maps key is configured. Provider
        errors are treated as "not valid" rather than raised.
        """
        if not self.api_key:
            raise MissingApiKeyError("geocoding", "GOOGLE_MAPS_API_KEY")

        try:
            data = await get_json(
                self.http,
                "geocoding",
                f"{self.base_url}/geocode/json",
                params={"address": address, "key": self.api_key},
                timeout=self.timeout,
            )
        except UpstreamUnavailable:
            logger.warning("Could not validate address %r, treating as invalid", address)
            return AddressValidation(is_valid=False)

        if not isinstance(data, dict):
            logger.warning("Unexpected geocoding payload for %r, treating as invalid", address)
            return AddressValidation(is_valid=False)

        results = data.get("results") or []
        first = results[0] if isinstance(results, list) and results else None
        if data.get("status") == "OK" and isinstance(first, dict):
            formatted = first.get("formatted_address")
            return AddressValidation(
                is_valid=True,
                formatted_address=formatted if isinstance(formatted, str) else None,
            )
        logger.info("Geocoding status=%s for %r", data.get("status"), address)
        return AddressValidation(is_valid=False)
