from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ryandata_address_resolver.models import (
    DEFAULT_PLACE_FIELDS,
    GeocodeCandidate,
    PlacePrediction,
    ProviderError,
    ProviderErrorReason,
)
from ryandata_address_resolver.providers.config import GoogleMapsConfig

logger = logging.getLogger(__name__)

# Service status -> failure category. OK and ZERO_RESULTS are handled separately.
_STATUS_REASONS: dict[str, ProviderErrorReason] = {
    "OVER_QUERY_LIMIT": ProviderErrorReason.QUOTA,
    "OVER_DAILY_LIMIT": ProviderErrorReason.QUOTA,
    "REQUEST_DENIED": ProviderErrorReason.QUOTA,
    "NOT_FOUND": ProviderErrorReason.NOT_FOUND,
    "INVALID_REQUEST": ProviderErrorReason.NOT_FOUND,
    "UNKNOWN_ERROR": ProviderErrorReason.NETWORK,
}


class GoogleMapsGeocodingProvider:
    """Async client for the Google Places and Geocoding web services."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        config: Optional[GoogleMapsConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or GoogleMapsConfig()
        self._api_key = api_key or self._config.api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._client_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """HTTP client bound to the running event loop.

        Pooled connections belong to the loop that opened them, so a new
        client is created whenever the provider is used from another loop
        (e.g. a second ``asyncio.run``).
        """
        loop = asyncio.get_running_loop()
        if self._client is None or self._client.is_closed or self._client_loop is not loop:
            if self._client is not None:
                logger.debug("Opening a new HTTP client for a different event loop")
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                transport=self._transport,
            )
            self._client_loop = loop
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client opened on the running event loop, if any."""
        client, self._client = self._client, None
        loop, self._client_loop = self._client_loop, None
        if client is not None and loop is asyncio.get_running_loop():
            await client.aclose()

    async def __aenter__(self) -> GoogleMapsGeocodingProvider:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _params(self, **params: Any) -> dict[str, Any]:
        merged = {k: v for k, v in params.items() if v is not None}
        if self._api_key:
            merged["key"] = self._api_key
        if self._config.language:
            merged.setdefault("language", self._config.language)
        return merged

    async def _request(self, path: str, params: dict[str, Any], *, operation: str) -> dict[str, Any]:
        logger.debug("Google Maps %s request: %s", operation, path)
        try:
            response = await self.client.get(path, params=self._params(**params))
        except httpx.TimeoutException as exc:
            raise ProviderError.from_reason(
                ProviderErrorReason.NETWORK,
                f"{operation} timed out: {exc}",
                operation=operation,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError.from_reason(
                ProviderErrorReason.NETWORK,
                f"{operation} request failed: {exc}",
                operation=operation,
            ) from exc

        if response.status_code >= 400:
            if response.status_code == 429:
                reason = ProviderErrorReason.QUOTA
            elif response.status_code == 404:
                reason = ProviderErrorReason.NOT_FOUND
            else:
                reason = ProviderErrorReason.NETWORK
            raise ProviderError.from_reason(
                reason,
                f"{operation} returned HTTP {response.status_code}",
                operation=operation,
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError.from_reason(
                ProviderErrorReason.MALFORMED_RESPONSE,
                f"{operation} returned non-JSON body",
                operation=operation,
            ) from exc
        if not isinstance(payload, dict):
            raise ProviderError.from_reason(
                ProviderErrorReason.MALFORMED_RESPONSE,
                f"{operation} returned non-object payload",
                operation=operation,
            )

        status = payload.get("status")
        if status in ("OK", "ZERO_RESULTS"):
            return payload

        reason = _STATUS_REASONS.get(str(status), ProviderErrorReason.MALFORMED_RESPONSE)
        detail = payload.get("error_message") or f"status {status}"
        raise ProviderError.from_reason(
            reason,
            f"{operation} failed: {detail}",
            operation=operation,
            status=status,
        )

    def _candidates(self, payload: dict[str, Any], *, operation: str) -> list[GeocodeCandidate]:
        results = payload.get("results") or []
        if not isinstance(results, list):
            raise ProviderError.from_reason(
                ProviderErrorReason.MALFORMED_RESPONSE,
                f"{operation} results is not a list",
                operation=operation,
            )
        try:
            return [GeocodeCandidate.from_provider_payload(item) for item in results]
        except ValidationError as exc:
            raise ProviderError.from_reason(
                ProviderErrorReason.MALFORMED_RESPONSE,
                f"Invalid {operation} result: {exc.error_count()} validation errors",
                operation=operation,
            ) from exc

    async def get_place_predictions(self, query_text: str) -> list[PlacePrediction]:
        payload = await self._request(
            "/place/autocomplete/json",
            {"input": query_text, "types": self._config.prediction_types},
            operation="place_predictions",
        )
        try:
            return [
                PlacePrediction.model_validate(item) for item in payload.get("predictions") or []
            ]
        except ValidationError as exc:
            raise ProviderError.from_reason(
                ProviderErrorReason.MALFORMED_RESPONSE,
                f"Invalid prediction payload: {exc.error_count()} validation errors",
                operation="place_predictions",
            ) from exc

    async def get_place_details(
        self,
        place_id: str,
        fields: Sequence[str] = DEFAULT_PLACE_FIELDS,
    ) -> GeocodeCandidate:
        payload = await self._request(
            "/place/details/json",
            {"place_id": place_id, "fields": ",".join(fields)},
            operation="place_details",
        )
        result = payload.get("result")
        if payload.get("status") == "ZERO_RESULTS" or not result:
            raise ProviderError.from_reason(
                ProviderErrorReason.NOT_FOUND,
                f"No place found for id {place_id}",
                operation="place_details",
            )
        if not isinstance(result, dict):
            raise ProviderError.from_reason(
                ProviderErrorReason.MALFORMED_RESPONSE,
                "place_details result is not an object",
                operation="place_details",
            )
        try:
            return GeocodeCandidate.from_provider_payload(result)
        except ValidationError as exc:
            raise ProviderError.from_reason(
                ProviderErrorReason.MALFORMED_RESPONSE,
                f"Invalid place_details result: {exc.error_count()} validation errors",
                operation="place_details",
            ) from exc

    async def reverse_geocode(
        self,
        lat: float,
        lng: float,
        *,
        result_type: Optional[str] = None,
    ) -> list[GeocodeCandidate]:
        payload = await self._request(
            "/geocode/json",
            {"latlng": f"{lat},{lng}", "result_type": result_type},
            operation="reverse_geocode",
        )
        return self._candidates(payload, operation="reverse_geocode")

    async def geocode(self, address_text: str) -> list[GeocodeCandidate]:
        payload = await self._request(
            "/geocode/json",
            {"address": address_text},
            operation="geocode",
        )
        return self._candidates(payload, operation="geocode")
