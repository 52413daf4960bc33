from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from ryandata_address_resolver.core.cache import QueryCache
from ryandata_address_resolver.models import DEFAULT_PLACE_FIELDS, GeocodeCandidate, PlacePrediction
from ryandata_address_resolver.protocols import GeocodingProviderProtocol

_MISS = object()


class CachedGeocodingProvider:
    """Wraps a provider and memoizes successful responses in a QueryCache.

    Errors are never cached. Lists are stored as tuples and copied on the
    way out so callers cannot mutate cached entries.
    """

    def __init__(self, provider: GeocodingProviderProtocol, cache: QueryCache) -> None:
        self._provider = provider
        self._cache = cache

    @property
    def provider(self) -> GeocodingProviderProtocol:
        return self._provider

    @property
    def cache(self) -> QueryCache:
        return self._cache

    async def get_place_predictions(self, query_text: str) -> list[PlacePrediction]:
        return await self._provider.get_place_predictions(query_text)

    async def get_place_details(
        self,
        place_id: str,
        fields: Sequence[str] = DEFAULT_PLACE_FIELDS,
    ) -> GeocodeCandidate:
        key = ("place_details", place_id, tuple(fields))
        cached = self._cache.get(key, _MISS)
        if cached is not _MISS:
            return cached
        candidate = await self._provider.get_place_details(place_id, fields)
        self._cache.put(key, candidate)
        return candidate

    async def reverse_geocode(
        self,
        lat: float,
        lng: float,
        *,
        result_type: Optional[str] = None,
    ) -> list[GeocodeCandidate]:
        key = ("reverse_geocode", lat, lng, result_type)
        cached = self._cache.get(key, _MISS)
        if cached is not _MISS:
            return list(cached)
        candidates = await self._provider.reverse_geocode(lat, lng, result_type=result_type)
        self._cache.put(key, tuple(candidates))
        return list(candidates)

    async def geocode(self, address_text: str) -> list[GeocodeCandidate]:
        key = ("geocode", address_text.strip().lower())
        cached = self._cache.get(key, _MISS)
        if cached is not _MISS:
            return list(cached)
        candidates = await self._provider.geocode(address_text)
        self._cache.put(key, tuple(candidates))
        return list(candidates)
