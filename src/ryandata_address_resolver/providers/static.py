"""In-memory geocoding provider.

Serves canned candidates from dictionaries and records every call. Useful
for fixtures, offline demos and tests of code that depends on the provider
protocol.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from ryandata_address_resolver.models import (
    DEFAULT_PLACE_FIELDS,
    GeocodeCandidate,
    PlacePrediction,
    ProviderError,
    ProviderErrorReason,
)

CoordinateKey = tuple[float, float, Optional[str]]


@dataclass
class ProviderCall:
    operation: str
    args: tuple[Any, ...]


class StaticGeocodingProvider:
    """Provider backed by lookup tables.

    Reverse lookups are keyed by ``(lat, lng, result_type)``; a missing key
    returns an empty list. Any key may instead map to a ProviderError, which
    is raised when that key is requested.
    """

    def __init__(
        self,
        *,
        predictions: Optional[Mapping[str, Sequence[PlacePrediction]]] = None,
        places: Optional[Mapping[str, GeocodeCandidate | ProviderError]] = None,
        reverse: Optional[Mapping[CoordinateKey, Sequence[GeocodeCandidate] | ProviderError]] = None,
        forward: Optional[Mapping[str, Sequence[GeocodeCandidate] | ProviderError]] = None,
    ) -> None:
        self._predictions = dict(predictions or {})
        self._places = dict(places or {})
        self._reverse = dict(reverse or {})
        self._forward = dict(forward or {})
        self.calls: list[ProviderCall] = []

    def _record(self, operation: str, *args: Any) -> None:
        self.calls.append(ProviderCall(operation, args))

    def calls_for(self, operation: str) -> list[ProviderCall]:
        return [call for call in self.calls if call.operation == operation]

    def add_reverse(
        self,
        lat: float,
        lng: float,
        candidates: Sequence[GeocodeCandidate] | ProviderError,
        *,
        result_type: Optional[str] = None,
    ) -> None:
        self._reverse[(lat, lng, result_type)] = candidates

    async def get_place_predictions(self, query_text: str) -> list[PlacePrediction]:
        self._record("get_place_predictions", query_text)
        return list(self._predictions.get(query_text, []))

    async def get_place_details(
        self,
        place_id: str,
        fields: Sequence[str] = DEFAULT_PLACE_FIELDS,
    ) -> GeocodeCandidate:
        self._record("get_place_details", place_id, tuple(fields))
        place = self._places.get(place_id)
        if place is None:
            raise ProviderError.from_reason(
                ProviderErrorReason.NOT_FOUND,
                f"No place found for id {place_id}",
                operation="place_details",
            )
        if isinstance(place, ProviderError):
            raise place
        return place

    async def reverse_geocode(
        self,
        lat: float,
        lng: float,
        *,
        result_type: Optional[str] = None,
    ) -> list[GeocodeCandidate]:
        self._record("reverse_geocode", lat, lng, result_type)
        found = self._reverse.get((lat, lng, result_type), [])
        if isinstance(found, ProviderError):
            raise found
        return list(found)

    async def geocode(self, address_text: str) -> list[GeocodeCandidate]:
        self._record("geocode", address_text)
        found = self._forward.get(address_text, [])
        if isinstance(found, ProviderError):
            raise found
        return list(found)
