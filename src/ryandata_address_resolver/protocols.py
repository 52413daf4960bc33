from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ryandata_address_resolver.models.enums import DEFAULT_PLACE_FIELDS

if TYPE_CHECKING:
    from ryandata_address_resolver.models import GeocodeCandidate, PlacePrediction


@runtime_checkable
class GeocodingProviderProtocol(Protocol):
    """Protocol for geocoding provider implementations.

    Every operation is a coroutine and fails with ProviderError (network,
    quota, not_found or malformed_response). Implementations own their
    timeouts; a timed-out request is reported as a network failure.
    """

    async def get_place_predictions(self, query_text: str) -> list[PlacePrediction]:
        """Fetch autocomplete predictions for partial user input.

        Args:
            query_text: Text typed by the user.

        Returns:
            Predictions, most relevant first.
        """
        ...

    async def get_place_details(
        self,
        place_id: str,
        fields: Sequence[str] = DEFAULT_PLACE_FIELDS,
    ) -> GeocodeCandidate:
        """Fetch components, geometry and formatted address for a place.

        Args:
            place_id: Identifier from a prediction.
            fields: Detail fields to request.

        Returns:
            The place as a single candidate.
        """
        ...

    async def reverse_geocode(
        self,
        lat: float,
        lng: float,
        *,
        result_type: str | None = None,
    ) -> list[GeocodeCandidate]:
        """Look up addresses at a coordinate pair.

        Args:
            lat: Latitude.
            lng: Longitude.
            result_type: Restrict results to one type (e.g. "postal_code").

        Returns:
            Candidates, most relevant first; empty if nothing matched.
        """
        ...

    async def geocode(self, address_text: str) -> list[GeocodeCandidate]:
        """Look up candidates for a free-text address.

        Args:
            address_text: Address as typed or stored.

        Returns:
            Candidates, most relevant first; empty if nothing matched.
        """
        ...
