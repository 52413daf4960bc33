"""Postal code backfill.

Reverse-geocode results often put the postal code on a different candidate
than the one selected, or omit it entirely. The backfiller looks in three
places, stopping at the first hit:

1. the selected result's own postal code,
2. any component tagged ``postal_code`` across every candidate of the
   primary query,
3. one extra provider query scoped to ``result_type=postal_code`` at the
   same coordinates.

Step 3 is best effort: provider errors are logged and treated as "not
found".
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ryandata_address_resolver.models.address import (
    Coordinates,
    GeocodeCandidate,
    PartialAddress,
)
from ryandata_address_resolver.models.enums import ComponentTag
from ryandata_address_resolver.models.errors import ProviderError

if TYPE_CHECKING:
    from ryandata_address_resolver.protocols import GeocodingProviderProtocol

logger = logging.getLogger(__name__)

POSTAL_CODE_RESULT_TYPE = ComponentTag.POSTAL_CODE.value


def find_postal_code(candidates: Sequence[GeocodeCandidate]) -> str:
    """First ``postal_code`` component value across candidates, in order."""
    for candidate in candidates:
        for component in candidate.components:
            if component.has_tag(POSTAL_CODE_RESULT_TYPE) and component.long_value:
                return component.long_value
    return ""


class PostalCodeBackfiller:
    """Fills a missing postal code, querying the provider only as a last resort."""

    def __init__(self, *, query_provider: bool = True) -> None:
        self._query_provider = query_provider
        self._provider_queries = 0
        self._provider_failures = 0

    async def backfill(
        self,
        primary: PartialAddress,
        coordinates: Coordinates | None,
        candidates: Sequence[GeocodeCandidate],
        provider: GeocodingProviderProtocol,
    ) -> str:
        """Resolve a postal code for a mapped result.

        Args:
            primary: Mapped fields of the selected candidate.
            coordinates: Where to run the scoped query; None skips step 3.
            candidates: Every candidate returned by the primary query.
            provider: Provider used for the scoped query.

        Returns:
            The postal code, or ``""`` if none was found.
        """
        if primary.postal_code:
            return primary.postal_code

        postal_code = find_postal_code(candidates)
        if postal_code:
            logger.debug("Postal code %s taken from a sibling candidate", postal_code)
            return postal_code

        if not self._query_provider or coordinates is None:
            return ""

        self._provider_queries += 1
        try:
            scoped = await provider.reverse_geocode(
                coordinates.lat,
                coordinates.lng,
                result_type=POSTAL_CODE_RESULT_TYPE,
            )
        except ProviderError as exc:
            self._provider_failures += 1
            logger.warning(
                "Postal code lookup failed for lat=%s lng=%s (%s): %s",
                coordinates.lat,
                coordinates.lng,
                exc.reason.value,
                exc,
            )
            return ""

        if not scoped:
            return ""
        return find_postal_code(scoped[:1])

    @property
    def stats(self) -> dict[str, int]:
        """Get backfill statistics.

        Returns:
            Dict with provider_queries and provider_failures.
        """
        return {
            "provider_queries": self._provider_queries,
            "provider_failures": self._provider_failures,
        }
