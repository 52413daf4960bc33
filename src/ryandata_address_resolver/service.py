from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ryandata_address_resolver.core.address_formatter import is_plus_code, leading_segment
from ryandata_address_resolver.core.cache import QueryCache, cache_enabled_from_env
from ryandata_address_resolver.core.sequencing import SequenceTracker
from ryandata_address_resolver.models import (
    DEFAULT_PLACE_FIELDS,
    AddressResolutionError,
    Coordinates,
    CoordinateValidationError,
    GeocodeCandidate,
    PlacePrediction,
    ProviderError,
    ResolutionFailure,
    ResolutionFlow,
    ResolutionResult,
    ResolutionStatus,
    ResolvedAddress,
)
from ryandata_address_resolver.providers.cached import CachedGeocodingProvider
from ryandata_address_resolver.resolution.backfill import PostalCodeBackfiller
from ryandata_address_resolver.resolution.selection import CandidateSelector
from ryandata_address_resolver.resolution.taxonomy import ComponentTaxonomyMapper
from ryandata_address_resolver.validation.validators import (
    CoordinateValidator,
    validate_coordinates,
)

if TYPE_CHECKING:
    from ryandata_address_resolver.protocols import GeocodingProviderProtocol

logger = logging.getLogger(__name__)

# Predictions are not requested for shorter input
MIN_PREDICTION_QUERY_LENGTH = 2

ResultListener = Callable[[ResolutionResult], None]
StreamKey = tuple[ResolutionFlow, str]


class AddressResolutionOrchestrator:
    """Entry point that turns provider output into a ResolvedAddress.

    Composes the taxonomy mapper, candidate selector, postal code backfiller
    and coordinate validator behind the resolution flows:

    - ``resolve_from_selection``: prediction -> place details -> address.
    - ``resolve_from_coordinates``: map click / current location -> address.
    - ``resolve_from_address_text``: stored or typed address -> address.

    Every call is tagged with a sequence number per (flow, call_site). A
    call that completes after a newer call was issued for the same stream
    comes back with status STALE, carries no address, and is not passed to
    ``on_result``.

    Example:
        >>> orchestrator = AddressResolutionOrchestrator(provider)
        >>> result = await orchestrator.resolve_from_coordinates(39.78, -89.65)
        >>> if result.is_resolved:
        ...     print(result.address.single_line)
    """

    def __init__(
        self,
        provider: GeocodingProviderProtocol,
        *,
        mapper: ComponentTaxonomyMapper | None = None,
        selector: CandidateSelector | None = None,
        backfiller: PostalCodeBackfiller | None = None,
        validator: CoordinateValidator | None = None,
        cache: QueryCache | None = None,
        use_cache: bool | None = None,
        on_result: ResultListener | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            provider: Geocoding provider implementation.
            mapper: Component mapper. Defaults to ComponentTaxonomyMapper.
            selector: Candidate selector. Defaults to the 4-component threshold.
            backfiller: Postal code backfiller.
            validator: Coordinate validator used to describe rejected input.
            cache: Cache for provider responses. Created when caching is on.
            use_cache: Enable caching. Defaults to RYANDATA_GEOCODE_CACHE.
            on_result: Called with every non-stale result.
        """
        enabled = cache_enabled_from_env() if use_cache is None else use_cache
        if cache is None and enabled:
            cache = QueryCache()

        self._raw_provider = provider
        self._cache = cache if enabled else None
        self._provider: GeocodingProviderProtocol = (
            CachedGeocodingProvider(provider, self._cache) if self._cache is not None else provider
        )
        self._mapper = mapper or ComponentTaxonomyMapper()
        self._selector = selector or CandidateSelector()
        self._backfiller = backfiller or PostalCodeBackfiller()
        self._validator = validator or CoordinateValidator()
        self._on_result = on_result
        self._sequences = SequenceTracker()
        self._latest_results: dict[StreamKey, ResolutionResult] = {}

    @property
    def provider(self) -> GeocodingProviderProtocol:
        """Get the undecorated provider instance."""
        return self._raw_provider

    @property
    def cache(self) -> QueryCache | None:
        """Get the query cache, or None when caching is disabled."""
        return self._cache

    @property
    def backfiller(self) -> PostalCodeBackfiller:
        """Get the postal code backfiller."""
        return self._backfiller

    # ------------------------------------------------------------------
    # Staleness bookkeeping
    # ------------------------------------------------------------------

    def _issue(self, flow: ResolutionFlow, call_site: str) -> int:
        return self._sequences.issue((flow, call_site))

    def is_latest(self, result: ResolutionResult) -> bool:
        """Check whether a result is still the newest for its flow and call site."""
        return self._sequences.is_latest((result.flow, result.call_site), result.sequence)

    def latest_result(
        self,
        flow: ResolutionFlow,
        call_site: str = "default",
    ) -> ResolutionResult | None:
        """Most recent non-stale result delivered for a stream, if any."""
        return self._latest_results.get((flow, call_site))

    def cancel(self, flow: ResolutionFlow, call_site: str = "default") -> None:
        """Mark every outstanding call for a stream as stale."""
        self._sequences.invalidate((flow, call_site))

    def _finish(self, result: ResolutionResult) -> ResolutionResult:
        key = (result.flow, result.call_site)
        if not self._sequences.is_latest(key, result.sequence):
            logger.debug(
                "Dropping stale %s result for call site %s (sequence %d, latest %d)",
                result.flow.value,
                result.call_site,
                result.sequence,
                self._sequences.latest(key),
            )
            return ResolutionResult(
                flow=result.flow,
                status=ResolutionStatus.STALE,
                call_site=result.call_site,
                sequence=result.sequence,
            )

        self._latest_results[key] = result
        if self._on_result is not None:
            self._on_result(result)
        return result

    # ------------------------------------------------------------------
    # Shared mapping
    # ------------------------------------------------------------------

    def _map_candidate(
        self,
        candidate: GeocodeCandidate,
        result: ResolutionResult,
    ) -> dict[str, Any]:
        """Map a candidate to ResolvedAddress text fields."""
        partial = self._mapper.map(candidate.components)
        city, state = self._mapper.resolve_city_state(partial)
        street = self._mapper.resolve_street(partial, candidate.formatted_address)
        if is_plus_code(street):
            result.add_process_cleaning(
                "street_address", street, "", "Dropped Plus Code street line", "cleaning"
            )
            street = ""
        return {
            "partial": partial,
            "street_address": street,
            "city": city,
            "state": state,
            "postal_code": partial.postal_code or "",
        }

    def _gate_coordinates(
        self,
        coordinates: Coordinates | None,
        result: ResolutionResult,
    ) -> tuple[float | None, float | None]:
        if coordinates is None:
            return (None, None)
        if validate_coordinates(coordinates.lat, coordinates.lng):
            return (coordinates.lat, coordinates.lng)
        result.add_process_error(
            "coordinates",
            "Provider returned out-of-range coordinates; cleared",
            f"{coordinates.lat},{coordinates.lng}",
        )
        return (None, None)

    async def _backfill_postal_code(
        self,
        fields: dict[str, Any],
        coordinates: Coordinates | None,
        candidates: list[GeocodeCandidate],
        result: ResolutionResult,
    ) -> str:
        partial = fields["partial"]
        postal_code = await self._backfiller.backfill(
            partial, coordinates, candidates, self._provider
        )
        if postal_code and not partial.postal_code:
            result.add_process_cleaning(
                "postal_code", None, postal_code, "Postal code backfilled", "backfill"
            )
        elif not postal_code:
            result.add_process_error("postal_code", "Postal code not found")
        return postal_code

    def _provider_failure(
        self,
        result: ResolutionResult,
        exc: ProviderError,
        operation: str,
    ) -> ResolutionResult:
        logger.warning(
            "%s failed for %s call site %s (%s): %s",
            operation,
            result.flow.value,
            result.call_site,
            exc.reason.value,
            exc,
        )
        result.status = ResolutionStatus.PROVIDER_ERROR
        result.error = exc
        return self._finish(result)

    def _not_found(self, result: ResolutionResult, operation: str) -> ResolutionResult:
        logger.debug("%s returned no candidates", operation)
        result.status = ResolutionStatus.NOT_FOUND
        result.error = ResolutionFailure.empty_result(operation)
        result.address = ResolvedAddress.empty()
        return self._finish(result)

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    async def resolve_from_selection(
        self,
        place_id: str,
        prediction_description: str = "",
        *,
        call_site: str = "default",
    ) -> ResolutionResult:
        """Resolve a selected autocomplete prediction.

        Args:
            place_id: Place identifier from the prediction.
            prediction_description: Label the user saw; its first segment
                replaces an empty or Plus Code street line.
            call_site: Staleness key for the caller.

        Returns:
            ResolutionResult; coordinates come from the place geometry.
        """
        flow = ResolutionFlow.SELECTION
        result = ResolutionResult(
            flow=flow,
            status=ResolutionStatus.RESOLVED,
            call_site=call_site,
            sequence=self._issue(flow, call_site),
        )

        try:
            candidate = await self._provider.get_place_details(place_id, DEFAULT_PLACE_FIELDS)
        except ProviderError as exc:
            return self._provider_failure(result, exc, "place_details")

        fields = self._map_candidate(candidate, result)
        street = fields["street_address"]
        if not street or is_plus_code(street):
            fallback = leading_segment(prediction_description)
            if is_plus_code(fallback):
                fallback = ""
            result.add_process_cleaning(
                "street_address",
                street,
                fallback,
                "Used prediction description for street line",
            )
            street = fallback

        latitude, longitude = self._gate_coordinates(candidate.coordinates, result)
        result.address = ResolvedAddress(
            street_address=street,
            city=fields["city"],
            state=fields["state"],
            postal_code=fields["postal_code"],
            latitude=latitude,
            longitude=longitude,
        )
        return self._finish(result)

    async def resolve_from_prediction(
        self,
        prediction: PlacePrediction,
        *,
        call_site: str = "default",
    ) -> ResolutionResult:
        """Shortcut for resolve_from_selection with a PlacePrediction."""
        return await self.resolve_from_selection(
            prediction.place_id, prediction.description, call_site=call_site
        )

    async def resolve_from_coordinates(
        self,
        lat: float,
        lng: float,
        *,
        call_site: str = "default",
    ) -> ResolutionResult:
        """Annotate a known coordinate pair with address text.

        Args:
            lat: Latitude in [-90, 90].
            lng: Longitude in [-180, 180].
            call_site: Staleness key for the caller.

        Returns:
            ResolutionResult; latitude/longitude are the input values. Invalid
            input returns INVALID_INPUT without contacting the provider.
        """
        flow = ResolutionFlow.COORDINATES
        result = ResolutionResult(
            flow=flow,
            status=ResolutionStatus.RESOLVED,
            call_site=call_site,
            sequence=self._issue(flow, call_site),
        )

        if not validate_coordinates(lat, lng):
            check = self._validator.check(lat, lng)
            result.status = ResolutionStatus.INVALID_INPUT
            result.error = CoordinateValidationError.for_pair(
                lat, lng, [error.message for error in check.errors]
            )
            return self._finish(result)

        coordinates = Coordinates(lat=float(lat), lng=float(lng))
        try:
            candidates = await self._provider.reverse_geocode(coordinates.lat, coordinates.lng)
        except ProviderError as exc:
            return self._provider_failure(result, exc, "reverse_geocode")

        if not candidates:
            return self._not_found(result, "reverse_geocode")

        selected = self._selector.select(candidates)
        fields = self._map_candidate(selected, result)
        postal_code = await self._backfill_postal_code(fields, coordinates, candidates, result)

        result.address = ResolvedAddress(
            street_address=fields["street_address"],
            city=fields["city"],
            state=fields["state"],
            postal_code=postal_code,
            latitude=coordinates.lat,
            longitude=coordinates.lng,
        )
        return self._finish(result)

    async def resolve_from_address_text(
        self,
        address_text: str,
        *,
        call_site: str = "default",
    ) -> ResolutionResult:
        """Resolve a free-text address into a located, canonical record.

        Args:
            address_text: Address typed by the user or stored on a record.
            call_site: Staleness key for the caller.

        Returns:
            ResolutionResult; coordinates come from the selected candidate.
        """
        flow = ResolutionFlow.ADDRESS_TEXT
        result = ResolutionResult(
            flow=flow,
            status=ResolutionStatus.RESOLVED,
            call_site=call_site,
            sequence=self._issue(flow, call_site),
        )

        query = (address_text or "").strip()
        if not query:
            result.status = ResolutionStatus.INVALID_INPUT
            result.error = AddressResolutionError.build(
                "invalid_query", "Address text is empty"
            )
            return self._finish(result)

        try:
            candidates = await self._provider.geocode(query)
        except ProviderError as exc:
            return self._provider_failure(result, exc, "geocode")

        if not candidates:
            return self._not_found(result, "geocode")

        selected = self._selector.select(candidates)
        fields = self._map_candidate(selected, result)
        latitude, longitude = self._gate_coordinates(selected.coordinates, result)
        located = (
            Coordinates(lat=latitude, lng=longitude)
            if latitude is not None and longitude is not None
            else None
        )
        postal_code = await self._backfill_postal_code(fields, located, candidates, result)

        result.address = ResolvedAddress(
            street_address=fields["street_address"],
            city=fields["city"],
            state=fields["state"],
            postal_code=postal_code,
            latitude=latitude,
            longitude=longitude,
        )
        return self._finish(result)

    async def predict(
        self,
        query_text: str,
        *,
        call_site: str = "default",
    ) -> list[PlacePrediction]:
        """Fetch autocomplete predictions, dropping superseded responses.

        Input shorter than MIN_PREDICTION_QUERY_LENGTH (after stripping)
        returns no predictions without a provider call, and still supersedes
        any outstanding request for the call site.

        Args:
            query_text: Text typed so far.
            call_site: Staleness key for the caller.

        Returns:
            Predictions, or ``[]`` if the input is too short or the response
            arrived after a newer request.

        Raises:
            ProviderError: If the latest request fails.
        """
        flow = ResolutionFlow.PREDICTIONS
        key = (flow, call_site)
        sequence = self._issue(flow, call_site)

        if len(query_text.strip()) < MIN_PREDICTION_QUERY_LENGTH:
            return []

        try:
            predictions = await self._provider.get_place_predictions(query_text)
        except ProviderError:
            if not self._sequences.is_latest(key, sequence):
                return []
            raise

        if not self._sequences.is_latest(key, sequence):
            logger.debug("Dropping stale predictions for %r", query_text[:50])
            return []
        return predictions


_default_orchestrator: AddressResolutionOrchestrator | None = None


def get_default_orchestrator() -> AddressResolutionOrchestrator:
    """Get or create the default orchestrator instance.

    Builds the default provider from ProviderFactory (Google Maps, API key
    from RYANDATA_GOOGLE_MAPS_API_KEY).
    """
    global _default_orchestrator
    if _default_orchestrator is None:
        from ryandata_address_resolver.providers.factory import ProviderFactory

        _default_orchestrator = AddressResolutionOrchestrator(ProviderFactory.create())
    return _default_orchestrator


async def resolve_from_coordinates(
    lat: float,
    lng: float,
    *,
    call_site: str = "default",
) -> ResolutionResult:
    """Convenience function using the default orchestrator."""
    return await get_default_orchestrator().resolve_from_coordinates(
        lat, lng, call_site=call_site
    )


async def resolve_from_selection(
    place_id: str,
    prediction_description: str = "",
    *,
    call_site: str = "default",
) -> ResolutionResult:
    """Convenience function using the default orchestrator."""
    return await get_default_orchestrator().resolve_from_selection(
        place_id, prediction_description, call_site=call_site
    )
