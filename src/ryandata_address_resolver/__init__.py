"""ryandata-address-resolver: turn geocoding provider output into clean address records.

This package provides an address resolution engine with:
- Autocomplete selection, reverse geocoding and free-text geocoding flows
- Component taxonomy mapping with city/state fallback rules
- Postal code backfill from sibling candidates or a scoped provider query
- Coordinate range validation
- Staleness detection for overlapping calls
- Pluggable providers (default: Google Maps over httpx)

Quick Start:
    >>> import asyncio
    >>> from ryandata_address_resolver import AddressResolutionOrchestrator, ProviderFactory
    >>> async def main() -> None:
    ...     async with ProviderFactory.create(api_key="...") as provider:
    ...         orchestrator = AddressResolutionOrchestrator(provider)
    ...         result = await orchestrator.resolve_from_coordinates(39.7817, -89.6501)
    ...         if result.is_resolved:
    ...             print(result.address.single_line)  # "100 Main St, Springfield, IL 62701"
    ...         else:
    ...             print(result.status, result.error)
    ...
    ...         # Autocomplete, then resolve the chosen prediction
    ...         predictions = await orchestrator.predict("100 Main")
    ...         result = await orchestrator.resolve_from_prediction(predictions[0])
    >>> asyncio.run(main())
"""

from __future__ import annotations  # noqa: I001

# Import order is intentional to avoid circular imports - do not auto-fix
from ryandata_address_resolver.core import QueryCache, SequenceTracker, is_plus_code
from ryandata_address_resolver.models import (
    DEFAULT_PLACE_FIELDS,
    AddressResolutionError,
    CityState,
    ComponentTag,
    Coordinates,
    CoordinateValidationError,
    GeocodeCandidate,
    PartialAddress,
    PlacePrediction,
    ProviderError,
    ProviderErrorReason,
    RawAddressComponent,
    ResolutionFailure,
    ResolutionFlow,
    ResolutionResult,
    ResolutionStatus,
    ResolvedAddress,
)
from ryandata_address_resolver.validation import CoordinateValidator, validate_coordinates
from ryandata_address_resolver.resolution import (
    CandidateSelector,
    ComponentTaxonomyMapper,
    PostalCodeBackfiller,
)
from ryandata_address_resolver.protocols import GeocodingProviderProtocol
from ryandata_address_resolver.providers import (
    CachedGeocodingProvider,
    GoogleMapsConfig,
    GoogleMapsGeocodingProvider,
    ProviderFactory,
    StaticGeocodingProvider,
)
from ryandata_address_resolver.service import (
    MIN_PREDICTION_QUERY_LENGTH,
    AddressResolutionOrchestrator,
    get_default_orchestrator,
    resolve_from_coordinates,
    resolve_from_selection,
)

__version__ = "0.1.0"
__package_name__ = "ryandata-address-resolver"

__all__ = [
    # Version
    "__version__",
    # Primary interface
    "AddressResolutionOrchestrator",
    "MIN_PREDICTION_QUERY_LENGTH",
    "get_default_orchestrator",
    "resolve_from_coordinates",
    "resolve_from_selection",
    # Models
    "CityState",
    "Coordinates",
    "GeocodeCandidate",
    "PartialAddress",
    "PlacePrediction",
    "RawAddressComponent",
    "ResolvedAddress",
    "ResolutionResult",
    # Enums
    "ComponentTag",
    "DEFAULT_PLACE_FIELDS",
    "ProviderErrorReason",
    "ResolutionFlow",
    "ResolutionStatus",
    # Errors
    "AddressResolutionError",
    "CoordinateValidationError",
    "ProviderError",
    "ResolutionFailure",
    # Building blocks
    "CandidateSelector",
    "ComponentTaxonomyMapper",
    "CoordinateValidator",
    "PostalCodeBackfiller",
    "validate_coordinates",
    # Protocols
    "GeocodingProviderProtocol",
    # Providers
    "CachedGeocodingProvider",
    "GoogleMapsConfig",
    "GoogleMapsGeocodingProvider",
    "ProviderFactory",
    "StaticGeocodingProvider",
    # Utilities
    "QueryCache",
    "SequenceTracker",
    "is_plus_code",
]
