"""Address resolution models.

Re-exports the provider-facing shapes, the canonical ResolvedAddress, the
result wrapper, enums and errors.
"""

from __future__ import annotations

from ryandata_address_resolver.models.address import (
    CityState,
    Coordinates,
    GeocodeCandidate,
    PartialAddress,
    PlacePrediction,
    RawAddressComponent,
    ResolvedAddress,
)
from ryandata_address_resolver.models.enums import (
    DEFAULT_PLACE_FIELDS,
    ComponentTag,
    ProviderErrorReason,
    ResolutionFlow,
    ResolutionStatus,
)
from ryandata_address_resolver.models.errors import (
    PACKAGE_NAME,
    AddressResolutionError,
    CoordinateValidationError,
    ProviderError,
    ResolutionFailure,
)
from ryandata_address_resolver.models.results import ResolutionResult

__all__ = [
    # Errors
    "PACKAGE_NAME",
    "AddressResolutionError",
    "CoordinateValidationError",
    "ProviderError",
    "ResolutionFailure",
    # Enums and constants
    "ComponentTag",
    "DEFAULT_PLACE_FIELDS",
    "ProviderErrorReason",
    "ResolutionFlow",
    "ResolutionStatus",
    # Provider shapes
    "RawAddressComponent",
    "Coordinates",
    "GeocodeCandidate",
    "PlacePrediction",
    # Address models
    "PartialAddress",
    "CityState",
    "ResolvedAddress",
    # Results
    "ResolutionResult",
]
