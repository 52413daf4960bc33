"""Enumerations shared across the resolution engine."""

from __future__ import annotations

from enum import Enum


class ComponentTag(str, Enum):
    """Provider taxonomy labels the engine reads."""

    STREET_NUMBER = "street_number"
    ROUTE = "route"
    SUBLOCALITY = "sublocality"
    SUBLOCALITY_LEVEL_1 = "sublocality_level_1"
    LOCALITY = "locality"
    ADMIN_AREA_LEVEL_1 = "administrative_area_level_1"
    COUNTRY = "country"
    POSTAL_CODE = "postal_code"


class ProviderErrorReason(str, Enum):
    """Failure categories a geocoding provider may report."""

    NETWORK = "network"
    QUOTA = "quota"
    NOT_FOUND = "not_found"
    MALFORMED_RESPONSE = "malformed_response"


class ResolutionFlow(str, Enum):
    """Entry points of the orchestrator, used as staleness keys."""

    SELECTION = "selection"
    COORDINATES = "coordinates"
    ADDRESS_TEXT = "address_text"
    PREDICTIONS = "predictions"


class ResolutionStatus(str, Enum):
    """Terminal state of one resolution call."""

    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    PROVIDER_ERROR = "provider_error"
    STALE = "stale"


# Place-details fields requested for a selection (components, geometry, formatted address)
DEFAULT_PLACE_FIELDS: tuple[str, ...] = ("address_components", "geometry", "formatted_address")
