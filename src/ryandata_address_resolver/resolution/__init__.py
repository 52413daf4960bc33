"""Resolution building blocks: taxonomy mapping, candidate selection, postal backfill."""

from __future__ import annotations

from ryandata_address_resolver.resolution.backfill import (
    POSTAL_CODE_RESULT_TYPE,
    PostalCodeBackfiller,
    find_postal_code,
)
from ryandata_address_resolver.resolution.selection import (
    MIN_COMPONENTS_FOR_STREET_RESULT,
    CandidateSelector,
    select_candidate,
)
from ryandata_address_resolver.resolution.taxonomy import (
    SUBLOCALITY_TAGS,
    ComponentTaxonomyMapper,
    map_components,
    resolve_city_state,
    resolve_street,
)

__all__ = [
    "ComponentTaxonomyMapper",
    "SUBLOCALITY_TAGS",
    "map_components",
    "resolve_city_state",
    "resolve_street",
    "CandidateSelector",
    "MIN_COMPONENTS_FOR_STREET_RESULT",
    "select_candidate",
    "PostalCodeBackfiller",
    "POSTAL_CODE_RESULT_TYPE",
    "find_postal_code",
]
