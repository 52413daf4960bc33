"""Generic helpers with no dependency on the address models.

Usage:
    from ryandata_address_resolver.core import (
        PluginFactory,
        QueryCache,
        SequenceTracker,
        is_plus_code,
        split_segments,
    )
"""

from __future__ import annotations

from ryandata_address_resolver.core.address_formatter import (
    PLUS_CODE_PATTERN,
    compute_single_line,
    first_street_segment,
    is_plus_code,
    leading_segment,
    split_segments,
)
from ryandata_address_resolver.core.cache import QueryCache, cache_enabled_from_env
from ryandata_address_resolver.core.factory import PluginFactory
from ryandata_address_resolver.core.sequencing import SequenceTracker

__all__ = [
    # Address text
    "PLUS_CODE_PATTERN",
    "compute_single_line",
    "first_street_segment",
    "is_plus_code",
    "leading_segment",
    "split_segments",
    # Caching
    "QueryCache",
    "cache_enabled_from_env",
    # Factories
    "PluginFactory",
    # Staleness
    "SequenceTracker",
]
