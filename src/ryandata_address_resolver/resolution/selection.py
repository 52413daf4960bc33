"""Candidate selection for multi-result geocode queries."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ryandata_address_resolver.core.address_formatter import is_plus_code, leading_segment
from ryandata_address_resolver.models.address import GeocodeCandidate
from ryandata_address_resolver.models.errors import ResolutionFailure

logger = logging.getLogger(__name__)

# Fewer components than this usually means an area-only result (city, region, country)
MIN_COMPONENTS_FOR_STREET_RESULT = 4


class CandidateSelector:
    """Picks one candidate out of a provider's ordered result list.

    Defaults to the first candidate and switches to the first one, scanning
    in order, whose formatted address does not lead with a Plus Code and
    which has at least ``min_components`` components. The scan stops at the
    first qualifying candidate.
    """

    def __init__(self, min_components: int = MIN_COMPONENTS_FOR_STREET_RESULT) -> None:
        self._min_components = min_components

    @property
    def min_components(self) -> int:
        return self._min_components

    def qualifies(self, candidate: GeocodeCandidate) -> bool:
        """True if the candidate looks like a full street-level result."""
        if is_plus_code(leading_segment(candidate.formatted_address)):
            return False
        return len(candidate.components) >= self._min_components

    def select(self, candidates: Sequence[GeocodeCandidate]) -> GeocodeCandidate:
        """Select the candidate to map.

        Args:
            candidates: Provider results, most relevant first.

        Returns:
            The first qualifying candidate, or ``candidates[0]`` if none qualify.

        Raises:
            ResolutionFailure: If ``candidates`` is empty.
        """
        if not candidates:
            raise ResolutionFailure.empty_result("candidate selection")

        for index, candidate in enumerate(candidates):
            if self.qualifies(candidate):
                if index:
                    logger.debug(
                        "Selected candidate %d of %d: %s",
                        index,
                        len(candidates),
                        candidate.formatted_address[:50],
                    )
                return candidate
        return candidates[0]


def select_candidate(candidates: Sequence[GeocodeCandidate]) -> GeocodeCandidate:
    """Select with the default threshold."""
    return CandidateSelector().select(candidates)
