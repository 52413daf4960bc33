"""Property-based tests using Hypothesis for core components.

This module contains property tests that verify invariants of the taxonomy
mapper, candidate selector, coordinate validator and orchestrator using
Hypothesis strategies.
"""

from __future__ import annotations

import asyncio
import math

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from ryandata_address_resolver import AddressResolutionOrchestrator, StaticGeocodingProvider
from ryandata_address_resolver.core import compute_single_line, is_plus_code, split_segments
from ryandata_address_resolver.models import GeocodeCandidate, PartialAddress, ResolvedAddress
from ryandata_address_resolver.resolution import (
    CandidateSelector,
    map_components,
    resolve_city_state,
    resolve_street,
)
from ryandata_address_resolver.validation import validate_coordinates
from tests.strategies import (
    candidate_list_strategy,
    component_list_strategy,
    finite_float_strategy,
    formatted_address_strategy,
    non_finite_strategy,
    oversized_int_strategy,
    plus_code_strategy,
    segment_strategy,
    us_component_list_strategy,
    valid_coordinate_strategy,
)

# =============================================================================
# Taxonomy Mapper Property Tests
# =============================================================================


class TestTaxonomyProperties:
    """Property tests for component mapping and the city/state rule."""

    @given(component_list_strategy())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_locality_always_becomes_city(self, components: list) -> None:
        """When a locality is mapped, city is the locality."""
        partial = map_components(components)
        city, state = resolve_city_state(partial)

        if partial.locality:
            assert city == partial.locality
            assert state == (partial.admin_area_1 or partial.country or "")
        else:
            assert state == (partial.country or "")

    @given(component_list_strategy())
    @settings(max_examples=100)
    def test_mapping_takes_first_value_per_tag(self, components: list) -> None:
        """Every first-wins slot holds the first non-empty value for its tag."""
        partial = map_components(components)

        for tag, slot in (("route", "route"), ("locality", "locality"), ("postal_code", "postal_code")):
            expected = next((c.long_value for c in components if tag in c.tags), None)
            assert getattr(partial, slot) == expected

    @given(component_list_strategy())
    @settings(max_examples=50)
    def test_mapping_is_deterministic(self, components: list) -> None:
        assert map_components(components) == map_components(list(components))

    @given(us_component_list_strategy())
    def test_us_lists_resolve_to_number_and_route(self, components: list) -> None:
        partial = map_components(components)

        assert resolve_street(partial, None) == f"{partial.street_number} {partial.route}"

    @given(plus_code_strategy(), st.lists(segment_strategy(), max_size=3))
    def test_street_never_plus_code_segment(self, code: str, rest: list[str]) -> None:
        """A leading Plus Code segment never becomes the street line."""
        formatted = ", ".join([code, *rest])

        street = resolve_street(PartialAddress(), formatted)

        assert street != code
        assert street == (rest[0] if rest else "")


# =============================================================================
# Candidate Selector Property Tests
# =============================================================================


class TestSelectorProperties:
    @given(candidate_list_strategy())
    @settings(max_examples=100)
    def test_selected_is_first_qualifying_or_first(self, candidates: list[GeocodeCandidate]) -> None:
        selector = CandidateSelector()
        selected = selector.select(candidates)

        qualifying = [c for c in candidates if selector.qualifies(c)]
        if qualifying:
            assert selected is qualifying[0]
        else:
            assert selected is candidates[0]

    @given(candidate_list_strategy())
    def test_selected_candidate_is_from_input(self, candidates: list[GeocodeCandidate]) -> None:
        assert any(CandidateSelector().select(candidates) is c for c in candidates)


# =============================================================================
# Coordinate Validator Property Tests
# =============================================================================


class TestCoordinateProperties:
    @given(finite_float_strategy(), finite_float_strategy())
    @settings(max_examples=200)
    def test_finite_pairs_valid_iff_in_range(self, lat: float, lng: float) -> None:
        expected = -90 <= lat <= 90 and -180 <= lng <= 180
        assert validate_coordinates(lat, lng) is expected

    @given(non_finite_strategy(), st.one_of(finite_float_strategy(), non_finite_strategy()))
    def test_non_finite_pairs_invalid(self, bad: float, other: float) -> None:
        assert not validate_coordinates(bad, other)
        assert not validate_coordinates(other, bad)

    @given(oversized_int_strategy(), finite_float_strategy())
    def test_oversized_ints_invalid(self, huge: int, other: float) -> None:
        assert not validate_coordinates(huge, other)
        assert not validate_coordinates(other, huge)
        assert not ResolvedAddress(latitude=huge, longitude=other).has_coordinates

    @given(st.one_of(finite_float_strategy(), non_finite_strategy()), finite_float_strategy())
    def test_resolved_address_never_partially_valid(self, lat: float, lng: float) -> None:
        address = ResolvedAddress(latitude=lat, longitude=lng)

        if address.has_coordinates:
            assert validate_coordinates(address.latitude, address.longitude)
        else:
            assert address.latitude is None and address.longitude is None
        assert address.latitude is None or not math.isnan(address.latitude)


# =============================================================================
# Formatter Property Tests
# =============================================================================


class TestFormatterProperties:
    @given(formatted_address_strategy())
    def test_segments_are_trimmed_and_non_empty(self, formatted: str) -> None:
        for segment in split_segments(formatted):
            assert segment
            assert segment == segment.strip()

    @given(plus_code_strategy())
    def test_plus_codes_detected(self, code: str) -> None:
        assert is_plus_code(code)
        assert is_plus_code(f"{code} Springfield")

    @given(st.sampled_from(["", "Main St", "Springfield"]), st.sampled_from(["", "IL"]))
    def test_single_line_has_no_stray_separators(self, street: str, state: str) -> None:
        line = compute_single_line(street, "", state, "")

        assert not line.startswith(",")
        assert not line.endswith(",")
        assert ", ," not in line


# =============================================================================
# Orchestrator Property Tests
# =============================================================================


class TestOrchestratorProperties:
    @given(valid_coordinate_strategy(), candidate_list_strategy())
    @settings(max_examples=50, deadline=None)
    def test_coordinates_flow_idempotent(
        self, coords: tuple[float, float], candidates: list[GeocodeCandidate]
    ) -> None:
        """Resolving the same coordinates twice yields identical addresses."""
        lat, lng = coords
        provider = StaticGeocodingProvider(reverse={(lat, lng, None): candidates})
        orchestrator = AddressResolutionOrchestrator(provider, use_cache=False)

        first = asyncio.run(orchestrator.resolve_from_coordinates(lat, lng))
        second = asyncio.run(orchestrator.resolve_from_coordinates(lat, lng))

        assert first.address == second.address
        assert first.address is not None
        assert (first.address.latitude, first.address.longitude) == (lat, lng)
        assert not is_plus_code(first.address.street_address)
