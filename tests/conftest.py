"""Shared pytest fixtures and Hypothesis configuration.

This module provides pytest fixtures and configures Hypothesis profiles
for the test suite.
"""

from __future__ import annotations

import pytest
from hypothesis import Verbosity, settings

from ryandata_address_resolver.models import (
    Coordinates,
    GeocodeCandidate,
    PlacePrediction,
)
from ryandata_address_resolver.providers import StaticGeocodingProvider
from tests.strategies import SPRINGFIELD_COMPONENTS, make_component

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


@pytest.fixture
def springfield_candidate() -> GeocodeCandidate:
    return GeocodeCandidate(
        formatted_address="123 Main St, Springfield, IL 62704, USA",
        components=SPRINGFIELD_COMPONENTS,
        coordinates=Coordinates(lat=39.7817, lng=-89.6501),
    )


@pytest.fixture
def plus_code_candidate() -> GeocodeCandidate:
    return GeocodeCandidate(
        formatted_address="8GXX+PH, Springfield, IL",
        components=(
            make_component("plus_code", "8GXX+PH"),
            make_component("locality", "Springfield"),
            make_component("administrative_area_level_1", "IL"),
        ),
        coordinates=Coordinates(lat=39.78, lng=-89.65),
    )


@pytest.fixture
def springfield_prediction() -> PlacePrediction:
    return PlacePrediction(
        place_id="place-123",
        description="123 Main St, Springfield, IL, USA",
    )


@pytest.fixture
def static_provider(
    springfield_candidate: GeocodeCandidate,
    springfield_prediction: PlacePrediction,
) -> StaticGeocodingProvider:
    return StaticGeocodingProvider(
        predictions={"123 Main": [springfield_prediction]},
        places={"place-123": springfield_candidate},
        reverse={(39.7817, -89.6501, None): [springfield_candidate]},
        forward={"123 Main St, Springfield, IL": [springfield_candidate]},
    )
