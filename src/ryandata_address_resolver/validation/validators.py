"""Coordinate validation.

The range gate every coordinate pair passes before it is accepted into a
ResolvedAddress or sent to a provider. ``validate_coordinates`` is the fast
boolean form; ``CoordinateValidator`` runs the same checks through a
validator pipeline and reports which side failed.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, NamedTuple

from abstract_validation_base import (
    BaseValidator,
    CompositeValidator,
    ValidationResult,
    ValidatorPipelineBuilder,
)

LATITUDE_RANGE: tuple[float, float] = (-90.0, 90.0)
LONGITUDE_RANGE: tuple[float, float] = (-180.0, 180.0)


class CoordinatePair(NamedTuple):
    """Unchecked latitude/longitude as supplied by a caller or provider."""

    lat: Any
    lng: Any


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass; True/False are not coordinates
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large to convert to float
        return False


def _in_range(value: Any, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    return _is_finite_number(value) and low <= value <= high


def validate_latitude(lat: Any) -> bool:
    return _in_range(lat, LATITUDE_RANGE)


def validate_longitude(lng: Any) -> bool:
    return _in_range(lng, LONGITUDE_RANGE)


def validate_coordinates(lat: Any, lng: Any) -> bool:
    """Check that a coordinate pair is finite and in range.

    Total over every input: None, NaN, infinities, booleans and non-numeric
    values all give False.

    Args:
        lat: Latitude, expected in [-90, 90].
        lng: Longitude, expected in [-180, 180].

    Returns:
        True if both values are finite numbers within range.
    """
    return validate_latitude(lat) and validate_longitude(lng)


class LatitudeRangeValidator(BaseValidator[CoordinatePair]):
    """Validates latitude is a finite number in [-90, 90]."""

    @property
    def name(self) -> str:
        return "latitude_range"

    def validate(self, item: CoordinatePair) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        if not validate_latitude(item.lat):
            result.add_error(
                "latitude",
                f"Latitude must be a finite number in [-90, 90], got {item.lat!r}",
                item.lat,
            )
        return result


class LongitudeRangeValidator(BaseValidator[CoordinatePair]):
    """Validates longitude is a finite number in [-180, 180]."""

    @property
    def name(self) -> str:
        return "longitude_range"

    def validate(self, item: CoordinatePair) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        if not validate_longitude(item.lng):
            result.add_error(
                "longitude",
                f"Longitude must be a finite number in [-180, 180], got {item.lng!r}",
                item.lng,
            )
        return result


def create_coordinate_validators() -> CompositeValidator[CoordinatePair]:
    """Create the latitude + longitude validation pipeline."""
    builder: ValidatorPipelineBuilder[CoordinatePair] = ValidatorPipelineBuilder(
        "coordinate_validation"
    )
    builder.add(LatitudeRangeValidator())
    builder.add(LongitudeRangeValidator())
    return builder.build()


class CoordinateValidator:
    """Range gate for coordinate pairs.

    Example:
        >>> validator = CoordinateValidator()
        >>> validator.is_valid(41.8, -87.6)
        True
        >>> [e.field for e in validator.check(91, 0).errors]
        ['latitude']
    """

    def __init__(self) -> None:
        self._pipeline = create_coordinate_validators()

    @property
    def name(self) -> str:
        return "coordinates"

    def check(self, lat: Any, lng: Any) -> ValidationResult:
        """Run both range validators and collect their errors."""
        return self._pipeline.validate(CoordinatePair(lat, lng))

    def is_valid(self, lat: Any, lng: Any) -> bool:
        return validate_coordinates(lat, lng)
