from __future__ import annotations

from ryandata_address_resolver.validation.validators import (
    LATITUDE_RANGE,
    LONGITUDE_RANGE,
    CoordinatePair,
    CoordinateValidator,
    LatitudeRangeValidator,
    LongitudeRangeValidator,
    create_coordinate_validators,
    validate_coordinates,
    validate_latitude,
    validate_longitude,
)

__all__ = [
    "LATITUDE_RANGE",
    "LONGITUDE_RANGE",
    "CoordinatePair",
    "CoordinateValidator",
    "LatitudeRangeValidator",
    "LongitudeRangeValidator",
    "create_coordinate_validators",
    "validate_coordinates",
    "validate_latitude",
    "validate_longitude",
]
