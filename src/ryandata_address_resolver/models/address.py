"""Address model classes.

Raw provider shapes (components, candidates, predictions) and the canonical
ResolvedAddress record handed back to callers. All models are frozen: a
candidate is owned by the provider and a ResolvedAddress is built once per
resolution call.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from ryandata_address_resolver.core.address_formatter import compute_single_line
from ryandata_address_resolver.models.enums import ComponentTag
from ryandata_address_resolver.validation.validators import validate_coordinates


class RawAddressComponent(BaseModel):
    """One tagged piece of a provider address (e.g. a route or a locality)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    tags: frozenset[str] = Field(
        default_factory=frozenset,
        description="Taxonomy labels such as 'route' or 'locality'",
        validation_alias=AliasChoices("tags", "types"),
    )
    long_value: str = Field(
        default="",
        description="Full text of the component",
        validation_alias=AliasChoices("long_value", "longValue", "long_name"),
    )
    short_value: str = Field(
        default="",
        description="Abbreviated text of the component (e.g. 'IL' for Illinois)",
        validation_alias=AliasChoices("short_value", "shortValue", "short_name"),
    )

    def has_tag(self, tag: str | ComponentTag) -> bool:
        return getattr(tag, "value", tag) in self.tags


class Coordinates(BaseModel):
    """A latitude/longitude pair as returned by a provider or supplied by a caller.

    No range check happens here; see validation.validators.validate_coordinates.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(validation_alias=AliasChoices("lng", "lon", "longitude"))

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


class GeocodeCandidate(BaseModel):
    """One raw result from a provider query."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    formatted_address: str = Field(
        default="",
        validation_alias=AliasChoices("formatted_address", "formattedAddress"),
    )
    components: tuple[RawAddressComponent, ...] = Field(
        default=(),
        validation_alias=AliasChoices("components", "address_components"),
    )
    coordinates: Coordinates | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_geometry(cls, data: Any) -> Any:
        """Lift ``geometry.location`` into ``coordinates`` for raw provider payloads."""
        if not isinstance(data, dict) or data.get("coordinates") is not None:
            return data
        geometry = data.get("geometry")
        if isinstance(geometry, dict) and isinstance(geometry.get("location"), dict):
            return {**data, "coordinates": geometry["location"]}
        return data

    @classmethod
    def from_provider_payload(cls, payload: dict[str, Any]) -> GeocodeCandidate:
        """Build a candidate from a provider JSON result object."""
        return cls.model_validate(payload)


class PlacePrediction(BaseModel):
    """An autocomplete prediction shown to the user before a selection."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    place_id: str = Field(validation_alias=AliasChoices("place_id", "placeId"))
    description: str = Field(
        default="",
        validation_alias=AliasChoices("description", "descriptionText"),
    )
    main_text: str = ""
    secondary_text: str = ""

    @model_validator(mode="before")
    @classmethod
    def _flatten_structured_formatting(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        formatting = data.get("structured_formatting")
        if isinstance(formatting, dict):
            return {
                **data,
                "main_text": data.get("main_text") or formatting.get("main_text") or "",
                "secondary_text": data.get("secondary_text")
                or formatting.get("secondary_text")
                or "",
            }
        return data


class PartialAddress(BaseModel):
    """Structured fields pulled out of a component list, before city/state rules apply."""

    model_config = ConfigDict(frozen=True)

    street_number: str | None = None
    route: str | None = None
    sublocality: str | None = None
    locality: str | None = None
    admin_area_1: str | None = None
    country: str | None = None
    postal_code: str | None = None


class CityState(NamedTuple):
    city: str
    state: str


class ResolvedAddress(BaseModel):
    """Canonical output of a resolution call.

    Text fields default to the empty string, which means "resolved to
    nothing"; callers use that to decide whether to prompt the user.
    Coordinates are either both present and in range, or both absent.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    street_address: str = Field(
        default="",
        description="Street line, never a Plus Code",
        validation_alias=AliasChoices("street_address", "streetAddress", "address"),
    )
    city: str = Field(default="", description="City under the locality rule")
    state: str = Field(default="", description="State, region or country under the locality rule")
    postal_code: str = Field(
        default="",
        validation_alias=AliasChoices("postal_code", "postalCode", "zipCode"),
    )
    latitude: float | None = None
    longitude: float | None = None

    @field_validator("street_address", "city", "state", "postal_code", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="before")
    @classmethod
    def _clear_invalid_coordinates(cls, data: Any) -> Any:
        """Drop both coordinates unless the pair passes the range gate."""
        if not isinstance(data, dict):
            return data
        lat = data.get("latitude")
        lng = data.get("longitude")
        if lat is None and lng is None:
            return data
        if validate_coordinates(lat, lng):
            return data
        return {**data, "latitude": None, "longitude": None}

    @classmethod
    def empty(cls) -> ResolvedAddress:
        """Record with every field empty or absent (nothing found)."""
        return cls()

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_empty(self) -> bool:
        return not (
            self.street_address or self.city or self.state or self.postal_code
        ) and not self.has_coordinates

    @property
    def single_line(self) -> str:
        """One-line label, e.g. ``123 Main St, Springfield, IL 62704``."""
        return compute_single_line(self.street_address, self.city, self.state, self.postal_code)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
