"""Component taxonomy mapping.

Turns a provider's ordered list of tagged address components into a
PartialAddress, then applies the city/state and street rules that make US
and international results come out in the same shape.

Mapping rules:
- One pass in provider order; providers list the most specific component
  first, so the first value seen for a tag is kept.
- ``sublocality`` and ``sublocality_level_1`` share a single slot. Within
  that slot the last component carrying either tag wins.

City/state rule:
- With a locality: city = locality, state = admin area 1, else country.
- Without one: city = admin area 1, else sublocality; state = country.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar

from ryandata_address_resolver.core.address_formatter import first_street_segment
from ryandata_address_resolver.models.address import (
    CityState,
    PartialAddress,
    RawAddressComponent,
)
from ryandata_address_resolver.models.enums import ComponentTag

# Tags whose first occurrence wins, keyed to the PartialAddress field they fill
_FIRST_WINS_SLOTS: dict[str, str] = {
    ComponentTag.STREET_NUMBER.value: "street_number",
    ComponentTag.ROUTE.value: "route",
    ComponentTag.LOCALITY.value: "locality",
    ComponentTag.ADMIN_AREA_LEVEL_1.value: "admin_area_1",
    ComponentTag.COUNTRY.value: "country",
    ComponentTag.POSTAL_CODE.value: "postal_code",
}

SUBLOCALITY_TAGS: frozenset[str] = frozenset(
    {ComponentTag.SUBLOCALITY.value, ComponentTag.SUBLOCALITY_LEVEL_1.value}
)


def map_components(components: Iterable[RawAddressComponent]) -> PartialAddress:
    """Map raw components onto a PartialAddress.

    A component carrying several tags can fill several slots.

    Args:
        components: Components in provider order.

    Returns:
        PartialAddress with every slot that had a matching, non-empty component.
    """
    slots: dict[str, str] = {}
    sublocality: str | None = None

    for component in components:
        value = component.long_value
        if not value:
            continue
        for tag in component.tags:
            slot = _FIRST_WINS_SLOTS.get(tag)
            if slot is not None and slot not in slots:
                slots[slot] = value
        if component.tags & SUBLOCALITY_TAGS:
            sublocality = value

    return PartialAddress(sublocality=sublocality, **slots)


def resolve_city_state(partial: PartialAddress) -> CityState:
    """Pick city and state from a PartialAddress using the locality rule.

    Args:
        partial: Mapped components.

    Returns:
        CityState; missing values come back as ``""``.
    """
    if partial.locality:
        return CityState(
            city=partial.locality,
            state=partial.admin_area_1 or partial.country or "",
        )
    return CityState(
        city=partial.admin_area_1 or partial.sublocality or "",
        state=partial.country or "",
    )


def resolve_street(partial: PartialAddress, fallback_formatted_address: str | None) -> str:
    """Build the street line.

    Prefers ``"{number} {route}"``, then the route alone, then the first
    segment of the formatted address with a leading Plus Code segment
    dropped.

    Args:
        partial: Mapped components.
        fallback_formatted_address: The provider's formatted address.

    Returns:
        Street line, or ``""`` when nothing usable remains.
    """
    if partial.street_number and partial.route:
        return f"{partial.street_number} {partial.route}"
    if partial.route:
        return partial.route
    return first_street_segment(fallback_formatted_address)


class ComponentTaxonomyMapper:
    """Bundles the mapping and field rules behind one injectable object.

    Example:
        >>> mapper = ComponentTaxonomyMapper()
        >>> partial = mapper.map(candidate.components)
        >>> city, state = mapper.resolve_city_state(partial)
    """

    name: ClassVar[str] = "google_taxonomy"

    def map(self, components: Iterable[RawAddressComponent]) -> PartialAddress:
        return map_components(components)

    def resolve_city_state(self, partial: PartialAddress) -> CityState:
        return resolve_city_state(partial)

    def resolve_street(self, partial: PartialAddress, fallback_formatted_address: str | None) -> str:
        return resolve_street(partial, fallback_formatted_address)
