from __future__ import annotations

from typing import ClassVar

from ryandata_address_resolver.core.factory import PluginFactory
from ryandata_address_resolver.protocols import GeocodingProviderProtocol


class ProviderFactory(PluginFactory[GeocodingProviderProtocol]):
    """Registry-backed factory for geocoding providers.

    Example:
        >>> provider = ProviderFactory.create()  # Google Maps, key from env

        # Register a custom provider
        >>> ProviderFactory.register("mapbox", MapboxProvider)
        >>> provider = ProviderFactory.create("mapbox", token="...")
    """

    _registry: ClassVar[dict[str, type[GeocodingProviderProtocol]]] = {}
    _default_type: ClassVar[str] = "google"
    _entity_name: ClassVar[str] = "provider"

    @classmethod
    def _ensure_defaults_registered(cls) -> None:
        """Lazily register the bundled providers."""
        if "google" not in cls._registry:
            from ryandata_address_resolver.providers.google import GoogleMapsGeocodingProvider

            cls._registry["google"] = GoogleMapsGeocodingProvider
        if "static" not in cls._registry:
            from ryandata_address_resolver.providers.static import StaticGeocodingProvider

            cls._registry["static"] = StaticGeocodingProvider
