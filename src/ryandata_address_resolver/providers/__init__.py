from __future__ import annotations

from ryandata_address_resolver.providers.cached import CachedGeocodingProvider
from ryandata_address_resolver.providers.config import GoogleMapsConfig
from ryandata_address_resolver.providers.factory import ProviderFactory
from ryandata_address_resolver.providers.google import GoogleMapsGeocodingProvider
from ryandata_address_resolver.providers.static import ProviderCall, StaticGeocodingProvider

__all__ = [
    "CachedGeocodingProvider",
    "GoogleMapsConfig",
    "GoogleMapsGeocodingProvider",
    "ProviderCall",
    "ProviderFactory",
    "StaticGeocodingProvider",
]
