from __future__ import annotations

import asyncio

import pytest

from ryandata_address_resolver.core import QueryCache, cache_enabled_from_env
from ryandata_address_resolver.models import GeocodeCandidate, ProviderError
from ryandata_address_resolver.providers import CachedGeocodingProvider, StaticGeocodingProvider


def test_get_put_and_stats() -> None:
    cache = QueryCache(max_entries=4)

    assert cache.get("a") is None
    cache.put("a", 1)

    assert cache.get("a") == 1
    assert "a" in cache
    assert len(cache) == 1
    assert cache.stats == {"entries": 1, "hits": 1, "misses": 1}


def test_full_cache_is_dropped_entirely() -> None:
    cache = QueryCache(max_entries=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("b", 3)

    assert len(cache) == 2

    cache.put("c", 4)

    assert len(cache) == 1
    assert cache.get("c") == 4
    assert "a" not in cache


def test_zero_size_cache_stores_nothing() -> None:
    cache = QueryCache(max_entries=0)
    cache.put("a", 1)

    assert len(cache) == 0


def test_size_and_flag_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RYANDATA_GEOCODE_CACHE_SIZE", "3")
    monkeypatch.setenv("RYANDATA_GEOCODE_CACHE", "false")

    cache = QueryCache()
    for key in range(4):
        cache.put(key, key)

    assert len(cache) == 1
    assert not cache_enabled_from_env()


def test_cached_provider_reuses_reverse_results() -> None:
    candidate = GeocodeCandidate(formatted_address="Somewhere")
    provider = StaticGeocodingProvider(reverse={(1.0, 2.0, None): [candidate]})
    cached = CachedGeocodingProvider(provider, QueryCache(max_entries=8))

    first = asyncio.run(cached.reverse_geocode(1.0, 2.0))
    first.clear()
    second = asyncio.run(cached.reverse_geocode(1.0, 2.0))

    assert second == [candidate]
    assert len(provider.calls) == 1


def test_cached_provider_normalizes_geocode_key() -> None:
    candidate = GeocodeCandidate(formatted_address="Somewhere")
    provider = StaticGeocodingProvider(forward={"Main St": [candidate]})
    cached = CachedGeocodingProvider(provider, QueryCache(max_entries=8))

    asyncio.run(cached.geocode("Main St"))
    again = asyncio.run(cached.geocode("  main st "))

    assert again == [candidate]
    assert len(provider.calls) == 1


def test_cached_provider_does_not_cache_errors() -> None:
    provider = StaticGeocodingProvider()
    cached = CachedGeocodingProvider(provider, QueryCache(max_entries=8))

    for _ in range(2):
        with pytest.raises(ProviderError):
            asyncio.run(cached.get_place_details("missing"))

    assert len(provider.calls) == 2
    assert len(cached.cache) == 0


def test_cached_provider_passes_predictions_through() -> None:
    provider = StaticGeocodingProvider()
    cached = CachedGeocodingProvider(provider, QueryCache(max_entries=8))

    asyncio.run(cached.get_place_predictions("Main"))
    asyncio.run(cached.get_place_predictions("Main"))

    assert len(provider.calls) == 2
    assert cached.provider is provider
