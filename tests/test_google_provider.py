from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from ryandata_address_resolver.models import ProviderError, ProviderErrorReason
from ryandata_address_resolver.providers import GoogleMapsConfig, GoogleMapsGeocodingProvider

Handler = Callable[[httpx.Request], httpx.Response]

GEOCODE_RESULT = {
    "formatted_address": "123 Main St, Springfield, IL 62704, USA",
    "address_components": [
        {"long_name": "123", "short_name": "123", "types": ["street_number"]},
        {"long_name": "Main Street", "short_name": "Main St", "types": ["route"]},
        {"long_name": "Springfield", "short_name": "Springfield", "types": ["locality", "political"]},
        {
            "long_name": "Illinois",
            "short_name": "IL",
            "types": ["administrative_area_level_1", "political"],
        },
        {"long_name": "62704", "short_name": "62704", "types": ["postal_code"]},
    ],
    "geometry": {"location": {"lat": 39.7817, "lng": -89.6501}},
}


def _provider(handler: Handler, **config: Any) -> GoogleMapsGeocodingProvider:
    return GoogleMapsGeocodingProvider(
        api_key="test-key",
        config=GoogleMapsConfig(base_url="http://test", **config),
        transport=httpx.MockTransport(handler),
    )


def _run(provider: GoogleMapsGeocodingProvider, call: Callable[[], Any]) -> Any:
    async def go() -> Any:
        async with provider:
            return await call()

    return asyncio.run(go())


def test_reverse_geocode_maps_results() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/geocode/json"
        assert request.url.params["latlng"] == "39.7817,-89.6501"
        assert request.url.params["key"] == "test-key"
        assert "result_type" not in request.url.params
        return httpx.Response(200, json={"status": "OK", "results": [GEOCODE_RESULT]})

    provider = _provider(handler)
    [candidate] = _run(provider, lambda: provider.reverse_geocode(39.7817, -89.6501))

    assert candidate.formatted_address.startswith("123 Main St")
    assert candidate.coordinates is not None
    assert candidate.coordinates.as_tuple() == (39.7817, -89.6501)
    assert candidate.components[1].long_value == "Main Street"
    assert candidate.components[3].short_value == "IL"
    assert candidate.components[2].has_tag("locality")


def test_reverse_geocode_scoped_to_postal_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["result_type"] == "postal_code"
        return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})

    provider = _provider(handler)
    result = _run(
        provider, lambda: provider.reverse_geocode(1.0, 2.0, result_type="postal_code")
    )

    assert result == []


def test_geocode_sends_address() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["address"] == "123 Main St, Springfield"
        return httpx.Response(200, json={"status": "OK", "results": [GEOCODE_RESULT]})

    provider = _provider(handler)
    result = _run(provider, lambda: provider.geocode("123 Main St, Springfield"))

    assert len(result) == 1


def test_place_predictions() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/place/autocomplete/json"
        assert request.url.params["input"] == "123 Main"
        assert request.url.params["types"] == "geocode"
        assert request.url.params["language"] == "en"
        return httpx.Response(
            200,
            json={
                "status": "OK",
                "predictions": [
                    {
                        "place_id": "abc",
                        "description": "123 Main St, Springfield, IL, USA",
                        "structured_formatting": {
                            "main_text": "123 Main St",
                            "secondary_text": "Springfield, IL, USA",
                        },
                    }
                ],
            },
        )

    provider = _provider(handler, language="en")
    [prediction] = _run(provider, lambda: provider.get_place_predictions("123 Main"))

    assert prediction.place_id == "abc"
    assert prediction.main_text == "123 Main St"
    assert prediction.secondary_text == "Springfield, IL, USA"


def test_place_details() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/place/details/json"
        assert request.url.params["place_id"] == "abc"
        assert request.url.params["fields"] == "address_components,geometry,formatted_address"
        return httpx.Response(200, json={"status": "OK", "result": GEOCODE_RESULT})

    provider = _provider(handler)
    candidate = _run(provider, lambda: provider.get_place_details("abc"))

    assert len(candidate.components) == 5


def test_place_details_empty_result_is_not_found() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "OK", "result": {}})

    provider = _provider(handler)
    with pytest.raises(ProviderError) as exc_info:
        _run(provider, lambda: provider.get_place_details("abc"))

    assert exc_info.value.reason is ProviderErrorReason.NOT_FOUND


@pytest.mark.parametrize(
    ("status", "reason"),
    [
        ("OVER_QUERY_LIMIT", ProviderErrorReason.QUOTA),
        ("OVER_DAILY_LIMIT", ProviderErrorReason.QUOTA),
        ("REQUEST_DENIED", ProviderErrorReason.QUOTA),
        ("NOT_FOUND", ProviderErrorReason.NOT_FOUND),
        ("INVALID_REQUEST", ProviderErrorReason.NOT_FOUND),
        ("UNKNOWN_ERROR", ProviderErrorReason.NETWORK),
        ("SOMETHING_NEW", ProviderErrorReason.MALFORMED_RESPONSE),
    ],
)
def test_service_status_mapping(status: str, reason: ProviderErrorReason) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": status, "error_message": "nope"})

    provider = _provider(handler)
    with pytest.raises(ProviderError) as exc_info:
        _run(provider, lambda: provider.reverse_geocode(1.0, 2.0))

    assert exc_info.value.reason is reason


@pytest.mark.parametrize(
    ("code", "reason"),
    [
        (429, ProviderErrorReason.QUOTA),
        (404, ProviderErrorReason.NOT_FOUND),
        (500, ProviderErrorReason.NETWORK),
        (503, ProviderErrorReason.NETWORK),
    ],
)
def test_http_status_mapping(code: int, reason: ProviderErrorReason) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(code, text="error")

    provider = _provider(handler)
    with pytest.raises(ProviderError) as exc_info:
        _run(provider, lambda: provider.geocode("x"))

    assert exc_info.value.reason is reason


def test_transport_error_is_network() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = _provider(handler)
    with pytest.raises(ProviderError) as exc_info:
        _run(provider, lambda: provider.geocode("x"))

    assert exc_info.value.reason is ProviderErrorReason.NETWORK


def test_timeout_is_network() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    provider = _provider(handler)
    with pytest.raises(ProviderError) as exc_info:
        _run(provider, lambda: provider.geocode("x"))

    assert exc_info.value.reason is ProviderErrorReason.NETWORK


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"status": "OK", "results": {"not": "a list"}}),
        httpx.Response(200, json={"status": "OK", "results": [{"geometry": {"location": {"lat": "x"}}}]}),
    ],
)
def test_malformed_responses(response: httpx.Response) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    provider = _provider(handler)
    with pytest.raises(ProviderError) as exc_info:
        _run(provider, lambda: provider.reverse_geocode(1.0, 2.0))

    assert exc_info.value.reason is ProviderErrorReason.MALFORMED_RESPONSE


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RYANDATA_GOOGLE_MAPS_API_KEY", "env-key")
    monkeypatch.setenv("RYANDATA_GOOGLE_MAPS_BASE_URL", "http://maps.local")
    monkeypatch.setenv("RYANDATA_GOOGLE_MAPS_TIMEOUT", "2.5")

    config = GoogleMapsConfig()

    assert config.api_key == "env-key"
    assert config.base_url == "http://maps.local"
    assert config.timeout == 2.5
    assert config.prediction_types == "geocode"


def test_provider_reused_across_event_loops() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.params["address"])
        return httpx.Response(200, json={"status": "OK", "results": [GEOCODE_RESULT]})

    provider = _provider(handler)

    async def geocode(address: str) -> tuple[Any, httpx.AsyncClient]:
        candidates = await provider.geocode(address)
        return candidates, provider.client

    first, first_client = asyncio.run(geocode("123 Main St"))
    second, second_client = asyncio.run(geocode("456 Oak Ave"))

    assert len(first) == len(second) == 1
    assert calls == ["123 Main St", "456 Oak Ave"]
    assert first_client is not second_client


def test_provider_usable_after_close() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "OK", "results": [GEOCODE_RESULT]})

    provider = _provider(handler)

    assert len(_run(provider, lambda: provider.geocode("123 Main St"))) == 1
    assert len(_run(provider, lambda: provider.geocode("123 Main St"))) == 1


def test_client_is_shared_within_one_loop() -> None:
    provider = _provider(lambda request: httpx.Response(200, json={"status": "ZERO_RESULTS"}))

    async def go() -> bool:
        async with provider:
            return provider.client is provider.client

    assert asyncio.run(go())
