"""Tests for HTTP-based adapters."""

import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from spoonacular_proxy.adapters.spoonacular_client import HttpxSpoonacularClient
from spoonacular_proxy.domain.upstream import Locator
from spoonacular_proxy.errors import UpstreamError


def _client(handler) -> HttpxSpoonacularClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxSpoonacularClient(
        api_key="key",
        base_url="https://api.test/",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_get_sends_params_and_api_key() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"results": []})

    client = _client(handler)
    locator = Locator.get(
        "/recipes/complexSearch",
        {"query": "pasta", "number": 12, "addRecipeInformation": True, "tags": None},
    )

    payload = asyncio.run(client.send(locator))

    assert payload == {"results": []}
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/recipes/complexSearch"
    assert request.url.params["apiKey"] == "key"
    assert request.url.params["query"] == "pasta"
    assert request.url.params["number"] == "12"
    assert request.url.params["addRecipeInformation"] == "true"
    assert "tags" not in request.url.params


def test_post_sends_form_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"cuisine": "Thai"})

    client = _client(handler)
    locator = Locator.post_form(
        "/recipes/cuisine", {"title": "Pad Thai", "ingredientList": None}
    )

    payload = asyncio.run(client.send(locator))

    assert payload == {"cuisine": "Thai"}
    request = seen[0]
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert parse_qs(request.content.decode()) == {"title": ["Pad Thai"]}
    assert request.url.params["apiKey"] == "key"


def test_non_success_status_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "not found"})

    client = _client(handler)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.send(Locator.get("/recipes/1/information", {})))

    assert exc_info.value.status_code == 404
    assert "404" in exc_info.value.message


def test_unparseable_body_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    client = _client(handler)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.send(Locator.get("/recipes/1/summary", {})))

    assert exc_info.value.status_code == 200


def test_transport_error_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.send(Locator.get("/recipes/random", {})))

    assert exc_info.value.status_code is None
    assert "connection refused" in exc_info.value.message


def test_close_closes_http_session() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))

    asyncio.run(client.close())

    assert client.http_client.is_closed
