import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from app.services.base import ExternalAPIError
from app.services.market_data import CoinGeckoClient, get_coin_id, resolve_coin_ids


def test_symbol_table():
    assert get_coin_id("BTC") == "bitcoin"
    assert get_coin_id("nope") is None
    assert resolve_coin_ids(["eth", "xyz", "btc", "eth"]) == ["ethereum", "bitcoin"]


def build_provider(seen, markets_status=200, markets_body=None, delay=0):
    async def markets(request):
        seen["markets"] = dict(request.query)
        seen["headers"] = dict(request.headers)
        await asyncio.sleep(delay)
        if markets_status != 200:
            return web.json_response({"error": "busy"}, status=markets_status)
        if markets_body is not None:
            return web.json_response(markets_body)
        return web.json_response([{"id": "bitcoin", "symbol": "btc"}])

    async def chart(request):
        seen["chart_id"] = request.match_info["coin_id"]
        seen["chart_path"] = request.raw_path
        seen["chart"] = dict(request.query)
        return web.json_response({"prices": [[1, 2.0]], "total_volumes": [[1, 3.0]]})

    provider = web.Application()
    provider.router.add_get("/coins/markets", markets)
    provider.router.add_get("/coins/{coin_id}/market_chart", chart)
    return provider


@pytest.mark.asyncio
async def test_markets_and_chart_requests():
    seen = {}
    async with TestServer(build_provider(seen)) as server:
        client = CoinGeckoClient(base_url=str(server.make_url("/")), user_agent="test-agent")
        try:
            rows = await client.get_markets(["bitcoin", "ethereum"])
            chart = await client.get_market_chart("bitcoin")
        finally:
            await client.close()

    assert rows == [{"id": "bitcoin", "symbol": "btc"}]
    assert seen["markets"]["ids"] == "bitcoin,ethereum"
    assert seen["markets"]["vs_currency"] == "usd"
    assert seen["markets"]["price_change_percentage"] == "24h"
    assert seen["headers"]["User-Agent"] == "test-agent"
    assert seen["headers"]["Cache-Control"] == "no-cache"

    assert chart["prices"] == [[1, 2.0]]
    assert seen["chart_id"] == "bitcoin"
    assert seen["chart"] == {"vs_currency": "usd", "days": "2", "interval": "hourly"}


@pytest.mark.asyncio
async def test_non_success_status_raises():
    async with TestServer(build_provider({}, markets_status=503)) as server:
        client = CoinGeckoClient(base_url=str(server.make_url("/")))
        try:
            with pytest.raises(ExternalAPIError) as exc_info:
                await client.get_markets(["bitcoin"])
        finally:
            await client.close()

    assert exc_info.value.message == "Upstream 503"
    assert exc_info.value.details["status"] == 503


@pytest.mark.asyncio
async def test_session_keeps_aiohttp_default_timeout():
    client = CoinGeckoClient(base_url="http://127.0.0.1:1")
    client._timeout_seconds = None
    try:
        session = await client._ensure_session()
        assert session.timeout.total == aiohttp.client.DEFAULT_TIMEOUT.total
        assert session.timeout.sock_connect == aiohttp.client.DEFAULT_TIMEOUT.sock_connect
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_session_uses_configured_timeout():
    client = CoinGeckoClient(base_url="http://127.0.0.1:1", timeout_seconds=5)
    try:
        session = await client._ensure_session()
        assert session.timeout.total == 5
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_unreachable_provider_raises():
    client = CoinGeckoClient(base_url=f"http://127.0.0.1:{unused_port()}")
    try:
        with pytest.raises(ExternalAPIError) as exc_info:
            await client.get_markets(["bitcoin"])
    finally:
        await client.close()

    assert exc_info.value.service_name == "CoinGeckoClient"
    assert exc_info.value.details["url"].endswith("/coins/markets")
    assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)


@pytest.mark.asyncio
async def test_slow_provider_times_out():
    async with TestServer(build_provider({}, delay=0.5)) as server:
        client = CoinGeckoClient(base_url=str(server.make_url("/")), timeout_seconds=0.05)
        try:
            with pytest.raises(ExternalAPIError):
                await client.get_markets(["bitcoin"])
        finally:
            await client.close()


@pytest.mark.asyncio
async def test_markets_object_payload_raises():
    body = {"status": {"error_code": 429, "error_message": "rate limited"}}
    async with TestServer(build_provider({}, markets_body=body)) as server:
        client = CoinGeckoClient(base_url=str(server.make_url("/")))
        try:
            with pytest.raises(ExternalAPIError) as exc_info:
                await client.get_markets(["bitcoin"])
        finally:
            await client.close()

    assert exc_info.value.message == "Unexpected markets payload"


@pytest.mark.asyncio
async def test_chart_coin_id_is_path_quoted():
    seen = {}
    async with TestServer(build_provider(seen)) as server:
        client = CoinGeckoClient(base_url=str(server.make_url("/")))
        try:
            await client.get_market_chart("usd coin")
        finally:
            await client.close()

    assert seen["chart_path"].startswith("/coins/usd%20coin/market_chart")
