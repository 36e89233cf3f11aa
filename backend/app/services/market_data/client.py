"""
CoinGecko Market Data Client

Thin async wrapper over the public CoinGecko v3 API:
    /coins/markets            batched current snapshots
    /coins/{id}/market_chart  hourly price + volume history

One attempt per call, no retry, no caching. Every request asks
intermediaries not to serve a cached copy.
"""

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from app.core.config import settings
from app.services.base import ExternalAPIError

logger = logging.getLogger(__name__)


class CoinGeckoClient:
    """CoinGecko public API client."""

    name = "CoinGeckoClient"

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self._base_url = (base_url or settings.coingecko_base_url).rstrip("/")
        self._user_agent = user_agent or settings.http_user_agent
        self._timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.http_timeout_seconds
        )
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            kwargs: dict[str, Any] = {}
            if self._timeout_seconds:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self._timeout_seconds)
            # Without an explicit timeout aiohttp keeps its own default
            self._session = aiohttp.ClientSession(
                headers={
                    "Accept": "application/json",
                    "User-Agent": self._user_agent,
                    "Cache-Control": "no-cache",
                    "Pragma": "no-cache",
                },
                **kwargs,
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _get_json(self, path: str, params: dict[str, str]) -> Any:
        session = await self._ensure_session()
        url = f"{self._base_url}{path}"
        try:
            async with session.get(url, params=params) as resp:
                if not 200 <= resp.status < 300:
                    raise ExternalAPIError(
                        self.name,
                        f"Upstream {resp.status}",
                        {"url": url, "status": resp.status},
                    )
                return await resp.json(content_type=None)
        except aiohttp.ClientError as e:
            raise ExternalAPIError(self.name, str(e) or type(e).__name__, {"url": url}) from e
        except asyncio.TimeoutError as e:
            raise ExternalAPIError(self.name, "Upstream timeout", {"url": url}) from e

    async def get_markets(self, coin_ids: list[str]) -> list[dict[str, Any]]:
        """Current snapshot rows for the given coin ids, market-cap order."""
        params = {
            "vs_currency": settings.vs_currency,
            "ids": ",".join(coin_ids),
            "order": "market_cap_desc",
            "per_page": "50",
            "page": "1",
            "sparkline": "false",
            "price_change_percentage": "24h",
        }
        payload = await self._get_json("/coins/markets", params)
        if not isinstance(payload, list):
            raise ExternalAPIError(self.name, "Unexpected markets payload")
        logger.debug(f"Fetched {len(payload)} market rows for {params['ids']}")
        return payload

    async def get_market_chart(self, coin_id: str) -> dict[str, Any]:
        """Hourly price and volume history for one coin."""
        params = {
            "vs_currency": settings.vs_currency,
            "days": str(settings.chart_days),
            "interval": settings.chart_interval,
        }
        payload = await self._get_json(f"/coins/{quote(coin_id, safe='')}/market_chart", params)
        if not isinstance(payload, dict):
            raise ExternalAPIError(self.name, f"Unexpected chart payload for {coin_id}")
        return payload

    async def health_check(self) -> bool:
        try:
            session = await self._ensure_session()
            async with session.get(f"{self._base_url}/ping") as resp:
                return resp.status == 200
        except aiohttp.ClientError as e:
            logger.warning(f"CoinGecko ping failed: {e}")
            return False


# Singleton instance
_client: Optional[CoinGeckoClient] = None


def get_market_data_client() -> CoinGeckoClient:
    """Get or create the market data client."""
    global _client
    if _client is None:
        _client = CoinGeckoClient()
    return _client


async def close_market_data_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
