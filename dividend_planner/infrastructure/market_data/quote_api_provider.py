"""
Exchange Quote API Provider
Fetches the current unit price of a listed asset over HTTP

Expected payload: {"results": [{"symbol": "...", "regularMarketPrice": 10.5}]}
"""

import logging
import time
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class QuoteApiProvider:
    """
    Quote API price provider

    Any failure (network, non-200, missing field) yields None, never raises.
    """

    HEADERS = {
        'Accept': 'application/json',
        'User-Agent': 'dividend-planner/1.0',
    }

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        cache_ttl_seconds: int = 60
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout_seconds = timeout_seconds
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: Dict[str, tuple[float, Decimal]] = {}

    async def get_current_price(self, identifier: str) -> Optional[Decimal]:
        symbol = (identifier or "").strip().upper()
        if not symbol:
            return None

        cached = self._cache_get(symbol)
        if cached is not None:
            return cached

        url = f"{self.base_url}/quote/{quote(symbol, safe='')}"
        params = {"token": self.token} if self.token else None
        payload = await self._request_json(url, params=params)
        if payload is None:
            return None

        price = self._extract_price(payload)
        if price is None:
            logger.warning(f"Quote API returned no price for {symbol}")
            return None

        self._cache_set(symbol, price)
        return price

    async def _request_json(self, url: str, params: Optional[dict] = None) -> Optional[dict]:
        """
        Single GET, JSON body or None.
        """
        try:
            async with httpx.AsyncClient(headers=self.HEADERS, timeout=self.timeout_seconds) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning(f"Quote API request failed for {url}: {exc}")
            return None

        if response.status_code != 200:
            logger.warning(f"Quote API status {response.status_code} for {url}")
            return None

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"Quote API non-JSON payload for {url}")
            return None
        return data if isinstance(data, dict) else None

    @staticmethod
    def _extract_price(payload: dict) -> Optional[Decimal]:
        results = payload.get("results")
        if not isinstance(results, list) or not results:
            return None
        first = results[0]
        if not isinstance(first, dict):
            return None

        raw = first.get("regularMarketPrice")
        if raw is None or isinstance(raw, bool):
            return None
        try:
            price = Decimal(str(raw))
        except InvalidOperation:
            return None
        if not price.is_finite() or price <= Decimal('0'):
            return None
        return price

    def _cache_get(self, key: str) -> Optional[Decimal]:
        cached = self._cache.get(key)
        if not cached:
            return None
        ts, value = cached
        if time.time() - ts > self.cache_ttl_seconds:
            return None
        return value

    def _cache_set(self, key: str, value: Decimal) -> None:
        self._cache[key] = (time.time(), value)
