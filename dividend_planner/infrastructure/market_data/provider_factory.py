"""
Price provider factory (settings-driven).
"""

from __future__ import annotations

from typing import List, Optional

from dividend_planner.config import Settings, settings as default_settings
from dividend_planner.infrastructure.market_data.provider_chain import (
    ChainedPriceProvider,
    NamedProvider,
)
from dividend_planner.infrastructure.market_data.quote_api_provider import QuoteApiProvider
from dividend_planner.infrastructure.market_data.types import PriceLookupProvider
from dividend_planner.infrastructure.market_data.yfinance_provider import YFinanceProvider


def _build_provider(name: str, settings: Settings) -> PriceLookupProvider:
    name = (name or "").lower()
    if name == "quote_api":
        if not settings.QUOTE_API_BASE_URL:
            raise ValueError("QUOTE_API_BASE_URL missing")
        return QuoteApiProvider(
            base_url=settings.QUOTE_API_BASE_URL,
            token=settings.QUOTE_API_TOKEN,
            timeout_seconds=settings.PRICE_LOOKUP_TIMEOUT_SECONDS,
            cache_ttl_seconds=settings.PRICE_CACHE_TTL_SECONDS,
        )
    if name == "yfinance":
        return YFinanceProvider(symbol_suffix=settings.YF_SYMBOL_SUFFIX)
    raise ValueError(f"Unknown price provider: {name}")


def get_price_provider(settings: Optional[Settings] = None) -> ChainedPriceProvider:
    settings = settings or default_settings
    names = [settings.PRICE_PROVIDER] + [
        name for name in settings.PRICE_FALLBACK_PROVIDERS
        if name and name.lower() != settings.PRICE_PROVIDER.lower()
    ]

    providers: List[NamedProvider] = []
    for name in names:
        try:
            providers.append(NamedProvider(name.lower(), _build_provider(name, settings)))
        except ValueError:
            continue

    if not providers:
        raise RuntimeError("No valid price providers configured")
    return ChainedPriceProvider(providers)
