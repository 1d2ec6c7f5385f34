"""
Provider chain - try primary, then fallbacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from dividend_planner.infrastructure.market_data.types import PriceLookupProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedProvider:
    name: str
    provider: PriceLookupProvider


class ChainedPriceProvider:
    def __init__(self, providers: List[NamedProvider]):
        self.providers = providers
        self.last_price_sources: Dict[str, str] = {}

    def get_last_sources(self) -> Dict[str, str]:
        return dict(self.last_price_sources)

    async def get_current_price(self, identifier: str) -> Optional[Decimal]:
        for named in self.providers:
            try:
                value = await named.provider.get_current_price(identifier)
            except Exception as exc:
                # One broken provider must not hide the fallbacks
                logger.warning(f"Provider {named.name} failed for {identifier}: {exc}")
                continue
            if value is not None and value > 0:
                self.last_price_sources[identifier] = named.name
                return value
        return None
