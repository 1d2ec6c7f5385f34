"""
Price lookup provider protocol for type hints.
"""

from __future__ import annotations

from typing import Protocol, Optional
from decimal import Decimal


class PriceLookupProvider(Protocol):
    async def get_current_price(self, identifier: str) -> Optional[Decimal]:
        ...
