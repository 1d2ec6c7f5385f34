"""
PRICE REFRESH SERVICE
Advisory price update for form rows

RESPONSIBILITIES:
- Fan out one independent lookup per row
- Apply each successful price to its own row as soon as it arrives
- Log and skip failures without touching the row

RULES:
❌ Never called by the allocation engine
❌ One failed or slow lookup never blocks the others
✅ Only price_per_unit is overwritten
✅ Partial completion is a normal outcome
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, Union

from dividend_planner.domain.models import AssetEntry
from dividend_planner.infrastructure.market_data.types import PriceLookupProvider

logger = logging.getLogger(__name__)

PriceCallback = Callable[[int, AssetEntry, Decimal], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class RefreshReport:
    entries: Tuple[AssetEntry, ...]
    updated: Tuple[str, ...]
    failed: Tuple[str, ...]


class PriceRefreshService:
    """
    Price Refresh Service
    Concurrent, partially-failing batch of price lookups
    """

    def __init__(self, provider: PriceLookupProvider, timeout_seconds: float = 10.0):
        self.provider = provider
        self.timeout_seconds = timeout_seconds

    async def lookup_current_price(self, identifier: str) -> Optional[Decimal]:
        """
        Look up one price; None on any failure

        Args:
            identifier: Asset ticker/name

        Returns:
            Positive price, or None (failure already logged)
        """
        if not identifier or not identifier.strip():
            return None
        try:
            price = await asyncio.wait_for(
                self.provider.get_current_price(identifier.strip()),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Price lookup timed out for {identifier}")
            return None
        except Exception as exc:
            # Provider bugs are logged like network failures; the batch goes on
            logger.warning(f"Price lookup failed for {identifier}: {exc}")
            return None

        if price is None or price <= Decimal('0'):
            logger.warning(f"No usable price for {identifier}")
            return None
        return price

    async def refresh_all(
        self,
        entries: Sequence[AssetEntry],
        on_price: Optional[PriceCallback] = None
    ) -> RefreshReport:
        """
        Refresh prices for every row that has an identifier

        Args:
            entries: Current rows, in display order
            on_price: Called as (index, updated row, price) when a lookup succeeds

        Returns:
            RefreshReport with updated rows and per-identifier outcome
        """
        rows: List[AssetEntry] = list(entries)
        updated: List[str] = []
        failed: List[str] = []

        async def refresh_row(index: int, entry: AssetEntry) -> None:
            price = await self.lookup_current_price(entry.identifier)
            if price is None:
                failed.append(entry.identifier)
                return
            new_entry = replace(rows[index], price_per_unit=str(price))
            rows[index] = new_entry
            updated.append(entry.identifier)
            if on_price is None:
                return
            try:
                outcome = on_price(index, new_entry, price)
                if asyncio.iscoroutine(outcome):
                    await outcome
            except Exception as exc:
                # The price is already in the report; the batch goes on
                logger.warning(f"Applying price for {entry.identifier} failed: {exc}")

        tasks = [
            asyncio.create_task(refresh_row(index, entry))
            for index, entry in enumerate(rows)
            if entry.identifier and entry.identifier.strip()
        ]
        if tasks:
            await asyncio.gather(*tasks)

        logger.info(f"Price refresh: {len(updated)} updated, {len(failed)} failed")
        return RefreshReport(
            entries=tuple(rows),
            updated=tuple(updated),
            failed=tuple(failed),
        )
