"""
ALLOCATION ENGINE
Convert a monthly dividend goal → whole units per asset

RESPONSIBILITIES:
- Weight each asset by its yield (payout / price)
- Split the goal proportionally to yield share
- Convert each share into whole units
- Aggregate cost and payout totals

RULES (LOCKED):
❌ No validation (inputs come from the validator)
❌ No display rounding
❌ No reordering of assets
✅ Use ceiling() ALWAYS, realized payout never undershoots the goal
✅ Full Decimal precision in returned values
✅ Deterministic output
"""

from decimal import Decimal, ROUND_CEILING
from typing import List, Sequence

from dividend_planner.domain.models import (
    AllocationPlanRow,
    AllocationResult,
    ValidAsset,
)


class AllocationEngine:
    """
    Allocation Engine
    Proportional-to-yield split of a payout goal across assets
    """

    def allocate(
        self,
        goal: Decimal,
        assets: Sequence[ValidAsset]
    ) -> AllocationResult:
        """
        Build the purchase plan

        Args:
            goal: Target monthly payout (> 0)
            assets: Validated assets, non-empty, in input order

        Returns:
            AllocationResult with one row per asset
        """
        total_yield = sum((asset.yield_ratio for asset in assets), Decimal('0'))

        # Every yield is > 0 after validation, so this only trips on misuse
        if total_yield <= Decimal('0'):
            raise ValueError("Total yield must be positive; run the validator first")

        rows: List[AllocationPlanRow] = []
        for asset in assets:
            rows.append(self._plan_single_asset(asset, goal, total_yield))

        total_cost = sum((row.cost for row in rows), Decimal('0'))
        total_payout = sum((row.payout_achieved for row in rows), Decimal('0'))

        return AllocationResult(
            goal=goal,
            rows=tuple(rows),
            total_cost=total_cost,
            total_payout=total_payout,
        )

    def _plan_single_asset(
        self,
        asset: ValidAsset,
        goal: Decimal,
        total_yield: Decimal
    ) -> AllocationPlanRow:
        """
        Plan units for a single asset

        Args:
            asset: Validated asset
            goal: Target monthly payout
            total_yield: Sum of yields across all assets

        Returns:
            Plan row for the asset
        """
        allocation = (asset.yield_ratio / total_yield) * goal
        units = self._calculate_ceiling_units(allocation, asset.payout_per_unit)
        unit_count = Decimal(units)

        return AllocationPlanRow(
            identifier=asset.identifier,
            units_to_buy=units,
            cost=unit_count * asset.price_per_unit,
            payout_achieved=unit_count * asset.payout_per_unit,
            allocation=allocation,
            yield_ratio=asset.yield_ratio,
        )

    @staticmethod
    def _calculate_ceiling_units(allocation: Decimal, payout_per_unit: Decimal) -> int:
        """
        Calculate units using ceiling() - ALWAYS

        NEVER floor, NEVER round to nearest. Upward rounding is what
        keeps the realized payout at or above the allocation.

        Args:
            allocation: Payout this asset must contribute
            payout_per_unit: Payout of one unit

        Returns:
            Number of whole units (ceiled, never negative)
        """
        exact_units = allocation / payout_per_unit
        units = int(exact_units.to_integral_value(rounding=ROUND_CEILING))
        return max(0, units)
