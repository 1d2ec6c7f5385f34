"""
Result formatting helpers.
Read-only display projection of an allocation plan.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext

from dividend_planner.domain.models import (
    AllocationResult,
    DisplayResult,
    DisplayRow,
)


CENTS = Decimal("0.01")


def format_amount(value: Decimal) -> str:
    """Render a monetary value with exactly 2 decimals (half-up)."""
    with localcontext() as ctx:
        # Room for every integer digit plus the cents
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return f"{value.quantize(CENTS, rounding=ROUND_HALF_UP):f}"


def format_result(result: AllocationResult) -> DisplayResult:
    rows = tuple(
        DisplayRow(
            identifier=row.identifier,
            units_to_buy=str(row.units_to_buy),
            cost=format_amount(row.cost),
            payout_achieved=format_amount(row.payout_achieved),
        )
        for row in result.rows
    )
    return DisplayResult(
        rows=rows,
        total_cost=format_amount(result.total_cost),
        total_payout=format_amount(result.total_payout),
    )


def render_summary(display: DisplayResult, currency_symbol: str = "R$") -> str:
    lines = [
        f"{row.identifier}: {row.units_to_buy} units "
        f"(Investment: {currency_symbol} {row.cost})"
        for row in display.rows
    ]
    lines.append(f"Total investment: {currency_symbol} {display.total_cost}")
    lines.append(f"Monthly payout: {currency_symbol} {display.total_payout}")
    return "\n".join(lines)
