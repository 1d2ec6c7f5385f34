from decimal import Decimal

from dividend_planner.domain.models import AllocationPlanRow, AllocationResult
from dividend_planner.domain.services.result_formatter import (
    format_amount,
    format_result,
    render_summary,
)


def make_result() -> AllocationResult:
    rows = (
        AllocationPlanRow(
            identifier="HGLG11",
            units_to_buy=7,
            cost=Decimal("1123.505"),
            payout_achieved=Decimal("7.7"),
            allocation=Decimal("7.1"),
            yield_ratio=Decimal("0.0068"),
        ),
        AllocationPlanRow(
            identifier="MXRF11",
            units_to_buy=100,
            cost=Decimal("1012"),
            payout_achieved=Decimal("9.004"),
            allocation=Decimal("9"),
            yield_ratio=Decimal("0.0089"),
        ),
    )
    return AllocationResult(
        goal=Decimal("16.1"),
        rows=rows,
        total_cost=Decimal("2135.505"),
        total_payout=Decimal("16.704"),
    )


def test_format_amount_rounds_half_up_to_cents():
    assert format_amount(Decimal("2.005")) == "2.01"
    assert format_amount(Decimal("2.004")) == "2.00"
    assert format_amount(Decimal("100000")) == "100000.00"


def test_format_result_renders_two_decimals_and_integer_units():
    display = format_result(make_result())

    first, second = display.rows
    assert first.identifier == "HGLG11"
    assert first.units_to_buy == "7"
    assert first.cost == "1123.51"
    assert first.payout_achieved == "7.70"
    assert second.units_to_buy == "100"
    assert second.payout_achieved == "9.00"
    assert display.total_cost == "2135.51"
    assert display.total_payout == "16.70"


def test_format_result_does_not_touch_the_result():
    result = make_result()

    format_result(result)

    assert result == make_result()


def test_render_summary_lists_rows_then_totals():
    summary = render_summary(format_result(make_result()), "R$")

    assert summary.splitlines() == [
        "HGLG11: 7 units (Investment: R$ 1123.51)",
        "MXRF11: 100 units (Investment: R$ 1012.00)",
        "Total investment: R$ 2135.51",
        "Monthly payout: R$ 16.70",
    ]
