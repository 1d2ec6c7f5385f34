"""
Calculator API Routes
Stateless dividend-goal calculation
"""

from fastapi import APIRouter, Depends, HTTPException
import logging

from dividend_planner.api.dependencies import get_calculator
from dividend_planner.config import settings
from dividend_planner.domain.models import AssetEntry
from dividend_planner.domain.schemas.planner import (
    CalculateRequest,
    CalculateResponse,
    ErrorResponse,
    calculate_out,
)
from dividend_planner.domain.services.dividend_calculator import (
    CalculationOutcome,
    DividendCalculator,
)
from dividend_planner.domain.services.result_formatter import render_summary

logger = logging.getLogger(__name__)
router = APIRouter()


def outcome_to_response(outcome: CalculationOutcome) -> CalculateResponse:
    """Map a calculator outcome onto HTTP (422 on validation errors)"""
    if not outcome.ok:
        raise HTTPException(
            status_code=422,
            detail={
                "error_code": outcome.error.error_code,
                "message": outcome.error.message,
            },
        )
    summary = render_summary(outcome.display, settings.CURRENCY_SYMBOL)
    return calculate_out(outcome.display, summary)


@router.post("/calculate", response_model=CalculateResponse, responses={422: {"model": ErrorResponse}})
async def calculate(
    request: CalculateRequest,
    calculator: DividendCalculator = Depends(get_calculator),
):
    """
    Compute units to buy per asset for a monthly dividend goal

    Rows with an empty name or a missing/non-positive payout or price
    are ignored.
    """
    entries = [
        AssetEntry(
            identifier=asset.identifier,
            payout_per_unit=asset.payout_per_unit,
            price_per_unit=asset.price_per_unit,
        )
        for asset in request.assets
    ]
    outcome = calculator.calculate(request.goal, entries)
    return outcome_to_response(outcome)
