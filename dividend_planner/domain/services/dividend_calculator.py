"""
DIVIDEND CALCULATOR
validator → allocation engine → formatter

Validation errors are translated into an outcome here; nothing raised by
the validator escapes this boundary.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from dividend_planner.domain.models import (
    AllocationResult,
    AssetEntry,
    AssetValidationError,
    DisplayResult,
)
from dividend_planner.domain.services.allocation_engine import AllocationEngine
from dividend_planner.domain.services.input_validator import validate
from dividend_planner.domain.services.result_formatter import format_result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationError:
    error_code: str
    message: str


@dataclass(frozen=True)
class CalculationOutcome:
    result: Optional[AllocationResult] = None
    display: Optional[DisplayResult] = None
    error: Optional[CalculationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DividendCalculator:
    """Stateless facade, safe to share across requests"""

    def __init__(self, engine: Optional[AllocationEngine] = None):
        self.engine = engine or AllocationEngine()

    def calculate(self, goal_text, entries: Iterable[AssetEntry]) -> CalculationOutcome:
        entries = list(entries)
        try:
            goal, valid_assets = validate(goal_text, entries)
        except AssetValidationError as exc:
            logger.info(f"Calculation rejected ({exc.error_code}): {exc.message}")
            return CalculationOutcome(
                error=CalculationError(error_code=exc.error_code, message=exc.message)
            )

        dropped = len(entries) - len(valid_assets)
        if dropped:
            logger.debug(f"Dropped {dropped} incomplete asset row(s)")

        result = self.engine.allocate(goal, valid_assets)
        display = format_result(result)

        logger.info(
            f"Planned {len(result.rows)} asset(s) for goal {goal}: "
            f"cost {display.total_cost}, payout {display.total_payout}"
        )
        return CalculationOutcome(result=result, display=display)
