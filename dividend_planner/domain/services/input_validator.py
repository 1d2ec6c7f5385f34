"""
INPUT VALIDATOR
Normalize raw form input into a goal and a list of valid assets

RESPONSIBILITIES:
- Parse the goal, reject it when unparseable or not positive
- Parse each row, silently drop incomplete or non-positive rows
- Preserve input order of surviving rows

RULES:
❌ No allocation math
❌ No rounding
✅ Half-filled rows never block a calculation
✅ Pure function, no side effects
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional, Tuple

from dividend_planner.domain.models import (
    AssetEntry,
    InvalidGoalError,
    NoValidAssetsError,
    ValidAsset,
)

# Same magnitude window as a double; anything outside is treated as garbage
MAX_EXPONENT = 308


def parse_decimal(value) -> Optional[Decimal]:
    """
    Parse user input into a finite Decimal

    Args:
        value: Text (or number) typed into the form

    Returns:
        Decimal, or None when the value is not a plain finite number
        or its magnitude is beyond 1e308 / below 1e-308
    """
    if value is None or isinstance(value, bool):
        return None

    text = str(value).strip()
    if not text or "_" in text:
        return None

    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None

    if not parsed.is_finite():
        return None
    if parsed and abs(parsed.adjusted()) > MAX_EXPONENT:
        return None
    return parsed


def parse_goal(goal_text) -> Decimal:
    """
    Parse the dividend goal

    Raises:
        InvalidGoalError: goal is not a number or is <= 0
    """
    goal = parse_decimal(goal_text)
    if goal is None or goal <= Decimal('0'):
        raise InvalidGoalError("Enter a valid monthly dividend goal.")
    return goal


def to_valid_asset(entry: AssetEntry) -> Optional[ValidAsset]:
    """Convert a single row, or return None when the row must be dropped"""
    identifier = entry.identifier or ""
    if not identifier:
        return None

    payout = parse_decimal(entry.payout_per_unit)
    price = parse_decimal(entry.price_per_unit)
    if payout is None or price is None:
        return None
    if payout <= Decimal('0') or price <= Decimal('0'):
        return None

    asset = ValidAsset(
        identifier=identifier,
        payout_per_unit=payout,
        price_per_unit=price,
    )
    if asset.yield_ratio <= Decimal('0'):
        return None
    return asset


def validate(
    goal_text,
    entries: Iterable[AssetEntry]
) -> Tuple[Decimal, List[ValidAsset]]:
    """
    Validate the whole form

    Args:
        goal_text: Raw goal input
        entries: Raw asset rows, in display order

    Returns:
        Tuple of (goal, valid assets in input order)

    Raises:
        InvalidGoalError: goal unparseable or not positive
        NoValidAssetsError: no row survived filtering
    """
    goal = parse_goal(goal_text)

    valid_assets = []
    for entry in entries:
        asset = to_valid_asset(entry)
        if asset is not None:
            valid_assets.append(asset)

    if not valid_assets:
        raise NoValidAssetsError("Add at least one asset with valid data.")

    return goal, valid_assets
