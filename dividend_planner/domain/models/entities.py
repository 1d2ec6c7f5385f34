"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple, Union


NumericInput = Union[str, int, float, Decimal]


@dataclass(frozen=True)
class AssetEntry:
    """
    One form row as typed by the user.

    Numeric fields stay as raw input (usually text) until validation.
    Duplicate identifiers are legal distinct rows.
    """
    identifier: str = ""
    payout_per_unit: NumericInput = ""
    price_per_unit: NumericInput = ""
    row_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "payout_per_unit": _as_text(self.payout_per_unit),
            "price_per_unit": _as_text(self.price_per_unit),
        }

    @classmethod
    def from_dict(cls, data: dict, row_id: Optional[int] = None) -> "AssetEntry":
        return cls(
            identifier=str(data.get("identifier") or ""),
            payout_per_unit=_as_text(data.get("payout_per_unit", "")),
            price_per_unit=_as_text(data.get("price_per_unit", "")),
            row_id=row_id,
        )


@dataclass(frozen=True)
class ValidAsset:
    """Asset that passed validation, decorated with its yield - Immutable"""
    identifier: str
    payout_per_unit: Decimal
    price_per_unit: Decimal
    yield_ratio: Decimal = field(init=False)

    def __post_init__(self):
        if not self.identifier:
            raise ValueError("Asset identifier cannot be empty")
        if self.payout_per_unit <= Decimal('0'):
            raise ValueError("Payout per unit must be positive")
        if self.price_per_unit <= Decimal('0'):
            raise ValueError("Price per unit must be positive")
        object.__setattr__(self, "yield_ratio", self.payout_per_unit / self.price_per_unit)


@dataclass(frozen=True)
class AllocationPlanRow:
    """Purchase plan for a single asset - Immutable"""
    identifier: str
    units_to_buy: int
    cost: Decimal
    payout_achieved: Decimal
    allocation: Decimal
    yield_ratio: Decimal

    def __post_init__(self):
        if self.units_to_buy < 0:
            raise ValueError("Units cannot be negative")


@dataclass(frozen=True)
class AllocationResult:
    """Full plan across all valid assets, in input order - Immutable"""
    goal: Decimal
    rows: Tuple[AllocationPlanRow, ...]
    total_cost: Decimal
    total_payout: Decimal

    @property
    def surplus_payout(self) -> Decimal:
        """Payout above the goal caused by rounding units upward"""
        return self.total_payout - self.goal


@dataclass(frozen=True)
class DisplayRow:
    """Display-ready plan row, all amounts rendered to 2 decimals"""
    identifier: str
    units_to_buy: str
    cost: str
    payout_achieved: str


@dataclass(frozen=True)
class DisplayResult:
    """Read-only display projection of an AllocationResult"""
    rows: Tuple[DisplayRow, ...]
    total_cost: str
    total_payout: str


@dataclass(frozen=True)
class NamedConfiguration:
    """Saved goal + asset list, keyed by name"""
    name: str
    goal: str
    assets: Tuple[AssetEntry, ...]
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Configuration name cannot be empty")


@dataclass(frozen=True)
class SessionDraft:
    """In-progress form state for one client session"""
    goal: str = ""
    rows: Tuple[AssetEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.goal and not self.rows


def _as_text(value) -> str:
    if value is None:
        return ""
    return str(value)
