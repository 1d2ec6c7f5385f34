from pydantic import BaseModel, Field
from typing import List, Optional, Union


class AssetEntryIn(BaseModel):
    identifier: str = ""
    payout_per_unit: Union[str, float] = ""
    price_per_unit: Union[str, float] = ""


class AssetRowOut(BaseModel):
    row_id: Optional[int] = None
    identifier: str
    payout_per_unit: str
    price_per_unit: str


class CalculateRequest(BaseModel):
    goal: Union[str, float] = ""
    assets: List[AssetEntryIn] = Field(default_factory=list)


class PlanRowOut(BaseModel):
    identifier: str
    units_to_buy: str
    cost: str
    payout_achieved: str


class CalculateResponse(BaseModel):
    rows: List[PlanRowOut]
    total_cost: str
    total_payout: str
    summary: str


class ErrorDetail(BaseModel):
    error_code: str
    message: str


class ErrorResponse(BaseModel):
    detail: ErrorDetail


class ConfigurationIn(BaseModel):
    goal: str = ""
    assets: List[AssetEntryIn] = Field(default_factory=list)


class ConfigurationOut(BaseModel):
    name: str
    goal: str
    assets: List[AssetRowOut]
    updated_at: Optional[str] = None


class SessionDraftOut(BaseModel):
    goal: str
    rows: List[AssetRowOut]


class GoalUpdate(BaseModel):
    goal: str = ""


class RowUpdate(BaseModel):
    identifier: Optional[str] = None
    payout_per_unit: Optional[str] = None
    price_per_unit: Optional[str] = None


class PriceRefreshResponse(BaseModel):
    draft: SessionDraftOut
    updated: List[str]
    failed: List[str]


class SyncResponse(BaseModel):
    scheduled: bool
    configurations: int


# ------------------------------------------------------------------
# Domain → response helpers
# ------------------------------------------------------------------

def row_out(entry) -> AssetRowOut:
    data = entry.to_dict()
    return AssetRowOut(row_id=entry.row_id, **data)


def draft_out(draft) -> SessionDraftOut:
    return SessionDraftOut(goal=draft.goal, rows=[row_out(row) for row in draft.rows])


def calculate_out(display, summary: str) -> CalculateResponse:
    return CalculateResponse(
        rows=[
            PlanRowOut(
                identifier=row.identifier,
                units_to_buy=row.units_to_buy,
                cost=row.cost,
                payout_achieved=row.payout_achieved,
            )
            for row in display.rows
        ],
        total_cost=display.total_cost,
        total_payout=display.total_payout,
        summary=summary,
    )
