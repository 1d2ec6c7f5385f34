"""
Session Draft Routes
Form state for the in-progress goal and asset rows (session only)
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from dividend_planner.api.dependencies import (
    get_calculator,
    get_draft_store,
    get_price_refresh_service,
    get_session_id,
)
from dividend_planner.api.routes.calculator import outcome_to_response
from dividend_planner.domain.models import ConfigurationNotFoundError, DraftRowNotFoundError
from dividend_planner.domain.schemas.planner import (
    AssetRowOut,
    CalculateResponse,
    ErrorResponse,
    GoalUpdate,
    PriceRefreshResponse,
    RowUpdate,
    SessionDraftOut,
    draft_out,
    row_out,
)
from dividend_planner.domain.services.dividend_calculator import DividendCalculator
from dividend_planner.domain.services.price_refresh_service import PriceRefreshService
from dividend_planner.infrastructure.db.database import get_db
from dividend_planner.infrastructure.db.repositories.named_configuration_repository import (
    NamedConfigurationRepository,
)
from dividend_planner.infrastructure.session_store import SessionDraftStore

logger = logging.getLogger(__name__)
router = APIRouter()


def row_not_found(exc: DraftRowNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"error_code": exc.error_code, "message": str(exc)},
    )


@router.get("", response_model=SessionDraftOut)
async def get_draft(
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
):
    """
    Restore the in-progress form
    """
    return draft_out(store.get(session_id))


@router.delete("", status_code=204)
async def clear_draft(
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
):
    store.clear(session_id)


@router.put("/goal", response_model=SessionDraftOut)
async def set_goal(
    request: GoalUpdate,
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
):
    return draft_out(store.set_goal(session_id, request.goal))


@router.post("/rows", response_model=AssetRowOut, status_code=201)
async def add_row(
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
):
    """
    Append an empty asset row
    """
    return row_out(store.add_row(session_id))


@router.patch("/rows/{row_id}", response_model=AssetRowOut, responses={404: {"model": ErrorResponse}})
async def update_row(
    row_id: int,
    request: RowUpdate,
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
):
    """
    Edit fields of one row (only the fields sent are changed)
    """
    fields = request.model_dump(exclude_none=True)
    try:
        return row_out(store.update_row(session_id, row_id, **fields))
    except DraftRowNotFoundError as exc:
        raise row_not_found(exc)


@router.delete("/rows/{row_id}", response_model=SessionDraftOut, responses={404: {"model": ErrorResponse}})
async def remove_row(
    row_id: int,
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
):
    """
    Remove a row; removing the last one clears the draft
    """
    try:
        return draft_out(store.remove_row(session_id, row_id))
    except DraftRowNotFoundError as exc:
        raise row_not_found(exc)


@router.post("/calculate", response_model=CalculateResponse, responses={422: {"model": ErrorResponse}})
async def calculate_draft(
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
    calculator: DividendCalculator = Depends(get_calculator),
):
    """
    Calculate the plan for the current draft
    """
    draft = store.get(session_id)
    outcome = calculator.calculate(draft.goal, draft.rows)
    return outcome_to_response(outcome)


@router.post("/prices/refresh", response_model=PriceRefreshResponse)
async def refresh_prices(
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
    service: PriceRefreshService = Depends(get_price_refresh_service),
):
    """
    Refresh the price of every named row

    Each row is updated as its lookup completes; failed rows keep
    their price.
    """
    draft = store.get(session_id)

    def apply_price(index, entry, price):
        store.apply_price(session_id, entry.row_id, price)

    report = await service.refresh_all(draft.rows, on_price=apply_price)
    return PriceRefreshResponse(
        draft=draft_out(store.get(session_id)),
        updated=list(report.updated),
        failed=list(report.failed),
    )


@router.post("/save/{name}", response_model=SessionDraftOut)
async def save_draft(
    name: str,
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
    db: AsyncSession = Depends(get_db),
):
    """
    Save the current draft as a named configuration
    """
    draft = store.get(session_id)
    repo = NamedConfigurationRepository(db)
    try:
        await repo.save(name, draft.goal, draft.rows)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return draft_out(draft)


@router.post("/load/{name}", response_model=SessionDraftOut, responses={404: {"model": ErrorResponse}})
async def load_into_draft(
    name: str,
    session_id: str = Depends(get_session_id),
    store: SessionDraftStore = Depends(get_draft_store),
    db: AsyncSession = Depends(get_db),
):
    """
    Replace the draft with a saved configuration
    """
    repo = NamedConfigurationRepository(db)
    try:
        config = await repo.load(name)
    except ConfigurationNotFoundError as exc:
        raise HTTPException(
            status_code=404,
            detail={"error_code": exc.error_code, "message": str(exc)},
        )
    return draft_out(store.replace(session_id, config.goal, config.assets))
