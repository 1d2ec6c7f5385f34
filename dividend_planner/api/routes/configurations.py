"""
Named Configuration Routes
Save, list, load and delete goal + asset snapshots
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from dividend_planner.domain.models import (
    AssetEntry,
    ConfigurationNotFoundError,
    NamedConfiguration,
)
from dividend_planner.domain.schemas.planner import (
    ConfigurationIn,
    ConfigurationOut,
    ErrorResponse,
    row_out,
)
from dividend_planner.infrastructure.db.database import get_db
from dividend_planner.infrastructure.db.repositories.named_configuration_repository import (
    NamedConfigurationRepository,
)
from dividend_planner.utils.time import to_utc_iso

logger = logging.getLogger(__name__)
router = APIRouter()


def configuration_out(config: NamedConfiguration) -> ConfigurationOut:
    return ConfigurationOut(
        name=config.name,
        goal=config.goal,
        assets=[row_out(asset) for asset in config.assets],
        updated_at=to_utc_iso(config.updated_at) if config.updated_at else None,
    )


def not_found(exc: ConfigurationNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"error_code": exc.error_code, "message": str(exc)},
    )


@router.get("", response_model=List[str])
async def list_configurations(db: AsyncSession = Depends(get_db)):
    """
    Get names of all saved configurations
    """
    repo = NamedConfigurationRepository(db)
    return await repo.list_names()


@router.get("/{name}", response_model=ConfigurationOut, responses={404: {"model": ErrorResponse}})
async def load_configuration(name: str, db: AsyncSession = Depends(get_db)):
    """
    Load a saved configuration
    """
    repo = NamedConfigurationRepository(db)
    try:
        config = await repo.load(name)
    except ConfigurationNotFoundError as exc:
        raise not_found(exc)
    return configuration_out(config)


@router.put("/{name}", response_model=ConfigurationOut)
async def save_configuration(
    name: str,
    request: ConfigurationIn,
    db: AsyncSession = Depends(get_db),
):
    """
    Save a configuration (overwrites an existing one with the same name)
    """
    repo = NamedConfigurationRepository(db)
    assets = [
        AssetEntry(
            identifier=asset.identifier,
            payout_per_unit=asset.payout_per_unit,
            price_per_unit=asset.price_per_unit,
        )
        for asset in request.assets
    ]
    try:
        config = await repo.save(name, request.goal, assets)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    logger.info(f"Saved configuration '{config.name}' ({len(config.assets)} assets)")
    return configuration_out(config)


@router.delete("/{name}", status_code=204, responses={404: {"model": ErrorResponse}})
async def delete_configuration(name: str, db: AsyncSession = Depends(get_db)):
    """
    Delete a saved configuration
    """
    repo = NamedConfigurationRepository(db)
    try:
        await repo.delete(name)
    except ConfigurationNotFoundError as exc:
        raise not_found(exc)
    logger.info(f"Deleted configuration '{name}'")
