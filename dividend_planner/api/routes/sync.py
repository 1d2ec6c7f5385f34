"""
Remote Sync Routes
Push all named configurations to the remote store
"""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dividend_planner.api.dependencies import get_sync_client
from dividend_planner.domain.schemas.planner import SyncResponse
from dividend_planner.infrastructure.db.database import get_db
from dividend_planner.infrastructure.db.repositories.named_configuration_repository import (
    NamedConfigurationRepository,
)
from dividend_planner.infrastructure.remote_sync.sync_client import RemoteSyncClient

router = APIRouter()


@router.post("/upload", response_model=SyncResponse, status_code=202)
async def upload_saves(
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    client: RemoteSyncClient = Depends(get_sync_client),
):
    """
    Schedule an upload of every saved configuration (fire-and-forget)
    """
    configurations = await NamedConfigurationRepository(db).list_all()
    background_tasks.add_task(client.upload_saves, configurations)
    return SyncResponse(scheduled=True, configurations=len(configurations))
