"""
Remote Sync Client
Uploads every named configuration to a remote JSON document store

Overwrite semantics under a single top-level key (Realtime Database REST
shape: PUT {base_url}/{key}.json). No conflict resolution.
"""

import logging
from typing import Iterable, List, Optional

import httpx

from dividend_planner.domain.models import NamedConfiguration

logger = logging.getLogger(__name__)


def to_remote_document(configurations: Iterable[NamedConfiguration]) -> List[dict]:
    """Shape saved configurations the way the remote store keeps them"""
    document = []
    for config in configurations:
        document.append({
            "name": config.name,
            "dividendGoal": config.goal,
            "funds": [
                {
                    "id": position,
                    "name": asset.identifier,
                    "dividend": str(asset.payout_per_unit),
                    "price": str(asset.price_per_unit),
                }
                for position, asset in enumerate(config.assets, start=1)
            ],
        })
    return document


class RemoteSyncClient:
    """
    Fire-and-forget uploader

    upload_saves() logs errors and returns False instead of raising.
    """

    def __init__(
        self,
        base_url: str,
        key: str = "saves",
        auth_token: Optional[str] = None,
        timeout_seconds: float = 15.0
    ):
        self.base_url = base_url.rstrip("/")
        self.key = key.strip("/")
        self.auth_token = auth_token
        self.timeout_seconds = timeout_seconds

    @property
    def target_url(self) -> str:
        return f"{self.base_url}/{self.key}.json"

    async def upload_saves(self, configurations: Iterable[NamedConfiguration]) -> bool:
        document = to_remote_document(configurations)
        params = {"auth": self.auth_token} if self.auth_token else None

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.put(self.target_url, json=document, params=params)
        except httpx.HTTPError as exc:
            logger.error(f"Error uploading saves: {exc}")
            return False

        if response.status_code >= 400:
            logger.error(f"Error uploading saves: status {response.status_code}")
            return False

        logger.info(f"Saves uploaded successfully ({len(document)} configuration(s))")
        return True
