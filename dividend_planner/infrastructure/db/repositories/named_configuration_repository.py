"""
Named Configuration Repository
Save/list/load/delete of goal + asset snapshots keyed by name
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Iterable, List, Optional

from dividend_planner.infrastructure.db.models import NamedConfigurationModel
from dividend_planner.domain.models import (
    AssetEntry,
    ConfigurationNotFoundError,
    NamedConfiguration,
)
from dividend_planner.utils.time import now_utc_naive


class NamedConfigurationRepository:
    """Repository for NamedConfiguration data access"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def save(
        self,
        name: str,
        goal: str,
        assets: Iterable[AssetEntry]
    ) -> NamedConfiguration:
        """
        Create or overwrite a configuration

        Args:
            name: Unique configuration name
            goal: Goal as typed (text)
            assets: Asset rows in display order

        Returns:
            Saved NamedConfiguration
        """
        key = self._normalize_name(name)
        payload = [asset.to_dict() for asset in assets]

        model = await self._get_model(key)
        if model is None:
            model = NamedConfigurationModel(name=key, goal=goal or "", assets=payload)
            self.session.add(model)
        else:
            model.goal = goal or ""
            model.assets = payload
            model.updated_at = now_utc_naive()

        await self.session.flush()
        return self._to_domain(model)

    async def list_names(self) -> List[str]:
        """
        Get all configuration names

        Returns:
            Names sorted alphabetically
        """
        result = await self.session.execute(
            select(NamedConfigurationModel.name).order_by(NamedConfigurationModel.name)
        )
        return list(result.scalars().all())

    async def list_all(self) -> List[NamedConfiguration]:
        """Get every configuration, sorted by name"""
        result = await self.session.execute(
            select(NamedConfigurationModel).order_by(NamedConfigurationModel.name)
        )
        return [self._to_domain(model) for model in result.scalars().all()]

    async def load(self, name: str) -> NamedConfiguration:
        """
        Get a configuration by name

        Raises:
            ConfigurationNotFoundError: name does not exist
        """
        key = self._normalize_name(name)
        model = await self._get_model(key)
        if model is None:
            raise ConfigurationNotFoundError(key)
        return self._to_domain(model)

    async def delete(self, name: str) -> None:
        """
        Delete a configuration by name

        Raises:
            ConfigurationNotFoundError: name does not exist
        """
        key = self._normalize_name(name)
        model = await self._get_model(key)
        if model is None:
            raise ConfigurationNotFoundError(key)
        await self.session.delete(model)
        await self.session.flush()

    async def _get_model(self, name: str) -> Optional[NamedConfigurationModel]:
        result = await self.session.execute(
            select(NamedConfigurationModel).where(NamedConfigurationModel.name == name)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _normalize_name(name: str) -> str:
        key = (name or "").strip()
        if not key:
            raise ValueError("Configuration name cannot be empty")
        return key

    @staticmethod
    def _to_domain(model: NamedConfigurationModel) -> NamedConfiguration:
        """Convert database model to domain entity"""
        return NamedConfiguration(
            name=model.name,
            goal=model.goal,
            assets=tuple(AssetEntry.from_dict(item) for item in (model.assets or [])),
            updated_at=model.updated_at,
        )
