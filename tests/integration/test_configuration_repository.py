import pytest

from dividend_planner.domain.models import AssetEntry, ConfigurationNotFoundError
from dividend_planner.infrastructure.db.repositories.named_configuration_repository import (
    NamedConfigurationRepository,
)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_save_and_load_roundtrip_keeps_order(db_session):
    repo = NamedConfigurationRepository(db_session)
    assets = [
        AssetEntry("MXRF11", "0.09", "10.12"),
        AssetEntry("HGLG11", "1.10", "160.50"),
        AssetEntry("", "", ""),
    ]

    saved = await repo.save("  Monthly 1k ", "1000", assets)
    loaded = await repo.load("Monthly 1k")

    assert saved.name == "Monthly 1k"
    assert loaded.goal == "1000"
    assert [a.identifier for a in loaded.assets] == ["MXRF11", "HGLG11", ""]
    assert loaded.assets[1].price_per_unit == "160.50"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_save_overwrites_by_name(db_session):
    repo = NamedConfigurationRepository(db_session)

    await repo.save("plan", "100", [AssetEntry("A", "1", "10")])
    await repo.save("plan", "200", [AssetEntry("B", "2", "20")])

    assert await repo.list_names() == ["plan"]
    loaded = await repo.load("plan")
    assert loaded.goal == "200"
    assert [a.identifier for a in loaded.assets] == ["B"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_names_sorted(db_session):
    repo = NamedConfigurationRepository(db_session)
    for name in ("zeta", "alpha", "mid"):
        await repo.save(name, "1", [])

    assert await repo.list_names() == ["alpha", "mid", "zeta"]
    assert [c.name for c in await repo.list_all()] == ["alpha", "mid", "zeta"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_load_and_delete_missing_raise_not_found(db_session):
    repo = NamedConfigurationRepository(db_session)

    with pytest.raises(ConfigurationNotFoundError):
        await repo.load("ghost")
    with pytest.raises(ConfigurationNotFoundError):
        await repo.delete("ghost")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_removes_configuration(db_session):
    repo = NamedConfigurationRepository(db_session)
    await repo.save("plan", "100", [])

    await repo.delete("plan")

    assert await repo.list_names() == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_empty_name_is_rejected(db_session):
    repo = NamedConfigurationRepository(db_session)

    with pytest.raises(ValueError):
        await repo.save("   ", "100", [])
