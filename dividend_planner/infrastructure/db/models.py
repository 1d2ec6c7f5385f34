"""
Database Models (SQLAlchemy ORM)
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON

from dividend_planner.infrastructure.db.database import Base
from dividend_planner.utils.time import now_utc_naive


class NamedConfigurationModel(Base):
    """Saved dividend goal + asset rows, upserted by name"""
    __tablename__ = "named_configuration"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False, unique=True, index=True)
    goal = Column(String(64), nullable=False, default="")
    # [{identifier, payout_per_unit, price_per_unit}], display order
    assets = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)
    updated_at = Column(DateTime, nullable=False, default=now_utc_naive, onupdate=now_utc_naive)
