"""
Domain Models Package
Export all domain entities and errors
"""

from .entities import (
    # Entities
    AllocationPlanRow,
    AllocationResult,
    AssetEntry,
    DisplayResult,
    DisplayRow,
    NamedConfiguration,
    SessionDraft,
    ValidAsset,
)
from .errors import (
    AssetValidationError,
    ConfigurationNotFoundError,
    DraftRowNotFoundError,
    InvalidGoalError,
    NoValidAssetsError,
)

__all__ = [
    # Entities
    "AllocationPlanRow",
    "AllocationResult",
    "AssetEntry",
    "DisplayResult",
    "DisplayRow",
    "NamedConfiguration",
    "SessionDraft",
    "ValidAsset",

    # Errors
    "AssetValidationError",
    "ConfigurationNotFoundError",
    "DraftRowNotFoundError",
    "InvalidGoalError",
    "NoValidAssetsError",
]
