"""Asset registry: asset records and their availability state."""

from .exceptions import (
    AssetAlreadyExistsError,
    AssetInUseError,
    AssetNotFoundError,
    AssetValidationError,
)
from .models import Asset, AssetCreateInput, AssetPage, AssetStatus, AssetUpdateInput, Borrower, UNSET
from .service import AssetRegistry

__all__ = [
    "Asset",
    "AssetAlreadyExistsError",
    "AssetCreateInput",
    "AssetInUseError",
    "AssetNotFoundError",
    "AssetPage",
    "AssetRegistry",
    "AssetStatus",
    "AssetUpdateInput",
    "AssetValidationError",
    "Borrower",
    "UNSET",
]
