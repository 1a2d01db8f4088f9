"""Asset domain specific exceptions."""

from inventory_app.modules.common.exceptions import ConflictError, NotFoundError, ValidationError


class AssetNotFoundError(NotFoundError):
    def __init__(self, asset_id: str) -> None:
        super().__init__(f"asset not found: {asset_id}")
        self.asset_id = asset_id


class AssetAlreadyExistsError(ConflictError):
    """Raised when an asset name or serial number is already taken."""


class AssetInUseError(ConflictError):
    """Raised when a destructive operation targets an asset still referenced elsewhere."""


class AssetValidationError(ValidationError):
    """Raised when asset fields or a requested status are malformed."""
