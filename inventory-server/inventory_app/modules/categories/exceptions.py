"""Category domain specific exceptions."""

from inventory_app.modules.common.exceptions import ConflictError, NotFoundError


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: str) -> None:
        super().__init__(f"category not found: {category_id}")
        self.category_id = category_id


class CategoryAlreadyExistsError(ConflictError):
    """Raised when a category name is already taken."""


class CategoryInUseError(ConflictError):
    """Raised when deleting a category that assets still reference."""
