"""Asset category services and models."""

from .exceptions import CategoryAlreadyExistsError, CategoryInUseError, CategoryNotFoundError
from .models import Category
from .service import CategoryService

__all__ = [
    "Category",
    "CategoryAlreadyExistsError",
    "CategoryInUseError",
    "CategoryNotFoundError",
    "CategoryService",
]
