"""Product repository interface.

Extends ``IRepository[Product]`` with creation from a partial attribute
set.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product entity."""

    @abstractmethod
    def create(self, **attrs: Any) -> "Product":
        """Persist a new product and return it with its generated id."""
