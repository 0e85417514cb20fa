"""Product service layer (Use Cases).

Orchestrates the product operations, delegating persistence to the
injected ``IProductRepository``.  Every id-addressed operation looks the
product up first and raises ``ProductNotFound`` before any mutation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog

from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    def _get_or_raise(self, id: int) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            logger.info("product.not_found", product_id=id)
            raise ProductNotFound()
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return every product, newest id first."""
        return self._repo.list()

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        return self._get_or_raise(id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        product = self._repo.create(name=dto.name, price=dto.price)
        logger.info("product.created", product_id=product.id)
        return product

    def update_product(self, id: int, dto: UpdateProductDTO) -> Product:
        """Overwrite ``name``, ``price`` and ``available``.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)

        product.name = dto.name
        product.price = dto.price
        product.available = dto.available

        product = self._repo.save(product)
        logger.info("product.updated", product_id=id)
        return product

    def toggle_availability(self, id: int) -> Product:
        """Flip ``available``; applying it twice restores the original value.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        available = product.toggle_availability()
        product = self._repo.save(product)
        logger.info("product.availability_toggled", product_id=id, available=available)
        return product

    def delete_product(self, id: int) -> None:
        """Permanently delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        self._repo.delete(product)
        logger.info("product.deleted", product_id=id)
