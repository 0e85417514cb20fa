"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern for look-ups: a missing
product is ``None``, and the Service Layer decides how to translate it.
Database failures surface as ``PersistenceError``.
"""

from __future__ import annotations

from typing import Any, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import persistence_errors
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

PUBLIC_FIELDS = ("id", "name", "price", "available")


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        with persistence_errors("product.get_by_id", product_id=id):
            return Product.objects.filter(id=id).first()

    def list(self) -> List[Product]:
        """All products, newest id first, without audit timestamps."""
        with persistence_errors("product.list"):
            return list(Product.objects.only(*PUBLIC_FIELDS).order_by("-id"))

    def create(self, **attrs: Any) -> Product:
        with persistence_errors("product.create"):
            with transaction.atomic():
                product = Product.objects.create(**attrs)
        logger.info("product.saved", product_id=product.id, created=True)
        return product

    def save(self, entity: Product) -> Product:
        with persistence_errors("product.save", product_id=entity.id):
            with transaction.atomic():
                entity.save()
        logger.info("product.saved", product_id=entity.id, created=False)
        return entity

    def delete(self, entity: Product) -> None:
        product_id = entity.id
        with persistence_errors("product.delete", product_id=product_id):
            with transaction.atomic():
                entity.delete()
        logger.info("product.hard_deleted", product_id=product_id)
