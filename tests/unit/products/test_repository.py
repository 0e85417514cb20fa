"""Unit tests for ProductDjangoRepository.

Covers:
- CRUD primitives (list, get_by_id, create, save, delete).
- Ordering and field selection of ``list``.
- Translation of database failures into ``PersistenceError``.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from django.db import OperationalError

from modules.core.exceptions import PersistenceError
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


# ===========================================================================
# Instantiation
# ===========================================================================


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self):
        repo = ProductDjangoRepository()
        assert isinstance(repo, IProductRepository)


# ===========================================================================
# get_by_id
# ===========================================================================


class TestGetById:
    def test_returns_product_when_found(self, make_product):
        product = make_product()
        result = ProductDjangoRepository().get_by_id(product.id)
        assert result is not None
        assert result.id == product.id

    def test_returns_none_when_not_found(self):
        assert ProductDjangoRepository().get_by_id(999999) is None


# ===========================================================================
# list
# ===========================================================================


class TestList:
    def test_returns_empty_list_when_no_products(self):
        assert ProductDjangoRepository().list() == []

    def test_orders_by_id_descending(self, make_product):
        first = make_product(name="First")
        second = make_product(name="Second")
        third = make_product(name="Third")
        results = ProductDjangoRepository().list()
        assert [p.id for p in results] == [third.id, second.id, first.id]

    def test_defers_audit_timestamps(self, make_product):
        make_product()
        product = ProductDjangoRepository().list()[0]
        assert product.get_deferred_fields() == {"created_at", "updated_at"}


# ===========================================================================
# create
# ===========================================================================


class TestCreate:
    def test_persists_partial_attributes(self):
        product = ProductDjangoRepository().create(name="Mouse", price=25.5)
        assert product.id is not None
        stored = Product.objects.get(id=product.id)
        assert stored.name == "Mouse"
        assert stored.price == 25.5

    def test_available_defaults_to_true(self):
        product = ProductDjangoRepository().create(name="Mouse", price=25.5)
        assert product.available is True

    def test_timestamps_are_set(self):
        product = ProductDjangoRepository().create(name="Mouse", price=25.5)
        assert product.created_at is not None
        assert product.updated_at is not None


# ===========================================================================
# save
# ===========================================================================


class TestSave:
    def test_updates_existing_product(self, make_product):
        product = make_product()
        product.name = "Updated Name"
        product.available = False
        ProductDjangoRepository().save(product)
        product.refresh_from_db()
        assert product.name == "Updated Name"
        assert product.available is False

    def test_returns_same_entity(self, make_product):
        product = make_product()
        assert ProductDjangoRepository().save(product) is product


# ===========================================================================
# delete
# ===========================================================================


class TestDelete:
    def test_hard_deletes_product(self, make_product):
        product = make_product()
        product_id = product.id
        ProductDjangoRepository().delete(product)
        assert not Product.objects.filter(id=product_id).exists()


# ===========================================================================
# Database failures
# ===========================================================================


class TestPersistenceErrors:
    def test_list_failure_raises_persistence_error(self):
        with patch.object(
            Product.objects, "only", side_effect=OperationalError("db down")
        ):
            with pytest.raises(PersistenceError):
                ProductDjangoRepository().list()

    def test_get_by_id_failure_raises_persistence_error(self):
        with patch.object(
            Product.objects, "filter", side_effect=OperationalError("db down")
        ):
            with pytest.raises(PersistenceError):
                ProductDjangoRepository().get_by_id(1)

    def test_create_failure_raises_persistence_error(self):
        with patch.object(
            Product.objects, "create", side_effect=OperationalError("db down")
        ):
            with pytest.raises(PersistenceError):
                ProductDjangoRepository().create(name="Mouse", price=1)

    def test_original_error_is_chained(self):
        with patch.object(
            Product.objects, "only", side_effect=OperationalError("db down")
        ):
            with pytest.raises(PersistenceError) as exc_info:
                ProductDjangoRepository().list()
        assert isinstance(exc_info.value.__cause__, OperationalError)
