"""Integration tests for the catalog use cases (AddProduct, UpdateProduct)."""

import pytest

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.update_product import UpdateProductHandler
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository


class TestAddProduct:

    def test_assigns_sequential_ids(self):
        repo = FakeProductRepository()
        handler = AddProductHandler(repo)
        first = handler.handle("Espresso", "25000")
        second = handler.handle("Croissant", 18000)
        assert (first.id, second.id) == (1, 2)
        assert repo.get_by_id(2).price == Money(18000)

    def test_duplicate_name_rejected(self):
        handler = AddProductHandler(FakeProductRepository())
        handler.handle("Espresso", "25000")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("espresso", "1000")

    def test_zero_price_rejected(self):
        handler = AddProductHandler(FakeProductRepository())
        with pytest.raises(ValidationError, match="greater than zero"):
            handler.handle("Water", "0")


class TestUpdateProduct:

    def test_updates_price(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Espresso", "25000")
        UpdateProductHandler(repo).handle("1", "27000")
        assert repo.get_by_id(1).price == Money(27000)

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(FakeProductRepository()).handle(3, "1000")
