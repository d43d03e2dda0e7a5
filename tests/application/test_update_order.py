"""Integration tests for the UpdateOrder use case (including item replacement)."""

from datetime import date

import pytest

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import CustomItemSpec, ProductItemSpec
from orderdesk.application.update_order import UpdateOrderHandler
from orderdesk.domain.exceptions import (
    EntityNotFoundError,
    InvalidIdError,
    UnknownItemVariantError,
    ValidationError,
)
from orderdesk.domain.model.line_item import CustomLine, ProductLine
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _setup():
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(
        [
            Product(id=1, name="Espresso", price=Money(25000)),
            Product(id=2, name="Croissant", price=Money(18000)),
        ]
    )
    created = CreateOrderHandler(order_repo, product_repo).handle(
        "Alice", [ProductItemSpec(1, 2)], pickup_date=date(2026, 1, 5), notes="hot"
    )
    handler = UpdateOrderHandler(order_repo, product_repo)
    return handler, order_repo, created


class TestUpdateHeader:

    def test_updates_only_supplied_fields(self):
        handler, order_repo, created = _setup()
        dto = handler.handle(created.id, customer_name="Alicia")

        assert dto.customer_name == "Alicia"
        assert dto.pickup_date == date(2026, 1, 5)
        assert dto.notes == "hot"
        assert dto.created_at == created.created_at
        assert [i.id for i in dto.items] == [i.id for i in created.items]

    def test_clear_pickup_date(self):
        handler, _, created = _setup()
        dto = handler.handle(created.id, pickup_date=None)
        assert dto.pickup_date is None

    def test_no_changes_still_verifies_existence(self):
        handler, _, created = _setup()
        assert handler.handle(created.id).id == created.id
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle(999)

    def test_order_deleted_mid_update_stays_deleted(self):
        class DeletedAfterLoad(FakeOrderRepository):
            def get_by_id(self, order_id):
                order = super().get_by_id(order_id)
                self.delete(order_id)
                return order

        order_repo = DeletedAfterLoad()
        product_repo = FakeProductRepository([Product(id=1, name="Espresso", price=Money(25000))])
        created = CreateOrderHandler(order_repo, product_repo).handle("Alice", [ProductItemSpec(1, 1)])

        with pytest.raises(EntityNotFoundError):
            UpdateOrderHandler(order_repo, product_repo).handle(created.id, customer_name="Bob")
        assert order_repo.list_all() == []

    def test_invalid_id(self):
        handler, _, _ = _setup()
        with pytest.raises(InvalidIdError):
            handler.handle("abc")

    def test_blank_customer_name_rejected(self):
        handler, order_repo, created = _setup()
        with pytest.raises(ValidationError, match="Customer name"):
            handler.handle(created.id, customer_name="")
        assert order_repo.get_by_id(created.id).customer_name == "Alice"


class TestReplaceItems:

    def test_shipping_scenario(self):
        handler, order_repo, created = _setup()
        old_item_id = created.items[0].id

        dto = handler.handle(created.id, items=[CustomItemSpec("Shipping", 10000)])

        [item] = dto.items
        assert item.item_type == "custom"
        assert item.price_at_sale == 10000
        assert item.id != old_item_id

        saved = order_repo.get_by_id(created.id)
        assert len(saved.items) == 1
        assert isinstance(saved.items[0], CustomLine)

    def test_replacement_resolves_fresh_snapshots(self):
        handler, _, created = _setup()
        dto = handler.handle(
            created.id,
            items=[ProductItemSpec(2, 1), ProductItemSpec(1, 1, price_at_sale=0)],
        )
        assert [i.price_at_sale for i in dto.items] == [18000, 0]

    def test_empty_items_rejected(self):
        handler, order_repo, created = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(created.id, items=[])
        assert "items" in exc_info.value.errors
        assert len(order_repo.get_by_id(created.id).items) == 1

    def test_null_items_rejected(self):
        handler, _, created = _setup()
        with pytest.raises(ValidationError):
            handler.handle(created.id, items=None)


class TestReplaceItemsIsAllOrNothing:

    def _assert_untouched(self, order_repo, created):
        saved = order_repo.get_by_id(created.id)
        assert [i.id for i in saved.items] == [i.id for i in created.items]
        assert isinstance(saved.items[0], ProductLine)
        assert saved.items[0].price_at_sale == Money(25000)

    def test_invalid_item_midway_keeps_previous_items(self):
        handler, order_repo, created = _setup()
        with pytest.raises(ValidationError):
            handler.handle(
                created.id,
                items=[CustomItemSpec("Shipping", 10000), ProductItemSpec(1, -1)],
            )
        self._assert_untouched(order_repo, created)

    def test_unknown_variant_keeps_previous_items(self):
        handler, order_repo, created = _setup()
        with pytest.raises(UnknownItemVariantError):
            handler.handle(created.id, items=[CustomItemSpec("Shipping", 10000), "gift"])
        self._assert_untouched(order_repo, created)

    def test_header_change_not_applied_when_items_fail(self):
        handler, order_repo, created = _setup()
        with pytest.raises(ValidationError):
            handler.handle(created.id, customer_name="Bob", items=[ProductItemSpec(1, 0)])
        assert order_repo.get_by_id(created.id).customer_name == "Alice"

    def test_storage_failure_keeps_previous_items(self):
        handler, order_repo, created = _setup()
        order_repo.fail_on_save = True
        with pytest.raises(RuntimeError):
            handler.handle(created.id, items=[CustomItemSpec("Shipping", 10000)])
        order_repo.fail_on_save = False
        self._assert_untouched(order_repo, created)
