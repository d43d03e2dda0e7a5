"""JSON-file-backed implementation of OrderRepository.

Each order is stored as one document holding its header and its items.
Items are flattened to a single nullable row shape keyed by
``item_type``; the domain only ever sees ``ProductLine``/``CustomLine``.
Because an order and its items live in one document, replacing all items
and deleting an order (with its items) are single atomic writes.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any

from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.line_item import CUSTOM, PRODUCT, CustomLine, LineItem, ProductLine
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.value_objects import Money, Quantity
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        with self._file.transaction() as orders:
            position = None
            if order.id is None:
                order.id = max((o["id"] for o in orders), default=0) + 1
            else:
                position = next(
                    (i for i, raw in enumerate(orders) if raw["id"] == order.id), None
                )
                if position is None:
                    raise EntityNotFoundError(f"Order #{order.id} not found")

            next_item_id = max(
                (i["id"] for o in orders for i in o["items"]), default=0
            ) + 1
            for item in order.items:
                item.order_id = order.id
                if item.id is None:
                    item.id = next_item_id
                    next_item_id += 1

            # Known ids are overwritten in place, never re-appended
            if position is None:
                orders.append(self._to_raw(order))
            else:
                orders[position] = self._to_raw(order)

    def delete(self, order_id: int) -> Order | None:
        with self._file.transaction() as orders:
            for i, raw in enumerate(orders):
                if raw["id"] == order_id:
                    del orders[i]
                    return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_raw(cls, order: Order) -> dict[str, Any]:
        return {
            "id": order.id,
            "customer_name": order.customer_name,
            "pickup_date": order.pickup_date.isoformat() if order.pickup_date else None,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "items": [cls._item_to_raw(item) for item in order.items],
        }

    @staticmethod
    def _item_to_raw(item: LineItem) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": item.id,
            "order_id": item.order_id,
            "item_type": item.item_type,
            "product_id": None,
            "amount": None,
            "notes": item.notes,
            "price_at_sale": None,
            "custom_name": None,
            "custom_price": None,
        }
        if isinstance(item, ProductLine):
            row["product_id"] = item.product_id
            row["amount"] = item.quantity.value
            row["price_at_sale"] = (
                item.price_at_sale.amount if item.price_at_sale is not None else None
            )
        else:
            row["custom_name"] = item.custom_name
            row["custom_price"] = item.custom_price.amount
            row["price_at_sale"] = item.custom_price.amount
        return row

    @classmethod
    def _to_domain(cls, raw: dict[str, Any]) -> Order:
        return Order(
            id=raw["id"],
            customer_name=raw["customer_name"],
            items=[cls._item_to_domain(i) for i in raw["items"]],
            pickup_date=date.fromisoformat(raw["pickup_date"]) if raw.get("pickup_date") else None,
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    @staticmethod
    def _item_to_domain(raw: dict[str, Any]) -> LineItem:
        item_type = raw.get("item_type", PRODUCT)
        if item_type == PRODUCT:
            price = raw.get("price_at_sale")
            return ProductLine(
                id=raw["id"],
                order_id=raw["order_id"],
                product_id=raw["product_id"],
                quantity=Quantity(raw.get("amount") or 1),
                price_at_sale=Money(price) if price is not None else None,
                notes=raw.get("notes"),
            )
        if item_type == CUSTOM:
            return CustomLine(
                id=raw["id"],
                order_id=raw["order_id"],
                custom_name=raw["custom_name"],
                custom_price=Money(raw.get("custom_price") or 0),
                notes=raw.get("notes"),
            )
        raise ValueError(f"Stored line item #{raw.get('id')} has unknown item_type {item_type!r}")
