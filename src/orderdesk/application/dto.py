"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the adapters (CLI, HTTP) and the application
layer without exposing domain internals to the outside world.  The
``to_dict()`` methods produce the external camelCase representation in
which absent values are omitted rather than rendered as ``null``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

# --- Input --------------------------------------------------------------------


@dataclass(frozen=True)
class ProductItemSpec:
    """Input: a quantity of a catalog product, optionally at a fixed price."""

    product_id: int
    amount: int
    notes: str | None = None
    price_at_sale: int | None = None  # explicit override, 0 allowed


@dataclass(frozen=True)
class CustomItemSpec:
    """Input: an ad-hoc charge (shipping, packaging, ...)."""

    custom_name: str
    custom_price: int
    notes: str | None = None


ItemSpec = ProductItemSpec | CustomItemSpec


# --- Output -------------------------------------------------------------------


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    price: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "price": self.price}


@dataclass(frozen=True)
class LineItemDTO:
    """Output: one stored line item, optionally joined with its product."""

    id: int
    order_id: int
    item_type: str
    price_at_sale: int | None
    notes: str | None = None
    product_id: int | None = None
    amount: int | None = None
    custom_name: str | None = None
    custom_price: int | None = None
    product: ProductDTO | None = None

    def to_dict(self) -> dict[str, Any]:
        data = _compact(
            {
                "id": self.id,
                "orderId": self.order_id,
                "itemType": self.item_type,
                "productId": self.product_id,
                "amount": self.amount,
                "notes": self.notes,
                "priceAtSale": self.price_at_sale,
                "customName": self.custom_name,
                "customPrice": self.custom_price,
                "product": self.product.to_dict() if self.product else None,
            }
        )
        if self.item_type == "custom" and not isinstance(data.get("customPrice"), int):
            data["customPrice"] = 0
        return data


@dataclass(frozen=True)
class OrderHeaderDTO:
    """Output: an order without its items (returned by delete)."""

    id: int
    customer_name: str
    created_at: datetime
    pickup_date: date | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "customerName": self.customer_name,
                "pickupDate": self.pickup_date.isoformat() if self.pickup_date else None,
                "notes": self.notes,
                "createdAt": self.created_at.isoformat(),
            }
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as returned to callers."""

    id: int
    customer_name: str
    created_at: datetime
    pickup_date: date | None = None
    notes: str | None = None
    items: list[LineItemDTO] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        header = OrderHeaderDTO(
            id=self.id,
            customer_name=self.customer_name,
            created_at=self.created_at,
            pickup_date=self.pickup_date,
            notes=self.notes,
        ).to_dict()
        header["items"] = [item.to_dict() for item in self.items]
        return header


@dataclass(frozen=True)
class PrintResultDTO:
    printed: bool
    device_path: str
    order_id: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "printed": self.printed,
            "devicePath": self.device_path,
            "orderId": self.order_id,
        }


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is ``None`` (``0`` and ``False`` are kept)."""
    return {key: value for key, value in data.items() if value is not None}
