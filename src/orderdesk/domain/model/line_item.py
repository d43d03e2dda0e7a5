"""Line items: the two kinds of sellable row an order can hold.

A line item is either a ``ProductLine`` (a quantity of a catalog product)
or a ``CustomLine`` (an ad-hoc charge such as shipping). The two are kept
as separate types; only the storage document flattens them into one
nullable row shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.value_objects import Money, Quantity

PRODUCT = "product"
CUSTOM = "custom"


@dataclass
class ProductLine:
    """A quantity of a catalog product.

    ``price_at_sale`` is the unit price frozen when the line was created.
    It is ``None`` only when the referenced product could not be found at
    that moment.
    """

    item_type: ClassVar[str] = PRODUCT

    product_id: int
    quantity: Quantity
    price_at_sale: Money | None
    notes: str | None = None
    id: int | None = None
    order_id: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.product_id, bool) or not isinstance(self.product_id, int) or self.product_id <= 0:
            raise ValidationError(
                "Product ID must be positive",
                {"productId": "Product ID must be positive"},
            )

    @property
    def amount(self) -> int:
        return self.quantity.value


@dataclass
class CustomLine:
    """An ad-hoc charge with its own name and price (quantity is always 1)."""

    item_type: ClassVar[str] = CUSTOM

    custom_name: str
    custom_price: Money
    notes: str | None = None
    id: int | None = None
    order_id: int | None = None

    def __post_init__(self) -> None:
        if not self.custom_name or not self.custom_name.strip():
            raise ValidationError(
                "Custom item name is required",
                {"customName": "Custom item name is required"},
            )

    @property
    def price_at_sale(self) -> Money:
        return self.custom_price

    @property
    def amount(self) -> int:
        return 1


LineItem = ProductLine | CustomLine
