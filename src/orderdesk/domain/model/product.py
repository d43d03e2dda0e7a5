"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Read-only from the point of view of orders; kept as a mutable
    dataclass because price updates are a legitimate mutation on the
    catalog side.
    """

    id: int | None
    name: str
    price: Money

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because line items
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError(
                "Product price must be greater than zero",
                {"price": "Price must be positive"},
            )
        self.price = new_price
