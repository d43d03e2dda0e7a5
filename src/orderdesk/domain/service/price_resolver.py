"""Domain service: Price Resolver.

Decides the ``price_at_sale`` snapshot stored on a new product line.
The snapshot is taken once, when the line is created, and is never
recomputed afterwards; later catalog price changes do not reach it.
"""

from __future__ import annotations

from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository


class PriceResolver:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def resolve_product_price(
        self, product_id: int, override: int | None = None
    ) -> Money | None:
        """Return the unit price to freeze on a product line.

        Resolution order:
        1. An explicit ``override`` supplied by the caller, used verbatim
           (``0`` is a valid override).
        2. The product's current catalog price (one read).
        3. ``None`` when the product does not exist.  The order is still
           accepted; the receipt falls back to a placeholder name.
        """
        if override is not None:
            return Money(override)

        product = self._product_repo.get_by_id(product_id)
        return product.price if product is not None else None

    @staticmethod
    def resolve_custom_price(custom_price: int) -> Money:
        """Custom lines are always sold at the price the caller typed in."""
        return Money(custom_price)
