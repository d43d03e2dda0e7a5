"""Application service: Update Product use case."""

from __future__ import annotations

from loguru import logger

from orderdesk.application.ids import parse_id
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int | str, new_price: str | int) -> Product:
        """Update a product's price.

        This does NOT affect any existing orders — their line items
        captured a price snapshot at creation time.
        """
        pid = parse_id(product_id, label="product")
        product = self._product_repo.get_by_id(pid)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{pid}' not found")

        product.update_price(Money.of(new_price))
        self._product_repo.save(product)
        logger.info("Product #{} price updated to {}", pid, product.price)
        return product
