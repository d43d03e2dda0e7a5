"""Application service: Add Product use case."""

from __future__ import annotations

from loguru import logger

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, price: str | int) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError(
                "Product name is required", {"name": "Product name is required"}
            )

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(
                f"Product '{name}' already exists", {"name": "Product already exists"}
            )

        money = Money.of(price)
        if money.amount <= 0:
            raise ValidationError(
                "Product price must be greater than zero",
                {"price": "Price must be positive"},
            )

        product = Product(id=None, name=name.strip(), price=money)
        self._product_repo.save(product)
        logger.info("Product #{} '{}' added at {}", product.id, product.name, product.price)
        return product
