"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._file.transaction() as raw:
            if product.id is None:
                product.id = max((item["id"] for item in raw), default=0) + 1
            record = {"id": product.id, "name": product.name, "price": product.price.amount}
            for i, item in enumerate(raw):
                if item["id"] == product.id:
                    raw[i] = record
                    break
            else:
                raw.append(record)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[int, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                price=Money(item["price"]),
            )
            for item in self._file.load()
        }
