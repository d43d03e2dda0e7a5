"""Application service: List Orders use case (query)."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO
from orderdesk.application.order_mapper import load_products, to_order_dto
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self) -> list[OrderDTO]:
        orders = self._order_repo.list_all()
        products = load_products(self._product_repo, orders)
        return [to_order_dto(order, products) for order in orders]
