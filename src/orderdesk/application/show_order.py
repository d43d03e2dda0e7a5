"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO
from orderdesk.application.ids import parse_id
from orderdesk.application.order_mapper import load_products, to_order_dto
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: int | str) -> OrderDTO:
        oid = parse_id(order_id)
        order = self._order_repo.get_by_id(oid)
        if order is None:
            raise EntityNotFoundError(f"Order #{oid} not found")
        return to_order_dto(order, load_products(self._product_repo, [order]))
