"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
Coordinates the catalog (price snapshot lookup) and the Order aggregate.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from loguru import logger

from orderdesk.application.dto import ItemSpec, OrderDTO
from orderdesk.application.line_items import build_line_items
from orderdesk.application.order_mapper import load_products, to_order_dto
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.price_resolver import PriceResolver


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        customer_name: str,
        item_specs: Sequence[ItemSpec],
        pickup_date: date | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Resolve every item's sale price (snapshot) before touching storage.
        2. Let the Order aggregate validate the header and item count.
        3. Persist order and items in one save and return the full order.
        """
        line_items = build_line_items(item_specs, PriceResolver(self._product_repo))

        order = Order.create(
            customer_name=customer_name,
            items=line_items,
            pickup_date=pickup_date,
            notes=notes,
        )
        self._order_repo.save(order)
        logger.info("Order #{} created with {} item(s)", order.id, len(order.items))

        return to_order_dto(order, load_products(self._product_repo, [order]))
