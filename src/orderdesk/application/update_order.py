"""Application service: Update Order use case.

Header fields and the item collection are updated independently.  When
items are supplied the entire previous collection is replaced, never
merged, and the replacement lands in storage in a single save.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from loguru import logger

from orderdesk.application.dto import ItemSpec, OrderDTO
from orderdesk.application.ids import parse_id
from orderdesk.application.line_items import build_line_items
from orderdesk.application.order_mapper import load_products, to_order_dto
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.model.order import UNSET, Unset
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.price_resolver import PriceResolver


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        order_id: int | str,
        customer_name: str | Unset = UNSET,
        pickup_date: date | None | Unset = UNSET,
        notes: str | None | Unset = UNSET,
        items: Sequence[ItemSpec] | None | Unset = UNSET,
    ) -> OrderDTO:
        """Apply any subset of header changes and optionally replace all items.

        Fields left as ``UNSET`` are not touched.  Existence is verified
        even when nothing is being changed.
        """
        oid = parse_id(order_id)
        order = self._order_repo.get_by_id(oid)
        if order is None:
            raise EntityNotFoundError(f"Order #{oid} not found")

        # Price everything first: a failure here must leave the stored
        # items untouched.
        new_items = None
        if items is not UNSET:
            if not items:
                raise ValidationError(
                    "Order must contain at least one item",
                    {"items": "At least one item is required"},
                )
            new_items = build_line_items(items, PriceResolver(self._product_repo))

        order.update_details(
            customer_name=customer_name,
            pickup_date=pickup_date,
            notes=notes,
        )
        if new_items is not None:
            previous = len(order.items)
            order.replace_items(new_items)
            logger.info(
                "Order #{}: replacing {} item(s) with {}", oid, previous, len(new_items)
            )

        self._order_repo.save(order)
        logger.info("Order #{} updated", oid)

        return to_order_dto(order, load_products(self._product_repo, [order]))
