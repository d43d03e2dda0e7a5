"""Application service: Delete Order use case."""

from __future__ import annotations

from loguru import logger

from orderdesk.application.dto import OrderHeaderDTO
from orderdesk.application.ids import parse_id
from orderdesk.application.order_mapper import to_header_dto
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.repository.order_repository import OrderRepository


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int | str) -> OrderHeaderDTO:
        """Delete an order together with all of its line items."""
        oid = parse_id(order_id)
        deleted = self._order_repo.delete(oid)
        if deleted is None:
            raise EntityNotFoundError(f"Order #{oid} not found")

        logger.info("Order #{} deleted ({} item(s) removed)", oid, len(deleted.items))
        return to_header_dto(deleted)
