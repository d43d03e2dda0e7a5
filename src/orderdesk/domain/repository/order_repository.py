"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its items by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order together with its full item list.

        The header and the item collection are written as one
        all-or-nothing step: after a failed save the previously stored
        items are still the ones observed.  Assigns ``order.id`` and item
        ids when they are missing.  Raises ``EntityNotFoundError`` when
        ``order.id`` is set but no such order is stored (it was deleted).
        """

    @abstractmethod
    def delete(self, order_id: int) -> Order | None:
        """Remove an order and all of its items; return what was removed."""
