"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.line_item import LineItem


class Unset(Enum):
    TOKEN = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


# Marks an update field the caller did not supply (``None`` means "clear it").
UNSET = Unset.TOKEN


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_name: str
    items: list[LineItem]
    pickup_date: date | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_name: str,
        items: list[LineItem],
        pickup_date: date | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        name = _require_customer_name(customer_name)
        _require_items(items)
        return Order(
            id=None,
            customer_name=name,
            items=list(items),
            pickup_date=pickup_date,
            notes=notes,
        )

    # --- Mutations ------------------------------------------------------------

    def update_details(
        self,
        customer_name: str | Unset = UNSET,
        pickup_date: date | None | Unset = UNSET,
        notes: str | None | Unset = UNSET,
    ) -> None:
        """Change any subset of the header fields.

        ``created_at`` is never touched.
        """
        if customer_name is not UNSET:
            self.customer_name = _require_customer_name(customer_name)
        if pickup_date is not UNSET:
            self.pickup_date = pickup_date
        if notes is not UNSET:
            self.notes = notes

    def replace_items(self, items: list[LineItem]) -> None:
        """Discard every existing line item and substitute ``items``.

        Full replace, never a merge. The new items carry no ids until the
        repository persists them.
        """
        _require_items(items)
        for item in items:
            item.id = None
            item.order_id = self.id
        self.items = list(items)

    # --- Computed properties --------------------------------------------------

    @property
    def print_date(self) -> date | datetime:
        """The date shown on the receipt: pickup date if set, else creation."""
        return self.pickup_date if self.pickup_date is not None else self.created_at


def _require_customer_name(customer_name: str | None) -> str:
    if customer_name is None or not customer_name.strip():
        raise ValidationError(
            "Customer name is required",
            {"customerName": "Customer name is required"},
        )
    return customer_name


def _require_items(items: list[LineItem] | None) -> None:
    if not items:
        raise ValidationError(
            "Order must contain at least one item",
            {"items": "At least one item is required"},
        )
