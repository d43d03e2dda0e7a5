"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers
and the only reader of settings.  Every other module depends only on
abstractions or on values passed in here.
"""

from __future__ import annotations

from datetime import tzinfo
from zoneinfo import ZoneInfo

from orderdesk.infrastructure.config import get_settings
from orderdesk.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderdesk.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from orderdesk.infrastructure.printer.device_printer import DevicePrinter


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


def receipt_printer() -> DevicePrinter:
    return DevicePrinter(get_settings().printer_device_path)


def display_timezone() -> tzinfo | None:
    name = get_settings().receipt_timezone
    return ZoneInfo(name) if name else None
