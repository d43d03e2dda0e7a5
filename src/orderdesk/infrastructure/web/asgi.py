"""ASGI entry point: ``uvicorn orderdesk.infrastructure.web.asgi:app``."""

from __future__ import annotations

from orderdesk.infrastructure import bootstrap
from orderdesk.infrastructure.config import get_settings
from orderdesk.infrastructure.logging import configure_logging
from orderdesk.infrastructure.web.fastapi_app import create_app

configure_logging(get_settings().log_level)

app = create_app(
    order_repo=bootstrap.order_repository(),
    product_repo=bootstrap.product_repository(),
    printer=bootstrap.receipt_printer(),
    display_tz=bootstrap.display_timezone(),
)
