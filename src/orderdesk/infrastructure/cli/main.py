import click
import uvicorn

from orderdesk.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_print,
    order_show,
    order_update,
)
from orderdesk.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from orderdesk.infrastructure.config import get_settings
from orderdesk.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """orderdesk — orders and receipt printing"""
    configure_logging(get_settings().log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to HOST setting).")
@click.option("--port", default=None, type=int, help="Port (defaults to PORT setting).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    settings = get_settings()
    uvicorn.run(
        "orderdesk.infrastructure.web.asgi:app",
        host=host or settings.host,
        port=port or settings.port,
    )


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_print)
order.add_command(order_show)
order.add_command(order_update)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
