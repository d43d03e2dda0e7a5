"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json
from datetime import date

import click

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.delete_order import DeleteOrderHandler
from orderdesk.application.dto import CustomItemSpec, ItemSpec, OrderDTO, ProductItemSpec
from orderdesk.application.list_orders import ListOrdersHandler
from orderdesk.application.print_order import PrintOrderHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.application.update_order import UpdateOrderHandler
from orderdesk.domain.exceptions import DomainException, UnknownItemVariantError
from orderdesk.domain.model.value_objects import format_rupiah
from orderdesk.infrastructure.bootstrap import (
    display_timezone,
    order_repository,
    product_repository,
    receipt_printer,
)

ITEM_HELP = (
    "Line item, repeatable, kept in the given order: "
    "'product:<id>:<qty>[:<price>]' or 'custom:<name>:<price>'."
)


def _to_int(value: str, what: str, raw: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise click.BadParameter(f"Invalid {what} '{value}' in item '{raw}'.")


def parse_item(raw: str) -> ItemSpec:
    """Parse 'product:1:2', 'product:1:2:0' or 'custom:Shipping:10000'."""
    kind, sep, rest = raw.strip().partition(":")
    if not sep:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'product:...' or 'custom:...'."
        )

    if kind == "product":
        parts = rest.split(":")
        if len(parts) not in (2, 3):
            raise click.BadParameter(
                f"Invalid product item '{raw}'. Expected 'product:<id>:<qty>[:<price>]'."
            )
        return ProductItemSpec(
            product_id=_to_int(parts[0], "product id", raw),
            amount=_to_int(parts[1], "quantity", raw),
            price_at_sale=_to_int(parts[2], "price", raw) if len(parts) == 3 else None,
        )

    if kind == "custom":
        name, sep, price = rest.rpartition(":")
        if not sep:
            raise click.BadParameter(
                f"Invalid custom item '{raw}'. Expected 'custom:<name>:<price>'."
            )
        return CustomItemSpec(custom_name=name, custom_price=_to_int(price, "price", raw))

    raise UnknownItemVariantError(f"Invalid item type '{kind}' in item '{raw}'")


def _parse_items(raw_items: tuple[str, ...]) -> list[ItemSpec]:
    return [parse_item(raw) for raw in raw_items]


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at.strftime('%Y-%m-%d %H:%M UTC')}")
    if dto.pickup_date:
        click.echo(f"Pickup:   {dto.pickup_date.isoformat()}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()

    click.echo(f"  {'Type':<8} {'Item':<24} {'Qty':>5} {'Price':>12}")
    click.echo(f"  {'-'*52}")
    for item in dto.items:
        if item.item_type == "custom":
            name, qty = item.custom_name, 1
        else:
            name = item.product.name if item.product else f"Product {item.product_id}"
            qty = item.amount
        price = format_rupiah(item.price_at_sale) if item.price_at_sale is not None else "-"
        click.echo(f"  {item.item_type:<8} {name:<24} {qty:>5} {price:>12}")
        if item.notes:
            click.echo(f"  {'':<8} ({item.notes})")
    click.echo(f"  {'-'*52}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--pickup-date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Pickup date (YYYY-MM-DD).")
@click.option("--notes", default=None, help="Order notes.")
@click.option("--item", "items", multiple=True, required=True, help=ITEM_HELP)
def order_create(customer: str, pickup_date, notes: str | None, items: tuple[str, ...]) -> None:
    """Create a new order."""
    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(
            customer_name=customer,
            item_specs=_parse_items(items),
            pickup_date=pickup_date.date() if pickup_date else None,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the API representation.")
def order_show(order_id: str, as_json: bool) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(json.dumps(dto.to_dict(), indent=2))
    else:
        _display_order(dto)


@click.command("list")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the API representation.")
def order_list(as_json: bool) -> None:
    """List all orders."""
    dtos = ListOrdersHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    ).handle()

    if as_json:
        click.echo(json.dumps([dto.to_dict() for dto in dtos], indent=2))
        return

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<24} {'Pickup':<12} {'Items':>5}")
    click.echo("-" * 50)
    for dto in dtos:
        pickup = dto.pickup_date.isoformat() if dto.pickup_date else "-"
        click.echo(f"{dto.id:<6} {dto.customer_name:<24} {pickup:<12} {len(dto.items):>5}")


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--customer", default=None, help="New customer name.")
@click.option("--pickup-date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="New pickup date (YYYY-MM-DD).")
@click.option("--clear-pickup-date", is_flag=True, default=False, help="Remove the pickup date.")
@click.option("--notes", default=None, help="New order notes.")
@click.option("--item", "items", multiple=True, help=ITEM_HELP + " Replaces ALL existing items.")
def order_update(
    order_id: str,
    customer: str | None,
    pickup_date,
    clear_pickup_date: bool,
    notes: str | None,
    items: tuple[str, ...],
) -> None:
    """Update order details and/or replace all of its items."""
    if pickup_date and clear_pickup_date:
        raise click.ClickException("--pickup-date and --clear-pickup-date are mutually exclusive")

    changes: dict = {}
    if customer is not None:
        changes["customer_name"] = customer
    if pickup_date is not None:
        changes["pickup_date"] = pickup_date.date()
    if clear_pickup_date:
        changes["pickup_date"] = None
    if notes is not None:
        changes["notes"] = notes

    handler = UpdateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        if items:
            changes["items"] = _parse_items(items)
        dto = handler.handle(order_id, **changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} updated")
    _display_order(dto)


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
def order_delete(order_id: str) -> None:
    """Delete an order and all of its items."""
    handler = DeleteOrderHandler(order_repo=order_repository())

    try:
        header = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{header.id} ({header.customer_name}) deleted.")


@click.command("print")
@click.option("--id", "order_id", required=True, help="Order ID to print.")
def order_print(order_id: str) -> None:
    """Print an order's receipt on the configured printer."""
    handler = PrintOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        printer=receipt_printer(),
        display_tz=display_timezone(),
    )

    try:
        result = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{result.order_id} sent to {result.device_path}.")
