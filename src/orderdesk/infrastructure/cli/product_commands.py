"""CLI commands for the product catalog."""

from __future__ import annotations

import json

import click

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.dto import ProductDTO
from orderdesk.application.update_product import UpdateProductHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price in whole Rupiah (e.g. 25000).")
def product_add(name: str, price: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(name=name, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the API representation.")
def product_list(as_json: bool) -> None:
    """List the catalog with current prices."""
    products = product_repository().list_all()

    if as_json:
        rows = [ProductDTO(id=p.id, name=p.name, price=p.price.amount).to_dict() for p in products]
        click.echo(json.dumps(rows, indent=2))
        return

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>12}")
    click.echo("-" * 44)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<24} {str(p.price):>12}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price in whole Rupiah.")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price (existing orders keep their snapshot)."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} price updated to {product.price}")
