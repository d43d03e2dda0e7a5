"""Mapping from the Order aggregate to output DTOs.

Shared by every query-returning use case so that create, update, show
and list all return the same shape.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from orderdesk.application.dto import (
    LineItemDTO,
    OrderDTO,
    OrderHeaderDTO,
    ProductDTO,
)
from orderdesk.domain.model.line_item import CustomLine, LineItem, ProductLine
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_repository import ProductRepository


def load_products(
    product_repo: ProductRepository, orders: Iterable[Order]
) -> dict[int, Product]:
    """Fetch every product referenced by ``orders`` (one read per product)."""
    products: dict[int, Product] = {}
    for order in orders:
        for item in order.items:
            if isinstance(item, ProductLine) and item.product_id not in products:
                product = product_repo.get_by_id(item.product_id)
                if product is not None:
                    products[item.product_id] = product
    return products


def to_order_dto(order: Order, products: Mapping[int, Product]) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=order.customer_name,
        created_at=order.created_at,
        pickup_date=order.pickup_date,
        notes=order.notes,
        items=[_to_item_dto(item, products) for item in order.items],
    )


def to_header_dto(order: Order) -> OrderHeaderDTO:
    return OrderHeaderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=order.customer_name,
        created_at=order.created_at,
        pickup_date=order.pickup_date,
        notes=order.notes,
    )


def _to_item_dto(item: LineItem, products: Mapping[int, Product]) -> LineItemDTO:
    if isinstance(item, CustomLine):
        return LineItemDTO(
            id=item.id,  # type: ignore[arg-type]
            order_id=item.order_id,  # type: ignore[arg-type]
            item_type=item.item_type,
            price_at_sale=item.price_at_sale.amount,
            notes=item.notes,
            custom_name=item.custom_name,
            custom_price=item.custom_price.amount,
        )

    product = products.get(item.product_id)
    return LineItemDTO(
        id=item.id,  # type: ignore[arg-type]
        order_id=item.order_id,  # type: ignore[arg-type]
        item_type=item.item_type,
        price_at_sale=item.price_at_sale.amount if item.price_at_sale is not None else None,
        notes=item.notes,
        product_id=item.product_id,
        amount=item.quantity.value,
        product=(
            ProductDTO(id=product.id, name=product.name, price=product.price.amount)  # type: ignore[arg-type]
            if product is not None
            else None
        ),
    )
