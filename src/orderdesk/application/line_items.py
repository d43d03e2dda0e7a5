"""Turning submitted item specs into priced line items.

Every price is resolved before anything is persisted, so a failure on
the third item leaves storage exactly as it was.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from orderdesk.application.dto import CustomItemSpec, ItemSpec, ProductItemSpec
from orderdesk.domain.exceptions import UnknownItemVariantError, ValidationError
from orderdesk.domain.model.line_item import CustomLine, LineItem, ProductLine
from orderdesk.domain.model.value_objects import Quantity
from orderdesk.domain.service.price_resolver import PriceResolver


def build_line_items(
    specs: Sequence[ItemSpec], resolver: PriceResolver
) -> list[LineItem]:
    """Build one line item per spec, in submission order.

    Raises ``ValidationError`` keyed by ``items.<index>.<field>`` so the
    caller can point at the offending entry.
    """
    if not specs:
        raise ValidationError(
            "Order must contain at least one item",
            {"items": "At least one item is required"},
        )

    items: list[LineItem] = []
    for index, spec in enumerate(specs):
        try:
            items.append(_build_one(spec, resolver))
        except UnknownItemVariantError:
            raise UnknownItemVariantError(
                "Invalid item type",
                {f"items.{index}.itemType": "Invalid item type"},
            ) from None
        except ValidationError as exc:
            errors = {
                f"items.{index}.{key}": message for key, message in exc.errors.items()
            } or {f"items.{index}": str(exc)}
            raise ValidationError(str(exc), errors) from exc
    return items


def _build_one(spec: ItemSpec, resolver: PriceResolver) -> LineItem:
    if isinstance(spec, ProductItemSpec):
        quantity = _quantity(spec.amount)
        price = _with_field(
            "priceAtSale",
            lambda: resolver.resolve_product_price(spec.product_id, spec.price_at_sale),
        )
        if price is None:
            logger.warning(
                "Product #{} not found while pricing order line; storing no price",
                spec.product_id,
            )
        return ProductLine(
            product_id=spec.product_id,
            quantity=quantity,
            price_at_sale=price,
            notes=spec.notes,
        )

    if isinstance(spec, CustomItemSpec):
        price = _with_field(
            "customPrice", lambda: resolver.resolve_custom_price(spec.custom_price)
        )
        return CustomLine(
            custom_name=spec.custom_name,
            custom_price=price,
            notes=spec.notes,
        )

    raise UnknownItemVariantError(f"Invalid item type: {type(spec).__name__}")


def _quantity(amount: int) -> Quantity:
    return _with_field("amount", lambda: Quantity(amount))


def _with_field(field_name, build):
    try:
        return build()
    except ValidationError as exc:
        if exc.errors:
            raise
        raise ValidationError(str(exc), {field_name: str(exc)}) from exc
