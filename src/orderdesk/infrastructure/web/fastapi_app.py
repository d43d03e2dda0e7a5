"""HTTP adapter: FastAPI routes for orders and receipt printing.

Request bodies are validated with pydantic; every failure is returned
as ``{"success": false, "type": ..., "message": ..., "errors": {...}}``.
Successful responses wrap the payload as ``{"success": true, "data": ...}``.
"""

from __future__ import annotations

from datetime import date, tzinfo
from typing import Annotated, Any, Literal, Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.delete_order import DeleteOrderHandler
from orderdesk.application.dto import CustomItemSpec, ItemSpec, ProductItemSpec
from orderdesk.application.list_orders import ListOrdersHandler
from orderdesk.application.print_order import PrintOrderHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.application.update_order import UpdateOrderHandler
from orderdesk.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvalidIdError,
    PrinterTransportError,
    UnknownItemVariantError,
    ValidationError,
)
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.receipt_printer import ReceiptPrinter

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductItemIn(_CamelModel):
    item_type: Literal["product"]
    product_id: int = Field(gt=0, examples=[1])
    amount: int = Field(gt=0, examples=[2])
    notes: Optional[str] = None
    price_at_sale: Optional[int] = Field(default=None, ge=0)


class CustomItemIn(_CamelModel):
    item_type: Literal["custom"]
    custom_name: str = Field(min_length=1, examples=["Ongkos Kirim"])
    custom_price: int = Field(ge=0, examples=[10000])
    notes: Optional[str] = None


ItemIn = Annotated[Union[ProductItemIn, CustomItemIn], Field(discriminator="item_type")]


class CreateOrderRequest(_CamelModel):
    customer_name: str = Field(min_length=1, examples=["Alice"])
    pickup_date: Optional[date] = None
    notes: Optional[str] = None
    items: list[ItemIn] = Field(min_length=1)


class UpdateOrderRequest(_CamelModel):
    customer_name: Optional[str] = Field(default=None, min_length=1)
    pickup_date: Optional[date] = None
    notes: Optional[str] = None
    items: Optional[list[ItemIn]] = Field(default=None, min_length=1)


def _to_spec(item: ProductItemIn | CustomItemIn) -> ItemSpec:
    if isinstance(item, ProductItemIn):
        return ProductItemSpec(
            product_id=item.product_id,
            amount=item.amount,
            notes=item.notes,
            price_at_sale=item.price_at_sale,
        )
    return CustomItemSpec(
        custom_name=item.custom_name,
        custom_price=item.custom_price,
        notes=item.notes,
    )


# ---- Error mapping -----------------------------------------------------------


def _error_body(
    exc_type: str, message: str, errors: dict[str, str] | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "type": exc_type, "message": message}
    if errors:
        body["errors"] = errors
    return body


def _map_error_to_http(err: DomainException) -> tuple[int, dict[str, Any]]:
    if isinstance(err, UnknownItemVariantError):
        return 400, _error_body("UnknownItemVariant", "Invalid item type", err.errors)

    if isinstance(err, ValidationError):
        return 400, _error_body("ValidationFailed", "Validation failed", err.errors)

    if isinstance(err, InvalidIdError):
        return 400, _error_body("InvalidId", "Validation failed", {"id": str(err)})

    if isinstance(err, EntityNotFoundError):
        return 404, _error_body("NotFound", str(err))

    if isinstance(err, PrinterTransportError):
        return 502, _error_body("TransportFailure", str(err))

    return 500, _error_body(type(err).__name__, str(err))


def _request_errors(exc: RequestValidationError) -> tuple[bool, dict[str, str]]:
    """Flatten pydantic errors into ``{"items.0.amount": message}``."""
    unknown_variant = False
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        if error.get("type") == "union_tag_invalid":
            unknown_variant = True
            loc.append("itemType")
            message = "Invalid item type"
        else:
            message = error.get("msg", "Invalid value")
        errors.setdefault(".".join(loc) or "body", message)
    return unknown_variant, errors


def create_app(
    order_repo: OrderRepository,
    product_repo: ProductRepository,
    printer: ReceiptPrinter,
    display_tz: tzinfo | None = None,
) -> FastAPI:
    app = FastAPI(title="orderdesk")

    # --- exception handlers ---------------------------------------------------

    @app.exception_handler(DomainException)
    async def handle_domain_error(_: Request, exc: DomainException) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        return JSONResponse(status_code=status, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        unknown_variant, errors = _request_errors(exc)
        if unknown_variant:
            body = _error_body("UnknownItemVariant", "Invalid item type", errors)
        else:
            body = _error_body("ValidationFailed", "Validation failed", errors)
        return JSONResponse(status_code=400, content=body)

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error: {}", exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(type(exc).__name__, "Internal server error"),
        )

    # --- orders ---------------------------------------------------------------

    @app.get("/api/orders")
    def list_orders() -> dict[str, Any]:
        orders = ListOrdersHandler(order_repo, product_repo).handle()
        return {"success": True, "data": [o.to_dict() for o in orders]}

    @app.get("/api/orders/{order_id}")
    def get_order(order_id: str) -> dict[str, Any]:
        dto = ShowOrderHandler(order_repo, product_repo).handle(order_id)
        return {"success": True, "data": dto.to_dict()}

    @app.post("/api/orders", status_code=201)
    def create_order(req: CreateOrderRequest) -> dict[str, Any]:
        dto = CreateOrderHandler(order_repo, product_repo).handle(
            customer_name=req.customer_name,
            item_specs=[_to_spec(item) for item in req.items],
            pickup_date=req.pickup_date,
            notes=req.notes,
        )
        return {"success": True, "data": dto.to_dict()}

    @app.put("/api/orders/{order_id}")
    def update_order(order_id: str, req: UpdateOrderRequest) -> dict[str, Any]:
        changes: dict[str, Any] = {
            name: getattr(req, name)
            for name in ("customer_name", "pickup_date", "notes")
            if name in req.model_fields_set
        }
        if "items" in req.model_fields_set:
            changes["items"] = (
                [_to_spec(item) for item in req.items] if req.items is not None else None
            )
        dto = UpdateOrderHandler(order_repo, product_repo).handle(order_id, **changes)
        return {"success": True, "data": dto.to_dict()}

    @app.delete("/api/orders/{order_id}")
    def delete_order(order_id: str) -> dict[str, Any]:
        header = DeleteOrderHandler(order_repo).handle(order_id)
        return {
            "success": True,
            "message": "Order deleted successfully",
            "data": header.to_dict(),
        }

    # --- printer --------------------------------------------------------------

    @app.post("/api/printer/orders/{order_id}/print")
    def print_order(order_id: str) -> dict[str, Any]:
        result = PrintOrderHandler(
            order_repo, product_repo, printer, display_tz=display_tz
        ).handle(order_id)
        return {"success": True, "data": result.to_dict()}

    return app
