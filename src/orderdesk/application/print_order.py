"""Application service: Print Order use case.

Loads a stored order, encodes it as an ESC/POS receipt and hands the
bytes to the printer.  A failed print never touches the stored order.
"""

from __future__ import annotations

from datetime import tzinfo

from loguru import logger

from orderdesk.application.dto import PrintResultDTO
from orderdesk.application.ids import parse_id
from orderdesk.application.order_mapper import load_products
from orderdesk.domain.exceptions import EntityNotFoundError, PrinterTransportError
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.receipt_encoder import (
    encode_receipt,
    resolve_receipt_lines,
)
from orderdesk.domain.service.receipt_printer import ReceiptPrinter


class PrintOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        printer: ReceiptPrinter,
        display_tz: tzinfo | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._printer = printer
        self._display_tz = display_tz

    def handle(self, order_id: int | str) -> PrintResultDTO:
        oid = parse_id(order_id)
        order = self._order_repo.get_by_id(oid)
        if order is None:
            raise EntityNotFoundError(f"Order #{oid} not found")

        lines = resolve_receipt_lines(order, load_products(self._product_repo, [order]))
        payload = encode_receipt(order, lines, tz=self._display_tz)

        try:
            self._printer.write(payload)
        except PrinterTransportError:
            logger.error(
                "Printing order #{} to {} failed", oid, self._printer.device_path
            )
            raise

        logger.info(
            "Order #{} printed to {} ({} bytes)",
            oid,
            self._printer.device_path,
            len(payload),
        )
        return PrintResultDTO(
            printed=True, device_path=self._printer.device_path, order_id=oid
        )
