"""Domain service: Receipt Encoder.

Turns a stored order into the exact ESC/POS byte stream a thermal
receipt printer consumes.  Everything here is pure: the same order and
lines always produce the same bytes.

The receipt is composed as an ordered list of sections (header, date,
item blocks, total, footer) that are joined once and transcribed one
byte per character, so control codes survive literally.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from orderdesk.domain.model.line_item import CustomLine, ProductLine
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import format_rupiah

# ---------------------------------------------------------------------------
# ESC/POS control codes
# ---------------------------------------------------------------------------
ESC = "\x1b"
GS = "\x1d"
LF = "\n"

INIT = ESC + "@"
ALIGN_LEFT = ESC + "a" + "\x00"
ALIGN_CENTER = ESC + "a" + "\x01"
SIZE_LARGE = GS + "!" + "\x11"  # double width + double height
CUT = GS + "V" + "\x00"

SEPARATOR = "-" * 30
NOTE_INDENT = "   "
THANK_YOU = "Thank you"
RECEIPT_ENCODING = "latin-1"


@dataclass(frozen=True)
class ReceiptLine:
    """One item as it appears on paper, with every fallback already applied."""

    name: str
    quantity: int
    unit_price: int
    notes: tuple[str, ...] = ()

    @property
    def line_total(self) -> int:
        return self.quantity * self.unit_price


def resolve_receipt_lines(
    order: Order, products: Mapping[int, Product]
) -> list[ReceiptLine]:
    """Map stored line items to printable lines, preserving stored order.

    ``products`` holds whatever catalog entries could be loaded; a missing
    product degrades to a ``Product {id}`` label rather than failing.
    """
    lines: list[ReceiptLine] = []
    for item in order.items:
        notes = _note_lines(item.notes)
        if isinstance(item, CustomLine):
            lines.append(
                ReceiptLine(
                    name=item.custom_name,
                    quantity=1,
                    unit_price=item.custom_price.amount,
                    notes=notes,
                )
            )
        elif isinstance(item, ProductLine):
            product = products.get(item.product_id)
            if item.price_at_sale is not None:
                unit_price = item.price_at_sale.amount
            elif product is not None:
                unit_price = product.price.amount
            else:
                unit_price = 0
            lines.append(
                ReceiptLine(
                    name=product.name if product is not None else f"Product {item.product_id}",
                    quantity=item.quantity.value,
                    unit_price=unit_price,
                    notes=notes,
                )
            )
        else:
            raise TypeError(f"Unsupported line item type: {type(item).__name__}")
    return lines


def grand_total(lines: list[ReceiptLine]) -> int:
    return sum((line.line_total for line in lines), 0)


def format_print_date(value: date | datetime, tz: tzinfo | None = None) -> str:
    """Render as ``YYYY-MM-DD HH:MM`` (24h); bare dates print as midnight."""
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.strftime("%Y-%m-%d %H:%M")
    return value.strftime("%Y-%m-%d") + " 00:00"


def encode_receipt(
    order: Order, lines: list[ReceiptLine], tz: tzinfo | None = None
) -> bytes:
    """Encode ``order`` and its resolved ``lines`` as ESC/POS bytes.

    ``tz`` is the display timezone for an aware ``created_at``; pickup
    dates carry no time and are printed as-is.
    """
    sections = [
        INIT,
        _customer_section(order.customer_name),
        _date_section(format_print_date(order.print_date, tz)),
        ALIGN_LEFT + SEPARATOR + LF,
        *(_item_section(line) for line in lines),
        SEPARATOR + LF,
        _total_section(grand_total(lines)),
        _footer_section(),
        CUT,
    ]
    return "".join(sections).encode(RECEIPT_ENCODING, errors="replace")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _customer_section(customer_name: str) -> str:
    return ALIGN_CENTER + SIZE_LARGE + customer_name + LF + LF


def _date_section(printed_date: str) -> str:
    return INIT + ALIGN_CENTER + printed_date + LF + LF


def _item_section(line: ReceiptLine) -> str:
    price = format_rupiah(line.unit_price)
    total = format_rupiah(line.line_total)
    out = [
        SIZE_LARGE + f"{line.quantity}x {line.name}" + LF,
        INIT,
        f" {line.quantity} x {price} = {total}" + LF,
    ]
    out.extend(f"{NOTE_INDENT}({note})" + LF for note in line.notes)
    return "".join(out)


def _total_section(total: int) -> str:
    return SIZE_LARGE + f"TOTAL {format_rupiah(total)}" + LF + LF


def _footer_section() -> str:
    return INIT + ALIGN_CENTER + THANK_YOU + LF + LF


def _note_lines(notes: str | None) -> tuple[str, ...]:
    """One receipt line per line of ``notes``, printed as written; blank lines are skipped."""
    if not notes:
        return ()
    return tuple(part for part in notes.splitlines() if part.strip())
