"""ReceiptPrinter that writes raw bytes to a device node such as /dev/usb/lp0."""

from __future__ import annotations

import threading

from orderdesk.domain.exceptions import PrinterTransportError
from orderdesk.domain.service.receipt_printer import ReceiptPrinter

# One lock per device path; held for the whole open/write/close so two
# receipts never interleave on paper.
_device_locks: dict[str, threading.Lock] = {}
_device_locks_guard = threading.Lock()


def _lock_for(device_path: str) -> threading.Lock:
    with _device_locks_guard:
        return _device_locks.setdefault(device_path, threading.Lock())


class DevicePrinter(ReceiptPrinter):

    def __init__(self, device_path: str) -> None:
        if not device_path:
            raise ValueError("Printer device path must not be empty")
        self._device_path = device_path

    @property
    def device_path(self) -> str:
        return self._device_path

    def write(self, data: bytes) -> None:
        with _lock_for(self._device_path):
            try:
                with open(self._device_path, "wb") as handle:
                    handle.write(data)
                    handle.flush()
            except OSError as exc:
                raise PrinterTransportError(
                    f"Could not write to printer at {self._device_path}: {exc}"
                ) from exc
