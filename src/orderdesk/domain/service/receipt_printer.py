"""Abstract byte sink for encoded receipts.

Defined in the domain layer so the print use case never depends on a
concrete device.  Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ReceiptPrinter(ABC):

    @property
    @abstractmethod
    def device_path(self) -> str:
        """Where the receipt bytes end up (reported back to callers)."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write one complete receipt.

        Raises ``PrinterTransportError`` on failure.  Never retries.
        """
