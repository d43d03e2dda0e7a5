"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``errors`` maps the offending external field name (``customerName``,
    ``items.0.amount``) to a human readable message.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors: dict[str, str] = dict(errors or {})


class UnknownItemVariantError(ValidationError):
    """An item payload was tagged neither ``product`` nor ``custom``."""


class InvalidIdError(DomainException):
    """An identifier could not be parsed as a positive integer."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PrinterTransportError(DomainException):
    """Writing the encoded receipt to the printer device failed."""
