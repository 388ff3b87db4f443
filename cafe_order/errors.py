"""Shopper-facing order errors and controller misuse errors."""

from __future__ import annotations

from enum import Enum
from typing import Mapping


class ErrorKind(Enum):
    """Discrete signals a presentation layer turns into messages."""

    CAPACITY_EXCEEDED = "capacity_exceeded"
    QUANTITY_EXCEEDED = "quantity_exceeded"
    EMPTY_CART = "empty_cart"
    INVALID_TABLE = "invalid_table"
    MISSING_NAME = "missing_name"
    MISSING_PHONE = "missing_phone"


class OrderError(Exception):
    """Base class for recoverable errors reported back to the shopper."""

    kind: ErrorKind

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.kind.value)
        self.detail = detail


class CapacityExceeded(OrderError):
    kind = ErrorKind.CAPACITY_EXCEEDED


class QuantityExceeded(OrderError):
    kind = ErrorKind.QUANTITY_EXCEEDED


class EmptyCart(OrderError):
    kind = ErrorKind.EMPTY_CART


class CheckoutError(OrderError):
    """A checkout form rejection, carrying every failing field."""

    def __init__(self, detail: str = "", field_errors: Mapping[str, ErrorKind] | None = None) -> None:
        super().__init__(detail)
        self.field_errors: dict[str, ErrorKind] = dict(field_errors or {})


class InvalidTable(CheckoutError):
    kind = ErrorKind.INVALID_TABLE


class MissingName(CheckoutError):
    kind = ErrorKind.MISSING_NAME


class MissingPhone(CheckoutError):
    kind = ErrorKind.MISSING_PHONE


class InvalidTransition(RuntimeError):
    """Raised when the order flow is driven out of sequence."""


CHECKOUT_ERRORS: dict[ErrorKind, type[CheckoutError]] = {
    ErrorKind.INVALID_TABLE: InvalidTable,
    ErrorKind.MISSING_NAME: MissingName,
    ErrorKind.MISSING_PHONE: MissingPhone,
}
