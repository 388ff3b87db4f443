"""Checkout form validation."""

from __future__ import annotations

from cafe_order.config import TABLE_MAX, TABLE_MIN
from cafe_order.errors import CHECKOUT_ERRORS, CheckoutError, ErrorKind
from cafe_order.models import CustomerInfo

# Field order decides which violation a rejected submit reports first.
CHECKOUT_FIELDS: tuple[str, ...] = ("table", "name", "phone")


class CheckoutValidator:
    """Independent per-field rules for the table/name/phone form."""

    def __init__(self, table_min: int = TABLE_MIN, table_max: int = TABLE_MAX) -> None:
        if table_min > table_max:
            raise ValueError("table_min must not exceed table_max")
        self.table_min = table_min
        self.table_max = table_max

    def validate_field(self, field: str, value: str) -> ErrorKind | None:
        """Check one field. Called on every edit, not only on submit."""
        if field == "table":
            return self._check_table(value)
        if field == "name":
            return None if value.strip() else ErrorKind.MISSING_NAME
        if field == "phone":
            return None if value.strip() else ErrorKind.MISSING_PHONE
        raise KeyError(field)

    def validate(self, info: CustomerInfo) -> dict[str, ErrorKind]:
        """Return field -> error for every failing field; empty means valid."""
        errors: dict[str, ErrorKind] = {}
        for field in CHECKOUT_FIELDS:
            kind = self.validate_field(field, getattr(info, field))
            if kind is not None:
                errors[field] = kind
        return errors

    def parse_table(self, value: str) -> int | None:
        try:
            table = int(value.strip())
        except ValueError:
            return None
        if not (self.table_min <= table <= self.table_max):
            return None
        return table

    def _check_table(self, value: str) -> ErrorKind | None:
        if self.parse_table(value) is None:
            return ErrorKind.INVALID_TABLE
        return None


def error_for_kind(kind: ErrorKind, field_errors: dict[str, ErrorKind]) -> CheckoutError:
    """Build the exception for one checkout violation with all failures attached."""
    return CHECKOUT_ERRORS[kind](kind.value, field_errors=field_errors)
