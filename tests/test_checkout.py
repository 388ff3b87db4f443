from __future__ import annotations

import pytest

from cafe_order.checkout import CheckoutValidator, error_for_kind
from cafe_order.errors import ErrorKind, InvalidTable, MissingPhone
from cafe_order.models import CustomerInfo


@pytest.mark.parametrize("table", ["1", "7", "12", " 3 "])
def test_table_in_range_is_valid(table):
    assert CheckoutValidator().validate_field("table", table) is None


@pytest.mark.parametrize("table", ["13", "0", "-1", "", "seven", "7.5", "   "])
def test_bad_table_is_invalid(table):
    assert CheckoutValidator().validate_field("table", table) is ErrorKind.INVALID_TABLE


def test_table_range_is_configurable():
    validator = CheckoutValidator(table_min=1, table_max=20)
    assert validator.validate_field("table", "13") is None
    assert validator.parse_table("20") == 20
    assert validator.parse_table("21") is None


def test_blank_name_and_phone_after_trim():
    validator = CheckoutValidator()
    assert validator.validate_field("name", "   ") is ErrorKind.MISSING_NAME
    assert validator.validate_field("phone", "\t") is ErrorKind.MISSING_PHONE
    assert validator.validate_field("name", " Ravi ") is None
    assert validator.validate_field("phone", "abc") is None


def test_validate_collects_every_failing_field_in_form_order():
    errors = CheckoutValidator().validate(CustomerInfo(table="99", name="", phone=""))

    assert list(errors) == ["table", "name", "phone"]
    assert errors["table"] is ErrorKind.INVALID_TABLE


def test_rules_are_independent():
    errors = CheckoutValidator().validate(CustomerInfo(table="4", name="", phone="555"))
    assert errors == {"name": ErrorKind.MISSING_NAME}


def test_valid_info_has_no_errors(valid_customer):
    assert CheckoutValidator().validate(valid_customer) == {}


def test_unknown_field_raises_key_error():
    with pytest.raises(KeyError):
        CheckoutValidator().validate_field("email", "x")


def test_inverted_range_rejected():
    with pytest.raises(ValueError):
        CheckoutValidator(table_min=5, table_max=1)


def test_error_for_kind_builds_matching_exception():
    errors = {"table": ErrorKind.INVALID_TABLE, "phone": ErrorKind.MISSING_PHONE}

    exc = error_for_kind(ErrorKind.INVALID_TABLE, errors)
    assert isinstance(exc, InvalidTable)
    assert exc.field_errors == errors

    assert isinstance(error_for_kind(ErrorKind.MISSING_PHONE, errors), MissingPhone)
