import pytest

from retail_billing.models.cart import AmountDiscount, PercentageDiscount
from retail_billing.services.coercion import (
    FormCartLine,
    clamp_money,
    parse_number,
    round_money,
    to_cart_line,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12", 12.0),
        ("  7.5 ", 7.5),
        ("12kg", 12.0),
        (".5", 0.5),
        ("-3", -3.0),
        ("1e3", 1000.0),
        ("", 0.0),
        ("abc", 0.0),
        (None, 0.0),
        (True, 0.0),
        ("NaN", 0.0),
        (float("inf"), 0.0),
        (4, 4.0),
    ],
)
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


def test_clamp_money_floors_at_zero():
    assert clamp_money("-12") == 0
    assert clamp_money("12.25") == 12.25


def test_round_money_rounds_half_up():
    assert round_money(2.675) == 2.68
    assert round_money(0.125) == 0.13
    assert round_money(100.5, 0) == 101
    assert round_money(float("nan")) == 0


def test_form_line_with_percentage():
    line = to_cart_line(
        FormCartLine(
            item_id=42,
            quantity="2",
            sale_rate="100",
            tax_rate="18",
            discount_type="percentage",
            discount_percentage="10",
        )
    )

    assert line.item_id == "42"
    assert line.quantity == 2
    assert line.discount == PercentageDiscount(percent=10)


def test_blank_percentage_falls_back_to_amount_discount():
    line = to_cart_line(
        FormCartLine(item_id="a", discount_type="percentage", discount_percentage="", discount="15")
    )

    assert line.discount == AmountDiscount(value=15)


def test_garbage_form_values_become_zero():
    line = to_cart_line(
        FormCartLine(
            item_id="a",
            quantity="-3",
            sale_rate="ten",
            tax_rate=None,
            discount="-40",
            available_quantity="",
        )
    )

    assert line.quantity == 0
    assert line.sale_rate == 0
    assert line.tax_rate == 0
    assert line.discount == AmountDiscount(value=0)
    assert line.available_quantity is None
