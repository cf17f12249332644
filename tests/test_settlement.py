import pytest

from retail_billing.models.cart import AmountDiscount, BillConfig, CartLine, PercentageDiscount
from retail_billing.services.billing import compute_bill
from retail_billing.services.settlement import (
    PaymentStatus,
    build_sale_payload,
    check_sale,
    effective_previous_balance,
    settle,
)
from retail_billing.services.validation import ValidationService


def _lines():
    return [
        CartLine(item_id="a", name="Rice 5kg", quantity=2, sale_rate=100, tax_rate=5, available_quantity=10),
        CartLine(
            item_id="b",
            name="Oil 1L",
            quantity=1,
            sale_rate=150,
            tax_rate=18,
            discount=PercentageDiscount(percent=10),
            available_quantity=3,
        ),
    ]


def test_effective_previous_balance_is_capped_by_outstanding():
    assert effective_previous_balance(500, 320) == 320
    assert effective_previous_balance("120", "320") == 120
    assert effective_previous_balance(-5, 320) == 0
    assert effective_previous_balance(500, 320, pay_previous=False) == 0


def test_fully_paid_settles_grand_total():
    bill = compute_bill(_lines(), BillConfig(previous_balance_paid=40))
    settlement = settle(bill, PaymentStatus.FULLY_PAID, paid_amount=1)

    assert settlement.paid_amount == bill.grand_total
    assert settlement.balance_due == 0


def test_partial_payment_leaves_balance_due():
    bill = compute_bill(_lines())
    settlement = settle(bill, PaymentStatus.PARTIALLY_PAID, paid_amount="100")

    assert settlement.paid_amount == 100
    assert settlement.balance_due == pytest.approx(bill.grand_total - 100)


def test_partial_payment_is_capped_at_grand_total():
    bill = compute_bill(_lines())
    settlement = settle(bill, PaymentStatus.PARTIALLY_PAID, paid_amount=10_000)

    assert settlement.paid_amount == bill.grand_total
    assert settlement.balance_due == 0


def test_clean_sale_has_no_issues():
    lines = _lines()
    bill = compute_bill(lines)

    assert check_sale("cust-1", lines, bill) == []


def test_check_sale_reports_counter_problems():
    lines = _lines() + [CartLine(item_id="c", quantity=0, sale_rate=10)]
    lines[1] = lines[1].model_copy(update={"quantity": 5})
    bill = compute_bill(lines)

    codes = [issue.code for issue in check_sale(None, lines, bill, requested_paid=bill.grand_total + 1)]

    assert codes == ["CUSTOMER_REQUIRED", "PAID_EXCEEDS_TOTAL", "INSUFFICIENT_STOCK", "QUANTITY_INVALID"]


def test_check_sale_on_empty_cart():
    bill = compute_bill([])
    codes = [issue.code for issue in check_sale("cust-1", [], bill)]

    assert codes == ["CART_EMPTY"]


def test_paid_within_tolerance_is_accepted():
    lines = _lines()
    bill = compute_bill(lines)

    assert check_sale("cust-1", lines, bill, requested_paid=bill.grand_total + 0.00001) == []


def test_sale_payload_matches_bill_and_schema():
    lines = _lines()
    bill = compute_bill(lines, BillConfig(tax_inclusive=True, previous_balance_paid=25))
    settlement = settle(bill, PaymentStatus.PARTIALLY_PAID, paid_amount=200)

    payload = build_sale_payload("cust-1", lines, bill, settlement)

    assert payload["seller_party_id"] == "cust-1"
    assert payload["with_gst"] is True
    assert payload["previous_balance_paid"] == 25
    assert payload["paid_amount"] == 200
    assert payload["payment_status"] == "partially_paid"
    assert payload["items"][0]["discount_type"] == "amount"
    assert payload["items"][0]["discount_percentage"] is None
    assert payload["items"][1] == {
        "item_id": "b",
        "quantity": 1,
        "sale_rate": 150,
        "discount": 0.0,
        "discount_type": "percentage",
        "discount_percentage": 10,
    }

    ok, errors = ValidationService().validate(payload)
    assert ok, errors


def test_schema_rejects_malformed_payload():
    ok, errors = ValidationService().validate(
        {
            "seller_party_id": "",
            "items": [{"item_id": "a", "quantity": 0}],
            "payment_status": "later",
            "paid_amount": -1,
            "with_gst": "yes",
            "previous_balance_paid": 0,
        }
    )

    assert not ok
    paths = {error["path"] for error in errors}
    assert {"/seller_party_id", "/payment_status", "/paid_amount", "/with_gst", "/items/0"} <= paths


def test_stock_is_not_checked_when_availability_is_unknown():
    lines = [CartLine(item_id="a", quantity=500, sale_rate=10)]
    bill = compute_bill(lines)

    assert check_sale("cust-1", lines, bill) == []
