"""Payment settlement and sale preparation around a computed bill.

These are the checkout rules the counter applies around the bill engine:
how much of the customer's old balance is being cleared, how much is paid
now, what is still due, and which problems should stop the cashier from
submitting. None of this feeds back into the bill figures themselves.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from ..models.cart import CartLine, ComputedBill, PercentageDiscount
from .coercion import clamp_money

DEFAULT_PAID_TOLERANCE = 0.0001


class PaymentStatus(str, Enum):
    FULLY_PAID = "fully_paid"
    PARTIALLY_PAID = "partially_paid"


class Settlement(BaseModel):
    payment_status: PaymentStatus
    paid_amount: float
    balance_due: float


class SaleIssue(BaseModel):
    code: str
    message: str
    item_id: Optional[str] = None


def effective_previous_balance(requested: Any, outstanding: Any, pay_previous: bool = True) -> float:
    """Amount of the customer's old balance cleared with this sale.

    Never more than what the customer actually owes.
    """

    if not pay_previous:
        return 0.0
    return min(clamp_money(requested), clamp_money(outstanding))


def settle(bill: ComputedBill, status: PaymentStatus, paid_amount: Any = 0) -> Settlement:
    if status == PaymentStatus.FULLY_PAID:
        paid = bill.grand_total
    else:
        paid = min(clamp_money(paid_amount), bill.grand_total)
    return Settlement(
        payment_status=status,
        paid_amount=paid,
        balance_due=max(0.0, bill.grand_total - paid),
    )


def check_sale(
    customer_id: Optional[str],
    lines: Sequence[CartLine],
    bill: ComputedBill,
    requested_paid: Any = None,
    tolerance: float = DEFAULT_PAID_TOLERANCE,
) -> List[SaleIssue]:
    """Checkout checks that belong to the counter, not the bill engine.

    ``requested_paid`` is the paid figure as typed, before any capping.
    """

    issues: List[SaleIssue] = []
    if not customer_id:
        issues.append(SaleIssue(code="CUSTOMER_REQUIRED", message="Select a seller party first"))
    if not lines:
        issues.append(SaleIssue(code="CART_EMPTY", message="Add at least one item"))

    if requested_paid is not None and clamp_money(requested_paid) > bill.grand_total + tolerance:
        issues.append(SaleIssue(code="PAID_EXCEEDS_TOTAL", message="Paid amount cannot exceed total"))

    for line in lines:
        label = line.name or line.item_id
        if line.quantity <= 0:
            issues.append(
                SaleIssue(
                    code="QUANTITY_INVALID",
                    message=f"Quantity must be > 0 for {label}",
                    item_id=line.item_id,
                )
            )
            continue
        if line.available_quantity is not None and line.quantity > line.available_quantity:
            issues.append(
                SaleIssue(
                    code="INSUFFICIENT_STOCK",
                    message=f"Insufficient stock for {label}. Available: {line.available_quantity:g}",
                    item_id=line.item_id,
                )
            )

    if lines and bill.grand_total <= 0:
        issues.append(SaleIssue(code="TOTAL_NOT_POSITIVE", message="Bill total must be greater than zero"))

    return issues


def _payload_item(line: CartLine) -> Dict[str, Any]:
    discount = line.discount
    if isinstance(discount, PercentageDiscount):
        return {
            "item_id": line.item_id,
            "quantity": line.quantity,
            "sale_rate": line.sale_rate,
            "discount": 0.0,
            "discount_type": "percentage",
            "discount_percentage": discount.percent,
        }
    return {
        "item_id": line.item_id,
        "quantity": line.quantity,
        "sale_rate": line.sale_rate,
        "discount": discount.value,
        "discount_type": "amount",
        "discount_percentage": None,
    }


def build_sale_payload(
    customer_id: str,
    lines: Sequence[CartLine],
    bill: ComputedBill,
    settlement: Settlement,
) -> Dict[str, Any]:
    """Normalised transaction payload matching what ``bill`` was computed from."""

    return {
        "seller_party_id": customer_id,
        "items": [_payload_item(line) for line in lines],
        "payment_status": settlement.payment_status.value,
        "paid_amount": settlement.paid_amount,
        "with_gst": bill.tax_inclusive,
        "previous_balance_paid": bill.previous_balance_paid,
    }
