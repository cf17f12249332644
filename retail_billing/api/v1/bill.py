"""Live bill computation endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from ...core.logging import get_logger
from ...models.cart import BillConfig
from ...models.requests import BillRequest, BillResponse
from ...services.billing import compute_bill
from ...services.coercion import clamp_money, to_cart_line
from ...services.settlement import effective_previous_balance
from ...services.words import amount_to_words

router = APIRouter()
logger = get_logger(__name__)


def bill_config_from_request(payload: BillRequest) -> BillConfig:
    """Previous balance is capped at what the customer owes, when known."""

    if payload.outstanding_balance is None:
        previous = clamp_money(payload.previous_balance_paid) if payload.pay_previous_balance else 0.0
    else:
        previous = effective_previous_balance(
            payload.previous_balance_paid,
            payload.outstanding_balance,
            pay_previous=payload.pay_previous_balance,
        )
    return BillConfig(tax_inclusive=payload.tax_inclusive, previous_balance_paid=previous)


@router.post("/compute/bill", response_model=BillResponse)
async def compute_bill_endpoint(payload: BillRequest) -> BillResponse:
    lines = [to_cart_line(form) for form in payload.lines]
    bill = compute_bill(lines, bill_config_from_request(payload))

    logger.info(
        "bill_computed",
        lines=len(bill.lines),
        tax_inclusive=bill.tax_inclusive,
        grand_total=bill.grand_total,
    )

    return BillResponse(bill=bill, amount_in_words=amount_to_words(bill.rounded_grand_total))
