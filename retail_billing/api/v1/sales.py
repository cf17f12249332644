"""Sale preparation endpoint: bill, settlement, checks and submission payload."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...api.deps import get_validation_service
from ...api.errors import APIError
from ...core.config import Settings, get_settings
from ...core.logging import get_logger
from ...models.requests import SaleRequest, SaleResponse
from ...services.billing import compute_bill
from ...services.coercion import to_cart_line
from ...services.settlement import PaymentStatus, build_sale_payload, check_sale, settle
from ...services.validation import ValidationService
from ...services.words import amount_to_words
from .bill import bill_config_from_request

router = APIRouter()
logger = get_logger(__name__)


@router.post("/sales/prepare", response_model=SaleResponse)
async def prepare_sale(
    payload: SaleRequest,
    settings: Settings = Depends(get_settings),
    validation_service: ValidationService = Depends(get_validation_service),
) -> SaleResponse:
    lines = [to_cart_line(form) for form in payload.lines]
    bill = compute_bill(lines, bill_config_from_request(payload))
    settlement = settle(bill, payload.payment_status, payload.paid_amount)

    issues = check_sale(
        payload.customer_id,
        lines,
        bill,
        requested_paid=payload.paid_amount if payload.payment_status == PaymentStatus.PARTIALLY_PAID else None,
        tolerance=settings.paid_tolerance,
    )

    sale_payload = None
    if not issues:
        sale_payload = build_sale_payload(payload.customer_id, lines, bill, settlement)
        is_valid, errors = validation_service.validate(sale_payload)
        if not is_valid:
            raise APIError(
                code="PAYLOAD_INVALID",
                message="Sale payload failed schema validation",
                status_code=422,
                details={"errors": errors},
            )

    logger.info(
        "sale_prepared",
        customer_id=payload.customer_id,
        lines=len(lines),
        grand_total=bill.grand_total,
        paid_amount=settlement.paid_amount,
        issues=[issue.code for issue in issues],
    )

    return SaleResponse(
        ok=not issues,
        bill=bill,
        settlement=settlement,
        amount_in_words=amount_to_words(bill.rounded_grand_total),
        issues=issues,
        payload=sale_payload,
    )
