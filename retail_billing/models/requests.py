"""Request and response bodies for the v1 API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..services.coercion import FormCartLine
from ..services.settlement import PaymentStatus, SaleIssue, Settlement
from .cart import ComputedBill


class BillRequest(BaseModel):
    """Live invoice preview input, straight from the sale form."""

    lines: List[FormCartLine] = Field(default_factory=list)
    tax_inclusive: bool = False
    pay_previous_balance: bool = False
    previous_balance_paid: Any = 0
    outstanding_balance: Any = None


class BillResponse(BaseModel):
    bill: ComputedBill
    amount_in_words: str


class WordsRequest(BaseModel):
    amount: Any


class WordsResponse(BaseModel):
    amount: str
    words: str


class SaleRequest(BillRequest):
    customer_id: Optional[str] = None
    payment_status: PaymentStatus = PaymentStatus.FULLY_PAID
    paid_amount: Any = None


class SaleResponse(BaseModel):
    ok: bool
    bill: ComputedBill
    settlement: Settlement
    amount_in_words: str
    issues: List[SaleIssue]
    payload: Optional[Dict[str, Any]] = None
