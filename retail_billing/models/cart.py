"""Pydantic models for cart lines and computed bills."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AmountDiscount(BaseModel):
    """Absolute discount in currency for the whole line."""

    mode: Literal["amount"] = "amount"
    value: float = 0.0


class PercentageDiscount(BaseModel):
    """Discount as a percentage of the line gross."""

    mode: Literal["percentage"] = "percentage"
    percent: float = 0.0


Discount = Annotated[Union[AmountDiscount, PercentageDiscount], Field(discriminator="mode")]


class CartLine(BaseModel):
    item_id: str
    quantity: float = 0.0
    sale_rate: float = 0.0
    tax_rate: float = 0.0
    discount: Discount = Field(default_factory=AmountDiscount)
    name: Optional[str] = None
    available_quantity: Optional[float] = None


class CartLineUpdate(BaseModel):
    """Fields a cashier may edit on a line already in the cart."""

    model_config = ConfigDict(extra="forbid")

    quantity: Optional[float] = None
    sale_rate: Optional[float] = None
    tax_rate: Optional[float] = None
    discount: Optional[Discount] = None


class BillConfig(BaseModel):
    tax_inclusive: bool = False
    previous_balance_paid: float = 0.0


class ComputedLine(CartLine):
    model_config = ConfigDict(frozen=True)

    line_gross: float
    line_discount: float
    line_net_of_discount: float
    taxable_value: float
    line_tax: float
    line_subtotal: float
    effective_rate: float


class ComputedBill(BaseModel):
    model_config = ConfigDict(frozen=True)

    lines: List[ComputedLine]
    tax_inclusive: bool
    subtotal: float
    tax_total: float
    invoice_total: float
    previous_balance_paid: float
    grand_total: float
    rounded_grand_total: float
    round_off: float
