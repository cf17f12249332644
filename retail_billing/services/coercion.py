"""Numeric coercion for free-form form input.

The sale screen sends whatever the cashier typed. Everything here turns that
into clean, non-negative floats before the bill engine sees it, so the engine
only has to deal with numbers.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from ..models.cart import AmountDiscount, CartLine, PercentageDiscount

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(raw: Any) -> float:
    """Parse ``raw`` the way a browser form does, falling back to ``0``.

    Leading numeric text wins (``"12kg"`` -> 12.0); blanks, ``None``, booleans
    and anything non-finite become ``0``.
    """

    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float, Decimal)):
        try:
            value = float(raw)
        except (OverflowError, ValueError):
            return 0.0
    else:
        match = _LEADING_NUMBER.match(str(raw))
        if not match:
            return 0.0
        try:
            value = float(match.group(0))
        except (OverflowError, ValueError):
            return 0.0
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def clamp_money(raw: Any) -> float:
    return max(0.0, parse_number(raw))


def is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def round_money(value: float, places: int = 2) -> float:
    """Round half-up to ``places`` decimals; ``round()`` would round half to even."""

    value = parse_number(value)
    quantum = Decimal(1).scaleb(-places)
    try:
        return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)) + 0.0
    except InvalidOperation:
        # past 28 significant digits a float carries no fractional part
        return value


class FormCartLine(BaseModel):
    """A cart line exactly as the sale form holds it."""

    item_id: str
    quantity: Any = 0
    sale_rate: Any = 0
    tax_rate: Any = 0
    discount_type: Optional[str] = "amount"
    discount: Any = 0
    discount_percentage: Any = None
    name: Optional[str] = None
    available_quantity: Any = None

    @field_validator("item_id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return "" if value is None else str(value)


def to_cart_line(form: FormCartLine) -> CartLine:
    """Convert a raw form line into a sanitised :class:`CartLine`.

    A percentage-mode line whose percentage is blank is treated as an
    absolute discount using the ``discount`` field.
    """

    mode = (form.discount_type or "amount").strip().lower()
    if mode == "percentage" and not is_blank(form.discount_percentage):
        discount = PercentageDiscount(percent=clamp_money(form.discount_percentage))
    else:
        discount = AmountDiscount(value=clamp_money(form.discount))

    available = None if is_blank(form.available_quantity) else clamp_money(form.available_quantity)

    return CartLine(
        item_id=form.item_id,
        quantity=clamp_money(form.quantity),
        sale_rate=clamp_money(form.sale_rate),
        tax_rate=clamp_money(form.tax_rate),
        discount=discount,
        name=form.name,
        available_quantity=available,
    )
