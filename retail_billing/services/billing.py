"""Bill computation engine.

Turns a cart into a reconciled bill. When GST-inclusive billing is on, the
recorded sale rate is treated as the tax-inclusive retail price and the tax
is split out of it rather than added on top. Discounts are resolved before
the split because the back-calculation runs on the post-discount amount.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from ..models.cart import BillConfig, CartLine, ComputedBill, ComputedLine, PercentageDiscount
from .coercion import round_money


def _sanitize(value: float) -> float:
    if value is None or math.isnan(value) or math.isinf(value):
        return 0.0
    return max(0.0, value)


def _resolve_discount(line: CartLine, line_gross: float) -> float:
    discount = line.discount
    if isinstance(discount, PercentageDiscount):
        resolved = line_gross * discount.percent / 100.0
    else:
        resolved = discount.value
    if not math.isfinite(resolved):
        resolved = 0.0
    return min(max(0.0, resolved), line_gross)


def compute_line(line: CartLine, tax_inclusive: bool = False) -> ComputedLine:
    quantity = _sanitize(line.quantity)
    sale_rate = _sanitize(line.sale_rate)
    tax_rate = _sanitize(line.tax_rate)

    line_gross = quantity * sale_rate
    if math.isinf(line_gross):
        line_gross = 0.0

    line_discount = _resolve_discount(line, line_gross)
    net = line_gross - line_discount

    if tax_inclusive and tax_rate > 0:
        taxable_value = net / (1 + tax_rate / 100.0)
        line_tax = net - taxable_value
        line_subtotal = taxable_value
    else:
        taxable_value = 0.0
        line_tax = 0.0
        line_subtotal = net

    return ComputedLine(
        **line.model_dump(exclude={"quantity", "sale_rate", "tax_rate", "discount"}),
        quantity=quantity,
        sale_rate=sale_rate,
        tax_rate=tax_rate,
        discount=line.discount,
        line_gross=line_gross,
        line_discount=line_discount,
        line_net_of_discount=net,
        taxable_value=taxable_value,
        line_tax=line_tax,
        line_subtotal=line_subtotal,
        effective_rate=net / quantity if quantity > 0 else sale_rate,
    )


def compute_bill(lines: Iterable[CartLine], config: Optional[BillConfig] = None) -> ComputedBill:
    """Compute every line and aggregate them into a :class:`ComputedBill`.

    Never raises on bad numbers: negative or non-finite inputs are treated
    as zero so a half-filled form still yields a displayable bill.
    """

    config = config or BillConfig()
    computed = [compute_line(line, config.tax_inclusive) for line in lines]

    subtotal = 0.0
    tax_total = 0.0
    for line in computed:
        subtotal += line.line_subtotal
        tax_total += line.line_tax

    # finite lines can still overflow once summed; such a bill reads as zero
    if not (math.isfinite(subtotal) and math.isfinite(tax_total)):
        subtotal = tax_total = 0.0
    invoice_total = subtotal + tax_total
    if not math.isfinite(invoice_total):
        subtotal = tax_total = invoice_total = 0.0

    previous_balance_paid = _sanitize(config.previous_balance_paid)
    grand_total = invoice_total + previous_balance_paid
    if math.isinf(grand_total):
        previous_balance_paid = 0.0
        grand_total = invoice_total

    rounded_grand_total = round_money(grand_total, 0)

    return ComputedBill(
        lines=computed,
        tax_inclusive=config.tax_inclusive,
        subtotal=subtotal,
        tax_total=tax_total,
        invoice_total=invoice_total,
        previous_balance_paid=previous_balance_paid,
        grand_total=grand_total,
        rounded_grand_total=rounded_grand_total,
        round_off=round_money(rounded_grand_total - grand_total),
    )
