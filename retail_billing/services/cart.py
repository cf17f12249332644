"""Cart editing helpers.

Each edit returns a new list; lines are never mutated in place, so the caller
can simply recompute the bill after every change.
"""

from __future__ import annotations

from typing import List, Literal, Sequence

from ..models.cart import AmountDiscount, CartLine, CartLineUpdate, PercentageDiscount


def add_line(lines: Sequence[CartLine], line: CartLine) -> List[CartLine]:
    """Append ``line`` unless the item is already in the cart."""

    if any(existing.item_id == line.item_id for existing in lines):
        return list(lines)
    return [*lines, line]


def remove_line(lines: Sequence[CartLine], item_id: str) -> List[CartLine]:
    return [line for line in lines if line.item_id != item_id]


def apply_update(lines: Sequence[CartLine], item_id: str, update: CartLineUpdate) -> List[CartLine]:
    """Replace the line for ``item_id`` with ``update`` merged in.

    Only fields explicitly set on ``update`` are changed. An unknown
    ``item_id`` leaves the cart as it was.
    """

    changes = {name: getattr(update, name) for name in update.model_fields_set}
    changes = {name: value for name, value in changes.items() if value is not None}
    return [
        line.model_copy(update=changes) if line.item_id == item_id else line
        for line in lines
    ]


def switch_discount_mode(line: CartLine, mode: Literal["amount", "percentage"]) -> CartLine:
    """Switch the discount kind, restarting the figure at zero.

    A line holds one discount kind at a time, so the figure typed for the
    other kind is not remembered.
    """

    if line.discount.mode == mode:
        return line
    discount = PercentageDiscount(percent=0.0) if mode == "percentage" else AmountDiscount(value=0.0)
    return line.model_copy(update={"discount": discount})
