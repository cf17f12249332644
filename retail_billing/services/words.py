"""Amount-in-words rendering with Indian numbering (crore / lakh)."""

from __future__ import annotations

import math
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Optional, Tuple, Union

Amount = Union[int, float, Decimal, str]

# up to 9,99,99,999 crore; the crore count then needs at most one regrouping
MAX_WHOLE_DIGITS = 15
_PAISE = Decimal("0.01")

_INDIAN_SCALE = [
    (10000000, "Crore"),
    (100000, "Lakh"),
    (1000, "Thousand"),
]

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
]
_TEENS = [
    "Ten",
    "Eleven",
    "Twelve",
    "Thirteen",
    "Fourteen",
    "Fifteen",
    "Sixteen",
    "Seventeen",
    "Eighteen",
    "Nineteen",
]
_TENS = [
    "", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety",
]


def _hundreds_words(value: int) -> str:
    """Words for 0-999; empty for zero."""

    parts = []
    hundreds, remaining = divmod(value, 100)
    if hundreds:
        parts.append(f"{_ONES[hundreds]} Hundred")
    if remaining >= 20:
        parts.append(_TENS[remaining // 10])
        remaining %= 10
    elif remaining >= 10:
        parts.append(_TEENS[remaining - 10])
        remaining = 0
    if remaining:
        parts.append(_ONES[remaining])
    return " ".join(parts)


def _whole_words(value: int) -> str:
    parts = []
    remaining = value
    for divider, label in _INDIAN_SCALE:
        current, remaining = divmod(remaining, divider)
        if not current:
            continue
        # a crore count beyond 999 is itself grouped the Indian way
        group = _whole_words(current) if current > 999 else _hundreds_words(current)
        parts.append(f"{group} {label}")
    if remaining:
        parts.append(_hundreds_words(remaining))
    return " ".join(parts).strip()


def _to_decimal(amount: Amount) -> Optional[Decimal]:
    """Parse ``amount``; ``None`` when it is not a usable non-negative number."""

    if isinstance(amount, bool):
        return None
    try:
        if isinstance(amount, float):
            if math.isnan(amount) or math.isinf(amount):
                return None
            number = Decimal(repr(amount))
        else:
            number = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        return None

    if not number.is_finite() or number < 0:
        return None
    return number


def exceeds_supported_range(amount: Amount) -> bool:
    """True when the whole part has more than ``MAX_WHOLE_DIGITS`` digits."""

    number = _to_decimal(amount)
    return number is not None and number >= 1 and number.adjusted() >= MAX_WHOLE_DIGITS


def split_amount(amount: Amount) -> Tuple[int, int]:
    """Split ``amount`` into whole rupees and paise.

    Paise are the first two digits after the decimal point, right-padded,
    so ``"10.5"`` is 10 rupees 50 paise and ``"10.567"`` is 10 rupees 56.
    Negative, non-finite, unparseable or out-of-range amounts split to
    ``(0, 0)``.
    """

    number = _to_decimal(amount)
    if number is None or exceeds_supported_range(number):
        return 0, 0

    truncated = number.quantize(_PAISE, rounding=ROUND_DOWN)
    whole = int(truncated)
    return whole, int((truncated - whole) * 100)


def amount_to_words(amount: Amount) -> str:
    """Render ``amount`` for the "Amount in words" line of an invoice.

    >>> amount_to_words(1234)
    'One Thousand Two Hundred Thirty Four Rupees Only'
    """

    rupees, paise = split_amount(amount)
    if rupees == 0 and paise == 0:
        return "Zero Rupees Only"

    words = _whole_words(rupees) or "Zero"
    words += " Rupees"

    if paise:
        words += f" and {_hundreds_words(paise)} Paise"

    return words + " Only"
