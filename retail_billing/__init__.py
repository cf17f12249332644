"""GST-aware bill computation service."""

from .services.billing import compute_bill, compute_line
from .services.words import amount_to_words

__all__ = ["amount_to_words", "compute_bill", "compute_line"]
