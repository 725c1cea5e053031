"""
Tax calculator (GST on the subtotal).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from backend.app.domain.pricing.models import DEFAULT_TAX_PERCENTAGE


@dataclass(frozen=True)
class TaxResult:
    subtotal: Decimal
    tax_percentage: Decimal
    tax_amount: Decimal
    total: Decimal


def compute_tax(
    price_after_surge: Decimal,
    excess_distance_charge: Decimal,
    tax_percentage: Optional[Decimal] = None,
) -> TaxResult:
    """No rounding here; persisted amounts keep full precision."""
    percentage = DEFAULT_TAX_PERCENTAGE if tax_percentage is None else tax_percentage
    subtotal = price_after_surge + excess_distance_charge
    tax_amount = subtotal * percentage / 100
    return TaxResult(
        subtotal=subtotal,
        tax_percentage=percentage,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
    )
