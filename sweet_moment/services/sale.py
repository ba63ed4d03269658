"""
Sale override evaluation.

While a product-level sale is active, its sale price is the final unit price.
It is authored as an absolute per-box price, so it replaces the option-computed
price outright instead of being combined with size/type/shape surcharges. The
computed price is still returned alongside as the "regular" price for the
strikethrough comparison.

The sale's start/end dates are enforced by the admin scheduler that sets
saleActive; this module trusts the flag.
"""

from dataclasses import dataclass
from typing import Optional

from ..schemas.catalog import Product
from .currency import (
    DEFAULT_POLICY,
    NormalizationPolicy,
    PriceRole,
    normalize_price,
    parse_price,
    round_money,
)
from .diagnostics import DiagnosticsRecorder, INVALID_PRICE_ZEROED, NULL_RECORDER


@dataclass(frozen=True)
class SaleOutcome:
    """Price to charge, plus what it would have been without the sale."""
    unit_price: float
    regular_price: float
    on_sale: bool

    @property
    def savings(self) -> float:
        return round_money(max(self.regular_price - self.unit_price, 0.0))


def active_sale_price(
    product: Product,
    policy: NormalizationPolicy = DEFAULT_POLICY,
    recorder: DiagnosticsRecorder = NULL_RECORDER,
) -> Optional[float]:
    """
    The normalized sale price if a sale is active and priced, else None.

    A missing or unparsable sale price means no override; it never turns
    into a $0 charge. A negative sale price is unusable in the same way.
    """
    if not product.sale_active:
        return None

    value = parse_price(product.sale_price)
    if value is None or value < 0:
        if product.sale_price not in (None, ""):
            recorder.record(
                INVALID_PRICE_ZEROED,
                "Unusable sale price, sale override skipped",
                product_id=product.id,
                raw=repr(product.sale_price),
            )
        return None
    return normalize_price(value, PriceRole.BASE, policy, recorder, field="salePrice")


def apply_sale(
    computed_price: float,
    product: Product,
    policy: NormalizationPolicy = DEFAULT_POLICY,
    recorder: DiagnosticsRecorder = NULL_RECORDER,
) -> SaleOutcome:
    """
    Decide the unit price to charge.

    Args:
        computed_price: Option-inclusive price in dollars
        product: Product carrying the sale fields

    Returns:
        SaleOutcome with the sale price substituted when a sale is active
    """
    regular = round_money(computed_price)
    sale_price = active_sale_price(product, policy, recorder)
    if sale_price is None:
        return SaleOutcome(unit_price=regular, regular_price=regular, on_sale=False)
    return SaleOutcome(unit_price=sale_price, regular_price=regular, on_sale=True)
