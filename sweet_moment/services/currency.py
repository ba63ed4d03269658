"""
Currency Normalization for Sweet Moment
=======================================

Catalog prices are persisted in cents, but some records entered through older
admin screens hold values that were already converted to dollars. Nothing on
the record says which. This module decides by magnitude.

Roles:
------
The same raw number means different things depending on where it sits:

- **base**: the product's base price. A box rarely costs $100 or less when
  written in cents, so value > 100 is cents and anything else is dollars.

- **size_extra**: a size surcharge. Sizes are priced like whole boxes, so the
  base rule applies: value > 100 is cents.

- **option_extra**: a type/shape surcharge. A $1 upgrade must not be read as
  $100, so only values in [100, 500) are treated as cents.

- **fee**: the mixed-type flat fee. Always written in cents.

The thresholds live in a NormalizationPolicy built from config.py so they can
be tuned (or neutralized once records carry explicit units) without touching
the arithmetic.

Rounding:
---------
Every normalized value is rounded to 2 decimals, and callers round again after
every sum or weighted average, so float drift cannot accumulate across the
steps of a price computation.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .diagnostics import DiagnosticsRecorder, INVALID_PRICE_ZEROED, NULL_RECORDER


logger = logging.getLogger(__name__)


class PriceRole(str, Enum):
    """Where a raw monetary value came from."""
    BASE = "base"
    SIZE_EXTRA = "size_extra"
    OPTION_EXTRA = "option_extra"
    FEE = "fee"


@dataclass(frozen=True)
class NormalizationPolicy:
    """Magnitude thresholds for the cents/dollars heuristic."""
    base_cents_threshold: float = 100.0
    option_cents_min: float = 100.0
    option_cents_max: float = 500.0

    def is_cents(self, value: float, role: PriceRole) -> bool:
        if role == PriceRole.FEE:
            return True
        if role in (PriceRole.BASE, PriceRole.SIZE_EXTRA):
            return value > self.base_cents_threshold
        return self.option_cents_min <= value < self.option_cents_max


DEFAULT_POLICY = NormalizationPolicy()


def round_money(amount: float) -> float:
    """Round to 2 decimal places for currency."""
    return round(amount, 2)


def parse_price(raw: Any) -> Optional[float]:
    """
    Read a raw price field as a finite float.

    Returns None when the value is absent (None, empty string) or cannot be
    read as a finite number.

    Examples:
        1500 -> 1500.0
        "3.50" -> 3.5
        "abc" -> None
        float("nan") -> None
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    elif isinstance(raw, (int, float)):
        value = float(raw)
    else:
        return None

    if math.isnan(value) or math.isinf(value):
        return None
    return value


def coerce_price(
    raw: Any,
    recorder: DiagnosticsRecorder = NULL_RECORDER,
    field: str = "price",
) -> float:
    """
    Turn a raw price field into a float, or 0.0 when it is unusable.

    None and empty strings are simply "no price". Anything else that cannot
    be read as a finite number is also 0.0, but is recorded as a degradation
    so one bad field only costs that field's contribution.
    """
    value = parse_price(raw)
    if value is not None:
        return value
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0.0
    recorder.record(INVALID_PRICE_ZEROED, "Unusable price treated as 0", field=field, raw=repr(raw))
    return 0.0


def normalize_price(
    raw: Any,
    role: PriceRole,
    policy: NormalizationPolicy = DEFAULT_POLICY,
    recorder: DiagnosticsRecorder = NULL_RECORDER,
    field: str = "price",
) -> float:
    """
    Convert a raw price value to dollars.

    Args:
        raw: Value as stored on the record (int, float, numeric string, None)
        role: Which kind of price this is; selects the threshold rule
        policy: Thresholds to apply
        recorder: Receives an event if the value is unusable
        field: Field name, for diagnostics

    Returns:
        Dollar amount rounded to 2 decimals
    """
    value = coerce_price(raw, recorder=recorder, field=field)
    if policy.is_cents(value, role):
        value = value / 100
    return round_money(value)
