"""
Mixed-type blending.

A mixed box splits its pieces between two chocolate types according to a
continuous ratio (0-100, the share allocated to the first type). The split
must always be two whole piece counts that add up to the box size, and the
box's type surcharge is the piece-weighted average of the two types' extras.

Rounding is absorbed by the second type: type 1 is rounded and clamped, and
type 2 is whatever remains. The two counts are never computed independently.

Ratio 0 and 100 go through the same path as any other ratio, so a product's
mixed-type flat fee still applies to a box that ends up all one type.
"""

import logging
import math
from dataclasses import dataclass

from ..errors import InvalidPieceCountError
from ..schemas.catalog import CatalogOption
from .currency import (
    DEFAULT_POLICY,
    NormalizationPolicy,
    PriceRole,
    normalize_price,
    round_money,
)
from .diagnostics import DiagnosticsRecorder, NULL_RECORDER


logger = logging.getLogger(__name__)

# Ratio used when a product hides the ratio slider
FIXED_RATIO = 50


@dataclass(frozen=True)
class PieceSplit:
    """Whole-piece partition of a box between two types."""
    type1_pieces: int
    type2_pieces: int

    @property
    def total_pieces(self) -> int:
        return self.type1_pieces + self.type2_pieces


@dataclass(frozen=True)
class BlendResult:
    """Outcome of blending two type options for one box."""
    type1: CatalogOption
    type2: CatalogOption
    ratio: float
    type1_pieces: int
    type2_pieces: int
    total_pieces: int
    blended_unit_price: float

    @property
    def label(self) -> str:
        """Shopper-facing breakdown, e.g. "3 Milk Chocolate + 3 Dark Chocolate"."""
        return f"{self.type1_pieces} {self.type1.label} + {self.type2_pieces} {self.type2.label}"


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; the storefront rounds .5 up
    return int(math.floor(value + 0.5))


def clamp_ratio(ratio: float) -> float:
    """Keep a ratio inside [0, 100]; non-finite ratios become the midpoint."""
    if ratio is None or math.isnan(ratio) or math.isinf(ratio):
        return float(FIXED_RATIO)
    return min(max(float(ratio), 0.0), 100.0)


def split_pieces(ratio: float, total_pieces: int) -> PieceSplit:
    """
    Partition `total_pieces` between two types.

    Args:
        ratio: Percentage (0-100) allocated to the first type
        total_pieces: Box size, at least 1

    Returns:
        PieceSplit whose counts always sum to total_pieces

    Raises:
        InvalidPieceCountError: If total_pieces < 1
    """
    if total_pieces < 1:
        raise InvalidPieceCountError(f"Cannot blend a box of {total_pieces} pieces")

    ratio = clamp_ratio(ratio)
    type1_pieces = _round_half_up(ratio / 100 * total_pieces)
    type1_pieces = min(max(type1_pieces, 0), total_pieces)
    return PieceSplit(type1_pieces=type1_pieces, type2_pieces=total_pieces - type1_pieces)


def blend(
    type1: CatalogOption,
    type2: CatalogOption,
    ratio: float,
    total_pieces: int,
    policy: NormalizationPolicy = DEFAULT_POLICY,
    recorder: DiagnosticsRecorder = NULL_RECORDER,
) -> BlendResult:
    """
    Blend two type options into one box.

    Each type's extra price is normalized as an option extra, then weighted
    by its piece count:

        (price1 * type1_pieces + price2 * type2_pieces) / total_pieces

    Example:
        milk extra 0, dark extra 300 (-> $3.00), ratio 50, 6 pieces
        -> 3 + 3 pieces, blended extra $1.50
    """
    split = split_pieces(ratio, total_pieces)

    price1 = normalize_price(type1.price, PriceRole.OPTION_EXTRA, policy, recorder, field=f"type:{type1.id}")
    price2 = normalize_price(type2.price, PriceRole.OPTION_EXTRA, policy, recorder, field=f"type:{type2.id}")

    weighted = (price1 * split.type1_pieces + price2 * split.type2_pieces) / total_pieces
    blended = round_money(weighted)

    logger.debug(
        "Mixed type price: %.2f = (%d x $%.2f + %d x $%.2f) / %d",
        blended, split.type1_pieces, price1, split.type2_pieces, price2, total_pieces,
    )

    return BlendResult(
        type1=type1,
        type2=type2,
        ratio=clamp_ratio(ratio),
        type1_pieces=split.type1_pieces,
        type2_pieces=split.type2_pieces,
        total_pieces=total_pieces,
        blended_unit_price=blended,
    )
