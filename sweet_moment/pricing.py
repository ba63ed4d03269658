"""
Pricing Engine for Chocolate Boxes.

This module turns a product record and a shopper's selections into a unit
price. It composes the catalog resolver, piece-count deriver, currency
normalizer, mixed-type blender and sale override, in that order:

    base price
    + size extra
    + type extra            (or the blended extra of two types, + mixed fee)
    + shape extra
    = regular price
    -> sale price replaces it while a sale is active

Every step is rounded to cents before the next one. Quantity is never part
of the unit price; it is applied only when a line total is displayed.

The engine is a preview layer. Whatever it computes, the order/payment
service re-prices at checkout.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import DEFAULT_PIECE_COUNT, get_normalization_policy
from .schemas.catalog import CatalogName, CatalogOption, Product
from .schemas.cart import MIXED_TYPE_ID
from .schemas.quote import BlendOut, PriceQuote, Selection
from .services.blender import FIXED_RATIO, BlendResult, blend
from .services.catalog import find_option, mixed_available, resolve_all, select_option
from .services.currency import NormalizationPolicy, PriceRole, normalize_price, round_money
from .services.diagnostics import DiagnosticsRecorder, NULL_RECORDER
from .services.pieces import derive_piece_count
from .services.sale import apply_sale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Evaluation:
    """
    Everything the engine decided for one product + selection.

    The cart composer needs the resolved option records (for labels), not
    just the quote, so both are returned together.
    """
    product: Product
    size: CatalogOption
    type: Optional[CatalogOption]
    shape: CatalogOption
    blend: Optional[BlendResult]
    quote: PriceQuote

    @property
    def is_mixed(self) -> bool:
        return self.blend is not None

    @property
    def type_label(self) -> str:
        if self.blend is not None:
            return self.blend.label
        return self.type.label or self.type.id


class PricingEngine:
    """
    Computes unit prices for configurable chocolate boxes.

    Stateless apart from its policy and diagnostics recorder, so one instance
    can be shared across requests.
    """

    def __init__(
        self,
        policy: NormalizationPolicy | None = None,
        recorder: DiagnosticsRecorder | None = None,
        default_piece_count: int = DEFAULT_PIECE_COUNT,
    ):
        """
        Initialize the pricing engine.

        Args:
            policy: Cents/dollars thresholds. Defaults to the configured policy.
            recorder: Receives degradation events. Defaults to log-only.
            default_piece_count: Pieces per box when a size says nothing.
        """
        self.policy = policy or get_normalization_policy()
        self.recorder = recorder or NULL_RECORDER
        self.default_piece_count = default_piece_count

    def _normalize(self, raw, role: PriceRole, field: str) -> float:
        return normalize_price(raw, role, self.policy, self.recorder, field=field)

    # =========================================================================
    # Mixed Type Helpers
    # =========================================================================

    def resolve_type_pair(
        self,
        type_options: List[CatalogOption],
        selection: Selection,
    ) -> Tuple[CatalogOption, CatalogOption]:
        """
        Pick the two types to blend.

        Falls back to the first two catalog types. The second type is never
        the same option as the first.
        """
        type1 = find_option(type_options, selection.type_id1) or type_options[0]
        type2 = find_option(type_options, selection.type_id2)
        if type2 is None or type2.id == type1.id:
            type2 = next(option for option in type_options if option.id != type1.id)
        return type1, type2

    def effective_ratio(self, product: Product, selection: Selection) -> float:
        """Products without the ratio slider always blend half and half."""
        if not product.enable_mixed_slider:
            return float(FIXED_RATIO)
        return selection.ratio

    def mixed_fee(self, product: Product) -> float:
        if product.mixed_type_fee in (None, "", 0):
            return 0.0
        return self._normalize(product.mixed_type_fee, PriceRole.FEE, "mixedTypeFee")

    # =========================================================================
    # Evaluation
    # =========================================================================

    def evaluate(self, product: Product, selection: Selection | None = None) -> Evaluation:
        """
        Price a product for the given selections.

        Unknown option ids fall back to the first option of their catalog,
        which is what the product page pre-selects. A "mixed" type is only
        honoured when the product offers mixing.

        Args:
            product: Product record
            selection: Shopper selections (defaults to all page defaults)

        Returns:
            Evaluation holding the resolved options, blend and PriceQuote
        """
        selection = selection or Selection()
        catalogs = resolve_all(product, self.recorder)
        sizes = catalogs[CatalogName.SIZE]
        types = catalogs[CatalogName.TYPE]
        shapes = catalogs[CatalogName.SHAPE]

        size_option = select_option(sizes, selection.size)
        shape_option = select_option(shapes, selection.shape)
        total_pieces = derive_piece_count(size_option, self.default_piece_count, self.recorder)

        base_price = self._normalize(product.base_price, PriceRole.BASE, "basePrice")
        size_extra = self._normalize(size_option.price, PriceRole.SIZE_EXTRA, f"size:{size_option.id}")
        running = round_money(base_price + size_extra)

        blend_result: Optional[BlendResult] = None
        type_option: Optional[CatalogOption] = None
        fee = 0.0

        if selection.type == MIXED_TYPE_ID and mixed_available(product, types):
            type1, type2 = self.resolve_type_pair(types, selection)
            blend_result = blend(
                type1,
                type2,
                self.effective_ratio(product, selection),
                total_pieces,
                policy=self.policy,
                recorder=self.recorder,
            )
            type_extra = blend_result.blended_unit_price
            running = round_money(running + type_extra)
            fee = self.mixed_fee(product)
            running = round_money(running + fee)
        else:
            if selection.type == MIXED_TYPE_ID:
                logger.info("Mixed type not offered for product %s, using first type", product.id)
            type_id = None if selection.type == MIXED_TYPE_ID else selection.type
            type_option = select_option(types, type_id)
            type_extra = self._normalize(type_option.price, PriceRole.OPTION_EXTRA, f"type:{type_option.id}")
            running = round_money(running + type_extra)

        shape_extra = self._normalize(shape_option.price, PriceRole.OPTION_EXTRA, f"shape:{shape_option.id}")
        regular_price = round_money(max(running + shape_extra, 0.0))

        sale = apply_sale(regular_price, product, self.policy, self.recorder)

        blend_out = None
        if blend_result is not None:
            blend_out = BlendOut(
                type_id1=blend_result.type1.id,
                type_id2=blend_result.type2.id,
                ratio=blend_result.ratio,
                type1_pieces=blend_result.type1_pieces,
                type2_pieces=blend_result.type2_pieces,
                total_pieces=blend_result.total_pieces,
                blended_unit_price=blend_result.blended_unit_price,
                label=blend_result.label,
            )

        quote = PriceQuote(
            product_id=product.id,
            size=size_option.id,
            type=MIXED_TYPE_ID if blend_result is not None else type_option.id,
            shape=shape_option.id,
            quantity=selection.quantity,
            base_price=base_price,
            size_extra=size_extra,
            type_extra=type_extra,
            mixed_fee=fee,
            shape_extra=shape_extra,
            regular_price=sale.regular_price,
            unit_price=sale.unit_price,
            on_sale=sale.on_sale,
            savings=sale.savings,
            total_pieces=total_pieces,
            blend=blend_out,
        )

        logger.debug(
            "Quoted product %s: size=%s type=%s shape=%s regular=%.2f unit=%.2f",
            product.id, quote.size, quote.type, quote.shape, quote.regular_price, quote.unit_price,
        )

        return Evaluation(
            product=product,
            size=size_option,
            type=type_option,
            shape=shape_option,
            blend=blend_result,
            quote=quote,
        )

    def quote(self, product: Product, selection: Selection | None = None) -> PriceQuote:
        """Price quote only; see evaluate()."""
        return self.evaluate(product, selection).quote
