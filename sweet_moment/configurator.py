"""
Product page configurator.

Holds the state of one product page: which product is showing, the fetched
record, and the shopper's selections. Every change recomputes the quote, the
same way the page re-renders its price whenever an input changes.

Product fetches are asynchronous and are not cancelled when the shopper moves
to another product. Each fetch result is therefore delivered together with
the id it was requested for, and results for a product that is no longer
showing are dropped.
"""

import logging
from typing import List, Optional, Tuple

from .errors import PricingError
from .pricing import Evaluation, PricingEngine
from .schemas.cart import MIXED_TYPE_ID, CartItem
from .schemas.catalog import CatalogName, CatalogOption, Product
from .schemas.quote import PriceQuote, Selection
from .services.cart import CartNotice, CartStore, add_evaluation_to_cart
from .services.catalog import mixed_available, resolve_options
from .services.diagnostics import STALE_PRODUCT_IGNORED
from .services.quantity import QuantityControl

logger = logging.getLogger(__name__)


class ProductConfigurator:
    """
    Reactive price state for one product page.

    Usage:
        page = ProductConfigurator(engine)
        page.show_product("47")
        page.receive_product("47", product)
        page.select_type("mixed")
        page.set_ratio(75)
        page.quote.unit_price
    """

    def __init__(self, engine: PricingEngine, quantity_control: Optional[QuantityControl] = None):
        self.engine = engine
        self.quantity_control = quantity_control or QuantityControl(recorder=engine.recorder)
        self.product_id: Optional[str] = None
        self.product: Optional[Product] = None
        self.selection = Selection()
        self.evaluation: Optional[Evaluation] = None

    @property
    def quote(self) -> Optional[PriceQuote]:
        return self.evaluation.quote if self.evaluation else None

    def _recompute(self) -> None:
        if self.product is None:
            self.evaluation = None
            return
        self.selection = self.selection.model_copy(update={"quantity": self.quantity_control.quantity})
        self.evaluation = self.engine.evaluate(self.product, self.selection)

    def _update(self, **changes) -> None:
        self.selection = self.selection.model_copy(update=changes)
        self._recompute()

    # -------------------------------------------------------------------------
    # Product lifecycle
    # -------------------------------------------------------------------------

    def show_product(self, product_id: str) -> None:
        """Navigate to a product. Selections reset; the record is pending."""
        self.product_id = str(product_id)
        self.product = None
        self.evaluation = None
        self.selection = Selection()
        self.quantity_control.set(1)

    def receive_product(self, product_id: str, product: Product) -> bool:
        """
        Deliver a fetched product record.

        Returns:
            False if the record is for a product that is no longer showing
        """
        if str(product_id) != self.product_id:
            self.engine.recorder.record(
                STALE_PRODUCT_IGNORED,
                "Dropping product fetched for a page that is no longer showing",
                requested=str(product_id),
                current=self.product_id,
            )
            return False
        self.product = product
        self._recompute()
        return True

    # -------------------------------------------------------------------------
    # Options offered
    # -------------------------------------------------------------------------

    def options(self, catalog: CatalogName | str) -> List[CatalogOption]:
        if self.product is None:
            return []
        return resolve_options(self.product, catalog, self.engine.recorder)

    @property
    def mixed_offered(self) -> bool:
        if self.product is None:
            return False
        return mixed_available(self.product, self.options(CatalogName.TYPE))

    # -------------------------------------------------------------------------
    # Selections
    # -------------------------------------------------------------------------

    def select_size(self, size_id: str) -> None:
        self._update(size=size_id)

    def select_shape(self, shape_id: str) -> None:
        self._update(shape=shape_id)

    def select_type(self, type_id: str) -> None:
        """
        Pick a type, or "mixed" for a blend.

        Choosing "mixed" starts from an even split of the first two types.
        "mixed" is ignored when the product does not offer it.
        """
        if type_id == MIXED_TYPE_ID:
            if not self.mixed_offered:
                logger.info("Mixed type requested but not offered for %s", self.product_id)
                return
            types = self.options(CatalogName.TYPE)
            self._update(type=MIXED_TYPE_ID, ratio=50, type_id1=types[0].id, type_id2=types[1].id)
            return
        self._update(type=type_id)

    def set_ratio(self, ratio: float) -> None:
        self._update(ratio=min(max(float(ratio), 0.0), 100.0))

    def increase_quantity(self) -> bool:
        changed = self.quantity_control.increase()
        if changed:
            self._recompute()
        return changed

    def decrease_quantity(self) -> bool:
        changed = self.quantity_control.decrease()
        if changed:
            self._recompute()
        return changed

    # -------------------------------------------------------------------------
    # Add to cart
    # -------------------------------------------------------------------------

    def add_to_cart(self, store: CartStore) -> Tuple[CartItem, CartNotice]:
        """
        Add the current configuration to the cart.

        Raises:
            PricingError: If no product record has arrived yet
        """
        if self.evaluation is None:
            raise PricingError("No product loaded")
        return add_evaluation_to_cart(store, self.evaluation, self.quantity_control.quantity)
