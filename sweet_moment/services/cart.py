"""
Cart Store and Line Composition for Sweet Moment
================================================

This module owns the shopper's cart: turning a priced selection into a cart
line, merging it into the cart, and keeping the persisted copy in sync.

Cart Lifecycle:
---------------
1. **Hydrate**: on first use, the JSON array under CART_STORAGE_KEY is read.
   Unreadable data or malformed entries are skipped and recorded, never raised.
2. **Mutate**: add / remove / update_quantity / clear change the in-memory
   lines. All mutations go through this store.
3. **Persist**: every mutation rewrites the whole array to storage.

There is no teardown; the persisted cart outlives the process.

Merge Rule:
-----------
Lines are identified by (id, size, type). Adding a line whose key is already
in the cart adds to that line's quantity. The first line's unit price is kept:
price is derived from the options, and the options are part of the key.

Persistence Failures:
---------------------
A storage error does not undo the in-memory mutation. It is logged, recorded
as cart_persist_failed, and exposed through `last_persist_ok` so the caller
can tell the shopper the cart may not survive a reload.

Usage:
------
    store = get_cart_store()
    evaluation = engine.evaluate(product, selection)
    item, notice = add_evaluation_to_cart(store, evaluation)
    print(notice.description)
    # "2 × Dubai Bar (3 Milk Chocolate + 3 Dark Chocolate) - Round added to your cart"
"""

import json
import logging
import re
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from ..config import CART_STORAGE_KEY, MAX_ITEM_QUANTITY
from ..errors import CartLineNotFoundError
from ..schemas.cart import CartItem, MixedTypeSelection
from ..schemas.catalog import Product
from .currency import round_money
from .diagnostics import (
    CART_HYDRATE_FAILED,
    CART_PERSIST_FAILED,
    DiagnosticsRecorder,
    NULL_RECORDER,
)
from .storage import KeyValueStorage, MemoryStorage

if TYPE_CHECKING:
    from ..pricing import Evaluation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartNotice:
    """User-visible confirmation emitted by a cart mutation."""
    title: str
    description: str


# =============================================================================
# Line Composition
# =============================================================================

def cart_product_id(product: Product) -> str:
    """Cart lines are keyed by the product name with whitespace removed."""
    return re.sub(r"\s+", "", product.name)


def compose_cart_item(evaluation: "Evaluation", quantity: Optional[int] = None) -> CartItem:
    """
    Build the canonical cart line for a priced selection.

    Args:
        evaluation: Output of PricingEngine.evaluate()
        quantity: Number of boxes; defaults to the quoted quantity

    Returns:
        CartItem carrying the unit price (quantity is not baked in)
    """
    product = evaluation.product
    quote = evaluation.quote
    quantity = max(int(quantity if quantity is not None else quote.quantity), 1)

    mixed = None
    if evaluation.blend is not None:
        result = evaluation.blend
        mixed = MixedTypeSelection(
            label=result.label,
            type_id1=result.type1.id,
            type_id2=result.type2.id,
            ratio=result.ratio,
            type1_pieces=result.type1_pieces,
            type2_pieces=result.type2_pieces,
            total_pieces=result.total_pieces,
        )

    return CartItem(
        id=cart_product_id(product),
        name=product.name,
        size=quote.size,
        type=quote.type,
        shape=quote.shape,
        price=quote.unit_price,
        quantity=quantity,
        image=product.image,
        mixed_type=mixed,
    )


def describe_selection(evaluation: "Evaluation", quantity: int) -> str:
    """
    One-line summary of what was added.

    Examples:
        "2 × Dubai Bar (3 Milk Chocolate + 3 Dark Chocolate) - Round"
        "1 × Classic Box (Dark Chocolate)"
    """
    text = f"{quantity} × {evaluation.product.name} ({evaluation.type_label})"
    if evaluation.shape.id != "none" and evaluation.shape.label:
        text += f" - {evaluation.shape.label}"
    return text


# =============================================================================
# Cart Store
# =============================================================================

class CartStore:
    """
    Single owner of cart state.

    Lines are copied on the way in and on the way out, so no caller holds a
    reference into the store's own list.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str = CART_STORAGE_KEY,
        recorder: DiagnosticsRecorder = NULL_RECORDER,
        max_quantity: int = MAX_ITEM_QUANTITY,
    ):
        self._storage = storage
        self.max_quantity = max_quantity
        self._storage_key = storage_key
        self._recorder = recorder
        self._items: List[CartItem] = []
        self._hydrated = False
        self._lock = threading.RLock()
        self.last_persist_ok = True

    # -------------------------------------------------------------------------
    # Hydrate / persist
    # -------------------------------------------------------------------------

    def _ensure_hydrated(self) -> None:
        if self._hydrated:
            return
        self._hydrated = True

        try:
            raw = self._storage.get(self._storage_key)
        except (SQLAlchemyError, OSError) as e:
            self._recorder.record(CART_HYDRATE_FAILED, "Cart storage unreadable", error=str(e))
            return
        if not raw:
            return

        try:
            entries = json.loads(raw)
        except ValueError as e:
            self._recorder.record(CART_HYDRATE_FAILED, "Stored cart is not valid JSON", error=str(e))
            return
        if not isinstance(entries, list):
            self._recorder.record(CART_HYDRATE_FAILED, "Stored cart is not a list", kind=type(entries).__name__)
            return

        for index, entry in enumerate(entries):
            try:
                self._items.append(CartItem.model_validate(entry))
            except ValidationError as e:
                self._recorder.record(
                    CART_HYDRATE_FAILED,
                    "Skipping unreadable cart line",
                    index=index,
                    error=str(e.errors()[0]["msg"]) if e.errors() else str(e),
                )

        logger.debug("Hydrated cart with %d lines", len(self._items))

    def _persist(self) -> bool:
        payload = json.dumps([item.to_storage() for item in self._items])
        try:
            self._storage.set(self._storage_key, payload)
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to persist cart: %s", e)
            self._recorder.record(CART_PERSIST_FAILED, "Cart could not be saved", error=str(e))
            self.last_persist_ok = False
            return False
        self.last_persist_ok = True
        return True

    def _index_of(self, product_id: str, size: Optional[str], type_id: Optional[str]) -> int:
        for index, item in enumerate(self._items):
            if item.key == (str(product_id), size, type_id):
                return index
        return -1

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def items(self) -> List[CartItem]:
        with self._lock:
            self._ensure_hydrated()
            return [item.model_copy(deep=True) for item in self._items]

    def get(self, product_id: str, size: Optional[str], type_id: Optional[str]) -> Optional[CartItem]:
        with self._lock:
            self._ensure_hydrated()
            index = self._index_of(product_id, size, type_id)
            return self._items[index].model_copy(deep=True) if index != -1 else None

    @property
    def cart_total(self) -> float:
        """Sum of unit price × quantity over all lines."""
        with self._lock:
            self._ensure_hydrated()
            return round_money(sum(item.price * item.quantity for item in self._items))

    @property
    def item_count(self) -> int:
        with self._lock:
            self._ensure_hydrated()
            return sum(item.quantity for item in self._items)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, item: CartItem) -> CartNotice:
        """
        Merge a line into the cart. The merged quantity never exceeds max_quantity.

        Returns:
            CartNotice naming the item and its resulting quantity
        """
        with self._lock:
            self._ensure_hydrated()
            index = self._index_of(*item.key)
            if index != -1:
                existing = self._items[index]
                existing.quantity = min(existing.quantity + item.quantity, self.max_quantity)
                notice = CartNotice(
                    title="Cart updated",
                    description=f"{existing.name} quantity increased to {existing.quantity}",
                )
            else:
                capped = min(item.quantity, self.max_quantity)
                self._items.append(item.model_copy(deep=True, update={"quantity": capped}))
                notice = CartNotice(
                    title="Added to cart",
                    description=f"{item.name} added to your cart",
                )
            self._persist()

        logger.info("%s: %s", notice.title, notice.description)
        return notice

    def remove(self, product_id: str, size: Optional[str], type_id: Optional[str]) -> Optional[CartNotice]:
        """Remove a line. Removing a line that is not there is a no-op."""
        with self._lock:
            self._ensure_hydrated()
            index = self._index_of(product_id, size, type_id)
            if index == -1:
                return None
            removed = self._items.pop(index)
            self._persist()

        notice = CartNotice(title="Removed from cart", description=f"{removed.name} removed from your cart")
        logger.info("%s: %s", notice.title, notice.description)
        return notice

    def update_quantity(
        self,
        product_id: str,
        quantity: int,
        size: Optional[str],
        type_id: Optional[str],
    ) -> Optional[CartNotice]:
        """
        Set a line's quantity. A quantity below 1 removes the line; one above
        max_quantity is capped.

        Raises:
            CartLineNotFoundError: If no line has this key
        """
        if quantity < 1:
            with self._lock:
                self._ensure_hydrated()
                if self._index_of(product_id, size, type_id) == -1:
                    raise CartLineNotFoundError(product_id, size, type_id)
            return self.remove(product_id, size, type_id)

        with self._lock:
            self._ensure_hydrated()
            index = self._index_of(product_id, size, type_id)
            if index == -1:
                raise CartLineNotFoundError(product_id, size, type_id)
            self._items[index].quantity = min(quantity, self.max_quantity)
            self._persist()
        return None

    def clear(self) -> None:
        with self._lock:
            self._hydrated = True
            self._items = []
            self._persist()
        logger.info("Cart cleared")


def add_evaluation_to_cart(
    store: CartStore,
    evaluation: "Evaluation",
    quantity: Optional[int] = None,
) -> Tuple[CartItem, CartNotice]:
    """
    Compose a line from a priced selection and merge it into the store.

    The returned notice summarizes the selection the way the product page
    confirms it ("... added to your cart").
    """
    item = compose_cart_item(evaluation, quantity)
    store.add(item)
    notice = CartNotice(
        title="Added to Cart",
        description=f"{describe_selection(evaluation, item.quantity)} added to your cart",
    )
    return item, notice


# =============================================================================
# Process-wide Store
# =============================================================================

_store: Optional[CartStore] = None
_store_lock = threading.Lock()


def get_cart_store() -> CartStore:
    """
    The process-wide cart store, created on first use.

    Backed by the database configured in DATABASE_URL.
    """
    global _store
    with _store_lock:
        if _store is None:
            from ..db import get_session_factory
            from .storage import SqlStorage

            _store = CartStore(SqlStorage(get_session_factory()))
        return _store


def set_cart_store(store: Optional[CartStore]) -> None:
    """Replace (or with None, reset) the process-wide store."""
    global _store
    with _store_lock:
        _store = store


def memory_cart_store(recorder: DiagnosticsRecorder = NULL_RECORDER) -> CartStore:
    """A cart that lives only in memory."""
    return CartStore(MemoryStorage(), recorder=recorder)
