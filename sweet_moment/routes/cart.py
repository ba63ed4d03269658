"""
Cart Routes for Sweet Moment
============================

Endpoints for reading and mutating the shopper's cart.

Endpoints:
----------
- GET /cart: Cart lines with total and item count
- POST /cart/items: Price a selection and merge it into the cart
- PATCH /cart/items: Set a line's quantity (below 1 removes it)
- DELETE /cart/items: Remove a line by (id, size, type)
- DELETE /cart: Empty the cart

Away Mode:
----------
While away mode disables orders, adding lines and increasing quantities
return 409 with the configured reason. Removing lines and lowering
quantities stay allowed. The pricing engine itself never checks away mode.

Persistence:
------------
Every mutation is written through to storage. If that write fails the
mutation still applies in memory and the response carries
`persisted: false`.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..dependencies import get_away_mode, get_engine, get_store
from ..errors import CartLineNotFoundError
from ..pricing import PricingEngine
from ..schemas.cart import CartOut, QuantityUpdate
from ..schemas.quote import QuoteRequest
from ..schemas.settings import AwayModeSettings
from ..services.cart import CartStore, add_evaluation_to_cart


logger = logging.getLogger(__name__)

cart_router = APIRouter(prefix="/cart", tags=["Cart"])


def _cart_out(store: CartStore, notice: Optional[str] = None) -> CartOut:
    return CartOut(
        items=store.items(),
        cart_total=store.cart_total,
        item_count=store.item_count,
        persisted=store.last_persist_ok,
        notice=notice,
    )


def _reject_if_orders_disabled(away_mode: AwayModeSettings) -> None:
    if away_mode.orders_disabled:
        logger.info("Cart change refused: orders disabled by away mode")
        raise HTTPException(status_code=409, detail=away_mode.disable_reason)


@cart_router.get("", response_model=CartOut)
def get_cart(store: CartStore = Depends(get_store)) -> CartOut:
    return _cart_out(store)


@cart_router.post("/items", response_model=CartOut, status_code=201)
def add_cart_item(
    body: QuoteRequest,
    engine: PricingEngine = Depends(get_engine),
    store: CartStore = Depends(get_store),
    away_mode: AwayModeSettings = Depends(get_away_mode),
) -> CartOut:
    """Price the selection and merge the resulting line into the cart."""
    _reject_if_orders_disabled(away_mode)
    evaluation = engine.evaluate(body.product, body.selection)
    _, notice = add_evaluation_to_cart(store, evaluation)
    return _cart_out(store, notice.description)


@cart_router.patch("/items", response_model=CartOut)
def update_cart_item(
    body: QuantityUpdate,
    store: CartStore = Depends(get_store),
    away_mode: AwayModeSettings = Depends(get_away_mode),
) -> CartOut:
    """Set a line's quantity."""
    current = store.get(body.id, body.size, body.type)
    if current is None:
        raise HTTPException(status_code=404, detail="Cart line not found")
    if body.quantity > current.quantity:
        _reject_if_orders_disabled(away_mode)

    try:
        notice = store.update_quantity(body.id, body.quantity, body.size, body.type)
    except CartLineNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _cart_out(store, notice.description if notice else None)


@cart_router.delete("/items", response_model=CartOut)
def remove_cart_item(
    id: str = Query(...),
    size: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    store: CartStore = Depends(get_store),
) -> CartOut:
    notice = store.remove(id, size, type)
    if notice is None:
        raise HTTPException(status_code=404, detail="Cart line not found")
    return _cart_out(store, notice.description)


@cart_router.delete("", response_model=CartOut)
def clear_cart(store: CartStore = Depends(get_store)) -> CartOut:
    store.clear()
    return _cart_out(store)
