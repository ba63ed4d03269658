"""
Pricing Routes for Sweet Moment
===============================

Price previews. Nothing here is authoritative: the order/payment service
re-prices at checkout.

Endpoints:
----------
- POST /pricing/quote: Quote a product record for a selection
- GET /products/{product_id}/options: Resolved size/type/shape catalogs
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_engine, get_product_client
from ..errors import ProductFetchError
from ..pricing import PricingEngine
from ..schemas.catalog import CatalogName
from ..schemas.quote import PriceQuote, QuoteRequest
from ..services.catalog import mixed_available, resolve_all
from ..services.product_client import ProductClient


logger = logging.getLogger(__name__)

pricing_router = APIRouter(prefix="/pricing", tags=["Pricing"])
products_router = APIRouter(prefix="/products", tags=["Products"])


@pricing_router.post("/quote", response_model=PriceQuote, response_model_by_alias=True)
def quote_product(
    body: QuoteRequest,
    engine: PricingEngine = Depends(get_engine),
) -> PriceQuote:
    """Compute the unit price for a product and selection."""
    return engine.quote(body.product, body.selection)


@products_router.get("/{product_id}/options")
def get_product_options(
    product_id: str,
    engine: PricingEngine = Depends(get_engine),
    client: ProductClient = Depends(get_product_client),
) -> Dict[str, Any]:
    """Fetch a product and return its resolved option catalogs."""
    try:
        product = client.fetch_product(product_id)
    except ProductFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")

    catalogs = resolve_all(product, engine.recorder)
    return {
        "productId": product.id,
        "options": {
            catalog.value: [option.model_dump() for option in options]
            for catalog, options in catalogs.items()
        },
        "mixedAvailable": mixed_available(product, catalogs[CatalogName.TYPE]),
        "enableMixedSlider": product.enable_mixed_slider,
    }
