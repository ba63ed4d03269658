"""
Schemas Package for Sweet Moment
================================

Pydantic models used for validation of inbound product records and API
bodies, and for serialization of cart lines and price quotes.

Schema Organization:
--------------------
- **catalog.py**: Product records and canonical catalog options
- **cart.py**: Cart lines, mixed-type breakdowns, cart API bodies
- **quote.py**: Shopper selections and price quotes
- **settings.py**: Away mode settings

Field Naming:
-------------
Python attributes are snake_case. Wire fields keep the storefront's camelCase
names through aliases, and every model sets populate_by_name so either form
is accepted on input. Serialize with model_dump(by_alias=True).
"""

from .catalog import CatalogName, CatalogOption, Product
from .cart import MIXED_TYPE_ID, CartItem, CartOut, MixedTypeSelection, QuantityUpdate
from .quote import BlendOut, PriceQuote, QuoteRequest, Selection
from .settings import AwayModeSettings

__all__ = [
    "CatalogName",
    "CatalogOption",
    "Product",
    "MIXED_TYPE_ID",
    "CartItem",
    "CartOut",
    "MixedTypeSelection",
    "QuantityUpdate",
    "BlendOut",
    "PriceQuote",
    "QuoteRequest",
    "Selection",
    "AwayModeSettings",
]
