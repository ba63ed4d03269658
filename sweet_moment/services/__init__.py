"""
Services Package for Sweet Moment
=================================

Business logic for product configuration and pricing, leaf-first:

- **diagnostics**: Structured events for every graceful-degradation path
- **catalog**: Option catalog resolution (typed array, serialized string, defaults)
- **pieces**: Pieces-per-box derivation from quantity field or label
- **currency**: Cents/dollars normalization and money rounding
- **blender**: Mixed-type piece split and weighted price
- **sale**: Sale price override
- **cart**: Cart line composition and the cart store
- **storage**: Durable key/value backends for the cart
- **quantity**: Debounced quantity stepper
- **product_client**: Read-only product API client

Services receive their collaborators (recorder, policy, storage) as
arguments rather than creating them, so tests can substitute any of them.

Usage:
------
    from sweet_moment.services.catalog import resolve_options
    from sweet_moment.services import blender, currency
"""

from . import blender
from . import cart
from . import catalog
from . import currency
from . import diagnostics
from . import pieces
from . import sale

__all__ = ["blender", "cart", "catalog", "currency", "diagnostics", "pieces", "sale"]
