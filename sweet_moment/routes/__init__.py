"""
Routes Package for Sweet Moment
===============================

API route definitions grouped by domain. Each module defines APIRouters that
main.py registers under /api/v1 and at the root for older clients.

- pricing.py: Price quotes and resolved product options
- cart.py: Cart reads and mutations

Dependencies (engine, cart store, away mode, product client) come from
dependencies.py and can be overridden in tests via app.dependency_overrides.
"""

from .cart import cart_router
from .pricing import pricing_router, products_router

__all__ = ["cart_router", "pricing_router", "products_router"]
