"""
FastAPI dependencies.

Each collaborator the routes need is provided here so tests can swap it with
app.dependency_overrides.
"""

from functools import lru_cache

from . import config
from .pricing import PricingEngine
from .schemas.settings import AwayModeSettings
from .services.cart import CartStore, get_cart_store
from .services.product_client import ProductClient


@lru_cache(maxsize=1)
def get_engine() -> PricingEngine:
    return PricingEngine()


def get_store() -> CartStore:
    return get_cart_store()


def get_away_mode() -> AwayModeSettings:
    """Away mode as configured in the environment."""
    return AwayModeSettings(
        enabled=config.AWAY_MODE_ENABLED,
        disable_orders=config.AWAY_MODE_DISABLE_ORDERS,
        message=config.AWAY_MODE_MESSAGE,
    )


@lru_cache(maxsize=1)
def get_product_client() -> ProductClient:
    return ProductClient()
