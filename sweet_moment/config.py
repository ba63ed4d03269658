"""
Configuration Module for Sweet Moment
=====================================

This module centralizes all configuration settings, environment variables, and
constants used by the product configuration and pricing engine. All values are
parsed once at module load time; tests override them via monkeypatch.

Configuration Categories:
-------------------------
- **Storage**: Database URL and the well-known key the cart is persisted under.

- **Catalog Defaults**: Piece count used when a size option carries neither a
  structured quantity nor a "(N pieces)" label.

- **Currency Heuristic**: Magnitude thresholds used to decide whether a raw
  price is in cents or already in dollars. These are policy, not hard logic:
  they exist because some catalog records were entered in dollars while the
  rest are stored in cents.

- **Quantity Controls**: Maximum per-line quantity and the re-entrancy window
  applied to increment/decrement controls.

- **Product API**: Where product records are fetched from, and the timeout.

- **CORS Settings**: Allowed origins for the storefront.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL for durable storage (default: sqlite file)
- CART_STORAGE_KEY: Storage key for the cart array (default: "cart")
- DEFAULT_PIECE_COUNT: Fallback pieces per box (default: 6)
- MAX_ITEM_QUANTITY: Upper bound for a line quantity (default: 99)
- QUANTITY_DEBOUNCE_MS: Quantity control guard window (default: 200)
- BASE_CENTS_THRESHOLD: Base prices above this are cents (default: 100)
- OPTION_CENTS_MIN / OPTION_CENTS_MAX: Option extras in [MIN, MAX) are cents
  (defaults: 100 / 500)
- PRODUCT_API_URL: Base URL for product records
- PRODUCT_API_TIMEOUT: Product fetch timeout in seconds (default: 10)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- AWAY_MODE_ENABLED / AWAY_MODE_DISABLE_ORDERS / AWAY_MODE_MESSAGE: Away mode

Usage:
------
    from sweet_moment.config import CART_STORAGE_KEY, get_normalization_policy
"""

import os
from typing import List


# =============================================================================
# Storage Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./sweet_moment.db")

# The cart is persisted as a JSON-encoded array under this key
CART_STORAGE_KEY: str = os.getenv("CART_STORAGE_KEY", "cart")


# =============================================================================
# Catalog Defaults
# =============================================================================

DEFAULT_PIECE_COUNT: int = int(os.getenv("DEFAULT_PIECE_COUNT", "6"))


# =============================================================================
# Currency Heuristic
# =============================================================================
# Base prices: value > BASE_CENTS_THRESHOLD is cents.
# Option extras: OPTION_CENTS_MIN <= value < OPTION_CENTS_MAX is cents.

BASE_CENTS_THRESHOLD: float = float(os.getenv("BASE_CENTS_THRESHOLD", "100"))
OPTION_CENTS_MIN: float = float(os.getenv("OPTION_CENTS_MIN", "100"))
OPTION_CENTS_MAX: float = float(os.getenv("OPTION_CENTS_MAX", "500"))


def get_normalization_policy():
    """
    Build the currency normalization policy from current settings.

    Imported lazily so config.py stays free of service imports.

    Returns:
        NormalizationPolicy configured from the thresholds above
    """
    from .services.currency import NormalizationPolicy

    return NormalizationPolicy(
        base_cents_threshold=BASE_CENTS_THRESHOLD,
        option_cents_min=OPTION_CENTS_MIN,
        option_cents_max=OPTION_CENTS_MAX,
    )


# =============================================================================
# Quantity Controls
# =============================================================================

MAX_ITEM_QUANTITY: int = int(os.getenv("MAX_ITEM_QUANTITY", "99"))
QUANTITY_DEBOUNCE_MS: int = int(os.getenv("QUANTITY_DEBOUNCE_MS", "200"))


# =============================================================================
# Product API
# =============================================================================

PRODUCT_API_URL: str = os.getenv("PRODUCT_API_URL", "http://localhost:5000/api/products")
PRODUCT_API_TIMEOUT: float = float(os.getenv("PRODUCT_API_TIMEOUT", "10"))


# =============================================================================
# Away Mode
# =============================================================================
# Supplied by the site settings provider. The engine never gates on these;
# the HTTP layer applies them around add-to-cart and quantity increases.

AWAY_MODE_ENABLED: bool = os.getenv("AWAY_MODE_ENABLED", "false").lower() == "true"
AWAY_MODE_DISABLE_ORDERS: bool = os.getenv("AWAY_MODE_DISABLE_ORDERS", "false").lower() == "true"
AWAY_MODE_MESSAGE: str = os.getenv("AWAY_MODE_MESSAGE", "")


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
