"""
Product record fetcher.

Reads product records from the storefront's product API with a plain GET.
This is the engine's only inbound network call; it never writes.

Usage:
------
    client = ProductClient()
    product = client.fetch_product("47")
    if product is None:
        ...  # unknown product
"""

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from ..config import PRODUCT_API_TIMEOUT, PRODUCT_API_URL
from ..errors import ProductFetchError
from ..schemas.catalog import Product


logger = logging.getLogger(__name__)

USER_AGENT = "SweetMomentPricing/1.0"


class ProductClient:
    """HTTP client for GET {base_url}/{product_id}."""

    def __init__(
        self,
        base_url: str = PRODUCT_API_URL,
        timeout: float = PRODUCT_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    def fetch_product(self, product_id: str) -> Optional[Product]:
        """
        Fetch and validate one product.

        Returns:
            Product, or None if the API says it does not exist

        Raises:
            ProductFetchError: On network errors, non-404 error statuses,
                or a body that is not a product record
        """
        url = f"{self.base_url}/{product_id}"
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Product fetch failed for %s: %s", product_id, e)
            raise ProductFetchError(f"Could not reach product API: {e}") from e

        if response.status_code == 404:
            logger.info("Product %s not found", product_id)
            return None
        if response.status_code >= 400:
            raise ProductFetchError(f"Product API returned {response.status_code} for {product_id}")

        try:
            return Product.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("Product %s payload rejected: %s", product_id, e)
            raise ProductFetchError(f"Invalid product payload for {product_id}") from e
