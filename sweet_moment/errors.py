"""
Exceptions raised by the pricing engine.

The engine does not raise for business rules: malformed catalog or price data
degrades to defaults instead. These exceptions cover contract misuse by callers
and failures of external collaborators.
"""


class PricingError(Exception):
    """Base class for pricing engine errors."""


class InvalidPieceCountError(PricingError):
    """Raised when a blend is requested for a box with no pieces."""


class CartLineNotFoundError(PricingError):
    """Raised when a cart mutation targets a line that is not in the cart."""

    def __init__(self, product_id: str, size: str | None, type_id: str | None):
        self.product_id = product_id
        self.size = size
        self.type_id = type_id
        super().__init__(
            f"No cart line for product={product_id!r} size={size!r} type={type_id!r}"
        )


class ProductFetchError(PricingError):
    """Raised when the product API cannot be reached or returns garbage."""
