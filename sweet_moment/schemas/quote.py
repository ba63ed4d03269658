"""
Quote Schemas for Sweet Moment
==============================

Request and response models for price previews.

A Selection is what the shopper has picked on the product page. A PriceQuote
is the engine's answer: every component that went into the unit price, the
regular (pre-sale) price shown as a strikethrough, and the blend breakdown for
mixed boxes.

All amounts in a PriceQuote are dollars rounded to 2 decimals.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import MAX_ITEM_QUANTITY
from .catalog import Product


class Selection(BaseModel):
    """
    Shopper selections for one product.

    Attributes:
        size: Size option id (None selects the first size)
        type: Type option id, "mixed" for a blend (None selects the first type)
        shape: Shape option id (None selects the first shape)
        ratio: Percentage of the box allocated to type_id1 when mixed
        type_id1: First blended type (defaults to the first type option)
        type_id2: Second blended type (defaults to the second type option)
        quantity: Number of boxes
    """
    model_config = ConfigDict(populate_by_name=True)

    size: Optional[str] = None
    type: Optional[str] = None
    shape: Optional[str] = None
    ratio: float = Field(default=50, ge=0, le=100)
    type_id1: Optional[str] = Field(default=None, alias="typeId1")
    type_id2: Optional[str] = Field(default=None, alias="typeId2")
    quantity: int = Field(default=1, ge=1, le=MAX_ITEM_QUANTITY)


class BlendOut(BaseModel):
    """Blend breakdown for a mixed box."""
    model_config = ConfigDict(populate_by_name=True)

    type_id1: str = Field(alias="typeId1")
    type_id2: str = Field(alias="typeId2")
    ratio: float
    type1_pieces: int = Field(alias="type1Pieces")
    type2_pieces: int = Field(alias="type2Pieces")
    total_pieces: int = Field(alias="totalPieces")
    blended_unit_price: float = Field(alias="blendedUnitPrice")
    label: str


class PriceQuote(BaseModel):
    """Price preview for a product and selection."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")
    size: str
    type: str
    shape: str
    quantity: int

    base_price: float = Field(alias="basePrice")
    size_extra: float = Field(alias="sizeExtra")
    type_extra: float = Field(alias="typeExtra")
    mixed_fee: float = Field(default=0.0, alias="mixedFee")
    shape_extra: float = Field(alias="shapeExtra")

    regular_price: float = Field(alias="regularPrice")
    unit_price: float = Field(alias="unitPrice")
    on_sale: bool = Field(alias="onSale")
    savings: float = 0.0

    total_pieces: int = Field(alias="totalPieces")
    blend: Optional[BlendOut] = None

    @property
    def line_total(self) -> float:
        """Unit price times quantity, applied only at display/cart time."""
        return round(self.unit_price * self.quantity, 2)


class QuoteRequest(BaseModel):
    """Request body for POST /pricing/quote and POST /cart/items."""
    product: Product
    selection: Selection = Field(default_factory=Selection)
