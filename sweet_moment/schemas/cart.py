"""
Cart Schemas for Sweet Moment
=============================

Pydantic models for cart lines and the API bodies that create or mutate them.

Storage Format:
---------------
The cart is persisted as a JSON array of CartItem objects serialized with
their camelCase aliases:

    [
        {
            "id": "DubaiBar",
            "name": "Dubai Bar",
            "size": "small",
            "type": "mixed",
            "shape": "round",
            "price": 16.5,
            "quantity": 2,
            "image": "/img/dubai.png",
            "mixedType": {
                "label": "3 Milk Chocolate + 3 Dark Chocolate",
                "typeId1": "milk",
                "typeId2": "dark",
                "ratio": 50,
                "type1Pieces": 3,
                "type2Pieces": 3,
                "totalPieces": 6
            }
        }
    ]

There is no schema version. Older entries are read by field presence:
missing quantity defaults to 1, missing shape to "none", and unknown fields
are ignored.

Identity:
---------
A line is identified by (id, size, type). Two adds with the same key merge
into one line; price is a unit price and never includes quantity.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import MAX_ITEM_QUANTITY


MIXED_TYPE_ID = "mixed"


class MixedTypeSelection(BaseModel):
    """Piece breakdown attached to a cart line whose type is "mixed"."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    label: str
    type_id1: str = Field(alias="typeId1")
    type_id2: str = Field(alias="typeId2")
    ratio: float = Field(ge=0, le=100)
    type1_pieces: int = Field(ge=0, alias="type1Pieces")
    type2_pieces: int = Field(ge=0, alias="type2Pieces")
    total_pieces: int = Field(ge=1, alias="totalPieces")


class CartItem(BaseModel):
    """
    A single cart line.

    Attributes:
        id: Cart product id (product name with whitespace removed)
        name: Product display name
        size: Size option id ("none" when the product has no sizes)
        type: Type option id, or "mixed" for a blended box
        shape: Shape option id ("none" when the product has no shapes)
        price: Unit price in dollars, all options and sale included
        quantity: Number of boxes, at least 1
        image: Product image URL
        mixed_type: Blend breakdown, present only when type == "mixed"
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    size: Optional[str] = None
    type: Optional[str] = None
    shape: str = "none"
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    image: str = ""
    mixed_type: Optional[MixedTypeSelection] = Field(default=None, alias="mixedType")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    @field_validator("shape", "image", mode="before")
    @classmethod
    def default_missing(cls, v, info):
        if v is None or v == "":
            return "none" if info.field_name == "shape" else ""
        return v

    @property
    def key(self) -> Tuple[str, Optional[str], Optional[str]]:
        """Identity key used to merge and address cart lines."""
        return (self.id, self.size, self.type)

    @property
    def is_mixed(self) -> bool:
        return self.type == MIXED_TYPE_ID

    def to_storage(self) -> dict:
        """Serialize for the persisted cart array."""
        return self.model_dump(by_alias=True, exclude_none=True)


class QuantityUpdate(BaseModel):
    """Request body for PATCH /cart/items."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    size: Optional[str] = None
    type: Optional[str] = None
    quantity: int = Field(le=MAX_ITEM_QUANTITY)


class CartOut(BaseModel):
    """Response model for the cart."""
    model_config = ConfigDict(populate_by_name=True)

    items: list[CartItem]
    cart_total: float = Field(alias="cartTotal")
    item_count: int = Field(alias="itemCount")
    persisted: bool = True
    notice: Optional[str] = None
