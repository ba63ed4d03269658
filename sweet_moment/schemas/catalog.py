"""
Catalog Schemas for Sweet Moment
================================

Pydantic models for product records and their option catalogs, as they arrive
from the product API.

Option Sources:
---------------
Each of the three catalogs (size, type, shape) may be present in two shapes:

1. **Typed array** (`sizes`, `types`, `shapes`): a JSON array of option objects.
2. **Serialized string** (`sizeOptions`, `typeOptions`, `shapeOptions`): the
   same array JSON-encoded into a string by older admin flows.

Neither is guaranteed. The raw product keeps both untouched; the catalog
resolver (services/catalog.py) turns whichever is usable into a list of
CatalogOption, which is the only option shape the rest of the engine sees.

Price Units:
------------
Monetary fields (`basePrice`, option `price`, `salePrice`, `mixedTypeFee`) are
kept raw here. Their unit is ambiguous (cents or dollars); see
services/currency.py for how they are normalized.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogName(str, Enum):
    """The three option catalogs a product can carry."""
    SIZE = "size"
    TYPE = "type"
    SHAPE = "shape"


class CatalogOption(BaseModel):
    """
    Canonical option record, shared by size, type and shape catalogs.

    Attributes:
        id: Identifier, unique within its catalog
        label: Display label (e.g., "Small Box (4 pieces)")
        value: Legacy value field, usually equal to id
        price: Raw extra price, unit ambiguous
        quantity: Pieces per box (size options only)
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    label: str = ""
    value: Optional[str] = None
    price: Any = None
    quantity: Optional[int] = None

    @field_validator("id", "value", mode="before")
    @classmethod
    def coerce_identifier(cls, v):
        """Numeric ids from older records are stored as strings."""
        if v is None:
            return None
        return str(v)

    @field_validator("label", mode="before")
    @classmethod
    def coerce_label(cls, v):
        return "" if v is None else str(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def parse_quantity(cls, v):
        """Keep quantity only when it is a positive whole number."""
        if v is None or isinstance(v, bool):
            return None
        try:
            quantity = int(str(v).strip())
        except (TypeError, ValueError):
            return None
        return quantity if quantity > 0 else None


class Product(BaseModel):
    """
    Product record as returned by GET /api/products/{id}.

    Only the fields the pricing engine reads are declared; anything else the
    API returns is ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    image: str = ""
    base_price: Any = Field(default=0, alias="basePrice")

    # Typed option arrays (authoritative when non-empty)
    sizes: Optional[List[Dict[str, Any]]] = None
    types: Optional[List[Dict[str, Any]]] = None
    shapes: Optional[List[Dict[str, Any]]] = None

    # Serialized fallbacks written by older admin flows
    size_options: Optional[str] = Field(default=None, alias="sizeOptions")
    type_options: Optional[str] = Field(default=None, alias="typeOptions")
    shape_options: Optional[str] = Field(default=None, alias="shapeOptions")

    # Mixed type (two chocolate types blended in one box)
    mixed_type_enabled: bool = Field(default=False, alias="mixedTypeEnabled")
    enable_mixed_slider: bool = Field(default=False, alias="enableMixedSlider")
    mixed_type_fee: Any = Field(default=None, alias="mixedTypeFee")

    # Sale fields; the date range is enforced upstream, saleActive is trusted
    sale_active: bool = Field(default=False, alias="saleActive")
    sale_type: Optional[Literal["percentage", "fixed"]] = Field(default=None, alias="saleType")
    sale_value: Any = Field(default=None, alias="saleValue")
    sale_price: Any = Field(default=None, alias="salePrice")
    sale_start_date: Optional[str] = Field(default=None, alias="saleStartDate")
    sale_end_date: Optional[str] = Field(default=None, alias="saleEndDate")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    @field_validator("image", mode="before")
    @classmethod
    def coerce_image(cls, v):
        return v or ""

    @field_validator("sizes", "types", "shapes", mode="before")
    @classmethod
    def drop_non_list_arrays(cls, v):
        """A typed array that is not a list is treated as absent."""
        if not isinstance(v, list):
            return None
        return [entry for entry in v if isinstance(entry, dict)]

    @field_validator("size_options", "type_options", "shape_options", mode="before")
    @classmethod
    def keep_string_fallbacks(cls, v):
        if v is None or isinstance(v, str):
            return v
        return None

    @field_validator("sale_type", mode="before")
    @classmethod
    def normalize_sale_type(cls, v):
        if v in ("percentage", "fixed"):
            return v
        return None

    @field_validator("mixed_type_enabled", "enable_mixed_slider", "sale_active", mode="before")
    @classmethod
    def coerce_flag(cls, v):
        return bool(v)
