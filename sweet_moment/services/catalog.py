"""
Option Catalog Resolution for Sweet Moment
==========================================

A product's size, type and shape choices can come from three places:

1. A typed array on the product (`sizes`, `types`, `shapes`).
2. A JSON string written by older admin flows (`sizeOptions`, ...).
3. Built-in defaults, when neither of the above is usable.

The typed array wins whenever it is non-empty. The string is only parsed when
the array is missing or empty; a string that fails to parse (or parses to
something other than a non-empty list) is recorded and skipped. The resolver
therefore never returns an empty list.

Everything downstream works with CatalogOption only, so no other module needs
to know which source an option came from.

Usage:
------
    sizes = resolve_options(product, CatalogName.SIZE, recorder=recorder)
    types = resolve_options(product, CatalogName.TYPE)
    if mixed_available(product, types):
        ...
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..schemas.catalog import CatalogName, CatalogOption, Product
from .diagnostics import (
    CATALOG_DEFAULT_USED,
    CATALOG_PARSE_FAILED,
    DiagnosticsRecorder,
    NULL_RECORDER,
)
from .pieces import pieces_from_label


logger = logging.getLogger(__name__)


# =============================================================================
# Built-in Defaults
# =============================================================================

DEFAULT_OPTIONS: Dict[CatalogName, List[Dict[str, Any]]] = {
    CatalogName.SIZE: [
        {"id": "none", "label": "Regular Box (6 pieces)", "value": "none", "price": 0, "quantity": 6},
    ],
    CatalogName.TYPE: [
        {"id": "milk", "label": "Milk Chocolate", "value": "milk", "price": 0},
        {"id": "dark", "label": "Dark Chocolate", "value": "dark", "price": 0},
    ],
    CatalogName.SHAPE: [
        {"id": "none", "label": "Regular Shape", "value": "none", "price": 0},
    ],
}

_TYPED_FIELDS = {
    CatalogName.SIZE: "sizes",
    CatalogName.TYPE: "types",
    CatalogName.SHAPE: "shapes",
}

_SERIALIZED_FIELDS = {
    CatalogName.SIZE: "size_options",
    CatalogName.TYPE: "type_options",
    CatalogName.SHAPE: "shape_options",
}


def default_options(catalog: CatalogName) -> List[CatalogOption]:
    """Fresh copies of the built-in default options for a catalog."""
    return [CatalogOption.model_validate(entry) for entry in DEFAULT_OPTIONS[catalog]]


# =============================================================================
# Source Parsing
# =============================================================================

def _to_options(
    entries: List[Dict[str, Any]],
    catalog: CatalogName,
    product_id: str,
    recorder: DiagnosticsRecorder,
) -> List[CatalogOption]:
    """Validate raw option dicts, skipping entries without a usable id."""
    options = []
    for entry in entries:
        try:
            options.append(CatalogOption.model_validate(entry))
        except ValidationError as e:
            recorder.record(
                CATALOG_PARSE_FAILED,
                "Skipping malformed option entry",
                product_id=product_id,
                catalog=catalog.value,
                error=str(e.errors()[0]["msg"]) if e.errors() else str(e),
            )
    return options


def _parse_serialized(
    text: str,
    catalog: CatalogName,
    product_id: str,
    recorder: DiagnosticsRecorder,
) -> Optional[List[Dict[str, Any]]]:
    """Parse a serialized option list. Returns None when unusable."""
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as e:
        recorder.record(
            CATALOG_PARSE_FAILED,
            "Serialized option list is not valid JSON",
            product_id=product_id,
            catalog=catalog.value,
            error=str(e),
        )
        return None

    if not isinstance(parsed, list) or not parsed:
        return None
    return [entry for entry in parsed if isinstance(entry, dict)]


def _fill_quantity_from_label(option: CatalogOption) -> CatalogOption:
    """Serialized size entries often only carry the count in their label."""
    if option.quantity:
        return option
    pieces = pieces_from_label(option.label)
    if pieces:
        return option.model_copy(update={"quantity": pieces})
    return option


# =============================================================================
# Public API
# =============================================================================

def resolve_options(
    product: Product,
    catalog: CatalogName | str,
    recorder: DiagnosticsRecorder = NULL_RECORDER,
) -> List[CatalogOption]:
    """
    Return the ordered option list for one of a product's catalogs.

    Args:
        product: Product record as fetched
        catalog: "size", "type" or "shape"
        recorder: Receives events for every fallback taken

    Returns:
        Non-empty list of CatalogOption
    """
    catalog = CatalogName(catalog)

    typed = getattr(product, _TYPED_FIELDS[catalog])
    if typed:
        options = _to_options(typed, catalog, product.id, recorder)
        if options:
            return options

    serialized = getattr(product, _SERIALIZED_FIELDS[catalog])
    if serialized:
        entries = _parse_serialized(serialized, catalog, product.id, recorder)
        if entries:
            options = _to_options(entries, catalog, product.id, recorder)
            if catalog == CatalogName.SIZE:
                options = [_fill_quantity_from_label(option) for option in options]
            if options:
                return options

    recorder.record(
        CATALOG_DEFAULT_USED,
        "No usable option source, using built-in defaults",
        product_id=product.id,
        catalog=catalog.value,
    )
    return default_options(catalog)


def resolve_all(
    product: Product,
    recorder: DiagnosticsRecorder = NULL_RECORDER,
) -> Dict[CatalogName, List[CatalogOption]]:
    """Resolve the size, type and shape catalogs in one call."""
    return {catalog: resolve_options(product, catalog, recorder) for catalog in CatalogName}


def find_option(options: List[CatalogOption], option_id: Optional[str]) -> Optional[CatalogOption]:
    """Look up an option by id. "standard" is a legacy alias for "none"."""
    if option_id is None:
        return None
    if option_id == "standard":
        option_id = "none"
    for option in options:
        if option.id == option_id:
            return option
    return None


def select_option(options: List[CatalogOption], option_id: Optional[str]) -> CatalogOption:
    """The option with `option_id`, or the first option (the page default)."""
    return find_option(options, option_id) or options[0]


def mixed_available(product: Product, type_options: List[CatalogOption]) -> bool:
    """A mixed box is offered only when enabled and two distinct types exist to blend."""
    return product.mixed_type_enabled and len({option.id for option in type_options}) >= 2
