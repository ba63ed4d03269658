"""
Piece-count derivation for size options.

A size option says how many chocolates are in the box in one of two ways:
a structured `quantity` field, or a label like "Small Box (4 pieces)".
Catalog entries created through different admin flows may only populate one
of the two, so both are consulted.
"""

import re
from typing import Optional

from ..config import DEFAULT_PIECE_COUNT
from ..schemas.catalog import CatalogOption
from .diagnostics import (
    DiagnosticsRecorder,
    NULL_RECORDER,
    PIECE_COUNT_DEFAULTED,
    PIECE_COUNT_FROM_LABEL,
)


PIECES_LABEL_PATTERN = re.compile(r"\((\d+)\s*pieces?\)", re.IGNORECASE)


def pieces_from_label(label: Optional[str]) -> Optional[int]:
    """
    Parse the piece count out of a size label.

    Examples:
        "Small Box (4 pieces)" -> 4
        "Single (1 Piece)" -> 1
        "Large Box" -> None
    """
    if not label:
        return None
    match = PIECES_LABEL_PATTERN.search(label)
    if not match:
        return None
    pieces = int(match.group(1))
    return pieces if pieces > 0 else None


def derive_piece_count(
    option: Optional[CatalogOption],
    default: int = DEFAULT_PIECE_COUNT,
    recorder: DiagnosticsRecorder = NULL_RECORDER,
) -> int:
    """
    Return the number of pieces in the box for a size option.

    Prefers the structured quantity, then the label, then `default`.
    Never returns less than 1.
    """
    if option is not None and option.quantity:
        return option.quantity

    if option is not None:
        from_label = pieces_from_label(option.label)
        if from_label:
            recorder.record(
                PIECE_COUNT_FROM_LABEL,
                "Piece count taken from size label",
                size=option.id,
                label=option.label,
            )
            return from_label

    recorder.record(
        PIECE_COUNT_DEFAULTED,
        "Piece count missing, using default",
        size=option.id if option is not None else None,
        default=default,
    )
    return max(default, 1)
