from .place import (
    Coordinates,
    Place,
    FilterSpec,
    EXACT_MATCH_ID,
    UNNAMED_PLACE,
)

__all__ = [
    "Coordinates",
    "Place",
    "FilterSpec",
    "EXACT_MATCH_ID",
    "UNNAMED_PLACE",
]
