"""
placefinder - resolve a free-text query to a place and discover what is nearby.
"""

from placefinder.core.geo import haversine_distance
from placefinder.schemas.place import Coordinates, FilterSpec, Place
from placefinder.services import apply_filters, fetch_reviews, search

__version__ = "1.0.0"

__all__ = [
    "Coordinates",
    "FilterSpec",
    "Place",
    "apply_filters",
    "fetch_reviews",
    "haversine_distance",
    "search",
]
