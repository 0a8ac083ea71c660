"""Geodesic helpers."""
import math

from placefinder.schemas.place import Coordinates

EARTH_RADIUS_KM = 6371.0


def haversine_distance(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two coordinates in kilometers."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # rounding can push h a hair past 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))
