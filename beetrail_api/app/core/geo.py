"""
Spherical geometry helpers for the crop proximity search.

Distances are great-circle distances on a sphere with the mean Earth
radius.  ``bounding_box`` returns a latitude/longitude window that is
guaranteed to contain every point within a given distance, so the
database can narrow candidates with plain indexed range comparisons
before ``haversine_km`` gives the exact answer.  The window method is
J. P. Matuschek's "Finding Points Within a Distance of a
Latitude/Longitude Using Bounding Coordinates".
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple


EARTH_RADIUS_KM = 6371.0088

MIN_LAT, MAX_LAT = -90.0, 90.0
MIN_LON, MAX_LON = -180.0, 180.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push ``a`` a hair above 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


@dataclass
class BoundingBox:
    min_lat: float
    max_lat: float
    # One range normally, two when the window crosses the antimeridian.
    lon_ranges: List[Tuple[float, float]] = field(default_factory=list)


def bounding_box(lat: float, lon: float, radius_km: float) -> BoundingBox:
    """Return the coordinate window enclosing the circle of ``radius_km`` around a point."""
    angular = radius_km / EARTH_RADIUS_KM
    min_lat = lat - math.degrees(angular)
    max_lat = lat + math.degrees(angular)

    if min_lat <= MIN_LAT or max_lat >= MAX_LAT:
        # The circle contains a pole, so every longitude qualifies.
        return BoundingBox(max(min_lat, MIN_LAT), min(max_lat, MAX_LAT), [(MIN_LON, MAX_LON)])

    delta_lon = math.degrees(math.asin(math.sin(angular) / math.cos(math.radians(lat))))
    min_lon = lon - delta_lon
    max_lon = lon + delta_lon
    if min_lon < MIN_LON:
        return BoundingBox(min_lat, max_lat, [(min_lon + 360.0, MAX_LON), (MIN_LON, max_lon)])
    if max_lon > MAX_LON:
        return BoundingBox(min_lat, max_lat, [(min_lon, MAX_LON), (MIN_LON, max_lon - 360.0)])
    return BoundingBox(min_lat, max_lat, [(min_lon, max_lon)])
