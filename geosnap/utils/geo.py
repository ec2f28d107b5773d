from __future__ import annotations

from math import radians, sin, cos, asin, sqrt, isfinite
from typing import Iterable, Optional

EARTH_RADIUS_KM = 6371.0


def is_valid_coordinate(lat: object, lng: object) -> bool:
    """True when both values are finite numbers inside WGS84 degree ranges."""
    for v in (lat, lng):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return False
        if not isfinite(v):
            return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0  # type: ignore[operator]


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    dlat, dlng = radians(lat2 - lat1), radians(lng2 - lng1)
    a = sin(dlat/2)**2 + cos(radians(lat1))*cos(radians(lat2))*sin(dlng/2)**2
    return 2 * EARTH_RADIUS_KM * asin(sqrt(a))


def in_box(lat: float, lng: float, center_lat: float, center_lng: float, radius: float) -> bool:
    # Degree window, inclusive on both edges
    return (center_lat - radius <= lat <= center_lat + radius
            and center_lng - radius <= lng <= center_lng + radius)


def padded_bounds(
    coords: Iterable[tuple[float, float]], pad: float = 0.01
) -> Optional[list[list[float]]]:
    """[[south, west], [north, east]] around coords, or None when empty."""
    pts = list(coords)
    if not pts:
        return None
    lats = [p[0] for p in pts]
    lngs = [p[1] for p in pts]
    return [
        [min(lats) - pad, min(lngs) - pad],
        [max(lats) + pad, max(lngs) + pad],
    ]
