"""Great-circle distance between geographic coordinates."""

import math
from typing import Tuple, Union

from coldchain.constants import EARTH_RADIUS_KM
from coldchain.models.node import Coordinate

CoordinateLike = Union[Coordinate, Tuple[float, float]]


def haversine_km(a: CoordinateLike, b: CoordinateLike) -> float:
    """
    Calculate the haversine distance between two points.

    Inputs are not range-checked; callers validate coordinates before
    they reach the engine.

    Args:
        a: (latitude, longitude) of the first point in degrees
        b: (latitude, longitude) of the second point in degrees

    Returns:
        Distance in kilometres
    """
    lat1, lng1 = a
    lat2, lng2 = b

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push h a hair outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))
