# street_seg/steps/geo.py
# Pure geographic helpers. No side effects.

import math

from street_seg.domain.entities.geography import Coord

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(a: Coord, b: Coord) -> float:
    """Great-circle distance in metres."""
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing_deg(a: Coord, b: Coord) -> float:
    """Initial bearing from a to b, degrees in [0, 360)."""
    rlat1, rlat2 = math.radians(a.lat), math.radians(b.lat)
    d_lon = math.radians(b.lon - a.lon)
    y = math.sin(d_lon) * math.cos(rlat2)
    x = math.cos(rlat1) * math.sin(rlat2) - math.sin(rlat1) * math.cos(rlat2) * math.cos(d_lon)
    return (math.degrees(math.atan2(y, x)) + 360) % 360


def turn_angle_deg(from_bearing: float, to_bearing: float) -> float:
    """Signed change of heading in (-180, 180]; positive turns right."""
    diff = (to_bearing - from_bearing + 180) % 360 - 180
    return 180.0 if diff == -180 else diff
