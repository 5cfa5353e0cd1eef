# street_seg/geometry/polyline.py
"""
Encoded polyline codec (the Google "encoded polyline algorithm format").

Coordinates are scaled by 10**precision, rounded half away from zero and
delta-encoded against the previous point (the first against 0,0). Each delta
is zig-zagged and written as 5-bit groups, least significant first, with 0x20
flagging continuation and 63 added to land in printable ASCII. Latitude comes
before longitude for every point.
"""

from collections.abc import Sequence

import numpy as np

from street_seg.domain.entities.geography import Coord, Edge
from street_seg.domain.entities.segment import POLYLINE_PRECISION, EncodedPolyline
from street_seg.errors import PolylineDecodeError, PolylineEncodingError

INT32_MAX = 2**31 - 1
_OFFSET = 63
_CHUNK_BITS = 5
_CONTINUE = 0x20
_MAX_CHUNKS = 7  # ceil(33 / 5): a zig-zagged int32 never needs more


def _append_value(v: int, out: list[str]) -> None:
    v = ~(v << 1) if v < 0 else v << 1
    while v >= _CONTINUE:
        out.append(chr((_CONTINUE | (v & 0x1F)) + _OFFSET))
        v >>= _CHUNK_BITS
    out.append(chr(v + _OFFSET))


def _scale(coords: Sequence[Coord], precision: int) -> np.ndarray:
    arr = np.asarray([(c.lat, c.lon) for c in coords], dtype=np.float64)
    if not np.isfinite(arr).all():
        raise PolylineEncodingError("coordinates must be finite")
    scaled = np.sign(arr) * np.floor(np.abs(arr) * 10.0**precision + 0.5)
    if np.abs(scaled).max() > INT32_MAX:
        raise PolylineEncodingError(f"coordinate out of range at precision {precision}")
    return scaled.astype(np.int64)


def encode(coords: Sequence[Coord]) -> EncodedPolyline:
    if len(coords) == 0:
        return EncodedPolyline("", 0)
    ints = _scale(coords, POLYLINE_PRECISION)
    deltas = np.diff(ints, axis=0, prepend=np.zeros((1, 2), dtype=np.int64))
    if np.abs(deltas).max() > INT32_MAX:
        raise PolylineEncodingError("coordinate delta exceeds 32-bit range")
    out: list[str] = []
    for d in deltas.ravel().tolist():
        _append_value(d, out)
    return EncodedPolyline("".join(out), len(coords))


def encode_edge(edge: Edge) -> EncodedPolyline | None:
    return encode(edge.geometry) if edge.has_geometry else None


def decode(encoded: EncodedPolyline | str) -> list[Coord]:
    if isinstance(encoded, EncodedPolyline):
        points, precision, expected = encoded.points, encoded.precision, encoded.length
    else:
        points, precision, expected = encoded, POLYLINE_PRECISION, None

    idx, n = 0, len(points)

    def next_value() -> int:
        nonlocal idx
        result, shift = 0, 0
        for _ in range(_MAX_CHUNKS):
            if idx >= n:
                raise PolylineDecodeError(f"truncated polyline at offset {idx}")
            b = ord(points[idx]) - _OFFSET
            if not 0 <= b < 2 * _CONTINUE:
                raise PolylineDecodeError(f"invalid character {points[idx]!r} at offset {idx}")
            idx += 1
            result |= (b & 0x1F) << shift
            shift += _CHUNK_BITS
            if b < _CONTINUE:
                return ~(result >> 1) if result & 1 else result >> 1
        raise PolylineDecodeError(f"value too long at offset {idx}")

    factor = 10.0**precision
    lat = lon = 0
    coords: list[Coord] = []
    while idx < n:
        lat += next_value()
        lon += next_value()
        coords.append(Coord(lat / factor, lon / factor))

    if expected is not None and expected != len(coords):
        raise PolylineDecodeError(f"expected {expected} points, decoded {len(coords)}")
    return coords
