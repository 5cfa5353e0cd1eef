# street_seg/geometry/coords.py
from collections.abc import Iterable, Iterator, Sequence
from typing import Literal

from street_seg.app.hooks import NoopHooks
from street_seg.domain.entities.geography import Coord, Edge
from street_seg.errors import GeometryDiscontinuityError

OnDiscontinuity = Literal["raise", "keep"]


class CoordinateSequenceBuilder:
    """Append-only coordinate buffer; `skip` drops that many leading coords of each chunk."""

    def __init__(self):
        self._coords: list[Coord] = []

    def __len__(self) -> int:
        return len(self._coords)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._coords)

    @property
    def last(self) -> Coord | None:
        return self._coords[-1] if self._coords else None

    def extend(self, coords: Sequence[Coord], skip: int = 0) -> None:
        self._coords.extend(coords[skip:])

    def to_list(self) -> list[Coord]:
        return list(self._coords)


def join_gap_deg(a: Coord, b: Coord) -> float:
    return max(abs(a.lat - b.lat), abs(a.lon - b.lon))


def merge_edge_geometries(
    edges: Iterable[Edge],
    *,
    tolerance_deg: float = 1e-7,
    on_discontinuity: OnDiscontinuity = "raise",
    hooks=None,
) -> list[Coord]:
    """
    Stitch edge geometries into one line in travel order.
    The first vertex of every edge after the first shaped one is the join vertex
    and is written once. Edges with no geometry (or fewer than two vertices)
    contribute nothing.
    """
    hooks = hooks or NoopHooks()
    out = CoordinateSequenceBuilder()
    for i, edge in enumerate(edges):
        if not edge.has_geometry:
            hooks.geometry_skipped(edge, index=i)
            continue
        geom = edge.geometry
        if len(out) == 0:
            out.extend(geom)
            continue
        gap = join_gap_deg(out.last, geom[0])
        if gap <= tolerance_deg:
            out.extend(geom, skip=1)
        elif on_discontinuity == "keep":
            out.extend(geom)
        else:
            raise GeometryDiscontinuityError(i, edge.edge_id, gap)
    return out.to_list()
