# street_seg/domain/entities/segment.py
from __future__ import annotations

from dataclasses import dataclass

from street_seg.domain.entities.geography import TraversalState
from street_seg.domain.entities.instructions import StepMetadata, WalkStep
from street_seg.domain.entities.modes import QualifiedMode

POLYLINE_PRECISION = 5  # decimal digits


@dataclass(frozen=True)
class EncodedPolyline:
    points: str
    length: int  # number of encoded coordinates
    precision: int = POLYLINE_PRECISION

    def to_dict(self) -> dict:
        return {"points": self.points, "length": self.length, "precision": self.precision}


@dataclass(frozen=True)
class StreetEdgeInfo:
    edge_id: int | None
    distance_m: float
    geometry: EncodedPolyline | None
    first_edge: bool
    metadata: StepMetadata  # shared by every edge of one walk step; frozen

    def to_dict(self) -> dict:
        m = self.metadata
        return {
            "edgeId": self.edge_id,
            "distance": self.distance_m,
            "geometry": self.geometry.to_dict() if self.geometry else None,
            "firstEdge": self.first_edge,
            "mode": m.mode.value if m.mode else None,
            "streetName": m.street_name,
            "absoluteDirection": m.absolute_direction.value if m.absolute_direction else None,
            "relativeDirection": m.relative_direction.value if m.relative_direction else None,
            "stayOn": m.stay_on,
            "area": m.area,
            "bogusName": m.bogus_name,
        }


@dataclass(frozen=True)
class StreetSegment:
    """
    A non-transit part of an option: an access/egress leg of a transit trip,
    or a direct street path to the destination.
    """

    qmode: QualifiedMode | None
    time: int  # whole seconds, truncated
    geometry: EncodedPolyline
    walk_steps: tuple[WalkStep, ...]
    street_edges: tuple[StreetEdgeInfo, ...]

    def to_dict(self) -> dict:
        return {
            "qmode": str(self.qmode) if self.qmode else None,  # flat token, e.g. "BICYCLE_RENT"
            "time": self.time,
            "geometry": self.geometry.to_dict(),
            "walkSteps": [s.to_dict() for s in self.walk_steps],
            "streetEdges": [e.to_dict() for e in self.street_edges],
        }


@dataclass(frozen=True)
class StopAtDistance:
    """A candidate reached by the access/egress search, with the mode it was searched in."""

    state: TraversalState
    qmode: QualifiedMode
    stop_id: str | None = None
    distance_m: float | None = None
