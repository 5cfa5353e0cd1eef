# street_seg/steps/aggregator.py
from collections.abc import Iterable, Sequence

from street_seg.domain.entities.geography import Edge
from street_seg.domain.entities.instructions import Leg, WalkStep
from street_seg.domain.entities.segment import StreetEdgeInfo
from street_seg.errors import InstructionMismatchError
from street_seg.geometry.polyline import encode_edge


def flatten_walk_steps(legs: Iterable[Leg]) -> list[WalkStep]:
    return [step for leg in legs for step in leg.walk_steps]


def _check_partition(edges: Sequence[Edge], steps: Sequence[WalkStep]) -> None:
    covered = [e for s in steps for e in s.edges]
    if len(covered) != len(edges):
        raise InstructionMismatchError(
            f"walk steps cover {len(covered)} edges, path has {len(edges)}"
        )
    for i, (got, want) in enumerate(zip(covered, edges)):
        # identity first: equal-valued edges may legitimately repeat in a path
        if got is not want and got != want:
            raise InstructionMismatchError(
                f"edge #{i}: walk steps list edge {got.edge_id!r}, path has {want.edge_id!r}"
            )


def aggregate_street_edges(edges: Sequence[Edge], steps: Sequence[WalkStep]) -> list[StreetEdgeInfo]:
    """
    One StreetEdgeInfo per path edge, in order. All edges of a walk step carry
    that step's metadata; only the step's first edge is flagged `first_edge`.
    """
    _check_partition(edges, steps)
    out: list[StreetEdgeInfo] = []
    for step in steps:
        meta = step.metadata  # frozen, so sharing it across the step's edges is safe
        for k, edge in enumerate(step.edges):
            out.append(
                StreetEdgeInfo(
                    edge_id=edge.edge_id,
                    distance_m=edge.distance_m,
                    geometry=encode_edge(edge),
                    first_edge=k == 0,
                    metadata=meta,
                )
            )
    return out
