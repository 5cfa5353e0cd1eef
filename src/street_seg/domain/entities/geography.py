# street_seg/domain/entities/geography.py
from __future__ import annotations

import math
from dataclasses import dataclass

from street_seg.domain.entities.modes import TraverseMode


@dataclass(frozen=True)
class Coord:
    lat: float  # decimal degrees
    lon: float


@dataclass(frozen=True)
class Edge:
    edge_id: int | None
    mode: TraverseMode | None
    geometry: tuple[Coord, ...] | None = None  # None => no physical shape (e.g. boarding)
    name: str | None = None
    distance_m: float = 0.0
    bogus_name: bool = False  # name was synthesized, e.g. "path" or "sidewalk"
    area: bool = False

    @property
    def has_geometry(self) -> bool:
        # fewer than two vertices is not a line; treat it as absent
        return self.geometry is not None and len(self.geometry) >= 2


@dataclass(frozen=True)
class TraversalState:
    """
    One point along a search tree. Produced by the (external) search and never
    mutated; back pointers lead to the origin state.
    """

    elapsed_time_s: float
    back_state: TraversalState | None = None
    back_edge: Edge | None = None

    def __post_init__(self):
        if not math.isfinite(self.elapsed_time_s) or self.elapsed_time_s < 0:
            raise ValueError(f"elapsed_time_s must be finite and >= 0, got {self.elapsed_time_s}")

    def extend(self, edge: Edge, dt_s: float) -> TraversalState:
        return TraversalState(self.elapsed_time_s + dt_s, back_state=self, back_edge=edge)


@dataclass(frozen=True)
class Path:
    edges: tuple[Edge, ...]
    terminal: TraversalState

    def __post_init__(self):
        object.__setattr__(self, "edges", tuple(self.edges))

    def __len__(self) -> int:
        return len(self.edges)

    @classmethod
    def from_state(cls, state: TraversalState) -> Path:
        """Walk back pointers from the terminal state and return edges in travel order."""
        edges: list[Edge] = []
        seen: set[int] = set()
        s = state
        while s.back_state is not None:
            if id(s) in seen:
                raise RuntimeError("Cycle detected in state back pointers")
            seen.add(id(s))
            if s.back_edge is not None:
                edges.append(s.back_edge)
            s = s.back_state
        edges.reverse()
        return cls(tuple(edges), state)
