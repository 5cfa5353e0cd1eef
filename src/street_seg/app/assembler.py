# street_seg/app/assembler.py
import math
import time
from collections.abc import Iterable

from street_seg.app.hooks import AssemblyHooks, NoopHooks
from street_seg.app.protocols import StepGenerator
from street_seg.domain.entities.geography import Path, TraversalState
from street_seg.domain.entities.modes import QualifiedMode
from street_seg.domain.entities.segment import StopAtDistance, StreetSegment
from street_seg.errors import SegmentAssemblyError
from street_seg.geometry.coords import OnDiscontinuity, merge_edge_geometries
from street_seg.geometry.polyline import encode
from street_seg.steps.aggregator import aggregate_street_edges, flatten_walk_steps


def resolve_qmode(path: Path, intended: QualifiedMode | None) -> QualifiedMode | None:
    """The intended mode wins when given; otherwise the first moded edge decides."""
    if intended is not None:
        return intended
    for e in path.edges:
        if e.mode is not None:
            return QualifiedMode(e.mode)
    return None


class SegmentAssembler:
    """
    Renders a traversed path into a StreetSegment: one polyline for the whole
    path, its walk steps, and per-edge info carrying each step's metadata.
    The path may span several legs (e.g. walking a bike), so geometries and
    walk steps are accumulated across legs.
    """

    def __init__(
        self,
        step_generator: StepGenerator,
        *,
        tolerance_deg: float = 1e-7,
        on_discontinuity: OnDiscontinuity = "raise",
        hooks: AssemblyHooks | None = None,
    ):
        self.steps = step_generator
        self.tolerance_deg, self.on_discontinuity = tolerance_deg, on_discontinuity
        self.hooks = hooks or NoopHooks()

    def assemble(self, path: Path, qmode: QualifiedMode | None = None) -> StreetSegment:
        self.hooks.assembly_start(path, qmode=qmode)
        t0 = time.perf_counter()
        try:
            coords = merge_edge_geometries(
                path.edges,
                tolerance_deg=self.tolerance_deg,
                on_discontinuity=self.on_discontinuity,
                hooks=self.hooks,
            )
            geometry = encode(coords)
            walk_steps = flatten_walk_steps(self.steps.generate(path))
            street_edges = aggregate_street_edges(path.edges, walk_steps)
        except SegmentAssemblyError as exc:
            self.hooks.error(path, exc=exc)
            raise

        segment = StreetSegment(
            qmode=resolve_qmode(path, qmode),
            time=math.floor(path.terminal.elapsed_time_s),
            geometry=geometry,
            walk_steps=tuple(walk_steps),
            street_edges=tuple(street_edges),
        )
        self.hooks.assembly_end(
            segment, edges=len(path), wall_ms=(time.perf_counter() - t0) * 1000.0
        )
        return segment

    def assemble_state(self, state: TraversalState, qmode: QualifiedMode | None = None) -> StreetSegment:
        return self.assemble(Path.from_state(state), qmode)

    def from_candidate(self, sd: StopAtDistance) -> StreetSegment:
        # the candidate knows its intended mode more reliably than the edges do
        return self.assemble_state(sd.state, sd.qmode)

    def assemble_all(self, candidates: Iterable[StopAtDistance] | None) -> list[StreetSegment]:
        """One segment per candidate, in input order. No candidates gives an empty list."""
        if not candidates:
            return []
        return [self.from_candidate(sd) for sd in candidates]
