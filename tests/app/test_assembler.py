# tests/app/test_assembler.py
import dataclasses

import pytest

from street_seg.app.assembler import SegmentAssembler, resolve_qmode
from street_seg.domain.entities.geography import Coord, Edge, Path, TraversalState
from street_seg.domain.entities.instructions import (
    AbsoluteDirection,
    Leg,
    RelativeDirection,
    WalkStep,
)
from street_seg.domain.entities.modes import QualifiedMode, Qualifier, TraverseMode
from street_seg.domain.entities.segment import StopAtDistance
from street_seg.errors import GeometryDiscontinuityError, InstructionMismatchError
from street_seg.geometry.polyline import decode
from street_seg.steps.generators import StreetNameStepGenerator

WALK, BICYCLE = TraverseMode.WALK, TraverseMode.BICYCLE


# ---------- Stubs


class OneStepGenerator:
    """Puts every edge of the path into a single walk step named `name`."""

    def __init__(self, name="Main St", drop_last=False):
        self.name, self.drop_last = name, drop_last

    def generate(self, path):
        edges = path.edges[:-1] if self.drop_last else path.edges
        if not edges:
            return []
        step = WalkStep(
            new_mode=edges[0].mode,
            street_name=self.name,
            absolute_direction=AbsoluteDirection.EAST,
            relative_direction=RelativeDirection.DEPART,
            edges=edges,
        )
        return [Leg(edges[0].mode, [step])]


class RecordingHooks:
    def __init__(self):
        self.calls = []

    def assembly_start(self, path, *, qmode):
        self.calls.append(("start", len(path.edges), qmode))

    def assembly_end(self, segment, *, edges, wall_ms):
        self.calls.append(("end", edges, segment.time))

    def geometry_skipped(self, edge, *, index):
        self.calls.append(("skipped", index))

    def error(self, path, *, exc, **kw):
        self.calls.append(("error", type(exc).__name__))


# ---------- Fixtures


@pytest.fixture
def walk_edges():
    a = Edge(1, WALK, (Coord(0, 0), Coord(0, 1)), name="Main St")
    b = Edge(2, WALK, (Coord(0, 1), Coord(0, 2)), name="Main St")
    return a, b


@pytest.fixture
def assembler() -> SegmentAssembler:
    return SegmentAssembler(OneStepGenerator())


def state_through(edges, times):
    s = TraversalState(0.0)
    for e, dt in zip(edges, times):
        s = s.extend(e, dt)
    return s


# ---------- Assembly


def test_two_edge_walk(assembler, walk_edges):
    path = Path(walk_edges, TraversalState(125.9))
    seg = assembler.assemble(path)
    assert decode(seg.geometry) == [Coord(0, 0), Coord(0, 1), Coord(0, 2)]
    assert seg.geometry.length == 3 and seg.geometry.precision == 5
    assert len(seg.street_edges) == 2
    assert all(e.metadata.street_name == "Main St" for e in seg.street_edges)
    assert all(e.metadata.mode is WALK for e in seg.street_edges)
    assert len(seg.walk_steps) == 1
    assert seg.time == 125
    assert seg.qmode == QualifiedMode(WALK)


@pytest.mark.parametrize("elapsed, expected", [(0.0, 0), (0.99, 0), (59.999, 59), (60.0, 60)])
def test_time_truncates_to_whole_seconds(assembler, walk_edges, elapsed, expected):
    seg = assembler.assemble(Path(walk_edges, TraversalState(elapsed)))
    assert seg.time == expected
    assert isinstance(seg.time, int)


def test_intended_mode_wins(assembler, walk_edges):
    rent = QualifiedMode(BICYCLE, frozenset({Qualifier.RENT}))
    seg = assembler.assemble(Path(walk_edges, TraversalState(10.0)), rent)
    assert seg.qmode == rent
    assert seg.to_dict()["qmode"] == "BICYCLE_RENT"


def test_resolve_qmode_precedence(walk_edges):
    boarding = Edge(0, None)
    path = Path((boarding, *walk_edges), TraversalState(1.0))
    assert resolve_qmode(path, None) == QualifiedMode(WALK)
    car = QualifiedMode(TraverseMode.CAR, frozenset({Qualifier.PARK}))
    assert resolve_qmode(path, car) is car
    assert resolve_qmode(Path((), TraversalState(0.0)), None) is None


def test_empty_path(assembler):
    seg = assembler.assemble(Path((), TraversalState(0.0)))
    assert seg.geometry.points == "" and seg.geometry.length == 0
    assert seg.time == 0
    assert seg.walk_steps == () and seg.street_edges == ()
    assert seg.qmode is None


def test_segment_is_frozen(assembler, walk_edges):
    seg = assembler.assemble(Path(walk_edges, TraversalState(1.0)))
    with pytest.raises(dataclasses.FrozenInstanceError):
        seg.time = 5


def test_mismatched_steps_fail_the_assembly(walk_edges):
    hooks = RecordingHooks()
    asm = SegmentAssembler(OneStepGenerator(drop_last=True), hooks=hooks)
    with pytest.raises(InstructionMismatchError):
        asm.assemble(Path(walk_edges, TraversalState(1.0)))
    assert hooks.calls == [("start", 2, None), ("error", "InstructionMismatchError")]


def test_discontinuous_geometry_fails_the_assembly():
    a = Edge(1, WALK, (Coord(0, 0), Coord(0, 1)))
    b = Edge(2, WALK, (Coord(3, 3), Coord(0, 2)))
    asm = SegmentAssembler(OneStepGenerator())
    with pytest.raises(GeometryDiscontinuityError):
        asm.assemble(Path((a, b), TraversalState(1.0)))

    lenient = SegmentAssembler(OneStepGenerator(), on_discontinuity="keep")
    seg = lenient.assemble(Path((a, b), TraversalState(1.0)))
    assert seg.geometry.length == 4


def test_hooks_see_skips_and_completion(walk_edges):
    hooks = RecordingHooks()
    a, b = walk_edges
    boarding = Edge(5, None)
    asm = SegmentAssembler(OneStepGenerator(), hooks=hooks)
    asm.assemble(Path((a, boarding, b), TraversalState(42.5)))
    assert hooks.calls == [("start", 3, None), ("skipped", 1), ("end", 3, 42)]


# ---------- States and candidates


def test_assemble_state_rebuilds_edges_in_order(assembler, walk_edges):
    s = state_through(walk_edges, [30.0, 31.5])
    seg = assembler.assemble_state(s)
    assert [e.edge_id for e in seg.street_edges] == [1, 2]
    assert seg.time == 61


def test_from_candidate_uses_candidate_mode(assembler, walk_edges):
    rent = QualifiedMode.parse("BICYCLE_RENT")
    sd = StopAtDistance(state=state_through(walk_edges, [5.0, 5.0]), qmode=rent, stop_id="S1")
    seg = assembler.from_candidate(sd)
    assert seg.qmode == rent
    # edges say WALK; the candidate's intended mode is reported
    assert all(e.metadata.mode is WALK for e in seg.street_edges)


@pytest.mark.parametrize("empty", [None, [], ()])
def test_batch_of_nothing_is_an_empty_list(assembler, empty):
    assert assembler.assemble_all(empty) == []


def test_batch_preserves_order(assembler, walk_edges):
    a, b = walk_edges
    walk = QualifiedMode(WALK)
    sds = [
        StopAtDistance(state_through([a], [10.0]), walk, stop_id="near"),
        StopAtDistance(state_through([a, b], [10.0, 20.0]), walk, stop_id="far"),
    ]
    segs = assembler.assemble_all(sds)
    assert [s.time for s in segs] == [10, 30]
    assert [len(s.street_edges) for s in segs] == [1, 2]


# ---------- End to end with the default generator


def test_default_generator_end_to_end():
    edges = (
        Edge(1, WALK, (Coord(0.0, 0.0), Coord(0.001, 0.0)), name="Main St", distance_m=111.0),
        Edge(2, WALK, (Coord(0.001, 0.0), Coord(0.001, 0.001)), name="Elm St", distance_m=111.0),
    )
    seg = SegmentAssembler(StreetNameStepGenerator()).assemble(Path(edges, TraversalState(160.2)))
    assert [s.street_name for s in seg.walk_steps] == ["Main St", "Elm St"]
    assert [e.metadata.relative_direction for e in seg.street_edges] == [
        RelativeDirection.DEPART,
        RelativeDirection.RIGHT,
    ]
    d = seg.to_dict()
    assert d["qmode"] == "WALK"
    assert d["time"] == 160
    assert [e["streetName"] for e in d["streetEdges"]] == ["Main St", "Elm St"]
    assert d["geometry"]["length"] == 3
