# street_seg/steps/generators.py
from collections.abc import Sequence

from street_seg.app.protocols import StepGenerator
from street_seg.domain.entities.geography import Coord, Edge, Path
from street_seg.domain.entities.instructions import (
    AbsoluteDirection,
    Leg,
    RelativeDirection,
    WalkStep,
)
from street_seg.domain.entities.modes import TraverseMode
from street_seg.steps.geo import bearing_deg, turn_angle_deg

_COMPASS = list(AbsoluteDirection)  # clockwise from NORTH


def absolute_direction(bearing: float) -> AbsoluteDirection:
    return _COMPASS[int(((bearing % 360) + 22.5) // 45) % 8]


def _split_legs(edges: Sequence[Edge]) -> list[tuple[TraverseMode | None, list[Edge]]]:
    # edges without a mode (e.g. boarding) stay with the leg they occur in
    legs: list[tuple[TraverseMode | None, list[Edge]]] = []
    mode: TraverseMode | None = None
    for e in edges:
        if not legs:
            legs.append((e.mode, [e]))
            mode = e.mode
        elif e.mode is None or e.mode == mode:
            legs[-1][1].append(e)
        elif mode is None:
            legs[-1] = (e.mode, legs[-1][1] + [e])
            mode = e.mode
        else:
            legs.append((e.mode, [e]))
            mode = e.mode
    return legs


def _start_bearing(edges: Sequence[Edge]) -> float | None:
    for e in edges:
        if e.has_geometry:
            return bearing_deg(e.geometry[0], e.geometry[1])
    return None


def _end_bearing(edges: Sequence[Edge]) -> float | None:
    for e in reversed(edges):
        if e.has_geometry:
            return bearing_deg(e.geometry[-2], e.geometry[-1])
    return None


def _start_location(edges: Sequence[Edge]) -> Coord | None:
    for e in edges:
        if e.has_geometry:
            return e.geometry[0]
    return None


class StreetNameStepGenerator(StepGenerator):
    """
    Legs break on mode changes; walk steps break on street-name changes.
    Turns are classified from the heading change across the step boundary.
    """

    def __init__(
        self,
        continue_deg: float = 10.0,
        slight_deg: float = 45.0,
        hard_deg: float = 120.0,
        uturn_deg: float = 170.0,
    ):
        self.continue_deg, self.slight_deg = continue_deg, slight_deg
        self.hard_deg, self.uturn_deg = hard_deg, uturn_deg

    def relative_direction(self, turn: float) -> RelativeDirection:
        a = abs(turn)
        right = turn > 0
        if a < self.continue_deg:
            return RelativeDirection.CONTINUE
        if a < self.slight_deg:
            return RelativeDirection.SLIGHTLY_RIGHT if right else RelativeDirection.SLIGHTLY_LEFT
        if a < self.hard_deg:
            return RelativeDirection.RIGHT if right else RelativeDirection.LEFT
        if a < self.uturn_deg:
            return RelativeDirection.HARD_RIGHT if right else RelativeDirection.HARD_LEFT
        return RelativeDirection.UTURN_RIGHT if right else RelativeDirection.UTURN_LEFT

    def generate(self, path: Path) -> list[Leg]:
        legs: list[Leg] = []
        prev_name: str | None = None
        prev_bearing: float | None = None
        for mode, edges in _split_legs(path.edges):
            groups: list[list[Edge]] = []
            for e in edges:
                if groups and (not e.has_geometry or e.name == groups[-1][0].name):
                    groups[-1].append(e)
                else:
                    groups.append([e])

            steps: list[WalkStep] = []
            for i, group in enumerate(groups):
                head = group[0]
                start = _start_bearing(group)
                if i == 0:
                    rel = RelativeDirection.DEPART
                elif start is None or prev_bearing is None:
                    rel = RelativeDirection.CONTINUE
                else:
                    rel = self.relative_direction(turn_angle_deg(prev_bearing, start))
                steps.append(
                    WalkStep(
                        new_mode=mode,
                        street_name=head.name,
                        absolute_direction=absolute_direction(start) if start is not None else None,
                        relative_direction=rel,
                        edges=tuple(group),
                        stay_on=bool(steps or legs) and head.name == prev_name,
                        area=head.area,
                        bogus_name=head.bogus_name,
                        distance_m=sum(e.distance_m for e in group),
                        location=_start_location(group),
                    )
                )
                prev_name = head.name
                end = _end_bearing(group)
                if end is not None:
                    prev_bearing = end
            legs.append(Leg(mode=mode, walk_steps=tuple(steps)))
        return legs
