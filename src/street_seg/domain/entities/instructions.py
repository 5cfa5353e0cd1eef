# street_seg/domain/entities/instructions.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from street_seg.domain.entities.geography import Coord, Edge
from street_seg.domain.entities.modes import TraverseMode


class RelativeDirection(str, Enum):
    DEPART = "DEPART"
    HARD_LEFT = "HARD_LEFT"
    LEFT = "LEFT"
    SLIGHTLY_LEFT = "SLIGHTLY_LEFT"
    CONTINUE = "CONTINUE"
    SLIGHTLY_RIGHT = "SLIGHTLY_RIGHT"
    RIGHT = "RIGHT"
    HARD_RIGHT = "HARD_RIGHT"
    UTURN_LEFT = "UTURN_LEFT"
    UTURN_RIGHT = "UTURN_RIGHT"


class AbsoluteDirection(str, Enum):
    NORTH = "NORTH"
    NORTHEAST = "NORTHEAST"
    EAST = "EAST"
    SOUTHEAST = "SOUTHEAST"
    SOUTH = "SOUTH"
    SOUTHWEST = "SOUTHWEST"
    WEST = "WEST"
    NORTHWEST = "NORTHWEST"


@dataclass(frozen=True)
class StepMetadata:
    """What a walk step says about every edge it covers."""

    mode: TraverseMode | None
    street_name: str | None
    absolute_direction: AbsoluteDirection | None
    relative_direction: RelativeDirection | None
    stay_on: bool = False
    area: bool = False
    bogus_name: bool = False


@dataclass(frozen=True)
class WalkStep:
    new_mode: TraverseMode | None
    street_name: str | None
    absolute_direction: AbsoluteDirection | None
    relative_direction: RelativeDirection | None
    edges: tuple[Edge, ...]
    stay_on: bool = False
    area: bool = False
    bogus_name: bool = False
    distance_m: float = 0.0
    location: Coord | None = None  # where the step begins

    def __post_init__(self):
        object.__setattr__(self, "edges", tuple(self.edges))

    @property
    def metadata(self) -> StepMetadata:
        return StepMetadata(
            mode=self.new_mode,
            street_name=self.street_name,
            absolute_direction=self.absolute_direction,
            relative_direction=self.relative_direction,
            stay_on=self.stay_on,
            area=self.area,
            bogus_name=self.bogus_name,
        )

    def to_dict(self) -> dict:
        return {
            "newMode": self.new_mode.value if self.new_mode else None,
            "streetName": self.street_name,
            "absoluteDirection": self.absolute_direction.value if self.absolute_direction else None,
            "relativeDirection": self.relative_direction.value if self.relative_direction else None,
            "stayOn": self.stay_on,
            "area": self.area,
            "bogusName": self.bogus_name,
            "distance": self.distance_m,
            "lat": self.location.lat if self.location else None,
            "lon": self.location.lon if self.location else None,
        }


@dataclass(frozen=True)
class Leg:
    mode: TraverseMode | None
    walk_steps: tuple[WalkStep, ...]

    def __post_init__(self):
        object.__setattr__(self, "walk_steps", tuple(self.walk_steps))
