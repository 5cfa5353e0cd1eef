# street_seg/domain/entities/modes.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TraverseMode(str, Enum):
    WALK = "WALK"
    BICYCLE = "BICYCLE"
    CAR = "CAR"
    TRAM = "TRAM"
    SUBWAY = "SUBWAY"
    RAIL = "RAIL"
    BUS = "BUS"
    FERRY = "FERRY"
    CABLE_CAR = "CABLE_CAR"
    GONDOLA = "GONDOLA"
    FUNICULAR = "FUNICULAR"
    TRANSIT = "TRANSIT"


class Qualifier(str, Enum):
    RENT = "RENT"
    HAVE = "HAVE"
    PARK = "PARK"
    KEEP = "KEEP"


@dataclass(frozen=True)
class QualifiedMode:
    """
    A travel mode as intended for a candidate, e.g. BICYCLE + RENT.
    Rendered (and parsed) as a flat token: "BICYCLE_RENT".
    """

    mode: TraverseMode
    qualifiers: frozenset[Qualifier] = frozenset()

    def __str__(self) -> str:
        # qualifiers are sorted so the token is stable
        return "_".join([self.mode.value, *sorted(q.value for q in self.qualifiers)])

    @classmethod
    def parse(cls, token: str) -> QualifiedMode:
        parts = token.strip().upper().split("_")
        # longest mode prefix wins: CABLE_CAR must not read as CABLE + qualifier CAR
        for i in range(len(parts), 0, -1):
            head = "_".join(parts[:i])
            if head in TraverseMode.__members__:
                try:
                    quals = frozenset(Qualifier(p) for p in parts[i:])
                except ValueError:
                    raise ValueError(f"Unknown qualifier in mode token {token!r}") from None
                return cls(TraverseMode[head], quals)
        raise ValueError(f"Unknown mode token {token!r}")
