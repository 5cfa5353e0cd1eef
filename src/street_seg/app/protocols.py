# street_seg/app/protocols.py
from typing import Protocol, runtime_checkable

from street_seg.domain.entities.geography import Path
from street_seg.domain.entities.instructions import Leg


@runtime_checkable
class StepGenerator(Protocol):
    """
    Responsibilities:
      • Split a path into legs (one per mode run).
      • Group each leg's edges into walk steps and classify their turns.
    Every edge of the path must land in exactly one walk step, in order.
    """

    def generate(self, path: Path) -> list[Leg]: ...
