# street_seg/app/hooks.py
from typing import Protocol

from street_seg.domain.entities.geography import Edge, Path
from street_seg.domain.entities.segment import StreetSegment


class AssemblyHooks(Protocol):
    def assembly_start(self, path: Path, *, qmode): ...
    def assembly_end(self, segment: StreetSegment, *, edges: int, wall_ms: float): ...
    def geometry_skipped(self, edge: Edge, *, index: int): ...
    def error(self, path: Path, *, exc: BaseException, **kw): ...


class NoopHooks:
    def assembly_start(self, *_, **__):
        pass

    def assembly_end(self, *_, **__):
        pass

    def geometry_skipped(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
