# street_seg/errors.py


class SegmentAssemblyError(ValueError):
    """Base class: a street segment could not be assembled from its inputs."""


class GeometryDiscontinuityError(SegmentAssemblyError):
    """Consecutive edge geometries do not share their join vertex."""

    def __init__(self, index: int, edge_id, gap_deg: float):
        super().__init__(
            f"edge #{index} (id={edge_id!r}) does not start where the previous geometry ends "
            f"(gap {gap_deg:.3g} deg)"
        )
        self.index, self.edge_id, self.gap_deg = index, edge_id, gap_deg


class PolylineEncodingError(SegmentAssemblyError):
    pass


class PolylineDecodeError(SegmentAssemblyError):
    pass


class InstructionMismatchError(SegmentAssemblyError):
    """Walk steps do not partition the path's edge sequence."""
