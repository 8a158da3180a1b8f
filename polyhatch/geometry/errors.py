"""Exceptions raised by the geometry kernel."""


class GeometryError(ValueError):
    """Base class for geometry precondition failures."""


class DegenerateArea(GeometryError):
    """A centroid was requested for a point loop that encloses no area."""


class DisconnectedEdgeSet(GeometryError):
    """A bag of edges does not close into a single vertex cycle."""


class SplitDidNotConverge(GeometryError):
    """Self-intersection splitting exceeded its split budget."""

    def __init__(self, splits: int, budget: int):
        super().__init__(
            f"overlap split did not converge after {splits} splits (budget {budget})"
        )
        self.splits = splits
        self.budget = budget
