"""Numerical tolerances shared by the geometry kernel.

Every equivalence test (vertex deduplication, intersection endpoint
filtering, split termination) must use the same EPSILON.
"""

# Two points are equivalent when both axis deltas are below this.
EPSILON: float = 1e-9

# overlap_split budget: max(MIN_SPLIT_BUDGET, SPLIT_BUDGET_FACTOR * n * n)
MIN_SPLIT_BUDGET: int = 256
SPLIT_BUDGET_FACTOR: int = 4

__all__ = [
    "EPSILON",
    "MIN_SPLIT_BUDGET",
    "SPLIT_BUDGET_FACTOR",
]
