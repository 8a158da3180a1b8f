"""Fill pattern generators."""

from .concentric import generate_concentric_fill
from .lines import generate_lines_fill

PATTERNS = {
    "lines": generate_lines_fill,
    "concentric": generate_concentric_fill,
}

__all__ = [
    "PATTERNS",
    "generate_concentric_fill",
    "generate_lines_fill",
]
