"""vpype plugin for polyhatch.

This module provides vpype integration, allowing polyhatch patterns
to be used in vpype pipelines. It is registered through the
``vpype.plugins`` entry point and only imported by vpype itself.

Usage:
    vpype read input.svg polyhatch --pattern lines --spacing 2 write output.svg
"""

import click
import numpy as np
import vpype
import vpype_cli

from .geometry import GeometryError, Point, Polygon
from .patterns import PATTERNS, generate_concentric_fill, generate_lines_fill

# Maximum gap between the ends of a line for it to count as closed
CLOSE_TOLERANCE = 0.1


def _closed_polygon(line: np.ndarray):
    """Polygon for a closed vpype line (complex array), or None."""
    if len(line) < 3:
        return None
    if abs(line[-1] - line[0]) > CLOSE_TOLERANCE:
        return None
    polygon = Polygon(Point(float(p.real), float(p.imag)) for p in line)
    return polygon if len(polygon) >= 3 else None


@click.command()
@click.option('--pattern', '-p', default='lines',
              type=click.Choice(sorted(PATTERNS)),
              help='Fill pattern type')
@click.option('--spacing', '-s', default=2.0, type=vpype_cli.LengthType(),
              help='Spacing between fill lines')
@click.option('--angle', '-a', default=45.0, type=float,
              help='Hatch angle in degrees for the lines pattern')
@click.option('--jitter', default=0.0, type=click.FloatRange(0, 1),
              help='Random line shift as a fraction of spacing')
@click.option('--seed', default=None, type=int, help='Random seed for jitter')
@click.option('--connect/--no-connect', default=True,
              help='Connect loops for continuous path')
@vpype_cli.layer_processor
def polyhatch(
    lines: vpype.LineCollection,
    pattern: str,
    spacing: float,
    angle: float,
    jitter: float,
    seed,
    connect: bool,
) -> vpype.LineCollection:
    """Add fill patterns for every closed path of the layer."""
    result = vpype.LineCollection()

    for line in lines:
        result.append(line)
        polygon = _closed_polygon(line)
        if polygon is None:
            continue

        try:
            if pattern == 'concentric':
                fill_lines = generate_concentric_fill(polygon, spacing, connect_loops=connect)
            else:
                fill_lines = generate_lines_fill(polygon, spacing, angle=angle, jitter=jitter, seed=seed)
        except GeometryError as e:
            click.echo(f"polyhatch: skipping path: {e}", err=True)
            continue

        for fill_line in fill_lines:
            result.append(np.array([
                complex(fill_line.start.x, fill_line.start.y),
                complex(fill_line.end.x, fill_line.end.y),
            ]))

    return result
