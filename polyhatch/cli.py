"""Command-line interface for polyhatch."""

import functools
import logging
import sys
import time
from typing import Callable, Dict, List, Tuple

import click

from .geometry import GeometryError, Polygon, Segment
from .patterns import PATTERNS, generate_concentric_fill, generate_lines_fill
from .svg_io import create_svg_from_lines, extract_polygons_from_svg

Operation = Callable[[Polygon], List[Segment]]


def _enable_debug_logging():
    logger = logging.getLogger('polyhatch')
    logger.setLevel(logging.DEBUG)
    if any(type(h) is logging.StreamHandler for h in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    logger.addHandler(handler)


def _fail(message: str):
    click.echo(message, err=True)
    sys.exit(1)


def svg_io_options(command):
    """Input, output, stroke and verbosity options shared by every SVG command."""
    decorators = [
        click.argument('input', default='-', required=False),
        click.option('-o', '--output', default='-', help='Output file (default: stdout)'),
        click.option('--stroke', default='black', help='Stroke color (default: black)'),
        click.option('--stroke-width', default='1', help='Stroke width (default: 1)'),
        click.option('--verbose', '-v', is_flag=True,
                     help='Print timing, statistics and debug logging'),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


def _load_polygons(input: str, verbose: bool) -> Tuple[List[Polygon], Dict[str, str]]:
    try:
        with click.open_file(input, 'r') as f:
            svg_content = f.read()
    except OSError as e:
        _fail(f"Error reading input: {e}")

    if verbose:
        click.echo(f"Read {len(svg_content)} bytes", err=True)

    try:
        polygons, metadata = extract_polygons_from_svg(svg_content)
    except Exception as e:
        _fail(f"Error parsing SVG: {e}")

    if not polygons:
        _fail("No fillable shapes found in input")

    if verbose:
        click.echo(f"Found {len(polygons)} shapes", err=True)

    return polygons, metadata


def _apply(polygons: List[Polygon], operation: Operation, verbose: bool) -> List[Segment]:
    lines: List[Segment] = []

    for number, poly in enumerate(polygons, start=1):
        if verbose:
            click.echo(f"Processing shape {number}/{len(polygons)}...", err=True)
        try:
            lines.extend(operation(poly))
        except GeometryError as e:
            click.echo(f"Skipping shape {number}: {e}", err=True)

    if verbose:
        click.echo(f"Generated {len(lines)} line segments", err=True)

    return lines


def _run(operation: Operation, input, output, stroke, stroke_width, verbose):
    """Read shapes, apply `operation` to each and write the resulting lines."""
    started = time.perf_counter()
    if verbose:
        _enable_debug_logging()

    polygons, metadata = _load_polygons(input, verbose)
    lines = _apply(polygons, operation, verbose)

    document = create_svg_from_lines(
        lines,
        viewbox=metadata['viewBox'],
        width=metadata['width'],
        height=metadata['height'],
        stroke=stroke,
        stroke_width=stroke_width,
    )
    try:
        with click.open_file(output, 'w') as f:
            f.write(document)
    except OSError as e:
        _fail(f"Error writing output: {e}")

    if verbose:
        click.echo(f"Completed in {time.perf_counter() - started:.3f}s", err=True)


@click.group()
@click.version_option(package_name='polyhatch')
def main():
    """polyhatch: Fill pattern generator for pen plotters.

    Hatch, ring-fill or offset every closed shape of an SVG. The same fills
    are available inside vpype pipelines as the `polyhatch` command.

    Examples:

        polyhatch fill input.svg -o output.svg

        cat input.svg | polyhatch fill --pattern lines --angle 30 --jitter 0.2 > output.svg

        polyhatch offset input.svg --distance -2 -o inset.svg
    """


@main.command()
@svg_io_options
@click.option('--pattern', '-p', default='lines',
              type=click.Choice(sorted(PATTERNS)),
              help='Fill pattern (default: lines)')
@click.option('--spacing', '-s', default=2.0, type=click.FloatRange(min=0, min_open=True),
              help='Distance between fill lines (default: 2.0)')
@click.option('--angle', '-a', default=45.0, type=float,
              help='Hatch angle in degrees for the lines pattern (default: 45)')
@click.option('--jitter', default=0.0, type=click.FloatRange(0, 1),
              help='Random line shift as a fraction of spacing (default: 0)')
@click.option('--seed', default=None, type=int, help='Random seed for jitter')
@click.option('--connect/--no-connect', default=True,
              help='Join concentric rings into one path (default: connect)')
def fill(input, output, stroke, stroke_width, verbose, pattern, spacing, angle, jitter, seed, connect):
    """Generate fill patterns for shapes in an SVG file.

    INPUT: SVG file path, or - for stdin (default)

    Every closed shape (paths, polygons, polylines, rects, circles, ellipses)
    is filled independently; shapes that cannot be filled are skipped.
    """
    if pattern == 'concentric':
        operation = functools.partial(
            generate_concentric_fill, spacing=spacing, connect_loops=connect)
    else:
        operation = functools.partial(
            generate_lines_fill, spacing=spacing, angle=angle, jitter=jitter, seed=seed)

    _run(operation, input, output, stroke, stroke_width, verbose)


@main.command()
@svg_io_options
@click.option('--distance', '-d', default=-1.0, type=float,
              help='Offset distance; negative shrinks, positive grows (default: -1)')
def offset(input, output, stroke, stroke_width, verbose, distance):
    """Write the outlines of every shape offset by a fixed distance.

    INPUT: SVG file path, or - for stdin (default)

    A shape may split into several outlines or vanish entirely.
    """
    def operation(poly: Polygon) -> List[Segment]:
        return [edge for piece in poly.offset(distance) for edge in piece.edges]

    _run(operation, input, output, stroke, stroke_width, verbose)


@main.command()
def patterns():
    """List available fill patterns."""
    descriptions = {
        'concentric': 'Rings offset inward until the shape is used up',
        'lines': 'Parallel hatching at an angle, with optional jitter',
    }
    click.echo("Available patterns:")
    click.echo()
    for name in sorted(PATTERNS):
        click.echo(f"  {name:<11} - {descriptions[name]}")
    click.echo()
    click.echo("Use: polyhatch fill --pattern <name> input.svg")


if __name__ == '__main__':
    main()
