"""SVG writing and reading for sawtooth toolpaths."""

import io

import svg
import svgpathtools

from models import DEFAULT_STROKE_WIDTH, PathBundle

from .utils import format_coord


def path_to_svg_d(points: "list[tuple[float, float]]") -> str:
    """Build the path `d` attribute: one MoveTo, then a LineTo per point."""
    (x0, y0), rest = points[0], points[1:]
    commands = [f"M {format_coord(x0)} {format_coord(y0)}"]
    commands.extend(f"L {format_coord(x)} {format_coord(y)}" for x, y in rest)
    return " ".join(commands)


def path_to_svg(
    bundle: PathBundle,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
) -> str:
    """Convert a toolpath to an SVG preview document.

    Args:
        bundle: PathBundle with points in mm
        stroke_width: Preview stroke width in mm

    Returns:
        SVG content as string, or "" when the path has fewer than 2 points

    AIDEV-NOTE: The canvas is exactly output_width x output_height with a
    white background and a single unfilled black polyline.
    """
    if len(bundle.points) < 2:
        return ""

    width = bundle.output_width
    height = bundle.output_height

    elements: list[svg.Element] = [
        svg.Rect(x=0, y=0, width=width, height=height, fill="white"),
        svg.Path(
            # Pre-formatted so both writers share format_coord
            d=path_to_svg_d(bundle.points),  # type: ignore[arg-type]
            fill="none",
            stroke="black",
            stroke_width=stroke_width,
        ),
    ]

    document = svg.SVG(
        viewBox=svg.ViewBoxSpec(0, 0, round(width, 3), round(height, 3)),
        width=width,
        height=height,
        elements=elements,
    )
    return document.as_str()


def extract_path_points(svg_content: str) -> "list[tuple[float, float]]":
    """Read the toolpath polyline back out of an SVG document.

    Args:
        svg_content: SVG string produced by path_to_svg

    Returns:
        List of (x, y) vertices in document order; empty if there is no path

    AIDEV-NOTE: svgpathtools uses complex numbers for coordinates.
    Real part = x, imaginary part = y. The background rect is not converted
    to a path so only the toolpath is returned.
    """
    if not svg_content:
        return []

    paths, _attributes = svgpathtools.svg2paths(
        io.StringIO(svg_content),
        convert_rectangles_to_paths=False,
    )
    if not paths or len(paths[0]) == 0:
        return []

    path = paths[0]
    points = [(path[0].start.real, path[0].start.imag)]
    points.extend((segment.end.real, segment.end.imag) for segment in path)
    return points
