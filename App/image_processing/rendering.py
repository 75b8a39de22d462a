"""Hatch sawtooth rendering: image darkness to one continuous toolpath.

AIDEV-NOTE: The image is divided into square cells and scanned row by row,
alternating direction every row. Each cell contributes a peak whose height
is proportional to the cell's darkness, followed by a valley back on the
row's center line. The result is a single polyline with no pen lifts.
"""

import logging
import math

from models import PathBundle, SawtoothConfig, ScanDirection

from .utils import as_rgba_array, sample_darkness

logger = logging.getLogger(__name__)


def _scan_row(
    pixels,
    image_width: int,
    image_height: int,
    row: int,
    direction: ScanDirection,
    num_cols: int,
    cell_size: int,
    scaled_cell_size: float,
    max_amplitude: float,
    output_width: float,
) -> "list[tuple[float, float]]":
    """Generate the peak/valley points of one row in scan order."""
    points = []
    y = row * cell_size
    base_y = (row + 0.5) * scaled_cell_size

    for col in direction.column_order(num_cols):
        darkness = sample_darkness(
            pixels, image_width, image_height, col * cell_size, y, cell_size
        )
        amplitude = darkness * max_amplitude

        center_x = (col + 0.5) * scaled_cell_size
        if direction is ScanDirection.RIGHTWARD:
            far_x = min((col + 1) * scaled_cell_size, output_width)
        else:
            far_x = col * scaled_cell_size

        # Peak at the cell center, valley at the far edge
        points.append((center_x, base_y - amplitude))
        points.append((far_x, base_y))

    return points


def render_sawtooth(
    pixels,
    image_width: int,
    image_height: int,
    cell_size: int,
    max_amplitude: float,
    output_width: float,
) -> PathBundle:
    """Render an RGBA pixel buffer as a hatch sawtooth path.

    Args:
        pixels: RGBA pixel buffer, flat bytes or (height, width, 4) array
        image_width: Image width in pixels
        image_height: Image height in pixels
        cell_size: Cell side length in source pixels (positive integer)
        max_amplitude: Peak height in mm for a fully black cell
        output_width: Drawing width in mm; height follows the aspect ratio

    Returns:
        PathBundle with the continuous path and the output canvas size

    Raises:
        ConfigurationError: On a non-positive cell size or output width, a
            negative amplitude, or a pixel buffer that does not match the
            image dimensions
    """
    SawtoothConfig(
        cell_size=cell_size,
        max_amplitude=max_amplitude,
        output_width=output_width,
    ).validate()
    cell_size = int(cell_size)
    array = as_rgba_array(pixels, image_width, image_height)

    scale = output_width / image_width
    output_height = image_height * scale
    scaled_cell_size = cell_size * scale

    num_rows = math.ceil(image_height / cell_size)
    num_cols = math.ceil(image_width / cell_size)

    # Start at the top-left, on the first row's center line
    path = [(0.0, scaled_cell_size / 2)]

    for row in range(num_rows):
        direction = ScanDirection.for_row(row)
        path.extend(
            _scan_row(
                array,
                image_width,
                image_height,
                row,
                direction,
                num_cols,
                cell_size,
                scaled_cell_size,
                max_amplitude,
                output_width,
            )
        )

        # Step down to the next row on the side this row ended
        if row < num_rows - 1:
            next_base_y = (row + 1.5) * scaled_cell_size
            path.append((direction.exit_x(output_width), next_base_y))

    logger.debug(
        "Rendered %dx%d cells into %d points (%.3f x %.3f mm)",
        num_cols,
        num_rows,
        len(path),
        output_width,
        output_height,
    )
    return PathBundle(points=path, output_width=output_width, output_height=output_height)

