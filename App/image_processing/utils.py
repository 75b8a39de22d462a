"""Utility functions for pixel sampling, formatting and path statistics.

AIDEV-NOTE: This module contains the darkness sampler and the coordinate
formatter shared by the SVG and G-code writers. Both writers MUST format
through format_coord so their coordinates agree exactly.
"""

import math

import numpy as np

from models import ConfigurationError

# Alpha values below this are treated as fully white
ALPHA_THRESHOLD = 128

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def format_coord(value: float) -> str:
    """Format a coordinate with exactly three decimal places."""
    return f"{value:.3f}"


def as_rgba_array(pixels, width: int, height: int) -> np.ndarray:
    """View a pixel buffer as a read-only (height, width, 4) uint8 array.

    Args:
        pixels: Flat RGBA bytes (row-major, 4 bytes per pixel) or any
            array-like of shape (height, width, 4)
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        numpy array of shape (height, width, 4)

    Raises:
        ConfigurationError: If the buffer size does not match the dimensions
    """
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Image must be non-empty, got {width}x{height}")

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        array = np.frombuffer(pixels, dtype=np.uint8)
    else:
        array = np.asarray(pixels, dtype=np.uint8)

    expected = width * height * 4
    if array.size != expected:
        raise ConfigurationError(
            f"Pixel buffer has {array.size} values, expected {expected} "
            f"for a {width}x{height} RGBA image"
        )

    array = array.reshape(height, width, 4)
    array.flags.writeable = False
    return array


def get_grayscale(r: int, g: int, b: int, a: int) -> int:
    """Get grayscale value (0 = black, 255 = white) of one RGBA pixel.

    Transparent pixels (alpha < 128) count as white.
    """
    if a < ALPHA_THRESHOLD:
        return 255
    wr, wg, wb = LUMA_WEIGHTS
    return math.floor(wr * r + wg * g + wb * b + 0.5)


def grayscale_region(region: np.ndarray) -> np.ndarray:
    """Vectorized get_grayscale over an (h, w, 4) block of pixels."""
    rgba = region.astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    gray = np.floor(wr * rgba[..., 0] + wg * rgba[..., 1] + wb * rgba[..., 2] + 0.5)
    return np.where(region[..., 3] < ALPHA_THRESHOLD, 255.0, gray)


def sample_darkness(
    pixels,
    image_width: int,
    image_height: int,
    cell_x: float,
    cell_y: float,
    cell_size: int,
) -> float:
    """Calculate the average darkness of one grid cell.

    Args:
        pixels: RGBA pixel buffer (see as_rgba_array)
        image_width: Image width in pixels
        image_height: Image height in pixels
        cell_x: Cell left edge in pixels
        cell_y: Cell top edge in pixels
        cell_size: Cell side length in pixels

    Returns:
        Darkness from 0 (white or transparent) to 1 (black). Cells lying
        entirely outside the image are white.
    """
    array = as_rgba_array(pixels, image_width, image_height)

    start_x = max(math.floor(cell_x), 0)
    start_y = max(math.floor(cell_y), 0)
    end_x = min(math.floor(cell_x) + cell_size, image_width)
    end_y = min(math.floor(cell_y) + cell_size, image_height)

    if end_x <= start_x or end_y <= start_y:
        return 0.0

    gray = grayscale_region(array[start_y:end_y, start_x:end_x])
    total_gray = float(gray.sum())
    count = gray.size
    return 1 - (total_gray / count / 255)


def calculate_total_length(points: "list[tuple[float, float]]") -> float:
    """Calculate total polyline length in mm."""
    total = 0.0
    for i in range(1, len(points)):
        x1, y1 = points[i - 1]
        x2, y2 = points[i]
        total += math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)
    return total
