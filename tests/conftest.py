"""Shared fixtures: synthetic RGBA pixel buffers and image files."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def solid_rgba(width: int, height: int, rgba: tuple[int, int, int, int]) -> np.ndarray:
    """A (height, width, 4) buffer filled with one RGBA value."""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[...] = rgba
    return pixels


def split_rows(
    points: list[tuple[float, float]], num_rows: int, num_cols: int,
) -> list[list[tuple[float, float]]]:
    """Split a sawtooth path into per-row peak/valley points.

    Drops the start point and the row-to-row transition points.
    """
    rows = []
    i = 1
    for row in range(num_rows):
        rows.append(points[i:i + 2 * num_cols])
        i += 2 * num_cols
        if row < num_rows - 1:
            i += 1  # transition
    assert i == len(points)
    return rows


@pytest.fixture()
def black_20() -> np.ndarray:
    return solid_rgba(20, 20, BLACK)


@pytest.fixture()
def white_20() -> np.ndarray:
    return solid_rgba(20, 20, WHITE)


@pytest.fixture()
def gray_20() -> np.ndarray:
    return solid_rgba(20, 20, (128, 128, 128, 255))


@pytest.fixture()
def black_png(tmp_path):
    """A 20x20 opaque black PNG on disk."""
    path = tmp_path / "black.png"
    Image.new("RGBA", (20, 20), BLACK).save(path)
    return path
