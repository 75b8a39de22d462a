"""Image processing pipeline for image-to-toolpath conversion.

AIDEV-NOTE: This package handles the complete pipeline from raster image
to a single continuous plotter path. Organized into modular components:
- processor: Main ImageProcessor orchestrator
- rendering: Hatch sawtooth path generation
- svg_parser: SVG preview writing and reading
- preview: Raster rendering of generated paths
- utils: Darkness sampling, coordinate formatting, path statistics
"""

from .preview import rasterize_path
from .processor import ImageProcessor
from .rendering import render_sawtooth
from .svg_parser import extract_path_points, path_to_svg
from .utils import format_coord, get_grayscale, sample_darkness

__all__ = [
    "ImageProcessor",
    "extract_path_points",
    "format_coord",
    "get_grayscale",
    "path_to_svg",
    "rasterize_path",
    "render_sawtooth",
    "sample_darkness",
]
