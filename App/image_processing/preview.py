"""Raster preview of a toolpath.

AIDEV-NOTE: Draws the polyline black on white, the way a canvas preview
strokes it. Useful for checking that dark image regions receive more ink.
"""

from PIL import Image, ImageDraw

from models import PathBundle


def rasterize_path(
    bundle: PathBundle,
    pixels_per_unit: float = 4.0,
    line_width: int = 1,
) -> Image.Image:
    """Render a toolpath to a grayscale image.

    Args:
        bundle: PathBundle with points in mm
        pixels_per_unit: Raster resolution in pixels per mm
        line_width: Stroke width in pixels

    Returns:
        PIL Image in "L" mode, white background, black stroke. Paths with
        fewer than 2 points give a blank canvas.
    """
    width = max(1, round(bundle.output_width * pixels_per_unit))
    height = max(1, round(bundle.output_height * pixels_per_unit))
    image = Image.new("L", (width, height), 255)

    if len(bundle.points) < 2:
        return image

    scaled = [(x * pixels_per_unit, y * pixels_per_unit) for x, y in bundle.points]
    ImageDraw.Draw(image).line(scaled, fill=0, width=line_width)
    return image
