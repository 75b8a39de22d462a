"""Main image processor orchestrating the complete pipeline.

AIDEV-NOTE: This module runs the whole chain for one image file:
decode -> RGBA pixel buffer -> sawtooth path -> SVG preview + G-code.
Nothing is cached between calls.
"""

import logging
from datetime import datetime
from pathlib import Path

import numpy as np
from PIL import Image

from models import PathBundle, ProcessedImage, SawtoothConfig

from .rendering import render_sawtooth
from .svg_parser import path_to_svg
from .utils import calculate_total_length

logger = logging.getLogger(__name__)


class ImageProcessor:
    """Processes images into continuous plotter toolpaths."""

    def __init__(self, config: "SawtoothConfig | None" = None):
        from path_to_commands import PathToGCodeConverter

        self.config = config or SawtoothConfig()
        self.converter = PathToGCodeConverter(self.config)

    def load_image(self, file_path: "str | Path") -> Image.Image:
        """Load and validate an image file.

        Args:
            file_path: Path to image file (PNG, JPG, etc.)

        Returns:
            PIL Image in RGBA mode

        Raises:
            ValueError: If file cannot be loaded or is invalid
        """
        try:
            image = Image.open(file_path)
            image.load()
            # AIDEV-NOTE: Always convert to RGBA so transparency is sampled
            if image.mode != "RGBA":
                image = image.convert("RGBA")
            return image
        except (OSError, Image.DecompressionBombError) as e:
            raise ValueError(f"Failed to load image: {e}") from e

    def pixel_buffer(self, image: Image.Image) -> np.ndarray:
        """Get the (height, width, 4) RGBA array of an image."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return np.asarray(image, dtype=np.uint8)

    def generate_path(self, image: Image.Image) -> PathBundle:
        """Render an already loaded image with the configured settings."""
        width, height = image.size
        return render_sawtooth(
            self.pixel_buffer(image),
            width,
            height,
            self.config.cell_size,
            self.config.max_amplitude,
            self.config.output_width,
        )

    def process_image(
        self,
        image: Image.Image,
        generated_at: "datetime | None" = None,
    ) -> ProcessedImage:
        """Execute the pipeline on an already loaded image."""
        self.config.validate()
        orig_width, orig_height = image.size

        logger.info(
            "Rendering hatch sawtooth (cell=%dpx, amplitude=%.3fmm, width=%.3fmm)...",
            self.config.cell_size,
            self.config.max_amplitude,
            self.config.output_width,
        )
        bundle = self.generate_path(image)

        svg_content = path_to_svg(bundle, stroke_width=self.config.stroke_width)
        gcode = self.converter.path_to_gcode(bundle, generated_at=generated_at)

        point_count = len(bundle)
        total_length = calculate_total_length(bundle.points)
        estimated_seconds = self.converter.estimate_execution_time(gcode)

        logger.info(
            "Generated %d points on a %.3f x %.3f mm canvas",
            point_count,
            bundle.output_width,
            bundle.output_height,
        )
        logger.info("Total path length: %.2f mm", total_length)
        logger.info("Estimated plot time: %.1f s", estimated_seconds)

        return ProcessedImage(
            bundle=bundle,
            svg=svg_content,
            gcode=gcode,
            original_width=orig_width,
            original_height=orig_height,
            point_count=point_count,
            total_path_length=total_length,
            estimated_seconds=estimated_seconds,
            config=self.config,
        )

    def process(
        self,
        file_path: "str | Path",
        generated_at: "datetime | None" = None,
    ) -> ProcessedImage:
        """Execute complete image processing pipeline.

        Args:
            file_path: Path to input image
            generated_at: Timestamp for the G-code header (defaults to now)

        Returns:
            ProcessedImage with the path, both documents and statistics

        Raises:
            ValueError: If the image cannot be decoded
            ConfigurationError: If the settings are invalid
        """
        logger.info("Loading image %s...", file_path)
        image = self.load_image(file_path)
        logger.info("Loaded image with size: %dx%d pixels.", *image.size)
        return self.process_image(image, generated_at=generated_at)
