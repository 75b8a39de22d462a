"""Data models and constants for the sawtooth plotter generator."""

import numbers
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# AIDEV-NOTE: Defaults mirror the generator form fields - keep in sync
DEFAULT_CELL_SIZE = 5  # source pixels
DEFAULT_MAX_AMPLITUDE = 2.0  # mm
DEFAULT_OUTPUT_WIDTH = 100.0  # mm
DEFAULT_FEED_RATE = 1000.0  # mm/min
DEFAULT_STROKE_WIDTH = 0.3  # mm, SVG preview only

DEFAULT_GCODE_FILE = "drawing.gcode"

# Configuration file path
CONFIG_FILE = Path.home() / ".sawtooth_plotter_config.json"


class ConfigurationError(ValueError):
    """Raised when generation parameters or pixel buffers are invalid."""


class ScanDirection(Enum):
    """Horizontal scan direction of a single row.

    AIDEV-NOTE: Rows alternate direction (boustrophedon) so that each row
    begins on the side where the previous one ended.
    """

    RIGHTWARD = "rightward"
    LEFTWARD = "leftward"

    @classmethod
    def for_row(cls, row: int) -> "ScanDirection":
        return cls.RIGHTWARD if row % 2 == 0 else cls.LEFTWARD

    def column_order(self, num_cols: int) -> range:
        """Column indices in the order this direction visits them."""
        if self is ScanDirection.RIGHTWARD:
            return range(num_cols)
        return range(num_cols - 1, -1, -1)

    def exit_x(self, output_width: float) -> float:
        """X coordinate where a row scanned in this direction ends."""
        return output_width if self is ScanDirection.RIGHTWARD else 0.0


@dataclass
class SawtoothConfig:
    """Generation settings for the hatch sawtooth algorithm."""

    cell_size: int = DEFAULT_CELL_SIZE  # pixels per grid cell side
    max_amplitude: float = DEFAULT_MAX_AMPLITUDE  # mm, peak height at darkness 1
    output_width: float = DEFAULT_OUTPUT_WIDTH  # mm, drawing width
    feed_rate: float = DEFAULT_FEED_RATE  # mm/min while drawing
    stroke_width: float = DEFAULT_STROKE_WIDTH  # mm, SVG preview stroke

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is out of range."""
        if isinstance(self.cell_size, bool) or not isinstance(
            self.cell_size, numbers.Integral
        ):
            raise ConfigurationError(
                f"cell_size must be an integer, got {self.cell_size!r}"
            )
        if self.cell_size <= 0:
            raise ConfigurationError(f"cell_size must be positive, got {self.cell_size}")
        if self.max_amplitude < 0:
            raise ConfigurationError(
                f"max_amplitude must be non-negative, got {self.max_amplitude}"
            )
        if self.output_width <= 0:
            raise ConfigurationError(
                f"output_width must be positive, got {self.output_width}"
            )
        if self.feed_rate <= 0:
            raise ConfigurationError(f"feed_rate must be positive, got {self.feed_rate}")
        if self.stroke_width <= 0:
            raise ConfigurationError(
                f"stroke_width must be positive, got {self.stroke_width}"
            )


# --- Path Models ---


@dataclass(frozen=True)
class PathBundle:
    """A continuous toolpath plus the canvas it was generated for.

    AIDEV-NOTE: Points are in output (mm) coordinates, origin top-left,
    +Y down. Consecutive points are joined by straight segments; the pen
    never lifts between the first and the last point.
    """

    points: "list[tuple[float, float]]"
    output_width: float
    output_height: float

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class ProcessedImage:
    """Result of the image-to-toolpath pipeline."""

    bundle: PathBundle
    svg: str
    gcode: str

    # Original image dimensions (pixels)
    original_width: int = 0
    original_height: int = 0

    # Statistics
    point_count: int = 0
    total_path_length: float = 0.0  # mm
    estimated_seconds: float = 0.0

    config: SawtoothConfig = field(default_factory=SawtoothConfig)
