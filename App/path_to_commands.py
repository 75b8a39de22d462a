"""Convert sawtooth toolpaths to plotter G-code.

AIDEV-NOTE: This module generates the G-code consumed by a 2-axis pen
plotter with a binary pen-lift actuator. The whole drawing is bracketed
by exactly one pen-down (M3) and one pen-up (M5); coordinates use the
same three-decimal formatting as the SVG preview.
"""

import logging
import math
import re
from datetime import datetime, timezone

from image_processing.utils import format_coord
from models import DEFAULT_FEED_RATE, ConfigurationError, PathBundle, SawtoothConfig

logger = logging.getLogger(__name__)

PEN_DOWN = "M3 ; Pen down"
PEN_UP = "M5 ; Pen up"

# Matches the positioned moves: "G0 X1.000 Y2.000" / "G1 X1.000 Y2.000"
_MOVE_RE = re.compile(r"^G([01])\s+X([-\d.]+)\s+Y([-\d.]+)")

# Coordinates are rounded to 3 decimals, so allow that much slack
BOUNDS_TOLERANCE = 1e-3


def _format_feed(feed_rate: float) -> str:
    """Whole feed rates print without a decimal point (1000, not 1000.0)."""
    if float(feed_rate).is_integer():
        return str(int(feed_rate))
    return str(feed_rate)


def _format_timestamp(generated_at: datetime) -> str:
    """ISO-8601 UTC with milliseconds, e.g. 2024-01-01T12:00:00.000Z."""
    if generated_at.tzinfo is not None:
        generated_at = generated_at.astimezone(timezone.utc)
    return generated_at.strftime("%Y-%m-%dT%H:%M:%S.") + (
        f"{generated_at.microsecond // 1000:03d}Z"
    )


def generate_gcode(
    bundle: PathBundle,
    feed_rate: float = DEFAULT_FEED_RATE,
    generated_at: "datetime | None" = None,
) -> str:
    """Convert a continuous path to a G-code program.

    Args:
        bundle: PathBundle with points in mm
        feed_rate: Drawing feed rate in mm/min
        generated_at: Timestamp for the header comment (defaults to now)

    Returns:
        G-code program text, or "" when the path has fewer than 2 points

    Raises:
        ConfigurationError: If feed_rate is not positive
    """
    points = bundle.points
    if len(points) < 2:
        return ""
    if feed_rate <= 0:
        raise ConfigurationError(f"feed_rate must be positive, got {feed_rate}")

    generated_at = generated_at or datetime.now(timezone.utc)
    x0, y0 = points[0]

    gcode = [
        # Header
        "; G-Code generated by Pen Plotter G-Code Generator",
        "; Hatch Sawtooth Algorithm - Continuous path (no pen lifts)",
        f"; Generated: {_format_timestamp(generated_at)}",
        "",
        "G21 ; Set units to millimeters",
        "G90 ; Absolute positioning",
        "G17 ; XY plane selection",
        "",
        # Move to start position (pen up)
        "; Move to start position",
        PEN_UP,
        f"G0 X{format_coord(x0)} Y{format_coord(y0)}",
        "",
        # Lower pen once and draw
        "; Begin drawing",
        PEN_DOWN,
        f"G1 F{_format_feed(feed_rate)}",
        "",
    ]

    # Draw path (no pen lifts)
    gcode.extend(f"G1 X{format_coord(x)} Y{format_coord(y)}" for x, y in points[1:])

    # Footer
    gcode.extend(
        [
            "",
            "; End of drawing",
            PEN_UP,
            "G0 X0 Y0 ; Return to origin",
            "M2 ; End program",
        ]
    )

    return "\n".join(gcode)


class PathToGCodeConverter:
    """Converts PathBundle objects to G-code and checks the result."""

    def __init__(self, config: "SawtoothConfig | None" = None):
        self.config = config or SawtoothConfig()

    def path_to_gcode(
        self,
        bundle: PathBundle,
        feed_rate: "float | None" = None,
        generated_at: "datetime | None" = None,
    ) -> str:
        """Convert a path using the configured feed rate unless overridden."""
        return generate_gcode(
            bundle,
            feed_rate=feed_rate if feed_rate is not None else self.config.feed_rate,
            generated_at=generated_at,
        )

    def extract_toolpath(self, gcode: str) -> "list[tuple[float, float]]":
        """Extract the drawn toolpath from a G-code program.

        Args:
            gcode: Program text from path_to_gcode

        Returns:
            List of (x, y) points: the rapid to the start position followed
            by every linear draw move

        AIDEV-NOTE: Moves after the closing pen-up (return to origin) are
        travel, not drawing, and are excluded.
        """
        points = []
        pen_down_seen = False

        for line in gcode.splitlines():
            line = line.strip()
            if line == PEN_DOWN:
                pen_down_seen = True
                continue
            if line == PEN_UP and pen_down_seen:
                break

            match = _MOVE_RE.match(line)
            if match:
                points.append((float(match.group(2)), float(match.group(3))))

        return points

    def estimate_execution_time(
        self,
        gcode: str,
        feed_rate: "float | None" = None,
    ) -> float:
        """Estimate drawing time in seconds.

        Args:
            gcode: Program text
            feed_rate: Feed rate in mm/min (uses config default if None)

        Returns:
            Estimated time in seconds

        AIDEV-NOTE: Simple estimation based on drawn distance.
        Does not account for acceleration/deceleration or rapids.
        """
        feed = feed_rate if feed_rate is not None else self.config.feed_rate
        if feed <= 0:
            return 0.0

        return self._calculate_total_distance(gcode) / feed * 60.0

    def _calculate_total_distance(self, gcode: str) -> float:
        """Calculate total drawn distance from a program."""
        total = 0.0
        points = self.extract_toolpath(gcode)
        for (x1, y1), (x2, y2) in zip(points, points[1:]):
            total += math.hypot(x2 - x1, y2 - y1)
        return total

    def validate_commands(
        self, gcode: str, bundle: PathBundle
    ) -> "tuple[bool, list[str]]":
        """Validate a program against the canvas and the pen-lift rules.

        Args:
            gcode: Program text
            bundle: PathBundle the program was generated from

        Returns:
            Tuple of (all_valid, error_messages)

        AIDEV-NOTE: Critical plot check - every drawn coordinate must be on
        the canvas and the pen must go down exactly once.
        """
        errors = []
        max_x = bundle.output_width + BOUNDS_TOLERANCE
        max_y = bundle.output_height + BOUNDS_TOLERANCE

        for i, (x, y) in enumerate(self.extract_toolpath(gcode)):
            if x < -BOUNDS_TOLERANCE or x > max_x:
                errors.append(
                    f"Point {i}: X={x:.3f} out of bounds (0.000 to {bundle.output_width:.3f})"
                )
            if y < -BOUNDS_TOLERANCE or y > max_y:
                errors.append(
                    f"Point {i}: Y={y:.3f} out of bounds (0.000 to {bundle.output_height:.3f})"
                )

        lines = [line.strip() for line in gcode.splitlines()]
        pen_downs = [i for i, line in enumerate(lines) if line == PEN_DOWN]
        if len(pen_downs) != 1:
            errors.append(f"Expected exactly one pen down, found {len(pen_downs)}")
        else:
            pen_ups_after = [
                i for i, line in enumerate(lines) if line == PEN_UP and i > pen_downs[0]
            ]
            if len(pen_ups_after) != 1:
                errors.append(
                    f"Expected one pen up after drawing, found {len(pen_ups_after)}"
                )

        if errors:
            logger.warning("G-code validation failed with %d errors", len(errors))

        return len(errors) == 0, errors
