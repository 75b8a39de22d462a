"""Configuration persistence manager for the sawtooth plotter generator.

This module handles loading and saving of generation settings to/from JSON files.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from models import CONFIG_FILE, SawtoothConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Handles loading and saving of generation settings."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file
                (defaults to ~/.sawtooth_plotter_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> SawtoothConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            SawtoothConfig with loaded or default values
        """
        config = SawtoothConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                # Update config with loaded values (fallback to defaults)
                config.cell_size = int(data.get("cell_size", config.cell_size))
                config.max_amplitude = float(
                    data.get("max_amplitude", config.max_amplitude)
                )
                config.output_width = float(data.get("output_width", config.output_width))
                config.feed_rate = float(data.get("feed_rate", config.feed_rate))
                config.stroke_width = float(data.get("stroke_width", config.stroke_width))
                logger.info("Loaded configuration from %s", self.config_path)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            config = SawtoothConfig()

        return config

    def save(self, config: SawtoothConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: SawtoothConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(asdict(config), f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)
