"""
Configuration manager for the orientation fusion engine.
"""

import copy
import json
import logging
import os
from typing import Dict, Any, Optional

from .math.constants import (
    FILTER_COEFFICIENT, FREQUENCY_HIGH, FUSER_INITIAL_DELAY_MS, FUSER_RATES,
    GYRO_EPSILON, MIN_FIELD_NORM, PITCH_HYSTERESIS_DEG,
)

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for the orientation fusion engine."""

    DEFAULT_CONFIG = {
        # Sensor capabilities
        "has_gyroscope": True,

        # Complementary fuser
        "fuser": {
            "period_ms": FREQUENCY_HIGH,
            "initial_delay_ms": FUSER_INITIAL_DELAY_MS,
            "filter_coefficient": FILTER_COEFFICIENT
        },

        # Gyroscope integration
        "gyroscope": {
            "epsilon": GYRO_EPSILON
        },

        # Tilt-compass estimation
        "tilt_compass": {
            "min_field_norm": MIN_FIELD_NORM
        },

        # Published angles
        "publisher": {
            "pitch_hysteresis_deg": PITCH_HYSTERESIS_DEG
        },

        # Logging
        "log_level": "INFO"
    }

    def __init__(self, config_file: Optional[str] = None, **overrides):
        """
        Initialize configuration.

        Args:
            config_file: Optional path to a JSON configuration file
            **overrides: Dotted keys with '__' separators, e.g.
                ``fuser__period_ms=100``
        """
        self.config_file = config_file
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file is not None:
            if os.path.exists(config_file):
                self.load_config()
            else:
                logger.info("Config file %s not found, using defaults", config_file)

        for key, value in overrides.items():
            self.set(key.replace("__", "."), value)

    def load_config(self) -> bool:
        """
        Load configuration from file.

        Returns:
            True if loaded successfully
        """
        try:
            with open(self.config_file, 'r') as f:
                file_config = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load config %s: %s", self.config_file, e)
            return False

        if not isinstance(file_config, dict):
            logger.warning("Ignoring config %s: top level is not an object", self.config_file)
            return False

        # File config overrides defaults
        self._merge_config(self.config, file_config)
        logger.info("Configuration loaded from %s", self.config_file)
        return True

    def save_config(self, config_file: Optional[str] = None) -> bool:
        """
        Save current configuration to file.

        Returns:
            True if saved successfully
        """
        path = config_file or self.config_file
        if path is None:
            raise ValueError("no config file path given")
        try:
            with open(path, 'w') as f:
                json.dump(self.config, f, indent=2)
        except OSError as e:
            logger.warning("Failed to save config %s: %s", path, e)
            return False

        logger.info("Configuration saved to %s", path)
        return True

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default=None):
        """Get configuration value with optional default."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set configuration value."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def set_fuser_rate(self, rate: str):
        """Set the fuser period from a named rate: high, mid or low."""
        try:
            period_ms = FUSER_RATES[rate]
        except KeyError:
            raise ValueError(
                f"unknown fuser rate {rate!r}, expected one of {sorted(FUSER_RATES)}") from None
        self.set("fuser.period_ms", period_ms)

    # Property accessors for common configuration values
    @property
    def has_gyroscope(self) -> bool:
        return bool(self.config["has_gyroscope"])

    @property
    def fuser_period_ms(self) -> float:
        return self.config["fuser"]["period_ms"]

    @property
    def fuser_initial_delay_ms(self) -> float:
        return self.config["fuser"]["initial_delay_ms"]

    @property
    def filter_coefficient(self) -> float:
        return self.config["fuser"]["filter_coefficient"]

    @property
    def gyro_epsilon(self) -> float:
        return self.config["gyroscope"]["epsilon"]

    @property
    def min_field_norm(self) -> float:
        return self.config["tilt_compass"]["min_field_norm"]

    @property
    def pitch_hysteresis_deg(self) -> int:
        return self.config["publisher"]["pitch_hysteresis_deg"]

    @property
    def log_level(self) -> str:
        return self.config["log_level"]


def setup_logging(level="INFO"):
    """Configure root logging for scripts using the engine."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
