"""Configuration management for Supply Tracker."""

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import CalculationOptions

logger = logging.getLogger(__name__)


@dataclass
class DataConfig:
    """Data storage configuration."""

    storage_dir: Path


@dataclass
class CalculationConfig:
    """Overrides for calculation thresholds and multipliers.

    Unset values fall back to the ``CalculationOptions`` defaults.
    """

    children_multiplier: float | None = None
    adult_multiplier: float | None = None
    pet_multiplier: float | None = None
    expiring_soon_days: int | None = None
    low_quantity_warning_ratio: float | None = None
    critical_percentage_threshold: float | None = None
    warning_percentage_threshold: float | None = None
    ok_score_threshold: float | None = None
    warning_score_threshold: float | None = None
    daily_calories_per_person: float | None = None
    daily_water_per_person: float | None = None
    expiring_soon_alert_days: int | None = None
    critically_low_stock_percentage: float | None = None
    low_stock_percentage: float | None = None

    def overrides(self) -> dict[str, Any]:
        """Values that were actually set."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass
class DisplayConfig:
    """Display configuration."""

    language: str = "en"


@dataclass
class Config:
    """Complete application configuration."""

    data: DataConfig
    calculation: CalculationConfig = field(default_factory=CalculationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


class ConfigError(Exception):
    """Raised when the configuration holds invalid values."""


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def data(self) -> DataConfig:
        """Get data configuration."""
        return self._config.data

    @property
    def calculation(self) -> CalculationConfig:
        """Get calculation overrides."""
        return self._config.calculation

    @property
    def display(self) -> DisplayConfig:
        """Get display configuration."""
        return self._config.display

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "config.toml",
            Path.home() / ".config" / "supply-tracker" / "config.toml",
            Path.home() / ".supply-tracker" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        return Path.home() / ".config" / "supply-tracker" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            logger.debug("No config file at %s, using defaults", self.config_path)
            return self._default_config()

        logger.debug("Loading config from %s", self.config_path)
        with open(self.config_path, "rb") as f:
            data = tomllib.load(f)

        known = {f.name for f in fields(CalculationConfig)}
        calculation = data.get("calculation", {})
        unknown = sorted(set(calculation) - known)
        if unknown:
            logger.warning("Ignoring unknown calculation settings: %s", ", ".join(unknown))

        return Config(
            data=DataConfig(
                storage_dir=Path(
                    data.get("data", {}).get("storage_dir", "~/supply-tracker/data")
                ).expanduser(),
            ),
            calculation=CalculationConfig(
                **{key: value for key, value in calculation.items() if key in known}
            ),
            display=DisplayConfig(
                language=data.get("display", {}).get("language", "en"),
            ),
        )

    def _default_config(self) -> Config:
        """Return default configuration."""
        return Config(data=DataConfig(storage_dir=Path.home() / "supply-tracker" / "data"))

    def calculation_options(self) -> CalculationOptions:
        """Build calculation options from the configured overrides.

        Raises:
            ConfigError: If an override is out of range
        """
        try:
            return CalculationOptions(**self.calculation.overrides())
        except ValidationError as e:
            raise ConfigError(f"Invalid [calculation] settings in {self.config_path}: {e}") from e

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path.

        Args:
            key_path: Dot-separated path like 'data.storage_dir'
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value: Any = self._config

        for key in keys:
            if hasattr(value, key):
                value = getattr(value, key)
            elif isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default
