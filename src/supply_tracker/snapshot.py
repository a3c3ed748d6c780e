"""Read-only access to a household's supply data.

A data directory holds:

- ``household.json``: the household configuration (required)
- ``inventory.json``: a list of inventory items
- ``settings.json``: ``disabled_template_ids`` and ``disabled_category_ids``
- ``templates.json``: optional custom kit replacing the built-in catalog
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .catalog import RECOMMENDED_ITEMS
from .models import HouseholdConfig, InventoryItem, RecommendedItemTemplate

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a snapshot file is missing, unreadable or invalid."""


class SupplySettings(BaseModel):
    """User choices that switch recommendations off."""

    model_config = ConfigDict(frozen=True)

    disabled_template_ids: frozenset[str] = frozenset()
    disabled_category_ids: frozenset[str] = frozenset()


class Snapshot(BaseModel):
    """Everything the calculations need, loaded at one point in time."""

    model_config = ConfigDict(frozen=True)

    household: HouseholdConfig
    items: tuple[InventoryItem, ...] = ()
    templates: tuple[RecommendedItemTemplate, ...] = RECOMMENDED_ITEMS
    settings: SupplySettings = Field(default_factory=SupplySettings)


class SnapshotStore:
    """Loads supply data from JSON files in a data directory."""

    def __init__(self, data_dir: Path | None = None):
        """Initialize snapshot store.

        Args:
            data_dir: Directory holding the JSON files. Defaults to ./data
        """
        self.data_dir = data_dir or Path.cwd() / "data"

    def _household_path(self) -> Path:
        return self.data_dir / "household.json"

    def _inventory_path(self) -> Path:
        return self.data_dir / "inventory.json"

    def _settings_path(self) -> Path:
        return self.data_dir / "settings.json"

    def _templates_path(self) -> Path:
        return self.data_dir / "templates.json"

    def _read_json(self, path: Path) -> Any:
        logger.debug("Reading %s", path)
        try:
            with open(path) as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"{path.name} is not valid JSON: {e}") from e
        except OSError as e:
            raise SnapshotError(f"Cannot read {path}: {e}") from e

    def load_household(self) -> HouseholdConfig:
        """Load the household configuration.

        Raises:
            SnapshotError: If the file is missing or invalid
        """
        path = self._household_path()
        if not path.exists():
            raise SnapshotError(f"No household configuration found at {path}")

        try:
            return HouseholdConfig.model_validate(self._read_json(path))
        except ValidationError as e:
            raise SnapshotError(f"Invalid household configuration: {e}") from e

    def load_inventory(self) -> list[InventoryItem]:
        """Load inventory items.

        Returns:
            List of InventoryItem, empty when there is no inventory file
        """
        path = self._inventory_path()
        if not path.exists():
            logger.debug("No inventory at %s", path)
            return []

        data = self._read_json(path)
        if not isinstance(data, list):
            raise SnapshotError(f"{path.name} must contain a list of items")

        try:
            return [InventoryItem.model_validate(item) for item in data]
        except ValidationError as e:
            raise SnapshotError(f"Invalid inventory item: {e}") from e

    def load_settings(self) -> SupplySettings:
        """Load recommendation settings, defaulting to nothing disabled."""
        path = self._settings_path()
        if not path.exists():
            return SupplySettings()

        try:
            return SupplySettings.model_validate(self._read_json(path))
        except ValidationError as e:
            raise SnapshotError(f"Invalid settings: {e}") from e

    def load_templates(self) -> tuple[RecommendedItemTemplate, ...]:
        """Load a custom recommendation kit, or the built-in catalog."""
        path = self._templates_path()
        if not path.exists():
            return RECOMMENDED_ITEMS

        data = self._read_json(path)
        if not isinstance(data, list):
            raise SnapshotError(f"{path.name} must contain a list of templates")

        try:
            templates = tuple(RecommendedItemTemplate.model_validate(t) for t in data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid recommended item template: {e}") from e

        logger.info("Using %d custom templates from %s", len(templates), path)
        return templates

    def load(self) -> Snapshot:
        """Load every file into a single snapshot."""
        return Snapshot(
            household=self.load_household(),
            items=tuple(self.load_inventory()),
            templates=self.load_templates(),
            settings=self.load_settings(),
        )
