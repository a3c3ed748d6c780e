"""Shared test fixtures for Supply Tracker."""

import json
from datetime import date

import pytest

from supply_tracker.catalog import RECOMMENDED_ITEMS
from supply_tracker.models import HouseholdConfig, InventoryItem, RecommendedItemTemplate, Unit
from supply_tracker.snapshot import SnapshotStore

AS_OF = date(2026, 1, 15)


@pytest.fixture
def as_of():
    """Fixed evaluation date for expiration math."""
    return AS_OF


@pytest.fixture
def household():
    """Two adults, one child, one week, no freezer, no pets."""
    return HouseholdConfig(adults=2, children=1, pets=0, supply_duration_days=7, use_freezer=False)


@pytest.fixture
def single_adult():
    """One adult for three days."""
    return HouseholdConfig(adults=1, children=0, pets=0, supply_duration_days=3)


@pytest.fixture
def templates():
    """The built-in recommendation kit."""
    return RECOMMENDED_ITEMS


@pytest.fixture
def people_days_template():
    """Template scaled by people and days."""
    return RecommendedItemTemplate(
        id="test-item",
        category="food",
        base_quantity=3,
        unit=Unit.PIECES,
        scale_with_people=True,
        scale_with_days=True,
    )


@pytest.fixture
def make_item():
    """Factory for inventory items with sensible defaults."""

    def _make(**kwargs) -> InventoryItem:
        kwargs.setdefault("name", "Item")
        kwargs.setdefault("category_id", "tools-supplies")
        kwargs.setdefault("quantity", 1)
        return InventoryItem(**kwargs)

    return _make


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary data directory."""
    data_dir = tmp_path / "test_data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def snapshot_dir(temp_data_dir):
    """Data directory holding a small household snapshot."""
    (temp_data_dir / "household.json").write_text(
        json.dumps(
            {"adults": 1, "children": 0, "pets": 0, "supply_duration_days": 3, "use_freezer": False}
        )
    )
    (temp_data_dir / "inventory.json").write_text(
        json.dumps(
            [
                {
                    "name": "Rope",
                    "category_id": "tools-supplies",
                    "item_type": "rope",
                    "quantity": 4,
                    "unit": "meters",
                    "never_expires": True,
                },
                {
                    "name": "Bottled water",
                    "category_id": "water-beverages",
                    "item_type": "bottled-water",
                    "quantity": 9,
                    "unit": "liters",
                    "expiration_date": "2027-01-01",
                },
                {
                    "name": "Old batteries",
                    "category_id": "light-power",
                    "item_type": "batteries",
                    "quantity": 8,
                    "expiration_date": "2025-12-01",
                },
            ]
        )
    )
    (temp_data_dir / "settings.json").write_text(
        json.dumps({"disabled_template_ids": ["long-life-juice"], "disabled_category_ids": ["pets"]})
    )
    return temp_data_dir


@pytest.fixture
def snapshot_store(snapshot_dir):
    """SnapshotStore over the sample snapshot."""
    return SnapshotStore(data_dir=snapshot_dir)
