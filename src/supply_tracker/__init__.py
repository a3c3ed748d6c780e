"""Supply Tracker - Emergency supply adequacy for a household."""

from .alerts import count_alerts, generate_alerts
from .catalog import RECOMMENDED_ITEMS, STANDARD_CATEGORIES, get_template
from .category_scorer import overall_preparedness, score_all_categories, score_category
from .config import ConfigManager
from .item_status import classify_item_status, status_from_percentage, status_from_score
from .models import (
    DEFAULT_OPTIONS,
    Alert,
    AlertCounts,
    AlertKind,
    AlertSeverity,
    CalculationOptions,
    CategoryShortage,
    CategoryStatusSummary,
    CustomItemType,
    HouseholdConfig,
    InventoryItem,
    ItemStatus,
    PreparednessOverview,
    RecommendedItemTemplate,
    TemplateItemType,
    Unit,
)
from .output_formatter import OutputFormatter
from .quantity_calculator import calculate_recommended_quantity
from .shortage import missing_for_group, missing_for_item
from .snapshot import Snapshot, SnapshotError, SnapshotStore

__version__ = "0.1.0"

__all__ = [
    "Alert",
    "AlertCounts",
    "AlertKind",
    "AlertSeverity",
    "count_alerts",
    "calculate_recommended_quantity",
    "CalculationOptions",
    "CategoryShortage",
    "CategoryStatusSummary",
    "classify_item_status",
    "ConfigManager",
    "CustomItemType",
    "DEFAULT_OPTIONS",
    "generate_alerts",
    "get_template",
    "HouseholdConfig",
    "InventoryItem",
    "ItemStatus",
    "missing_for_group",
    "missing_for_item",
    "OutputFormatter",
    "overall_preparedness",
    "PreparednessOverview",
    "RECOMMENDED_ITEMS",
    "RecommendedItemTemplate",
    "score_all_categories",
    "score_category",
    "Snapshot",
    "SnapshotError",
    "SnapshotStore",
    "STANDARD_CATEGORIES",
    "status_from_percentage",
    "status_from_score",
    "TemplateItemType",
    "Unit",
]
