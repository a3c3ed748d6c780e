"""Core data models for Supply Tracker."""

from datetime import date
from enum import Enum
from typing import Annotated, Any, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

CUSTOM_ITEM_TYPE = "custom"


class ItemStatus(str, Enum):
    """Sufficiency verdict for an item or a category."""

    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class Unit(str, Enum):
    """Units a supply can be measured in."""

    PIECES = "pieces"
    LITERS = "liters"
    KILOGRAMS = "kilograms"
    GRAMS = "grams"
    CANS = "cans"
    BOTTLES = "bottles"
    PACKAGES = "packages"
    JARS = "jars"
    CANISTERS = "canisters"
    BOXES = "boxes"
    DAYS = "days"
    ROLLS = "rolls"
    TUBES = "tubes"
    METERS = "meters"
    PAIRS = "pairs"
    EUROS = "euros"
    SETS = "sets"


class HouseholdConfig(BaseModel):
    """Who the supplies are for and how long they have to last."""

    model_config = ConfigDict(frozen=True)

    adults: int = Field(default=2, ge=0)
    children: int = Field(default=0, ge=0)
    pets: int = Field(default=0, ge=0)
    supply_duration_days: int = Field(default=3, gt=0)
    use_freezer: bool = False


class RecommendedItemTemplate(BaseModel):
    """A catalog definition of a recommended supply item."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    category: str
    base_quantity: float = Field(gt=0)
    unit: Unit
    scale_with_people: bool = False
    scale_with_days: bool = False
    scale_with_pets: bool = False
    requires_freezer: bool = False
    default_expiration_months: int | None = Field(default=None, gt=0)
    i18n_key: str | None = None
    calories_per_unit: float | None = Field(default=None, ge=0)
    weight_grams_per_unit: float | None = Field(default=None, gt=0)
    calories_per_100g: float | None = Field(default=None, ge=0)
    requires_water_liters: float | None = Field(default=None, gt=0)


class TemplateItemType(BaseModel):
    """Item created from (or named after) a recommended template."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["template"] = "template"
    template_id: str


class CustomItemType(BaseModel):
    """Item the user created without a template."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"


ItemType = Annotated[TemplateItemType | CustomItemType, Field(discriminator="kind")]


def item_type_from_string(value: str) -> TemplateItemType | CustomItemType:
    """Map the flat ``item_type`` string form onto the tagged item type."""
    if not value or value == CUSTOM_ITEM_TYPE:
        return CustomItemType()
    return TemplateItemType(template_id=value)


class InventoryItem(BaseModel):
    """An item the household owns."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: UUID = Field(default_factory=uuid4)
    name: str = ""
    category_id: str
    item_type: ItemType = Field(default_factory=CustomItemType)
    quantity: float = Field(default=0.0, ge=0)
    unit: Unit = Unit.PIECES
    expiration_date: date | None = None
    never_expires: bool = False
    marked_as_enough: bool = False
    product_template_id: str | None = None
    calories_per_unit: float | None = Field(default=None, ge=0)
    weight_grams: float | None = Field(default=None, gt=0)
    requires_water_liters: float | None = Field(default=None, gt=0)

    @field_validator("item_type", mode="before")
    @classmethod
    def coerce_item_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return item_type_from_string(v).model_dump()
        return v

    @property
    def is_custom(self) -> bool:
        return isinstance(self.item_type, CustomItemType)

    @property
    def template_type_id(self) -> str | None:
        """Template id carried by the item type, if any."""
        if isinstance(self.item_type, TemplateItemType):
            return self.item_type.template_id
        return None


class CalculationOptions(BaseModel):
    """Thresholds and multipliers used by every calculation."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    children_multiplier: float = Field(default=0.75, ge=0)
    adult_multiplier: float = Field(default=1.0, ge=0)
    pet_multiplier: float = Field(default=1.0, ge=0)
    expiring_soon_days: int = Field(default=30, ge=0)
    low_quantity_warning_ratio: float = Field(default=0.5, ge=0)
    critical_percentage_threshold: float = Field(default=30, ge=0, le=100)
    warning_percentage_threshold: float = Field(default=70, ge=0, le=100)
    ok_score_threshold: float = Field(default=80, ge=0, le=100)
    warning_score_threshold: float = Field(default=50, ge=0, le=100)
    daily_calories_per_person: float = Field(default=2000, ge=0)
    daily_water_per_person: float = Field(default=3, ge=0)
    expiring_soon_alert_days: int = Field(default=30, ge=0)
    critically_low_stock_percentage: float = Field(default=25, ge=0, le=100)
    low_stock_percentage: float = Field(default=50, ge=0, le=100)


DEFAULT_OPTIONS = CalculationOptions()


class CategoryShortage(BaseModel):
    """A template that is short within a category."""

    template_id: str
    missing: float
    actual: float = 0.0
    needed: float = 0.0
    unit: Unit | None = None


class CategoryStatusSummary(BaseModel):
    """Preparedness of one category."""

    category_id: str
    status: ItemStatus
    completion_percentage: float = Field(ge=0, le=100)
    total_actual: float = 0.0
    total_needed: float = 0.0
    shortages: list[CategoryShortage] = Field(default_factory=list)
    item_count: int = 0
    critical_count: int = 0
    warning_count: int = 0
    ok_count: int = 0
    fulfilled_item_types: int = 0
    total_item_types: int = 0
    primary_unit: Unit | None = None
    has_recommendations: bool = False
    # Food category only
    total_actual_calories: float | None = None
    total_needed_calories: float | None = None
    missing_calories: float | None = None
    # Water category only
    drinking_water_needed: float | None = None
    preparation_water_needed: float | None = None


class PreparednessOverview(BaseModel):
    """Household-wide preparedness across categories."""

    overall_percentage: float = Field(ge=0, le=100)
    status: ItemStatus
    categories: list[CategoryStatusSummary] = Field(default_factory=list)


class AlertSeverity(str, Enum):
    """How urgent an alert is."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class AlertKind(str, Enum):
    """What an alert is about."""

    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    OUT_OF_STOCK = "out_of_stock"
    CRITICALLY_LOW = "critically_low"
    LOW_STOCK = "low_stock"
    WATER_SHORTAGE = "water_shortage"


class Alert(BaseModel):
    """A dashboard notice about an item, a category or the water supply."""

    id: str
    severity: AlertSeverity
    kind: AlertKind
    item_id: UUID | None = None
    item_name: str | None = None
    template_id: str | None = None
    category_id: str | None = None
    days: int | None = None
    percentage: float | None = None
    liters: float | None = None


class AlertCounts(BaseModel):
    """Number of alerts per severity."""

    critical: int = 0
    warning: int = 0
    info: int = 0
    total: int = 0
