"""Calorie and water totals derived from inventory."""

from collections.abc import Iterable, Sequence

from .catalog import BOTTLED_WATER_ID, WATER_CATEGORY_ID, get_template
from .item_matching import normalize_template_key
from .models import (
    DEFAULT_OPTIONS,
    CalculationOptions,
    HouseholdConfig,
    InventoryItem,
    RecommendedItemTemplate,
    Unit,
)
from .quantity_calculator import finite_or_zero, people_multiplier

CALORIE_BASE_WEIGHT_GRAMS = 100
GRAMS_PER_KILOGRAM = 1000


def calories_from_weight(weight_grams: float, calories_per_100g: float) -> int:
    """Calories in one unit given its weight and energy density."""
    return round(
        finite_or_zero(weight_grams) / CALORIE_BASE_WEIGHT_GRAMS * finite_or_zero(calories_per_100g)
    )


def template_calories_per_unit(template: RecommendedItemTemplate) -> float | None:
    """Calories per unit for a template, derived from weight when possible."""
    if template.weight_grams_per_unit and template.calories_per_100g:
        return calories_from_weight(template.weight_grams_per_unit, template.calories_per_100g)
    return template.calories_per_unit


def total_calories(
    quantity: float,
    calories_per_unit: float,
    unit: Unit | None = None,
    weight_grams: float | None = None,
) -> int:
    """Total calories for a quantity of some food.

    Quantities in kilograms are converted to units through the per-unit
    weight when one is known.
    """
    quantity = max(0.0, finite_or_zero(quantity))
    calories_per_unit = finite_or_zero(calories_per_unit)
    if unit == Unit.KILOGRAMS and weight_grams and weight_grams > 0:
        units = quantity * GRAMS_PER_KILOGRAM / weight_grams
        return round(units * calories_per_unit)
    return round(quantity * calories_per_unit)


def item_total_calories(
    item: InventoryItem,
    template: RecommendedItemTemplate | None = None,
) -> int:
    """Calories held by an item, falling back to its template's values."""
    calories_per_unit = item.calories_per_unit
    weight_grams = item.weight_grams
    if template is not None:
        if not calories_per_unit:
            calories_per_unit = template_calories_per_unit(template)
        if not weight_grams:
            weight_grams = template.weight_grams_per_unit
    if not calories_per_unit:
        return 0
    return total_calories(item.quantity, calories_per_unit, item.unit, weight_grams)


def needed_calories(
    household: HouseholdConfig,
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> float:
    """Calories the household needs for the whole supply period."""
    return finite_or_zero(
        options.daily_calories_per_person
        * people_multiplier(household, options=options)
        * household.supply_duration_days
    )


def water_per_unit(
    item: InventoryItem,
    templates: Sequence[RecommendedItemTemplate],
) -> float:
    """Liters of water needed to prepare one unit of an item."""
    if item.requires_water_liters:
        return item.requires_water_liters

    candidates = [item.product_template_id, item.template_type_id]
    if not item.is_custom and item.name:
        candidates.append(normalize_template_key(item.name))

    for template_id in candidates:
        if not template_id:
            continue
        template = get_template(template_id, templates)
        if template is not None and template.requires_water_liters:
            return template.requires_water_liters
    return 0.0


def preparation_water_needed(
    items: Iterable[InventoryItem],
    templates: Sequence[RecommendedItemTemplate],
) -> float:
    """Liters of water needed to prepare every stored item that needs it."""
    return finite_or_zero(
        sum(water_per_unit(item, templates) * max(0.0, item.quantity) for item in items)
    )


def drinking_water_needed(
    household: HouseholdConfig,
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> float:
    """Liters of drinking water the household needs for the supply period."""
    return finite_or_zero(
        options.daily_water_per_person
        * people_multiplier(household, options=options)
        * household.supply_duration_days
    )


def is_drinking_water(item: InventoryItem) -> bool:
    """Whether an item is stored drinking water measured in liters."""
    if item.category_id != WATER_CATEGORY_ID or item.unit != Unit.LITERS:
        return False
    if item.product_template_id == BOTTLED_WATER_ID:
        return True
    type_id = item.template_type_id or ""
    return "water" in type_id.lower() or "water" in item.name.lower()


def water_available(items: Iterable[InventoryItem]) -> float:
    """Liters of drinking water held across the inventory."""
    return finite_or_zero(
        sum(max(0.0, finite_or_zero(item.quantity)) for item in items if is_drinking_water(item))
    )


def preparation_water_shortfall(
    items: Sequence[InventoryItem],
    templates: Sequence[RecommendedItemTemplate],
) -> float:
    """Liters by which food preparation needs exceed the stored water."""
    return max(0.0, preparation_water_needed(items, templates) - water_available(items))
