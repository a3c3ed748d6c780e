"""Built-in recommended item catalog."""

from collections.abc import Iterable

from .models import RecommendedItemTemplate, Unit

FOOD_CATEGORY_ID = "food"
WATER_CATEGORY_ID = "water-beverages"
COMMUNICATION_CATEGORY_ID = "communication-info"
PETS_CATEGORY_ID = "pets"
BOTTLED_WATER_ID = "bottled-water"

STANDARD_CATEGORIES: tuple[str, ...] = (
    WATER_CATEGORY_ID,
    FOOD_CATEGORY_ID,
    "cooking-heat",
    "light-power",
    COMMUNICATION_CATEGORY_ID,
    "medical-health",
    "hygiene-sanitation",
    "tools-supplies",
    "cash-documents",
    PETS_CATEGORY_ID,
)


def _item(
    template_id: str, category: str, base_quantity: float, unit: Unit, **kwargs
) -> RecommendedItemTemplate:
    return RecommendedItemTemplate(
        id=template_id,
        category=category,
        base_quantity=base_quantity,
        unit=unit,
        i18n_key=f"products.{template_id}",
        **kwargs,
    )


RECOMMENDED_ITEMS: tuple[RecommendedItemTemplate, ...] = (
    # Water & beverages
    _item(BOTTLED_WATER_ID, WATER_CATEGORY_ID, 3, Unit.LITERS,
          scale_with_people=True, scale_with_days=True, default_expiration_months=12),
    _item("long-life-milk", WATER_CATEGORY_ID, 0.5, Unit.LITERS,
          scale_with_people=True, scale_with_days=True, default_expiration_months=6),
    _item("long-life-juice", WATER_CATEGORY_ID, 0.3, Unit.LITERS,
          scale_with_people=True, scale_with_days=True, default_expiration_months=12),
    # Food
    _item("canned-fish", FOOD_CATEGORY_ID, 0.5, Unit.CANS,
          scale_with_people=True, scale_with_days=True, default_expiration_months=36,
          weight_grams_per_unit=150, calories_per_100g=200, calories_per_unit=300),
    _item("canned-meat", FOOD_CATEGORY_ID, 0.5, Unit.CANS,
          scale_with_people=True, scale_with_days=True, default_expiration_months=36,
          weight_grams_per_unit=300, calories_per_100g=150, calories_per_unit=450),
    _item("pasta", FOOD_CATEGORY_ID, 0.1, Unit.KILOGRAMS,
          scale_with_people=True, scale_with_days=True, default_expiration_months=24,
          weight_grams_per_unit=500, calories_per_100g=360, calories_per_unit=1800,
          requires_water_liters=1),
    _item("rice", FOOD_CATEGORY_ID, 0.1, Unit.KILOGRAMS,
          scale_with_people=True, scale_with_days=True, default_expiration_months=24,
          weight_grams_per_unit=1000, calories_per_100g=350, calories_per_unit=3500,
          requires_water_liters=1),
    _item("crackers", FOOD_CATEGORY_ID, 0.5, Unit.PACKAGES,
          scale_with_people=True, scale_with_days=True, default_expiration_months=12,
          weight_grams_per_unit=200, calories_per_100g=450, calories_per_unit=900),
    _item("frozen-vegetables", FOOD_CATEGORY_ID, 0.2, Unit.KILOGRAMS,
          scale_with_people=True, scale_with_days=True, requires_freezer=True,
          default_expiration_months=12, weight_grams_per_unit=500,
          calories_per_100g=70, calories_per_unit=350),
    # Cooking & heat
    _item("camping-stove", "cooking-heat", 1, Unit.PIECES),
    _item("stove-fuel", "cooking-heat", 1, Unit.CANISTERS, scale_with_days=True),
    _item("matches", "cooking-heat", 2, Unit.BOXES),
    # Light & power
    _item("flashlight", "light-power", 1, Unit.PIECES, scale_with_people=True),
    _item("candles", "light-power", 2, Unit.PIECES, scale_with_days=True),
    _item("batteries", "light-power", 8, Unit.PIECES, default_expiration_months=60),
    # Communication
    _item("battery-radio", COMMUNICATION_CATEGORY_ID, 1, Unit.PIECES),
    _item("hand-crank-radio", COMMUNICATION_CATEGORY_ID, 1, Unit.PIECES),
    # Medical & health
    _item("first-aid-kit", "medical-health", 1, Unit.SETS),
    _item("painkillers", "medical-health", 1, Unit.PACKAGES, default_expiration_months=24),
    # Hygiene & sanitation
    _item("toilet-paper", "hygiene-sanitation", 1, Unit.ROLLS,
          scale_with_people=True, scale_with_days=True),
    _item("soap", "hygiene-sanitation", 1, Unit.PIECES, scale_with_people=True),
    _item("trash-bags", "hygiene-sanitation", 1, Unit.PACKAGES),
    # Tools & supplies
    _item("rope", "tools-supplies", 10, Unit.METERS),
    _item("duct-tape", "tools-supplies", 1, Unit.ROLLS),
    _item("whistle", "tools-supplies", 1, Unit.PIECES, scale_with_people=True),
    # Cash & documents
    _item("cash", "cash-documents", 300, Unit.EUROS),
    _item("document-copies", "cash-documents", 1, Unit.SETS),
    # Pets
    _item("pet-food", PETS_CATEGORY_ID, 0.2, Unit.KILOGRAMS,
          scale_with_pets=True, scale_with_days=True, default_expiration_months=12),
    _item("pet-water", PETS_CATEGORY_ID, 1, Unit.LITERS,
          scale_with_pets=True, scale_with_days=True),
    _item("pet-carrier", PETS_CATEGORY_ID, 1, Unit.PIECES, scale_with_pets=True),
)


def get_template(
    template_id: str,
    templates: Iterable[RecommendedItemTemplate] = RECOMMENDED_ITEMS,
) -> RecommendedItemTemplate | None:
    """Look up a template by id."""
    for template in templates:
        if template.id == template_id:
            return template
    return None
