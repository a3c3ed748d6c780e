"""Recommended quantity calculations.

Turns a recommended item template and a household into the amount of that
item the household should keep on hand.
"""

import math
from collections.abc import Collection, Iterable

from .models import (
    DEFAULT_OPTIONS,
    CalculationOptions,
    HouseholdConfig,
    RecommendedItemTemplate,
)

# Products of float multipliers can land a hair above an integer
# (0.1 * 3 * 10 == 3.0000000000000004); trim that before taking the ceiling.
_ROUNDING_DIGITS = 9


def finite_or_zero(value: float) -> float:
    """Return ``value`` if it is a finite number, otherwise 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def ceil_quantity(value: float) -> int:
    """Round a quantity up to a whole, non-negative number."""
    value = finite_or_zero(value)
    return max(0, math.ceil(round(abs(value), _ROUNDING_DIGITS)))


def people_multiplier(
    household: HouseholdConfig,
    children_multiplier: float | None = None,
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> float:
    """Adult-equivalents in the household (adults count 1.0, children less)."""
    if children_multiplier is None:
        children_multiplier = options.children_multiplier
    return finite_or_zero(
        household.adults * options.adult_multiplier
        + household.children * children_multiplier
    )


def scale_quantity(
    base_quantity: float,
    template: RecommendedItemTemplate,
    household: HouseholdConfig,
    children_multiplier: float | None = None,
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> float:
    """Apply the template's scaling flags to ``base_quantity`` without rounding."""
    qty = finite_or_zero(base_quantity)

    if template.scale_with_people:
        qty *= people_multiplier(household, children_multiplier, options)

    if template.scale_with_days:
        qty *= household.supply_duration_days

    if template.scale_with_pets:
        qty *= household.pets * options.pet_multiplier

    return finite_or_zero(qty)


def calculate_recommended_quantity(
    template: RecommendedItemTemplate,
    household: HouseholdConfig,
    children_multiplier: float | None = None,
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> int:
    """Calculate how much of a template's item a household should hold.

    Args:
        template: Recommended item template
        household: Household configuration
        children_multiplier: Optional override of ``options.children_multiplier``
        options: Calculation options

    Returns:
        Target quantity, rounded up to a whole number. Zero when a scaling
        factor is zero (no people, no pets).
    """
    return ceil_quantity(
        scale_quantity(template.base_quantity, template, household, children_multiplier, options)
    )


def is_template_applicable(
    template: RecommendedItemTemplate,
    household: HouseholdConfig,
    disabled_template_ids: Collection[str] = (),
) -> bool:
    """Whether a template applies to the household at all.

    Disabled templates and freezer items for households without a freezer are
    excluded outright rather than given a zero target.
    """
    if template.id in disabled_template_ids:
        return False
    if template.requires_freezer and not household.use_freezer:
        return False
    return True


def applicable_templates(
    templates: Iterable[RecommendedItemTemplate],
    household: HouseholdConfig,
    category_id: str | None = None,
    disabled_template_ids: Collection[str] = (),
    disabled_category_ids: Collection[str] = (),
) -> list[RecommendedItemTemplate]:
    """Templates that apply to the household, in catalog order."""
    return [
        t
        for t in templates
        if (category_id is None or t.category == category_id)
        and t.category not in disabled_category_ids
        and is_template_applicable(t, household, disabled_template_ids)
    ]


def recommended_quantities(
    templates: Iterable[RecommendedItemTemplate],
    household: HouseholdConfig,
    category_id: str | None = None,
    disabled_template_ids: Collection[str] = (),
    disabled_category_ids: Collection[str] = (),
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> dict[str, int]:
    """Target quantity per applicable template id.

    Templates whose target works out to zero (pet supplies for a household
    without pets) are left out.
    """
    targets: dict[str, int] = {}
    for template in applicable_templates(
        templates, household, category_id, disabled_template_ids, disabled_category_ids
    ):
        qty = calculate_recommended_quantity(template, household, options=options)
        if qty > 0:
            targets[template.id] = qty
    return targets
