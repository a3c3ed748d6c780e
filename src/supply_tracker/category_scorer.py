"""Category preparedness scoring.

Aggregates the household's items against the recommended templates of a
category into a completion percentage, a status and a list of shortages.
Food and water categories also report calorie and water totals.
"""

import math
from collections.abc import Collection, Iterable, Sequence
from datetime import date

from .catalog import (
    BOTTLED_WATER_ID,
    COMMUNICATION_CATEGORY_ID,
    FOOD_CATEGORY_ID,
    WATER_CATEGORY_ID,
    get_template,
)
from .item_matching import find_matching_items, item_matches_template
from .item_status import item_status, status_from_percentage, status_from_score
from .models import (
    DEFAULT_OPTIONS,
    CalculationOptions,
    CategoryShortage,
    CategoryStatusSummary,
    HouseholdConfig,
    InventoryItem,
    ItemStatus,
    PreparednessOverview,
    RecommendedItemTemplate,
    Unit,
)
from .quantity_calculator import (
    applicable_templates,
    calculate_recommended_quantity,
    ceil_quantity,
    finite_or_zero,
    scale_quantity,
)
from .resources import (
    drinking_water_needed,
    item_total_calories,
    needed_calories,
    preparation_water_needed,
)
from .shortage import missing_for_items


def clamp_percentage(value: float) -> float:
    """Clamp a percentage into [0, 100]; anything non-finite becomes 0."""
    if not math.isfinite(value):
        return 0.0
    return min(100.0, max(0.0, value))


def completion_percentage(total_actual: float, total_needed: float) -> float:
    """Share of the need that is covered, as a clamped percentage.

    Nothing needed counts as fully covered.
    """
    total_needed = finite_or_zero(total_needed)
    if total_needed <= 0:
        return 100.0
    return clamp_percentage(finite_or_zero(total_actual) / total_needed * 100)


def target_for_template(
    template: RecommendedItemTemplate,
    household: HouseholdConfig,
    items: Iterable[InventoryItem],
    templates: Sequence[RecommendedItemTemplate],
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> int:
    """Target quantity for a template within category scoring.

    Bottled water is sized from the daily water setting and also covers the
    water needed to prepare stored food.
    """
    if template.category == WATER_CATEGORY_ID and template.id == BOTTLED_WATER_ID:
        qty = scale_quantity(options.daily_water_per_person, template, household, options=options)
        qty += preparation_water_needed(items, templates)
        return ceil_quantity(qty)
    return calculate_recommended_quantity(template, household, options=options)


def _primary_unit(unit_targets: dict[Unit, float]) -> Unit | None:
    primary: Unit | None = None
    best = 0.0
    for unit, total in unit_targets.items():
        if total > best:
            best = total
            primary = unit
    return primary


def _template_for_item(
    item: InventoryItem,
    templates: Sequence[RecommendedItemTemplate],
) -> RecommendedItemTemplate | None:
    for template_id in (item.product_template_id, item.template_type_id):
        if template_id:
            template = get_template(template_id, templates)
            if template is not None:
                return template
    return None


def score_category(
    category_id: str,
    items: Sequence[InventoryItem],
    household: HouseholdConfig,
    templates: Sequence[RecommendedItemTemplate],
    disabled_template_ids: Collection[str] = (),
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> CategoryStatusSummary:
    """Score how well a category's recommendations are covered.

    Every applicable template of the category with a non-zero target adds its
    target to ``total_needed`` and the summed quantity of its matching items to
    ``total_actual``. Templates without any matching item therefore show up as
    a full shortfall. Freezer items without a freezer, disabled templates and
    zero targets (pet supplies without pets) are skipped.

    Quantities are only summed when every template shares one unit. With
    mixed units each template counts as one share, filled up to its target.
    Communication counts fulfilled item types and food is measured in
    calories.

    Args:
        category_id: Category to score
        items: All inventory items
        household: Household configuration
        templates: Recommended item templates
        disabled_template_ids: Template ids the user turned off
        options: Calculation options
        as_of: Date to evaluate expiration against (defaults to today)

    Returns:
        Category status summary
    """
    category_items = [item for item in items if item.category_id == category_id]
    candidates = applicable_templates(
        templates, household, category_id, disabled_template_ids=disabled_template_ids
    )

    total_actual = 0.0
    total_needed = 0.0
    weighted_fulfilment = 0.0
    fulfilled_item_types = 0
    total_item_types = 0
    shortages: list[CategoryShortage] = []
    unit_targets: dict[Unit, float] = {}
    targets: dict[str, int] = {}

    for template in candidates:
        target = target_for_template(template, household, items, templates, options)
        if target == 0:
            continue
        targets[template.id] = target

        matching = find_matching_items(category_items, template)
        actual = sum(max(0.0, finite_or_zero(item.quantity)) for item in matching)
        marked_as_enough = any(item.marked_as_enough for item in matching)

        total_actual += actual
        total_needed += target
        unit_targets[template.unit] = unit_targets.get(template.unit, 0.0) + target

        total_item_types += 1
        if actual >= target or marked_as_enough:
            fulfilled_item_types += 1
        weighted_fulfilment += 1.0 if marked_as_enough else min(actual / target, 1.0)

        missing = missing_for_items(matching, target, options, as_of)
        if missing > 0 and not marked_as_enough:
            shortages.append(
                CategoryShortage(
                    template_id=template.id,
                    missing=missing,
                    actual=actual,
                    needed=target,
                    unit=template.unit,
                )
            )

    counts = {status: 0 for status in ItemStatus}
    for item in category_items:
        target = next(
            (qty for template_id, qty in targets.items() if item_matches_template(item, template_id)),
            0,
        )
        counts[item_status(item, target, options, as_of)] += 1

    primary_unit = _primary_unit(unit_targets)
    if category_id != FOOD_CATEGORY_ID:
        if category_id == COMMUNICATION_CATEGORY_ID:
            total_actual = float(fulfilled_item_types)
            total_needed = float(total_item_types)
            primary_unit = None
        elif len(unit_targets) > 1:
            # Quantities in different units cannot be summed; every template
            # weighs the same and counts at most once.
            total_actual = weighted_fulfilment
            total_needed = float(total_item_types)
            primary_unit = None

    summary = CategoryStatusSummary(
        category_id=category_id,
        status=ItemStatus.OK,
        completion_percentage=completion_percentage(total_actual, total_needed),
        total_actual=finite_or_zero(total_actual),
        total_needed=finite_or_zero(total_needed),
        shortages=shortages,
        item_count=len(category_items),
        critical_count=counts[ItemStatus.CRITICAL],
        warning_count=counts[ItemStatus.WARNING],
        ok_count=counts[ItemStatus.OK],
        fulfilled_item_types=fulfilled_item_types,
        total_item_types=total_item_types,
        primary_unit=primary_unit,
        has_recommendations=bool(candidates),
    )
    measured_need = total_needed

    if category_id == FOOD_CATEGORY_ID:
        actual_calories = float(
            sum(item_total_calories(item, _template_for_item(item, templates)) for item in category_items)
        )
        needed = needed_calories(household, options)
        summary.total_actual_calories = actual_calories
        summary.total_needed_calories = needed
        summary.missing_calories = max(0.0, needed - actual_calories)
        if total_item_types:
            summary.completion_percentage = completion_percentage(actual_calories, needed)
            measured_need = needed
    elif category_id == WATER_CATEGORY_ID:
        summary.drinking_water_needed = drinking_water_needed(household, options)
        summary.preparation_water_needed = preparation_water_needed(items, templates)

    if measured_need > 0:
        summary.status = status_from_percentage(summary.completion_percentage, options)
    return summary


def score_all_categories(
    category_ids: Iterable[str],
    items: Sequence[InventoryItem],
    household: HouseholdConfig,
    templates: Sequence[RecommendedItemTemplate],
    disabled_template_ids: Collection[str] = (),
    disabled_category_ids: Collection[str] = (),
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> list[CategoryStatusSummary]:
    """Score every enabled category, in the given order."""
    return [
        score_category(
            category_id,
            items,
            household,
            templates,
            disabled_template_ids=disabled_template_ids,
            options=options,
            as_of=as_of,
        )
        for category_id in category_ids
        if category_id not in disabled_category_ids
    ]


def overall_preparedness(
    summaries: Sequence[CategoryStatusSummary],
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> PreparednessOverview:
    """Household-wide preparedness as the share of categories that are ``ok``.

    The share is rounded to a whole percentage and mapped with
    ``status_from_score``. No categories at all is 0 and critical.
    """
    if not summaries:
        return PreparednessOverview(overall_percentage=0.0, status=ItemStatus.CRITICAL)

    ok_categories = sum(1 for s in summaries if s.status == ItemStatus.OK)
    # halves round up
    overall = float(math.floor(ok_categories / len(summaries) * 100 + 0.5))
    return PreparednessOverview(
        overall_percentage=overall,
        status=status_from_score(overall, options),
        categories=list(summaries),
    )
