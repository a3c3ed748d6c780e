"""Household alerts.

Alerts point at the most urgent problems in the inventory: expired or
expiring items, categories that are running low and food that cannot be
prepared with the stored water. Alerts are sorted critical first.
"""

import math
from collections.abc import Collection, Iterable, Sequence
from datetime import date

from .catalog import FOOD_CATEGORY_ID
from .category_scorer import score_category
from .date_utils import days_until_expiration
from .models import (
    DEFAULT_OPTIONS,
    Alert,
    AlertCounts,
    AlertKind,
    AlertSeverity,
    CalculationOptions,
    HouseholdConfig,
    InventoryItem,
    RecommendedItemTemplate,
)
from .quantity_calculator import finite_or_zero
from .resources import preparation_water_shortfall

ALERT_PRIORITY = {
    AlertSeverity.CRITICAL: 0,
    AlertSeverity.WARNING: 1,
    AlertSeverity.INFO: 2,
}


def _item_label(item: InventoryItem) -> str:
    return item.name or item.template_type_id or str(item.id)


def expiration_alerts(
    items: Iterable[InventoryItem],
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> list[Alert]:
    """Alerts for expired items and items expiring within the alert window."""
    alerts: list[Alert] = []
    for item in items:
        days_left = days_until_expiration(item.expiration_date, item.never_expires, as_of)
        if days_left is None:
            continue

        if days_left < 0:
            alerts.append(
                Alert(
                    id=f"expired-{item.id}",
                    severity=AlertSeverity.CRITICAL,
                    kind=AlertKind.EXPIRED,
                    item_id=item.id,
                    item_name=_item_label(item),
                    template_id=item.template_type_id,
                    category_id=item.category_id,
                    days=days_left,
                )
            )
        elif days_left <= options.expiring_soon_alert_days:
            alerts.append(
                Alert(
                    id=f"expiring-soon-{item.id}",
                    severity=AlertSeverity.WARNING,
                    kind=AlertKind.EXPIRING_SOON,
                    item_id=item.id,
                    item_name=_item_label(item),
                    template_id=item.template_type_id,
                    category_id=item.category_id,
                    days=days_left,
                )
            )
    return alerts


def category_stock_alerts(
    category_ids: Iterable[str],
    items: Sequence[InventoryItem],
    household: HouseholdConfig,
    templates: Sequence[RecommendedItemTemplate],
    disabled_template_ids: Collection[str] = (),
    disabled_category_ids: Collection[str] = (),
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> list[Alert]:
    """Alerts for categories whose stock is gone or below the low-stock thresholds.

    Categories the household holds nothing in yet are skipped, and so are
    categories that are fully covered. A non-food category whose items all
    have zero quantity is out of stock. Food is judged by calories only, so it
    is reported as critically low or low instead.
    """
    alerts: list[Alert] = []
    for category_id in category_ids:
        if category_id in disabled_category_ids:
            continue
        category_items = [item for item in items if item.category_id == category_id]
        if not category_items:
            continue

        summary = score_category(
            category_id,
            items,
            household,
            templates,
            disabled_template_ids=disabled_template_ids,
            options=options,
            as_of=as_of,
        )
        percentage = summary.completion_percentage
        if percentage >= 100:
            continue

        out_of_stock = category_id != FOOD_CATEGORY_ID and all(
            finite_or_zero(item.quantity) == 0 for item in category_items
        )
        if out_of_stock:
            alerts.append(
                Alert(
                    id=f"category-out-of-stock-{category_id}",
                    severity=AlertSeverity.CRITICAL,
                    kind=AlertKind.OUT_OF_STOCK,
                    category_id=category_id,
                    percentage=0.0,
                )
            )
        elif percentage < options.critically_low_stock_percentage:
            alerts.append(
                Alert(
                    id=f"category-critically-low-{category_id}",
                    severity=AlertSeverity.CRITICAL,
                    kind=AlertKind.CRITICALLY_LOW,
                    category_id=category_id,
                    percentage=float(round(percentage)),
                )
            )
        elif percentage < options.low_stock_percentage:
            alerts.append(
                Alert(
                    id=f"category-low-stock-{category_id}",
                    severity=AlertSeverity.WARNING,
                    kind=AlertKind.LOW_STOCK,
                    category_id=category_id,
                    percentage=float(round(percentage)),
                )
            )
    return alerts


def water_shortage_alerts(
    items: Sequence[InventoryItem],
    templates: Sequence[RecommendedItemTemplate],
) -> list[Alert]:
    """A warning when preparing the stored food needs more water than is stored."""
    shortfall = preparation_water_shortfall(items, templates)
    if shortfall <= 0:
        return []
    return [
        Alert(
            id="water-shortage-preparation",
            severity=AlertSeverity.WARNING,
            kind=AlertKind.WATER_SHORTAGE,
            # rounded up to one decimal
            liters=math.ceil(shortfall * 10) / 10,
        )
    ]


def generate_alerts(
    category_ids: Iterable[str],
    items: Sequence[InventoryItem],
    household: HouseholdConfig,
    templates: Sequence[RecommendedItemTemplate],
    disabled_template_ids: Collection[str] = (),
    disabled_category_ids: Collection[str] = (),
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> list[Alert]:
    """Every alert for the household, critical first.

    Within one severity, expiration alerts come before category alerts and
    the water alert comes last.
    """
    alerts = [
        *expiration_alerts(items, options, as_of),
        *category_stock_alerts(
            category_ids,
            items,
            household,
            templates,
            disabled_template_ids=disabled_template_ids,
            disabled_category_ids=disabled_category_ids,
            options=options,
            as_of=as_of,
        ),
        *water_shortage_alerts(items, templates),
    ]
    return sorted(alerts, key=lambda alert: ALERT_PRIORITY[alert.severity])


def count_alerts(alerts: Iterable[Alert]) -> AlertCounts:
    """Number of alerts per severity and in total."""
    counts = {severity: 0 for severity in AlertSeverity}
    total = 0
    for alert in alerts:
        counts[alert.severity] += 1
        total += 1
    return AlertCounts(
        critical=counts[AlertSeverity.CRITICAL],
        warning=counts[AlertSeverity.WARNING],
        info=counts[AlertSeverity.INFO],
        total=total,
    )
