"""Status classification for items and categories."""

from datetime import date

from .date_utils import days_until_expiration
from .models import DEFAULT_OPTIONS, CalculationOptions, InventoryItem, ItemStatus
from .quantity_calculator import finite_or_zero


def classify_item_status(
    quantity: float,
    target_quantity: float,
    expiration_date: date | str | None = None,
    never_expires: bool = False,
    marked_as_enough: bool = False,
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> ItemStatus:
    """Classify a single item as ok, warning or critical.

    Rules are checked in order and the first match wins:

    1. Expired -> critical; expiring within ``options.expiring_soon_days`` ->
       warning. Skipped when the item never expires.
    2. Marked as enough -> ok. The override silences quantity checks only, so
       it never clears an expiration verdict from step 1.
    3. Zero quantity -> critical.
    4. Below ``target * options.low_quantity_warning_ratio`` -> warning.
    5. Otherwise ok.

    Args:
        quantity: Quantity on hand
        target_quantity: Recommended quantity for the item
        expiration_date: Optional expiration date
        never_expires: Whether the item never expires
        marked_as_enough: Manual "I have enough" override
        options: Calculation options
        as_of: Date to evaluate expiration against (defaults to today)

    Returns:
        The item status
    """
    days_left = days_until_expiration(expiration_date, never_expires, as_of)
    if days_left is not None:
        if days_left < 0:
            return ItemStatus.CRITICAL
        if days_left <= options.expiring_soon_days:
            return ItemStatus.WARNING

    if marked_as_enough:
        return ItemStatus.OK

    quantity = finite_or_zero(quantity)
    target_quantity = finite_or_zero(target_quantity)

    if quantity == 0:
        return ItemStatus.CRITICAL
    if quantity < target_quantity * options.low_quantity_warning_ratio:
        return ItemStatus.WARNING

    return ItemStatus.OK


def item_status(
    item: InventoryItem,
    target_quantity: float,
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> ItemStatus:
    """Classify an inventory item against its target quantity."""
    return classify_item_status(
        item.quantity,
        target_quantity,
        item.expiration_date,
        item.never_expires,
        item.marked_as_enough,
        options=options,
        as_of=as_of,
    )


def status_from_percentage(
    percentage: float,
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> ItemStatus:
    """Category status from a completion percentage."""
    percentage = finite_or_zero(percentage)
    if percentage < options.critical_percentage_threshold:
        return ItemStatus.CRITICAL
    if percentage < options.warning_percentage_threshold:
        return ItemStatus.WARNING
    return ItemStatus.OK


def status_from_score(
    score: float,
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> ItemStatus:
    """Dashboard status from an overall preparedness score."""
    score = finite_or_zero(score)
    if score >= options.ok_score_threshold:
        return ItemStatus.OK
    if score >= options.warning_score_threshold:
        return ItemStatus.WARNING
    return ItemStatus.CRITICAL
