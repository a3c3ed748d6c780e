"""Missing-quantity calculations.

A shortfall is only ever reported for quantity problems. Expired or
expiring items are surfaced through their status instead, so they never add
to a missing amount.
"""

from collections.abc import Iterable
from datetime import date

from .date_utils import is_expired, is_expiring_soon
from .item_matching import find_group
from .item_status import item_status
from .models import DEFAULT_OPTIONS, CalculationOptions, InventoryItem, ItemStatus
from .quantity_calculator import finite_or_zero


def has_expiration_issue(
    item: InventoryItem,
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> bool:
    """Whether an item is expired or expiring soon."""
    return is_expired(item.expiration_date, item.never_expires, as_of) or is_expiring_soon(
        item.expiration_date, item.never_expires, options.expiring_soon_days, as_of
    )


def missing_for_item(
    item: InventoryItem,
    target_quantity: float,
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> float:
    """Quantity still missing for a single item.

    Non-zero only when the item is in warning or critical state because of
    its quantity: not expired or expiring soon, not marked as enough, and
    with a positive target.

    Returns:
        ``max(0, target - quantity)`` when applicable, otherwise 0
    """
    target_quantity = finite_or_zero(target_quantity)
    if target_quantity <= 0 or item.marked_as_enough:
        return 0.0
    if has_expiration_issue(item, options, as_of):
        return 0.0

    status = item_status(item, target_quantity, options, as_of)
    if status not in (ItemStatus.WARNING, ItemStatus.CRITICAL):
        return 0.0

    quantity = max(0.0, finite_or_zero(item.quantity))
    return max(0.0, target_quantity - quantity)


def missing_for_group(
    item: InventoryItem,
    items: Iterable[InventoryItem],
    target_quantity: float,
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> float:
    """Quantity still missing across every item of the same kind as ``item``.

    Members share one target. Items marked as enough do not count towards the
    held quantity. If any member is expired or expiring soon the group reports
    no quantity shortfall.

    Args:
        item: Item whose group to evaluate
        items: Full item collection to group from
        target_quantity: Target shared by the group
        options: Calculation options
        as_of: Date to evaluate expiration against (defaults to today)

    Returns:
        Missing quantity for the group, never negative
    """
    group = find_group(item, items)
    if not group:
        return missing_for_item(item, target_quantity, options, as_of)
    return missing_for_items(group, target_quantity, options, as_of)


def missing_for_items(
    group: Iterable[InventoryItem],
    target_quantity: float,
    options: CalculationOptions = DEFAULT_OPTIONS,
    as_of: date | None = None,
) -> float:
    """Quantity still missing for an already-formed group of items.

    An empty group holds nothing, so the whole target is missing.
    """
    group = list(group)
    target_quantity = finite_or_zero(target_quantity)
    if target_quantity <= 0:
        return 0.0

    if any(has_expiration_issue(member, options, as_of) for member in group):
        return 0.0

    total_actual = sum(
        max(0.0, finite_or_zero(member.quantity))
        for member in group
        if not member.marked_as_enough
    )
    return max(0.0, target_quantity - total_actual)
