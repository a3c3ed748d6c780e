"""Matching inventory items to templates and to each other."""

import re
from collections.abc import Iterable

from .models import InventoryItem, RecommendedItemTemplate

GroupKey = tuple[str, str]

_WHITESPACE = re.compile(r"\s+")


def normalize_template_key(name: str) -> str:
    """Normalize a display name into template-id form ("Canned Fish" -> "canned-fish")."""
    return _WHITESPACE.sub("-", name.strip().lower())


def grouping_key(item: InventoryItem) -> GroupKey | None:
    """Identity used to treat several items as the same kind of supply.

    The product template id is preferred. Without one, a template item type is
    used. Custom items have no key and never group with anything else.
    """
    if item.product_template_id:
        return ("template", item.product_template_id)
    template_id = item.template_type_id
    if template_id is not None:
        return ("type", template_id)
    return None


def same_group(a: InventoryItem, b: InventoryItem) -> bool:
    """Whether two items represent the same kind of supply."""
    if a.id == b.id:
        return True
    key = grouping_key(a)
    return key is not None and key == grouping_key(b)


def group_items(items: Iterable[InventoryItem]) -> dict[GroupKey, list[InventoryItem]]:
    """Partition items into same-kind groups, preserving first-seen order.

    Custom items each get a singleton group keyed by their own id.
    """
    groups: dict[GroupKey, list[InventoryItem]] = {}
    for item in items:
        key = grouping_key(item) or ("item", str(item.id))
        groups.setdefault(key, []).append(item)
    return groups


def find_group(item: InventoryItem, items: Iterable[InventoryItem]) -> list[InventoryItem]:
    """Items from ``items`` in the same group as ``item``."""
    return [other for other in items if same_group(item, other)]


def item_matches_template(item: InventoryItem, template_id: str) -> bool:
    """Whether an item counts towards a recommended template.

    Items match by product template id or template item type. Non-custom items
    entered by hand also match when their name normalizes to the template id.
    """
    if item.product_template_id == template_id or item.template_type_id == template_id:
        return True
    if not item.is_custom and item.name:
        return normalize_template_key(item.name) == template_id.lower()
    return False


def find_matching_items(
    items: Iterable[InventoryItem],
    template: RecommendedItemTemplate | str,
) -> list[InventoryItem]:
    """Inventory items that count towards a template."""
    template_id = template if isinstance(template, str) else template.id
    return [item for item in items if item_matches_template(item, template_id)]
