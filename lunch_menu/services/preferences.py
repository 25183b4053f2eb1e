from typing import List, Optional, Set

from lunch_menu.schemas import MenuItem, Preferences


def _allergen_codes(tokens: List[str]) -> Set[int]:
    codes = set()
    for token in tokens:
        try:
            codes.add(int(str(token).strip()))
        except ValueError:
            continue
    return codes


def apply_preferences_filter(
    items: List[MenuItem], preferences: Optional[Preferences]
) -> List[MenuItem]:
    """
    Filter menu items by user preferences.
    - price: drop items above the ceiling or without a price
    - allergens: drop items listing any excluded allergen code;
      items without allergen info are treated as safe
    """
    if preferences is None:
        return items

    excluded = set(preferences.allergens or [])

    filtered = []
    for item in items:
        if preferences.price is not None:
            if item.price is None or item.price > preferences.price:
                continue

        if excluded and item.allergens:
            if _allergen_codes(item.allergens) & excluded:
                continue

        filtered.append(item)

    return filtered


def calculate_recommended_meal(filtered_items: List[MenuItem]) -> Optional[str]:
    """First remaining item in menu order, or None"""
    if not filtered_items:
        return None
    return filtered_items[0].name
