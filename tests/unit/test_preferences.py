from lunch_menu.schemas import MenuItem, Preferences
from lunch_menu.services.preferences import apply_preferences_filter, calculate_recommended_meal


def _items():
    return [
        MenuItem(name="Hovězí vývar", price=45, allergens=["1", "9"], category="soup"),
        MenuItem(name="Smažený sýr", price=159, allergens=["1", "3", "7"], category="main"),
        MenuItem(name="Zeleninové rizoto", price=129, allergens=None, category="main"),
        MenuItem(name="Kuřecí steak", price=None, allergens=[], category="main"),
    ]


class TestPreferenceFilter:

    def test_no_preferences_returns_items_unchanged(self):
        items = _items()
        assert apply_preferences_filter(items, None) is items

    def test_price_ceiling(self):
        result = apply_preferences_filter(_items(), Preferences(price=130))
        assert [item.name for item in result] == ["Hovězí vývar", "Zeleninové rizoto"]

    def test_price_ceiling_is_inclusive(self):
        result = apply_preferences_filter(_items(), Preferences(price=159))
        assert "Smažený sýr" in [item.name for item in result]

    def test_item_without_price_dropped_under_ceiling(self):
        result = apply_preferences_filter(_items(), Preferences(price=1000))
        assert "Kuřecí steak" not in [item.name for item in result]

    def test_allergen_exclusion(self):
        result = apply_preferences_filter(_items(), Preferences(allergens=[7]))
        names = [item.name for item in result]
        assert "Smažený sýr" not in names
        # unknown or empty allergen info is treated as safe
        assert "Zeleninové rizoto" in names
        assert "Kuřecí steak" in names

    def test_non_numeric_allergen_tokens_ignored(self):
        items = [MenuItem(name="Salát", price=99, allergens=["lepek", "7"])]
        assert apply_preferences_filter(items, Preferences(allergens=[1])) == items
        assert apply_preferences_filter(items, Preferences(allergens=[7])) == []

    def test_multi_digit_allergen_string(self):
        items = [MenuItem(name="Krevety", price=189, allergens="14")]
        assert apply_preferences_filter(items, Preferences(allergens=[14])) == []
        assert apply_preferences_filter(items, Preferences(allergens=[1, 4])) == items

    def test_empty_allergen_preference_keeps_everything(self):
        items = _items()
        assert apply_preferences_filter(items, Preferences(allergens=[])) == items

    def test_price_and_allergens_combined(self):
        result = apply_preferences_filter(_items(), Preferences(price=130, allergens=[9]))
        assert [item.name for item in result] == ["Zeleninové rizoto"]


class TestRecommendedMeal:

    def test_first_item(self):
        assert calculate_recommended_meal(_items()) == "Hovězí vývar"

    def test_empty(self):
        assert calculate_recommended_meal([]) is None
