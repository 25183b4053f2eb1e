from lunch_menu.services.classifier import (
    has_daily_menu_indicators,
    has_strong_daily_signal,
    is_mostly_navigation,
)


class TestDailyMenuClassifier:
    """Unit tests for the daily menu pre-check"""

    def test_no_keyword(self):
        assert has_daily_menu_indicators("Stálý jídelní lístek, steaky a burgery") is False
        assert has_daily_menu_indicators("") is False

    def test_weekday_near_keyword(self):
        text = "Polední menu Pondělí: Hovězí vývar 45 Kč, Smažený sýr 139 Kč"
        assert has_daily_menu_indicators(text) is True

    def test_navigation_bar_is_rejected(self):
        text = "Úvod | O nás | Kontakty | Polední menu | Rezervace | Galerie"
        assert has_daily_menu_indicators(text) is False

    def test_keyword_without_signal(self):
        text = "Polední menu najdete na naší facebookové stránce."
        assert has_daily_menu_indicators(text) is False

    def test_date_signal(self):
        assert has_daily_menu_indicators("Menu dne 24.11. se připravuje") is True
        assert has_daily_menu_indicators("Menu dne 24. 11. se připravuje") is True

    def test_two_prices_in_band(self):
        text = "Denní menu: Smažený sýr 129 Kč, Těstoviny 119,-"
        assert has_daily_menu_indicators(text) is True

    def test_prices_out_of_band(self):
        text = "Denní menu: Steak 450 Kč, Limonáda 35 Kč"
        assert has_daily_menu_indicators(text) is False

    def test_single_price_is_not_enough(self):
        text = "Denní menu: Těstoviny 119 Kč"
        assert has_daily_menu_indicators(text) is False

    def test_soup_with_main_dish(self):
        text = "Obědové menu: Hovězí vývar, Vepřový řízek s bramborem"
        assert has_daily_menu_indicators(text) is True

    def test_signal_outside_window_is_ignored(self):
        text = "Týdenní menu " + "x " * 600 + "pondělí"
        assert has_daily_menu_indicators(text) is False

    def test_first_keyword_in_priority_order_wins(self):
        # "denní menu" appears first in the text but "polední menu" has priority
        text = "Denní menu pondělí" + " y" * 600 + " polední menu bez dalších informací"
        assert has_daily_menu_indicators(text) is False


class TestClassifierHelpers:

    def test_is_mostly_navigation_threshold(self):
        assert is_mostly_navigation("úvod o nás kontakty") is True
        assert is_mostly_navigation("úvod kontakty") is False

    def test_has_strong_daily_signal(self):
        assert has_strong_daily_signal("čtvrtek") is True
        assert has_strong_daily_signal("guláš 159 kč") is False
        assert has_strong_daily_signal("guláš 159 kč, vývar 65 kč") is True
