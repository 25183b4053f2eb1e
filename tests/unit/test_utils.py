import pytest

from lunch_menu.core.errors import InvalidDateFormatError
from lunch_menu.fetch.utils import (
    czech_day_name,
    hostname_label,
    normalize_price,
    parse_iso_date,
)


class TestPriceNormalization:
    """Unit tests for price normalization function"""

    def test_czech_price_format(self):
        """Test Czech price format with comma and dash"""
        assert normalize_price("145,-") == 145
        assert normalize_price("95,-") == 95

    def test_price_with_currency(self):
        """Test price with currency symbols"""
        assert normalize_price("145 Kč") == 145
        assert normalize_price("85 CZK") == 85

    def test_decimal_prices(self):
        """Test prices with decimal places"""
        assert normalize_price("145,50") == 145.5
        assert normalize_price("145.50") == 145.5
        assert normalize_price("99,90 Kč") == 99.9

    def test_plain_numbers(self):
        assert normalize_price("75") == 75
        assert normalize_price(145) == 145
        assert normalize_price(129.9) == 129.9

    def test_invalid_inputs(self):
        """Invalid input never raises, it yields 0"""
        assert normalize_price(None) == 0
        assert normalize_price("") == 0
        assert normalize_price("garbage") == 0
        assert normalize_price("bez ceny") == 0


class TestDates:

    def test_czech_day_name(self):
        assert czech_day_name("2025-11-24") == "Pondělí"
        assert czech_day_name("2025-11-26") == "Středa"
        assert czech_day_name("2025-11-30") == "Neděle"

    def test_parse_iso_date_rejects_bad_input(self):
        with pytest.raises(InvalidDateFormatError):
            parse_iso_date("24.11.2025")
        with pytest.raises(InvalidDateFormatError):
            parse_iso_date("2025-02-30")

    def test_invalid_date_error_is_validation_error(self):
        with pytest.raises(InvalidDateFormatError) as exc_info:
            czech_day_name("not-a-date")
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "restaurantMenuSummarizer/validation/invalidDateFormat"


class TestHostnameLabel:

    def test_strips_www_and_tld(self):
        assert hostname_label("https://www.restaurace.cz/menu") == "restaurace"
        assert hostname_label("http://ukocoura.cz") == "ukocoura"

    def test_unparsable_url(self):
        assert hostname_label("not a url") is None
