import asyncio
from unittest.mock import AsyncMock

from lunch_menu.llm.client import LLMTurn
from lunch_menu.llm.menu_parser import PageContent
from lunch_menu.llm.restaurant_name import (
    extract_restaurant_name,
    get_hostname_fallback,
    is_valid_restaurant_name,
)


def _page(url="https://www.restaurace-u-lipy.cz/denni-menu"):
    return PageContent(
        html="<title>Restaurace U Lípy | Denní menu</title>",
        text="Restaurace U Lípy Polední menu",
        url=url,
        day="Pondělí",
    )


def _client(text=None, error=None):
    client = AsyncMock()
    if error:
        client.generate.side_effect = error
    else:
        client.generate.return_value = LLMTurn(text=text)
    return client


class TestRestaurantName:

    def test_model_answer_used(self):
        client = _client("Restaurace U Lípy")
        assert asyncio.run(extract_restaurant_name(_page(), client=client)) == "Restaurace U Lípy"

    def test_quotes_stripped(self):
        client = _client('"Hospoda U Kačera"\n')
        assert asyncio.run(extract_restaurant_name(_page(), client=client)) == "Hospoda U Kačera"

    def test_unknown_falls_back_to_hostname(self):
        client = _client("Unknown")
        assert asyncio.run(extract_restaurant_name(_page(), client=client)) == "restaurace-u-lipy"

    def test_empty_answer_falls_back(self):
        client = _client(None)
        assert asyncio.run(extract_restaurant_name(_page(), client=client)) == "restaurace-u-lipy"

    def test_too_long_answer_falls_back(self):
        client = _client("x" * 150)
        assert asyncio.run(extract_restaurant_name(_page(), client=client)) == "restaurace-u-lipy"

    def test_failure_never_raises(self):
        client = _client(error=RuntimeError("quota exceeded"))
        assert asyncio.run(extract_restaurant_name(_page(), client=client)) == "restaurace-u-lipy"

    def test_failure_with_bad_url(self):
        client = _client(error=RuntimeError("quota exceeded"))
        assert asyncio.run(extract_restaurant_name(_page(url="not a url"), client=client)) == "unknown"


class TestNameHelpers:

    def test_is_valid_restaurant_name(self):
        assert is_valid_restaurant_name("U Fleků") is True
        assert is_valid_restaurant_name("") is False
        assert is_valid_restaurant_name("UNKNOWN") is False
        assert is_valid_restaurant_name("a" * 100) is False

    def test_hostname_fallback(self):
        assert get_hostname_fallback("https://www.restaurace.cz") == "restaurace"
        assert get_hostname_fallback("") == "unknown"
