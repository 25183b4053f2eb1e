"""
Daily menu pre-check.

Decides from page text whether a page carries a real daily (lunch) menu, so
that the costly LLM extraction is skipped for pages that only list a permanent
a-la-carte menu or merely link to the daily menu from site navigation.
"""
import logging
import re

from lunch_menu.core.config import settings
from lunch_menu.fetch.utils import CZ_WEEKDAYS

logger = logging.getLogger(__name__)

# Checked in this order, first hit wins
DAILY_MENU_KEYWORDS = (
    "polední menu",
    "denní menu",
    "menu dne",
    "obědové menu",
    "týdenní menu",
)

NAVIGATION_KEYWORDS = (
    "úvod",
    "kontakty",
    "o nás",
    "rezervace",
    "ubytování",
    "galerie",
    "akce",
    "reference",
)

SOUP_KEYWORDS = ("polévka", "vývar")
MAIN_DISH_KEYWORDS = ("řízek", "svíčková", "panenka", "guláš", "kuře")

DATE_PATTERN = re.compile(r"\d{1,2}\.\s?\d{1,2}\.")
PRICE_PATTERN = re.compile(r"(\d{2,3})\s*(?:kč|,-)", re.IGNORECASE)


def has_daily_menu_indicators(page_text: str) -> bool:
    """
    Three step check:
    1. locate a daily menu keyword
    2. reject the match when its surroundings look like site navigation
    3. require at least one strong daily menu signal near the keyword
    """
    lower_text = (page_text or "").lower()

    keyword_position = -1
    for keyword in DAILY_MENU_KEYWORDS:
        keyword_position = lower_text.find(keyword)
        if keyword_position != -1:
            break

    if keyword_position == -1:
        logger.debug("No daily menu keyword found")
        return False

    window = settings.CLASSIFIER_CONTEXT_WINDOW
    context = lower_text[max(0, keyword_position - window):keyword_position + window]

    if is_mostly_navigation(context):
        logger.debug("Daily menu keyword found inside navigation")
        return False

    return has_strong_daily_signal(context)


def is_mostly_navigation(context: str) -> bool:
    """True when enough distinct navigation terms surround the keyword
    (e.g. 'Úvod / O nás / Kontakty / Polední menu / Rezervace')."""
    nav_count = sum(1 for keyword in NAVIGATION_KEYWORDS if keyword in context)
    return nav_count >= settings.CLASSIFIER_NAV_THRESHOLD


def has_strong_daily_signal(context: str) -> bool:
    # Weekday
    if any(weekday in context for weekday in CZ_WEEKDAYS):
        return True

    # Date like 24.11. or 24. 11.
    if DATE_PATTERN.search(context):
        return True

    # Prices in the usual lunch menu band
    in_band = [
        int(amount)
        for amount in PRICE_PATTERN.findall(context)
        if settings.DAILY_PRICE_MIN <= int(amount) <= settings.DAILY_PRICE_MAX
    ]
    if len(in_band) >= 2:
        return True

    # Soup together with a main dish
    has_soup = any(keyword in context for keyword in SOUP_KEYWORDS)
    has_main = any(keyword in context for keyword in MAIN_DISH_KEYWORDS)
    return has_soup and has_main
