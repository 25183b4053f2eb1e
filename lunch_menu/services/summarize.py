import asyncio
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from lunch_menu.cache import db as cache_db
from lunch_menu.fetch import scraper
from lunch_menu.fetch.utils import czech_day_name
from lunch_menu.llm import menu_parser, restaurant_name
from lunch_menu.llm.menu_parser import PageContent
from lunch_menu.schemas import Preferences, RestaurantMenu
from lunch_menu.services.classifier import has_daily_menu_indicators
from lunch_menu.services.preferences import apply_preferences_filter, calculate_recommended_meal

logger = logging.getLogger(__name__)


async def process_menu_request(
    url: str, date: str, preferences: Optional[Preferences] = None
) -> RestaurantMenu:
    """
    Main pipeline for a menu request.

    1. Derive the Czech weekday for the requested date
    2. Return the cached record for (url, date) if there is one
    3. Otherwise fetch the page and run the daily menu classifier
    4. No daily menu: resolve the name only and cache an empty menu
    5. Daily menu: extract items and resolve the name concurrently, cache
    6. Apply preferences to the returned copy only
    """
    day = czech_day_name(date)
    cache = cache_db.menu_cache

    menu = _load_cached_menu(url, date)
    if menu is not None:
        if preferences is None:
            return menu.model_copy(update={"recommendedMeal": None})
        return _with_preferences(menu, preferences)

    scraped = await scraper.fetch_page(url)
    page = PageContent(html=scraped.html, text=scraped.text, url=url, day=day)

    if not has_daily_menu_indicators(scraped.text):
        logger.info(f"No daily menu detected url={url} date={date}")
        name = await restaurant_name.extract_restaurant_name(page)
        menu = RestaurantMenu(
            restaurant_name=name,
            date=date,
            day_of_week=day,
            menu_items=[],
            daily_menu=False,
            recommendedMeal=None,
        )
        cache.save_menu_to_cache(url, date, menu.model_dump(mode="json"))
        return menu

    extraction_task = asyncio.ensure_future(menu_parser.extract_menu(page))
    name_task = asyncio.ensure_future(restaurant_name.extract_restaurant_name(page))
    try:
        extraction, name = await asyncio.gather(extraction_task, name_task)
    except BaseException:
        # extraction failed or the request was cancelled; stop the name lookup too
        name_task.cancel()
        extraction_task.cancel()
        raise

    menu = RestaurantMenu(
        restaurant_name=name,
        date=date,
        day_of_week=day,
        menu_items=list(extraction.items),
        daily_menu=len(extraction.items) > 0,
        recommendedMeal=None,
    )
    cache.save_menu_to_cache(url, date, menu.model_dump(mode="json"))
    logger.info(f"Menu processed url={url} date={date} items={len(menu.menu_items)}")

    if preferences is None:
        return menu
    return _with_preferences(menu, preferences)


def _load_cached_menu(url: str, date: str) -> Optional[RestaurantMenu]:
    """Cached menu for (url, date); entries that no longer match the model are dropped"""
    cache = cache_db.menu_cache
    cached = cache.get_cached_menu(url, date)
    if cached is None:
        return None

    try:
        return RestaurantMenu(**cached)
    except ValidationError as e:
        logger.warning(f"Invalid cached menu removed url={url} date={date} errors={e.error_count()}")
        cache.delete_cached_menu(url, date)
        return None


def _with_preferences(menu: RestaurantMenu, preferences: Preferences) -> RestaurantMenu:
    filtered = apply_preferences_filter(menu.menu_items, preferences)
    return menu.model_copy(
        update={
            "menu_items": filtered,
            "recommendedMeal": calculate_recommended_meal(filtered),
        }
    )


def get_cache_stats() -> Dict[str, Any]:
    """Get cache statistics for debugging"""
    return cache_db.menu_cache.get_stats()
