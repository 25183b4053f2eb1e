import pytest

from lunch_menu.cache import db as cache_db
from lunch_menu.core import config


@pytest.fixture(autouse=True)
def setup_test_environment(tmp_path):
    """Fresh SQLite cache per test, API key set, scheduler off"""
    original_api_key = config.settings.API_KEY
    original_scheduler = config.settings.SCHEDULER_ENABLED

    config.settings.API_KEY = "test-key"
    config.settings.SCHEDULER_ENABLED = False

    cache_db.menu_cache.init(str(tmp_path / "cache.sqlite"))

    yield

    cache_db.menu_cache.close()
    config.settings.API_KEY = original_api_key
    config.settings.SCHEDULER_ENABLED = original_scheduler
