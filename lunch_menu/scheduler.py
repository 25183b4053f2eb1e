"""
Background scheduler for the midnight cache sweep.

Uses APScheduler; the sweep is a plain function so it runs in the
scheduler's thread pool and only blocks on the cache lock.
"""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from lunch_menu.cache import db as cache_db
from lunch_menu.core.config import settings
from lunch_menu.core.errors import CacheError

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler(timezone=settings.TIMEZONE)


def run_cache_invalidation():
    """Delete cache entries from previous days. Scheduled at local midnight."""
    logger.info("Starting scheduled cache invalidation")
    try:
        deleted = cache_db.menu_cache.invalidate_old_records()
        logger.info(f"Scheduled cache invalidation completed deleted={deleted}")
    except CacheError as e:
        logger.error(f"Scheduled cache invalidation failed: {e}")


def start_scheduler():
    """Initialize and start the scheduler"""
    scheduler.add_job(
        run_cache_invalidation,
        CronTrigger(hour=0, minute=0, timezone=settings.TIMEZONE),
        id="midnight_cache_invalidation",
        name="Midnight Cache Invalidation",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started timezone={settings.TIMEZONE}")


def stop_scheduler():
    """Stop the scheduler"""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
