from datetime import date, timedelta
from unittest.mock import patch

from lunch_menu import scheduler
from lunch_menu.cache import db as cache_db
from lunch_menu.core.errors import CacheInvalidateFailedError
from lunch_menu.fetch.utils import today_local_str


class TestScheduledInvalidation:

    def test_run_cache_invalidation_removes_stale_entries(self):
        yesterday = (date.fromisoformat(today_local_str()) - timedelta(days=1)).isoformat()
        cache_db.menu_cache.save_menu_to_cache("https://old.com", yesterday, {"daily_menu": True})
        cache_db.menu_cache.save_menu_to_cache("https://new.com", today_local_str(), {"daily_menu": True})

        scheduler.run_cache_invalidation()

        assert cache_db.menu_cache.get_stats()["total_entries"] == 1

    def test_run_cache_invalidation_logs_failure(self, caplog):
        with patch.object(
            cache_db.menu_cache, "invalidate_old_records", side_effect=CacheInvalidateFailedError(reason="locked")
        ):
            scheduler.run_cache_invalidation()

        assert "Scheduled cache invalidation failed" in caplog.text

    def test_midnight_job_registered(self):
        with patch.object(scheduler.scheduler, "start") as start:
            scheduler.start_scheduler()

        job = scheduler.scheduler.get_job("midnight_cache_invalidation")
        assert job is not None
        assert str(job.trigger.fields[5]) == "0"  # hour
        assert str(job.trigger.fields[6]) == "0"  # minute
        start.assert_called_once()
        scheduler.scheduler.remove_job("midnight_cache_invalidation")
