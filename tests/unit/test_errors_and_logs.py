import logging

from lunch_menu.core.errors import (
    ApiKeyNotConfiguredError,
    CacheReadFailedError,
    FetchFailedError,
    InvalidSchemaError,
    ValidationError,
)
from lunch_menu.core.logs import SensitiveDataFilter


class TestErrors:

    def test_codes_and_status(self):
        assert ValidationError().code == "restaurantMenuSummarizer/validation/invalidRequest"
        assert ValidationError().status_code == 400
        assert FetchFailedError().status_code == 502
        assert InvalidSchemaError().code == "restaurantMenuSummarizer/menuSchema/invalidSchema"
        assert CacheReadFailedError().status_code == 500
        assert ApiKeyNotConfiguredError().status_code == 500

    def test_to_dict_and_str(self):
        error = FetchFailedError(url="https://test.cz", reason="timeout")
        assert error.to_dict() == {
            "code": "restaurantMenuSummarizer/scraper/fetchFailed",
            "message": "Failed to fetch URL",
            "details": {"url": "https://test.cz", "reason": "timeout"},
        }
        assert str(error) == "Failed to fetch URL | reason=timeout | url=https://test.cz"


class TestSensitiveDataFilter:

    def _record(self, msg, *args):
        return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)

    def test_masks_credentials(self):
        record = self._record("calling model api_key=abc123 model=gemini")
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "calling model api_key=*** model=gemini"

    def test_masks_formatted_args(self):
        record = self._record("auth %s", "Authorization=Bearer-xyz")
        SensitiveDataFilter().filter(record)
        assert "Bearer-xyz" not in record.getMessage()

    def test_leaves_other_messages(self):
        record = self._record("Cache hit url=%s", "https://test.cz")
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "Cache hit url=https://test.cz"
