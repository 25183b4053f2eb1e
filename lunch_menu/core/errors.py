"""
Application error taxonomy.

Every error carries a stable ``code`` (``restaurantMenuSummarizer/<area>/<name>``),
a human readable ``message``, free-form ``details`` and the HTTP status the API
layer answers with.
"""
from typing import Any, Dict

ERROR_PREFIX = "restaurantMenuSummarizer/"


class AppError(Exception):
    area: str = "app"
    name: str = "error"
    message: str = "Application error"
    status_code: int = 500

    def __init__(self, message: str = None, **details: Any):
        self.message = message or self.message
        self.details: Dict[str, Any] = details
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return f"{ERROR_PREFIX}{self.area}/{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        meta = " | ".join(f"{k}={v}" for k, v in sorted(self.details.items()))
        return f"{self.message} | {meta}"


# Validation

class ValidationError(AppError):
    area = "validation"
    name = "invalidRequest"
    message = "Request validation failed"
    status_code = 400


class InvalidDateFormatError(ValidationError):
    name = "invalidDateFormat"
    message = "date must be in YYYY-MM-DD format"


# Auth

class AuthError(AppError):
    area = "auth"
    status_code = 401


class ApiKeyMissingError(AuthError):
    name = "apiKeyMissing"
    message = "API key is required"


class UnauthorizedError(AuthError):
    name = "unauthorized"
    message = "Invalid or missing API key"


class ApiKeyNotConfiguredError(AuthError):
    name = "notConfigured"
    message = "API key not configured on server"
    status_code = 500


# Scraper

class ScraperError(AppError):
    area = "scraper"
    status_code = 502


class FetchFailedError(ScraperError):
    name = "fetchFailed"
    message = "Failed to fetch URL"


class HtmlEmptyError(ScraperError):
    name = "htmlEmpty"
    message = "Empty HTML response"


# LLM

class LLMError(AppError):
    area = "llm"


class LLMApiKeyMissingError(LLMError):
    name = "apiKeyMissing"
    message = "GOOGLE_API_KEY not set"


class InvalidJsonError(LLMError):
    name = "invalidJson"
    message = "Invalid JSON returned from LLM"


class ExtractionFailedError(LLMError):
    name = "extractionFailed"
    message = "LLM extraction failed"


class InvalidSchemaError(AppError):
    area = "menuSchema"
    name = "invalidSchema"
    message = "LLM output did not match menu schema"


# Cache

class CacheError(AppError):
    area = "cache"


class CacheNotInitializedError(CacheError):
    name = "notInitialized"
    message = "Cache not initialized. Call init() first."


class CacheInitFailedError(CacheError):
    name = "initFailed"
    message = "Failed to initialize cache database"


class CacheReadFailedError(CacheError):
    name = "readFailed"
    message = "Failed to get cached menu"


class CacheWriteFailedError(CacheError):
    name = "writeFailed"
    message = "Failed to save menu to cache"


class CacheInvalidateFailedError(CacheError):
    name = "invalidateFailed"
    message = "Failed to invalidate old records"


class CacheCloseFailedError(CacheError):
    name = "closeFailed"
    message = "Failed to close database"
