import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    # Database
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "data/cache.sqlite")
    TIMEZONE: str = os.getenv("TIMEZONE", "Europe/Prague")

    # API access
    API_KEY: Optional[str] = os.getenv("API_KEY")

    # LLM (Gemini)
    GOOGLE_API_KEY: Optional[str] = os.getenv("GOOGLE_API_KEY")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gemini-2.5-flash")
    LLM_NAME_MODEL: str = os.getenv("LLM_NAME_MODEL", "gemini-2.5-flash")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0"))
    LLM_TIMEOUT_SECONDS: int = int(os.getenv("LLM_TIMEOUT_SECONDS", "50"))
    LLM_MAX_ATTEMPTS: int = int(os.getenv("LLM_MAX_ATTEMPTS", "2"))
    MAX_TOOL_ITERATIONS: int = int(os.getenv("MAX_TOOL_ITERATIONS", "5"))

    # Content budgets sent to the LLM (characters)
    MAX_MENU_TEXT_LENGTH: int = int(os.getenv("MAX_MENU_TEXT_LENGTH", "12000"))
    MAX_MENU_HTML_LENGTH: int = int(os.getenv("MAX_MENU_HTML_LENGTH", "8000"))
    MAX_NAME_TEXT_LENGTH: int = int(os.getenv("MAX_NAME_TEXT_LENGTH", "2000"))
    MAX_NAME_HTML_LENGTH: int = int(os.getenv("MAX_NAME_HTML_LENGTH", "3000"))
    MAX_NAME_TOKENS: int = int(os.getenv("MAX_NAME_TOKENS", "50"))

    # Scraping
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "10"))
    FETCH_RETRIES: int = int(os.getenv("FETCH_RETRIES", "2"))
    FETCH_RETRY_DELAY: float = float(os.getenv("FETCH_RETRY_DELAY", "0.3"))
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36",
    )

    # Daily menu classifier, tuned for Czech lunch menus
    CLASSIFIER_CONTEXT_WINDOW: int = int(os.getenv("CLASSIFIER_CONTEXT_WINDOW", "400"))
    CLASSIFIER_NAV_THRESHOLD: int = int(os.getenv("CLASSIFIER_NAV_THRESHOLD", "3"))
    DAILY_PRICE_MIN: int = int(os.getenv("DAILY_PRICE_MIN", "60"))
    DAILY_PRICE_MAX: int = int(os.getenv("DAILY_PRICE_MAX", "200"))

    # Runtime
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SCHEDULER_ENABLED: bool = _env_bool("SCHEDULER_ENABLED", "1")

settings = Settings()
