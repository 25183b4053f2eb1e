import re
from datetime import date, datetime
from typing import Optional, Union
from urllib.parse import urlparse
from zoneinfo import ZoneInfo

from lunch_menu.core.config import settings
from lunch_menu.core.errors import InvalidDateFormatError

CZ_WEEKDAYS = ["pondělí", "úterý", "středa", "čtvrtek", "pátek", "sobota", "neděle"]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def today_local_str() -> str:
    """Get today's date in the configured timezone as ISO string"""
    return datetime.now(local_tz()).date().isoformat()


def now_local_iso() -> str:
    return datetime.now(local_tz()).isoformat(timespec="seconds")


def parse_iso_date(date_str: str) -> date:
    """Parse strict YYYY-MM-DD, rejecting impossible calendar dates."""
    if not isinstance(date_str, str) or not _ISO_DATE.match(date_str.strip()):
        raise InvalidDateFormatError(date=date_str)
    try:
        return date.fromisoformat(date_str.strip())
    except ValueError:
        raise InvalidDateFormatError(date=date_str)


def czech_day_name(date_str: str) -> str:
    """
    Czech weekday name for a YYYY-MM-DD date.
    Example: '2025-11-24' -> 'Pondělí'
    """
    return CZ_WEEKDAYS[parse_iso_date(date_str).weekday()].capitalize()


def normalize_price(raw: Union[str, int, float, None]) -> float:
    """
    Normalize price notation to a number.
    Examples: '145,-' -> 145, '145,50 Kč' -> 145.5, 145 -> 145, None -> 0

    Invalid text yields 0 instead of raising.
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return raw

    cleaned = re.sub(r"[^\d,.]", "", str(raw))
    # Czech notation uses comma as decimal separator
    normalized = cleaned.replace(",", ".", 1)

    match = re.match(r"\d+(?:\.\d+)?|\.\d+", normalized)
    if not match:
        return 0
    return float(match.group())


def hostname_label(url: str) -> Optional[str]:
    """
    First DNS label of the URL host without a leading 'www.'.
    Example: 'https://www.restaurace.cz/menu' -> 'restaurace'
    """
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    if host.startswith("www."):
        host = host[4:]
    return host.split(".")[0] or None
