import logging
import re

from lunch_menu.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

SENSITIVE_KEYS = ("api_key", "apikey", "token", "authorization", "password", "secret")

_SENSITIVE_PAIR = re.compile(
    r"(?P<key>\b\w*(?:" + "|".join(SENSITIVE_KEYS) + r")\w*)=(?P<value>[^\s,|]+)",
    re.IGNORECASE,
)


class SensitiveDataFilter(logging.Filter):
    """Mask values of key=value pairs whose key looks like a credential."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _SENSITIVE_PAIR.sub(lambda m: f"{m.group('key')}=***", message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(level: str = None) -> None:
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(logging.StreamHandler())

    for handler in root.handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        if not any(isinstance(f, SensitiveDataFilter) for f in handler.filters):
            handler.addFilter(SensitiveDataFilter())
