import hmac
import logging
from typing import Optional

from fastapi import Header

from lunch_menu.core.config import settings
from lunch_menu.core.errors import ApiKeyMissingError, ApiKeyNotConfiguredError, UnauthorizedError

logger = logging.getLogger(__name__)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_api_key(
    x_api_key: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
):
    """Accept the key from x-api-key or an Authorization: Bearer header"""
    expected = settings.API_KEY
    if not expected:
        logger.error("API key is not configured on the server")
        raise ApiKeyNotConfiguredError()

    provided = x_api_key or _bearer_token(authorization)
    if not provided:
        raise ApiKeyMissingError()

    if not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning("Request rejected with invalid API key")
        raise UnauthorizedError()
