import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from lunch_menu.core.config import settings
from lunch_menu.core.errors import FetchFailedError, HtmlEmptyError

logger = logging.getLogger(__name__)


@dataclass
class ScrapedPage:
    html: str
    text: str


def _request_headers() -> dict:
    return {
        "User-Agent": settings.USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "cs,en-US;q=0.7,en;q=0.3",
    }


def _is_transient(error: Exception) -> bool:
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return False


async def fetch_html(url: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """Fetch raw HTML, retrying network errors and 5xx responses with backoff."""
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(
            timeout=settings.REQUEST_TIMEOUT,
            headers=_request_headers(),
            follow_redirects=True,
        )

    try:
        attempt = 0
        while True:
            try:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
            except httpx.HTTPError as e:
                if attempt >= settings.FETCH_RETRIES or not _is_transient(e):
                    reason = _describe(e)
                    logger.error(f"Fetch failed url={url} reason={reason}")
                    raise FetchFailedError(url=url, reason=reason)
                backoff = settings.FETCH_RETRY_DELAY * (2 ** attempt)
                logger.warning(f"Fetch attempt {attempt + 1} failed for {url}, retrying in {backoff:.1f}s ({e})")
                await asyncio.sleep(backoff)
                attempt += 1
    finally:
        if owns_client:
            await client.aclose()


def _describe(error: httpx.HTTPError) -> str:
    if isinstance(error, httpx.TimeoutException):
        return "timeout"
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP error {error.response.status_code}"
    return str(error) or error.__class__.__name__


def extract_page_text(html: str) -> str:
    """Visible text of the page body with whitespace collapsed."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(["script", "style", "noscript", "iframe"]):
        tag.decompose()

    body = soup.body if soup.body else soup
    text = body.get_text(" ")
    return re.sub(r"\s+", " ", text).strip()


async def fetch_page(url: str, client: Optional[httpx.AsyncClient] = None) -> ScrapedPage:
    """
    Fetch a page and return its HTML together with the cleaned text.

    Raises FetchFailedError on network/HTTP failure and HtmlEmptyError when the
    body is blank.
    """
    logger.info(f"Fetch started url={url}")
    html = await fetch_html(url, client=client)

    if not html or not html.strip():
        logger.warning(f"Empty HTML response url={url}")
        raise HtmlEmptyError(url=url)

    logger.info(f"Fetch successful url={url} size={len(html)}")
    return ScrapedPage(html=html, text=extract_page_text(html))
