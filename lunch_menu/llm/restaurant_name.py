import logging

from lunch_menu.core.config import settings
from lunch_menu.fetch.utils import hostname_label
from lunch_menu.llm.client import get_llm_client
from lunch_menu.llm.prompts import RESTAURANT_NAME_SYSTEM_PROMPT, build_restaurant_name_user_prompt

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "unknown"
MAX_NAME_LENGTH = 100


def is_valid_restaurant_name(name: str) -> bool:
    return bool(name) and len(name) < MAX_NAME_LENGTH and name.lower() != UNKNOWN_NAME


def get_hostname_fallback(url: str) -> str:
    """www.restaurace.cz -> restaurace"""
    return hostname_label(url) or UNKNOWN_NAME


async def extract_restaurant_name(page, client=None) -> str:
    """
    Ask the model for the restaurant name. Never raises: an unusable answer
    or a failed call falls back to the URL hostname.
    """
    try:
        client = client or get_llm_client(settings.LLM_NAME_MODEL)
        prompt = build_restaurant_name_user_prompt(
            page.url,
            page.text[:settings.MAX_NAME_TEXT_LENGTH],
            page.html[:settings.MAX_NAME_HTML_LENGTH],
        )
        turn = await client.generate(
            system_prompt=RESTAURANT_NAME_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
            max_output_tokens=settings.MAX_NAME_TOKENS,
        )
        name = (turn.text or "").strip().strip("\"'").strip()

        if is_valid_restaurant_name(name):
            logger.info(f"Restaurant name resolved name={name!r} url={page.url}")
            return name
    except Exception as e:
        logger.warning(f"Restaurant name extraction failed url={page.url} error={e!r}")

    fallback = get_hostname_fallback(page.url)
    logger.info(f"Restaurant name fallback to hostname name={fallback!r} url={page.url}")
    return fallback
