"""
Menu extraction over a bounded tool-calling conversation.

The model receives the page content and may call ``normalize_price`` any
number of times before answering with the final JSON. The conversation is a
small state machine driven by an iteration counter:

    ask -> (tool calls -> execute -> ask)* -> final JSON | iteration limit

Prices in the final answer are normalized again locally, so a model that
skips the tool still yields numeric prices.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from lunch_menu.core.config import settings
from lunch_menu.core.errors import (
    AppError,
    ExtractionFailedError,
    InvalidJsonError,
    InvalidSchemaError,
)
from lunch_menu.fetch.utils import normalize_price
from lunch_menu.llm.client import LLMTurn, ToolCall, get_llm_client, strip_code_fences
from lunch_menu.llm.prompts import MENU_EXTRACTION_SYSTEM_PROMPT, build_menu_extraction_user_prompt
from lunch_menu.schemas import ExtractionResult, MenuItem

logger = logging.getLogger(__name__)

NORMALIZE_PRICE_TOOL = {
    "name": "normalize_price",
    "description": "Normalize a Czech price string like '145,-' or '145,50 Kč' into a number",
    "parameters": {
        "type": "object",
        "properties": {
            "raw": {"type": "string", "description": "Price exactly as written on the page"},
        },
        "required": ["raw"],
    },
}


@dataclass
class PageContent:
    html: str
    text: str
    url: str
    day: str


def execute_tool_call(call: ToolCall) -> Dict[str, Any]:
    """Run a tool requested by the model and return its result payload"""
    if call.name == NORMALIZE_PRICE_TOOL["name"]:
        raw = call.args.get("raw")
        price = normalize_price(raw)
        logger.debug(f"Price normalized from={raw!r} to={price}")
        return {"price": price}

    logger.warning(f"Model requested unknown tool name={call.name}")
    return {"error": f"Unknown tool: {call.name}"}


def validate_raw_menu_response(parsed: Any, url: str) -> None:
    """Check the parsed answer has an items list of named, categorized items"""
    if not isinstance(parsed, dict):
        _schema_error("Response is not an object", url)

    items = parsed.get("items")
    if not isinstance(items, list):
        _schema_error("Missing or invalid items array", url)

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            _schema_error("Item is not an object", url, index)

        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            _schema_error("Invalid item name", url, index)

        category = item.get("category")
        if not isinstance(category, str) or not category.strip():
            _schema_error("Missing or invalid category", url, index)


def _schema_error(reason: str, url: str, index: Optional[int] = None):
    logger.error(f"Schema validation failed reason={reason} url={url} item={index}")
    details = {"reason": reason, "url": url}
    if index is not None:
        details["item"] = index
    raise InvalidSchemaError(**details)


def _parse_final_answer(turn: LLMTurn, url: str) -> Dict[str, Any]:
    if not turn.text or not turn.text.strip():
        logger.error(f"Invalid JSON returned (empty content) url={url}")
        raise InvalidJsonError(url=url, reason="empty content")

    try:
        return json.loads(strip_code_fences(turn.text))
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse failed url={url} error={e}")
        raise InvalidJsonError(url=url, reason=str(e))


def _normalize_items(raw_items: List[Dict[str, Any]], url: str) -> List[MenuItem]:
    items = []
    for index, raw in enumerate(raw_items):
        try:
            items.append(
                MenuItem(
                    name=raw["name"].strip(),
                    price=normalize_price(raw.get("price")),
                    allergens=raw.get("allergens"),
                    weight=raw.get("weight"),
                    category=raw["category"],
                )
            )
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            _schema_error(f"Invalid item field {field}: {first['msg']}", url, index)
        except (TypeError, ValueError) as e:
            _schema_error(f"Invalid item fields: {e}", url, index)
    return items


async def extract_menu(page: PageContent, client=None) -> ExtractionResult:
    """
    Extract the daily menu items for ``page.day`` from the page.

    Raises InvalidJsonError, InvalidSchemaError or ExtractionFailedError.
    """
    client = client or get_llm_client()

    logger.info(f"Extraction started url={page.url} day={page.day}")

    text = page.text[:settings.MAX_MENU_TEXT_LENGTH]
    html = page.html[:settings.MAX_MENU_HTML_LENGTH]
    messages: List[Dict[str, Any]] = [
        {"role": "user", "content": build_menu_extraction_user_prompt(page.day, page.url, text, html)}
    ]

    for iteration in range(settings.MAX_TOOL_ITERATIONS):
        try:
            turn = await client.generate(
                system_prompt=MENU_EXTRACTION_SYSTEM_PROMPT,
                messages=messages,
                tools=[NORMALIZE_PRICE_TOOL],
                json_output=True,
            )
        except AppError:
            raise
        except Exception as e:
            logger.error(f"LLM extraction call failed url={page.url} error={e!r}")
            raise ExtractionFailedError(url=page.url, reason=str(e) or e.__class__.__name__)

        if turn.tool_calls:
            logger.debug(
                f"Turn {iteration + 1}: {len(turn.tool_calls)} tool call(s) url={page.url}"
            )
            messages.append({"role": "model", "content": turn.text, "tool_calls": turn.tool_calls})
            for call in turn.tool_calls:
                messages.append({"role": "tool", "name": call.name, "content": execute_tool_call(call)})
            continue

        parsed = _parse_final_answer(turn, page.url)
        validate_raw_menu_response(parsed, page.url)
        result = ExtractionResult(items=_normalize_items(parsed["items"], page.url))

        logger.info(
            f"Extraction successful url={page.url} items={len(result.items)} turns={iteration + 1}"
        )
        return result

    logger.error(f"Extraction hit iteration limit url={page.url}")
    raise ExtractionFailedError(
        url=page.url,
        reason="iteration limit",
        max_iterations=settings.MAX_TOOL_ITERATIONS,
    )
