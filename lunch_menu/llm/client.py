"""
Gemini adapter.

The rest of the code talks to the model through ``generate()`` with a small,
provider neutral conversation format:

    {"role": "user", "content": "..."}
    {"role": "model", "content": "...", "tool_calls": [ToolCall, ...]}
    {"role": "tool", "name": "normalize_price", "content": {...}}

and gets back an ``LLMTurn`` holding either final text or tool calls.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from lunch_menu.core.config import settings
from lunch_menu.core.errors import LLMApiKeyMissingError

logger = logging.getLogger(__name__)


@dataclass
class ToolCall:
    name: str
    args: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LLMTurn:
    text: Optional[str] = None
    tool_calls: List[ToolCall] = field(default_factory=list)


def strip_code_fences(content: str) -> str:
    """Remove a ```json ... ``` wrapper the model sometimes adds"""
    content = content.strip()
    if content.startswith("```json"):
        content = content[7:]
    elif content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    return content.strip()


def _is_transient(error: Exception) -> bool:
    if isinstance(error, asyncio.TimeoutError):
        return True
    msg = str(error).lower()
    return "timeout" in msg or "deadline" in msg or "503" in msg or "504" in msg


class GeminiClient:
    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        self.model_name = model_name or settings.LLM_MODEL

    def _genai(self):
        if not self.api_key:
            raise LLMApiKeyMissingError()

        import google.generativeai as genai

        genai.configure(api_key=self.api_key)
        return genai

    async def generate(
        self,
        system_prompt: str,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        json_output: bool = False,
        max_output_tokens: Optional[int] = None,
    ) -> LLMTurn:
        genai = self._genai()

        config = {"temperature": settings.LLM_TEMPERATURE}
        # Gemini rejects JSON mime type together with function calling
        if json_output and not tools:
            config["response_mime_type"] = "application/json"
        if max_output_tokens:
            config["max_output_tokens"] = max_output_tokens

        model = genai.GenerativeModel(
            self.model_name,
            system_instruction=system_prompt,
            tools=[_to_tool(genai, tools)] if tools else None,
            generation_config=genai.GenerationConfig(**config),
        )
        contents = [_to_content(genai, message) for message in messages]

        max_attempts = max(1, settings.LLM_MAX_ATTEMPTS)
        for attempt in range(max_attempts):
            try:
                logger.debug(
                    f"LLM call model={self.model_name} attempt={attempt + 1}/{max_attempts} "
                    f"turns={len(contents)} timeout={settings.LLM_TIMEOUT_SECONDS}s"
                )
                response = await asyncio.wait_for(
                    model.generate_content_async(contents),
                    timeout=settings.LLM_TIMEOUT_SECONDS,
                )
                return parse_response(response)
            except Exception as e:
                if attempt < max_attempts - 1 and _is_transient(e):
                    backoff = 0.7 * (attempt + 1)
                    logger.warning(f"LLM transient error, retrying in {backoff:.1f}s... ({e!r})")
                    await asyncio.sleep(backoff)
                    continue
                raise


def parse_response(response) -> LLMTurn:
    """Collect text and function calls from the first candidate"""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return LLMTurn()

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    texts = []
    tool_calls = []
    for part in parts:
        function_call = getattr(part, "function_call", None)
        if function_call is not None and getattr(function_call, "name", ""):
            args = {key: value for key, value in (function_call.args or {}).items()}
            tool_calls.append(ToolCall(name=function_call.name, args=args))
        elif getattr(part, "text", ""):
            texts.append(part.text)

    return LLMTurn(text="".join(texts) or None, tool_calls=tool_calls)


_SCHEMA_TYPES = {
    "object": "OBJECT",
    "string": "STRING",
    "number": "NUMBER",
    "integer": "INTEGER",
    "boolean": "BOOLEAN",
    "array": "ARRAY",
}


def _to_schema(genai, schema: Dict[str, Any]):
    kwargs = {"type_": getattr(genai.protos.Type, _SCHEMA_TYPES[schema.get("type", "string")])}
    if "description" in schema:
        kwargs["description"] = schema["description"]
    if "properties" in schema:
        kwargs["properties"] = {
            name: _to_schema(genai, prop) for name, prop in schema["properties"].items()
        }
    if "required" in schema:
        kwargs["required"] = list(schema["required"])
    if "items" in schema:
        kwargs["items"] = _to_schema(genai, schema["items"])
    return genai.protos.Schema(**kwargs)


def _to_tool(genai, tools: List[Dict[str, Any]]):
    return genai.protos.Tool(
        function_declarations=[
            genai.protos.FunctionDeclaration(
                name=tool["name"],
                description=tool.get("description", ""),
                parameters=_to_schema(genai, tool["parameters"]),
            )
            for tool in tools
        ]
    )


def _to_content(genai, message: Dict[str, Any]):
    protos = genai.protos
    role = message["role"]

    if role == "tool":
        part = protos.Part(
            function_response=protos.FunctionResponse(
                name=message["name"], response=message["content"]
            )
        )
        return protos.Content(role="user", parts=[part])

    parts = []
    if message.get("content"):
        parts.append(protos.Part(text=message["content"]))
    for call in message.get("tool_calls", []):
        parts.append(protos.Part(function_call=protos.FunctionCall(name=call.name, args=call.args)))
    return protos.Content(role="model" if role == "model" else "user", parts=parts)


def get_llm_client(model_name: Optional[str] = None) -> GeminiClient:
    return GeminiClient(model_name=model_name)
