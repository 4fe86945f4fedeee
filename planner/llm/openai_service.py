"""
OpenAI Service - Structured JSON completions from an OpenAI-compatible API.

Calls are retried on transient failures only (429, timeouts, dropped
connections, 5xx). Rate-limit retries wait as long as the server asks,
everything else backs off exponentially with jitter.
"""
from typing import Any, Dict, Optional, Tuple
import copy
import json
import logging
import re

import openai
from openai import OpenAI
from tenacity import RetryCallState, retry, retry_if_exception, wait_exponential, wait_random

from planner.exceptions import UnparsableResponse
from planner.llm.interfaces import LLMProvider
from planner.llm.system_prompts import DEFAULT_EXTRACTION_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
MAX_RATE_LIMIT_WAIT = 120.0
RATE_LIMIT_MARGIN = 1.2

TRANSIENT_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)

_DURATION_PART = re.compile(r"([\d.]+)(ms|s|m|h)")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}
_TRY_AGAIN = re.compile(r"try again in ([\d.]+)(ms|s)\b")
_RESET_HEADERS = ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens")

_backoff = wait_exponential(multiplier=2, min=2, max=60) + wait_random(0, 1)


def is_transient(exc: BaseException) -> bool:
    return isinstance(exc, TRANSIENT_ERRORS)


def duration_seconds(value: str) -> float:
    """'500ms' -> 0.5, '1m30s' -> 90.0; unparsable text gives 0.0."""
    return sum(float(amount) * _UNIT_SECONDS[unit] for amount, unit in _DURATION_PART.findall(value))


def header_wait(exc: openai.APIStatusError) -> float:
    """Longest wait announced by ``retry-after`` or the x-ratelimit-reset-* headers."""
    headers = exc.response.headers
    waits = [duration_seconds(headers.get(name, "")) for name in _RESET_HEADERS]

    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            waits.append(float(retry_after))
        except ValueError:
            logger.debug(f"Ignoring non-numeric retry-after header: {retry_after!r}")
    return max(waits)


def message_wait(message: str) -> float:
    """Wait hinted in error text such as 'Please try again in 979.99ms'."""
    match = _TRY_AGAIN.search(message)
    if match is None:
        return 0.0
    return float(match.group(1)) * _UNIT_SECONDS[match.group(2)]


def _next_wait(retry_state: RetryCallState) -> float:
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        declared = max(header_wait(exc), message_wait(str(exc)))
        if declared > 0:
            return min(declared * RATE_LIMIT_MARGIN, MAX_RATE_LIMIT_WAIT)
    return _backoff(retry_state)


def _attempts_exhausted(retry_state: RetryCallState) -> bool:
    # args[0] is the OpenAIService instance
    service = retry_state.args[0] if retry_state.args else None
    limit = getattr(service, "max_attempts", DEFAULT_MAX_ATTEMPTS)
    return retry_state.attempt_number >= limit


def _before_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception()
    kind = "Rate limited" if isinstance(exc, openai.RateLimitError) else "Transient API error"
    logger.warning(
        f"{kind} on attempt {retry_state.attempt_number}, "
        f"retrying in {retry_state.next_action.sleep:.1f}s: {exc}"
    )


def transient_retry():
    """tenacity decorator shared by every LLM call."""
    return retry(
        retry=retry_if_exception(is_transient),
        wait=_next_wait,
        stop=_attempts_exhausted,
        before_sleep=_before_retry,
        reraise=True,
    )


def split_schema_spec(spec: Dict[str, Any]) -> Tuple[str, bool, Dict[str, Any]]:
    """Return (name, strict, schema) for a wrapped spec or a bare JSON schema."""
    if "schema" in spec and "name" in spec:
        return spec["name"], bool(spec.get("strict", False)), spec["schema"]
    return "extraction_response", False, spec


class OpenAIService(LLMProvider):
    """
    LLM provider for any OpenAI-compatible endpoint (OpenAI, Groq, Ollama, ...).

    model_config keys: ranking_model, temperature, max_tokens, max_attempts.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None
    ):
        client_kwargs = {}
        if api_key:
            client_kwargs['api_key'] = api_key
        if base_url:
            client_kwargs['base_url'] = base_url
        self.client = OpenAI(**client_kwargs)

        model_config = model_config or {}
        self.ranking_model = model_config.get('ranking_model', 'gpt-4o-mini')
        self.temperature = model_config.get('temperature', 0.2)
        self.max_tokens = model_config.get('max_tokens', 800)
        self.max_attempts = model_config.get('max_attempts', DEFAULT_MAX_ATTEMPTS)

    @classmethod
    def from_config(cls, llm_config) -> "OpenAIService":
        return cls(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config={
                'ranking_model': llm_config.ranking_model,
                'temperature': llm_config.temperature,
                'max_tokens': llm_config.max_tokens,
                'max_attempts': llm_config.max_attempts,
            }
        )

    @transient_retry()
    def extract_structured_data(
        self,
        text: str,
        schema_spec: Dict,
        system_prompt: Optional[str] = None,
        user_message: Optional[str] = None
    ) -> Dict[str, Any]:
        """Ask the model for a JSON object matching ``schema_spec``.

        Raises:
            ValueError: the schema is not a JSON Schema object
            UnparsableResponse: the reply is not a JSON object
            openai.APIError: non-transient API failure, or transient one
                after ``max_attempts``
        """
        name, strict, schema = split_schema_spec(schema_spec)
        if schema.get("type") != "object" or "properties" not in schema:
            raise ValueError(f"Not a valid JSON Schema object. Top-level keys: {list(schema.keys())}")

        response = self.client.chat.completions.create(
            model=self.ranking_model,
            messages=[
                {"role": "system", "content": system_prompt or DEFAULT_EXTRACTION_SYSTEM_PROMPT},
                {"role": "user", "content": user_message or text},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": name, "schema": copy.deepcopy(schema), "strict": strict},
            },
        )

        try:
            data = json.loads(response.choices[0].message.content)
        except (json.JSONDecodeError, TypeError, IndexError, AttributeError) as e:
            logger.error(f"Could not decode {self.ranking_model} response: {e}")
            raise UnparsableResponse(f"Model response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise UnparsableResponse(f"Expected a JSON object, got {type(data).__name__}")
        return data
