"""
AI Provider API Implementations

Chat-completions call for OpenAI and OpenAI-compatible endpoints. Takes a
prompt, returns the text of the first choice and the token usage.
"""

from typing import Any, Dict, Optional, Tuple

import httpx

from auto_translatr.logger import get_logger
from auto_translatr.ai.exceptions import TranslationError

logger = get_logger(__name__)


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 60.0),
            read=timeout_config.get('read', 120.0),
            pool=timeout_config.get('pool', 10.0),
        )
    timeout_value = float(timeout_config) if timeout_config else 120.0
    return httpx.Timeout(
        connect=10.0,
        write=60.0,
        read=timeout_value,
        pool=10.0,
    )


def handle_http_error(e: httpx.HTTPStatusError, provider: str):
    """Raise a TranslationError carrying the provider's error message."""
    status_code = e.response.status_code
    error_text = "Unknown error"

    try:
        error_json = e.response.json()
        if isinstance(error_json, dict) and "error" in error_json:
            error_detail = error_json["error"]
            if isinstance(error_detail, dict):
                error_text = error_detail.get("message", str(error_detail))
            else:
                error_text = str(error_detail)
    except ValueError:
        error_text = e.response.text[:500] or "No details"

    raise TranslationError(
        f"{provider} API error ({status_code}): {error_text}",
        code="http_error",
        details={"provider": provider, "response": error_text},
        status_code=status_code,
    )


async def call_openai_api_text(
    prompt: str,
    model: str,
    api_key: str,
    api_url: str,
    timeout: Any = 120,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    provider: str = "OpenAI",
) -> Tuple[str, Dict[str, int]]:
    """
    Send one user message to a chat-completions endpoint.

    Returns:
        (content, token_usage)

    Raises:
        TranslationError: On HTTP errors, timeouts or malformed responses
    """
    if not api_key or api_key == "YOUR_API_KEY_HERE":
        raise TranslationError(
            f"{provider} API key not configured",
            code="ai_config_missing",
            details={"provider": provider, "missing_field": "api_key"},
        )

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json"
    }

    body = {
        "model": model,
        "messages": [
            {"role": "user", "content": prompt},
        ],
    }

    logger.debug(f"  Calling {provider} API (model: {model})...")

    try:
        async with httpx.AsyncClient(timeout=get_httpx_timeout(timeout), transport=transport) as client:
            response = await client.post(api_url, headers=headers, json=body)
            response.raise_for_status()
            result = response.json()
    except httpx.HTTPStatusError as e:
        handle_http_error(e, provider)
    except httpx.TimeoutException:
        raise TranslationError(f"{provider} API request timeout", code="timeout")
    except httpx.HTTPError as e:
        raise TranslationError(f"{provider} API call failed: {e}", code="transport_error")
    except ValueError as e:
        raise TranslationError(f"{provider} API returned invalid JSON: {e}", code="invalid_response")

    if isinstance(result, dict) and result.get("error"):
        error = result["error"]
        message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
        raise TranslationError(f"{provider} API error: {message}", code="api_error")

    choices = result.get("choices") if isinstance(result, dict) else None
    if not choices:
        raise TranslationError(f"No response from {provider} API", code="invalid_response")

    content = (choices[0].get("message") or {}).get("content")
    if content is None:
        raise TranslationError(f"No content in {provider} response", code="invalid_response")

    usage = result.get("usage") or {}
    token_usage = {
        'prompt_tokens': usage.get('prompt_tokens', 0),
        'completion_tokens': usage.get('completion_tokens', 0),
    }
    logger.debug(f"  Received {len(content)} chars from {provider} (tokens: {token_usage})")
    return content, token_usage
