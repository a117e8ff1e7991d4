"""
AI Translation Service Module

AIService wraps the provider call into the single ``send(prompt) -> text``
coroutine the translation pipeline expects, and owns the retry policy and
token accounting. The pipeline itself never retries.
"""

import asyncio
from typing import Dict, Optional, Tuple

import httpx

from auto_translatr.ai.exceptions import TranslationError
from auto_translatr.ai.providers import call_openai_api_text
from auto_translatr.config import OpenAIConfig
from auto_translatr.logger import get_logger

logger = get_logger(__name__)


def clean_reply(text: str) -> str:
    """
    Strip surrounding whitespace and markdown code fences from a model reply.

    Examples:
        >>> clean_reply("  Bonjour\\n")
        'Bonjour'
        >>> clean_reply("```\\nBonjour\\n```")
        'Bonjour'
    """
    text = text.strip()
    if text.startswith('```'):
        lines = text.split('\n')
        lines = lines[1:]
        if lines and lines[-1].strip() == '```':
            lines = lines[:-1]
        text = '\n'.join(lines).strip()
    return text


class AIService:
    """LLM backend for translation."""

    def __init__(self, config: OpenAIConfig, transport: Optional[httpx.AsyncBaseTransport] = None,
                 sleep=asyncio.sleep):
        self.config = config
        self.transport = transport
        self._sleep = sleep
        # Token usage tracking
        self._last_token_usage = {'prompt_tokens': 0, 'completion_tokens': 0}
        self.total_prompt_tokens = 0
        self.total_completion_tokens = 0
        self.request_count = 0
        logger.info(f"Initialized AI service with model: {config.model}")

    def get_total_token_usage(self) -> Dict[str, int]:
        return {
            'prompt_tokens': self.total_prompt_tokens,
            'completion_tokens': self.total_completion_tokens,
        }

    def accumulate_tokens(self):
        """Add last call's tokens to total."""
        self.total_prompt_tokens += self._last_token_usage.get('prompt_tokens', 0)
        self.total_completion_tokens += self._last_token_usage.get('completion_tokens', 0)

    async def send(self, prompt: str) -> str:
        """
        Send a prompt and return the model's text reply.

        Retryable errors are retried up to ``max_retries`` attempts in total.

        Raises:
            TranslationError: When the last attempt fails or the error is not retryable
        """
        max_retries = self.config.max_retries
        last_error = None

        for attempt in range(max_retries):
            if attempt > 0:
                logger.info(f"  Retry attempt {attempt + 1}/{max_retries}")

            try:
                content, token_usage = await call_openai_api_text(
                    prompt,
                    model=self.config.model,
                    api_key=self.config.api_key,
                    api_url=self.config.api_url,
                    timeout=self.config.timeout,
                    transport=self.transport,
                )
            except TranslationError as e:
                last_error = e
                should_retry, wait_time = self._categorize_error(e, attempt)

                if not should_retry:
                    logger.error(f"  Non-recoverable error: {e}")
                    if e.details:
                        logger.debug(f"  Error details: {e.details}")
                    raise
                if attempt < max_retries - 1:
                    logger.warning(f"  Attempt {attempt + 1} failed: {e}. Waiting {wait_time}s before retry...")
                    await self._sleep(wait_time)
                continue

            self.request_count += 1
            self._last_token_usage = token_usage
            self.accumulate_tokens()
            return clean_reply(content)

        raise last_error

    def _categorize_error(self, error: TranslationError, attempt: int) -> Tuple[bool, float]:
        """
        Decide whether an error is worth retrying.

        Returns:
            Tuple of (should_retry, wait_time_seconds)
        """
        status = error.status_code

        if error.code == "ai_config_missing":
            return False, 0

        # Rate limiting - long backoff
        if status == 429:
            return True, min(30 * (2 ** attempt), 300)

        # Authentication and bad requests won't get better
        if status in (400, 401, 403, 404):
            return False, 0

        if status is not None and status >= 500:
            return True, 2 ** attempt

        if error.code == "timeout":
            return True, 5 * (2 ** attempt)

        if error.code == "invalid_response":
            return attempt < 1, 1.0

        return True, 2 ** attempt
