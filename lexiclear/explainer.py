"""
Legal term explanation: cache, language model call, and fallback content.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from .config import Settings
from .fallback import generate_fallback
from .logger import mask_secret
from .memory_cache import TermCache
from .models import Explanation
from .openai_client import (
    OpenAIClient, OpenAIAPIError, RateLimitError, AuthenticationError,
    UpstreamTimeoutError, has_valid_key_format,
)

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a legal expert. Provide clear, concise explanations of legal terms. "
    "Always return valid JSON with definition, example, and implications keys."
)

USER_PROMPT = """Explain the legal term "{term}" in plain English.
Provide a concise definition, a practical example, and 2-3 implications.
Return your response as valid JSON with these keys:
- definition (string)
- example (string)
- implications (array of strings)
"""


class ExplanationError(Exception):
    """Failure reported to the caller instead of fallback content."""
    def __init__(self, message: str, status_code: int, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def parse_explanation(content: str) -> Explanation:
    """
    Parse model output into an Explanation.

    Raises:
        ValueError: If the content is not a JSON string or lacks the expected keys
    """
    if not isinstance(content, str):
        raise ValueError(f"Expected text content, got {type(content).__name__}")
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return Explanation.model_validate(data)


class ExplanationService:
    """
    Resolves a term to an Explanation.

    Upstream capacity problems (rate limits, timeouts, unusable output) and
    a missing API key degrade to fallback content. A malformed key and
    explicit auth/server errors from the API are raised as ExplanationError.
    """

    def __init__(self, cache: TermCache, settings: Settings, client: Optional[OpenAIClient]):
        """
        Args:
            cache: Shared term cache
            settings: Service settings
            client: OpenAI client, None when no API key is configured
        """
        self.cache = cache
        self.settings = settings
        self.client = client

    def _fallback(self, term: str, reason: str) -> Explanation:
        logger.info(f"Returning fallback explanation for '{term}' ({reason})")
        explanation = generate_fallback(term, reason)
        self.cache.put(term, explanation)
        return explanation

    async def explain(self, term: Optional[str]) -> Explanation:
        """
        Explain a legal term.

        Args:
            term: Raw term from the request

        Returns:
            Explanation from the model, the cache, or the fallback generator

        Raises:
            ExplanationError: For empty input, a malformed API key, or
                              auth/server errors reported by the API
        """
        term = (term or "").strip()
        if not term:
            raise ExplanationError("No term provided", 400)

        try:
            return await self._resolve(term)
        except ExplanationError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error explaining '{term}': {self._mask(str(e))}")
            return generate_fallback(term, "service temporarily unavailable")

    async def _resolve(self, term: str) -> Explanation:
        cached = self.cache.get(term)
        if cached is not None:
            logger.info(f"Returning cached explanation for '{term}'")
            return cached

        if self.client is None:
            return self._fallback(term, "API not configured")

        if not has_valid_key_format(self.client.api_key):
            logger.error("Invalid API key format")
            raise ExplanationError("Invalid API key format", 500)

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": USER_PROMPT.format(term=term)},
        ]

        try:
            content = await self.client.chat_completion(
                messages,
                model=self.settings.openai_model,
                timeout=self.settings.explain_timeout,
                temperature=0.3,
                max_tokens=500,
                json_mode=True,
            )
        except RateLimitError:
            logger.warning(f"Rate limit exceeded while explaining '{term}'")
            return self._fallback(term, "API rate limit exceeded")
        except UpstreamTimeoutError:
            logger.error(f"Request timeout for '{term}'")
            return self._fallback(term, "request timeout")
        except AuthenticationError as e:
            logger.error(f"OpenAI API error: {e.status_code} {self._mask(e.body)}")
            raise ExplanationError(
                "Invalid API key - please check your OpenAI API key", 401, self._mask(e.body)
            )
        except OpenAIAPIError as e:
            if e.status_code is None:
                raise

            logger.error(f"OpenAI API error: {e.status_code} {self._mask(e.body)}")
            if e.status_code >= 500:
                message = "OpenAI service is temporarily unavailable"
            else:
                message = "Failed to get explanation"
            raise ExplanationError(message, e.status_code, self._mask(e.body))

        try:
            explanation = parse_explanation(content)
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse OpenAI response: {e}")
            return self._fallback(term, "API response parsing failed")

        self.cache.put(term, explanation)
        return explanation

    def _mask(self, text: Optional[str]) -> Optional[str]:
        return mask_secret(text, [self.settings.openai_api_key])
