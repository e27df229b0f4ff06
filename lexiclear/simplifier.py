"""
Legal document simplification backed by Gemini.
"""

import logging
from typing import Optional

from .config import Settings
from .fallback import simplification_placeholder
from .gemini_client import GeminiClient, GeminiAPIError, GeminiRateLimitError, GeminiTimeoutError
from .logger import mask_secret
from .memory_cache import DocumentCache

logger = logging.getLogger(__name__)


SIMPLIFY_PROMPT = """You are a legal expert that simplifies complex legal documents into plain English.
Please simplify the following legal text for a non-lawyer audience:

- Replace legal jargon with simple, everyday language
- Keep the meaning accurate but make it easy to understand
- Use short sentences and clear formatting
- Add section headings if helpful for organization

Legal text to simplify:
{text}

Simplified version:"""


class SimplificationError(Exception):
    """Failure reported to the caller."""
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SimplificationService:
    """Turns legal text into plain English; degrades to a placeholder on any upstream failure."""

    def __init__(self, cache: DocumentCache, settings: Settings, client: Optional[GeminiClient]):
        self.cache = cache
        self.settings = settings
        self.client = client

    def _placeholder(self, text: str, reason: str) -> str:
        logger.info(f"Returning placeholder simplification ({reason})")
        simplified = simplification_placeholder(text, reason)
        self.cache.put(text, simplified)
        return simplified

    async def simplify(self, text: Optional[str]) -> str:
        """
        Simplify a legal document.

        Raises:
            SimplificationError: If no text was provided
        """
        text = (text or "").strip()
        if not text:
            raise SimplificationError("No text provided", 400)

        try:
            return await self._resolve(text)
        except Exception as e:
            logger.exception(f"Unexpected error simplifying document: {self._mask(str(e))}")
            return simplification_placeholder(text, "service temporarily unavailable")

    async def _resolve(self, text: str) -> str:
        cached = self.cache.get(text)
        if cached is not None:
            logger.info("Returning cached simplification")
            return cached

        if self.client is None:
            return self._placeholder(text, "API not configured")

        try:
            simplified = await self.client.generate_text(
                SIMPLIFY_PROMPT.format(text=text),
                model=self.settings.gemini_model,
                timeout=self.settings.simplify_timeout,
            )
        except GeminiRateLimitError:
            logger.warning("Gemini rate limit exceeded")
            return self._placeholder(text, "API rate limit exceeded")
        except GeminiTimeoutError:
            logger.error("Gemini request timeout")
            return self._placeholder(text, "request timeout")
        except GeminiAPIError as e:
            logger.error(f"Gemini API error: {e.status_code} {self._mask(str(e))}")
            return self._placeholder(text, "service temporarily unavailable")

        self.cache.put(text, simplified)
        return simplified

    def _mask(self, text: Optional[str]) -> Optional[str]:
        return mask_secret(text, [self.settings.google_api_key])
