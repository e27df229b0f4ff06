"""
Google Gemini REST API client for text generation.
"""

import asyncio
import httpx
from typing import Optional, Dict, Any


class GeminiAPIError(Exception):
    """Gemini API error."""
    def __init__(self, message: str, status_code: Optional[int]):
        super().__init__(message)
        self.status_code = status_code


class GeminiRateLimitError(GeminiAPIError):
    """Rate limit or quota exceeded."""
    pass


class GeminiTimeoutError(GeminiAPIError):
    """Request did not finish within its deadline."""
    pass


class GeminiClient:
    """Minimal client for the generateContent endpoint."""

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
    ):
        self.api_key = api_key
        self.client = http_client
        self.base_url = base_url.rstrip("/")

    async def generate_text(self, prompt: str, model: str, timeout: float) -> str:
        """
        Generate text for a single prompt.

        Args:
            prompt: Prompt text
            model: Model name, e.g. "gemini-1.5-flash"
            timeout: Deadline in seconds

        Returns:
            Concatenated text parts of the first candidate

        Raises:
            GeminiRateLimitError: On 429
            GeminiTimeoutError: When the deadline passes
            GeminiAPIError: On other errors or an empty answer
        """
        url = f"{self.base_url}/models/{model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            response = await asyncio.wait_for(
                self.client.post(
                    url,
                    params={"key": self.api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                ),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise GeminiTimeoutError(f"generateContent timed out after {timeout}s", None)
        except httpx.RequestError as e:
            raise GeminiAPIError(f"Request error: {str(e)}", None)

        if response.status_code == 429:
            raise GeminiRateLimitError("Rate limit exceeded", 429)

        if not response.is_success:
            raise GeminiAPIError(
                f"{response.status_code}: {response.text if response.text else 'HTTP error'}",
                status_code=response.status_code,
            )

        try:
            data: Dict[str, Any] = response.json()
        except ValueError:
            raise GeminiAPIError("Response body is not valid JSON", response.status_code)

        candidates = data.get("candidates") or []
        if not candidates:
            raise GeminiAPIError("No candidates in response", response.status_code)

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise GeminiAPIError("Empty response text", response.status_code)

        return text
