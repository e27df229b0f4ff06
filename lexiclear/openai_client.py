"""
OpenAI REST API client.
Only the two endpoints LexiClear needs: chat completions and model listing.
"""

import asyncio
import httpx
from typing import Optional, Dict, Any, List


_API_KEY_PREFIX = "sk-"


class OpenAIAPIError(Exception):
    """OpenAI API error."""
    def __init__(self, message: str, status_code: Optional[int], body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RateLimitError(OpenAIAPIError):
    """Rate limit exceeded."""
    pass


class AuthenticationError(OpenAIAPIError):
    """API key rejected."""
    pass


class UpstreamTimeoutError(OpenAIAPIError):
    """Request did not finish within its deadline."""
    pass


def has_valid_key_format(api_key: str) -> bool:
    """Syntactic check only; does not contact the API."""
    return api_key.startswith(_API_KEY_PREFIX)


class OpenAIClient:
    """
    OpenAI API client.

    Wraps a shared httpx.AsyncClient; the caller owns its lifecycle.
    """

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = "https://api.openai.com/v1",
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: Bearer token
            http_client: Shared async HTTP client
            base_url: API root, without trailing slash
        """
        self.api_key = api_key
        self.client = http_client
        self.base_url = base_url.rstrip("/")

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        timeout: float,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send a request and return the decoded JSON body.

        The whole exchange is bounded by `timeout`; the request is cancelled
        when it runs out.

        Raises:
            RateLimitError: On 429
            AuthenticationError: On 401
            UpstreamTimeoutError: When the deadline passes
            OpenAIAPIError: On any other non-2xx status or transport error
        """
        url = f"{self.base_url}{path}"

        try:
            response = await asyncio.wait_for(
                self.client.request(method, url, headers=self._get_headers(), json=json_body),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise UpstreamTimeoutError(f"Request to {path} timed out after {timeout}s", None)
        except httpx.RequestError as e:
            raise OpenAIAPIError(f"Request error: {str(e)}", None)

        if response.status_code == 429:
            raise RateLimitError("Rate limit exceeded", 429, response.text)

        if response.status_code == 401:
            raise AuthenticationError("Authentication failed", 401, response.text)

        if not response.is_success:
            raise OpenAIAPIError(
                f"{response.status_code}: {response.text if response.text else 'HTTP error'}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError:
            raise OpenAIAPIError("Response body is not valid JSON", None, response.text)

    async def chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: str,
        timeout: float,
        temperature: float = 0.3,
        max_tokens: int = 500,
        json_mode: bool = False,
    ) -> str:
        """
        Run a chat completion and return the first choice's text.

        Args:
            messages: Chat messages ({"role", "content"})
            model: Model name
            timeout: Deadline in seconds
            temperature: Sampling temperature
            max_tokens: Completion token limit
            json_mode: Ask the model for a JSON object

        Returns:
            Message content of the first choice, "{}" when missing
        """
        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        data = await self._request("POST", "/chat/completions", timeout, payload)

        choices = data.get("choices") or [{}]
        message = choices[0].get("message") or {}
        return message.get("content") or "{}"

    async def list_models(self, timeout: float) -> Dict[str, Any]:
        """
        List available models. Used as a cheap credential probe.

        Args:
            timeout: Deadline in seconds

        Returns:
            Model listing from the API
        """
        return await self._request("GET", "/models", timeout)
