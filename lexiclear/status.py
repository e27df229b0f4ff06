"""
Diagnostic check of the configured OpenAI API key.
"""

import logging
from typing import Optional

import httpx

from .logger import mask_secret
from .models import StatusReport
from .openai_client import (
    OpenAIClient, OpenAIAPIError, AuthenticationError, UpstreamTimeoutError, has_valid_key_format,
)

logger = logging.getLogger(__name__)


async def check_api_status(
    api_key: Optional[str],
    http_client: httpx.AsyncClient,
    base_url: str,
    timeout: float,
) -> StatusReport:
    """
    Check that the key exists, looks like an OpenAI key, and is accepted by the API.

    Stops at the first failing stage. Never raises.

    Args:
        api_key: Configured key, or None
        http_client: Shared async HTTP client
        base_url: OpenAI API root
        timeout: Deadline for the live probe, in seconds

    Returns:
        StatusReport
    """
    report = StatusReport()

    try:
        if not api_key:
            report.status = "no-key"
            report.message = "OPENAI_API_KEY not found in environment variables"
            return report

        report.key_exists = True
        report.key_format = has_valid_key_format(api_key)
        if not report.key_format:
            report.message = "API key format is incorrect (should start with sk-)"
            return report

        client = OpenAIClient(api_key, http_client, base_url)
        try:
            await client.list_models(timeout=timeout)
        except AuthenticationError:
            report.message = "Invalid API key - authentication failed"
            return report
        except UpstreamTimeoutError:
            report.message = "API test timed out - check your network connection"
            return report
        except OpenAIAPIError as e:
            if e.status_code is not None:
                report.message = f"API test failed with status: {e.status_code}"
            else:
                report.message = f"API test failed: {mask_secret(str(e), [api_key])}"
            return report

        report.status = "success"
        report.message = "API key is valid and working"
        report.api_access = True
        return report

    except Exception as e:
        logger.exception("Unexpected error checking API status")
        return StatusReport(
            status="error",
            message=mask_secret(str(e), [api_key]) or "Unknown error checking API status",
        )
