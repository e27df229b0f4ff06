"""
Runtime configuration for LexiClear.
Values come from environment variables, optionally seeded from .dev.env.
"""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


def _optional(name: str) -> Optional[str]:
    """Read an env var, treating empty strings as unset."""
    value = os.getenv(name, "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    """Service settings."""
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-3.5-turbo"
    google_api_key: Optional[str] = None
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-1.5-flash"
    cache_ttl: float = 3600
    cache_ttl_jitter: float = 0
    explain_timeout: float = 10.0
    status_timeout: float = 5.0
    simplify_timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str = ".dev.env") -> "Settings":
        """
        Build settings from the environment.

        Args:
            env_file: dotenv file loaded first when it exists

        Returns:
            Settings instance
        """
        if os.path.exists(env_file):
            load_dotenv(env_file)

        return cls(
            openai_api_key=_optional("OPENAI_API_KEY"),
            openai_base_url=os.getenv("OPENAI_BASE_URL", cls.openai_base_url),
            openai_model=os.getenv("OPENAI_MODEL", cls.openai_model),
            google_api_key=_optional("GOOGLE_API_KEY"),
            gemini_base_url=os.getenv("GEMINI_BASE_URL", cls.gemini_base_url),
            gemini_model=os.getenv("GEMINI_MODEL", cls.gemini_model),
            cache_ttl=float(os.getenv("CACHE_TTL_SECONDS", cls.cache_ttl)),
            cache_ttl_jitter=float(os.getenv("CACHE_TTL_JITTER_SECONDS", cls.cache_ttl_jitter)),
            explain_timeout=float(os.getenv("EXPLAIN_TIMEOUT_SECONDS", cls.explain_timeout)),
            status_timeout=float(os.getenv("STATUS_TIMEOUT_SECONDS", cls.status_timeout)),
            simplify_timeout=float(os.getenv("SIMPLIFY_TIMEOUT_SECONDS", cls.simplify_timeout)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
