from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from dotenv import load_dotenv

from errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.perplexity.ai"
DEFAULT_MODEL = "sonar-pro"

_TRUTHY = {"1", "true", "yes", "on"}


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")


def _get_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout: float = 60.0
    max_resumes: int = 10
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ`` after loading ``.env``)."""
        if env is None:
            load_dotenv()
            env = os.environ

        max_resumes = _get_int(env, "MAX_RESUMES", 10)
        if max_resumes <= 0:
            raise ConfigurationError("MAX_RESUMES must be > 0")

        return cls(
            api_key=env.get("PERPLEXITY_API_KEY") or None,
            base_url=env.get("LLM_BASE_URL") or DEFAULT_BASE_URL,
            model=env.get("MODEL_NAME") or DEFAULT_MODEL,
            timeout=_get_float(env, "LLM_TIMEOUT", 60.0),
            max_resumes=max_resumes,
            host=env.get("HOST") or "0.0.0.0",
            port=_get_int(env, "PORT", 3000),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
            debug=(env.get("DEBUG") or "").strip().lower() in _TRUTHY,
        )
