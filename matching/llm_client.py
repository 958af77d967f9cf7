from __future__ import annotations
import logging
from typing import Dict, List, Optional

import requests

from errors import CompletionError
from settings import Settings

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Minimal client for an OpenAI-compatible ``/chat/completions`` endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        model: str,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChatCompletionClient":
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            model=settings.model,
            timeout=settings.timeout,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def complete(self, messages: List[Dict[str, str]], max_tokens: int, temperature: float) -> str:
        """Send one chat completion request and return the first choice's text."""
        if not self.api_key:
            raise CompletionError("No API key configured for the completion service")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            response = self.session.post(self.url, headers=headers, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            raise CompletionError(f"Completion API returned {e.response.status_code}: {e.response.text[:200]}") from e
        except requests.exceptions.RequestException as e:
            raise CompletionError(f"Completion API request failed: {e}") from e
        except ValueError as e:
            raise CompletionError("Completion API returned a non-JSON body") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Completion response had no choices[0].message.content")
            return ""
        return content or ""

    def close(self) -> None:
        self.session.close()
