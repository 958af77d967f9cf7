"""
Fit analysis of one resume against a job description.

The analyzer is fail-soft: whatever goes wrong while talking to the model or
reading its answer, ``analyze_fit`` returns ``AnalysisResult.fallback()``
instead of raising, so one bad response never aborts a batch.
"""

from __future__ import annotations
import json
import logging
import re
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from errors import ModelResponseError
from matching.prompts import SYSTEM_PROMPT, USER_TEMPLATE
from schemas import AnalysisResult

logger = logging.getLogger(__name__)

MAX_INPUT_CHARS = 12000
MAX_TOKENS = 600
TEMPERATURE = 0.2

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class CompletionClient(Protocol):
    def complete(self, messages: List[Dict[str, str]], max_tokens: int, temperature: float) -> str:
        ...


def truncate(text: Optional[str], limit: int = MAX_INPUT_CHARS) -> str:
    """Keep at most ``limit`` leading characters; ``None`` becomes ""."""
    if not text:
        return ""
    return text[:limit]


def build_messages(jd_text: Optional[str], resume_text: Optional[str]) -> List[Dict[str, str]]:
    prompt = USER_TEMPLATE.format(jd=truncate(jd_text), resume=truncate(resume_text))
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def extract_json_object(content: str) -> Any:
    """
    Parse the model's answer as JSON, falling back to the outermost
    ``{...}`` span when the object is wrapped in prose.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    match = _JSON_OBJECT.search(content)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            pass
    raise ModelResponseError(f"Could not parse JSON from model response: {content}")


def parse_model_response(content: str) -> AnalysisResult:
    parsed = extract_json_object(content)
    if not isinstance(parsed, dict):
        raise ModelResponseError(f"Model response is not a JSON object: {content}")
    try:
        return AnalysisResult.model_validate(parsed)
    except ValidationError as e:
        raise ModelResponseError(f"Model response failed validation: {e}") from e


def analyze_fit(jd_text: Optional[str], resume_text: Optional[str], client: CompletionClient) -> AnalysisResult:
    """Score one resume against the job description; never raises."""
    messages = build_messages(jd_text, resume_text)
    try:
        content = client.complete(messages, max_tokens=MAX_TOKENS, temperature=TEMPERATURE)
        return parse_model_response(content)
    except Exception as e:
        logger.error("Fit analysis failed, using fallback result: %s", e, exc_info=True)
        return AnalysisResult.fallback()
