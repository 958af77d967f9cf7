from __future__ import annotations
import mimetypes
from typing import Iterable, List, Tuple

import pandas as pd
import requests

# (file name, raw bytes) as read from an uploader widget
NamedFile = Tuple[str, bytes]


class DashboardError(Exception):
    """The API could not be reached or refused the request."""


def _part(field: str, named_file: NamedFile):
    name, data = named_file
    mime = mimetypes.guess_type(name)[0] or "application/octet-stream"
    return (field, (name, data, mime))


def analyze_resumes(api_url: str, jd_file: NamedFile, resume_files: Iterable[NamedFile], timeout: float = 300) -> List[dict]:
    """POST one job description and several resumes to ``/analyze`` and return the ranking."""
    files = [_part("jobDescription", jd_file)] + [_part("resumes", f) for f in resume_files]
    try:
        r = requests.post(f"{api_url.rstrip('/')}/analyze", files=files, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise DashboardError(f"Connection error: {e}") from e

    if r.status_code != 200:
        try:
            body = r.json()
            message = body.get("error", r.text)
            if body.get("details"):
                message = f"{message}: {body['details']}"
        except ValueError:
            message = r.text
        raise DashboardError(message)
    return r.json()


def results_to_frame(results: List[dict]) -> pd.DataFrame:
    """Summary table for the ranking, one row per candidate in response order."""
    return pd.DataFrame(
        {
            "Rank": list(range(1, len(results) + 1)),
            "Candidate": [r.get("name", "") for r in results],
            "Score": [r.get("score", 0) for r in results],
            "Reasoning": [r.get("reasoning", "") for r in results],
        }
    )
