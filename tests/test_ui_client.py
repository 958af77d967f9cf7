import pytest
import requests

from ui import client as ui_client
from ui.client import DashboardError, analyze_resumes, results_to_frame


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def captured(monkeypatch):
    calls = {}

    def install(response):
        def fake_post(url, files=None, timeout=None):
            calls.update(url=url, files=files, timeout=timeout)
            if isinstance(response, Exception):
                raise response
            return response

        monkeypatch.setattr(ui_client.requests, "post", fake_post)
        return calls

    return install


def test_posts_multipart_fields(captured):
    ranking = [{"name": "a.pdf", "score": 80, "reasoning": "ok", "improvements": [], "metrics": []}]
    calls = captured(FakeResponse(200, ranking))

    result = analyze_resumes(
        "http://localhost:3000/", ("jd.txt", b"jd"), [("a.pdf", b"%PDF"), ("b.txt", b"b")], timeout=5
    )

    assert result == ranking
    assert calls["url"] == "http://localhost:3000/analyze"
    assert calls["timeout"] == 5
    assert calls["files"] == [
        ("jobDescription", ("jd.txt", b"jd", "text/plain")),
        ("resumes", ("a.pdf", b"%PDF", "application/pdf")),
        ("resumes", ("b.txt", b"b", "text/plain")),
    ]


def test_server_error_message_is_surfaced(captured):
    captured(FakeResponse(500, {"error": "Processing failed", "details": "Failed to extract text from PDF"}))
    with pytest.raises(DashboardError, match="Processing failed: Failed to extract text from PDF"):
        analyze_resumes("http://api", ("jd.pdf", b"x"), [("a.txt", b"a")])


def test_non_json_error_body(captured):
    captured(FakeResponse(502, text="Bad Gateway"))
    with pytest.raises(DashboardError, match="Bad Gateway"):
        analyze_resumes("http://api", ("jd.txt", b"x"), [("a.txt", b"a")])


def test_connection_error(captured):
    captured(requests.ConnectionError("refused"))
    with pytest.raises(DashboardError, match="Connection error"):
        analyze_resumes("http://api", ("jd.txt", b"x"), [("a.txt", b"a")])


def test_results_to_frame():
    frame = results_to_frame(
        [
            {"name": "alice.txt", "score": 90, "reasoning": "Strong"},
            {"name": "bob.txt", "score": 70, "reasoning": "Decent"},
        ]
    )
    assert list(frame.columns) == ["Rank", "Candidate", "Score", "Reasoning"]
    assert frame["Rank"].tolist() == [1, 2]
    assert frame["Candidate"].tolist() == ["alice.txt", "bob.txt"]
    assert frame["Score"].tolist() == [90, 70]


def test_results_to_frame_empty():
    assert results_to_frame([]).empty
