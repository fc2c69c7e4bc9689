"""
Tests for the scouting-report client, using httpx.MockTransport instead of
the real Gemini API.
"""
import asyncio
import json

import httpx
import pytest
from tenacity import wait_none

from teamhub.config.settings import settings
from teamhub.extraction.pipeline import extract_team
from teamhub.models.collection import TeamCollection
from teamhub.summarization.gemini_client import (
    REPORT_ERROR_MESSAGE,
    REPORT_UNAVAILABLE_MESSAGE,
    AuthenticationError,
    GeminiClient,
    SummarizationError,
    create_gemini_client,
    generate_ai_report,
    summarize_collection,
)
from teamhub.summarization.prompt import build_prompt

from conftest import build_page


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_client(handler, max_attempts: int = 3) -> GeminiClient:
    transport = httpx.MockTransport(handler)
    return GeminiClient(
        api_key="test-key-123456",
        model="gemini-test",
        client=httpx.AsyncClient(transport=transport),
        max_attempts=max_attempts,
        wait=wait_none(),
    )


@pytest.fixture
def record():
    return extract_team(build_page(), file_name="lusitanos.html")


class TestPrompt:
    """Test prompt construction."""

    def test_prompt_lists_roster_and_opponents(self, record):
        """Players, elos and opponents are interpolated in order."""
        prompt = build_prompt(record, "Português de Portugal")
        assert "Lusitanos" in prompt
        assert "League: Advanced · Group B in Europe." in prompt
        assert "fer0x (Elo: 2150), Kiko (Elo: 1980), nunoZ (Elo: 2301)" in prompt
        assert "Scheduled matches against: Dragões, Lobos, Falcões." in prompt
        assert "Record: 7 W-2 L." in prompt
        assert "Português de Portugal" in prompt

    def test_prompt_without_stats(self, record):
        """Single-team records have no season line."""
        prompt = build_prompt(record.model_copy(update={"stats": None}), "English")
        assert "Record:" not in prompt


class TestGeminiClient:
    """Test the HTTP client."""

    def test_generate_returns_text(self):
        """The generated text is read from the first candidate."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=gemini_body("- Equipa sólida"))

        client = make_client(handler)
        text = asyncio.run(client.generate("Olá"))
        assert text == "- Equipa sólida"
        assert seen["url"].endswith("/models/gemini-test:generateContent")
        assert seen["key"] == "test-key-123456"
        assert seen["body"] == {"contents": [{"parts": [{"text": "Olá"}]}]}

    def test_retries_server_errors(self):
        """A transient 503 is retried until the call succeeds."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(503)
            return httpx.Response(200, json=gemini_body("ok"))

        assert asyncio.run(make_client(handler).generate("p")) == "ok"
        assert len(calls) == 2

    def test_auth_errors_are_not_retried(self):
        """401 fails immediately with an AuthenticationError."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(401)

        with pytest.raises(AuthenticationError):
            asyncio.run(make_client(handler).generate("p"))
        assert len(calls) == 1

    def test_network_errors_become_summarization_errors(self):
        """Connection failures surface as SummarizationError after retries."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(SummarizationError):
            asyncio.run(make_client(handler, max_attempts=2).generate("p"))
        assert len(calls) == 2

    def test_missing_key_is_rejected(self, monkeypatch):
        """A client cannot be built without an API key."""
        monkeypatch.setattr(settings, "gemini_api_key", None)
        with pytest.raises(SummarizationError):
            GeminiClient()
        assert create_gemini_client() is None


class TestReports:
    """Test report generation and fallbacks."""

    def test_failure_uses_fallback_message(self, record):
        """Errors degrade to the fixed error message."""
        client = make_client(lambda request: httpx.Response(403))
        assert asyncio.run(generate_ai_report(record, client)) == REPORT_ERROR_MESSAGE

    def test_empty_answer_uses_unavailable_message(self, record):
        """No usable text degrades to the unavailable message."""
        client = make_client(lambda request: httpx.Response(200, json={"candidates": []}))
        assert asyncio.run(generate_ai_report(record, client)) == REPORT_UNAVAILABLE_MESSAGE

    @pytest.mark.parametrize(
        "body",
        [
            [1, 2],
            "just text",
            {"candidates": ["oops"]},
            {"candidates": "oops"},
            {"candidates": [{"content": {"parts": ["x"]}}]},
            {"candidates": [{"content": {"parts": [{"text": 5}]}}]},
        ],
    )
    def test_malformed_body_uses_fallback_message(self, record, body):
        """A 200 with an unexpected body shape degrades to the error message."""
        client = make_client(lambda request: httpx.Response(200, json=body))
        with pytest.raises(SummarizationError):
            asyncio.run(client.generate("p"))
        assert asyncio.run(generate_ai_report(record, client)) == REPORT_ERROR_MESSAGE

    def test_malformed_body_does_not_abort_other_reports(self, record):
        """One bad answer leaves the other teams' reports in place."""
        other = extract_team(build_page(name="Outra"))
        collection = TeamCollection().append_batch([record, other])

        def handler(request: httpx.Request) -> httpx.Response:
            prompt = json.loads(request.content)["contents"][0]["parts"][0]["text"]
            if "Outra" in prompt:
                return httpx.Response(200, json={"candidates": ["oops"]})
            return httpx.Response(200, json=gemini_body("Boa sorte!"))

        updated = asyncio.run(summarize_collection(collection, make_client(handler)))
        assert updated.get(record.id).ai_report == "Boa sorte!"
        assert updated.get(other.id).ai_report == REPORT_ERROR_MESSAGE

    def test_reports_attach_to_selected_teams(self, record):
        """Only the requested teams receive a report; records stay intact."""
        other = extract_team(build_page(name="Outra"))
        collection = TeamCollection().append_batch([record, other])
        client = make_client(lambda request: httpx.Response(200, json=gemini_body("Boa sorte!")))

        updated = asyncio.run(summarize_collection(collection, client, team_ids=[record.id]))
        assert updated.get(record.id).ai_report == "Boa sorte!"
        assert updated.get(other.id).ai_report is None
        assert updated.get(record.id).players == record.players
        assert collection.get(record.id).ai_report is None
