from fastapi.testclient import TestClient

from echoprompt.adapters.fastapi_app import create_app
from echoprompt.adapters.memory import InMemoryAnalyticsSink, InMemoryPromptStore
from echoprompt.models import EVENT_AI_FALLBACK, EVENT_AI_SUCCESS
from echoprompt.recorder import AnalyticsRecorder
from echoprompt.service import GenerationStatsService, PromptGenerationService


class FakeClient:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error

    async def complete(self, prompt_text):
        if self.error is not None:
            raise self.error
        return self.reply


def _build(client=None):
    store = InMemoryPromptStore()
    sink = InMemoryAnalyticsSink()
    service = PromptGenerationService(
        client=client,
        recorder=AnalyticsRecorder(sink),
        store=store,
    )
    app = create_app(service, stats_service=GenerationStatsService(sink))
    return app, store, sink


def test_generate_rejects_invalid_fields():
    app, _, sink = _build(FakeClient(reply="unused"))

    with TestClient(app) as client:
        response = client.post("/api/prompts/generate", json={"promptData": {"role": "Poet"}})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Invalid prompt data",
        "details": ["Task is required"],
    }
    assert sink.events == []


def test_generate_uses_remote_text_and_saves():
    app, store, sink = _build(FakeClient(reply="Remote prompt text"))

    with TestClient(app) as client:
        response = client.post(
            "/api/prompts/generate",
            json={"promptData": {"task": "Write a poem", "tone": "Whimsical"}, "optimize": True},
        )

    body = response.json()
    assert response.status_code == 200
    assert body["message"] == "Prompt generated successfully with Gemini AI (saved to database)"
    prompt = body["data"]["prompt"]
    assert prompt["content"] == "Remote prompt text"
    assert prompt["metadata"]["aiEnhanced"] is True
    assert store.get(prompt["id"]) is not None
    assert [event.event_type for event in sink.events] == [EVENT_AI_SUCCESS]


def test_generate_falls_back_when_remote_fails():
    app, _, sink = _build(FakeClient(error=RuntimeError("boom")))

    with TestClient(app) as client:
        response = client.post("/api/prompts/generate", json={"promptData": {"task": "Write a poem"}})

    body = response.json()
    assert body["data"]["prompt"]["content"] == "Write a poem"
    assert body["data"]["prompt"]["metadata"]["aiEnhanced"] is False
    assert [event.event_type for event in sink.events] == [EVENT_AI_FALLBACK]
    assert sink.events[0].error_message == "boom"


def test_local_route_skips_remote():
    remote = FakeClient(error=AssertionError("must not be called"))
    app, _, _ = _build(remote)

    with TestClient(app) as client:
        response = client.post(
            "/api/prompts/generate/local",
            json={"promptData": {"role": "Poet", "task": "Write a poem"}},
        )

    body = response.json()
    assert body["data"]["prompt"]["content"] == "You are a Poet. Write a poem"
    assert body["message"].endswith("with local templates (saved to database)")


def test_export_round_trip_and_errors():
    app, store, _ = _build()

    with TestClient(app) as client:
        created = client.post("/api/prompts/generate", json={"promptData": {"task": "Write a poem"}})
        prompt_id = created.json()["data"]["prompt"]["id"]

        exported = client.get(f"/api/prompts/{prompt_id}/export", params={"format": "markdown"})
        missing = client.get("/api/prompts/nope/export")
        unsupported = client.get(f"/api/prompts/{prompt_id}/export", params={"format": "pdf"})

    assert exported.status_code == 200
    assert exported.text.startswith("# AI Prompt\n\nWrite a poem")
    assert exported.headers["content-disposition"] == (
        f'attachment; filename="echoprompt-{prompt_id}.md"'
    )
    assert missing.status_code == 404
    assert unsupported.status_code == 400
    assert store.get(prompt_id).analytics.exports == 0


def test_format_route():
    app, _, _ = _build()

    with TestClient(app) as client:
        response = client.post("/api/prompts/format", json={"content": "Body", "format": "markdown"})
        invalid = client.post("/api/prompts/format", json={"content": "Body", "format": "xml"})

    assert response.json()["data"]["formatted"].startswith("# AI Prompt")
    assert invalid.status_code == 422


def test_suggestions_fall_back_without_client():
    app, _, _ = _build()

    with TestClient(app) as client:
        response = client.post("/api/prompts/suggestions", json={"field": "tone"})

    assert response.json()["data"]["suggestions"][0] == "Professional and authoritative"


def test_generation_stats_route():
    app, _, _ = _build(FakeClient(reply="Remote prompt text"))

    with TestClient(app) as client:
        client.post("/api/prompts/generate", json={"promptData": {"task": "Write a poem"}})
        client.post("/api/prompts/generate/local", json={"promptData": {"task": "Write a poem"}})

    with TestClient(app) as client:
        stats = client.get("/api/analytics/ai-generation").json()["data"]

    assert stats["total_attempts"] == 2
    assert stats["success_rate"] == 50.0
    assert stats["by_provider"] == {"gemini": 1, "fallback": 1}
    assert "period" in stats


def test_health_reports_ai_configuration():
    with TestClient(_build(FakeClient(reply="x"))[0]) as client:
        assert client.get("/health").json() == {"status": "ok", "ai_configured": True}
