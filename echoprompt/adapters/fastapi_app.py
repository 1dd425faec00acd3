"""FastAPI binding for the generation core."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Literal, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from ..analytics import empty_generation_stats
from ..config import GeneratorConfig
from ..formatting import EXPORT_FORMATS, export_artifact, format_content
from ..models import GeneratedArtifact, PromptFields, RequestMeta
from ..ports import PromptStore
from ..recorder import AnalyticsRecorder
from ..service import GenerationStatsService, PromptGenerationService
from ..suggestions import FieldAssistant
from ..validation import PromptValidationError
from .memory import InMemoryAnalyticsSink, InMemoryPromptStore
from .sqlalchemy_repo import SQLAlchemyPromptRepository, create_schema

logger = logging.getLogger(__name__)


class GenerateRequest(BaseModel):
    promptData: Dict[str, Any] = Field(default_factory=dict)
    optimize: bool = False
    apiKey: Optional[str] = None


class FormatRequest(BaseModel):
    content: str = Field(..., min_length=1)
    format: Literal["markdown", "json", "table"]


class SuggestionsRequest(BaseModel):
    field: str = Field(..., min_length=1)
    partialText: str = ""


class CompletionRequest(BaseModel):
    field: str = Field(..., min_length=1)
    partialText: str = Field(..., min_length=1)


class AutoPopulateRequest(BaseModel):
    task: str = Field(..., min_length=1)


def create_app(
    service: PromptGenerationService,
    *,
    stats_service: Optional[GenerationStatsService] = None,
    assistant: Optional[FieldAssistant] = None,
    store: Optional[PromptStore] = None,
) -> FastAPI:
    assistant = assistant or FieldAssistant(service.client)
    store = store or service.store

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await service.recorder.drain()

    app = FastAPI(title="EchoPrompt API", version="1.0.0", lifespan=lifespan)

    async def _generate(body: GenerateRequest, request: Request, use_ai: bool):
        fields = PromptFields.from_mapping(body.promptData)
        try:
            artifact = await service.generate(
                fields,
                body.optimize,
                body.apiKey,
                use_ai=use_ai,
                persist=True,
                request_meta=_request_meta(request),
            )
        except PromptValidationError as e:
            return JSONResponse(
                status_code=400,
                content={"success": False, "error": "Invalid prompt data", "details": e.errors},
            )

        source = "with Gemini AI" if artifact.metadata.ai_enhanced else "with local templates"
        saved = "(saved to database)" if artifact.id else "(temporary)"
        return {
            "success": True,
            "data": _artifact_payload(artifact),
            "message": f"Prompt generated successfully {source} {saved}",
        }

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "ai_configured": service.client is not None}

    @app.post("/api/prompts/generate")
    async def generate(body: GenerateRequest, request: Request):
        return await _generate(body, request, use_ai=True)

    @app.post("/api/prompts/generate/local")
    async def generate_local(body: GenerateRequest, request: Request):
        return await _generate(body, request, use_ai=False)

    @app.post("/api/prompts/format")
    def format_prompt(body: FormatRequest) -> dict:
        return {
            "success": True,
            "data": {
                "original": body.content,
                "formatted": format_content(body.content, body.format),
                "format": body.format,
            },
            "message": "Content formatted successfully",
        }

    @app.get("/api/prompts/{prompt_id}/export")
    def export_prompt(prompt_id: str, format: str = "txt") -> Response:
        """Serve a stored prompt as a download. Interaction counters are not updated here."""
        if format not in EXPORT_FORMATS:
            raise HTTPException(status_code=400, detail=f"Unsupported format: {format}")
        artifact = store.get(prompt_id) if store is not None else None
        if artifact is None:
            raise HTTPException(status_code=404, detail="Prompt not found")

        body, mime_type, filename = export_artifact(artifact, format)
        return Response(
            content=body,
            media_type=mime_type,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.post("/api/prompts/suggestions")
    async def suggestions(body: SuggestionsRequest) -> dict:
        values = await assistant.suggest(body.field, body.partialText)
        return {
            "success": True,
            "data": {"field": body.field, "partialText": body.partialText, "suggestions": values},
        }

    @app.post("/api/prompts/complete")
    async def complete(body: CompletionRequest) -> dict:
        values = await assistant.complete(body.field, body.partialText)
        return {
            "success": True,
            "data": {"field": body.field, "partialText": body.partialText, "completions": values},
        }

    @app.post("/api/prompts/auto-populate")
    async def auto_populate(body: AutoPopulateRequest) -> dict:
        values = await assistant.auto_populate(body.task)
        return {"success": True, "data": {"task": body.task, "suggestions": values}}

    @app.get("/api/analytics/ai-generation")
    def ai_generation_stats() -> dict:
        if stats_service is None:
            return {"success": True, "data": empty_generation_stats()}
        return {"success": True, "data": stats_service.get_generation_stats()}

    return app


def create_app_from_config(config: Optional[GeneratorConfig] = None) -> FastAPI:
    """Wire adapters from configuration: SQL storage when a database URL is set, memory otherwise."""
    config = config or GeneratorConfig.from_env()

    if config.database_url:
        connect_args = {"check_same_thread": False} if config.database_url.startswith("sqlite") else {}
        engine = create_engine(config.database_url, connect_args=connect_args)
        session = Session(engine)
        create_schema(session)
        repo = SQLAlchemyPromptRepository(session)
        store, sink = repo, repo
        logger.info("Using SQL storage at %s", engine.url.render_as_string(hide_password=True))
    else:
        store, sink = InMemoryPromptStore(), InMemoryAnalyticsSink()
        logger.info("No database configured, prompts and analytics are kept in memory")

    service = PromptGenerationService(
        config,
        recorder=AnalyticsRecorder(sink, enabled=config.analytics_enabled),
        store=store,
    )
    return create_app(service, stats_service=GenerationStatsService(sink))


def _request_meta(request: Request) -> RequestMeta:
    return RequestMeta(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


def _artifact_payload(artifact: GeneratedArtifact) -> dict:
    return {
        "prompt": artifact.to_dict(),
        "metadata": {
            "wordCount": artifact.word_count,
            "characterCount": artifact.character_count,
            "complexityScore": artifact.complexity_score,
            "keywords": artifact.keywords,
            "generationTime": artifact.metadata.generation_time_ms,
        },
    }
