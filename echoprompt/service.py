"""Application services orchestrating generation, persistence and analytics."""

import asyncio
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Mapping, Optional, Union

from .adapters.gemini import GeminiClient
from .analytics import compute_generation_stats
from .compiler import compile_prompt
from .config import GeneratorConfig
from .metrics import complexity_score, extract_keywords, measure
from .models import (
    EVENT_AI_FALLBACK,
    EVENT_AI_SUCCESS,
    PROVIDER_FALLBACK,
    PROVIDER_GEMINI,
    AnalyticsEvent,
    GeneratedArtifact,
    PromptFields,
    PromptMetadata,
    RequestMeta,
)
from .ports import CompletionClient, GenerationEventRepository, PromptStore
from .recorder import AnalyticsRecorder
from .remote import (
    RemoteFailure,
    RemoteResult,
    RemoteSuccess,
    build_generation_request,
    request_completion,
)
from .validation import ensure_valid

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], CompletionClient]

STATS_DEFAULT_PERIOD = timedelta(days=30)


class PromptGenerationService:
    """
    Turns validated prompt fields into a generated artifact.

    At most one remote completion is attempted per call. Any remote failure
    falls back to local compilation, so the only error a caller can see is
    ``PromptValidationError``.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        *,
        client: Optional[CompletionClient] = None,
        client_factory: Optional[ClientFactory] = None,
        recorder: Optional[AnalyticsRecorder] = None,
        store: Optional[PromptStore] = None,
    ):
        self.config = config or GeneratorConfig()
        self.client_factory = client_factory or self._gemini_client
        if client is None and self.config.gemini_api_key:
            client = self.client_factory(self.config.gemini_api_key)
        self.client = client
        self.recorder = recorder or AnalyticsRecorder(enabled=self.config.analytics_enabled)
        self.store = store

    async def generate(
        self,
        fields: PromptFields,
        optimize: bool = False,
        credential_override: Optional[str] = None,
        *,
        use_ai: bool = True,
        persist: bool = False,
        request_meta: Optional[RequestMeta] = None,
    ) -> GeneratedArtifact:
        ensure_valid(fields)

        started = time.perf_counter()
        if use_ai:
            outcome = await self._attempt_remote(fields, optimize, credential_override)
        else:
            outcome = RemoteFailure(reason="local generation requested", kind="skipped")

        if isinstance(outcome, RemoteSuccess):
            content = outcome.text
            ai_enhanced = True
            logger.info("Prompt generated with %s", PROVIDER_GEMINI)
        else:
            if outcome.kind != "skipped":
                logger.warning(
                    "AI generation failed (%s), using local compilation: %s",
                    outcome.kind,
                    outcome.reason,
                )
            content = compile_prompt(fields, optimize)
            ai_enhanced = False
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        content_metrics = measure(content)
        artifact = GeneratedArtifact(
            content=content,
            fields=fields,
            metadata=PromptMetadata(
                version=self.config.schema_version,
                optimized=optimize,
                ai_enhanced=ai_enhanced,
                generation_time_ms=elapsed_ms,
            ),
            word_count=content_metrics.word_count,
            character_count=content_metrics.character_count,
            keywords=extract_keywords(fields),
            complexity_score=complexity_score(fields),
        )

        if persist:
            artifact = await self._persist(artifact)

        self.recorder.dispatch(_outcome_event(artifact, outcome, request_meta))
        return artifact

    async def _attempt_remote(
        self,
        fields: PromptFields,
        optimize: bool,
        credential_override: Optional[str],
    ) -> RemoteResult:
        try:
            client = self.client_factory(credential_override) if credential_override else self.client
        except Exception as e:
            return RemoteFailure(reason=str(e), kind="not_configured")
        if client is None:
            return RemoteFailure(reason="no completion client configured", kind="not_configured")

        return await request_completion(client, build_generation_request(fields, optimize))

    async def _persist(self, artifact: GeneratedArtifact) -> GeneratedArtifact:
        if self.store is None:
            logger.debug("No prompt store configured, returning in-memory artifact")
            return artifact
        try:
            saved = await asyncio.to_thread(self.store.save, artifact)
        except Exception as e:
            logger.warning("Failed to save prompt, returning in-memory artifact: %s", e)
            return artifact
        logger.info("Prompt saved: %s", saved.id)
        return saved

    def _gemini_client(self, api_key: str) -> CompletionClient:
        return GeminiClient.from_config(self.config, api_key=api_key)


class GenerationStatsService:
    """Facade exposing generation statistics independent of web frameworks."""

    def __init__(self, repo: GenerationEventRepository):
        self.repo = repo

    def get_generation_stats(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict:
        start, end = _normalize_period(start_date, end_date)
        events = self.repo.fetch_generation_events(start, end)
        stats = compute_generation_stats(events)
        stats["period"] = {"start": start.isoformat(), "end": end.isoformat()}
        return stats


async def generate_prompt(
    fields: Union[PromptFields, Mapping[str, object]],
    optimize: bool = False,
    credential_override: Optional[str] = None,
    config: Optional[GeneratorConfig] = None,
    recorder: Optional[AnalyticsRecorder] = None,
) -> GeneratedArtifact:
    """
    One-shot generation with a service built from ``config`` (or the environment).

    The outcome event goes to ``recorder`` and is written before returning.
    Without a recorder that has a sink, the event is dropped.
    """
    if not isinstance(fields, PromptFields):
        fields = PromptFields.from_mapping(fields)
    service = PromptGenerationService(config or GeneratorConfig.from_env(), recorder=recorder)
    artifact = await service.generate(fields, optimize, credential_override)
    await service.recorder.drain()
    return artifact


def _outcome_event(
    artifact: GeneratedArtifact,
    outcome: RemoteResult,
    request_meta: Optional[RequestMeta],
) -> AnalyticsEvent:
    succeeded = isinstance(outcome, RemoteSuccess)
    meta = request_meta or RequestMeta()
    return AnalyticsEvent(
        event_type=EVENT_AI_SUCCESS if succeeded else EVENT_AI_FALLBACK,
        ai_provider=PROVIDER_GEMINI if succeeded else PROVIDER_FALLBACK,
        prompt_id=artifact.id,
        generation_time_ms=artifact.metadata.generation_time_ms,
        word_count=artifact.word_count,
        character_count=artifact.character_count,
        optimized=artifact.metadata.optimized,
        output_format=artifact.fields.output_format,
        ip_address=meta.ip_address,
        user_agent=meta.user_agent,
        error_message=None if succeeded else outcome.reason,
        created_at=datetime.now(timezone.utc),
    )


def _normalize_period(
    start_date: Optional[datetime],
    end_date: Optional[datetime],
) -> tuple[datetime, datetime]:
    if end_date is None:
        end_date = datetime.now(timezone.utc)
    if start_date is None:
        start_date = end_date - STATS_DEFAULT_PERIOD
    return start_date, end_date
