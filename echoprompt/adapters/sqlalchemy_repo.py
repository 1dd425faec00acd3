"""SQLAlchemy repository adapter for prompts and generation analytics."""

import json
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.orm import Session

from ..models import (
    AnalyticsEvent,
    GeneratedArtifact,
    InteractionCounters,
    PromptFields,
    PromptMetadata,
)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS prompts (
        id VARCHAR(32) PRIMARY KEY,
        content TEXT NOT NULL,
        prompt_data TEXT NOT NULL,
        version VARCHAR(16) NOT NULL,
        generated_at VARCHAR(40) NOT NULL,
        optimized INTEGER NOT NULL,
        ai_enhanced INTEGER NOT NULL,
        generation_time_ms FLOAT,
        views INTEGER NOT NULL DEFAULT 0,
        copies INTEGER NOT NULL DEFAULT 0,
        exports INTEGER NOT NULL DEFAULT 0,
        word_count INTEGER NOT NULL,
        character_count INTEGER NOT NULL,
        keywords TEXT,
        complexity_score INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS analytics_events (
        id VARCHAR(32) PRIMARY KEY,
        event_type VARCHAR(64) NOT NULL,
        prompt_id VARCHAR(32),
        ai_provider VARCHAR(32),
        generation_time_ms FLOAT,
        word_count INTEGER,
        character_count INTEGER,
        optimized INTEGER,
        output_format VARCHAR(255),
        ip_address VARCHAR(64),
        user_agent TEXT,
        error_message TEXT,
        created_at VARCHAR(40) NOT NULL
    )
    """,
)


def create_schema(db: Session) -> None:
    """Create the prompts and analytics_events tables if they do not exist."""
    for statement in _SCHEMA:
        db.execute(text(statement))
    db.commit()


class SQLAlchemyPromptRepository:
    """
    Stores artifacts and analytics events in relational tables and maps rows back to models.

    Analytics appends arrive from recorder worker threads, so every statement on
    the shared session runs under one lock. SQLite engines used this way need
    ``connect_args={"check_same_thread": False}``.
    """

    def __init__(self, db: Session):
        self.db = db
        self._lock = threading.RLock()

    def save(self, artifact: GeneratedArtifact) -> GeneratedArtifact:
        saved = replace(artifact, id=artifact.id or uuid4().hex)
        with self._lock:
            self._write(self._insert_prompt, saved)
        return saved

    def _insert_prompt(self, saved: GeneratedArtifact) -> None:
        self.db.execute(
            text(
                """
                INSERT INTO prompts (
                    id, content, prompt_data, version, generated_at, optimized, ai_enhanced,
                    generation_time_ms, views, copies, exports, word_count, character_count,
                    keywords, complexity_score
                ) VALUES (
                    :id, :content, :prompt_data, :version, :generated_at, :optimized, :ai_enhanced,
                    :generation_time_ms, :views, :copies, :exports, :word_count, :character_count,
                    :keywords, :complexity_score
                )
                """
            ),
            {
                "id": saved.id,
                "content": saved.content,
                "prompt_data": json.dumps(saved.fields.to_dict()),
                "version": saved.metadata.version,
                "generated_at": _to_utc_iso(saved.metadata.generated_at),
                "optimized": int(saved.metadata.optimized),
                "ai_enhanced": int(saved.metadata.ai_enhanced),
                "generation_time_ms": saved.metadata.generation_time_ms,
                "views": saved.analytics.views,
                "copies": saved.analytics.copies,
                "exports": saved.analytics.exports,
                "word_count": saved.word_count,
                "character_count": saved.character_count,
                "keywords": json.dumps(saved.keywords),
                "complexity_score": saved.complexity_score,
            },
        )
        self.db.commit()

    def get(self, prompt_id: str) -> Optional[GeneratedArtifact]:
        with self._lock:
            row = self.db.execute(
                text(
                    """
                    SELECT id, content, prompt_data, version, generated_at, optimized,
                           ai_enhanced, generation_time_ms, views, copies, exports, word_count,
                           character_count, keywords, complexity_score
                    FROM prompts
                    WHERE id = :id
                    """
                ),
                {"id": prompt_id},
            ).fetchone()
        if row is None:
            return None

        return GeneratedArtifact(
            id=row.id,
            content=row.content,
            fields=PromptFields.from_mapping(_parse_json_object(row.prompt_data)),
            metadata=PromptMetadata(
                version=row.version,
                generated_at=_parse_datetime(row.generated_at),
                optimized=bool(row.optimized),
                ai_enhanced=bool(row.ai_enhanced),
                generation_time_ms=row.generation_time_ms,
            ),
            analytics=InteractionCounters(
                views=int(row.views or 0),
                copies=int(row.copies or 0),
                exports=int(row.exports or 0),
            ),
            word_count=int(row.word_count),
            character_count=int(row.character_count),
            keywords=_parse_keyword_list(row.keywords),
            complexity_score=int(row.complexity_score or 0),
        )

    def append(self, event: AnalyticsEvent) -> None:
        with self._lock:
            self._write(self._insert_event, event)

    def _write(self, insert, value) -> None:
        # a failed statement leaves the shared transaction unusable until rolled back
        try:
            insert(value)
        except Exception:
            self.db.rollback()
            raise

    def _insert_event(self, event: AnalyticsEvent) -> None:
        self.db.execute(
            text(
                """
                INSERT INTO analytics_events (
                    id, event_type, prompt_id, ai_provider, generation_time_ms, word_count,
                    character_count, optimized, output_format, ip_address, user_agent,
                    error_message, created_at
                ) VALUES (
                    :id, :event_type, :prompt_id, :ai_provider, :generation_time_ms, :word_count,
                    :character_count, :optimized, :output_format, :ip_address, :user_agent,
                    :error_message, :created_at
                )
                """
            ),
            {
                "id": uuid4().hex,
                "event_type": event.event_type,
                "prompt_id": event.prompt_id,
                "ai_provider": event.ai_provider,
                "generation_time_ms": event.generation_time_ms,
                "word_count": event.word_count,
                "character_count": event.character_count,
                "optimized": None if event.optimized is None else int(event.optimized),
                "output_format": event.output_format,
                "ip_address": event.ip_address,
                "user_agent": event.user_agent,
                "error_message": event.error_message,
                "created_at": _to_utc_iso(event.created_at),
            },
        )
        self.db.commit()

    def fetch_generation_events(
        self,
        start_date: datetime,
        end_date: datetime,
    ) -> Sequence[AnalyticsEvent]:
        with self._lock:
            rows = self.db.execute(
                text(
                    """
                    SELECT event_type, prompt_id, ai_provider, generation_time_ms, word_count,
                           character_count, optimized, output_format, ip_address, user_agent,
                           error_message, created_at
                    FROM analytics_events
                    WHERE event_type IN ('ai_generation_success', 'ai_generation_fallback')
                      AND created_at >= :start_date AND created_at <= :end_date
                    ORDER BY created_at
                    """
                ),
                {"start_date": _to_utc_iso(start_date), "end_date": _to_utc_iso(end_date)},
            ).fetchall()

        return [
            AnalyticsEvent(
                event_type=row.event_type,
                prompt_id=row.prompt_id,
                ai_provider=row.ai_provider or "unknown",
                generation_time_ms=row.generation_time_ms,
                word_count=row.word_count,
                character_count=row.character_count,
                optimized=None if row.optimized is None else bool(row.optimized),
                output_format=row.output_format,
                ip_address=row.ip_address,
                user_agent=row.user_agent,
                error_message=row.error_message,
                created_at=_parse_datetime(row.created_at),
            )
            for row in rows
        ]


def _to_utc_iso(value: datetime) -> str:
    # timestamps are stored as UTC ISO strings so range filters compare lexically
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _parse_datetime(raw) -> datetime:
    if isinstance(raw, datetime):
        parsed = raw
    else:
        parsed = datetime.fromisoformat(str(raw))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_json_object(raw) -> dict:
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return value if isinstance(value, dict) else {}
    return {}


def _parse_keyword_list(raw) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            return []
    if isinstance(raw, list):
        return [str(value) for value in raw if value is not None]
    return []
