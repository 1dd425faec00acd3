"""In-process adapters, used when no database is configured."""

import threading
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from uuid import uuid4

from ..models import AnalyticsEvent, GeneratedArtifact


class InMemoryPromptStore:
    def __init__(self):
        self._items: Dict[str, GeneratedArtifact] = {}

    def save(self, artifact: GeneratedArtifact) -> GeneratedArtifact:
        saved = replace(artifact, id=artifact.id or uuid4().hex)
        self._items[saved.id] = saved
        return saved

    def get(self, prompt_id: str) -> Optional[GeneratedArtifact]:
        return self._items.get(prompt_id)


class InMemoryAnalyticsSink:
    """Append-only event list; also serves the generation stats read side."""

    def __init__(self):
        self._events: List[AnalyticsEvent] = []
        self._lock = threading.Lock()

    def append(self, event: AnalyticsEvent) -> None:
        # appends arrive from recorder worker threads
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[AnalyticsEvent]:
        with self._lock:
            return list(self._events)

    def fetch_generation_events(
        self,
        start_date: datetime,
        end_date: datetime,
    ) -> Sequence[AnalyticsEvent]:
        return [event for event in self.events if start_date <= event.created_at <= end_date]
