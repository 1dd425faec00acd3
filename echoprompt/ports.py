"""Port definitions for the collaborators the generation core talks to."""

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .models import AnalyticsEvent, GeneratedArtifact


class CompletionClient(Protocol):
    """Black-box text completion call; may raise or hang until its transport times out."""

    async def complete(self, prompt_text: str) -> str:
        """Return the completion text for a prompt."""


class PromptStore(Protocol):
    """Persistence interface for generated artifacts."""

    def save(self, artifact: GeneratedArtifact) -> GeneratedArtifact:
        """Persist an artifact and return it with its assigned id."""

    def get(self, prompt_id: str) -> Optional[GeneratedArtifact]:
        """Return a stored artifact, or None."""


class AnalyticsSink(Protocol):
    """Best-effort destination for analytics events."""

    def append(self, event: AnalyticsEvent) -> None:
        """Append one event."""


class GenerationEventRepository(Protocol):
    """Read side of the analytics store."""

    def fetch_generation_events(
        self,
        start_date: datetime,
        end_date: datetime,
    ) -> Sequence[AnalyticsEvent]:
        """Return generation outcome events for a period."""
