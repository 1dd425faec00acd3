"""Fire-and-forget analytics recording."""

import asyncio
import logging
from typing import Optional, Set

from .models import AnalyticsEvent
from .ports import AnalyticsSink

logger = logging.getLogger(__name__)


class AnalyticsRecorder:
    """
    Sends analytics events to a sink from detached background tasks.

    Writes run on a worker thread so a slow or blocking sink never delays the
    caller. Any exception raised by the sink is logged and discarded.
    """

    def __init__(self, sink: Optional[AnalyticsSink] = None, enabled: bool = True):
        self.sink = sink
        self.enabled = enabled
        self._pending: Set[asyncio.Task] = set()

    def dispatch(self, event: AnalyticsEvent) -> None:
        if self.sink is None or not self.enabled:
            logger.debug("Analytics disabled, dropping %s event", event.event_type)
            return

        task = asyncio.get_running_loop().create_task(self._write(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every dispatched write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def _write(self, event: AnalyticsEvent) -> None:
        try:
            await asyncio.to_thread(self.sink.append, event)
        except Exception as e:
            logger.warning("Failed to record analytics event %s: %s", event.event_type, e)
