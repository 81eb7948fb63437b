"""Progress events emitted while a source is ingested."""

import asyncio
import logging
from enum import Enum

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ScrapePhase(str, Enum):
    """Phase of an ingestion run."""

    STARTING = "starting"
    PROCESSING = "processing"
    SCRAPING = "scraping"
    COMPLETED = "completed"
    FAILED = "failed"


class ProgressEvent(BaseModel):
    """Snapshot of a run, sent to whoever renders progress."""

    current_index: int
    total_estimate: int
    current_path: str = ""
    entries_so_far: int = 0
    phase: ScrapePhase


class ProgressChannel:
    """Bounded, fire-and-forget event stream.

    ``emit`` never blocks: when the consumer falls behind, new events are
    dropped. A ``None`` sentinel is queued by ``close`` so consumers can stop
    iterating.
    """

    def __init__(self, maxsize: int = 100):
        self._queue: asyncio.Queue[ProgressEvent | None] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0
        self._closed = False

    def emit(self, event: ProgressEvent) -> None:
        if self._closed:
            return
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(None)
        except asyncio.QueueFull:
            # Make room for the sentinel; the consumer is already behind.
            self._queue.get_nowait()
            self.dropped += 1
            self._queue.put_nowait(None)
        if self.dropped:
            logger.debug("Progress consumer missed %d events", self.dropped)

    def __aiter__(self):
        return self

    async def __anext__(self) -> ProgressEvent:
        event = await self._queue.get()
        if event is None:
            raise StopAsyncIteration
        return event


def emit(channel: ProgressChannel | None, phase: ScrapePhase, **fields) -> None:
    """Send an event if a channel is attached."""
    if channel is None:
        return
    fields.setdefault("current_index", 0)
    fields.setdefault("total_estimate", 0)
    channel.emit(ProgressEvent(phase=phase, **fields))
