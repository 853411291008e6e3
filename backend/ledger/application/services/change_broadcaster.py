"""Change broadcaster — pushes ledger "data changed" events to live listeners."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

logger = logging.getLogger(__name__)


class ChangeBroadcaster:
    """Fans ledger change events out to server-sent-event subscribers.

    Each subscriber owns an asyncio.Queue. A subscriber that falls
    ``max_pending`` events behind is dropped rather than slowing the ledger;
    it still receives what was queued before the drop.
    """

    def __init__(self, max_pending: int = 100) -> None:
        self._max_pending = max_pending
        self._queues: list[asyncio.Queue[str | None]] = []

    async def subscribe(self) -> AsyncGenerator[str, None]:
        """Yield formatted SSE messages until shutdown, drop or disconnect."""
        # One extra slot so the end-of-stream sentinel always fits.
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._max_pending + 1)
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    def publish(self, event_type: str, data: dict[str, Any]) -> None:
        """Queue an event for every subscriber."""
        message = f"event: {event_type}\ndata: {json.dumps(data)}\n\n"
        for queue in list(self._queues):
            if queue.qsize() >= self._max_pending:
                logger.warning(
                    "Event subscriber is %d events behind, disconnecting", self._max_pending
                )
                self._queues.remove(queue)
                queue.put_nowait(None)
            else:
                queue.put_nowait(message)

    def shutdown(self) -> None:
        """Disconnect every subscriber."""
        for queue in self._queues:
            queue.put_nowait(None)
        self._queues.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)
