"""Connection management helpers for realtime websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class RealtimeConnectionManager:
    """Manage active websocket connections grouped by topic."""

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[WebSocket]] = defaultdict(set)

    async def connect(self, topic: str, websocket: WebSocket) -> None:
        """Accept the websocket connection and subscribe it to ``topic``."""

        await websocket.accept()
        self._connections[topic].add(websocket)

    def disconnect(self, topic: str, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the subscribers of ``topic``."""

        connections = self._connections.get(topic)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(topic, None)

    async def send_to_topic(self, topic: str, message: dict[str, Any]) -> int:
        """Send ``message`` to every connection on ``topic`` and return how many got it."""

        delivered = 0
        for connection in list(self._connections.get(topic, set())):
            try:
                await connection.send_json(message)
            except Exception as exc:  # pragma: no cover - stale socket cleanup
                logger.debug("Dropping websocket on %s after send failure: %s", topic, exc)
                self.disconnect(topic, connection)
            else:
                delivered += 1
        return delivered


__all__ = ["RealtimeConnectionManager"]
