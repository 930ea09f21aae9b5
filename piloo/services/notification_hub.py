# piloo/services/notification_hub.py
"""
Server side of the /ws notification channel.

Keeps a registry of open dashboard connections (connection id → socket) and
fans server events out to all of them concurrently. A connection whose send
fails or takes longer than BROADCAST_SEND_TIMEOUT_SECONDS is pruned from the
registry on the spot.

Envelopes:
  {"type": "connection", "message", "timestamp"}       on connect
  {"type": "pong", "timestamp"}                        reply to {"type": "ping"}
  {"type": "subscribed", "subscriptions", "timestamp"} reply to {"type": "subscribe"}
  {"type": "notification", "data": Notification}
  {"type": "update", "updateType": str, "data": any}
"""

import asyncio
import json
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import WebSocket
from pydantic import BaseModel

from piloo.config import settings
from piloo.schemas.notification import Notification
from piloo.utils.logger import get_logger

logger = get_logger(__name__)

ALL = "all"


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, dict):
        return {k: _jsonable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [_jsonable(v) for v in data]
    return data


class NotificationHub:
    def __init__(self, send_timeout: float = None):
        self.send_timeout = send_timeout or settings.BROADCAST_SEND_TIMEOUT_SECONDS
        self._connections: Dict[str, WebSocket] = {}
        self._subscriptions: Dict[str, List[str]] = {}

    @property
    def client_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        conn_id = uuid.uuid4().hex
        self._connections[conn_id] = websocket
        self._subscriptions[conn_id] = [ALL]
        logger.info(f"🔌 Dashboard connected ({conn_id[:8]}). Total connections: {self.client_count}")
        await websocket.send_text(json.dumps({
            "type": "connection",
            "message": "Connected to Piloo surveillance system",
            "timestamp": _now(),
        }))
        return conn_id

    def disconnect(self, conn_id: str):
        if self._connections.pop(conn_id, None) is not None:
            self._subscriptions.pop(conn_id, None)
            logger.info(f"🔌 Dashboard disconnected ({conn_id[:8]}). Total connections: {self.client_count}")

    def handle_client_message(self, conn_id: str, raw: str) -> Optional[dict]:
        """Returns the reply envelope for a client frame, or None when no reply is due."""
        try:
            message = json.loads(raw)
        except ValueError:
            logger.warning(f"Invalid WebSocket message from {conn_id[:8]}: {raw[:100]!r}")
            return None
        if not isinstance(message, dict):
            logger.warning(f"Ignoring non-object WebSocket message from {conn_id[:8]}")
            return None

        kind = message.get("type")
        if kind == "ping":
            return {"type": "pong", "timestamp": _now()}
        if kind == "subscribe":
            subscriptions = message.get("subscriptions") or [ALL]
            self._subscriptions[conn_id] = [str(s) for s in subscriptions]
            return {"type": "subscribed", "subscriptions": self._subscriptions[conn_id], "timestamp": _now()}
        logger.debug(f"Unhandled WebSocket message type {kind!r}")
        return None

    def _wants(self, conn_id: str, category: Optional[str]) -> bool:
        subs = self._subscriptions.get(conn_id, [ALL])
        return category is None or ALL in subs or category in subs

    async def _deliver(self, conn_id: str, websocket: WebSocket, text: str) -> bool:
        try:
            await asyncio.wait_for(websocket.send_text(text), timeout=self.send_timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"Dropping connection {conn_id[:8]}: send timed out after {self.send_timeout}s")
        except Exception as e:
            logger.warning(f"Dropping connection {conn_id[:8]}: {e}")
        return False

    async def broadcast(self, message: dict, category: Optional[str] = None) -> int:
        """Send one envelope to every interested connection at once. Returns the delivery count."""
        text = json.dumps(message)
        targets = [(conn_id, ws) for conn_id, ws in list(self._connections.items())
                   if self._wants(conn_id, category)]
        outcomes = await asyncio.gather(*(self._deliver(conn_id, ws, text) for conn_id, ws in targets))
        for (conn_id, _), ok in zip(targets, outcomes):
            if not ok:
                self.disconnect(conn_id)
        return sum(outcomes)

    async def broadcast_notification(self, notification: Notification) -> int:
        envelope = {"type": "notification", "data": _jsonable(notification)}
        return await self.broadcast(envelope, category=notification.type)

    async def broadcast_update(self, update_type: str, data: Any) -> int:
        envelope = {"type": "update", "updateType": update_type, "data": _jsonable(data)}
        return await self.broadcast(envelope)


hub = NotificationHub()
