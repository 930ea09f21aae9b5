# piloo/services/notification_client.py
"""
Client side of the /ws notification channel, i.e. what a dashboard session runs.

NotificationFeed holds the newest notifications (newest first, capped) and
decides which ones deserve a toast. NotificationClient keeps one connection
open, subscribes to everything on open, pings on a fixed interval and
reconnects after a fixed delay whenever the connection drops.

Reconnection never gives up and never backs off: with the server down for a
long time the client keeps retrying every RECONNECT_DELAY_SECONDS.
"""

import asyncio
import json
from collections import deque
from typing import Callable, List, Optional

import websockets
from pydantic import ValidationError
from websockets.exceptions import WebSocketException

from piloo.config import settings
from piloo.schemas.notification import TOAST_PRIORITIES, Notification
from piloo.utils.logger import get_logger

logger = get_logger(__name__)

ToastHandler = Callable[[Notification], None]


class NotificationFeed:
    def __init__(self, capacity: int = None, on_toast: Optional[ToastHandler] = None):
        self.capacity = capacity or settings.NOTIFICATION_BUFFER_SIZE
        self._items = deque(maxlen=self.capacity)
        self._on_toast = on_toast
        self.last_update: Optional[dict] = None

    @property
    def notifications(self) -> List[Notification]:
        return list(self._items)

    @property
    def badge_count(self) -> int:
        return len(self._items)

    def add(self, notification: Notification):
        # appendleft on a full deque drops the oldest entry from the right
        self._items.appendleft(notification)
        if notification.priority in TOAST_PRIORITIES and self._on_toast is not None:
            try:
                self._on_toast(notification)
            except Exception as e:
                logger.error(f"Toast handler failed for '{notification.title}': {e}", exc_info=True)

    def remove(self, notification_id: str) -> bool:
        for item in self._items:
            if item.id == notification_id:
                self._items.remove(item)
                return True
        return False

    def clear(self):
        self._items.clear()

    def handle_message(self, message: dict):
        kind = message.get("type")
        if kind == "notification" and message.get("data"):
            try:
                self.add(Notification.model_validate(message["data"]))
            except ValidationError as e:
                logger.warning(f"Malformed notification dropped: {e}")
        elif kind == "update" and message.get("updateType"):
            self.last_update = {"type": message["updateType"], "data": message.get("data")}
        elif kind == "connection":
            logger.info(f"Connection confirmed: {message.get('message')}")


class NotificationClient:
    def __init__(self, url: str = None, feed: NotificationFeed = None,
                 heartbeat_interval: float = None, reconnect_delay: float = None,
                 connect=websockets.connect):
        self.url = url or settings.NOTIFICATION_WS_URL
        self.feed = feed or NotificationFeed()
        self.heartbeat_interval = heartbeat_interval or settings.HEARTBEAT_INTERVAL_SECONDS
        self.reconnect_delay = reconnect_delay or settings.RECONNECT_DELAY_SECONDS
        self._connect = connect
        self._ws = None
        self._stopped = False
        self._awaiting_pong = False
        self.is_connected = False
        self.connection_attempts = 0

    async def run(self):
        """Connect and stay connected until stop() is called."""
        while not self._stopped:
            self.connection_attempts += 1
            try:
                async with self._connect(self.url) as ws:
                    await self._session(ws)
            except (OSError, WebSocketException) as e:
                logger.warning(f"❌ Notification channel {self.url} — {e}")
            except Exception as e:
                logger.error(f"❌ Notification channel {self.url} — unexpected error: {e}", exc_info=True)
            finally:
                self._ws = None
                self.is_connected = False

            if self._stopped:
                break
            logger.info(f"Reconnecting to notification channel in {self.reconnect_delay}s")
            await asyncio.sleep(self.reconnect_delay)

    async def _session(self, ws):
        self._ws = ws
        self.is_connected = True
        self._awaiting_pong = False
        logger.info(f"✅ Notification channel connected: {self.url}")
        await ws.send(json.dumps({"type": "subscribe", "subscriptions": ["all"]}))

        heartbeat = asyncio.create_task(self._heartbeat(ws))
        try:
            async for raw in ws:
                self._on_message(raw)
        finally:
            heartbeat.cancel()
            for outcome in await asyncio.gather(heartbeat, return_exceptions=True):
                if isinstance(outcome, Exception):
                    logger.warning(f"Heartbeat stopped with an error: {outcome}")

    async def _heartbeat(self, ws):
        while True:
            await asyncio.sleep(self.heartbeat_interval)
            if self._awaiting_pong:
                logger.warning("Previous ping unanswered — treating connection as stale")
                await ws.close()
                return
            self._awaiting_pong = True
            await ws.send(json.dumps({"type": "ping"}))

    def _on_message(self, raw):
        try:
            message = json.loads(raw)
        except ValueError:
            logger.error(f"Error parsing notification message: {raw!r:.100}")
            return
        if not isinstance(message, dict):
            return
        if message.get("type") == "pong":
            self._awaiting_pong = False
        self.feed.handle_message(message)

    async def send(self, message: dict) -> bool:
        if self._ws is None or not self.is_connected:
            return False
        await self._ws.send(json.dumps(message))
        return True

    async def stop(self):
        self._stopped = True
        if self._ws is not None:
            await self._ws.close()
