# tests/test_notification_hub.py
"""Server side of the notification channel: the hub and the /ws endpoint."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import json
import threading
import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from piloo.main import app
from piloo.schemas.alert import AlertCreate
from piloo.schemas.notification import Notification
from piloo.services.notification_client import NotificationFeed
from piloo.services import alert_service
from piloo.services.notification_hub import NotificationHub
from piloo.storage import get_storage
from piloo.storage.memory import MemoryStorage


def make_socket():
    ws = MagicMock()
    ws.accept = AsyncMock()
    ws.send_text = AsyncMock()
    return ws


class TestNotificationHub:
    @pytest.mark.asyncio
    async def test_connect_sends_acknowledgement(self):
        hub = NotificationHub()
        ws = make_socket()
        await hub.connect(ws)
        ws.accept.assert_awaited_once()
        ack = json.loads(ws.send_text.await_args.args[0])
        assert ack["type"] == "connection"
        assert hub.client_count == 1

    @pytest.mark.asyncio
    async def test_broadcast_reaches_every_connection(self):
        hub = NotificationHub()
        sockets = [make_socket(), make_socket()]
        for ws in sockets:
            await hub.connect(ws)
        delivered = await hub.broadcast_notification(Notification(title="Hi", message="There"))
        assert delivered == 2
        for ws in sockets:
            envelope = json.loads(ws.send_text.await_args.args[0])
            assert envelope["type"] == "notification"
            assert envelope["data"]["title"] == "Hi"

    @pytest.mark.asyncio
    async def test_failed_send_prunes_connection(self):
        hub = NotificationHub()
        good, bad = make_socket(), make_socket()
        await hub.connect(good)
        await hub.connect(bad)
        bad.send_text.side_effect = RuntimeError("socket closed")
        assert await hub.broadcast_update("cameras", {"id": 1}) == 1
        assert hub.client_count == 1

    @pytest.mark.asyncio
    async def test_stalled_socket_is_dropped_after_timeout(self):
        hub = NotificationHub(send_timeout=0.05)
        good, stalled = make_socket(), make_socket()
        await hub.connect(good)
        await hub.connect(stalled)

        async def never_drains(text):
            await asyncio.sleep(30)

        stalled.send_text.side_effect = never_drains
        delivered = await asyncio.wait_for(hub.broadcast_update("alerts", {"id": 1}), timeout=2)
        assert delivered == 1
        assert hub.client_count == 1
        assert json.loads(good.send_text.await_args.args[0])["updateType"] == "alerts"

    @pytest.mark.asyncio
    async def test_alert_is_stored_off_the_event_loop(self, monkeypatch):
        storage = MemoryStorage()
        threads = []
        create = storage.alerts.create

        def recording_create(data):
            threads.append(threading.get_ident())
            return create(data)

        monkeypatch.setattr(storage.alerts, "create", recording_create)
        monkeypatch.setattr(alert_service, "hub", NotificationHub())
        alert, _ = await alert_service.raise_alert(storage, AlertCreate(
            type="motion", description="Motion in lobby", camera_id=1, priority="low"))

        assert alert.id == 1
        assert threads and threads[0] != threading.get_ident()

    @pytest.mark.asyncio
    async def test_subscription_filters_categories(self):
        hub = NotificationHub()
        ws = make_socket()
        conn_id = await hub.connect(ws)
        reply = hub.handle_client_message(conn_id, json.dumps({"type": "subscribe", "subscriptions": ["camera"]}))
        assert reply["type"] == "subscribed"
        assert reply["subscriptions"] == ["camera"]
        assert await hub.broadcast_notification(Notification(type="alert", title="a", message="b")) == 0
        assert await hub.broadcast_notification(Notification(type="camera", title="a", message="b")) == 1

    def test_ping_and_garbage(self):
        hub = NotificationHub()
        assert hub.handle_client_message("x", json.dumps({"type": "ping"}))["type"] == "pong"
        assert hub.handle_client_message("x", "not json") is None
        assert hub.handle_client_message("x", "[1, 2]") is None
        assert hub.handle_client_message("x", json.dumps({"type": "unknown"})) is None

    def test_disconnect_unknown_is_noop(self):
        hub = NotificationHub()
        hub.disconnect("missing")
        assert hub.client_count == 0


class TestWebSocketEndpoint:
    @pytest.fixture
    def client(self):
        store = MemoryStorage()
        app.dependency_overrides[get_storage] = lambda: store
        with TestClient(app) as client:
            yield client
        app.dependency_overrides.clear()

    def test_ping_pong_ignores_garbage(self, client):
        with client.websocket_connect("/ws") as ws:
            assert ws.receive_json()["type"] == "connection"
            ws.send_text("{broken")
            ws.send_json({"type": "ping"})
            assert ws.receive_json()["type"] == "pong"

    def test_two_dashboards_receive_new_alert(self, client):
        feeds = [NotificationFeed(), NotificationFeed()]
        with client.websocket_connect("/ws") as ws1, client.websocket_connect("/ws") as ws2:
            for ws in (ws1, ws2):
                assert ws.receive_json()["type"] == "connection"

            resp = client.post("/api/alerts", json={"type": "intrusion", "description": "Door forced",
                                                    "priority": "high"})
            alert_id = resp.json()["id"]

            for ws, feed in zip((ws1, ws2), feeds):
                notification = ws.receive_json()
                update = ws.receive_json()
                assert notification["type"] == "notification"
                assert notification["data"]["priority"] == "high"
                assert update == {"type": "update", "updateType": "alerts", "data": resp.json()}
                feed.handle_message(notification)
                feed.handle_message(update)

        for feed in feeds:
            assert feed.badge_count == 1
            assert feed.notifications[0].data["id"] == alert_id
            assert feed.last_update["type"] == "alerts"

    def test_camera_going_offline_is_high_priority(self, client):
        client.post("/api/cameras", json={"name": "Cam", "location": "Lobby", "ip": "10.0.0.5"})
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            client.put("/api/cameras/1", json={"status": "offline"})
            notification = ws.receive_json()
            assert notification["data"]["type"] == "camera"
            assert notification["data"]["priority"] == "high"
            assert ws.receive_json()["updateType"] == "cameras"
