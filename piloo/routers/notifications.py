# piloo/routers/notifications.py
"""
Real-time notification channel.
/ws is the dashboard socket; the two POST endpoints push test traffic through it.
"""

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect
from starlette.concurrency import run_in_threadpool
from piloo.schemas.alert import AlertCreate
from piloo.schemas.notification import Notification, NotificationRequest, SimulatedCameraEvent
from piloo.services.alert_service import raise_alert
from piloo.services.notification_hub import hub
from piloo.storage import Storage, get_storage
from piloo.utils.logger import get_logger

router = APIRouter()
ws_router = APIRouter()
logger = get_logger(__name__)

# event type → (priority, description)
CAMERA_EVENTS = {
    "intrusion": ("high", "Unauthorized person detected in monitored area"),
    "motion": ("medium", "Motion detected"),
    "loitering": ("low", "Person loitering for an extended period"),
    "vehicle": ("high", "Unauthorized vehicle detected"),
}


@ws_router.websocket("/ws")
async def notifications_socket(websocket: WebSocket):
    conn_id = await hub.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            reply = hub.handle_client_message(conn_id, raw)
            if reply is not None:
                await websocket.send_json(reply)
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(conn_id)


@router.post("/notifications/test", summary="Broadcast a test notification")
async def send_test_notification(body: NotificationRequest):
    notification = Notification(type=body.type, priority=body.priority,
                                title=body.title, message=body.message)
    delivered = await hub.broadcast_notification(notification)
    return {"message": "Test notification sent", "delivered": delivered, "notification": notification}


@router.post("/simulate/camera-event", summary="Simulate a detection event on a camera")
async def simulate_camera_event(body: SimulatedCameraEvent, storage: Storage = Depends(get_storage)):
    camera = await run_in_threadpool(storage.cameras.get, body.camera_id)
    if camera is None:
        raise HTTPException(status_code=404, detail="Camera not found")

    priority, description = CAMERA_EVENTS[body.event_type]
    alert, notification = await raise_alert(
        storage,
        AlertCreate(type=body.event_type, description=description, camera_id=camera.id, priority=priority),
        camera=camera,
    )
    logger.info(f"🎬 Simulated {body.event_type} on {camera.name} → alert #{alert.id}")
    return {"message": "Camera event simulated", "alert": alert, "notification": notification}
