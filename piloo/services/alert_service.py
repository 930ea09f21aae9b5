# piloo/services/alert_service.py
"""
Event producers for the notification channel.
Routers call these right after the store mutation succeeds; each one logs the
event and pushes a notification and/or an update hint to every dashboard.
"""

from starlette.concurrency import run_in_threadpool

from piloo.schemas.alert import AlertCreate, AlertOut
from piloo.schemas.camera import CameraOut
from piloo.schemas.employee import EmployeeOut
from piloo.schemas.notification import Notification
from piloo.services.notification_hub import hub
from piloo.storage import Storage
from piloo.utils.logger import get_logger

logger = get_logger(__name__)


async def raise_alert(storage: Storage, data: AlertCreate, camera: CameraOut = None) -> tuple:
    """Create and persist an alert, then notify every connected dashboard."""
    alert = await run_in_threadpool(storage.alerts.create, data)
    logger.warning(f"[ALERT][{alert.type.upper()}][{alert.priority}] {alert.description}")

    if camera is not None:
        title = f"{alert.type.capitalize()} Detected"
        message = f"{camera.name}: {alert.description}"
        payload = {"alert": alert, "camera": camera}
    else:
        title = f"New {alert.type} Alert"
        message = alert.description
        payload = alert

    notification = Notification(type="alert", priority=alert.priority, title=title,
                                message=message, data=payload)
    await hub.broadcast_notification(notification)
    await hub.broadcast_update("alerts", alert)
    return alert, notification


async def alert_changed(alert: AlertOut, new_status: str = None):
    """Status transitions (pending → resolved | dismissed) get their own notification."""
    if new_status:
        logger.info(f"[ALERT] #{alert.id} {alert.type} → {new_status}")
        await hub.broadcast_notification(Notification(
            type="alert",
            priority="medium",
            title=f"Alert {new_status}",
            message=f"{alert.type} alert has been {new_status}",
            data=alert,
        ))
    await hub.broadcast_update("alerts", alert)


async def camera_changed(camera: CameraOut, previous_status: str = None):
    if previous_status is not None and previous_status != camera.status:
        priority = "high" if camera.status == "offline" else "low"
        logger.info(f"[CAMERA] {camera.name}: {previous_status} → {camera.status}")
        await hub.broadcast_notification(Notification(
            type="camera",
            priority=priority,
            title=f"Camera {camera.status}",
            message=f"{camera.name} ({camera.location}) is now {camera.status}",
            data=camera,
        ))
    await hub.broadcast_update("cameras", camera)


async def employee_changed(employee: EmployeeOut):
    await hub.broadcast_update("employees", employee)
