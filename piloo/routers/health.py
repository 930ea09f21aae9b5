# piloo/routers/health.py
"""
System health check endpoint.
Returns status of backend + entity store + dashboard connections, and
optionally camera reachability.
"""

import requests
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from piloo.config import settings
from piloo.services.notification_hub import hub
from piloo.storage import Storage, get_storage
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(probe_cameras: bool = False, storage: Storage = Depends(get_storage)):
    """
    Returns:
    - Backend status
    - Storage backend + connectivity
    - Number of connected dashboards
    - Camera reachability (only with ?probe_cameras=true)
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "storage": {"backend": storage.backend, "status": "unknown"},
        "connectedClients": hub.client_count,
        "cameras": {},
    }

    try:
        storage.ping()
        result["storage"]["status"] = "ok"
    except SQLAlchemyError as e:
        result["storage"]["status"] = f"error: {str(e)}"
        result["status"] = "degraded"

    if not probe_cameras:
        return result

    for camera in storage.cameras.list():
        if not camera.ip:
            result["cameras"][camera.id] = "no_ip"
            continue
        try:
            resp = requests.get(f"http://{camera.ip}/", timeout=settings.CAMERA_PROBE_TIMEOUT)
            result["cameras"][camera.id] = "ok" if resp.status_code < 500 else f"http_{resp.status_code}"
        except requests.exceptions.ConnectionError:
            result["cameras"][camera.id] = "unreachable"
            result["status"] = "degraded"
        except requests.exceptions.RequestException as e:
            result["cameras"][camera.id] = f"error: {str(e)}"

    return result
