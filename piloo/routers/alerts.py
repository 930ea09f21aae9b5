# piloo/routers/alerts.py
"""
Alert triage endpoints.
POST raises a notification on every dashboard; PUT with a new status raises
a status-change notification. GET accepts an optional from/to window.
"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.concurrency import run_in_threadpool
from piloo.schemas.alert import AlertCreate, AlertOut, AlertUpdate
from piloo.services.alert_service import alert_changed, raise_alert
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.get("/alerts", response_model=list[AlertOut], summary="All alerts, optionally within a date window")
def list_alerts(
    date_from: Optional[datetime] = Query(None, alias="from"),
    date_to: Optional[datetime] = Query(None, alias="to"),
    status: Optional[str] = None,
    storage: Storage = Depends(get_storage),
):
    if date_from or date_to:
        alerts = storage.alerts_between(date_from or datetime.min, date_to or datetime.max)
    else:
        alerts = storage.alerts.list()
    if status:
        alerts = [a for a in alerts if a.status == status]
    return alerts


@router.get("/alerts/{alert_id}", response_model=AlertOut)
def get_alert(alert_id: int, storage: Storage = Depends(get_storage)):
    alert = storage.alerts.get(alert_id)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert


@router.post("/alerts", response_model=AlertOut)
async def create_alert(body: AlertCreate, storage: Storage = Depends(get_storage)):
    alert, _ = await raise_alert(storage, body)
    return alert


@router.put("/alerts/{alert_id}", response_model=AlertOut)
async def update_alert(alert_id: int, body: AlertUpdate, storage: Storage = Depends(get_storage)):
    alert = await run_in_threadpool(storage.alerts.update, alert_id, body)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")
    await alert_changed(alert, new_status=body.status)
    return alert


@router.delete("/alerts/{alert_id}")
def delete_alert(alert_id: int, storage: Storage = Depends(get_storage)):
    if not storage.alerts.delete(alert_id):
        raise HTTPException(status_code=404, detail="Alert not found")
    return {"message": "Alert deleted"}
