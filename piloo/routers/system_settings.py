# piloo/routers/system_settings.py
"""The single system-settings row. PUT creates it from defaults on first use."""

from fastapi import APIRouter, Depends, HTTPException
from piloo.schemas.system_settings import SystemSettingsOut, SystemSettingsUpdate
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.get("/settings", response_model=SystemSettingsOut)
def get_settings(storage: Storage = Depends(get_storage)):
    current = storage.get_settings()
    if current is None:
        raise HTTPException(status_code=404, detail="Settings not configured")
    return current


@router.put("/settings", response_model=SystemSettingsOut)
def update_settings(body: SystemSettingsUpdate, storage: Storage = Depends(get_storage)):
    return storage.update_settings(body)
