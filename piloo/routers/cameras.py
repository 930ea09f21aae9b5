# piloo/routers/cameras.py
"""Camera configuration CRUD. Status changes are pushed to connected dashboards."""

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool
from piloo.schemas.camera import CameraCreate, CameraOut, CameraUpdate
from piloo.services.alert_service import camera_changed
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.get("/cameras", response_model=list[CameraOut])
def list_cameras(status: str = None, storage: Storage = Depends(get_storage)):
    if status:
        return storage.cameras.find_by(status=status)
    return storage.cameras.list()


@router.get("/cameras/{camera_id}", response_model=CameraOut)
def get_camera(camera_id: int, storage: Storage = Depends(get_storage)):
    camera = storage.cameras.get(camera_id)
    if camera is None:
        raise HTTPException(status_code=404, detail="Camera not found")
    return camera


@router.post("/cameras", response_model=CameraOut)
async def create_camera(body: CameraCreate, storage: Storage = Depends(get_storage)):
    camera = await run_in_threadpool(storage.cameras.create, body)
    await camera_changed(camera)
    return camera


@router.put("/cameras/{camera_id}", response_model=CameraOut)
async def update_camera(camera_id: int, body: CameraUpdate, storage: Storage = Depends(get_storage)):
    before = await run_in_threadpool(storage.cameras.get, camera_id)
    if before is None:
        raise HTTPException(status_code=404, detail="Camera not found")
    camera = await run_in_threadpool(storage.cameras.update, camera_id, body)
    if camera is None:
        raise HTTPException(status_code=404, detail="Camera not found")
    await camera_changed(camera, previous_status=before.status)
    return camera


@router.delete("/cameras/{camera_id}")
def delete_camera(camera_id: int, storage: Storage = Depends(get_storage)):
    """Alerts and recordings that reference the camera are left untouched."""
    if not storage.cameras.delete(camera_id):
        raise HTTPException(status_code=404, detail="Camera not found")
    return {"message": "Camera deleted"}
