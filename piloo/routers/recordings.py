# piloo/routers/recordings.py
"""
Recording metadata + file download.
Files live on local disk at Recording.file_path; the store only keeps metadata.
"""

import os
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from piloo.config import settings
from piloo.schemas.recording import Quality, RecordingCreate, RecordingFilter, RecordingOut, RecordingUpdate
from piloo.storage import Storage, get_storage
from piloo.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def resolve_recording_path(file_path: str) -> Optional[str]:
    """
    Absolute, symlink-free path of a recording file, or None when it falls
    outside RECORDINGS_DIR. Relative paths are taken relative to that directory.
    """
    root = os.path.realpath(settings.RECORDINGS_DIR)
    resolved = os.path.realpath(os.path.join(root, file_path))
    if os.path.commonpath([root, resolved]) != root:
        return None
    return resolved


def _check_file_path(file_path: Optional[str]):
    if file_path is not None and resolve_recording_path(file_path) is None:
        raise HTTPException(status_code=400, detail="Recording file must be inside the recordings directory")


@router.get("/recordings", response_model=list[RecordingOut], summary="Recordings matching all given filters")
def list_recordings(
    camera_id: Optional[int] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    quality: Optional[Quality] = None,
    has_motion: Optional[bool] = None,
    storage: Storage = Depends(get_storage),
):
    criteria = RecordingFilter(camera_id=camera_id, start=start, end=end,
                               quality=quality, has_motion=has_motion)
    return storage.search_recordings(criteria)


@router.get("/recordings/{recording_id}", response_model=RecordingOut)
def get_recording(recording_id: int, storage: Storage = Depends(get_storage)):
    recording = storage.recordings.get(recording_id)
    if recording is None:
        raise HTTPException(status_code=404, detail="Recording not found")
    return recording


@router.get("/recordings/{recording_id}/download")
def download_recording(recording_id: int, storage: Storage = Depends(get_storage)):
    recording = storage.recordings.get(recording_id)
    if recording is None:
        raise HTTPException(status_code=404, detail="Recording not found")
    path = resolve_recording_path(recording.file_path)
    if path is None:
        logger.warning(f"Recording #{recording_id} points outside {settings.RECORDINGS_DIR}: {recording.file_path}")
        raise HTTPException(status_code=404, detail="Recording file not found")
    if not os.path.isfile(path):
        logger.warning(f"Recording #{recording_id} file missing on disk: {path}")
        raise HTTPException(status_code=404, detail="Recording file not found")
    return FileResponse(path, filename=recording.filename)


@router.post("/recordings", response_model=RecordingOut)
def create_recording(body: RecordingCreate, storage: Storage = Depends(get_storage)):
    _check_file_path(body.file_path)
    return storage.recordings.create(body)


@router.put("/recordings/{recording_id}", response_model=RecordingOut)
def update_recording(recording_id: int, body: RecordingUpdate, storage: Storage = Depends(get_storage)):
    _check_file_path(body.changes().get("file_path"))
    recording = storage.recordings.update(recording_id, body)
    if recording is None:
        raise HTTPException(status_code=404, detail="Recording not found")
    return recording


@router.delete("/recordings/{recording_id}")
def delete_recording(recording_id: int, storage: Storage = Depends(get_storage)):
    if not storage.recordings.delete(recording_id):
        raise HTTPException(status_code=404, detail="Recording not found")
    return {"message": "Recording deleted"}
