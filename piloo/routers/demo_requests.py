# piloo/routers/demo_requests.py
"""
Demo requests from the marketing site.
POST /demo-request is the public form endpoint; /demo-requests is the admin CRUD.
"""

from fastapi import APIRouter, Depends, HTTPException
from piloo.schemas.demo_request import DemoRequestCreate, DemoRequestOut, DemoRequestUpdate
from piloo.storage import Storage, get_storage
from piloo.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/demo-request", summary="Public demo request form")
def submit_demo_request(body: DemoRequestCreate, storage: Storage = Depends(get_storage)):
    request = storage.demo_requests.create(body)
    logger.info(f"📩 Demo request from {request.name} <{request.email}> ({request.company or 'no company'})")
    return {"message": "Demo request submitted successfully", "id": request.id}


@router.get("/demo-requests", response_model=list[DemoRequestOut])
def list_demo_requests(storage: Storage = Depends(get_storage)):
    return storage.demo_requests.list()


@router.get("/demo-requests/{request_id}", response_model=DemoRequestOut)
def get_demo_request(request_id: int, storage: Storage = Depends(get_storage)):
    request = storage.demo_requests.get(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Demo request not found")
    return request


@router.post("/demo-requests", response_model=DemoRequestOut)
def create_demo_request(body: DemoRequestCreate, storage: Storage = Depends(get_storage)):
    return storage.demo_requests.create(body)


@router.put("/demo-requests/{request_id}", response_model=DemoRequestOut)
def update_demo_request(request_id: int, body: DemoRequestUpdate, storage: Storage = Depends(get_storage)):
    request = storage.demo_requests.update(request_id, body)
    if request is None:
        raise HTTPException(status_code=404, detail="Demo request not found")
    return request


@router.delete("/demo-requests/{request_id}")
def delete_demo_request(request_id: int, storage: Storage = Depends(get_storage)):
    if not storage.demo_requests.delete(request_id):
        raise HTTPException(status_code=404, detail="Demo request not found")
    return {"message": "Demo request deleted"}
