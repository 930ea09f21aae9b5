# piloo/routers/zones.py
from fastapi import APIRouter, Depends, HTTPException
from piloo.schemas.zone import ZoneCreate, ZoneOut, ZoneUpdate
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.get("/zones", response_model=list[ZoneOut])
def list_zones(storage: Storage = Depends(get_storage)):
    return storage.zones.list()


@router.get("/zones/{zone_id}", response_model=ZoneOut)
def get_zone(zone_id: int, storage: Storage = Depends(get_storage)):
    zone = storage.zones.get(zone_id)
    if zone is None:
        raise HTTPException(status_code=404, detail="Zone not found")
    return zone


@router.post("/zones", response_model=ZoneOut)
def create_zone(body: ZoneCreate, storage: Storage = Depends(get_storage)):
    return storage.zones.create(body)


@router.put("/zones/{zone_id}", response_model=ZoneOut)
def update_zone(zone_id: int, body: ZoneUpdate, storage: Storage = Depends(get_storage)):
    zone = storage.zones.update(zone_id, body)
    if zone is None:
        raise HTTPException(status_code=404, detail="Zone not found")
    return zone


@router.delete("/zones/{zone_id}")
def delete_zone(zone_id: int, storage: Storage = Depends(get_storage)):
    if not storage.zones.delete(zone_id):
        raise HTTPException(status_code=404, detail="Zone not found")
    return {"message": "Zone deleted"}
