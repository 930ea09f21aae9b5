# piloo/routers/users.py
"""Account management. Every response goes through UserRecord.public() so passwords never leave the store."""

from fastapi import APIRouter, Depends, HTTPException
from piloo.schemas.user import UserCreate, UserOut, UserUpdate
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.get("/users", response_model=list[UserOut])
def list_users(storage: Storage = Depends(get_storage)):
    return [u.public() for u in storage.users.list()]


@router.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: int, storage: Storage = Depends(get_storage)):
    user = storage.users.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user.public()


@router.post("/users", response_model=UserOut)
def create_user(body: UserCreate, storage: Storage = Depends(get_storage)):
    return storage.users.create(body).public()


@router.put("/users/{user_id}", response_model=UserOut)
def update_user(user_id: int, body: UserUpdate, storage: Storage = Depends(get_storage)):
    user = storage.users.update(user_id, body)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user.public()


@router.delete("/users/{user_id}")
def delete_user(user_id: int, storage: Storage = Depends(get_storage)):
    if not storage.users.delete(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted"}
