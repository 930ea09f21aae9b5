# piloo/routers/auth.py
"""
Login + signup.
Passwords are compared verbatim and no session or token is issued; the
dashboard keeps the returned account object client-side. Repeated failures
are not counted (settings.max_login_attempts is informational only).
"""

from fastapi import APIRouter, Depends, HTTPException
from piloo.schemas.user import LoginRequest, UserCreate
from piloo.storage import Storage, get_storage
from piloo.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/auth/login", summary="Log in with email + password")
def login(body: LoginRequest, storage: Storage = Depends(get_storage)):
    if not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = storage.get_user_by_email(body.email)
    if user is None or user.password != body.password:
        logger.warning(f"Failed login for {body.email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info(f"Login: {user.username} ({user.role})")
    return {"user": user.public()}


@router.post("/auth/signup", summary="Create an account")
def signup(body: UserCreate, storage: Storage = Depends(get_storage)):
    if storage.get_user_by_email(body.email) is not None:
        raise HTTPException(status_code=400, detail="User with this email already exists")
    user = storage.users.create(body)
    logger.info(f"New account: {user.username} ({user.role})")
    return {"user": user.public(), "message": "Account created successfully"}
