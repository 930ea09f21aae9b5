# piloo/routers/account.py
"""
Per-account subscription endpoints and the admin client panel.
There are no sessions, so the account is named by id in the path or body.
"""

from fastapi import APIRouter, Depends, HTTPException
from piloo.schemas.subscription import ChangePlanRequest, ClientCreate, ClientSubscriptionUpdate
from piloo.schemas.user import UserOut
from piloo.services import subscription_service
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.get("/user/{user_id}/subscription", summary="Current plan of an account")
def get_subscription(user_id: int, storage: Storage = Depends(get_storage)):
    user = storage.users.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return subscription_service.subscription_summary(user)


@router.post("/user/change-plan", summary="Switch an account to another plan for 30 days")
def change_plan(body: ChangePlanRequest, storage: Storage = Depends(get_storage)):
    plan = storage.subscription_plans.get(body.plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Subscription plan not found")
    user = subscription_service.change_plan(storage, body.user_id, plan)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {
        "message": "Subscription plan updated successfully",
        "plan": plan.name,
        "user": user.public(),
    }


@router.get("/admin/clients", response_model=list[UserOut])
def list_clients(storage: Storage = Depends(get_storage)):
    return [u.public() for u in storage.users.list()]


@router.post("/admin/clients", response_model=UserOut)
def create_client(body: ClientCreate, storage: Storage = Depends(get_storage)):
    return subscription_service.create_client(storage, body).public()


@router.put("/admin/clients/{client_id}/subscription", response_model=UserOut)
def update_client_subscription(client_id: int, body: ClientSubscriptionUpdate,
                               storage: Storage = Depends(get_storage)):
    user = subscription_service.set_client_subscription(storage, client_id, body.plan_name)
    if user is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return user.public()
