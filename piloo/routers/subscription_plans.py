# piloo/routers/subscription_plans.py
from fastapi import APIRouter, Depends, HTTPException
from piloo.schemas.subscription_plan import SubscriptionPlanCreate, SubscriptionPlanOut, SubscriptionPlanUpdate
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.get("/subscription-plans", response_model=list[SubscriptionPlanOut])
def list_plans(active_only: bool = False, storage: Storage = Depends(get_storage)):
    plans = storage.subscription_plans.list()
    if active_only:
        plans = [p for p in plans if p.is_active]
    return plans


@router.get("/subscription-plans/{plan_id}", response_model=SubscriptionPlanOut)
def get_plan(plan_id: int, storage: Storage = Depends(get_storage)):
    plan = storage.subscription_plans.get(plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Subscription plan not found")
    return plan


@router.post("/subscription-plans", response_model=SubscriptionPlanOut)
def create_plan(body: SubscriptionPlanCreate, storage: Storage = Depends(get_storage)):
    return storage.subscription_plans.create(body)


@router.put("/subscription-plans/{plan_id}", response_model=SubscriptionPlanOut)
def update_plan(plan_id: int, body: SubscriptionPlanUpdate, storage: Storage = Depends(get_storage)):
    plan = storage.subscription_plans.update(plan_id, body)
    if plan is None:
        raise HTTPException(status_code=404, detail="Subscription plan not found")
    return plan


@router.delete("/subscription-plans/{plan_id}")
def delete_plan(plan_id: int, storage: Storage = Depends(get_storage)):
    if not storage.subscription_plans.delete(plan_id):
        raise HTTPException(status_code=404, detail="Subscription plan not found")
    return {"message": "Subscription plan deleted"}
