# piloo/services/subscription_service.py
"""
Account subscription state: plan changes by the account holder and plan
assignment by an admin. Billing is handled elsewhere; this only updates the
user record.
"""

from datetime import datetime, timedelta
from typing import Optional

from piloo.schemas.subscription import ClientCreate
from piloo.schemas.subscription_plan import SubscriptionPlanOut
from piloo.schemas.user import UserCreate, UserRecord, UserUpdate
from piloo.storage import Storage
from piloo.utils.logger import get_logger

logger = get_logger(__name__)

BILLING_PERIOD = timedelta(days=30)


def subscription_summary(user: UserRecord) -> dict:
    return {
        "currentPlan": user.subscription_plan or "Basic",
        "status": user.subscription_status or "active",
        "maxCameras": user.max_cameras or 5,
        "subscriptionEndsAt": user.subscription_ends_at,
    }


def change_plan(storage: Storage, user_id: int, plan: SubscriptionPlanOut,
                now: datetime = None) -> Optional[UserRecord]:
    """Move the account onto `plan` for one billing period. None if the user is unknown."""
    now = now or datetime.utcnow()
    user = storage.users.update(user_id, UserUpdate(
        subscription_plan=plan.name,
        subscription_status="active",
        max_cameras=plan.max_cameras,
        subscription_ends_at=now + BILLING_PERIOD,
    ))
    if user is not None:
        logger.info(f"💳 User #{user_id} moved to plan '{plan.name}' ({plan.max_cameras} cameras)")
    return user


def set_client_subscription(storage: Storage, client_id: int, plan_name: Optional[str],
                            now: datetime = None) -> Optional[UserRecord]:
    now = now or datetime.utcnow()
    user = storage.users.update(client_id, UserUpdate(
        subscription_plan=plan_name,
        subscription_status="active" if plan_name else None,
        subscription_ends_at=now + BILLING_PERIOD if plan_name else None,
    ))
    if user is not None:
        logger.info(f"💳 Client #{client_id} subscription set to {plan_name or 'none'}")
    return user


def create_client(storage: Storage, data: ClientCreate) -> UserRecord:
    user = storage.users.create(UserCreate(
        username=data.username,
        email=data.email,
        password=data.password,
        role="security",
        max_cameras=data.max_cameras,
        subscription_plan=data.subscription_plan,
        subscription_status=None,
    ))
    logger.info(f"👤 Client account created: {user.username}")
    return user
