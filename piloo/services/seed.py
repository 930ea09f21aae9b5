# piloo/services/seed.py
"""
Demo data for a fresh install: three accounts, four zones, four cameras,
sample alerts and today's attendance, default settings and the plan catalogue.
Works against either storage backend; does nothing if accounts already exist.
"""

from datetime import datetime
from decimal import Decimal

from piloo.schemas.alert import AlertCreate
from piloo.schemas.camera import CameraCreate
from piloo.schemas.employee import EmployeeCreate
from piloo.schemas.subscription_plan import SubscriptionPlanCreate
from piloo.schemas.system_settings import SystemSettingsUpdate
from piloo.schemas.user import UserCreate
from piloo.schemas.zone import ZoneCreate
from piloo.storage import Storage
from piloo.utils.logger import get_logger

logger = get_logger(__name__)

USERS = [
    UserCreate(username="admin", email="admin@company.com", password="admin123", role="admin"),
    UserCreate(username="security_manager", email="security@company.com", password="security123", role="security"),
    UserCreate(username="hr_manager", email="hr@company.com", password="hr123", role="hr"),
]

ZONES = [
    ZoneCreate(name="Entrance A", type="entrance", description="Main building entrance"),
    ZoneCreate(name="Hallway 1", type="common", description="First floor hallway"),
    ZoneCreate(name="Parking", type="restricted", description="Underground parking garage"),
    ZoneCreate(name="Break Room", type="common", description="Employee break room"),
]

CAMERAS = [
    CameraCreate(name="Camera 01 - Main Entrance", location="Building A, Floor 1", ip="192.168.1.101",
                 status="active", assigned_zone="entrance-a", sensitivity=7),
    CameraCreate(name="Camera 02 - Hallway", location="Building A, Floor 1", ip="192.168.1.102",
                 status="active", assigned_zone="hallway-1", sensitivity=5),
    CameraCreate(name="Camera 03 - Parking", location="Building A, Basement", ip="192.168.1.103",
                 status="maintenance", assigned_zone="parking", sensitivity=8),
    CameraCreate(name="Camera 04 - Break Room", location="Building A, Floor 2", ip="192.168.1.104",
                 status="active", assigned_zone="break-room", sensitivity=6),
]

# (type, description, camera index, priority, status)
ALERTS = [
    ("intrusion", "Unauthorized person detected in restricted area", 0, "high", "pending"),
    ("motion", "Motion detected in parking area after hours", 2, "medium", "resolved"),
    ("loitering", "Person loitering near entrance for extended period", 0, "low", "pending"),
    ("vehicle", "Unauthorized vehicle in restricted zone", 2, "high", "resolved"),
]

# (name, employee id, department, check in, check out, last seen, status)
EMPLOYEES = [
    ("John Doe", "EMP001", "Security", "08:30", None, "Zone A - 5m ago", "active"),
    ("Jane Smith", "EMP002", "HR", "09:15", "17:30", "Zone D - 2m ago", "active"),
    ("Mike Brown", "EMP003", "IT", "08:45", None, "Zone B - 15m ago", "active"),
    ("Sarah Wilson", "EMP004", "Admin", "09:00", "17:00", "Zone C - 1h ago", "inactive"),
    ("David Lee", "EMP005", "Security", "10:30", None, "Zone A - 10m ago", "active"),
]

PLANS = [
    SubscriptionPlanCreate(name="Starter", description="For a single site", max_cameras=5,
                           monthly_price=Decimal("29.00"), yearly_price=Decimal("290.00"),
                           features=["Live monitoring", "Motion alerts", "7-day retention"]),
    SubscriptionPlanCreate(name="Professional", description="For growing teams", max_cameras=25,
                           monthly_price=Decimal("99.00"), yearly_price=Decimal("990.00"),
                           features=["Everything in Starter", "AI search", "Attendance tracking",
                                     "30-day retention"],
                           is_popular=True),
    SubscriptionPlanCreate(name="Enterprise", description="Multi-site deployments", max_cameras=200,
                           monthly_price=Decimal("499.00"), yearly_price=Decimal("4990.00"),
                           features=["Everything in Professional", "AI chat assistant",
                                     "90-day retention", "Priority support"]),
]


def seed_demo_data(storage: Storage) -> bool:
    """Returns True when data was loaded, False when the store was already populated."""
    if storage.users.count():
        logger.info("Store already has accounts — skipping demo data")
        return False

    for user in USERS:
        storage.users.create(user)
    for zone in ZONES:
        storage.zones.create(zone)
    cameras = [storage.cameras.create(c) for c in CAMERAS]

    for alert_type, description, cam, priority, status in ALERTS:
        storage.alerts.create(AlertCreate(type=alert_type, description=description,
                                          camera_id=cameras[cam].id, priority=priority, status=status))

    today = datetime.utcnow().date().isoformat()
    for name, emp_id, dept, check_in, check_out, last_seen, status in EMPLOYEES:
        storage.employees.create(EmployeeCreate(name=name, employee_id=emp_id, department=dept,
                                                check_in=check_in, check_out=check_out,
                                                last_seen=last_seen, status=status, date=today))

    if storage.get_settings() is None:
        storage.update_settings(SystemSettingsUpdate())
    for plan in PLANS:
        storage.subscription_plans.create(plan)

    logger.info(f"✅ Demo data loaded into {storage.backend} store")
    return True
