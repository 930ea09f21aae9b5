# piloo/services/stats_service.py
"""
Read-time aggregations for the dashboard, analytics and report pages.
Everything is recomputed from the store on each call; nothing is cached.
"""

import math
from collections import Counter, OrderedDict
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from piloo.config import settings
from piloo.schemas.employee import EmployeeOut
from piloo.storage import Storage

_TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M:%S %p", "%I:%M%p")

TIME_RANGES = {"7d": 7, "30d": 30, "90d": 90, "1y": 365}
ZONE_CAPACITY = 100


def parse_time_of_day(value: Optional[str]) -> Optional[time]:
    """'08:30', '17:05:12' or '9:15 AM' → time; anything else → None."""
    if not value:
        return None
    text = value.strip().upper()
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _range_days(time_range: str) -> int:
    return TIME_RANGES.get(time_range, 365)


def is_present(e: EmployeeOut) -> bool:
    return e.status == "active" and bool(e.check_in) and not e.check_out


def is_late(e: EmployeeOut, cutoff: time) -> bool:
    checked_in = parse_time_of_day(e.check_in)
    return checked_in is not None and checked_in > cutoff


def average_shift_hours(employees: List[EmployeeOut]) -> float:
    """Mean check-out minus check-in over completed days; 0.0 when there are none."""
    hours = []
    for e in employees:
        start, end = parse_time_of_day(e.check_in), parse_time_of_day(e.check_out)
        if start is None or end is None or end <= start:
            continue
        delta = datetime.combine(date.min, end) - datetime.combine(date.min, start)
        hours.append(delta.total_seconds() / 3600)
    return sum(hours) / len(hours) if hours else 0.0


def dashboard_stats(storage: Storage, now: datetime = None) -> dict:
    now = now or datetime.utcnow()
    cameras = storage.cameras.list()
    alerts = storage.alerts.list()
    employees = storage.employees.list()
    zones = storage.zones.list()

    cutoff = parse_time_of_day(settings.LATE_CHECK_IN) or time(9, 0)
    coverage = _round_half_up(len(cameras) / max(len(zones), 1) * 100)

    return {
        "activeCameras": sum(1 for c in cameras if c.status == "active"),
        "todayIncidents": sum(1 for a in alerts if a.timestamp and a.timestamp.date() == now.date()),
        "currentAlerts": sum(1 for a in alerts if a.status == "pending"),
        "zoneCoverage": f"{min(coverage, 100)}%",
        "employeeStats": {
            "present": sum(1 for e in employees if is_present(e)),
            "absent": sum(1 for e in employees if e.status == "inactive"),
            "late": sum(1 for e in employees if is_late(e, cutoff)),
            "avgDuration": f"{average_shift_hours(employees):.1f}h",
        },
    }


def analytics_summary(storage: Storage, time_range: str = "30d", now: datetime = None) -> dict:
    now = now or datetime.utcnow()
    since = now - timedelta(days=_range_days(time_range))
    alerts = storage.alerts.list()
    cameras = storage.cameras.list()
    employees = storage.employees.list()

    recent = [a for a in alerts if a.timestamp and a.timestamp > since]
    active = sum(1 for c in cameras if c.status == "active")

    return {
        "timeRange": time_range,
        "totalIncidents": len(recent),
        "todayIncidents": sum(1 for a in alerts if a.timestamp and a.timestamp.date() == now.date()),
        "activeCameras": active,
        "totalCameras": len(cameras),
        "presentEmployees": sum(1 for e in employees if is_present(e)),
        "totalEmployees": len(employees),
        "cameraUptime": round(active / max(len(cameras), 1) * 100, 1),
        "alertDistribution": dict(Counter(a.type for a in recent)),
        "resolvedIncidents": sum(1 for a in recent if a.status == "resolved"),
        "pendingIncidents": sum(1 for a in recent if a.status == "pending"),
        "criticalAlerts": sum(1 for a in recent if a.priority == "critical"),
    }


def incident_trends(storage: Storage, date_from: str = None, date_to: str = None) -> List[dict]:
    """Alerts per calendar day (YYYY-MM-DD), oldest first; bounds are inclusive."""
    daily = OrderedDict()
    for a in sorted(storage.alerts.list(), key=lambda a: a.timestamp or datetime.min):
        if not a.timestamp:
            continue
        day = a.timestamp.date().isoformat()
        if (date_from and day < date_from) or (date_to and day > date_to):
            continue
        bucket = daily.setdefault(day, {"date": day, "incidents": 0, "resolved": 0})
        bucket["incidents"] += 1
        if a.status == "resolved":
            bucket["resolved"] += 1
    return list(daily.values())


def alert_distribution(storage: Storage, time_range: str = "30d", now: datetime = None) -> List[dict]:
    now = now or datetime.utcnow()
    since = now - timedelta(days=_range_days(time_range))
    counts = Counter(a.type for a in storage.alerts.list() if a.timestamp and a.timestamp > since)
    total = sum(counts.values())
    return [
        {"type": t, "count": n, "percentage": round(n / total * 100, 1)}
        for t, n in counts.most_common()
    ]


def camera_performance(storage: Storage) -> List[dict]:
    alerts = storage.alerts.list()
    result = []
    for camera in storage.cameras.list():
        own = [a for a in alerts if a.camera_id == camera.id]
        stamps = [a.timestamp for a in own if a.timestamp]
        result.append({
            "id": camera.id,
            "name": camera.name,
            "location": camera.location,
            "status": camera.status,
            "alertCount": len(own),
            "pendingAlerts": sum(1 for a in own if a.status == "pending"),
            "lastAlert": max(stamps).isoformat() if stamps else None,
        })
    return result


def zone_occupancy(storage: Storage) -> List[dict]:
    """Present employees per zone, matched by the zone name appearing in their last-seen location."""
    present = [e for e in storage.employees.list() if is_present(e)]
    result = []
    for zone in storage.zones.list():
        name = zone.name.lower()
        count = sum(1 for e in present if e.last_seen and name in e.last_seen.lower())
        result.append({
            "zone": zone.name,
            "occupancy": count,
            "capacity": ZONE_CAPACITY,
            "utilizationPercent": _round_half_up(count / ZONE_CAPACITY * 100),
        })
    return result



def build_report(storage: Storage, report_type: str, date_from: str = None,
                 date_to: str = None, zone_filter: str = None) -> dict:
    alerts = storage.alerts.list()
    if date_from or date_to:
        alerts = [
            a for a in alerts if a.timestamp
            and not (date_from and a.timestamp.date().isoformat() < date_from)
            and not (date_to and a.timestamp.date().isoformat() > date_to)
        ]
    cameras = storage.cameras.list()
    if zone_filter and zone_filter != "all":
        camera_ids = {c.id for c in cameras if c.assigned_zone == zone_filter}
        cameras = [c for c in cameras if c.id in camera_ids]
        alerts = [a for a in alerts if a.camera_id in camera_ids]
    employees = storage.employees.list()

    return {
        "type": report_type,
        "dateRange": {"from": date_from, "to": date_to},
        "zoneFilter": zone_filter,
        "summary": {
            "totalAlerts": len(alerts),
            "resolvedAlerts": sum(1 for a in alerts if a.status == "resolved"),
            "alertsByPriority": dict(Counter(a.priority for a in alerts)),
            "totalEmployees": len(employees),
            "activeCameras": sum(1 for c in cameras if c.status == "active"),
        },
        "generatedAt": datetime.utcnow().isoformat() + "Z",
    }
