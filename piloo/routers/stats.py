# piloo/routers/stats.py
"""
Dashboard stats, analytics and report endpoints.
All figures are computed from the store at request time.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from piloo.schemas.report import ReportRequest
from piloo.services import stats_service
from piloo.storage import Storage, get_storage
from piloo.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/stats", summary="Dashboard header figures")
def get_stats(storage: Storage = Depends(get_storage)):
    return stats_service.dashboard_stats(storage)


@router.get("/analytics", summary="Analytics summary for a time range")
def get_analytics(
    time_range: str = Query("30d", alias="timeRange", pattern="^(7d|30d|90d|1y)$"),
    storage: Storage = Depends(get_storage),
):
    return stats_service.analytics_summary(storage, time_range)


@router.get("/analytics/incident-trends", summary="Alerts per day")
def get_incident_trends(
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    storage: Storage = Depends(get_storage),
):
    return stats_service.incident_trends(storage, date_from, date_to)


@router.get("/analytics/alert-distribution", summary="Alert counts by type")
def get_alert_distribution(
    time_range: str = Query("30d", alias="timeRange", pattern="^(7d|30d|90d|1y)$"),
    storage: Storage = Depends(get_storage),
):
    return stats_service.alert_distribution(storage, time_range)


@router.get("/analytics/camera-performance", summary="Alert load per camera")
def get_camera_performance(storage: Storage = Depends(get_storage)):
    return stats_service.camera_performance(storage)


@router.get("/analytics/occupancy", summary="Present employees per zone")
def get_occupancy(storage: Storage = Depends(get_storage)):
    return stats_service.zone_occupancy(storage)


@router.post("/reports/generate", summary="Generate a summary report")
def generate_report(body: ReportRequest, storage: Storage = Depends(get_storage)):
    report = stats_service.build_report(storage, body.type, body.date_from, body.date_to, body.zone_filter)
    logger.info(f"📊 {body.type} report generated ({body.date_from or '…'} → {body.date_to or '…'})")
    return {"report": report, "format": body.format}
