# piloo/services/search_service.py
"""
Footage search: matches the query text against alert descriptions and camera
names/locations, optionally narrowed by camera ids and a date window.
"""

from typing import List

from piloo.schemas.search_query import SearchFilters
from piloo.storage import Storage


def _terms(text: str) -> List[str]:
    return [t for t in text.lower().split() if len(t) > 2]


def search_events(storage: Storage, query: str, filters: SearchFilters = None) -> List[dict]:
    filters = filters or SearchFilters()
    camera_ids = set(filters.camera_ids)
    date_from, date_to = filters.date_from, filters.date_to
    terms = _terms(query)
    cameras = {c.id: c for c in storage.cameras.list()}

    results = []
    for alert in storage.alerts.list():
        if camera_ids and alert.camera_id not in camera_ids:
            continue
        day = alert.timestamp.date().isoformat() if alert.timestamp else None
        if date_from and (day is None or day < date_from):
            continue
        if date_to and (day is None or day > date_to):
            continue

        camera = cameras.get(alert.camera_id)
        haystack = " ".join(filter(None, [
            alert.type, alert.description,
            camera.name if camera else None, camera.location if camera else None,
        ])).lower()
        hits = sum(1 for t in terms if t in haystack)
        if terms and not hits:
            continue

        results.append({
            "id": str(alert.id),
            "timestamp": alert.timestamp.isoformat() if alert.timestamp else None,
            "cameraId": alert.camera_id,
            "cameraName": camera.name if camera else None,
            "location": camera.location if camera else None,
            "confidence": round(100 * hits / len(terms)) if terms else 100,
            "description": alert.description,
            "type": alert.type,
        })

    results.sort(key=lambda r: r["confidence"], reverse=True)
    return results
