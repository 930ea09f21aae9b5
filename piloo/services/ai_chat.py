# piloo/services/ai_chat.py
"""
Keyword-intent chat assistant for the AI chat page.
Answers are built from the current store contents; there is no language model behind it.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from piloo.schemas.camera import CameraOut
from piloo.schemas.recording import RecordingFilter
from piloo.storage import Storage

_TIME_PHRASES = (
    ("last 24 hours", "last 24 hours"),
    ("last hour", "last hour"),
    ("past hour", "last hour"),
    ("this morning", "this morning"),
    ("this afternoon", "this afternoon"),
    ("this evening", "this evening"),
    ("yesterday", "yesterday"),
    ("today", "today"),
)

HELP_TEXT = (
    "I'm your AI surveillance assistant! I can help you with:\n\n"
    "• Camera Status - \"Show me camera status\" or \"Which cameras are active?\"\n"
    "• Security Alerts - \"Any alerts today?\" or \"Show recent incidents\"\n"
    "• Footage Access - \"Show footage from Camera 01\" or \"Video from last hour\"\n"
    "• Motion Detection - \"Any movement detected?\"\n"
    "• Analytics - \"Today's summary\"\n\n"
    "Try asking something like: \"Show me footage from the main entrance in the last hour\"."
)


def extract_time_range(query: str) -> Optional[str]:
    for phrase, label in _TIME_PHRASES:
        if phrase in query:
            return label
    return None


def extract_camera(query: str, cameras: List[CameraOut]) -> Optional[CameraOut]:
    for camera in cameras:
        if camera.name.lower() in query or camera.location.lower() in query:
            return camera
    # "main entrance", "parking" etc. match on the descriptive half of "Camera 01 - Main Entrance"
    for camera in cameras:
        _, _, label = camera.name.partition(" - ")
        if label and label.lower() in query:
            return camera
    return None


def answer(storage: Storage, query: str, now: datetime = None) -> dict:
    now = now or datetime.utcnow()
    q = query.lower()
    cameras = storage.cameras.list()
    alerts = storage.alerts.list()
    zones = storage.zones.list()
    since = now - timedelta(hours=24)
    recent = [a for a in alerts if a.timestamp and a.timestamp >= since]
    names = {c.id: c.name for c in cameras}
    metadata = {}

    if "camera" in q and ("status" in q or "active" in q or "online" in q):
        active = [c for c in cameras if c.status == "active"]
        lines = [f"• {c.name} ({c.location}): {c.status}" for c in cameras]
        response = (f"Currently, you have {len(active)} out of {len(cameras)} cameras active "
                    f"and monitoring. Here's the breakdown:\n\n" + "\n".join(lines))
        metadata["cameras"] = [c.name for c in cameras]

    elif "alert" in q or "incident" in q:
        if not recent:
            response = ("Great news! No alerts have been triggered in the past 24 hours. "
                        "Your surveillance system is running smoothly.")
        else:
            lines = [
                f"{i}. [{a.priority}] {a.type} - {a.description}\n"
                f"   Time: {a.timestamp:%H:%M:%S} | Camera: {names.get(a.camera_id, 'Unknown')}"
                for i, a in enumerate(recent, 1)
            ]
            response = f"I found {len(recent)} alert(s) in the past 24 hours:\n\n" + "\n\n".join(lines)
            metadata["alerts"] = [
                {"id": str(a.id), "type": a.type, "camera": names.get(a.camera_id, "Unknown")}
                for a in recent
            ]

    elif "footage" in q or "recording" in q or "video" in q:
        time_range = extract_time_range(q)
        camera = extract_camera(q, cameras)
        response = "I can help you access footage from your surveillance system. "
        if camera:
            response += f"For {camera.name}, "
        response += (f"I'll search for recordings from {time_range}.\n\n" if time_range
                     else "I'll show you the most recent recordings.\n\n")
        criteria = RecordingFilter(camera_id=camera.id if camera else None)
        clips = storage.search_recordings(criteria)[-5:]
        if clips:
            response += "Here are the available video segments:"
            metadata["videoClips"] = [
                {"id": r.id, "camera": names.get(r.camera_id, "Unknown"),
                 "timestamp": r.start_time.isoformat(), "duration": r.duration}
                for r in reversed(clips)
            ]
        else:
            response += "No stored recordings match that request yet."

    elif "motion" in q or "movement" in q:
        motion = [a for a in recent if a.type == "motion"]
        lines = [f"• {c.name}: {sum(1 for a in motion if a.camera_id == c.id)} motion events"
                 for c in cameras]
        response = "Motion activity over the past 24 hours:\n\n" + "\n".join(lines)
        if motion:
            latest = max(a.timestamp for a in motion)
            minutes = int((now - latest).total_seconds() // 60)
            response += f"\n\nMost recent motion was detected {minutes} minutes ago."

    elif "zone" in q or any(z.name.lower() in q for z in zones):
        lines = []
        for zone in zones:
            slug = zone.name.lower().replace(" ", "-")
            covering = [c for c in cameras if c.assigned_zone == slug]
            lines.append(f"• {zone.name}: {zone.description or 'Active monitoring'} "
                         f"({len(covering)} camera(s))")
        response = f"Your surveillance system covers {len(zones)} monitored zones:\n\n" + "\n".join(lines)

    elif "yesterday" in q or "today" in q or "last" in q or "summary" in q:
        active = sum(1 for c in cameras if c.status == "active")
        pending = sum(1 for a in recent if a.status == "pending")
        response = (
            "Looking at recent activity patterns:\n\n"
            "Today's Summary:\n"
            f"• Total alerts: {len(recent)}\n"
            f"• Pending alerts: {pending}\n"
            f"• Active cameras: {active} of {len(cameras)}\n"
            f"• Motion events: {sum(1 for a in recent if a.type == 'motion')}"
        )

    else:
        response = HELP_TEXT

    return {"response": response, "metadata": metadata or None}
