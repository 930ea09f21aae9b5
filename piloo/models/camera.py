# piloo/models/camera.py
"""
Cameras table.
assigned_zone holds a zone slug (e.g. "entrance-a"), not a foreign key.
"""

from sqlalchemy import Column, Integer, String, Boolean
from piloo.database import Base


class Camera(Base):
    __tablename__ = "cameras"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=False)
    ip = Column(String(100), nullable=False)
    rtsp_url = Column(String(500))
    status = Column(String(20), nullable=False, default="active")   # active | maintenance | offline
    assigned_zone = Column(String(100))
    sensitivity = Column(Integer, nullable=False, default=7)
    recording_enabled = Column(Boolean, nullable=False, default=True)
    retention_days = Column(Integer, nullable=False, default=15)

    def __repr__(self):
        return f"<Camera {self.id} {self.name} status={self.status}>"
