# piloo/models/alert.py
"""
Alerts table: intrusion, motion, loitering and vehicle alerts raised by cameras.
camera_id is a plain column: deleting a camera leaves its alerts in place.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text
from piloo.database import Base


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=False)
    camera_id = Column(Integer)
    priority = Column(String(20), nullable=False)                      # critical | high | medium | low
    status = Column(String(20), nullable=False, default="pending")     # pending | resolved | dismissed
    timestamp = Column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<Alert {self.id} type={self.type} status={self.status}>"
