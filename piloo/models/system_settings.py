# piloo/models/system_settings.py
"""
System settings: a single row holding alert toggles and retention.
max_login_attempts is stored for the admin page only; login does not enforce it.
"""

from sqlalchemy import Column, Integer, Boolean
from piloo.database import Base


class SystemSettings(Base):
    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    alerts_intrusion = Column(Boolean, default=True)
    alerts_motion = Column(Boolean, default=True)
    alerts_loitering = Column(Boolean, default=False)
    alerts_vehicle = Column(Boolean, default=True)
    global_sensitivity = Column(Integer, default=6)
    notifications_email = Column(Boolean, default=True)
    notifications_sms = Column(Boolean, default=False)
    notifications_push = Column(Boolean, default=True)
    data_retention = Column(Integer, default=90)        # days
    max_login_attempts = Column(Integer, default=5)

    def __repr__(self):
        return f"<SystemSettings retention={self.data_retention}d>"
