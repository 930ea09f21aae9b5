# piloo/models/recording.py
"""
Recordings table: one row per stored footage segment.
Files live on disk at file_path; this table only indexes them.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from piloo.database import Base


class Recording(Base):
    __tablename__ = "recordings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    camera_id = Column(Integer, nullable=False, index=True)   # soft ref to cameras.id
    filename = Column(String(255), nullable=False)
    file_path = Column(String(500), nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    duration = Column(Integer, nullable=False)                 # seconds
    file_size = Column(Integer, nullable=False)                # bytes
    quality = Column(String(10), nullable=False, default="720p")
    has_motion = Column(Boolean, default=False)
    has_audio = Column(Boolean, default=True)
    thumbnail_path = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Recording {self.id} cam={self.camera_id} {self.filename}>"
