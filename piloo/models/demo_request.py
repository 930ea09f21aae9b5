# piloo/models/demo_request.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text
from piloo.database import Base


class DemoRequest(Base):
    __tablename__ = "demo_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    company = Column(String(200))
    phone = Column(String(50))
    message = Column(Text)
    status = Column(String(20), default="pending")
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<DemoRequest {self.id} {self.email}>"
