# piloo/models/user.py
"""
Accounts table: dashboard users (admin, security, hr).
Passwords are stored as given; login compares them verbatim.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from piloo.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="security")   # admin | security | hr
    subscription_plan = Column(String(50), default="trial")
    subscription_status = Column(String(50), default="active")
    max_cameras = Column(Integer, default=5)
    stripe_customer_id = Column(String(100))
    stripe_subscription_id = Column(String(100))
    subscription_ends_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.id} {self.username} role={self.role}>"
