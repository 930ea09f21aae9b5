# piloo/models/subscription_plan.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, Text, JSON
from piloo.database import Base


class SubscriptionPlan(Base):
    __tablename__ = "subscription_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    max_cameras = Column(Integer, nullable=False)
    monthly_price = Column(Numeric(10, 2), nullable=False)
    yearly_price = Column(Numeric(10, 2), nullable=False)
    features = Column(JSON, default=list)        # ordered list of strings
    is_popular = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<SubscriptionPlan {self.name} cameras={self.max_cameras}>"
