# piloo/models/zone.py
from sqlalchemy import Column, Integer, String, Text
from piloo.database import Base


class Zone(Base):
    __tablename__ = "zones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    type = Column(String(20), nullable=False)    # entrance | office | restricted | common
    description = Column(Text)

    def __repr__(self):
        return f"<Zone {self.id} {self.name} type={self.type}>"
