# piloo/models/search_query.py
"""Search log: every query typed into the footage search page."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from piloo.database import Base


class SearchQuery(Base):
    __tablename__ = "search_queries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer)                          # soft ref to users.id
    query = Column(Text, nullable=False)
    query_type = Column(String(20), nullable=False)    # text | image | video | audio
    filters = Column(JSON)
    results = Column(JSON)
    execution_time = Column(Integer)                   # milliseconds
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<SearchQuery {self.id} type={self.query_type}>"
