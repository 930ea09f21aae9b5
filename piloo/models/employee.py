# piloo/models/employee.py
"""
Attendance table: one row per employee per day.
check_in / check_out / last_seen are free text as entered by the HR page.
"""

from sqlalchemy import Column, Integer, String
from piloo.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    employee_id = Column(String(50), unique=True, nullable=False, index=True)
    department = Column(String(100), nullable=False)
    check_in = Column(String(20))
    check_out = Column(String(20))
    last_seen = Column(String(100))
    status = Column(String(20), nullable=False, default="active")   # active | inactive
    date = Column(String(10), nullable=False, index=True)            # YYYY-MM-DD

    def __repr__(self):
        return f"<Employee {self.employee_id} {self.name} date={self.date}>"
