# piloo/schemas/employee.py
from pydantic import Field
from typing import Literal, Optional
from piloo.schemas.base import ApiModel, PatchModel

EmployeeStatus = Literal["active", "inactive"]


class EmployeeCreate(ApiModel):
    name: str = Field(min_length=1)
    employee_id: str = Field(min_length=1)
    department: str = Field(min_length=1)
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    last_seen: Optional[str] = None
    status: EmployeeStatus = "active"
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")


class EmployeeUpdate(PatchModel):
    required_fields = ("name", "employee_id", "department", "status", "date")

    name: Optional[str] = None
    employee_id: Optional[str] = None
    department: Optional[str] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    last_seen: Optional[str] = None
    status: Optional[EmployeeStatus] = None
    date: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")


class EmployeeOut(ApiModel):
    id: int
    name: str
    employee_id: str
    department: str
    check_in: Optional[str]
    check_out: Optional[str]
    last_seen: Optional[str]
    status: str
    date: str
