# piloo/routers/employees.py
"""Attendance records. GET ?date=YYYY-MM-DD returns that day's sheet."""

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool
from piloo.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate
from piloo.services.alert_service import employee_changed
from piloo.storage import Storage, get_storage

router = APIRouter()


@router.get("/employees", response_model=list[EmployeeOut])
def list_employees(date: str = None, storage: Storage = Depends(get_storage)):
    if date:
        return storage.employees_on(date)
    return storage.employees.list()


@router.get("/employees/{record_id}", response_model=EmployeeOut)
def get_employee(record_id: int, storage: Storage = Depends(get_storage)):
    employee = storage.employees.get(record_id)
    if employee is None:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


@router.post("/employees", response_model=EmployeeOut)
async def create_employee(body: EmployeeCreate, storage: Storage = Depends(get_storage)):
    employee = await run_in_threadpool(storage.employees.create, body)
    await employee_changed(employee)
    return employee


@router.put("/employees/{record_id}", response_model=EmployeeOut)
async def update_employee(record_id: int, body: EmployeeUpdate, storage: Storage = Depends(get_storage)):
    employee = await run_in_threadpool(storage.employees.update, record_id, body)
    if employee is None:
        raise HTTPException(status_code=404, detail="Employee not found")
    await employee_changed(employee)
    return employee


@router.delete("/employees/{record_id}")
def delete_employee(record_id: int, storage: Storage = Depends(get_storage)):
    if not storage.employees.delete(record_id):
        raise HTTPException(status_code=404, detail="Employee not found")
    return {"message": "Employee deleted"}
