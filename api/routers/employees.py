from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Request

from api.domain.employees import EmployeeCreate, EmployeePatch
from api.services.employee_service import EmployeeService

router = APIRouter(prefix="/api/employees", tags=["employees"])


def _get_employee_service(request: Request) -> EmployeeService:
    svc = getattr(getattr(request.app, "state", None), "employee_service", None)
    if svc is None:
        raise RuntimeError("EmployeeService not configured")
    return svc


@router.get("")
def list_employees(request: Request, department: Optional[str] = None):
    svc = _get_employee_service(request)
    return svc.list_employees(department)


@router.post("", status_code=201)
def create_employee(request: Request, payload: dict[str, Any] = Body(...)):
    employee = EmployeeCreate.model_validate(payload)
    svc = _get_employee_service(request)
    return svc.add_employee(employee.to_record())


@router.patch("/{employee_id}")
def update_employee(employee_id: str, request: Request, payload: dict[str, Any] = Body(...)):
    # id in the body is dropped by EmployeePatch; the path id is authoritative
    fields = EmployeePatch.model_validate(payload)
    svc = _get_employee_service(request)
    return svc.update_employee(employee_id, fields.to_fields())


@router.delete("/{employee_id}")
def delete_employee(employee_id: str, request: Request):
    svc = _get_employee_service(request)
    return svc.delete_employee(employee_id)
