"""In-memory employee store: the source of truth while the process runs."""

from __future__ import annotations

import enum
import logging
import threading
import uuid
from typing import Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


class EmployeeErrorKind(enum.Enum):
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"


class EmployeeError(Exception):
    """Raised by the store; ``kind`` tells the HTTP layer which response to build."""

    def __init__(self, kind: EmployeeErrorKind, employee_id: str) -> None:
        self.kind = kind
        self.employee_id = employee_id
        if kind is EmployeeErrorKind.ALREADY_EXISTS:
            message = f"Employee with id {employee_id} already exists"
        else:
            message = f"Employee with id {employee_id} not found"
        super().__init__(message)
        self.message = message


def _seed_record(record: Mapping) -> Optional[dict]:
    """Normalize a persisted record's id to a string key; None when it cannot be used."""
    employee_id = record.get("id")
    if employee_id is None or isinstance(employee_id, str):
        return dict(record)
    # store keys are always strings
    if isinstance(employee_id, int) and not isinstance(employee_id, bool):
        return {**record, "id": str(employee_id)}
    return None


class EmployeeService:
    """Identity-keyed store of employee records (plain dicts keyed by id)."""

    def __init__(self, initial: Iterable[Mapping] = ()) -> None:
        self._employees: dict[str, dict] = {}
        self._lock = threading.RLock()
        for record in initial:
            seed = _seed_record(record)
            if seed is None:
                logger.warning("[EmployeesService] Skipping record with invalid id: %r", record.get("id"))
                continue
            try:
                self.add_employee(seed)
            except EmployeeError as exc:
                logger.warning("[EmployeesService] Skipping duplicate record: %s", exc.message)
        logger.info("[EmployeesService] Loaded %d employees from file", len(self._employees))

    def __len__(self) -> int:
        return len(self._employees)

    def list_employees(self, department: Optional[str] = None) -> list[dict]:
        with self._lock:
            employees = self._employees.values()
            if department:
                employees = [empl for empl in employees if empl.get("department") == department]
            return [dict(empl) for empl in employees]

    def add_employee(self, record: Mapping) -> dict:
        with self._lock:
            employee_id = record.get("id") or str(uuid.uuid4())
            if employee_id in self._employees:
                raise EmployeeError(EmployeeErrorKind.ALREADY_EXISTS, employee_id)
            stored = {"id": employee_id}
            stored.update((key, value) for key, value in record.items() if key != "id")
            self._employees[employee_id] = stored
            return dict(stored)

    def update_employee(self, employee_id: str, fields: Mapping) -> dict:
        with self._lock:
            existing = self._get_by_id(employee_id)
            existing.update((key, value) for key, value in fields.items() if key != "id")
            return dict(existing)

    def delete_employee(self, employee_id: str) -> dict:
        with self._lock:
            existing = self._get_by_id(employee_id)
            del self._employees[employee_id]
            return existing

    def snapshot(self) -> list[dict]:
        """Copies of every record, in insertion order, for the persistence adapter."""
        with self._lock:
            return [dict(empl) for empl in self._employees.values()]

    def _get_by_id(self, employee_id: str) -> dict:
        existing = self._employees.get(employee_id)
        if existing is None:
            raise EmployeeError(EmployeeErrorKind.NOT_FOUND, employee_id)
        return existing
