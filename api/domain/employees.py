"""Domain helpers for employee payload validation."""
from __future__ import annotations

import math
import re
import uuid
from typing import Annotated, Any, Iterable, Mapping, Union
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, StrictFloat, StrictInt
from pydantic_core import PydanticCustomError

BIRTH_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
EMPLOYEE_FIELDS = ("id", "fullName", "avatar", "department", "birthDate", "salary")


def _min_length(length: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) < length:
            raise PydanticCustomError("too_short", message)
        return value

    return AfterValidator(check)


def _check_uuid(value: str) -> str:
    try:
        uuid.UUID(value)
    except ValueError:
        raise PydanticCustomError("uuid", "Invalid UUID") from None
    return value


def _check_url(value: str) -> str:
    parsed = urlparse(value)
    if not (parsed.scheme and parsed.netloc):
        raise PydanticCustomError("url", "Avatar must be a valid URL")
    return value


def _check_birth_date(value: str) -> str:
    if not BIRTH_DATE_PATTERN.fullmatch(value):
        raise PydanticCustomError("date_format", "Birth Date must be in YYYY-MM-DD format")
    return value


def _require_number(value: Any) -> Any:
    # bool is an int subclass; JSON true/false is not a salary
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("number_type", "Salary must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise PydanticCustomError("number_type", "Salary must be a number")
    return value


def _check_salary(value: int | float) -> int | float:
    if value < 0:
        raise PydanticCustomError("too_small", "Salary must be a positive number")
    return value


EmployeeId = Annotated[str, AfterValidator(_check_uuid)]
FullName = Annotated[str, _min_length(2, "Full Name is required")]
Avatar = Annotated[str, AfterValidator(_check_url)]
Department = Annotated[str, _min_length(2, "Department is required")]
BirthDate = Annotated[str, AfterValidator(_check_birth_date)]
Salary = Annotated[Union[StrictInt, StrictFloat], BeforeValidator(_require_number), AfterValidator(_check_salary)]


class EmployeeCreate(BaseModel):
    """Body accepted by POST /api/employees."""

    model_config = ConfigDict(extra="ignore")

    id: EmployeeId | None = None
    fullName: FullName
    avatar: Avatar
    department: Department
    birthDate: BirthDate
    salary: Salary

    def to_record(self) -> dict:
        """Plain dict for the store; an absent id stays absent."""
        return self.model_dump(exclude_none=True)


class EmployeePatch(BaseModel):
    """Body accepted by PATCH /api/employees/{id}.

    Every field is optional but an explicit null is rejected. ``id`` is not
    declared, so a caller-supplied id is dropped here.
    """

    model_config = ConfigDict(extra="ignore")

    fullName: FullName = None
    avatar: Avatar = None
    department: Department = None
    birthDate: BirthDate = None
    salary: Salary = None

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


def _issue_field(error: Mapping[str, Any]) -> str:
    loc = list(error.get("loc") or ())
    if loc and loc[0] == "body":
        loc = loc[1:]
    if error.get("type") == "json_invalid" or not loc:
        return "body"
    return str(loc[0])


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Join issues as ``<field>: <message>`` pairs separated by ``; ``."""
    return "; ".join(f"{_issue_field(err)}: {err.get('msg', 'Invalid value')}" for err in errors)
