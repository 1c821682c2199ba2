from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from app.schemas.subject import SubjectOut


# record name / form name -> label shown to users
FIELD_LABELS = {
    "first_name": "first name",
    "firstName": "first name",
    "last_name": "last name",
    "lastName": "last name",
    "employee_number": "employee number",
    "employeeNum": "employee number",
    "hire_date": "hire date",
    "hireDate": "hire date",
    "salary": "salary",
}


class TeacherValidationError(ValueError):
    """Raised by validate_teacher; carries a user-facing message and per-field errors."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class TeacherIn(BaseModel):
    """Teacher fields as submitted by the HTML form or the JSON API."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    first_name: str = Field(min_length=1, validation_alias=AliasChoices("first_name", "firstName"))
    last_name: str = Field(min_length=1, validation_alias=AliasChoices("last_name", "lastName"))
    employee_number: str = Field(
        min_length=1, validation_alias=AliasChoices("employee_number", "employeeNum")
    )
    hire_date: date = Field(validation_alias=AliasChoices("hire_date", "hireDate"))
    salary: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

    @field_validator("hire_date")
    @classmethod
    def _hire_date_not_in_future(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("hire date cannot be in the future")
        return v


def validate_teacher(data: Any) -> TeacherIn:
    """
    The one place teacher input is checked, for both the web form and the API.

    Blank strings count as missing. Raises TeacherValidationError.
    """
    if isinstance(data, TeacherIn):
        return data
    if not isinstance(data, Mapping):
        raise TeacherValidationError("Teacher data must be an object.")

    cleaned = {k: (None if isinstance(v, str) and not v.strip() else v) for k, v in data.items()}
    try:
        return TeacherIn.model_validate(cleaned)
    except ValidationError as e:
        errors = []
        labels = []
        for err in e.errors(include_url=False):
            loc = str(err["loc"][0]) if err["loc"] else ""
            label = FIELD_LABELS.get(loc, loc)
            errors.append({"field": label, "msg": err["msg"]})
            if label not in labels:
                labels.append(label)
        message = "Missing or incorrect information: " + ", ".join(labels) + "."
        raise TeacherValidationError(message, errors) from e


class TeacherOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    teacher_id: int
    first_name: str
    last_name: str
    employee_number: str
    hire_date: date
    salary: Decimal


class TeacherDetailOut(TeacherOut):
    classes: list[SubjectOut] = []


class TeacherAddedOut(BaseModel):
    detail: str
    teacher_id: int
