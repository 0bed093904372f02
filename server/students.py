# School Fee Tracker - student endpoints
from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from auth import get_store, require_auth, require_staff
from database import RecordStore
from fees import IdentityScope, Student, StudentStatus
from server import data_access

router = APIRouter(prefix="/students", tags=["Students"])


class StudentCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1)
    class_label: str = Field(..., alias="class")
    guardian_name: str = ""
    guardian_phone: str = ""
    guardian_email: str | None = None
    balance: float = Field(default=0, ge=0)
    last_payment: date | None = None
    status: StudentStatus = StudentStatus.pending


class StudentUpdate(BaseModel):
    """Partial update; only fields present in the request body are merged."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str | None = Field(default=None, min_length=1)
    class_label: str | None = Field(default=None, alias="class")
    guardian_name: str | None = None
    guardian_phone: str | None = None
    guardian_email: str | None = None
    balance: float | None = Field(default=None, ge=0)
    last_payment: date | None = None
    status: StudentStatus | None = None

    # guardianEmail and lastPayment may be cleared; the rest may only be omitted
    @field_validator("name", "class_label", "guardian_name", "guardian_phone", "balance", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


@router.get("", response_model=list[Student])
async def list_students(
    identity: IdentityScope = Depends(require_auth),
    store: RecordStore = Depends(get_store),
):
    return await data_access.list_students_for(store, identity)


@router.post("", response_model=Student)
async def create_student(
    body: StudentCreate,
    identity: IdentityScope = Depends(require_staff),
    store: RecordStore = Depends(get_store),
):
    fields = body.model_dump(mode="json", by_alias=True)
    return await data_access.create_student(store, identity, fields)


@router.put("/{student_id}", response_model=Student)
async def update_student(
    student_id: str,
    body: StudentUpdate,
    identity: IdentityScope = Depends(require_staff),
    store: RecordStore = Depends(get_store),
):
    updates = body.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return await data_access.update_student(store, identity, student_id, updates)
