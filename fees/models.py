# School Fee Tracker - domain records (stored as camelCase JSON documents)
from datetime import date, datetime
from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    admin = "admin"
    staff = "staff"
    parent = "parent"


class StudentStatus(str, Enum):
    paid = "paid"
    pending = "pending"
    overdue = "overdue"


class PaymentMethod(str, Enum):
    cash = "cash"
    ecocash = "ecocash"
    bank_transfer = "bank_transfer"
    card = "card"


class PaymentStatus(str, Enum):
    completed = "completed"
    pending = "pending"
    failed = "failed"


class Record(BaseModel):
    """Base for stored documents: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Identity (mirrors the identity provider's user) ---
class UserProfile(Record):
    id: str
    email: str
    name: str
    role: Role
    created_at: datetime | None = None


# --- Student ---
class Student(Record):
    """A fee-paying student. ``status`` is paid iff balance is 0 by intent, not by enforcement."""
    id: str
    name: str
    class_label: str = Field(default="", alias="class")
    guardian_name: str = ""
    guardian_phone: str = ""
    guardian_email: str | None = None
    balance: float = 0
    last_payment: date | None = None
    status: StudentStatus = StudentStatus.pending
    created_at: datetime | None = None
    created_by: str | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None


# --- Payment (immutable once written) ---
class Payment(Record):
    id: str
    student_id: str
    student_name: str = Field(..., description="Snapshot of the student's name at payment time")
    amount: float = Field(..., gt=0)
    payment_method: PaymentMethod
    reference: str | None = None
    description: str = ""
    paid_on: date = Field(..., alias="date")
    recorded_by: str
    receipt_number: str
    status: PaymentStatus = PaymentStatus.completed
    created_at: datetime | None = None
    created_by: str | None = None


# --- Receipt (projection of a payment) ---
class Receipt(Record):
    id: str
    payment_id: str
    receipt_number: str
    student_name: str
    amount: float
    paid_on: date = Field(..., alias="date")
    description: str = ""
    payment_method: str
    issued_by: str
    parent_email: str | None = None
    created_at: datetime | None = None
    created_by: str | None = None


class Reminder(Record):
    id: str
    student_id: str
    student_name: str
    guardian_email: str | None = None
    guardian_phone: str | None = None
    balance: float
    message: str
    sent_by: str
    sent_at: datetime


# --- Bucketed statistics ---
class StatsBucket(Record):
    amount: float = 0
    count: int = 0


class PaymentStats(Record):
    today: StatsBucket = Field(default_factory=StatsBucket)
    this_week: StatsBucket = Field(default_factory=StatsBucket)
    this_month: StatsBucket = Field(default_factory=StatsBucket)
