# School Fee Tracker - client-side application state and call results
from dataclasses import dataclass
from datetime import date
from typing import Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fees import Payment, PaymentMethod, PaymentStatus, Receipt, Student

T = TypeVar("T")


class AppState(BaseModel):
    """Everything the UI renders from. Replaced on every change, never mutated in place."""
    model_config = ConfigDict(frozen=True)

    students: tuple[Student, ...] = ()
    payments: tuple[Payment, ...] = ()
    receipts: tuple[Receipt, ...] = ()
    loading: bool = False
    error: str | None = None


class PaymentDraft(BaseModel):
    """A payment as entered in the form, before it has an id or receipt number."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    student_id: str
    student_name: str = ""
    amount: float = Field(..., gt=0)
    payment_method: PaymentMethod
    reference: str | None = None
    description: str = ""
    paid_on: date | None = Field(default=None, alias="date")
    recorded_by: str = ""
    status: PaymentStatus = PaymentStatus.completed

    def request_body(self) -> dict:
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            include={"student_id", "amount", "payment_method", "reference", "description", "paid_on", "status"},
        )


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Degraded(Generic[T]):
    """The server call failed; ``value`` was built locally and ``error`` says why."""
    value: T
    error: str
