# School Fee Tracker - payment and statistics endpoints
from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from auth import get_store, require_auth, require_staff
from database import RecordStore
from fees import IdentityScope, Payment, PaymentMethod, PaymentStats, PaymentStatus
from server import data_access

router = APIRouter(tags=["Payments"])


class PaymentCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    student_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    payment_method: PaymentMethod
    description: str = ""
    reference: str | None = None
    paid_on: date | None = Field(default=None, alias="date")
    status: PaymentStatus = PaymentStatus.completed


@router.get("/payments", response_model=list[Payment])
async def list_payments(
    student_id: str | None = Query(default=None, alias="studentId"),
    identity: IdentityScope = Depends(require_auth),
    store: RecordStore = Depends(get_store),
):
    return await data_access.list_payments_for(store, identity, student_id)


@router.post("/payments", response_model=Payment)
async def create_payment(
    body: PaymentCreate,
    identity: IdentityScope = Depends(require_auth),
    store: RecordStore = Depends(get_store),
):
    return await data_access.record_payment(
        store,
        identity,
        student_id=body.student_id,
        amount=body.amount,
        payment_method=body.payment_method.value,
        description=body.description,
        reference=body.reference,
        paid_on=body.paid_on,
        status=body.status.value,
    )


@router.get("/stats/payments", response_model=PaymentStats)
async def stats(
    identity: IdentityScope = Depends(require_staff),
    store: RecordStore = Depends(get_store),
):
    """Today / this week (from Sunday) / this month totals of completed payments."""
    return await data_access.payment_stats(store)
