# School Fee Tracker - payment / balance reconciliation
import random
import string
import time
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, NamedTuple

from .models import (
    Payment,
    PaymentStats,
    PaymentStatus,
    Receipt,
    StatsBucket,
    Student,
    StudentStatus,
)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def _millis() -> int:
    return int(time.time() * 1000)


def new_id() -> str:
    """Millisecond timestamp plus a 5-character base36 suffix."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=5))
    return f"{_millis()}{suffix}"


def new_receipt_number() -> str:
    return f"REC{str(_millis())[-6:]}"


def now() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    return now().date()


class BalanceUpdate(NamedTuple):
    new_balance: float
    new_status: StudentStatus
    new_last_payment: date


def apply_payment(student: Student, amount: float, on: date) -> BalanceUpdate:
    """Balance, status and last-payment date for ``student`` after paying ``amount`` on ``on``.

    The balance is clipped at zero; any excess is dropped, not carried as credit.
    Only ``paid`` or ``pending`` come out of here, never ``overdue``.
    """
    new_balance = max(0, student.balance - amount)
    new_status = StudentStatus.paid if new_balance == 0 else StudentStatus.pending
    return BalanceUpdate(new_balance, new_status, on)


def week_start(as_of: date) -> date:
    """Most recent Sunday on or before ``as_of``."""
    return as_of - timedelta(days=(as_of.weekday() + 1) % 7)


def _bucket(payments: list[Payment]) -> StatsBucket:
    return StatsBucket(amount=sum(p.amount for p in payments), count=len(payments))


def compute_stats(payments: Iterable[Payment], as_of: date | datetime) -> PaymentStats:
    """Rolling today / this-week / this-month totals of completed payments.

    The buckets overlap: a payment made today is counted in all three.
    """
    if isinstance(as_of, datetime):
        as_of = as_of.date()
    completed = [p for p in payments if p.status == PaymentStatus.completed]
    sunday = week_start(as_of)
    month_start = as_of.replace(day=1)
    return PaymentStats(
        today=_bucket([p for p in completed if p.paid_on == as_of]),
        this_week=_bucket([p for p in completed if sunday <= p.paid_on <= as_of]),
        this_month=_bucket([p for p in completed if p.paid_on >= month_start]),
    )


def build_receipt(
    payment: Payment,
    student: Student | None,
    *,
    receipt_id: str | None = None,
    created_by: str | None = None,
) -> Receipt:
    """Receipt projection of ``payment``; each call yields a new receipt id."""
    return Receipt(
        id=receipt_id or new_id(),
        payment_id=payment.id,
        receipt_number=payment.receipt_number,
        student_name=payment.student_name,
        amount=payment.amount,
        paid_on=payment.paid_on,
        description=payment.description,
        payment_method=payment.payment_method.value,
        issued_by=payment.recorded_by,
        parent_email=student.guardian_email if student else None,
        created_at=now(),
        created_by=created_by,
    )
