# School Fee Tracker - Role-scoped record access (least privilege)
import logging
from datetime import date

from pydantic import ValidationError as PydanticValidationError

from database import RecordStore
from fees import (
    IdentityScope,
    ParentScope,
    Payment,
    PaymentStats,
    PaymentStatus,
    Receipt,
    Reminder,
    Role,
    Student,
    apply_payment,
    build_receipt,
    compute_stats,
    new_id,
    new_receipt_number,
)
from fees.audit import log_audit, create_audit_entry
from fees.errors import AuthorizationError, NotFoundError, ValidationError
from fees.ledger import now, today
from fees.notify import deliver_reminder, reminder_message

logger = logging.getLogger(__name__)

LINK_PREFIX = "student_parent:"


# --- Guardianship links ---

def link_key(user_id: str, student_id: str) -> str:
    return f"{LINK_PREFIX}{user_id}:{student_id}"


async def linked_student_ids(store: RecordStore, user_id: str) -> frozenset[str]:
    entries = await store.get_by_prefix(f"{LINK_PREFIX}{user_id}:")
    return frozenset(e.key.split(":")[2] for e in entries)


async def link_guardian(store: RecordStore, user_id: str, student_id: str) -> None:
    await store.set(link_key(user_id, student_id), True)
    logger.info("Linked parent %s to student %s", user_id, student_id)


def _same_email(a: str | None, b: str | None) -> bool:
    return bool(a and b) and a.strip().lower() == b.strip().lower()


async def find_parent_by_email(store: RecordStore, email: str) -> dict | None:
    for entry in await store.get_by_prefix("user:"):
        profile = entry.value
        if profile.get("role") == Role.parent.value and _same_email(profile.get("email"), email):
            return profile
    return None


async def link_students_by_guardian_email(store: RecordStore, parent_id: str, email: str) -> list[str]:
    """Link a newly registered parent to every student listing them as guardian."""
    linked = []
    for student in await _all_students(store):
        if _same_email(student.guardian_email, email):
            await link_guardian(store, parent_id, student.id)
            linked.append(student.id)
    return linked


# --- Students ---

async def _all_students(store: RecordStore) -> list[Student]:
    return [Student.model_validate(e.value) for e in await store.get_by_prefix("student:")]


async def get_student(store: RecordStore, student_id: str) -> Student | None:
    doc = await store.get(f"student:{student_id}")
    return Student.model_validate(doc) if doc else None


async def list_students_for(store: RecordStore, identity: IdentityScope) -> list[Student]:
    """Students: admin/staff all; parent only linked children."""
    if isinstance(identity, ParentScope):
        ids = sorted(identity.linked_student_ids)
        docs = await store.mget([f"student:{i}" for i in ids])
        return [Student.model_validate(d) for d in docs if d]
    return await _all_students(store)


async def create_student(store: RecordStore, identity: IdentityScope, fields: dict) -> Student:
    student = Student.model_validate({
        **fields,
        "id": new_id(),
        "createdAt": now(),
        "createdBy": identity.user_id,
    })
    await store.set(f"student:{student.id}", student.to_doc())

    if student.guardian_email:
        parent = await find_parent_by_email(store, student.guardian_email)
        if parent:
            await link_guardian(store, parent["id"], student.id)

    log_audit(create_audit_entry("student.create", f"student:{student.id}", identity.user_id, identity.role))
    return student


async def update_student(store: RecordStore, identity: IdentityScope, student_id: str, updates: dict) -> Student:
    """Shallow merge of ``updates`` (camelCase document fields) into the stored student."""
    existing = await store.get(f"student:{student_id}")
    if not existing:
        raise NotFoundError("Student not found")
    try:
        student = Student.model_validate({
            **existing,
            **updates,
            "id": student_id,
            "updatedAt": now(),
            "updatedBy": identity.user_id,
        })
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        raise ValidationError(f"{field}: {first['msg']}") from exc
    await store.set(f"student:{student_id}", student.to_doc())
    log_audit(create_audit_entry(
        "student.update", f"student:{student_id}", identity.user_id, identity.role,
        details={"fields": sorted(updates)},
    ))
    return student


# --- Payments ---

async def _all_payments(store: RecordStore) -> list[Payment]:
    return [Payment.model_validate(e.value) for e in await store.get_by_prefix("payment:")]


async def list_payments_for(
    store: RecordStore,
    identity: IdentityScope,
    student_id: str | None = None,
) -> list[Payment]:
    """Payments: admin/staff all; parent only for linked children. Optional student filter."""
    payments = await _all_payments(store)
    if isinstance(identity, ParentScope):
        payments = [p for p in payments if identity.can_access_student(p.student_id)]
    if student_id:
        payments = [p for p in payments if p.student_id == student_id]
    return payments


async def record_payment(
    store: RecordStore,
    identity: IdentityScope,
    *,
    student_id: str,
    amount: float,
    payment_method: str,
    description: str = "",
    reference: str | None = None,
    paid_on: date | None = None,
    status: str = PaymentStatus.completed.value,
) -> Payment:
    """Write the payment, then the student's recomputed balance.

    The two writes are separate store calls with no lock; concurrent payments
    for the same student can read the same balance and lose one decrement.
    """
    student = await get_student(store, student_id)
    if not student:
        raise NotFoundError("Student not found")
    if not identity.can_access_student(student_id):
        raise AuthorizationError()

    payment = Payment(
        id=new_id(),
        student_id=student_id,
        student_name=student.name,
        amount=amount,
        payment_method=payment_method,
        reference=reference,
        description=description,
        paid_on=paid_on or today(),
        recorded_by=identity.name,
        receipt_number=new_receipt_number(),
        status=status,
        created_at=now(),
        created_by=identity.user_id,
    )
    await store.set(f"payment:{payment.id}", payment.to_doc())

    update = apply_payment(student, amount, payment.paid_on)
    updated = student.model_copy(update={
        "balance": update.new_balance,
        "status": update.new_status,
        "last_payment": update.new_last_payment,
        "updated_at": now(),
    })
    await store.set(f"student:{student_id}", updated.to_doc())

    log_audit(create_audit_entry(
        "payment.create", f"payment:{payment.id}", identity.user_id, identity.role,
        details={"studentId": student_id, "receiptNumber": payment.receipt_number},
    ))
    return payment


async def payment_stats(store: RecordStore, as_of: date | None = None) -> PaymentStats:
    return compute_stats(await _all_payments(store), as_of or today())


# --- Receipts ---

async def generate_receipt(store: RecordStore, identity: IdentityScope, payment_id: str) -> Receipt:
    doc = await store.get(f"payment:{payment_id}")
    if not doc:
        raise NotFoundError("Payment not found")
    payment = Payment.model_validate(doc)
    student = await get_student(store, payment.student_id)
    receipt = build_receipt(payment, student, created_by=identity.user_id)
    await store.set(f"receipt:{receipt.id}", receipt.to_doc())
    log_audit(create_audit_entry(
        "receipt.create", f"receipt:{receipt.id}", identity.user_id, identity.role,
        details={"paymentId": payment_id},
    ))
    return receipt


# --- Reminders ---

async def send_reminder(store: RecordStore, identity: IdentityScope, student_id: str) -> Reminder:
    student = await get_student(store, student_id)
    if not student:
        raise NotFoundError("Student not found")
    reminder = Reminder(
        id=new_id(),
        student_id=student_id,
        student_name=student.name,
        guardian_email=student.guardian_email,
        guardian_phone=student.guardian_phone,
        balance=student.balance,
        message=reminder_message(student),
        sent_by=identity.name,
        sent_at=now(),
    )
    await store.set(f"reminder:{reminder.id}", reminder.to_doc())
    deliver_reminder(reminder)
    log_audit(create_audit_entry("reminder.send", f"reminder:{reminder.id}", identity.user_id, identity.role))
    return reminder


async def list_reminders(store: RecordStore, limit: int = 50) -> list[Reminder]:
    """Most recent reminders first."""
    reminders = [Reminder.model_validate(e.value) for e in await store.get_by_prefix("reminder:")]
    reminders.sort(key=lambda r: r.sent_at, reverse=True)
    return reminders[:limit]
