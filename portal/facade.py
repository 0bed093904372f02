# School Fee Tracker - client data façade
#
# Holds the session's students / payments / receipts in an explicit AppState.
# Payment and receipt creation never fail outright: when the API call fails a
# record is built locally and returned as Degraded together with the error.
import asyncio
import logging
import time

from fees import (
    Payment,
    PaymentStats,
    Receipt,
    Reminder,
    Student,
    StudentStatus,
    apply_payment,
    build_receipt,
    compute_stats,
)
from fees.errors import NotFoundError
from fees.ledger import new_id, today
from .api import ApiError, FeesAPI
from .fallback import fallback_payments, fallback_students
from .state import AppState, Degraded, Ok, PaymentDraft

logger = logging.getLogger(__name__)


class DataFacade:
    def __init__(self, api: FeesAPI, state: AppState | None = None):
        self.api = api
        self.state = state or AppState()

    def _update(self, **changes) -> AppState:
        self.state = self.state.model_copy(update=changes)
        return self.state

    def _fail(self, action: str, exc: ApiError) -> str:
        logger.error("Failed to %s: %s", action, exc.message)
        self._update(error=exc.message)
        return exc.message

    # --- Loading ---

    async def refresh_data(self) -> Ok[AppState] | Degraded[AppState]:
        """Reload students and payments together; a failed collection falls back to demo data."""
        self._update(loading=True, error=None)
        students, payments = await asyncio.gather(
            self._fetch(self.api.list_students(), fallback_students),
            self._fetch(self.api.list_payments(), fallback_payments),
        )
        errors = [e for _, e in (students, payments) if e]
        state = self._update(
            students=tuple(students[0]),
            payments=tuple(payments[0]),
            loading=False,
            error=errors[0] if errors else None,
        )
        return Degraded(state, errors[0]) if errors else Ok(state)

    async def _fetch(self, call, fallback) -> tuple[list, str | None]:
        try:
            return await call, None
        except ApiError as exc:
            logger.error("Failed to refresh data: %s", exc.message)
            return fallback(), exc.message

    def get_student_payments(self, student_id: str) -> list[Payment]:
        return [p for p in self.state.payments if p.student_id == student_id]

    def _student(self, student_id: str) -> Student | None:
        return next((s for s in self.state.students if s.id == student_id), None)

    def _payment(self, payment_id: str) -> Payment | None:
        return next((p for p in self.state.payments if p.id == payment_id), None)

    # --- Mutations ---

    async def add_payment(self, draft: PaymentDraft) -> Ok[Payment] | Degraded[Payment]:
        self._update(error=None)
        try:
            payment = await self.api.create_payment(draft.request_body())
        except ApiError as exc:
            error = self._fail("add payment", exc)
            return Degraded(self._record_locally(draft), error)
        # Server recomputed the balance; pull it rather than patching locally
        await self.refresh_data()
        return Ok(payment)

    def _record_locally(self, draft: PaymentDraft) -> Payment:
        stamp = int(time.time() * 1000)
        student = self._student(draft.student_id)
        payment = Payment(
            id=new_id(),
            student_id=draft.student_id,
            student_name=draft.student_name or (student.name if student else ""),
            amount=draft.amount,
            payment_method=draft.payment_method,
            reference=draft.reference,
            description=draft.description,
            paid_on=draft.paid_on or today(),
            recorded_by=draft.recorded_by,
            receipt_number=f"RCP-{stamp}",
            status=draft.status,
        )
        students = self.state.students
        if student:
            update = apply_payment(student, draft.amount, payment.paid_on)
            local = student.model_copy(update={
                "balance": update.new_balance,
                "status": update.new_status,
                "last_payment": update.new_last_payment,
            })
            students = tuple(local if s.id == student.id else s for s in students)
        self._update(payments=self.state.payments + (payment,), students=students)
        return payment

    async def generate_receipt(self, payment_id: str) -> Ok[Receipt] | Degraded[Receipt]:
        self._update(error=None)
        try:
            receipt = await self.api.generate_receipt(payment_id)
        except ApiError as exc:
            error = self._fail("generate receipt", exc)
            payment = self._payment(payment_id)
            if not payment:
                raise NotFoundError("Payment not found") from exc
            receipt = build_receipt(payment, self._student(payment.student_id))
            self._update(receipts=self.state.receipts + (receipt,))
            return Degraded(receipt, error)
        self._update(receipts=self.state.receipts + (receipt,))
        return Ok(receipt)

    async def add_student(self, fields: dict) -> Student:
        self._update(error=None)
        try:
            student = await self.api.create_student(fields)
        except ApiError as exc:
            self._fail("add student", exc)
            raise
        await self.refresh_data()
        return student

    async def update_student_balance(self, student_id: str, new_balance: float) -> None:
        self._update(error=None)
        try:
            await self.api.update_student(student_id, {"balance": new_balance})
        except ApiError as exc:
            self._fail("update balance", exc)
            raise
        status = StudentStatus.paid if new_balance == 0 else StudentStatus.pending
        self._update(students=tuple(
            s.model_copy(update={"balance": new_balance, "status": status, "last_payment": today()})
            if s.id == student_id else s
            for s in self.state.students
        ))

    async def send_reminder(self, student_id: str) -> None:
        self._update(error=None)
        try:
            await self.api.send_reminder(student_id)
        except ApiError as exc:
            self._fail("send reminder", exc)
            raise
        logger.info("Reminder sent for student %s", student_id)

    async def send_reminders(self, status: StudentStatus | None = StudentStatus.overdue) -> list[Reminder]:
        """Remind every held student with an outstanding balance, optionally only those in ``status``."""
        self._update(error=None)
        targets = [
            s for s in self.state.students
            if s.balance > 0 and (status is None or s.status == status)
        ]
        sent = []
        for student in targets:
            try:
                sent.append(await self.api.send_reminder(student.id))
            except ApiError as exc:
                self._fail("send reminders", exc)
                raise
        logger.info("Sent %d reminders", len(sent))
        return sent

    async def get_payment_stats(self) -> Ok[PaymentStats] | Degraded[PaymentStats]:
        self._update(error=None)
        try:
            return Ok(await self.api.payment_stats())
        except ApiError as exc:
            error = self._fail("get payment stats", exc)
            return Degraded(compute_stats(self.state.payments, today()), error)
