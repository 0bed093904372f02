# School Fee Tracker - reminder delivery (log only, nothing leaves the process)
import logging

from .models import Reminder, Student

logger = logging.getLogger("fees.notify")


def _amount(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def reminder_message(student: Student) -> str:
    return f"Payment reminder for {student.name}. Outstanding balance: {_amount(student.balance)}"


def deliver_reminder(reminder: Reminder) -> None:
    logger.info(
        "Payment reminder sent for student %s to %s",
        reminder.student_id,
        reminder.guardian_email or reminder.guardian_phone or "no contact on file",
    )
