from datetime import date

import pytest

from fees import Payment, Student, StudentStatus, apply_payment, build_receipt, compute_stats
from fees.ledger import new_id, new_receipt_number, week_start


def make_student(**overrides) -> Student:
    data = {
        "id": "1",
        "name": "Michael Chen",
        "class": "Grade 11B",
        "guardianName": "Linda Chen",
        "guardianEmail": "linda.chen@email.com",
        "balance": 1250,
        "status": "overdue",
    }
    data.update(overrides)
    return Student.model_validate(data)


def make_payment(**overrides) -> Payment:
    data = {
        "id": "p1",
        "studentId": "1",
        "studentName": "Michael Chen",
        "amount": 150,
        "paymentMethod": "ecocash",
        "description": "School Fees - January",
        "date": "2024-01-20",
        "recordedBy": "Admin",
        "receiptNumber": "REC001",
        "status": "completed",
    }
    data.update(overrides)
    return Payment.model_validate(data)


@pytest.mark.parametrize(
    "balance, amount, expected_balance, expected_status",
    [
        (1250, 250, 1000, StudentStatus.pending),
        (850, 850, 0, StudentStatus.paid),
        (100, 99.5, 0.5, StudentStatus.pending),
        (200, 500, 0, StudentStatus.paid),
        (0, 10, 0, StudentStatus.paid),
    ],
)
def test_apply_payment(balance, amount, expected_balance, expected_status):
    update = apply_payment(make_student(balance=balance), amount, date(2024, 2, 1))
    assert update.new_balance == expected_balance
    assert update.new_status == expected_status
    assert update.new_last_payment == date(2024, 2, 1)


def test_apply_payment_never_goes_negative():
    update = apply_payment(make_student(balance=100), 1_000_000, date(2024, 2, 1))
    assert update.new_balance == 0


def test_apply_payment_never_produces_overdue():
    # An overdue student paying part of the balance becomes pending
    update = apply_payment(make_student(balance=1250, status="overdue"), 1, date(2024, 2, 1))
    assert update.new_status == StudentStatus.pending


def test_week_starts_on_sunday():
    assert week_start(date(2024, 1, 17)) == date(2024, 1, 14)  # Wednesday
    assert week_start(date(2024, 1, 14)) == date(2024, 1, 14)  # Sunday
    assert week_start(date(2024, 1, 13)) == date(2024, 1, 7)  # Saturday


def test_compute_stats_empty():
    stats = compute_stats([], date(2024, 1, 17))
    assert stats.model_dump(by_alias=True) == {
        "today": {"amount": 0, "count": 0},
        "thisWeek": {"amount": 0, "count": 0},
        "thisMonth": {"amount": 0, "count": 0},
    }


def test_compute_stats_buckets_overlap():
    payments = [
        make_payment(id="a", amount=10, date="2024-01-17"),  # today
        make_payment(id="b", amount=20, date="2024-01-14"),  # Sunday of this week
        make_payment(id="c", amount=40, date="2024-01-13"),  # last Saturday
        make_payment(id="d", amount=80, date="2024-01-01"),  # first of the month
        make_payment(id="e", amount=160, date="2023-12-31"),  # previous month
    ]
    stats = compute_stats(payments, date(2024, 1, 17))
    assert (stats.today.amount, stats.today.count) == (10, 1)
    assert (stats.this_week.amount, stats.this_week.count) == (30, 2)
    assert (stats.this_month.amount, stats.this_month.count) == (150, 4)


def test_compute_stats_only_counts_completed():
    payments = [
        make_payment(id="a", amount=10, date="2024-01-17", status="completed"),
        make_payment(id="b", amount=20, date="2024-01-17", status="pending"),
        make_payment(id="c", amount=40, date="2024-01-17", status="failed"),
    ]
    stats = compute_stats(payments, date(2024, 1, 17))
    for bucket in (stats.today, stats.this_week, stats.this_month):
        assert (bucket.amount, bucket.count) == (10, 1)


def test_compute_stats_week_excludes_later_dates():
    stats = compute_stats([make_payment(date="2024-01-18")], date(2024, 1, 17))
    assert stats.this_week.count == 0
    assert stats.today.count == 0


def test_build_receipt_copies_payment():
    payment = make_payment(amount=150, date="2024-01-20")
    receipt = build_receipt(payment, make_student(), created_by="u1")
    assert receipt.amount == 150
    assert receipt.receipt_number == payment.receipt_number
    assert receipt.parent_email == "linda.chen@email.com"
    assert receipt.issued_by == "Admin"
    assert receipt.paid_on == date(2024, 1, 20)
    assert receipt.payment_id == "p1"
    assert receipt.payment_method == "ecocash"
    assert receipt.id != payment.id


def test_build_receipt_without_student():
    receipt = build_receipt(make_payment(), None)
    assert receipt.parent_email is None
    assert "parentEmail" not in receipt.to_doc()


def test_build_receipt_is_not_idempotent():
    payment = make_payment()
    first, second = build_receipt(payment, None), build_receipt(payment, None)
    assert first.id != second.id
    assert first.model_dump(exclude={"id", "created_at"}) == second.model_dump(exclude={"id", "created_at"})


def test_identifiers():
    assert new_id() != new_id()
    number = new_receipt_number()
    assert number.startswith("REC") and len(number) == 9
