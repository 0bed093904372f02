# School Fee Tracker - domain: records, reconciliation, scopes
from .models import (
    Role,
    StudentStatus,
    PaymentMethod,
    PaymentStatus,
    UserProfile,
    Student,
    Payment,
    Receipt,
    Reminder,
    StatsBucket,
    PaymentStats,
)
from .ledger import apply_payment, compute_stats, build_receipt, BalanceUpdate, new_id, new_receipt_number
from .scopes import IdentityScope, AdminScope, StaffScope, ParentScope, build_identity_scope
from .errors import FeesError, AuthenticationError, AuthorizationError, NotFoundError, ValidationError

__all__ = [
    "Role",
    "StudentStatus",
    "PaymentMethod",
    "PaymentStatus",
    "UserProfile",
    "Student",
    "Payment",
    "Receipt",
    "Reminder",
    "StatsBucket",
    "PaymentStats",
    "apply_payment",
    "compute_stats",
    "build_receipt",
    "BalanceUpdate",
    "new_id",
    "new_receipt_number",
    "IdentityScope",
    "AdminScope",
    "StaffScope",
    "ParentScope",
    "build_identity_scope",
    "FeesError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ValidationError",
]
