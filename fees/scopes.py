# School Fee Tracker - identity scopes (who is calling and what they may do)
from typing import Annotated, ClassVar, Literal, Union
from pydantic import BaseModel, Field, TypeAdapter

from .errors import AuthorizationError


class _Scope(BaseModel):
    user_id: str = Field(..., description="Identity provider user id")
    name: str = Field(..., description="Display name, recorded on payments and reminders")
    email: str

    manages_records: ClassVar[bool] = False

    def can_access_student(self, student_id: str) -> bool:
        return self.manages_records


class AdminScope(_Scope):
    """Full access, including the audit trail."""
    role: Literal["admin"] = "admin"
    manages_records: ClassVar[bool] = True


class StaffScope(_Scope):
    """Bursar / office staff: all students and payments, no audit trail."""
    role: Literal["staff"] = "staff"
    manages_records: ClassVar[bool] = True


class ParentScope(_Scope):
    """Guardian: only students linked through guardianship link records."""
    role: Literal["parent"] = "parent"
    linked_student_ids: frozenset[str] = Field(default_factory=frozenset)

    def can_access_student(self, student_id: str) -> bool:
        return student_id in self.linked_student_ids


IdentityScope = Union[AdminScope, StaffScope, ParentScope]

_scope_adapter = TypeAdapter(Annotated[IdentityScope, Field(discriminator="role")])


def build_identity_scope(profile: dict, linked_student_ids: frozenset[str] = frozenset()) -> IdentityScope:
    """Scope for a stored profile document; ``linked_student_ids`` only matters for parents."""
    data = {
        "user_id": profile["id"],
        "name": profile.get("name") or "",
        "email": profile.get("email") or "",
        "role": profile.get("role"),
    }
    if data["role"] == "parent":
        data["linked_student_ids"] = linked_student_ids
    return _scope_adapter.validate_python(data)


def require_manager(scope: IdentityScope) -> IdentityScope:
    """Admin or staff only."""
    if not scope.manages_records:
        raise AuthorizationError()
    return scope


def require_admin(scope: IdentityScope) -> IdentityScope:
    if not isinstance(scope, AdminScope):
        raise AuthorizationError()
    return scope
