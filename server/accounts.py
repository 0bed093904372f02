# School Fee Tracker - signup / login / profile
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from auth import create_identity, authenticate, issue_token, get_store, require_auth
from database import RecordStore
from fees import IdentityScope, Role, UserProfile
from fees.errors import NotFoundError
from server.data_access import link_students_by_guardian_email

router = APIRouter(prefix="/auth", tags=["Auth"])


class SignupRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1, description="admin | staff | parent")


class SignupResponse(BaseModel):
    message: str = "User created successfully"
    userId: str


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    user_id: str


@router.post("/signup", response_model=SignupResponse)
async def signup(body: SignupRequest, store: RecordStore = Depends(get_store)):
    """Register an identity; a parent is linked to students that list their email as guardian."""
    profile = await create_identity(store, body.email, body.password, body.name, body.role)
    if profile.role == Role.parent:
        await link_students_by_guardian_email(store, profile.id, profile.email)
    return SignupResponse(userId=profile.id)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, store: RecordStore = Depends(get_store)):
    profile = await authenticate(store, body.email, body.password)
    return LoginResponse(
        access_token=issue_token(profile),
        role=profile.role.value,
        user_id=profile.id,
    )


@router.get("/profile", response_model=UserProfile)
async def profile(
    identity: IdentityScope = Depends(require_auth),
    store: RecordStore = Depends(get_store),
):
    doc = await store.get(f"user:{identity.user_id}")
    if not doc:
        raise NotFoundError("User profile not found")
    return UserProfile.model_validate(doc)
