# School Fee Tracker - Auth (identity provider + bearer credential -> identity scope)
import logging
from datetime import datetime, timedelta, timezone

from fastapi import Request, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as SchemaError

from config import get_settings
from database import RecordStore
from fees import IdentityScope, UserProfile, Role, build_identity_scope
from fees.errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from fees.ledger import new_id, now
from fees.scopes import require_manager, require_admin
from server.data_access import linked_student_ids

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer = HTTPBearer(auto_error=False)

ALGORITHM = "HS256"
# Bcrypt limit: password must be <= 72 bytes
MAX_PASSWORD_BYTES = 72


def _truncate_password(password: str) -> str:
    """Bcrypt accepts max 72 bytes; truncate to avoid ValueError."""
    if not password:
        return password
    enc = password.encode("utf-8")
    if len(enc) <= MAX_PASSWORD_BYTES:
        return password
    return enc[:MAX_PASSWORD_BYTES].decode("utf-8", errors="ignore")


def get_secret():
    return get_settings().secret_key


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(_truncate_password(plain), hashed)


def hash_password(plain: str) -> str:
    return pwd_context.hash(_truncate_password(plain))


def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=get_settings().access_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, get_secret(), algorithm=ALGORITHM)


def decode_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, get_secret(), algorithms=[ALGORITHM])
    except JWTError:
        return None


def _credential_key(email: str) -> str:
    return f"credential:{email.strip().lower()}"


# --- Identity provider ---

async def create_identity(store: RecordStore, email: str, password: str, name: str, role: str) -> UserProfile:
    """Register credentials and the role-tagged profile record."""
    if role not in {r.value for r in Role}:
        raise ValidationError("Invalid role")
    if await store.get(_credential_key(email)):
        raise ValidationError("A user with this email address has already been registered")
    profile = UserProfile(id=new_id(), email=email, name=name, role=role, created_at=now())
    await store.set(_credential_key(email), {"userId": profile.id, "passwordHash": hash_password(password)})
    await store.set(f"user:{profile.id}", profile.to_doc())
    logger.info("Registered %s user %s", role, profile.id)
    return profile


async def authenticate(store: RecordStore, email: str, password: str) -> UserProfile:
    credential = await store.get(_credential_key(email))
    if not credential or not verify_password(password, credential["passwordHash"]):
        raise AuthenticationError("Invalid email or password")
    profile = await store.get(f"user:{credential['userId']}")
    if not profile:
        raise NotFoundError("User profile not found")
    return UserProfile.model_validate(profile)


def issue_token(profile: UserProfile) -> str:
    return create_access_token({"sub": profile.id, "email": profile.email})


# --- FastAPI dependencies ---

def get_store(request: Request) -> RecordStore:
    return request.app.state.store


async def get_current_user_from_token(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> dict | None:
    if not credentials:
        return None
    payload = decode_token(credentials.credentials)
    if not payload or "sub" not in payload:
        return None
    return {"user_id": payload["sub"], "email": payload.get("email")}


async def require_auth(
    user: dict | None = Depends(get_current_user_from_token),
    store: RecordStore = Depends(get_store),
) -> IdentityScope:
    """Resolve the caller's identity scope; 401 if not authenticated, 404 if the profile is gone."""
    if not user:
        raise AuthenticationError()
    profile = await store.get(f"user:{user['user_id']}")
    if not profile:
        raise NotFoundError("User profile not found")
    linked = frozenset()
    if profile.get("role") == Role.parent.value:
        linked = await linked_student_ids(store, profile["id"])
    try:
        return build_identity_scope(profile, linked)
    except SchemaError:
        logger.warning("Profile %s has unusable role %r", profile.get("id"), profile.get("role"))
        raise AuthorizationError()


async def require_staff(scope: IdentityScope = Depends(require_auth)) -> IdentityScope:
    """Admin or staff; 403 for parents."""
    return require_manager(scope)


async def require_admin_scope(scope: IdentityScope = Depends(require_auth)) -> IdentityScope:
    return require_admin(scope)
