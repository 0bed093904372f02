# School Fee Tracker - health, demo seeding and audit sample
from fastapi import APIRouter, Depends

from auth import get_store, require_admin_scope
from database import RecordStore
from fees import IdentityScope
from fees.audit import get_audit_sample
from fees.sample_data import seed_sample_data

router = APIRouter(tags=["Admin"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/init-sample-data")
async def init_sample_data(store: RecordStore = Depends(get_store)):
    """Seed the demo dataset (6 students, 2 payments). No credential required."""
    await seed_sample_data(store)
    return {"message": "Sample data initialized successfully"}


@router.get("/audit/sample")
async def audit_sample(limit: int = 20, identity: IdentityScope = Depends(require_admin_scope)):
    """Recent audit entries (ids and actions only, no amounts)."""
    return {"entries": get_audit_sample(limit)}
