# School Fee Tracker - receipt endpoints
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from auth import get_store, require_auth
from database import RecordStore
from fees import IdentityScope, Receipt
from server import data_access

router = APIRouter(prefix="/receipts", tags=["Receipts"])


class ReceiptRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    payment_id: str = Field(..., min_length=1)


@router.post("/generate", response_model=Receipt, response_model_exclude_none=True)
async def generate(
    body: ReceiptRequest,
    identity: IdentityScope = Depends(require_auth),
    store: RecordStore = Depends(get_store),
):
    # Not idempotent: every call stores a new receipt for the payment
    return await data_access.generate_receipt(store, identity, body.payment_id)
