# School Fee Tracker - reminder endpoints (delivery is logged, not sent)
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from auth import get_store, require_staff
from database import RecordStore
from fees import IdentityScope, Reminder
from server import data_access

router = APIRouter(prefix="/notifications", tags=["Notifications"])


class ReminderRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    student_id: str = Field(..., min_length=1)


class ReminderResponse(BaseModel):
    message: str = "Reminder sent successfully"
    reminder: Reminder


@router.post("/reminder", response_model=ReminderResponse)
async def reminder(
    body: ReminderRequest,
    identity: IdentityScope = Depends(require_staff),
    store: RecordStore = Depends(get_store),
):
    sent = await data_access.send_reminder(store, identity, body.student_id)
    return ReminderResponse(reminder=sent)


@router.get("/reminders", response_model=list[Reminder])
async def recent_reminders(
    limit: int = 50,
    identity: IdentityScope = Depends(require_staff),
    store: RecordStore = Depends(get_store),
):
    return await data_access.list_reminders(store, limit)
