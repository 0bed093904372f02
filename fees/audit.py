# School Fee Tracker - audit trail (every mutating request is logged)
import json
import logging
import uuid
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from pydantic import BaseModel, Field

from config import get_settings

logger = logging.getLogger("fees.audit")


class AuditLogEntry(BaseModel):
    trace_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    actor_id: str | None = None
    role: str | None = None
    action: str = Field(..., description="e.g. payment.create, student.update")
    resource: str = Field(..., description="Store key of the record acted on")
    details: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# Recent entries for the sample endpoint; the append-only file keeps everything
MAX_MEMORY_ENTRIES = 1000
_audit_log: deque[AuditLogEntry] = deque(maxlen=MAX_MEMORY_ENTRIES)


def log_audit(entry: AuditLogEntry) -> None:
    """Append audit entry to the in-memory list and, if configured, to the JSONL file."""
    _audit_log.append(entry)
    logger.info("%s %s by %s (%s)", entry.action, entry.resource, entry.actor_id, entry.role)
    path = get_settings().audit_log_file
    if not path:
        return
    audit_file = Path(path)
    audit_file.parent.mkdir(parents=True, exist_ok=True)
    with open(audit_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry.model_dump(mode="json"), default=str) + "\n")


def create_audit_entry(
    action: str,
    resource: str,
    actor_id: str | None = None,
    role: str | None = None,
    details: dict | None = None,
) -> AuditLogEntry:
    return AuditLogEntry(
        actor_id=actor_id,
        role=role,
        action=action,
        resource=resource,
        details=details or {},
    )


def get_audit_sample(limit: int = 50) -> list[dict]:
    """Most recent audit entries, oldest first."""
    return [e.model_dump(mode="json") for e in list(_audit_log)[-limit:]]
