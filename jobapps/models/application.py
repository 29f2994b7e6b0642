"""
Application document shape and the status sub-document defaults.

Documents are stored with underscore-delimited keys; see utils/naming.py.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

# Values an application document may carry. Documents are schema-flexible:
# only the keys below are required, everything else passes through as given.
Scalar = Union[str, int, float, bool, None]
Value = Union[Scalar, datetime, Dict[str, Any], List[Any]]
Document = Dict[str, Value]

# Storage-convention keys
APPLICATION_ID = "application_id"
JOB_ID = "job_id"
CANDIDATE_ID = "candidate_id"
STATUS = "status"
CURRENT_STAGE = "current_stage"
LAST_UPDATED = "last_updated"

REQUIRED_FIELDS = (JOB_ID, CANDIDATE_ID)
DEFAULT_STAGE = "Applied"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_identifier(value: Any) -> bool:
    """Ids are plain strings or numbers; documents and arrays never are."""
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def ensure_status(document: Document, now: Optional[datetime] = None) -> Document:
    """
    Make sure a storage-convention document carries
    ``status = {current_stage, last_updated}``.

    Missing parts are defaulted; parts the caller supplied are kept.
    A bare string status is read as the stage label.
    """
    now = now or utcnow()
    status = document.get(STATUS)

    if not isinstance(status, dict):
        stage = status.strip() if isinstance(status, str) and status.strip() else DEFAULT_STAGE
        document[STATUS] = {CURRENT_STAGE: stage, LAST_UPDATED: now}
        return document

    if is_blank(status.get(CURRENT_STAGE)):
        status[CURRENT_STAGE] = DEFAULT_STAGE
    if is_blank(status.get(LAST_UPDATED)):
        status[LAST_UPDATED] = now
    return document
