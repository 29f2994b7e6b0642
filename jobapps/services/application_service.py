"""
Application ingestion pipeline.

raw payload -> storage keys -> required fields -> status defaults -> store
            -> transport keys -> best-effort publish -> response document
"""

import json
import logging
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId

from jobapps.errors import BadPayloadError, MissingRequiredFieldError, PublicationError
from jobapps.messaging.publisher import Publisher
from jobapps.models.application import REQUIRED_FIELDS, Document, ensure_status, is_blank, is_identifier
from jobapps.repos.application_repo import ApplicationRepo
from jobapps.utils.naming import to_storage, to_transport

logger = logging.getLogger(__name__)

RawPayload = Union[bytes, str, Dict[str, Any]]


def new_application_id() -> str:
    """24-character hex id, unique across processes."""
    return str(ObjectId())


def decode_payload(raw_payload: RawPayload) -> Document:
    if isinstance(raw_payload, dict):
        return dict(raw_payload)
    try:
        document = json.loads(raw_payload)
    except (TypeError, ValueError) as e:
        raise BadPayloadError(f"Invalid request payload: {e}") from e
    if not isinstance(document, dict):
        raise BadPayloadError("Invalid request payload: expected a JSON object")
    return document


class ApplicationService:
    def __init__(self, repo: ApplicationRepo, publisher: Optional[Publisher] = None):
        self.repo = repo
        self.publisher = publisher

    async def create_application(self, raw_payload: RawPayload) -> Document:
        document = decode_payload(raw_payload)

        # Both spellings collapse onto application_id, drop the empty one
        for key in ("applicationId", "application_id"):
            if key in document and is_blank(document[key]):
                del document[key]
        if "applicationId" not in document and "application_id" not in document:
            document["applicationId"] = new_application_id()

        document = to_storage(document)

        if any(is_blank(document.get(field)) for field in REQUIRED_FIELDS):
            raise MissingRequiredFieldError("JobID and CandidateID are required")
        # Anything else would reach the duplicate check as a query operator
        if not all(is_identifier(document[field]) for field in REQUIRED_FIELDS):
            raise BadPayloadError("JobID and CandidateID must be strings or numbers")

        ensure_status(document)

        stored = await self.repo.create(document)
        response = to_transport(stored)

        await self._publish(response)
        return response

    async def _publish(self, document: Document) -> None:
        """Attempt the downstream send; a failure never fails the create."""
        if self.publisher is None:
            logger.debug("No publisher configured, skipping application %s", document.get("applicationId"))
            return
        try:
            await self.publisher.publish_application(document)
        except PublicationError as e:
            logger.warning("Failed to publish application %s: %s", document.get("applicationId"), e)
        except Exception:
            logger.exception("Unexpected error publishing application %s", document.get("applicationId"))

    async def list_by_job(self, job_id: Any) -> List[Document]:
        return [to_transport(doc) for doc in await self.repo.get_by_job_id(job_id)]

    async def list_by_candidate(self, candidate_id: Any) -> List[Document]:
        return [to_transport(doc) for doc in await self.repo.get_by_candidate_id(candidate_id)]

    async def get_by_id(self, application_id: str) -> Document:
        """Empty document when no application has this id."""
        document = await self.repo.get_by_id(application_id)
        return to_transport(document) if document is not None else {}
