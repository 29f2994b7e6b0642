# ========================================
# jobapps/repos/application_repo.py
# ========================================

import asyncio
import logging
from typing import Any, List, Optional

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from jobapps.errors import DuplicateApplicationError, StorageUnavailableError
from jobapps.models.application import APPLICATION_ID, CANDIDATE_ID, JOB_ID, Document

logger = logging.getLogger(__name__)

UNIQUE_INDEX_NAME = "candidate_id_job_id_unique"

# Never hand Mongo's internal _id back to callers
PROJECTION = {"_id": 0}


def id_variants(value: Any) -> List[Any]:
    """Match an identifier whether it was stored as a number or as a string."""
    variants = [value]
    if isinstance(value, int) and not isinstance(value, bool):
        variants.append(str(value))
    elif isinstance(value, str) and value.strip().isdigit():
        variants.append(int(value.strip()))
    return variants


class ApplicationRepo:
    """Application documents in a single Mongo collection."""

    def __init__(self, collection, timeout_seconds: float = 10.0):
        self.collection = collection
        self.timeout_seconds = timeout_seconds

    async def _run(self, operation, coro):
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout_seconds)
        except DuplicateKeyError:
            raise
        except asyncio.TimeoutError as e:
            logger.error("Store %s timed out after %.1fs", operation, self.timeout_seconds)
            raise StorageUnavailableError(f"{operation} timed out") from e
        except PyMongoError as e:
            logger.error("Store %s failed: %s", operation, e)
            raise StorageUnavailableError(f"{operation} failed: {e}") from e

    # ✅ Unique (candidate_id, job_id) index, run once at startup
    async def ensure_unique_index(self) -> str:
        name = await self._run(
            "create_index",
            self.collection.create_index(
                [(CANDIDATE_ID, ASCENDING), (JOB_ID, ASCENDING)],
                unique=True,
                name=UNIQUE_INDEX_NAME,
            ),
        )
        logger.info("Unique index %s ensured", name)
        return name

    # ✅ Insert a new application, one per candidate per job
    async def create(self, document: Document) -> Document:
        """
        Insert ``document`` unless the (candidate_id, job_id) pair already exists.

        The pre-check gives a clean error for the common case; the unique
        index catches creates that race past it.
        """
        pair = {CANDIDATE_ID: document.get(CANDIDATE_ID), JOB_ID: document.get(JOB_ID)}

        existing = await self._run("find_one", self.collection.find_one(pair, PROJECTION))
        if existing is not None:
            raise DuplicateApplicationError()

        try:
            # insert_one stamps _id onto the dict it is given
            await self._run("insert_one", self.collection.insert_one(dict(document)))
        except DuplicateKeyError as e:
            raise DuplicateApplicationError() from e

        logger.info(
            "Inserted application %s (candidate=%s, job=%s)",
            document.get(APPLICATION_ID), pair[CANDIDATE_ID], pair[JOB_ID],
        )
        return document

    async def _find_all(self, query: dict) -> List[Document]:
        cursor = self.collection.find(query, PROJECTION)
        return await self._run("find", cursor.to_list(length=None))

    async def get_by_job_id(self, job_id: Any) -> List[Document]:
        return await self._find_all({JOB_ID: {"$in": id_variants(job_id)}})

    async def get_by_candidate_id(self, candidate_id: Any) -> List[Document]:
        applications = await self._find_all({CANDIDATE_ID: {"$in": id_variants(candidate_id)}})
        logger.debug("Found %d applications for candidate_id %s", len(applications), candidate_id)
        return applications

    async def get_by_id(self, application_id: str) -> Optional[Document]:
        """Returns None when nothing matches; store failures raise."""
        return await self._run("find_one", self.collection.find_one({APPLICATION_ID: application_id}, PROJECTION))
