# ========================================
# jobapps/repos/job_repo.py
# ========================================

import asyncio
import logging
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from jobapps.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

PROJECTION = {"_id": 0}


class JobRepo:
    """Job rows keyed by an integer id taken from a counters collection."""

    def __init__(self, collection, counters, timeout_seconds: float = 10.0):
        self.collection = collection
        self.counters = counters
        self.timeout_seconds = timeout_seconds

    async def _run(self, operation, coro):
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise StorageUnavailableError(f"{operation} timed out") from e
        except PyMongoError as e:
            logger.error("Job store %s failed: %s", operation, e)
            raise StorageUnavailableError(f"{operation} failed: {e}") from e

    async def _next_id(self) -> int:
        counter = await self._run(
            "next_id",
            self.counters.find_one_and_update(
                {"_id": self.collection.name},
                {"$inc": {"seq": 1}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            ),
        )
        return counter["seq"]

    async def create(self, job: Dict[str, Any]) -> Dict[str, Any]:
        job = {**job, "id": await self._next_id()}
        await self._run("insert_one", self.collection.insert_one(dict(job)))
        return job

    async def list_all(self, limit: int = 100) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}, PROJECTION).sort("id", 1).limit(limit)
        return await self._run("find", cursor.to_list(length=limit))

    async def get(self, job_id: int) -> Optional[Dict[str, Any]]:
        return await self._run("find_one", self.collection.find_one({"id": job_id}, PROJECTION))

    async def update(self, job_id: int, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return await self._run(
            "find_one_and_update",
            self.collection.find_one_and_update(
                {"id": job_id},
                {"$set": changes},
                projection=PROJECTION,
                return_document=ReturnDocument.AFTER,
            ),
        )

    async def delete(self, job_id: int) -> bool:
        result = await self._run("delete_one", self.collection.delete_one({"id": job_id}))
        return result.deleted_count > 0
