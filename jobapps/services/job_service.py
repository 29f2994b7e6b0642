import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from jobapps.errors import JobNotFoundError, PublicationError
from jobapps.messaging.publisher import Publisher
from jobapps.repos.job_repo import JobRepo
from jobapps.schemas.job import JobCreate, JobUpdate

logger = logging.getLogger(__name__)


def days_posted_ago(posted_date: datetime, now: Optional[datetime] = None) -> int:
    now = now or datetime.now(timezone.utc)
    if posted_date.tzinfo is None:
        # Mongo hands datetimes back naive, always in UTC
        posted_date = posted_date.replace(tzinfo=timezone.utc)
    return max((now - posted_date).days, 0)


class JobService:
    def __init__(self, repo: JobRepo, publisher: Optional[Publisher] = None):
        self.repo = repo
        self.publisher = publisher

    async def create_job(self, job_in: JobCreate) -> Dict[str, Any]:
        job = job_in.model_dump()
        job["posted_date"] = job.get("posted_date") or datetime.now(timezone.utc)

        job = await self.repo.create(job)
        logger.info("Created job %s (%s)", job["id"], job["title"])

        if self.publisher is not None:
            try:
                await self.publisher.publish_job(job)
            except PublicationError as e:
                logger.warning("Failed to publish job %s: %s", job["id"], e)
            except Exception:
                logger.exception("Unexpected error publishing job %s", job["id"])
        return job

    async def list_jobs(self, limit: int = 100) -> List[Dict[str, Any]]:
        return await self.repo.list_all(limit)

    async def get_job(self, job_id: int) -> Dict[str, Any]:
        job = await self.repo.get(job_id)
        if job is None:
            raise JobNotFoundError(f"Job {job_id} not found")
        job["days_posted_ago"] = days_posted_ago(job["posted_date"])
        return job

    async def update_job(self, job_id: int, job_update: JobUpdate) -> Dict[str, Any]:
        # null means "leave as is"; every stored job field is required
        changes = job_update.model_dump(exclude_unset=True, exclude_none=True)
        changes["updated_at"] = datetime.now(timezone.utc)
        job = await self.repo.update(job_id, changes)
        if job is None:
            raise JobNotFoundError(f"Job {job_id} not found")
        return job

    async def delete_job(self, job_id: int) -> None:
        if not await self.repo.delete(job_id):
            raise JobNotFoundError(f"Job {job_id} not found")
