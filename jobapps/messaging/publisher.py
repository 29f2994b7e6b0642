"""
Publishes applications and jobs to the message bus.

Each topic is a Redis stream; a message is one stream entry whose ``value``
field holds the JSON body. Every failure is reported as PublicationError so
callers can treat publishing as best-effort.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError
from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from jobapps import config
from jobapps.errors import PublicationError
from jobapps.schemas.application import ApplicationMessage
from jobapps.schemas.job import JobMessage

logger = logging.getLogger(__name__)


def canonical_id(value: Any) -> Optional[str]:
    """
    Identifiers arrive as strings or numbers depending on the client.
    Render them all as plain strings: 456, 456.0 and "456" -> "456".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _pick(document: Dict[str, Any], camel: str, snake: str) -> Any:
    value = document.get(camel)
    if value is None or value == "":
        value = document.get(snake)
    return value


def build_application_message(document: Dict[str, Any]) -> ApplicationMessage:
    application_id = canonical_id(_pick(document, "applicationId", "application_id"))
    job_id = canonical_id(_pick(document, "jobId", "job_id"))
    candidate_id = canonical_id(_pick(document, "candidateId", "candidate_id"))
    resume_url = _pick(document, "resumeUrl", "resume_url")

    if not application_id:
        raise PublicationError("applicationId is required")
    if not job_id:
        raise PublicationError("jobId is required")
    if not candidate_id:
        raise PublicationError("candidateId is required")

    return ApplicationMessage(
        application_id=application_id,
        job_id=job_id,
        candidate_id=candidate_id,
        resume_url=resume_url if isinstance(resume_url, str) else "",
    )


def build_job_message(job: Dict[str, Any]) -> JobMessage:
    skills = [s.strip() for s in (job.get("skills") or "").split(",") if s.strip()]
    try:
        return JobMessage(
            job_id=job["id"],
            title=job["title"],
            overview=job["overview"],
            description=job["description"],
            skills=skills,
            experience=job.get("experience") or "",
        )
    except (KeyError, ValidationError) as e:
        raise PublicationError(f"job {job.get('id')} cannot be published: {e}") from e


class Publisher:
    """Synchronous-send publisher; each call waits for the bus to accept the entry."""

    def __init__(
        self,
        redis: Redis,
        application_topic: str = config.APPLICATION_TOPIC,
        job_topic: str = config.JOB_TOPIC,
        timeout_seconds: float = config.BUS_TIMEOUT_SECONDS,
        maxlen: int = config.STREAM_MAXLEN,
    ):
        self.redis = redis
        self.application_topic = application_topic
        self.job_topic = job_topic
        self.timeout_seconds = timeout_seconds
        self.maxlen = maxlen

    async def _send(self, topic: str, body: str) -> str:
        try:
            entry_id = await asyncio.wait_for(
                self.redis.xadd(topic, {"value": body}, maxlen=self.maxlen, approximate=True),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise PublicationError(f"send to {topic} timed out after {self.timeout_seconds}s") from e
        except RedisError as e:
            raise PublicationError(f"send to {topic} failed: {e}") from e

        if isinstance(entry_id, bytes):
            entry_id = entry_id.decode()
        logger.info("Published to %s as entry %s", topic, entry_id)
        return entry_id

    async def publish_application(self, document: Dict[str, Any]) -> str:
        message = build_application_message(document)
        try:
            body = message.model_dump_json(by_alias=True)
        except (TypeError, ValueError) as e:
            raise PublicationError(f"application message could not be serialized: {e}") from e
        return await self._send(self.application_topic, body)

    async def publish_job(self, job: Dict[str, Any]) -> str:
        message = build_job_message(job)
        return await self._send(self.job_topic, message.model_dump_json(by_alias=True))

    async def close(self):
        await self.redis.aclose()


def connect_publisher(redis_url: str = config.REDIS_URL) -> Optional[Publisher]:
    """Publisher for REDIS_URL, or None when publishing is switched off."""
    if not redis_url:
        logger.warning("REDIS_URL not set, publishing to the message bus is disabled")
        return None

    redis = from_url(redis_url, encoding="utf-8", decode_responses=True)
    logger.info(
        "Message bus publisher ready (application topic=%s, job topic=%s)",
        config.APPLICATION_TOPIC, config.JOB_TOPIC,
    )
    return Publisher(redis)
