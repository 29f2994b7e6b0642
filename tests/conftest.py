"""Shared fakes and fixtures for the test suite."""

import asyncio
import copy
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from jobapps.dependencies import get_application_service, get_job_service
from jobapps.errors import PublicationError
from jobapps.main import app
from jobapps.repos.application_repo import ApplicationRepo
from jobapps.repos.job_repo import JobRepo
from jobapps.services.application_service import ApplicationService
from jobapps.services.job_service import JobService


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, expected in query.items():
        actual = document.get(key)
        if isinstance(expected, dict) and "$in" in expected:
            if actual not in expected["$in"]:
                return False
        elif actual != expected:
            return False
    return True


def _project(document: Dict[str, Any], projection: Optional[Dict[str, int]]) -> Dict[str, Any]:
    document = copy.deepcopy(document)
    if projection and projection.get("_id") == 0:
        document.pop("_id", None)
    return document


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]], error: Optional[Exception] = None):
        self.documents = documents
        self.error = error

    def sort(self, key, direction=1):
        self.documents = sorted(self.documents, key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, n):
        self.documents = self.documents[:n]
        return self

    async def to_list(self, length=None):
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.documents if length is None else self.documents[:length]


class FakeResult:
    def __init__(self, deleted_count=0):
        self.deleted_count = deleted_count


class FakeCollection:
    """Just enough of a Motor collection, including unique compound indexes."""

    def __init__(self, name: str = "applications"):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.unique_keys: Optional[List[str]] = None
        self.index_calls = 0
        self.error: Optional[Exception] = None
        self.delay = 0.0

    async def _tick(self):
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

    async def create_index(self, keys, unique=False, name=None):
        await self._tick()
        self.index_calls += 1
        if unique:
            self.unique_keys = [k for k, _ in keys]
        return name

    async def find_one(self, query, projection=None):
        await self._tick()
        for document in self.documents:
            if _matches(document, query):
                return _project(document, projection)
        return None

    def find(self, query, projection=None):
        found = [_project(d, projection) for d in self.documents if _matches(d, query)]
        return FakeCursor(found, self.error)

    async def insert_one(self, document):
        await self._tick()
        if self.unique_keys:
            pair = {k: document.get(k) for k in self.unique_keys}
            if any(_matches(existing, pair) for existing in self.documents):
                raise DuplicateKeyError("E11000 duplicate key error", code=11000)
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))

    async def find_one_and_update(self, query, update, upsert=False, projection=None, return_document=None):
        await self._tick()
        target = next((d for d in self.documents if _matches(d, query)), None)
        if target is None:
            if not upsert:
                return None
            target = dict(query)
            self.documents.append(target)
        for key, amount in update.get("$inc", {}).items():
            target[key] = target.get(key, 0) + amount
        target.update(update.get("$set", {}))
        return _project(target, projection)

    async def delete_one(self, query):
        await self._tick()
        for i, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[i]
                return FakeResult(deleted_count=1)
        return FakeResult(deleted_count=0)


class FakePublisher:
    def __init__(self):
        self.applications: List[Dict[str, Any]] = []
        self.jobs: List[Dict[str, Any]] = []
        self.fail = False

    async def publish_application(self, document):
        if self.fail:
            raise PublicationError("bus unreachable")
        self.applications.append(document)
        return "1-0"

    async def publish_job(self, job):
        if self.fail:
            raise PublicationError("bus unreachable")
        self.jobs.append(job)
        return "1-0"


@pytest.fixture
def applications_collection():
    collection = FakeCollection("applications")
    asyncio.run(ApplicationRepo(collection).ensure_unique_index())
    return collection


@pytest.fixture
def publisher():
    return FakePublisher()


@pytest.fixture
def application_service(applications_collection, publisher):
    return ApplicationService(ApplicationRepo(applications_collection, timeout_seconds=1.0), publisher)


@pytest.fixture
def jobs_collection():
    return FakeCollection("jobs")


@pytest.fixture
def job_service(jobs_collection, publisher):
    return JobService(JobRepo(jobs_collection, FakeCollection("counters"), timeout_seconds=1.0), publisher)


@pytest.fixture
def client(application_service, job_service):
    app.dependency_overrides[get_application_service] = lambda: application_service
    app.dependency_overrides[get_job_service] = lambda: job_service
    yield TestClient(app)
    app.dependency_overrides.clear()
