"""
FastAPI dependency providers.

Services are built once at startup and kept on ``app.state``; tests swap
them out with ``app.dependency_overrides``.
"""

from fastapi import HTTPException, Request

from jobapps.services.application_service import ApplicationService
from jobapps.services.job_service import JobService


def _from_state(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(status_code=503, detail="Service is starting up")
    return service


def get_application_service(request: Request) -> ApplicationService:
    return _from_state(request, "application_service")


def get_job_service(request: Request) -> JobService:
    return _from_state(request, "job_service")
