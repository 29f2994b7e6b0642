# ========================================
# jobapps/routes/application.py
# ========================================

from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import Any, Dict, List

from jobapps.dependencies import get_application_service
from jobapps.errors import (
    BadPayloadError,
    DuplicateApplicationError,
    MissingRequiredFieldError,
    StorageUnavailableError,
)
from jobapps.schemas.application import ErrorResponse
from jobapps.services.application_service import ApplicationService

router = APIRouter(tags=["Applications"])


# ✅ 1. SUBMIT APPLICATION
@router.post(
    "/applications",
    status_code=status.HTTP_201_CREATED,
    response_model=Dict[str, Any],
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_application(
    request: Request,
    service: ApplicationService = Depends(get_application_service),
):
    """
    Submit an application. The body is any JSON object with at least
    jobId and candidateId; extra fields are stored as sent.
    """
    body = await request.body()

    try:
        return await service.create_application(body)
    except (BadPayloadError, MissingRequiredFieldError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateApplicationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to create application")


# ✅ 2. APPLICATIONS FOR A JOB
@router.get("/applications/job/{job_id}", response_model=List[Dict[str, Any]])
async def get_applications_by_job(
    job_id: int,
    service: ApplicationService = Depends(get_application_service),
):
    """All applications submitted for one job."""
    try:
        return await service.list_by_job(job_id)
    except StorageUnavailableError as e:
        raise HTTPException(status_code=500, detail=str(e))


# ✅ 3. APPLICATIONS OF A CANDIDATE
@router.get("/applications/candidate/{candidate_id}", response_model=List[Dict[str, Any]])
async def get_applications_by_candidate(
    candidate_id: int,
    service: ApplicationService = Depends(get_application_service),
):
    try:
        return await service.list_by_candidate(candidate_id)
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to get applications")


# ✅ 4. SINGLE APPLICATION
@router.get("/applications/{application_id}", response_model=Dict[str, Any])
async def get_application(
    application_id: str,
    service: ApplicationService = Depends(get_application_service),
):
    """Returns {} when no application has this id."""
    try:
        return await service.get_by_id(application_id)
    except StorageUnavailableError as e:
        raise HTTPException(status_code=500, detail=str(e))
