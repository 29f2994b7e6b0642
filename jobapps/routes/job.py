# ========================================
# jobapps/routes/job.py
# ========================================

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List

from jobapps.dependencies import get_job_service
from jobapps.errors import JobNotFoundError, StorageUnavailableError
from jobapps.schemas.job import JobCreate, JobDetailResponse, JobResponse, JobUpdate
from jobapps.services.job_service import JobService

router = APIRouter(tags=["Jobs"])


# ✅ 1. GET ALL JOBS
@router.get("/jobs", response_model=List[JobResponse])
async def get_all_jobs(
    limit: int = Query(100, ge=1, le=500, description="Maximum number of results"),
    service: JobService = Depends(get_job_service),
):
    try:
        return await service.list_jobs(limit)
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to fetch jobs")


# ✅ 2. GET SINGLE JOB DETAILS
@router.get("/jobs/{job_id}", response_model=JobDetailResponse)
async def get_job_details(job_id: int, service: JobService = Depends(get_job_service)):
    """Job details plus how many days ago it was posted."""
    try:
        return await service.get_job(job_id)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to fetch job")


# ✅ 3. POST A JOB
@router.post("/jobs", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(job: JobCreate, service: JobService = Depends(get_job_service)):
    """Create a job posting and announce it on the job topic."""
    try:
        return await service.create_job(job)
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to create job")


# ✅ 4. UPDATE/EDIT JOB
@router.put("/jobs/{job_id}", response_model=JobResponse)
async def update_job(job_id: int, job_update: JobUpdate, service: JobService = Depends(get_job_service)):
    try:
        return await service.update_job(job_id, job_update)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to update job")


# ✅ 5. DELETE JOB
@router.delete("/jobs/{job_id}")
async def delete_job(job_id: int, service: JobService = Depends(get_job_service)):
    try:
        await service.delete_job(job_id)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to delete job")

    return {"message": "Job deleted successfully"}
