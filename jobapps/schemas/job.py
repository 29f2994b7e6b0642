# ========================================
# jobapps/schemas/job.py
# ========================================

from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Literal
from datetime import datetime

from jobapps.utils.naming import to_camel_key

JobStatus = Literal["open", "closed"]


class CamelModel(BaseModel):
    """Accepts and renders camel-delimited keys, like application documents."""
    model_config = ConfigDict(alias_generator=to_camel_key, populate_by_name=True)


# 1. Input: What the Recruiter sends
class JobCreate(CamelModel):
    title: str
    overview: str
    description: str
    company: str = "Engineering"
    skills: str = "React, Node.js, TypeScript, AWS, MongoDB"  # comma-separated
    experience: str = "5+ yrs React development, Team leadership"
    location: Optional[str] = None
    status: JobStatus = "open"
    posted_date: Optional[datetime] = None
    salary_range: str = "$120,000 - $160,000"
    recruiter_id: Optional[int] = None
    benefits_and_perks: str = "Health, Dental, Vision, 401k"


# 2. Input: Update existing job
class JobUpdate(CamelModel):
    """Only the fields that are sent get changed"""
    title: Optional[str] = None
    overview: Optional[str] = None
    description: Optional[str] = None
    company: Optional[str] = None
    skills: Optional[str] = None
    experience: Optional[str] = None
    location: Optional[str] = None
    status: Optional[JobStatus] = None
    salary_range: Optional[str] = None
    recruiter_id: Optional[int] = None
    benefits_and_perks: Optional[str] = None


# 3. Output: Basic Response
class JobResponse(JobCreate):
    id: int
    posted_date: datetime
    updated_at: Optional[datetime] = None


# 4. Output: Detailed Response with Extra Info
class JobDetailResponse(JobResponse):
    days_posted_ago: int = 0


# 5. Downstream message published for every new job
class JobMessage(CamelModel):
    job_id: int
    title: str
    overview: str
    description: str
    skills: List[str]
    experience: str
