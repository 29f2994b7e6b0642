# ========================================
# jobapps/schemas/application.py
# ========================================

from pydantic import BaseModel, ConfigDict

from jobapps.utils.naming import to_camel_key


# 1. Downstream message published for every new application
class ApplicationMessage(BaseModel):
    """Fixed schema consumers of the application topic rely on."""
    model_config = ConfigDict(alias_generator=to_camel_key, populate_by_name=True)

    application_id: str
    job_id: str
    resume_url: str = ""
    candidate_id: str


# 2. Error body (documentation only; FastAPI renders HTTPException as {"detail": ...})
class ErrorResponse(BaseModel):
    detail: str
