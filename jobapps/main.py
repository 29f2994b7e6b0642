# ========================================
# jobapps/main.py - APP ENTRYPOINT
# ========================================

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobapps import config
from jobapps.database import connect_to_mongo, close_mongo_connection
from jobapps.messaging.publisher import connect_publisher
from jobapps.repos.application_repo import ApplicationRepo
from jobapps.repos.job_repo import JobRepo
from jobapps.services.application_service import ApplicationService
from jobapps.services.job_service import JobService

# ===========================
# IMPORT ALL ROUTERS
# ===========================
from jobapps.routes.application import router as application_router
from jobapps.routes.job import router as job_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = config.LOG_LEVEL):
    if logging.getLogger().handlers:
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


configure_logging()

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="Jobs & Applications API",
    description="Job postings and candidate applications, published to the message bus",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ===========================
# CORS MIDDLEWARE
# ===========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# STARTUP / SHUTDOWN
# ===========================

@app.on_event("startup")
async def startup():
    """Connect MongoDB and the bus, build the services"""
    client, db = await connect_to_mongo()
    publisher = connect_publisher()

    application_repo = ApplicationRepo(db[config.APPLICATIONS_COLLECTION], config.REQUEST_TIMEOUT_SECONDS)
    await application_repo.ensure_unique_index()
    job_repo = JobRepo(db[config.JOBS_COLLECTION], db["counters"], config.REQUEST_TIMEOUT_SECONDS)

    app.state.mongo_client = client
    app.state.publisher = publisher
    app.state.application_service = ApplicationService(application_repo, publisher)
    app.state.job_service = JobService(job_repo, publisher)
    logger.info("Service ready")


@app.on_event("shutdown")
async def shutdown():
    publisher = getattr(app.state, "publisher", None)
    if publisher is not None:
        await publisher.close()
    close_mongo_connection(getattr(app.state, "mongo_client", None))

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(application_router)
app.include_router(job_router)

# ===========================
# ROOT ENDPOINTS
# ===========================

@app.get("/")
async def root():
    """API root endpoint with endpoint summary"""
    return {
        "status": "✅ Jobs & Applications API Running",
        "version": "1.0.0",
        "documentation": "/docs",
        "endpoints": {
            "applications": [
                "/applications (POST)",
                "/applications/{id}",
                "/applications/job/{id}",
                "/applications/candidate/{id}",
            ],
            "jobs": [
                "/jobs (GET/POST)",
                "/jobs/{id} (GET/PUT/DELETE)",
            ],
        },
        "topics": {
            "applications": config.APPLICATION_TOPIC,
            "jobs": config.JOB_TOPIC,
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": "1.0.0",
    }
