# ========================================
# jobapps/config.py - ENVIRONMENT SETTINGS
# ========================================

import os
from pathlib import Path
from dotenv import load_dotenv

# .env lives next to the package root
env_path = Path(__file__).resolve().parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    load_dotenv()

# ===========================
# MONGODB
# ===========================
MONGO_URI = os.getenv("MONGO_URI")
MONGO_DB = os.getenv("MONGO_DB", "jobsdb")
APPLICATIONS_COLLECTION = os.getenv("APPLICATIONS_COLLECTION", "applications")
JOBS_COLLECTION = os.getenv("JOBS_COLLECTION", "jobs")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", 5000))

# Upper bound for any single store call made while serving a request
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", 10))

# ===========================
# MESSAGE BUS
# ===========================
# Empty REDIS_URL disables publishing
REDIS_URL = os.getenv("REDIS_URL", "")
APPLICATION_TOPIC = os.getenv("APPLICATION_TOPIC", "application")
JOB_TOPIC = os.getenv("JOB_TOPIC", "jobs")
BUS_TIMEOUT_SECONDS = float(os.getenv("BUS_TIMEOUT_SECONDS", 5))
STREAM_MAXLEN = int(os.getenv("STREAM_MAXLEN", 100000))

# ===========================
# HTTP / LOGGING
# ===========================
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
