# Student portal backend entrypoint.

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api import courses
from backend.app.api import enrollments
from backend.app.api import login
from backend.app.api import metrics
from backend.app.api import preferences
from backend.app.api import register
from backend.app.api import study_sessions
from backend.app.core.dev_seed import ensure_dev_data
from backend.app.core.settings import get_settings
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(preferences.router)
app.include_router(courses.router)
app.include_router(enrollments.router)
app.include_router(study_sessions.router)
app.include_router(metrics.router)


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def prepare_database():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_dev_data(db)
    finally:
        db.close()
    logger.info("%s started (%s)", settings.app_name, settings.environment)
