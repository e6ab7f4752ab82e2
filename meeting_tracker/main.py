import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from meeting_tracker.core.config import settings
from meeting_tracker.core.exceptions import (
    AppException,
    app_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)
from meeting_tracker.api.v1 import (
    action_items,
    auth,
    business_requirements,
    data_chunks,
    documents,
    health,
    meetings,
    processing,
    projects,
    tasks,
)

logging.basicConfig(
    level=logging.DEBUG if settings.ENV == "development" else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# pdfminer logs every parsed object at DEBUG
for noisy in ("pdfminer", "pdfplumber", "httpx", "httpcore", "multipart", "python_multipart", "passlib"):
    logging.getLogger(noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

DEV_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Meeting transcripts in, action items, tasks and requirements out",
    version="0.1.0",
    docs_url="/api/docs" if settings.ENV == "development" else None,
    redoc_url="/api/redoc" if settings.ENV == "development" else None,
)

app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()] or DEV_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
)

for module in (
    auth,
    health,
    projects,
    meetings,
    documents,
    processing,
    action_items,
    tasks,
    business_requirements,
    data_chunks,
):
    app.include_router(module.router, prefix=settings.API_V1_PREFIX)

logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENV} mode")


@app.get("/")
def read_root():
    return {"message": "OK", "service": settings.PROJECT_NAME, "version": "0.1.0"}
