# FastAPI app entry point
# Run with: uvicorn app.main:app --reload --host 0.0.0.0 --port 8000
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import employees, users
from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import setup_logging
from app.core.middleware import RequestLoggingMiddleware
from app.db.session import init_db

setup_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL, settings.LOG_FILE)
LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    LOGGER.info("Staff Directory API started")
    yield
    LOGGER.info("Staff Directory API stopped")


app = FastAPI(title="Staff Directory API", version="0.1.0", lifespan=lifespan)

app.add_middleware(RequestLoggingMiddleware)

# Configure CORS (added last so it wraps everything else)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(users.router, prefix=settings.API_PREFIX, tags=["users"])
app.include_router(employees.router, prefix=settings.API_PREFIX, tags=["employees"])


@app.get("/")
async def root():
    return {"message": "Staff Directory API"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
