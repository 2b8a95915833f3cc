import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.api import router as api_router
from .core.config import settings
from .core.errors import ConflictError, DomainError, NotFoundError, ValidationError
from .core.logging_setup import setup_logging
from .db.session import create_db_and_tables

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: 422,
    ConflictError: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    # Create tables on startup
    create_db_and_tables()
    logger.info("%s started, tag attach policy=%s", settings.PROJECT_NAME, settings.TAG_ATTACH_POLICY)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for the Taskboard task manager",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware for the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    code = next(
        (c for cls, c in _ERROR_STATUS.items() if isinstance(exc, cls)),
        status.HTTP_400_BAD_REQUEST,
    )
    return JSONResponse(status_code=code, content={"detail": exc.message})


# Include API routers
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"message": f"{settings.PROJECT_NAME} API"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}
