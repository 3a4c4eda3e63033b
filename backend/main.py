import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.router import limiter, router
from config import settings
from services.errors import (
    AIServiceUnavailableError,
    EmptyInputError,
    InvalidInputError,
    JobTrackerError,
    ParseFailure,
    UnsupportedFileTypeError,
)

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Job Tracker Assistant API",
    description="Job-posting extraction, resume comparison and ATS resume generation",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "data": message})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(JobTrackerError)
async def job_tracker_error_handler(request: Request, exc: JobTrackerError) -> JSONResponse:
    if isinstance(exc, ParseFailure):
        logger.warning("Unparseable model output on %s (%s)", request.url.path, exc.reason)
        return _error(502, "Could not parse the AI response; please retry.")
    if isinstance(exc, AIServiceUnavailableError):
        return _error(503, str(exc))
    if isinstance(exc, (EmptyInputError, InvalidInputError, UnsupportedFileTypeError)):
        return _error(400, str(exc))
    logger.error("Service error on %s: %s", request.url.path, exc, exc_info=True)
    return _error(500, "Internal server error" if not settings.debug else str(exc))


app.include_router(router)
