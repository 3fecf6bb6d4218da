"""
formrelay Backend API
FastAPI application that relays website contact and career forms as email.
"""

import logging
from typing import List

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from formrelay.config import get_settings
from formrelay.errors import SubmissionError
from formrelay.routers import submissions

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

ENDPOINTS = ["/send-email", "/send-career-email"]

app = FastAPI(
    title="formrelay API",
    description="Relays contact and job application forms through Resend",
    version="0.1.0",
)


def get_cors_origins() -> List[str]:
    """
    Build the list of allowed CORS origins.

    Reads CORS_ORIGINS (comma-separated), e.g.:
        CORS_ORIGINS=https://navabharathtechnologies.com,https://www.navabharathtechnologies.com

    When unset every origin is allowed, which is how the public site forms
    have always been served.
    """
    return get_settings().cors_origins or ["*"]


# "*" cannot be combined with credentials.
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(submissions.router, tags=["submissions"])


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------

@app.exception_handler(SubmissionError)
async def submission_error_handler(request: Request, exc: SubmissionError) -> JSONResponse:
    """Render pipeline failures as ``{success: false, message}``."""
    if exc.status_code >= 500:
        logger.debug(f"{request.url.path} failed ({exc.error_code}): {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bodies FastAPI cannot parse (non-JSON, wrong types) are a 400, not a 422."""
    logger.info(f"Unparseable request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request body."},
    )


@app.on_event("startup")
async def log_startup() -> None:
    """Log where the API listens and warn early when mail cannot be sent."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.warning(
            "RESEND_API_KEY is not set; form submissions will be answered with 503"
        )
    logger.info(
        "formrelay API running at http://localhost:%s (uploads in %s)",
        settings.port,
        settings.upload_dir,
    )


@app.get("/")
async def root():
    return {"status": "Server is running", "endpoints": ENDPOINTS}


def run() -> None:
    """Console entry point: serve the app on PORT (default 3000)."""
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    run()
