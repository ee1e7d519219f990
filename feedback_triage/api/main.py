"""
Feedback triage API
FastAPI application entry point
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from feedback_triage.api import analytics, feedback
from feedback_triage.config.settings import Settings
from feedback_triage.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle."""
    configure_logging(app.state.config.log_level)
    logger.info("Feedback triage API starting")

    yield

    logger.info("Feedback triage API stopped")


async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters get the same 400 envelope as rejected submissions."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"{message}: {location}: {errors[0].get('msg', '')}"
    return JSONResponse(status_code=400, content={"success": False, "error": message})


def create_app(config: Optional[Settings] = None, service: Optional[FeedbackService] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Application settings. If None, loaded from the environment.
        service: Feedback service shared by all requests. If None, each
            request gets its own service and SQL connection.
    """
    config = config or Settings()

    app = FastAPI(
        title="Feedback Triage API",
        description="Customer feedback intake with sentiment, tone, priority and repeat-issue analysis",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.feedback_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Served under /api and at the root
    for router in (feedback.router, analytics.router):
        app.include_router(router, prefix="/api")
        app.include_router(router)

    @app.get("/health")
    def health_check():
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


def main():
    import uvicorn

    config = Settings()
    configure_logging(config.log_level)
    uvicorn.run(
        "feedback_triage.api.main:create_app",
        factory=True,
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
