import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import models  # noqa: F401  (register tables with Base.metadata)
from app.bootstrap import seed_sample_data
from app.core import config
from app.core.errors import EventAppError
from app.core.logging_config import setup_logging
from app.database.db import Base, SessionLocal, engine
from app.routes import auth, events, notifications, registrations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables (in production, use migrations such as Alembic)
    Base.metadata.create_all(bind=engine)
    if config.SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()
    yield


async def domain_error_handler(request: Request, exc: EventAppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render malformed input as a field-tagged 400, tagged with the first offending field."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    # loc is (source, field, ...); a body that is missing entirely has no field
    loc = [str(part) for part in first.get("loc", ()) if not isinstance(part, int)]
    field = loc[1] if len(loc) > 1 else "general"
    return JSONResponse(
        status_code=400,
        content={"error": field, "message": first.get("msg", "Invalid input")},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "general", "message": "Server error"})


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="Event Registration API", lifespan=lifespan)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(EventAppError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include the routers
    app.include_router(auth.router)
    app.include_router(events.router)
    app.include_router(registrations.router)
    app.include_router(notifications.router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    return app


app = create_app()
