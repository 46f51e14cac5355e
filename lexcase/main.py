from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
import logging

from lexcase.api import auth, cases, documents, notes, speeches
from lexcase.config import Settings, settings
from lexcase.database import Database
from lexcase.schemas.common import field_label
from lexcase.services.google import GoogleVerifier
from lexcase.services.storage import StorageService
from lexcase.utils.errors import LexCaseError
from lexcase.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# Fields whose format errors get a fixed message instead of the validator's
FORMAT_MESSAGES = {
    "email": "Please provide a valid email",
}


def _error_body(message: str) -> dict:
    return {"success": False, "message": message, "data": None}


def first_validation_message(errors) -> str:
    """Turn the first request validation error into a readable sentence."""
    if not errors:
        return "Invalid request"

    error = errors[0]
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
    field = loc[-1] if loc else None
    label = field_label(field) if field else "Request body"
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type == "missing":
        return f"{label} is required"
    if error_type == "json_invalid":
        return "Request body must be valid JSON"
    if field in FORMAT_MESSAGES:
        return FORMAT_MESSAGES[field]
    if error_type == "value_error":
        if "error" in ctx:
            return str(ctx["error"])
        return error.get("msg", "Invalid request").removeprefix("Value error, ")
    if error_type.startswith("date"):
        return f"{label} must be a valid date"
    if error_type == "enum":
        return f"{label} must be one of: {ctx.get('expected', '')}"
    return f"{label}: {error.get('msg', 'invalid value')}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("[backend] LexCase backend starting...")
    app.state.storage.ensure_directory()
    await app.state.database.create_all()
    logger.info("[backend] Database initialized")
    yield
    # Shutdown
    logger.info("[backend] LexCase backend shutting down...")
    await app.state.database.dispose()


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own store handle and file storage."""
    config = config or settings
    setup_logging("lexcase", level=config.LOG_LEVEL, json_format=config.LOG_JSON)

    app = FastAPI(
        title="LexCase API",
        description="Case management for lawyers: cases, notes, speeches and documents",
        version="0.1.0",
        docs_url="/docs" if config.DEBUG else None,
        redoc_url="/redoc" if config.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.database = Database(config.DATABASE_URL, echo=config.DATABASE_ECHO)
    app.state.storage = StorageService(
        upload_dir=config.UPLOAD_DIR,
        max_size=config.MAX_UPLOAD_SIZE,
        allowed_extensions=config.allowed_extensions_list,
        allowed_content_types=config.allowed_content_types_list,
        public_prefix="/uploads",
    )
    app.state.google_verifier = GoogleVerifier(config.GOOGLE_CLIENT_ID)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LexCaseError)
    async def lexcase_error_handler(request: Request, exc: LexCaseError):
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=_error_body(first_validation_message(exc.errors())))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown routes and wrong methods
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"[backend] Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=_error_body("Internal server error"))

    @app.get("/")
    async def root():
        return {"message": "LexCase API v0.1.0"}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    # Include routers
    app.include_router(auth.router)
    app.include_router(cases.router)
    app.include_router(documents.router)
    app.include_router(notes.router)
    app.include_router(speeches.router)

    app.mount(
        "/uploads",
        StaticFiles(directory=config.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    return app


app = create_app()
