import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from lawvault.config import Settings, get_settings
from lawvault.database import build_engine, build_session_factory, create_tables
from lawvault.exceptions import LawVaultError
from lawvault.logging_config import setup_logging
from lawvault.routers import appointments, lawyers
from lawvault.routers import auth as auth_router
from lawvault.services.account_service import AccountService
from lawvault.services.appointment_service import AppointmentService
from lawvault.services.upload_service import UPLOAD_URL_PREFIX, UploadService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables
    await create_tables(app.state.engine)
    logger.info("Database ready")
    yield
    # Shutdown
    await app.state.engine.dispose()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LawVaultError)
    async def handle_lawvault_error(request: Request, exc: LawVaultError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        # Unknown routes, wrong methods and unparseable multipart bodies
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": "Invalid request"})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        # Details stay in the server log
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Something went wrong"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="LawVault API",
        description="Accounts, lawyer directory and appointment booking for a law firm",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Storage and services are built once and shared read-only by all requests
    engine = build_engine(settings.database_url)
    uploads = UploadService(settings.upload_dir)
    uploads.ensure_dir()
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.account_service = AccountService(uploads, bcrypt_rounds=settings.bcrypt_rounds)
    app.state.appointment_service = AppointmentService(
        enforce_unique_slots=settings.enforce_unique_slots,
    )

    origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")

    app.include_router(auth_router.router, tags=["Auth"])
    app.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
    app.include_router(lawyers.router, prefix="/lawyers", tags=["Lawyers"])

    @app.get("/")
    async def root():
        return {"message": "Lawfirm server is running"}

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
