from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import auth, health, tasks, teams, users
from app.config import settings
from app.errors import TaskManagementError, Unauthorized
from app.logger import get_logger, setup_logging
from app.seed import ensure_seed_users
from db.session import get_db_session, init_db

logger = get_logger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    setup_logging(settings.log_level, settings.log_file)
    logger.info("Starting application...")

    init_db()
    if settings.seed_default_users:
        with get_db_session() as db:
            ensure_seed_users(db)
        logger.info("Default accounts ensured")

    yield

    logger.info("Application shutdown complete")


async def handle_domain_error(request: Request, exc: TaskManagementError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed input is a plain 400 with the validation messages as explanation
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Task Management API",
        description="Users, teams and tasks with role-based access and JWT login",
        version="1.0.0",
        lifespan=app_lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TaskManagementError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(teams.router)
    app.include_router(tasks.router)

    return app


app = create_app()
