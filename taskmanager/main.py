import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.core import responses
from taskmanager.core.config import settings
from taskmanager.core.database import close_db, init_db
from taskmanager.core.exceptions import AppError
from taskmanager.core.logger import setup_logging
from taskmanager.core.messages import ApiMessages
from taskmanager.routers import auth, health, tasks, users

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Init DB
    init_db()
    logger.info("%s started (%s)", settings.APP_NAME, settings.APP_ENV)
    yield
    close_db()


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    lifespan=lifespan
)


# ============ ERREURS -> ENVELOPPE ============

def format_validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) or ".".join(loc)
        message = err.get("msg", "Invalid value").removeprefix("Value error, ")
        errors.append({"field": field, "message": message})
    return errors


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return responses.error(exc.message, exc.status_code, exc.errors)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return responses.error(ApiMessages.VALIDATION_FAILED, 400, format_validation_errors(exc))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = ApiMessages.ROUTE_NOT_FOUND if exc.status_code == 404 else str(exc.detail)
    return responses.error(message, exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    errors = [{"message": str(exc)}] if settings.is_development else None
    return responses.error(ApiMessages.SERVER_ERROR, 500, errors)


# Routes
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(users.router)
