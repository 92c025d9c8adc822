# Hagwon Manager backend entrypoint.

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hagwon.app.api import attendance
from hagwon.app.api import auth
from hagwon.app.api import classes
from hagwon.app.api import dashboard
from hagwon.app.api import guardians
from hagwon.app.api import invoices
from hagwon.app.api import payments
from hagwon.app.api import students
from hagwon.app.core.errors import AppError, handle_error
from hagwon.app.core.logging import configure_logging
from hagwon.app.core.settings import get_settings
from hagwon.app.db.base import Base
from hagwon.app.db.session import engine

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name, version=settings.api_version)

origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(students.router)
app.include_router(guardians.router)
app.include_router(classes.router)
app.include_router(attendance.router)
app.include_router(invoices.router)
app.include_router(payments.router)
app.include_router(dashboard.router)


def _error_body(message: str, code: str, details=None) -> dict:
    body = {"error": message, "code": code}
    if details is not None:
        body["details"] = details
    return body


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    info = handle_error(exc)
    if info.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, info.message)
    else:
        logger.info("%s %s -> %s %s", request.method, request.url.path, info.status_code, info.code)
    return JSONResponse(status_code=info.status_code, content=_error_body(info.message, info.code, info.details))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    logger.info("%s %s -> 400 VALIDATION_ERROR", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content=_error_body("Validation failed", "VALIDATION_ERROR", details),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    info = handle_error(exc)
    return JSONResponse(status_code=info.status_code, content=_error_body(info.message, info.code))


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def create_tables():
    logger.info("Starting %s %s (%s)", settings.app_name, settings.api_version, settings.environment)
    Base.metadata.create_all(bind=engine)
