"""FastAPI application for the band allocation API.

Every response, errors included, is a JSON object with a ``success`` flag
and carries an open CORS allow-origin header.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .controllers import entries, users
from .errors import BandAllocationError
from .logging_config import setup_logging

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

app = FastAPI(title=settings.project_name)


@app.middleware("http")
async def open_cors(request: Request, call_next):
    # Browser preflights are answered by CORSMiddleware; this covers bare OPTIONS
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    response = await call_next(request)
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _error_response(status_code: int, content: dict, headers: dict = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(BandAllocationError)
async def band_allocation_error_handler(request: Request, exc: BandAllocationError):
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(level, f"{request.method} {request.url.path} failed: {exc.message}")
    return _error_response(exc.status_code, exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"][1:]) or error["loc"][0]
        if error["type"] == "missing":
            problems.append(f"Missing required field: {field}")
        else:
            problems.append(f"Invalid {field}: {error['msg']}")

    message = "; ".join(problems) or "Invalid request"
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return _error_response(400, {"success": False, "error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(f"{request.method} {request.url.path} failed: {exc.status_code} {exc.detail}")
    return _error_response(exc.status_code, {"success": False, "error": exc.detail}, exc.headers)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    return _error_response(500, {"success": False, "error": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # Runs outside the middleware stack, so CORS headers are set here
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(500, {"success": False, "error": str(exc)}, {"Access-Control-Allow-Origin": "*"})


# Include routers
app.include_router(entries.router, prefix="/api/entries", tags=["entries"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
