#!/usr/bin/env python3

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from biblioteca.routes import api, books, members, loans
from biblioteca.configs import OPTIONS, LOG_LEVEL, CORS_ORIGINS, SEED_DATA
from biblioteca.core.db import engine, init_db, SessionLocal
from biblioteca.core.exceptions import BibliotecaAPIError
from biblioteca.core.seed import seed_demo_data
from biblioteca.core.utils import utcnow
from biblioteca import __version__ as VERSION

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

QUIET_PATHS = {"/health"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(engine)
    if SEED_DATA:
        session = SessionLocal()
        try:
            seed_demo_data(session)
        finally:
            session.close()
    yield


app = FastAPI(
    title="Biblioteca API",
    description="Biblioteca: books, members and loans for a small library",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    if request.url.path not in QUIET_PATHS:
        elapsed = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f}ms)")
    return response


def error_response(request: Request, status_code: int, message: str, details=None):
    error = {"message": message, "status": status_code}
    if details:
        error["details"] = details
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "timestamp": utcnow().isoformat(),
            "path": request.url.path,
            "method": request.method,
        },
    )


@app.exception_handler(BibliotecaAPIError)
async def biblioteca_error_handler(request: Request, exc: BibliotecaAPIError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return error_response(request, exc.status_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
        details.append(f"{field or 'body'}: {error['msg']}")
    return error_response(request, status.HTTP_400_BAD_REQUEST, "Invalid request data", details)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route not found: {request.method} {request.url.path}"
    return error_response(request, exc.status_code, str(message))


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    if isinstance(exc, OperationalError):
        logger.error(f"Database unavailable: {exc}")
        return error_response(request, status.HTTP_503_SERVICE_UNAVAILABLE, "Unable to reach the database")
    logger.exception("Unhandled database error")
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")


app.include_router(api.router)
app.include_router(books.router, prefix="/api/libri", tags=["books"])
app.include_router(members.router, prefix="/api/utenti", tags=["members"])
app.include_router(loans.router, prefix="/api/prestiti", tags=["loans"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("biblioteca.app:app", **OPTIONS)
