#!/usr/bin/env python

"""
    Service routes for Biblioteca: the API index, liveness and
    readiness checks.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import time
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from biblioteca import __version__ as VERSION
from biblioteca.configs import ENVIRONMENT
from biblioteca.core.api import BibliotecaAPI, get_api
from biblioteca.core.utils import utcnow

STARTED_AT = time.monotonic()

router = APIRouter()


@router.get("/")
@router.get("/api")
async def home():
    return {
        "success": True,
        "message": "Biblioteca API",
        "version": VERSION,
        "timestamp": utcnow().isoformat(),
        "endpoints": {
            "books": "/api/libri",
            "members": "/api/utenti",
            "loans": "/api/prestiti",
            "health": "/health",
            "status": "/api/status",
        },
    }


@router.get("/health")
async def health():
    return {
        "status": "OK",
        "service": "Biblioteca API",
        "version": VERSION,
        "timestamp": utcnow().isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "environment": ENVIRONMENT,
    }


@router.get("/api/status")
async def service_status(api: BibliotecaAPI = Depends(get_api)):
    database_ok = api.database_ok()
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "success": database_ok,
            "status": "OK" if database_ok else "ERROR",
            "timestamp": utcnow().isoformat(),
            "services": {
                "api": "OK",
                "database": "OK" if database_ok else "ERROR",
            },
            "version": VERSION,
            "environment": ENVIRONMENT,
        },
    )
