"""
app/api/error_handlers.py

Renders typed ingestion failures as JSON responses.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.errors import MenuIngestionError

logger = logging.getLogger(__name__)


async def menu_ingestion_error_handler(request: Request, exc: MenuIngestionError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Menu request failed path=%s code=%s: %s", request.url.path, exc.code, exc.message)
    else:
        logger.info("Menu request rejected path=%s code=%s: %s", request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_error_handlers(application: FastAPI) -> None:
    application.add_exception_handler(MenuIngestionError, menu_ingestion_error_handler)
