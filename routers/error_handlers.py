# routers/error_handlers.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from helpers.exceptions import (
    ConfigurationMismatch,
    DateParseError,
    PageDataError,
    SitemapError,
    SitemapIOError,
)

logger = logging.getLogger("sitemap.errors")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status_code": status_code, "detail": message})


# ---------------------------------------------------------
# Unparseable lastmod in the page dataset (422)
# ---------------------------------------------------------
async def date_parse_error_handler(request: Request, exc: DateParseError):
    logger.warning(f"Bad lastmod while serving {request.url.path}: {exc}")
    return _error(422, str(exc))


# ---------------------------------------------------------
# Output type misuse (500)
# ---------------------------------------------------------
async def configuration_mismatch_handler(request: Request, exc: ConfigurationMismatch):
    logger.error(f"Configuration mismatch on {request.url.path}: {exc}")
    return _error(500, str(exc))


# ---------------------------------------------------------
# Storage failures (503)
# ---------------------------------------------------------
async def sitemap_io_error_handler(request: Request, exc: SitemapIOError):
    logger.error(f"Sitemap storage failure on {request.url.path}: {exc}", exc_info=True)
    return _error(503, "Sitemap storage unavailable")


# ---------------------------------------------------------
# Any other sitemap failure (500)
# ---------------------------------------------------------
async def sitemap_error_handler(request: Request, exc: SitemapError):
    logger.error(f"Sitemap error on {request.url.path}: {exc}", exc_info=True)
    return _error(500, str(exc))


# ---------------------------------------------------------
# Invalid page dataset rows (422)
# ---------------------------------------------------------
async def page_data_error_handler(request: Request, exc: PageDataError):
    logger.warning(f"Invalid page data while serving {request.url.path}: {exc}")
    return _error(422, "Invalid page data")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DateParseError, date_parse_error_handler)
    app.add_exception_handler(ConfigurationMismatch, configuration_mismatch_handler)
    app.add_exception_handler(SitemapIOError, sitemap_io_error_handler)
    app.add_exception_handler(SitemapError, sitemap_error_handler)
    app.add_exception_handler(PageDataError, page_data_error_handler)
