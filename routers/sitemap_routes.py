# routers/sitemap_routes.py
# ---------------------------------------------------------------
# Sitemap documents served straight from memory.
# Uses config_paths for the domain/cap and app_state.PAGES_DF
# as the page dataset.
# ---------------------------------------------------------------

from fastapi import APIRouter, HTTPException, Response
import logging

import app_state
import config_paths
from helpers.pages_loader import add_pages, records_from_frame
from helpers.sitemap_utils import OutputType
from sitemap_tool import Sitemap

logger = logging.getLogger("sitemap.routes")
router = APIRouter(tags=["Sitemap"])

# route names below assume this base name
HTTP_FILENAME = "sitemap"


def build_string_sitemap() -> Sitemap:
    """Run the page dataset through a STRING-mode session and return it closed."""
    sitemap = Sitemap(
        config_paths.SITEMAP_DOMAIN,
        OutputType.STRING,
        filename=HTTP_FILENAME,
        items_per_sitemap=config_paths.SITEMAP_ITEMS_PER_FILE,
    )
    with sitemap:
        count = add_pages(sitemap, records_from_frame(app_state.PAGES_DF))
    logger.debug("Built %d sitemap document(s) from %d pages", sitemap.document_count, count)
    return sitemap


def _xml(content: str) -> Response:
    return Response(content=content, media_type="application/xml")


def _document(number: int) -> Response:
    documents = build_string_sitemap().get_sitemap_strings()
    if number >= len(documents):
        raise HTTPException(status_code=404, detail=f"Sitemap document {number} does not exist")
    return _xml(documents[number])


# ---------------------------------------------------------------
# Index
# ---------------------------------------------------------------
@router.get("/sitemap-index.xml", response_class=Response, include_in_schema=False)
def sitemap_index():
    """Index of every sitemap document the page dataset produces."""
    sitemap = build_string_sitemap()
    return _xml(sitemap.create_sitemap_index(config_paths.SITEMAP_INDEX_LOC))


# ---------------------------------------------------------------
# Documents
# ---------------------------------------------------------------
@router.get("/sitemap.xml", response_class=Response, include_in_schema=False)
def sitemap_first():
    return _document(0)


@router.get("/sitemap-{number:int}.xml", response_class=Response, include_in_schema=False)
def sitemap_numbered(number: int):
    # document 0 is only served as /sitemap.xml
    if number < 1:
        raise HTTPException(status_code=404, detail="Not found")
    return _document(number)
