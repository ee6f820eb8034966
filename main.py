# === Standard Library ===
from contextlib import asynccontextmanager

# === Third-Party Libraries ===
import pandas as pd
from fastapi import FastAPI

import app_state
import config_paths
from helpers.pages_loader import read_pages_csv
from logging_setup import setup_logging, get_app_logger
from routers.error_handlers import register_error_handlers
from routers.sitemap_routes import router as sitemap_router

# --- Logging ---
setup_logging(log_level=config_paths.LOG_LEVEL, log_dir=config_paths.LOG_DIR, log_file_name="app.log")
logger = get_app_logger("sitemap.app")


def load_pages_dataset() -> pd.DataFrame:
    """Load PAGES_FILE into app_state.PAGES_DF; an absent file leaves the dataset empty."""
    pages_file = config_paths.PAGES_FILE
    if not pages_file.exists():
        logger.info("Pages file not found (optional): %s", pages_file)
        app_state.PAGES_DF = pd.DataFrame(columns=app_state.PAGE_COLUMNS)
    else:
        app_state.PAGES_DF = read_pages_csv(pages_file)
    return app_state.PAGES_DF


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Server starting…")
    load_pages_dataset()
    yield
    logger.info("Server stopped")


# App
app = FastAPI(
    title="Sitemap Service",
    docs_url=None,        # disable default /docs
    redoc_url=None,       # disable default /redoc
    openapi_url=None,     # disable default /openapi.json
    lifespan=lifespan,
)
app.include_router(sitemap_router)
register_error_handlers(app)
