# config_paths.py
# -----------------------------------------------------
# Shared filesystem paths and sitemap defaults.
# Safe to import from helpers (no circular imports).
# Every default can be overridden from the environment.
# -----------------------------------------------------

import os
from pathlib import Path

# Base and directories
BASE_DIR: Path = Path(__file__).resolve().parent
DATA_DIR: Path = Path(os.getenv("SITEMAP_DATA_DIR", BASE_DIR / "data"))
OUTPUT_DIR: Path = Path(os.getenv("SITEMAP_OUTPUT_DIR", BASE_DIR / "static"))
LOG_DIR: Path = Path(os.getenv("SITEMAP_LOG_DIR", BASE_DIR / "logs"))

# Data files
PAGES_FILE: Path = Path(os.getenv("SITEMAP_PAGES_FILE", DATA_DIR / "pages.csv"))

# Sitemap defaults
SITEMAP_DOMAIN: str = os.getenv("SITEMAP_DOMAIN", "https://example.com")
SITEMAP_FILENAME: str = os.getenv("SITEMAP_FILENAME", "sitemap")
SITEMAP_ITEMS_PER_FILE: int = int(os.getenv("SITEMAP_ITEMS_PER_FILE", "50000"))
SITEMAP_INDEX_LOC: str = os.getenv("SITEMAP_INDEX_LOC", SITEMAP_DOMAIN + "/")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
