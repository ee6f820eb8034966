# helpers/pages_loader.py
# ---------------------------------------------------------------
# Page dataset: CSV -> DataFrame -> validated records -> sitemap.
# Columns: loc (required), priority, changefreq, lastmod.
# ---------------------------------------------------------------

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Iterable, List, Optional, Union

import pandas as pd
from pydantic import BaseModel, Field, ValidationError

from helpers.exceptions import PageDataError
from helpers.sitemap_utils import MAX_PRIORITY, MEDIUM_PRIORITY, MIN_PRIORITY, ChangeFreq

logger = logging.getLogger("sitemap.pages")

# cell values that mean "omit <priority>" rather than "use the default"
SUPPRESS_VALUES = {"none", "null"}


class PageRecord(BaseModel):
    loc: str = Field(min_length=1, max_length=2048)
    priority: Optional[Annotated[float, Field(ge=MIN_PRIORITY, le=MAX_PRIORITY)]] = MEDIUM_PRIORITY
    changefreq: Optional[ChangeFreq] = None
    lastmod: Optional[str] = None


def read_pages_csv(path: Union[str, Path]) -> pd.DataFrame:
    """Read a pages CSV keeping every cell as text; empty cells become ""."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip().lower() for c in df.columns]
    if "loc" not in df.columns:
        raise PageDataError(f"{path}: missing required 'loc' column")
    logger.info("Loaded %d pages from %s", len(df), path)
    return df


def _row_to_record(row: dict, row_number: int) -> PageRecord:
    values = {}
    for key in ("loc", "priority", "changefreq", "lastmod"):
        raw = row.get(key)
        if raw is None or (isinstance(raw, float) and pd.isna(raw)):
            continue
        text = str(raw).strip()
        if not text:
            continue
        if key == "priority" and text.lower() in SUPPRESS_VALUES:
            values[key] = None
            continue
        values[key] = text
    try:
        return PageRecord(**values)
    except ValidationError as exc:
        raise PageDataError(f"Invalid page row {row_number}: {exc}") from exc


def records_from_frame(df: Optional[pd.DataFrame]) -> List[PageRecord]:
    if df is None or df.empty:
        return []
    if "loc" not in df.columns:
        raise PageDataError("Page dataset is missing the 'loc' column")
    return [
        _row_to_record(row, number)
        for number, row in enumerate(df.to_dict(orient="records"), start=1)
    ]


def load_pages(path: Union[str, Path]) -> List[PageRecord]:
    return records_from_frame(read_pages_csv(path))


def add_pages(sitemap, records: Iterable[PageRecord]) -> int:
    """Feed records into an open sitemap session; returns how many were added."""
    count = 0
    for record in records:
        sitemap.add_item(record.loc, record.priority, record.changefreq, record.lastmod)
        count += 1
    logger.debug("Added %d pages to sitemap", count)
    return count
