# sitemap_tool.py
# ---------------------------------------------------------------
# Multi-file sitemap writer.
#
# Items are streamed into the active <urlset> document; once the
# per-document cap is reached the document is finalized and the
# next one is opened. The index lists one <sitemap> entry per
# document that was produced.
# ---------------------------------------------------------------

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import config_paths
from helpers.exceptions import (
    ConfigurationMismatch,
    SitemapClosedError,
    SitemapError,
)
from helpers.helper import normalize_date
from helpers.pages_loader import PageRecord, add_pages, load_pages
from helpers.sitemap_utils import (
    EXT,
    INDEX_SUFFIX,
    ITEM_PER_SITEMAP,
    MEDIUM_PRIORITY,
    SCHEMA,
    SEPARATOR,
    ChangeFreq,
    FileTarget,
    MemoryTarget,
    OutputType,
    XmlEmitter,
    format_priority,
)
from logging_setup import setup_logging

logger = logging.getLogger("sitemap")


@dataclass
class SequencerState:
    item_count: int = 0          # items added over the whole session
    document_index: int = 0      # documents opened so far
    emitter: Optional[XmlEmitter] = None
    closed: bool = False


class Sitemap:
    """
    One sitemap session.

    In FILE mode every document is written under ``path`` as
    ``sitemap.xml``, ``sitemap-1.xml``, ... and the index as
    ``sitemap-index.xml``. In STRING mode nothing touches the
    filesystem and the XML text is returned to the caller.
    """

    def __init__(
        self,
        domain: str,
        output_type: Union[OutputType, str] = OutputType.FILE,
        path: Union[str, Path] = ".",
        filename: str = "sitemap",
        items_per_sitemap: int = ITEM_PER_SITEMAP,
    ):
        if items_per_sitemap < 1:
            raise ValueError(f"items_per_sitemap must be positive, got {items_per_sitemap}")
        self.domain = domain
        self.output_type = OutputType(output_type)
        self.path = Path(path)
        self.filename = filename
        self.items_per_sitemap = items_per_sitemap
        self.state = SequencerState()
        self._documents: List[str] = []

    def __enter__(self) -> "Sitemap":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.end_sitemap()
        else:
            self._abort()
        return False

    # -----------------------------------------------------------
    # Configuration
    # -----------------------------------------------------------
    def set_domain(self, domain: str) -> "Sitemap":
        self.domain = domain
        return self

    def set_path(self, path: Union[str, Path]) -> "Sitemap":
        self.path = Path(path)
        return self

    def set_filename(self, filename: str) -> "Sitemap":
        self.filename = filename
        return self

    @property
    def item_count(self) -> int:
        return self.state.item_count

    @property
    def document_count(self) -> int:
        return self.state.document_index

    def document_name(self, index: int) -> str:
        if index:
            return f"{self.filename}{SEPARATOR}{index}{EXT}"
        return f"{self.filename}{EXT}"

    @property
    def index_name(self) -> str:
        return f"{self.filename}{SEPARATOR}{INDEX_SUFFIX}{EXT}"

    def _target_for(self, name: str):
        if self.output_type is OutputType.FILE:
            return FileTarget(self.path / name)
        return MemoryTarget()

    # -----------------------------------------------------------
    # Documents
    # -----------------------------------------------------------
    def start_sitemap(self) -> None:
        """Open the next <urlset> document, finalizing the active one first."""
        self._finalize_active()
        name = self.document_name(self.state.document_index)
        try:
            emitter = XmlEmitter(self._target_for(name)).open()
        except SitemapError:
            logger.error("Cannot open sitemap document %s", name, exc_info=True)
            self.state.closed = True
            raise
        self.state.emitter = emitter
        self.state.document_index += 1
        try:
            emitter.start_document("1.0", "UTF-8")
            emitter.set_indent(True)
            emitter.start_element("urlset")
            emitter.write_attribute("xmlns", SCHEMA)
        except SitemapError:
            self._abort()
            raise
        logger.debug("Opened sitemap document #%d (%s)", self.state.document_index - 1, emitter.target)

    def _finalize_active(self) -> None:
        emitter = self.state.emitter
        if emitter is None or emitter.finished:
            return
        try:
            emitter.end_element()
            emitter.end_document()
        except SitemapError:
            self._abort()
            raise
        if emitter.target.in_memory:
            self._documents.append(emitter.output_memory())
        logger.debug("Closed sitemap document #%d", self.state.document_index - 1)

    def _abort(self) -> None:
        if self.state.emitter is not None:
            self.state.emitter.abort()
        self.state.closed = True

    def add_item(
        self,
        loc: str,
        priority: Union[float, str, None] = MEDIUM_PRIORITY,
        changefreq: Union[ChangeFreq, str, None] = None,
        lastmod=None,
    ) -> "Sitemap":
        """
        Add one <url> entry.

        :param loc: path appended to the domain; must stay under 2,048 characters.
        :param priority: 0.0 - 1.0; ``None`` leaves <priority> out.
        :param changefreq: always, hourly, daily, weekly, monthly, yearly or never.
        :param lastmod: Unix timestamp, date/datetime or an English date description.
        """
        if self.state.closed:
            raise SitemapClosedError("Sitemap session is closed; no more items can be added")

        lastmod_text = None
        if lastmod is not None and lastmod != "":
            lastmod_text = normalize_date(lastmod)
        priority_text = format_priority(priority) if priority is not None else None
        changefreq_text = _enum_value(changefreq) if changefreq else None

        if self.state.item_count % self.items_per_sitemap == 0:
            self.start_sitemap()
        self.state.item_count += 1

        emitter = self.state.emitter
        try:
            emitter.start_element("url")
            emitter.write_element("loc", f"{self.domain}{loc}")
            if priority_text is not None:
                emitter.write_element("priority", priority_text)
            if changefreq_text:
                emitter.write_element("changefreq", changefreq_text)
            if lastmod_text:
                emitter.write_element("lastmod", lastmod_text)
            emitter.end_element()
        except Exception:
            logger.error("Failed to write %s to %s", loc, emitter.target, exc_info=True)
            self._abort()
            raise
        return self

    def end_sitemap(self) -> None:
        """Finalize the active document; an empty session still gets one empty <urlset>."""
        if self.state.emitter is None:
            self.start_sitemap()
        self._finalize_active()
        self.state.closed = True

    def get_sitemap_string(self) -> str:
        """Buffered XML of the most recent document (STRING mode only)."""
        self._require_string_output()
        if self.state.emitter is None:
            return ""
        return self.state.emitter.output_memory()

    def get_sitemap_strings(self) -> List[str]:
        """Every finalized document, in order (STRING mode only)."""
        self._require_string_output()
        return list(self._documents)

    def _require_string_output(self) -> None:
        if self.output_type is not OutputType.STRING:
            raise ConfigurationMismatch(
                f"Bad output type: string output requires {OutputType.STRING.value!r}, "
                f"session uses {self.output_type.value!r}"
            )

    # -----------------------------------------------------------
    # Index
    # -----------------------------------------------------------
    def index_location(self, loc: str, index: int) -> str:
        base = loc if loc.endswith("/") else loc + "/"
        return base + self.document_name(index)

    def create_sitemap_index(self, loc: str, lastmod="Today") -> Optional[str]:
        """
        Write a <sitemapindex> listing every document of this session.

        :param loc: public base URL the documents are served from.
        :param lastmod: Unix timestamp or English date description, shared by all entries.
        :return: None in FILE mode, the index XML in STRING mode.
        """
        self.end_sitemap()
        lastmod_text = normalize_date(lastmod)

        target = self._target_for(self.index_name)
        emitter = XmlEmitter(target).open()
        try:
            emitter.start_document("1.0", "UTF-8")
            emitter.set_indent(True)
            emitter.start_element("sitemapindex")
            emitter.write_attribute("xmlns", SCHEMA)
            for index in range(self.state.document_index):
                emitter.start_element("sitemap")
                emitter.write_element("loc", self.index_location(loc, index))
                emitter.write_element("lastmod", lastmod_text)
                emitter.end_element()
            emitter.end_element()
            emitter.end_document()
        except Exception:
            emitter.abort()
            raise

        logger.info("Sitemap index written to %s with %d entries", target, self.state.document_index)
        if target.in_memory:
            return emitter.output_memory()
        return None


def _enum_value(value) -> str:
    return value.value if isinstance(value, ChangeFreq) else str(value)


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


# ---------------------------------------------------------------
# CLI
# ---------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Generate sitemap.xml files and a sitemap index")
    p.add_argument("--domain", default=config_paths.SITEMAP_DOMAIN, help="e.g. https://example.com")
    p.add_argument("--out", default=str(config_paths.OUTPUT_DIR), help="Output directory")
    p.add_argument("--filename", default=config_paths.SITEMAP_FILENAME, help="Base file name")
    p.add_argument("--per-file", type=positive_int, default=config_paths.SITEMAP_ITEMS_PER_FILE,
                   help="URLs per sitemap file (max 50000)")
    p.add_argument("--pages", default="", help="CSV with loc,priority,changefreq,lastmod columns")
    p.add_argument("--index-loc", default="", help="Public URL the sitemap files are served from")
    p.add_argument("--index-lastmod", default="Today")
    p.add_argument("--no-index", action="store_true", help="Skip the sitemap index")
    p.add_argument("--stdout", action="store_true", help="Print XML instead of writing files")
    p.add_argument("--log-level", default=config_paths.LOG_LEVEL)
    p.add_argument("paths", nargs="*", help="e.g. / /about /privacy")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_dir=config_paths.LOG_DIR)

    try:
        if args.pages:
            records = load_pages(args.pages)
        else:
            records = [PageRecord(loc=path, changefreq=ChangeFreq.WEEKLY, lastmod="today") for path in args.paths]
    except (OSError, ValueError) as e:
        logger.error("Could not load pages: %s", e)
        return 2

    output_type = OutputType.STRING if args.stdout else OutputType.FILE
    index_loc = args.index_loc or args.domain.rstrip("/") + "/"

    try:
        if output_type is OutputType.FILE:
            Path(args.out).mkdir(parents=True, exist_ok=True)
        sitemap = Sitemap(args.domain, output_type, path=args.out,
                          filename=args.filename, items_per_sitemap=args.per_file)
        with sitemap:
            add_pages(sitemap, records)
        index_xml = None
        if not args.no_index:
            index_xml = sitemap.create_sitemap_index(index_loc, args.index_lastmod)
    except (SitemapError, OSError) as e:
        logger.error("Sitemap generation failed: %s", e)
        return 1

    if output_type is OutputType.STRING:
        for document in sitemap.get_sitemap_strings():
            sys.stdout.write(document)
        if index_xml:
            sys.stdout.write(index_xml)
    else:
        logger.info("Wrote %d sitemap file(s) with %d URLs to %s",
                    sitemap.document_count, sitemap.item_count, args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
