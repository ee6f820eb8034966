# helpers/sitemap_utils.py
# ---------------------------------------------------------------
# XML emitter used by the sitemap writer, plus the protocol
# constants shared by documents and the index.
# ---------------------------------------------------------------

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO
from xml.sax.saxutils import escape, quoteattr

from helpers.exceptions import ConfigurationMismatch, SitemapIOError

logger = logging.getLogger("sitemap.emitter")

SCHEMA = "http://www.sitemaps.org/schemas/sitemap/0.9"
EXT = ".xml"
SEPARATOR = "-"
INDEX_SUFFIX = "index"
ITEM_PER_SITEMAP = 50000

MIN_PRIORITY = 0.0
MEDIUM_PRIORITY = 0.5
MAX_PRIORITY = 1.0


class ChangeFreq(str, Enum):
    NEVER = "never"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ALWAYS = "always"


class OutputType(str, Enum):
    FILE = "file"
    STRING = "string"


def format_priority(value) -> str:
    """Render a priority the way it should appear in <priority>: 0.5 -> "0.5", 1.0 -> "1", 0.0 -> "0"."""
    if isinstance(value, str):
        return value.strip()
    return format(float(value), "g")


# ---------------------------------------------------------------
# Output targets
# ---------------------------------------------------------------
@dataclass(frozen=True)
class FileTarget:
    path: Path
    in_memory = False

    def open(self) -> TextIO:
        return open(self.path, "w", encoding="utf-8")

    def finish(self, stream: TextIO) -> Optional[str]:
        stream.close()
        return None

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class MemoryTarget:
    in_memory = True

    def open(self) -> TextIO:
        return io.StringIO()

    def finish(self, stream: TextIO) -> Optional[str]:
        text = stream.getvalue()
        stream.close()
        return text

    def __str__(self) -> str:
        return "<memory>"


# ---------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------
class XmlEmitter:
    """Streaming XML writer with an XMLWriter-like call surface.

    Elements are written as soon as they are started; a start tag stays
    open until the first child arrives so that attributes can still be
    added and empty elements collapse to ``<name/>``.
    """

    def __init__(self, target, indent_string: str = "  "):
        self.target = target
        self.indent_string = indent_string
        self.finished = False
        self._indent = False
        self._stream: Optional[TextIO] = None
        self._stack: List[str] = []
        self._tag_open = False
        self._text: Optional[str] = None

    def open(self) -> "XmlEmitter":
        try:
            self._stream = self.target.open()
        except OSError as exc:
            raise SitemapIOError(f"Cannot open sitemap output {self.target}: {exc}") from exc
        logger.debug("Opened emitter on %s", self.target)
        return self

    @property
    def is_open(self) -> bool:
        return self._stream is not None and not self.finished

    def _write(self, text: str) -> None:
        if self._stream is None:
            raise SitemapIOError(f"Emitter on {self.target} is not open")
        try:
            self._stream.write(text)
        except OSError as exc:
            raise SitemapIOError(f"Cannot write sitemap output {self.target}: {exc}") from exc

    @property
    def _newline(self) -> str:
        return "\n" if self._indent else ""

    def _pad(self) -> str:
        return self.indent_string * len(self._stack) if self._indent else ""

    def _close_start_tag(self) -> None:
        if self._tag_open:
            self._write(">" + self._newline)
            self._tag_open = False

    def start_document(self, version: str = "1.0", encoding: str = "UTF-8") -> None:
        self._write(f'<?xml version="{version}" encoding="{encoding}"?>\n')

    def set_indent(self, enabled: bool) -> None:
        self._indent = enabled

    def start_element(self, name: str) -> None:
        self._close_start_tag()
        self._write(f"{self._pad()}<{name}")
        self._stack.append(name)
        self._tag_open = True

    def write_attribute(self, name: str, value: str) -> None:
        if not self._tag_open:
            raise ValueError(f"Attribute {name!r} written outside of a start tag")
        self._write(f" {name}={quoteattr(str(value))}")

    def write_element(self, name: str, text) -> None:
        self._close_start_tag()
        self._write(f"{self._pad()}<{name}>{escape(str(text))}</{name}>{self._newline}")

    def end_element(self) -> None:
        name = self._stack.pop()
        if self._tag_open:
            self._write("/>" + self._newline)
            self._tag_open = False
        else:
            self._write(f"{self._pad()}</{name}>{self._newline}")

    def end_document(self) -> None:
        """Close any open elements and release the underlying stream."""
        while self._stack:
            self.end_element()
        try:
            self._stream.flush()
            self._text = self.target.finish(self._stream)
        except OSError as exc:
            self.abort()
            raise SitemapIOError(f"Cannot finalize sitemap output {self.target}: {exc}") from exc
        self.finished = True
        logger.debug("Finalized emitter on %s", self.target)

    def abort(self) -> None:
        """Release the stream without completing the document."""
        if self._stream is not None and not self.finished:
            self.finished = True
            try:
                self._stream.close()
            except OSError:
                logger.warning("Failed to close %s after an error", self.target, exc_info=True)

    def output_memory(self) -> str:
        if not self.target.in_memory:
            raise ConfigurationMismatch(f"Emitter on {self.target} has no in-memory buffer")
        if self.finished:
            return self._text or ""
        return self._stream.getvalue() if self._stream is not None else ""
