# helpers/exceptions.py
# ---------------------------------------------------------------
# Errors raised by the sitemap writer. All are fatal to the
# current operation; nothing is retried.
# ---------------------------------------------------------------


class SitemapError(Exception):
    """Base class for every sitemap writer failure."""


class ConfigurationMismatch(SitemapError):
    """An operation was called that the session's output type does not support."""


class DateParseError(SitemapError, ValueError):
    """A lastmod value could not be turned into a calendar date."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Cannot parse date: {value!r}")


class SitemapIOError(SitemapError, OSError):
    """Opening or writing a sitemap document failed."""


class SitemapClosedError(SitemapError):
    """Items were added after the session was closed."""


class PageDataError(SitemapError, ValueError):
    """A row of the page dataset is missing or fails validation."""
