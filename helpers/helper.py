# helpers/helper.py
"""
Date helpers shared by sitemap documents and the sitemap index.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional, Union

from dateutil import parser as dateparser
from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

from helpers.exceptions import DateParseError

DATE_FORMAT = "%Y-%m-%d"

_KEYWORD_OFFSETS = {
    "now": relativedelta(),
    "today": relativedelta(),
    "midnight": relativedelta(),
    "yesterday": relativedelta(days=-1),
    "tomorrow": relativedelta(days=+1),
}

_UNITS = {
    "sec": "seconds", "second": "seconds",
    "min": "minutes", "minute": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "fortnight": "fortnight",
    "month": "months",
    "year": "years",
}

_WEEKDAYS = {
    "monday": MO, "tuesday": TU, "wednesday": WE, "thursday": TH,
    "friday": FR, "saturday": SA, "sunday": SU,
}

_RELATIVE_RE = re.compile(
    r"^(?P<count>[+-]?\s*\d+)\s*(?P<unit>[a-z]+?)s?(?P<ago>\s+ago)?$"
)
_NEXT_LAST_RE = re.compile(r"^(?P<which>next|last)\s+(?P<what>[a-z]+)$")


def _unit_delta(unit: str, count: int) -> Optional[relativedelta]:
    name = _UNITS.get(unit)
    if name is None:
        return None
    if name == "fortnight":
        return relativedelta(weeks=2 * count)
    return relativedelta(**{name: count})


def _relative_delta(text: str) -> Optional[relativedelta]:
    """Resolve simple English relative expressions ("today", "+3 days", "2 weeks ago", "next monday")."""
    if text in _KEYWORD_OFFSETS:
        return _KEYWORD_OFFSETS[text]

    match = _RELATIVE_RE.match(text)
    if match:
        count = int(match.group("count").replace(" ", ""))
        if match.group("ago"):
            count = -count
        return _unit_delta(match.group("unit"), count)

    match = _NEXT_LAST_RE.match(text)
    if match:
        step = 1 if match.group("which") == "next" else -1
        what = match.group("what")
        if what in _WEEKDAYS:
            # strictly after/before today, never today itself
            return relativedelta(days=step, weekday=_WEEKDAYS[what](step))
        return _unit_delta(what, step)
    return None


def normalize_date(value: Union[str, int, float, date, datetime], now: Optional[datetime] = None) -> str:
    """
    Return ``value`` as a YYYY-MM-DD string.

    Digits-only strings and numbers are Unix timestamps in seconds (UTC).
    Anything else textual goes through dateutil's parser, after simple
    relative expressions such as "today" or "3 days ago" are resolved
    against ``now`` (UTC by default).

    Raises DateParseError when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return _utc(value).strftime(DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_timestamp(value)

    if not isinstance(value, str):
        raise DateParseError(value)

    text = value.strip()
    if text.isdigit():
        return _from_timestamp(int(text))

    now = now or datetime.now(timezone.utc)
    delta = _relative_delta(text.lower())
    if delta is not None:
        return (now + delta).strftime(DATE_FORMAT)

    try:
        parsed = dateparser.parse(text, default=now.replace(hour=0, minute=0, second=0, microsecond=0))
    except (ValueError, OverflowError) as exc:
        raise DateParseError(value) from exc
    return _utc(parsed).strftime(DATE_FORMAT)


def _utc(moment: datetime) -> datetime:
    # aware values are rendered in UTC, same as timestamps
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc)
    return moment


def _from_timestamp(seconds) -> str:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(DATE_FORMAT)
    except (ValueError, OverflowError, OSError) as exc:
        raise DateParseError(seconds) from exc
