"""
Internal cookie handling helpers.

This module contains internal utilities for Set-Cookie tokenizing and
RFC 6265 date handling. These are not part of the public API and may
change without notice.
"""

import calendar
import datetime
import re
from email.utils import formatdate
from typing import Final, List, Optional, Tuple

from .exceptions import CookieParseError

__all__ = (
    "SAME_SITE_VALUES",
    "format_cookie_date",
    "is_valid_cookie_name",
    "normalize_same_site",
    "parse_cookie_date",
    "parse_max_age",
    "split_set_cookie_header",
)

# RFC 2616 Section 2.2 separators plus whitespace and CTLs
_COOKIE_NAME_RE: Final = re.compile(r"^[^\x00-\x20\x7f()<>@,;:\\\"/\[\]?={}]+$")

SAME_SITE_VALUES: Final[Tuple[str, ...]] = ("Strict", "Lax", "None")
_SAME_SITE_CANONICAL: Final = {v.lower(): v for v in SAME_SITE_VALUES}

_DATE_TOKENS_RE: Final = re.compile(
    r"[\x09\x20-\x2F\x3B-\x40\x5B-\x60\x7B-\x7E]*"
    r"(?P<token>[\x00-\x08\x0A-\x1F\d:a-zA-Z\x7F-\xFF]+)"
)
_DATE_HMS_TIME_RE: Final = re.compile(r"(\d{1,2}):(\d{1,2}):(\d{1,2})")
_DATE_DAY_OF_MONTH_RE: Final = re.compile(r"(\d{1,2})")
_DATE_MONTH_RE: Final = re.compile(
    "(jan)|(feb)|(mar)|(apr)|(may)|(jun)|(jul)|(aug)|(sep)|(oct)|(nov)|(dec)",
    re.I,
)
_DATE_YEAR_RE: Final = re.compile(r"(\d{2,4})")

# RFC 6265 Section 5.2.2: an optional minus followed by digits
_MAX_AGE_RE: Final = re.compile(r"-?[0-9]+")

# calendar.timegm() fails for timestamps after datetime.datetime.max
# Minus one as a loss of precision occurs when timestamp() is called.
_MAX_TIME: Final[int] = (
    int(datetime.datetime.max.replace(tzinfo=datetime.timezone.utc).timestamp()) - 1
)


def is_valid_cookie_name(name: str) -> bool:
    return bool(_COOKIE_NAME_RE.match(name))


def normalize_same_site(value: str) -> str:
    """Return the canonical spelling of a SameSite value.

    Unknown values are returned untouched so that Cookie validation
    reports them.
    """
    return _SAME_SITE_CANONICAL.get(value.strip().lower(), value)


def parse_cookie_date(date_str: str) -> Optional[int]:
    """Implements date string parsing adhering to RFC 6265."""
    if not date_str:
        return None

    found_time = False
    found_day = False
    found_month = False
    found_year = False

    hour = minute = second = 0
    day = 0
    month = 0
    year = 0

    for token_match in _DATE_TOKENS_RE.finditer(date_str):
        token = token_match.group("token")

        if not found_time:
            time_match = _DATE_HMS_TIME_RE.match(token)
            if time_match:
                found_time = True
                hour, minute, second = (int(s) for s in time_match.groups())
                continue

        if not found_day:
            day_match = _DATE_DAY_OF_MONTH_RE.match(token)
            if day_match:
                found_day = True
                day = int(day_match.group())
                continue

        if not found_month:
            month_match = _DATE_MONTH_RE.match(token)
            if month_match:
                found_month = True
                assert month_match.lastindex is not None
                month = month_match.lastindex
                continue

        if not found_year:
            year_match = _DATE_YEAR_RE.match(token)
            if year_match:
                found_year = True
                year = int(year_match.group())

    if 70 <= year <= 99:
        year += 1900
    elif 0 <= year <= 69:
        year += 2000

    if False in (found_day, found_month, found_year, found_time):
        return None

    if not 1 <= day <= 31:
        return None

    if year < 1601 or hour > 23 or minute > 59 or second > 59:
        return None

    if day > calendar.monthrange(year, month)[1]:
        return None

    return min(
        calendar.timegm((year, month, day, hour, minute, second, -1, -1, -1)),
        _MAX_TIME,
    )


def parse_max_age(value: str) -> Optional[int]:
    """Return Max-Age delta seconds, None unless value is an integer."""
    if not _MAX_AGE_RE.fullmatch(value):
        return None
    return int(value)


def format_cookie_date(timestamp: int) -> str:
    """Format an epoch timestamp as an IMF-fixdate, e.g.

    'Wed, 21 Oct 2015 07:28:00 GMT'
    """
    return formatdate(timestamp, usegmt=True)


def split_set_cookie_header(
    header: str,
) -> Tuple[str, str, List[Tuple[str, Optional[str]]]]:
    """Split a Set-Cookie header into name, value and attributes.

    Attribute names are lower-cased; flag attributes carry ``None``
    as their value. Values are kept verbatim apart from surrounding
    whitespace.
    """
    parts = [part.strip() for part in header.split(";")]
    first = parts[0]
    if not first or "=" not in first:
        raise CookieParseError(
            f"Invalid Set-Cookie header: missing name=value pair in {header!r}"
        )

    name, _, value = first.partition("=")
    name = name.strip()
    if not name:
        raise CookieParseError(f"Invalid Set-Cookie header: empty name in {header!r}")

    attrs: List[Tuple[str, Optional[str]]] = []
    for part in parts[1:]:
        if not part:
            continue
        key, sep, attr_value = part.partition("=")
        attrs.append((key.strip().lower(), attr_value.strip() if sep else None))

    return name, value.strip(), attrs
