"""Tests for internal cookie helper functions."""

import datetime

import pytest

from cookiestore._cookie_helpers import (
    format_cookie_date,
    is_valid_cookie_name,
    normalize_same_site,
    parse_cookie_date,
    parse_max_age,
    split_set_cookie_header,
)
from cookiestore.exceptions import CookieParseError


def _ts(*args: int) -> int:
    return int(datetime.datetime(*args, tzinfo=datetime.timezone.utc).timestamp())


def test_date_parsing() -> None:
    assert parse_cookie_date("") is None

    # 70 -> 1970
    assert parse_cookie_date("Tue, 1 Jan 70 00:00:00 GMT") == _ts(1970, 1, 1)

    # 10 -> 2010
    assert parse_cookie_date("Tue, 1 Jan 10 00:00:00 GMT") == _ts(2010, 1, 1)

    # No day of week string
    assert parse_cookie_date("1 Jan 1970 00:00:00 GMT") == _ts(1970, 1, 1)

    # No timezone string
    assert parse_cookie_date("Tue, 1 Jan 1970 00:00:00") == _ts(1970, 1, 1)

    # No year
    assert parse_cookie_date("Tue, 1 Jan 00:00:00 GMT") is None

    # No month
    assert parse_cookie_date("Tue, 1 1970 00:00:00 GMT") is None

    # No day of month
    assert parse_cookie_date("Tue, Jan 1970 00:00:00 GMT") is None

    # No time
    assert parse_cookie_date("Tue, 1 Jan 1970 GMT") is None

    # Invalid day of month
    assert parse_cookie_date("Tue, 0 Jan 1970 00:00:00 GMT") is None

    # Invalid year
    assert parse_cookie_date("Tue, 1 Jan 1500 00:00:00 GMT") is None

    # Invalid time
    assert parse_cookie_date("Tue, 1 Jan 1970 77:88:99 GMT") is None


@pytest.mark.parametrize(
    ("date_str", "expected"),
    [
        ("Wed, 21 Oct 2015 07:28:00 GMT", _ts(2015, 10, 21, 7, 28)),
        ("Wednesday, 21-Oct-15 07:28:00 GMT", _ts(2015, 10, 21, 7, 28)),
        ("Wed Oct 21 07:28:00 2015", _ts(2015, 10, 21, 7, 28)),
        ("Sat, 31 Dec 2099 23:59:59 GMT", _ts(2099, 12, 31, 23, 59, 59)),
    ],
    ids=("IMF-fixdate", "RFC 850", "asctime", "far future"),
)
def test_date_parsing_formats(date_str: str, expected: int) -> None:
    assert parse_cookie_date(date_str) == expected


@pytest.mark.parametrize(
    "date_str",
    [
        "Thu, 31 Feb 2030 00:00:00 GMT",
        "Sun, 29 Feb 2023 00:00:00 GMT",
        "Sat, 31 Apr 2021 12:00:00 GMT",
    ],
)
def test_date_parsing_impossible_day(date_str: str) -> None:
    assert parse_cookie_date(date_str) is None


def test_date_parsing_leap_day() -> None:
    assert parse_cookie_date("Thu, 29 Feb 2024 00:00:00 GMT") == _ts(2024, 2, 29)


def test_date_parsing_month_is_case_insensitive() -> None:
    assert parse_cookie_date("1 DEC 2020 10:00:00") == _ts(2020, 12, 1, 10)


@pytest.mark.parametrize(
    ("value", "expected"),
    [("3600", 3600), ("0", 0), ("-10", -10), ("007", 7)],
)
def test_parse_max_age(value: str, expected: int) -> None:
    assert parse_max_age(value) == expected


@pytest.mark.parametrize(
    "value", ["", "soon", "1_0", "+5", "5.0", "--5", "1e3", "\u0665"]
)
def test_parse_max_age_invalid(value: str) -> None:
    assert parse_max_age(value) is None


def test_format_cookie_date() -> None:
    assert format_cookie_date(_ts(2015, 10, 21, 7, 28)) == "Wed, 21 Oct 2015 07:28:00 GMT"


def test_format_then_parse_date() -> None:
    ts = _ts(2030, 6, 15, 12, 30, 45)
    assert parse_cookie_date(format_cookie_date(ts)) == ts


@pytest.mark.parametrize(
    "name", ["session", "SID", "__Host-id", "a.b_c-d", "x!#$%&'*+^`|~"]
)
def test_valid_cookie_names(name: str) -> None:
    assert is_valid_cookie_name(name)


@pytest.mark.parametrize(
    "name",
    ["", "with space", "semi;colon", "tab\tname", "a=b", "quo\"te", "new\nline", "(x)"],
)
def test_invalid_cookie_names(name: str) -> None:
    assert not is_valid_cookie_name(name)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Strict", "Strict"),
        ("strict", "Strict"),
        ("LAX", "Lax"),
        (" none ", "None"),
        ("bogus", "bogus"),
        ("", ""),
    ],
)
def test_normalize_same_site(value: str, expected: str) -> None:
    assert normalize_same_site(value) == expected


def test_split_set_cookie_header() -> None:
    name, value, attrs = split_set_cookie_header(
        "session=abc123; Path=/; HttpOnly; SameSite=Lax"
    )
    assert name == "session"
    assert value == "abc123"
    assert attrs == [("path", "/"), ("httponly", None), ("samesite", "Lax")]


def test_split_set_cookie_header_value_with_equals() -> None:
    name, value, attrs = split_set_cookie_header("token=a=b==; Secure")
    assert name == "token"
    assert value == "a=b=="
    assert attrs == [("secure", None)]


def test_split_set_cookie_header_empty_value() -> None:
    name, value, attrs = split_set_cookie_header("empty=")
    assert (name, value, attrs) == ("empty", "", [])


def test_split_set_cookie_header_skips_empty_segments() -> None:
    _, _, attrs = split_set_cookie_header("a=1;; ;Domain=Example.com;")
    assert attrs == [("domain", "Example.com")]


@pytest.mark.parametrize(
    "header", ["", "novalue", "=value", "  =value; Path=/", "; Path=/"]
)
def test_split_set_cookie_header_malformed(header: str) -> None:
    with pytest.raises(CookieParseError):
        split_set_cookie_header(header)
