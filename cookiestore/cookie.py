"""Cookie value object adhering to RFC 6265."""

import math
import time
from typing import Any, Optional

import attr

from ._cookie_helpers import (
    _MAX_TIME,
    SAME_SITE_VALUES,
    format_cookie_date,
    is_valid_cookie_name,
    normalize_same_site,
    parse_cookie_date,
    parse_max_age,
    split_set_cookie_header,
)
from .exceptions import CookieParseError, InvalidCookieError
from .helpers import RequestTarget, parse_request_url
from .typedefs import CookieRecord, StrOrURL

__all__ = ("Cookie", "make_identifier")


def _validate_name(
    instance: "Cookie", attribute: "attr.Attribute[str]", value: str
) -> None:
    if not is_valid_cookie_name(value):
        raise InvalidCookieError(f"Invalid cookie name: {value!r}")


def _validate_same_site(
    instance: "Cookie",
    attribute: "attr.Attribute[Optional[str]]",
    value: Optional[str],
) -> None:
    if value is not None and value not in SAME_SITE_VALUES:
        raise InvalidCookieError(f"Invalid SameSite value: {value!r}")


def _lower_domain(domain: Optional[str]) -> Optional[str]:
    if not domain:
        return None
    return str.lower(domain)


def _to_timestamp(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expires_at must be an epoch timestamp, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidCookieError(f"expires_at must be finite, got {value!r}")
    return min(int(value), _MAX_TIME)


@attr.s(frozen=True, slots=True)
class Cookie:
    """A single stored cookie.

    Instances never change; use with_value() to derive an updated one.
    A cookie without expires_at is a session cookie. A domain starting
    with a dot marks a parent-domain cookie, domains are kept lower-case.
    """

    name = attr.ib(
        type=str,
        validator=[attr.validators.instance_of(str), _validate_name],
    )
    value = attr.ib(type=str, validator=attr.validators.instance_of(str))
    expires_at = attr.ib(type=Optional[int], default=None, converter=_to_timestamp)
    domain = attr.ib(
        type=Optional[str],
        default=None,
        converter=_lower_domain,
    )
    path = attr.ib(type=str, default="/", validator=attr.validators.instance_of(str))
    secure = attr.ib(
        type=bool, default=False, validator=attr.validators.instance_of(bool)
    )
    http_only = attr.ib(
        type=bool, default=False, validator=attr.validators.instance_of(bool)
    )
    same_site = attr.ib(
        type=Optional[str],
        default=None,
        validator=[
            attr.validators.optional(attr.validators.instance_of(str)),
            _validate_same_site,
        ],
    )

    @property
    def identifier(self) -> str:
        """Uniqueness key within a jar: name|domain|path."""
        return make_identifier(self.name, self.domain, self.path)

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        if now is None:
            now = time.time()
        return now >= self.expires_at

    def is_session_cookie(self) -> bool:
        return self.expires_at is None

    def matches_domain(self, host: str) -> bool:
        """Implements suffix based domain matching.

        Both ``example.com`` and ``.example.com`` match ``example.com``
        itself and every subdomain of it.
        """
        if self.domain is None:
            return True

        host = host.lower()
        domain = self.domain
        if domain == host:
            return True

        if not domain.startswith("."):
            domain = "." + domain

        return ("." + host).endswith(domain)

    def matches_path(self, request_path: str) -> bool:
        """Implements path matching adhering to RFC 6265."""
        if not request_path:
            request_path = "/"

        cookie_path = self.path
        if request_path == cookie_path:
            return True

        if not request_path.startswith(cookie_path):
            return False

        if cookie_path.endswith("/"):
            return True

        return request_path[len(cookie_path)] == "/"

    def matches_url(self, url: StrOrURL, is_secure: Optional[bool] = None) -> bool:
        target = parse_request_url(url)
        if target is None:
            return False
        return self.matches_target(target, is_secure)

    def matches_target(
        self, target: RequestTarget, is_secure: Optional[bool] = None
    ) -> bool:
        """Match against an already parsed request URL."""
        if is_secure is None:
            is_secure = target.is_secure

        if self.secure and not is_secure:
            return False

        return self.matches_domain(target.host) and self.matches_path(target.path)

    def with_value(self, value: str) -> "Cookie":
        return attr.evolve(self, value=value)

    def to_cookie_header(self) -> str:
        return f"{self.name}={self.value}"

    def to_set_cookie_header(self) -> str:
        parts = [self.to_cookie_header()]

        if self.expires_at is not None:
            parts.append("Expires=" + format_cookie_date(self.expires_at))
            max_age = self.expires_at - int(time.time())
            if max_age > 0:
                parts.append(f"Max-Age={max_age}")

        if self.domain is not None:
            parts.append(f"Domain={self.domain}")

        if self.path != "/":
            parts.append(f"Path={self.path}")

        if self.secure:
            parts.append("Secure")

        if self.http_only:
            parts.append("HttpOnly")

        if self.same_site is not None:
            parts.append(f"SameSite={self.same_site}")

        return "; ".join(parts)

    def to_record(self) -> CookieRecord:
        return {
            "name": self.name,
            "value": self.value,
            "expires_at": self.expires_at,
            "domain": self.domain,
            "path": self.path,
            "secure": self.secure,
            "http_only": self.http_only,
            "same_site": self.same_site,
        }

    @classmethod
    def from_record(cls, record: CookieRecord) -> "Cookie":
        """Build a cookie from a snapshot record.

        Only name and value are required, the remaining keys fall back
        to their defaults. Raises KeyError, TypeError or CookieError for
        broken records.
        """
        return cls(
            record["name"],
            record["value"],
            expires_at=record.get("expires_at"),
            domain=record.get("domain"),
            path=record.get("path", "/"),
            secure=record.get("secure", False),
            http_only=record.get("http_only", False),
            same_site=record.get("same_site"),
        )

    @classmethod
    def from_set_cookie_header(cls, header: str, default_domain: str = "") -> "Cookie":
        """Parse a Set-Cookie header value.

        Max-Age wins over Expires no matter which comes first. Raises
        CookieParseError for malformed text and InvalidCookieError for
        attributes failing validation.
        """
        name, value, attrs = split_set_cookie_header(header)

        expires_at: Optional[int] = None
        max_age_expires_at: Optional[int] = None
        domain: Optional[str] = None
        path = "/"
        secure = False
        http_only = False
        same_site: Optional[str] = None

        for key, attr_value in attrs:
            if key == "expires":
                expires_at = parse_cookie_date(attr_value or "")
                if expires_at is None:
                    raise CookieParseError(
                        f"Can not parse Expires date {attr_value!r} in {header!r}"
                    )
            elif key == "max-age":
                delta_seconds = parse_max_age(attr_value or "")
                if delta_seconds is None:
                    raise CookieParseError(
                        f"Invalid Max-Age {attr_value!r} in {header!r}"
                    )
                if delta_seconds <= 0:
                    max_age_expires_at = 0
                else:
                    max_age_expires_at = min(
                        int(time.time()) + delta_seconds, _MAX_TIME
                    )
            elif key == "domain":
                domain = attr_value or None
            elif key == "path":
                if attr_value and attr_value.startswith("/"):
                    path = attr_value
                else:
                    path = "/"
            elif key == "secure":
                secure = True
            elif key == "httponly":
                http_only = True
            elif key == "samesite":
                same_site = normalize_same_site(attr_value or "")

        if max_age_expires_at is not None:
            expires_at = max_age_expires_at

        return cls(
            name,
            value,
            expires_at=expires_at,
            domain=domain or default_domain or None,
            path=path,
            secure=secure,
            http_only=http_only,
            same_site=same_site,
        )


def make_identifier(name: str, domain: Optional[str] = None, path: str = "/") -> str:
    return f"{name}|{domain or ''}|{path}"
