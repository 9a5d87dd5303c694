import math
import time
from typing import Iterable, Iterator, List, Optional, Union

from .abc import AbstractCookieCollection
from .cookie import Cookie, make_identifier
from .cookie_collections import DEFAULT_THRESHOLD, AdaptiveCookieCollection
from .exceptions import CookieError
from .helpers import parse_request_url
from .log import client_logger
from .typedefs import CookieRecord, StrOrURL

__all__ = ("CookieJar",)


class CookieJar:
    """Implements cookie storage adhering to RFC 6265.

    The jar owns a single cookie collection, an adaptive one unless
    another is passed in. Expired cookies are swept lazily: the jar
    remembers the earliest expiration it knows about and only asks the
    collection to drop expired entries once that moment has passed.

    Session cookies (no expiration) live in memory for as long as the
    jar does; persist_session_cookies controls whether to_array()
    includes them in snapshots.
    """

    def __init__(
        self,
        collection: Optional[AbstractCookieCollection] = None,
        *,
        persist_session_cookies: bool = False,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        if collection is None:
            collection = AdaptiveCookieCollection(threshold)
        self._collection = collection
        self._persist_session_cookies = persist_session_cookies
        self._next_expiration = self._earliest_expiration()

    @classmethod
    def with_session_persistence(cls, **kwargs: object) -> "CookieJar":
        return cls(persist_session_cookies=True, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def without_session_persistence(cls, **kwargs: object) -> "CookieJar":
        return cls(persist_session_cookies=False, **kwargs)  # type: ignore[arg-type]

    @property
    def collection(self) -> AbstractCookieCollection:
        return self._collection

    @property
    def persist_session_cookies(self) -> bool:
        return self._persist_session_cookies

    def _earliest_expiration(self) -> float:
        return min(
            (
                cookie.expires_at
                for cookie in self._collection.all()
                if cookie.expires_at is not None
            ),
            default=math.inf,
        )

    def _do_expiration(self) -> int:
        if time.time() < self._next_expiration:
            return 0
        return self.remove_expired_cookies()

    def set_cookie(self, cookie: Cookie) -> None:
        """Store a cookie, replacing one with the same identifier.

        An already expired cookie is not stored, instead it deletes the
        stored cookie it would have replaced.
        """
        if cookie.is_expired():
            self._collection.remove(cookie.identifier)
            return

        self._collection.add(cookie)
        if cookie.expires_at is not None:
            self._next_expiration = min(self._next_expiration, cookie.expires_at)

    def get_cookie(
        self, name: str, domain: Optional[str] = None, path: str = "/"
    ) -> Optional[Cookie]:
        identifier = make_identifier(name, domain.lower() if domain else None, path)
        cookie = self._collection.get(identifier)
        if cookie is None or cookie.is_expired():
            return None
        return cookie

    def remove_cookie(
        self, name: str, domain: Optional[str] = None, path: str = "/"
    ) -> None:
        self._collection.remove(
            make_identifier(name, domain.lower() if domain else None, path)
        )

    def get_cookies_for_url(
        self, url: StrOrURL, is_secure: Optional[bool] = None
    ) -> List[Cookie]:
        """Return live cookies for url, most specific path first.

        is_secure defaults to whether url uses the https scheme.
        """
        self._do_expiration()
        return self._collection.find_for_url(url, is_secure)

    def get_cookie_header_for_url(
        self, url: StrOrURL, is_secure: Optional[bool] = None
    ) -> Optional[str]:
        """Build the Cookie request header value, None if nothing matches."""
        cookies = self.get_cookies_for_url(url, is_secure)
        if not cookies:
            return None
        return "; ".join(cookie.to_cookie_header() for cookie in cookies)

    def get_all_cookies(self, include_expired: bool = False) -> List[Cookie]:
        if not include_expired:
            self._do_expiration()
        return self._collection.all()

    def add_from_set_cookie_headers(
        self, headers: Union[str, Iterable[str]], url: StrOrURL
    ) -> None:
        """Store cookies from Set-Cookie header values sent for url.

        The url host is the default domain. Headers which fail to parse
        or validate are logged and skipped, the rest are still stored.
        """
        if isinstance(headers, str):
            headers = (headers,)

        target = parse_request_url(url)
        default_domain = target.host if target is not None else ""

        for header in headers:
            try:
                cookie = Cookie.from_set_cookie_header(header, default_domain)
            except CookieError as exc:
                client_logger.warning("Can not load cookie: %s", exc)
                continue
            self.set_cookie(cookie)

    def remove_expired_cookies(self) -> int:
        removed = self._collection.remove_expired()
        self._next_expiration = self._earliest_expiration()
        return removed

    def clear(self) -> None:
        self._collection.clear()
        self._next_expiration = math.inf

    def count(self, include_expired: bool = False) -> int:
        if not include_expired:
            self._do_expiration()
        return len(self._collection)

    def is_empty(self) -> bool:
        return not self.count()

    def to_array(self) -> List[CookieRecord]:
        """Snapshot every live cookie as a list of plain records."""
        self._do_expiration()
        return [
            cookie.to_record()
            for cookie in self._collection.all()
            if self._persist_session_cookies or not cookie.is_session_cookie()
        ]

    def from_array(self, records: Iterable[CookieRecord]) -> int:
        """Load cookies from records produced by to_array().

        Every record goes through regular Cookie validation, broken
        ones are logged and skipped. Returns the number of cookies
        stored.
        """
        loaded = 0
        for record in records:
            try:
                cookie = Cookie.from_record(record)
            except (CookieError, KeyError, TypeError, AttributeError) as exc:
                client_logger.warning("Can not load cookie record %r: %s", record, exc)
                continue
            self.set_cookie(cookie)
            if not cookie.is_expired():
                loaded += 1
        return loaded

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Cookie]:
        return iter(self.get_all_cookies())
