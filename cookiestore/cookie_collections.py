"""Cookie storage strategies.

LinearCookieCollection scans every cookie on lookup and suits small
populations. IndexedCookieCollection keeps a secondary domain index so
lookups only visit cookies registered for the request host and its
parent domains. AdaptiveCookieCollection switches between the two as
the population crosses a threshold.
"""

from typing import Dict, Iterator, List, Optional, Union

from .abc import AbstractCookieCollection
from .cookie import Cookie
from .helpers import RequestTarget, parse_request_url
from .log import internal_logger
from .typedefs import StrOrURL

__all__ = (
    "DEFAULT_THRESHOLD",
    "AdaptiveCookieCollection",
    "IndexedCookieCollection",
    "LinearCookieCollection",
)

DEFAULT_THRESHOLD = 50


def _sort_by_path(cookies: List[Cookie]) -> List[Cookie]:
    # RFC 6265 Section 5.4: longer paths first; sort is stable so
    # equal lengths keep the order the storage produced them in.
    cookies.sort(key=lambda cookie: len(cookie.path), reverse=True)
    return cookies


def _domain_keys(domain: Optional[str]) -> List[str]:
    """Index keys a cookie domain is registered under."""
    if not domain:
        return [""]
    if domain.startswith("."):
        return [domain]
    return [domain, "." + domain]


def _candidate_keys(host: str) -> Iterator[str]:
    """Index keys which may hold cookies for host.

    www.api.example.com gives '', 'www.api.example.com',
    '.www.api.example.com', '.api.example.com', '.example.com', '.com'.
    """
    yield ""
    yield host
    yield "." + host
    labels = host.split(".")
    for i in range(1, len(labels)):
        yield "." + ".".join(labels[i:])


class LinearCookieCollection(AbstractCookieCollection):
    """Unindexed storage, lookups scan all cookies."""

    def __init__(self) -> None:
        self._cookies: Dict[str, Cookie] = {}

    def add(self, cookie: Cookie) -> None:
        self._cookies[cookie.identifier] = cookie

    def remove(self, identifier: str) -> None:
        self._cookies.pop(identifier, None)

    def get(self, identifier: str) -> Optional[Cookie]:
        return self._cookies.get(identifier)

    def find_for_url(
        self, url: StrOrURL, is_secure: Optional[bool] = None
    ) -> List[Cookie]:
        target = parse_request_url(url)
        if target is None:
            return []
        return _sort_by_path(
            [
                cookie
                for cookie in self._cookies.values()
                if cookie.matches_target(target, is_secure)
            ]
        )

    def all(self) -> List[Cookie]:
        return list(self._cookies.values())

    def clear(self) -> None:
        self._cookies.clear()

    def remove_expired(self) -> int:
        expired = [
            identifier
            for identifier, cookie in self._cookies.items()
            if cookie.is_expired()
        ]
        for identifier in expired:
            del self._cookies[identifier]
        return len(expired)

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies.values()))


class IndexedCookieCollection(AbstractCookieCollection):
    """Storage with a secondary domain -> identifiers index.

    A cookie for ``example.com`` is registered under both
    ``example.com`` and ``.example.com`` so that subdomain lookups,
    which only probe dotted parent keys, still reach it. Cookies
    without a domain live under the empty key which every lookup
    probes. The index only narrows candidates, each one is still
    checked with Cookie.matches_target().
    """

    def __init__(self) -> None:
        self._cookies: Dict[str, Cookie] = {}
        # dict values are used as insertion ordered sets
        self._domain_index: Dict[str, Dict[str, None]] = {}

    def add(self, cookie: Cookie) -> None:
        identifier = cookie.identifier
        old = self._cookies.get(identifier)
        if old is not None:
            self._unindex(identifier, old.domain)

        self._cookies[identifier] = cookie
        for key in _domain_keys(cookie.domain):
            self._domain_index.setdefault(key, {})[identifier] = None

    def remove(self, identifier: str) -> None:
        cookie = self._cookies.pop(identifier, None)
        if cookie is not None:
            self._unindex(identifier, cookie.domain)

    def get(self, identifier: str) -> Optional[Cookie]:
        return self._cookies.get(identifier)

    def find_for_url(
        self, url: StrOrURL, is_secure: Optional[bool] = None
    ) -> List[Cookie]:
        target = parse_request_url(url)
        if target is None:
            return []
        return _sort_by_path(
            [
                cookie
                for cookie in self._candidates(target)
                if cookie.matches_target(target, is_secure)
            ]
        )

    def all(self) -> List[Cookie]:
        return list(self._cookies.values())

    def clear(self) -> None:
        self._cookies.clear()
        self._domain_index.clear()

    def remove_expired(self) -> int:
        expired = [
            identifier
            for identifier, cookie in self._cookies.items()
            if cookie.is_expired()
        ]
        for identifier in expired:
            self.remove(identifier)
        return len(expired)

    def index_stats(self) -> Dict[str, Union[int, float]]:
        """Index statistics, for debugging and monitoring."""
        total = len(self._cookies)
        domains = len(self._domain_index)
        bucket_sizes = [len(bucket) for bucket in self._domain_index.values()]
        return {
            "total_cookies": total,
            "indexed_domains": domains,
            "avg_cookies_per_domain": total / max(1, domains) if total else 0,
            "max_cookies_per_domain": max(bucket_sizes, default=0),
            "memory_overhead_ratio": domains / total if total else 0,
        }

    def _candidates(self, target: RequestTarget) -> Iterator[Cookie]:
        seen: Dict[str, None] = {}
        for key in _candidate_keys(target.host):
            bucket = self._domain_index.get(key)
            if not bucket:
                continue
            for identifier in bucket:
                if identifier not in seen:
                    seen[identifier] = None
                    yield self._cookies[identifier]

    def _unindex(self, identifier: str, domain: Optional[str]) -> None:
        for key in _domain_keys(domain):
            bucket = self._domain_index.get(key)
            if bucket is None:
                continue
            bucket.pop(identifier, None)
            if not bucket:
                del self._domain_index[key]

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies.values()))


class AdaptiveCookieCollection(AbstractCookieCollection):
    """Wraps a linear collection and upgrades it to an indexed one.

    The upgrade happens on add() once the population reaches
    threshold. remove_expired() downgrades again when fewer than half
    of threshold cookies remain, clear() always goes back to linear.
    """

    def __init__(
        self,
        threshold: int = DEFAULT_THRESHOLD,
        initial_collection: Optional[AbstractCookieCollection] = None,
    ) -> None:
        self._threshold = max(1, threshold)
        if initial_collection is None:
            initial_collection = LinearCookieCollection()
        self._collection = initial_collection
        self._upgraded = isinstance(initial_collection, IndexedCookieCollection)

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def upgraded(self) -> bool:
        return self._upgraded

    @property
    def underlying_collection(self) -> AbstractCookieCollection:
        return self._collection

    @property
    def type_name(self) -> str:
        return f"{self._collection.type_name} (adaptive)"

    def add(self, cookie: Cookie) -> None:
        self._collection.add(cookie)
        if not self._upgraded and len(self._collection) >= self._threshold:
            self._upgrade()

    def remove(self, identifier: str) -> None:
        self._collection.remove(identifier)

    def get(self, identifier: str) -> Optional[Cookie]:
        return self._collection.get(identifier)

    def find_for_url(
        self, url: StrOrURL, is_secure: Optional[bool] = None
    ) -> List[Cookie]:
        return self._collection.find_for_url(url, is_secure)

    def all(self) -> List[Cookie]:
        return self._collection.all()

    def clear(self) -> None:
        self._collection.clear()
        if self._upgraded:
            self._collection = LinearCookieCollection()
            self._upgraded = False

    def remove_expired(self) -> int:
        removed = self._collection.remove_expired()
        if self._upgraded and len(self._collection) < self._threshold * 0.5:
            self._downgrade()
        return removed

    def force_upgrade(self) -> None:
        if not self._upgraded:
            self._upgrade()

    def force_downgrade(self) -> None:
        if self._upgraded:
            self._downgrade()

    def _upgrade(self) -> None:
        self._collection = self._migrate(self._collection, IndexedCookieCollection())
        self._upgraded = True

    def _downgrade(self) -> None:
        self._collection = self._migrate(self._collection, LinearCookieCollection())
        self._upgraded = False

    @staticmethod
    def _migrate(
        source: AbstractCookieCollection, target: AbstractCookieCollection
    ) -> AbstractCookieCollection:
        for cookie in source.all():
            target.add(cookie)
        internal_logger.debug(
            "Migrated %d cookies to %s", len(target), target.type_name
        )
        return target

    def __len__(self) -> int:
        return len(self._collection)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(self._collection)
