"""Various helper functions"""

from typing import Optional

import attr
from yarl import URL

from .typedefs import StrOrURL

__all__ = ("RequestTarget", "parse_request_url")

SECURE_SCHEMES = frozenset(("https", "wss"))


@attr.s(frozen=True, slots=True)
class RequestTarget:
    host = attr.ib(type=str)
    path = attr.ib(type=str)
    scheme = attr.ib(type=str)

    @property
    def is_secure(self) -> bool:
        return self.scheme == "https"


def parse_request_url(url: StrOrURL) -> Optional[RequestTarget]:
    """Extract what cookie matching needs from a request URL.

    Returns None for URLs which can not be parsed or carry no host.
    """
    if not isinstance(url, URL):
        try:
            url = URL(url)
        except (TypeError, ValueError):
            return None

    host = url.raw_host
    if not host:
        return None

    return RequestTarget(
        host=host.lower().rstrip("."),
        path=url.path or "/",
        scheme=url.scheme.lower(),
    )
